"""Pydantic request and response models for the bingoboard API.

The board client posts cells with the camelCase field names it has always
used (``isFilled``, ``imgLink``, ``starRating`` ...).  The models accept
those names as aliases as well as the snake_case field names.

Models
------
PromptCellPayload
    One cell in the body of ``POST /api/boards/{board_id}/render``.
BookResult
    One volume returned by ``GET /api/books``.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from bingoboard.core.models import MAX_RATING, PromptCell


class PromptCellPayload(BaseModel):
    """A single cell submitted for rendering.

    Attributes:
        is_filled: Whether the square has a submission.
        title: Book (or game, film ...) title.
        author: Author or creator.
        cover_image_link: Absolute URL of the cover image.
        star_rating: Rating between 0 and 5; halves are drawn on boards that
            support them.
        hard_mode: Whether the hard-mode badge applies.
        prompt_text: Label override for the square.
    """

    model_config = ConfigDict(populate_by_name=True)

    is_filled: bool = Field(default=False, alias="isFilled")
    title: str = Field(default="")
    author: str = Field(default="")
    cover_image_link: str = Field(
        default="",
        validation_alias=AliasChoices("cover_image_link", "coverImageLink", "imgLink"),
    )
    star_rating: float = Field(default=0.0, ge=0.0, le=MAX_RATING, alias="starRating")
    hard_mode: bool = Field(default=False, alias="hardMode")
    prompt_text: str | None = Field(default=None, alias="promptText")

    def to_cell(self, index: int) -> PromptCell:
        return PromptCell(
            index=index,
            is_filled=self.is_filled,
            title=self.title,
            author=self.author,
            cover_image_link=self.cover_image_link,
            star_rating=self.star_rating,
            hard_mode=self.hard_mode,
            prompt_text=self.prompt_text,
        )


class BookResult(BaseModel):
    """Prompt-cell-shaped record produced by a catalog lookup."""

    title: str
    author: str = ""
    cover_image_link: str = ""
    edition_id: str | None = None
