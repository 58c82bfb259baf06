"""Value types shared by the board renderer."""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

GRID_SIZE = 5
GRID_CELLS = GRID_SIZE * GRID_SIZE
EXTRA_CELLS = 4
MAX_CELLS = GRID_CELLS + EXTRA_CELLS

MAX_RATING = 5.0


@dataclass(frozen=True)
class Point:
    """A canvas position (or offset) in pixels.  Fractional values are allowed."""

    x: float
    y: float

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def scaled(self, factor: float) -> Point:
        return Point(self.x * factor, self.y * factor)


@dataclass(frozen=True)
class Size:
    """A width/height pair in pixels."""

    w: int
    h: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.w, self.h)


@dataclass
class PromptCell:
    """One grid slot's submission data.

    A cell that is not filled contributes no cover, rating or badge.  Its
    prompt label (if the board shows labels) is still drawn, because the
    label describes the square, not the submission.
    """

    index: int
    is_filled: bool = False
    title: str = ""
    author: str = ""
    cover_image_link: str = ""
    star_rating: float = 0.0
    hard_mode: bool = False
    prompt_text: str | None = None

    @property
    def short_title(self) -> str:
        """Title up to its first ``(``, trimmed.

        Series and edition notes are conventionally parenthesised
        (``"The Hobbit (Illustrated)"``) and would crowd the cell.
        """
        return (self.title or "").split("(", 1)[0].strip()

    @property
    def clamped_rating(self) -> float:
        return clamp_rating(self.star_rating)


def clamp_rating(rating: float | None) -> float:
    """Clamp a rating into ``0..MAX_RATING``; ``None`` counts as 0."""
    return min(max(rating or 0.0, 0.0), MAX_RATING)


def cell_at(cells, index: int) -> PromptCell:
    """Return ``cells[index]``, or an unfilled placeholder past the end of the list."""
    if index < len(cells) and cells[index] is not None:
        return cells[index]
    return PromptCell(index=index)
