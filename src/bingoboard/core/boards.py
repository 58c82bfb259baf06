"""Board catalog and registry.

Each printable bingo card belongs to a *board family*, a layout variant
describing where covers, rating icons, badges and text go.  The catalog in
this module is the single source of that geometry: the renderer never
computes positions from anything other than a :class:`BoardConfig`.

Board Families
--------------
- **legacy-vertical-stars**: the original cards.  Rating icons are stacked
  down the left edge of each cover and fractional ratings are dropped.
- **horizontal-stars-with-half**: the newer cards.  Rating icons sit in a row
  under the cover and a fractional rating adds a half icon.

Hard-mode badges and prompt labels are per-board flags on top of the family.

Extra Entries
-------------
Boards that declare an *extra-entries variant* switch to a taller canvas and
a different background template when more than 25 cells are submitted.  The
four extra cells (indices 25-28) are listed in a footer.  Every other board
ignores the cell count.

Usage Example
-------------
    >>> from bingoboard.core.boards import board_registry
    >>> board_registry.list_available()
    ['bingo_board', 'fullybooked24', 'fullybooked25', 'fullybooked25_short_stories']
    >>> cfg = board_registry.resolve("fullybooked25_short_stories", cell_count=29)
    >>> cfg.canvas
    Size(w=2000, h=2900)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType
from typing import Any

from .errors import UnknownBoardError
from .models import GRID_CELLS, GRID_SIZE, Point, Size

logger = logging.getLogger(__name__)

EXTRA_ENTRIES_THRESHOLD = GRID_CELLS
EXTRA_ENTRIES_HEADER = "Other short stories read:"


class BoardFamily(str, Enum):
    LEGACY_VERTICAL_STARS = "legacy-vertical-stars"
    HORIZONTAL_STARS_HALF = "horizontal-stars-with-half"


class StarLayout(str, Enum):
    STACKED = "stacked"
    ROW = "row"


# ---------------------------------------------------------------------------
# Geometry records.
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GridGeometry:
    """Cover placement for the 5x5 grid.

    Attributes:
        origin: Top-left corner of the cover in cell 0.
        stride: Column (x) and row (y) pitch between covers.
        cover_size: Size every cover is scaled to.
    """

    origin: Point
    stride: Point
    cover_size: Size

    def cell_origin(self, index: int) -> Point:
        row, col = divmod(index, GRID_SIZE)
        return Point(self.origin.x + col * self.stride.x, self.origin.y + row * self.stride.y)

    def cell_center_x(self, index: int) -> float:
        return self.cell_origin(index).x + self.cover_size.w / 2


@dataclass(frozen=True)
class StarGeometry:
    offset: Point
    pitch: Point
    icon_size: Size
    layout: StarLayout
    fractional: bool
    icon: str = "star"

    def __post_init__(self) -> None:
        # Stacked icons advance along y only, a row along x only.
        if self.layout is StarLayout.STACKED:
            moving, fixed = self.pitch.y, self.pitch.x
        else:
            moving, fixed = self.pitch.x, self.pitch.y
        if moving == 0 or fixed != 0:
            raise ValueError(f"Star pitch {self.pitch} does not match {self.layout.value} layout")


@dataclass(frozen=True)
class BadgeGeometry:
    offset: Point
    size: Size
    icon: str = "hard_mode"


@dataclass(frozen=True)
class TitleGeometry:
    """Cell title placement below the cover.

    Row 1 sits a few pixels higher than the others; the printed templates
    were tuned by hand and the second row's frame is shallower.
    """

    offset_y: float
    row1_offset_y: float
    line_height: float
    max_width: float
    font_size: int

    def offset_for_row(self, row: int) -> float:
        return self.row1_offset_y if row == 1 else self.offset_y


@dataclass(frozen=True)
class LabelGeometry:
    offset_y: float
    line_height: float
    max_width: float
    font_size: int


@dataclass(frozen=True)
class FooterGeometry:
    """Layout of the extra-entries footer (cells 25-28)."""

    header_position: Point
    header_font_size: int
    row_y: float
    origin_x: float
    slot_pitch: float
    line_height: float
    max_width: float
    font_size: int
    header_text: str = EXTRA_ENTRIES_HEADER

    def slot_x(self, slot: int) -> float:
        return self.origin_x + slot * self.slot_pitch


@dataclass(frozen=True)
class BoardFeatures:
    show_stars: bool = False
    show_hard_mode: bool = False
    show_cell_title: bool = False
    show_prompt_label: bool = False
    extra_entries: bool = False


@dataclass(frozen=True)
class BoardConfig:
    """Concrete, resolved layout for one render."""

    board_id: str
    family: BoardFamily
    template: str
    canvas: Size
    grid: GridGeometry
    features: BoardFeatures
    stars: StarGeometry | None = None
    badge: BadgeGeometry | None = None
    title: TitleGeometry | None = None
    label: LabelGeometry | None = None
    footer: FooterGeometry | None = None
    prompt_labels: tuple[str, ...] = ()

    def default_label(self, index: int) -> str:
        if 0 <= index < len(self.prompt_labels):
            return self.prompt_labels[index]
        return ""


@dataclass(frozen=True)
class ExtraEntriesVariant:
    """Alternate template and canvas used when more than 25 cells are submitted."""

    template: str
    canvas: Size
    footer: FooterGeometry


@dataclass(frozen=True)
class BoardDefinition:
    """Catalog entry: the base config plus an optional extra-entries variant."""

    base: BoardConfig
    extra: ExtraEntriesVariant | None = None

    @property
    def board_id(self) -> str:
        return self.base.board_id

    def resolve(self, cell_count: int) -> BoardConfig:
        if self.extra is None or cell_count <= EXTRA_ENTRIES_THRESHOLD:
            return self.base
        return replace(
            self.base,
            template=self.extra.template,
            canvas=self.extra.canvas,
            footer=self.extra.footer,
            features=replace(self.base.features, extra_entries=True),
        )


# ---------------------------------------------------------------------------
# Registry.
# ---------------------------------------------------------------------------


class BoardConfigRegistry:
    """Read-only catalog of board definitions.

    The registry is filled once from an iterable of definitions and cannot be
    modified afterwards, so it is safe to share between concurrent renders
    without locking.
    """

    def __init__(self, definitions: Iterable[BoardDefinition]) -> None:
        boards: dict[str, BoardDefinition] = {}
        for definition in definitions:
            if definition.board_id in boards:
                raise ValueError(f"Duplicate board id in catalog: {definition.board_id}")
            boards[definition.board_id] = definition
        self._boards = MappingProxyType(boards)
        logger.debug(f"Board registry initialised with {len(boards)} boards")

    def __contains__(self, board_id: object) -> bool:
        return board_id in self._boards

    def resolve(self, board_id: str, cell_count: int = GRID_CELLS) -> BoardConfig:
        """Resolve a board id and cell count to a concrete layout.

        Args:
            board_id: Identifier from the catalog.
            cell_count: Number of cells submitted.  Only boards with an
                extra-entries variant look at it (threshold: more than 25).

        Returns:
            The resolved :class:`BoardConfig`.

        Raises:
            UnknownBoardError: If ``board_id`` is not in the catalog.
        """
        definition = self._boards.get(board_id)
        if definition is None:
            available = ", ".join(self.list_available())
            raise UnknownBoardError(
                f"Unknown board '{board_id}'. Available boards: {available}",
                board_id=board_id,
            )
        return definition.resolve(cell_count)

    def list_available(self) -> list[str]:
        return list(self._boards.keys())

    def get_board_info(self, board_id: str) -> dict[str, Any] | None:
        """Return catalog metadata for a board, or ``None`` if it is unknown."""
        definition = self._boards.get(board_id)
        if definition is None:
            return None

        base = definition.base
        info: dict[str, Any] = {
            "id": base.board_id,
            "family": base.family.value,
            "canvas": {"width": base.canvas.w, "height": base.canvas.h},
            "features": {
                "stars": base.features.show_stars,
                "half_stars": bool(base.stars and base.stars.fractional),
                "hard_mode": base.features.show_hard_mode,
                "cell_title": base.features.show_cell_title,
                "prompt_label": base.features.show_prompt_label,
                "extra_entries": definition.extra is not None,
            },
            "prompt_labels": list(base.prompt_labels),
        }
        if definition.extra is not None:
            info["extra_canvas"] = {
                "width": definition.extra.canvas.w,
                "height": definition.extra.canvas.h,
            }
        return info


# ---------------------------------------------------------------------------
# Catalog.
# ---------------------------------------------------------------------------

DEFAULT_PROMPT_LABELS: tuple[str, ...] = (
    "Title with a number",
    "Debut novel",
    "Set in a place you've never been",
    "Published this year",
    "Book club pick",
    "Author from another country",
    "Translated from another language",
    "Over 500 pages",
    "Under 200 pages",
    "Recommended by a friend",
    "Part of a series",
    "Found in a used bookstore",
    "Free square: any book",
    "Non-fiction",
    "Cover with an animal",
    "Published before 1950",
    "Read in one sitting",
    "Retelling of a classic",
    "Award winner",
    "Genre you rarely read",
    "Graphic novel or manga",
    "Book with a map",
    "Title is a question",
    "Audiobook",
    "Reread a favourite",
)

_LEGACY_GRID_ORIGIN = Point(130, 332)
_LEGACY_COVER = Size(254, 316)

_LEGACY_STARS = StarGeometry(
    offset=Point(-50, 10),
    pitch=Point(0, 60.5),
    icon_size=Size(42, 44),
    layout=StarLayout.STACKED,
    fractional=False,
)

_FB25_GRID = GridGeometry(origin=Point(150, 400), stride=Point(370, 440), cover_size=Size(230, 300))

_FB25_STARS = StarGeometry(
    offset=Point(3, 308),
    pitch=Point(46, 0),
    icon_size=Size(40, 40),
    layout=StarLayout.ROW,
    fractional=True,
)

_FB25_BADGE = BadgeGeometry(offset=Point(178, -22), size=Size(72, 72))

_FB25_TITLE = TitleGeometry(
    offset_y=352,
    row1_offset_y=348,
    line_height=24,
    max_width=320,
    font_size=22,
)

_FB25_LABEL = LabelGeometry(offset_y=-62, line_height=22, max_width=340, font_size=20)

_FB25_FEATURES = BoardFeatures(
    show_stars=True,
    show_hard_mode=True,
    show_cell_title=True,
    show_prompt_label=True,
)

_SHORT_STORIES_FOOTER = FooterGeometry(
    header_position=Point(1000, 2640),
    header_font_size=30,
    row_y=2700,
    origin_x=275,
    slot_pitch=480,
    line_height=28,
    max_width=440,
    font_size=24,
)


def _fullybooked25(board_id: str) -> BoardConfig:
    return BoardConfig(
        board_id=board_id,
        family=BoardFamily.HORIZONTAL_STARS_HALF,
        template=board_id,
        canvas=Size(2000, 2600),
        grid=_FB25_GRID,
        features=_FB25_FEATURES,
        stars=_FB25_STARS,
        badge=_FB25_BADGE,
        title=_FB25_TITLE,
        label=_FB25_LABEL,
        prompt_labels=DEFAULT_PROMPT_LABELS,
    )


BOARD_CATALOG: tuple[BoardDefinition, ...] = (
    BoardDefinition(
        base=BoardConfig(
            board_id="bingo_board",
            family=BoardFamily.LEGACY_VERTICAL_STARS,
            template="bingo_board",
            canvas=Size(2000, 2300),
            grid=GridGeometry(
                origin=_LEGACY_GRID_ORIGIN, stride=Point(370, 373), cover_size=_LEGACY_COVER
            ),
            features=BoardFeatures(),
        )
    ),
    BoardDefinition(
        base=BoardConfig(
            board_id="fullybooked24",
            family=BoardFamily.LEGACY_VERTICAL_STARS,
            template="fullybooked24",
            canvas=Size(2000, 2300),
            grid=GridGeometry(
                origin=_LEGACY_GRID_ORIGIN, stride=Point(370, 400), cover_size=_LEGACY_COVER
            ),
            features=BoardFeatures(show_stars=True),
            stars=_LEGACY_STARS,
        )
    ),
    BoardDefinition(base=_fullybooked25("fullybooked25")),
    BoardDefinition(
        base=_fullybooked25("fullybooked25_short_stories"),
        extra=ExtraEntriesVariant(
            template="fullybooked25_short_stories_extra",
            canvas=Size(2000, 2900),
            footer=_SHORT_STORIES_FOOTER,
        ),
    ),
)

# Global board registry instance, read-only after import.
board_registry = BoardConfigRegistry(BOARD_CATALOG)
