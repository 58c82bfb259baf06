"""Board composition.

:class:`BoardRenderer` turns a resolved :class:`~bingoboard.core.boards.BoardConfig`
and a list of prompt cells into an encoded PNG.

Render Order
------------
A render is one sequential pipeline over a single canvas:

1. Allocate the canvas and set centered alignment.
2. Draw the background template.  Failure aborts the render.
3. Walk the 25 grid cells in row-major order.  For each cell:

   a. filled: fetch, normalize and draw the cover (failure aborts);
   b. rating icons, if the board shows stars;
   c. hard-mode badge, if the board supports it and the cell asks for it;
   d. the cell title (text before the first ``(``), if the board shows it;
   e. the prompt label, filled or not, if the board shows labels.

4. With extra entries enabled, draw the footer header and one line per
   filled cell among indices 25-28.
5. Encode the canvas.

Covers are awaited one at a time.  The canvas and its current font are
mutable state, so cell ``n + 1`` is never started before cell ``n`` is done.
Nothing is returned if any step fails: the caller gets exactly one
:class:`~bingoboard.core.errors.RenderError` instead.

Usage Example
-------------
    from bingoboard.core.assets import AssetCache
    from bingoboard.core.covers import CoverPipeline
    from bingoboard.core.renderer import BoardRenderer

    renderer = BoardRenderer(AssetCache("assets"), CoverPipeline())
    png = await renderer.render_board("fullybooked25", cells)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence

from .assets import AssetCache
from .boards import BoardConfig, BoardConfigRegistry, board_registry
from .covers import CoverPipeline
from .errors import AssetLoadError, BingoBoardError, TemplateLoadError
from .models import GRID_CELLS, GRID_SIZE, MAX_CELLS, Point, PromptCell, Size, cell_at
from .overlays import draw_badge, draw_rating
from .surface import RenderContext
from .text_layout import wrap_draw

logger = logging.getLogger(__name__)

ContextFactory = Callable[..., RenderContext]


class BoardRenderer:
    """Renders bingo boards.

    One renderer can serve many concurrent renders: each render builds its
    own :class:`RenderContext`, and the only shared state is the read-only
    asset cache.

    Args:
        assets: Asset cache for templates, icons and fonts.
        covers: Cover pipeline used for filled cells.
        text_color: Fill color for all board text.
        context_factory: Builds the render context for a canvas size.
    """

    def __init__(
        self,
        assets: AssetCache,
        covers: CoverPipeline,
        *,
        text_color: str = "#000000",
        context_factory: ContextFactory = RenderContext,
    ) -> None:
        self.assets = assets
        self.covers = covers
        self.text_color = text_color
        self._context_factory = context_factory

    async def render_board(
        self,
        board_id: str,
        cells: Sequence[PromptCell],
        registry: BoardConfigRegistry = board_registry,
    ) -> bytes:
        """Resolve ``board_id`` for ``len(cells)`` cells and render it.

        Raises:
            ValueError: If more than 29 cells are supplied.
            UnknownBoardError: If the board id is not in the catalog.
            RenderError: If the render fails.
        """
        if len(cells) > MAX_CELLS:
            raise ValueError(f"A board holds at most {MAX_CELLS} cells, got {len(cells)}")
        config = registry.resolve(board_id, len(cells))
        return await self.render(config, cells)

    async def render(self, config: BoardConfig, cells: Sequence[PromptCell]) -> bytes:
        """Render ``cells`` onto the board described by ``config``.

        Returns:
            PNG-encoded board image.
        """
        start = time.perf_counter()
        logger.info(
            f"Rendering board '{config.board_id}' "
            f"({config.canvas.w}x{config.canvas.h}, {len(cells)} cells)"
        )

        ctx = self._context_factory(config.canvas, text_color=self.text_color)
        ctx.set_alignment("center")

        try:
            self._draw_background(ctx, config)
            for idx in range(GRID_CELLS):
                await self._draw_cell(ctx, config, cell_at(cells, idx), idx)
            if config.features.extra_entries and config.footer is not None:
                self._draw_footer(ctx, config, cells)
        except BingoBoardError as exc:
            raise exc.attach(board_id=config.board_id)

        data = ctx.encode()
        elapsed = time.perf_counter() - start
        logger.info(f"Rendered board '{config.board_id}' in {elapsed:.2f}s ({len(data)} bytes)")
        return data

    # ------------------------------------------------------------------
    # Layers.
    # ------------------------------------------------------------------

    def _draw_background(self, ctx: RenderContext, config: BoardConfig) -> None:
        try:
            background = self.assets.load(config.template)
        except AssetLoadError as exc:
            raise TemplateLoadError(
                f"Background template '{config.template}' could not be loaded",
                name=config.template,
                board_id=config.board_id,
            ) from exc
        ctx.draw_image(background, 0, 0)

    async def _draw_cell(
        self, ctx: RenderContext, config: BoardConfig, cell: PromptCell, idx: int
    ) -> None:
        row = idx // GRID_SIZE
        origin = config.grid.cell_origin(idx)
        features = config.features

        if cell.is_filled:
            logger.debug(f"Cell {idx}: drawing cover {cell.cover_image_link}")
            try:
                cover = await self.covers.fetch_and_normalize(cell.cover_image_link)
            except BingoBoardError as exc:
                raise exc.attach(board_id=config.board_id, cell_index=idx)
            size: Size = config.grid.cover_size
            ctx.draw_image(cover, origin.x, origin.y, size.w, size.h)

            if features.show_stars and config.stars is not None:
                icon = self._icon(config.stars.icon, idx)
                draw_rating(
                    ctx, icon, origin + config.stars.offset, config.stars, cell.clamped_rating
                )

            if features.show_hard_mode and cell.hard_mode and config.badge is not None:
                icon = self._icon(config.badge.icon, idx)
                draw_badge(ctx, icon, origin + config.badge.offset, config.badge)

            if features.show_cell_title and config.title is not None:
                title = cell.short_title
                if title:
                    geometry = config.title
                    ctx.set_font(self._font(geometry.font_size, idx))
                    wrap_draw(
                        ctx,
                        title,
                        config.grid.cell_center_x(idx),
                        origin.y + geometry.offset_for_row(row),
                        geometry.line_height,
                        geometry.max_width,
                    )

        if features.show_prompt_label and config.label is not None:
            label = cell.prompt_text or config.default_label(idx)
            if label:
                geometry = config.label
                ctx.set_font(self._font(geometry.font_size, idx))
                wrap_draw(
                    ctx,
                    label,
                    config.grid.cell_center_x(idx),
                    origin.y + geometry.offset_y,
                    geometry.line_height,
                    geometry.max_width,
                )

    def _draw_footer(
        self, ctx: RenderContext, config: BoardConfig, cells: Sequence[PromptCell]
    ) -> None:
        footer = config.footer
        header: Point = footer.header_position

        ctx.set_font(self._font(footer.header_font_size))
        ctx.fill_text(footer.header_text, header.x, header.y)

        ctx.set_font(self._font(footer.font_size))
        for slot, idx in enumerate(range(GRID_CELLS, MAX_CELLS)):
            cell = cell_at(cells, idx)
            if not cell.is_filled:
                continue
            entry = f"{cell.short_title} by {cell.author}"
            wrap_draw(
                ctx,
                entry,
                footer.slot_x(slot),
                footer.row_y,
                footer.line_height,
                footer.max_width,
            )

    def _font(self, size: int, idx: int | None = None):
        try:
            return self.assets.font(size)
        except AssetLoadError as exc:
            raise exc.attach(cell_index=idx)

    def _icon(self, name: str, idx: int):
        try:
            return self.assets.load(name)
        except AssetLoadError as exc:
            raise exc.attach(cell_index=idx)
