"""bingoboard: FastAPI Application.

This module is the single entry point for the web application.  It defines
the FastAPI ``app`` instance, the REST routes, and the ``main()`` CLI
function that launches the uvicorn server.

Architecture
------------
- **Board rendering** is performed by a single
  :class:`~bingoboard.core.renderer.BoardRenderer` created at startup.  Each
  request renders on its own canvas; the renderer only shares its asset
  cache between requests.
- **Book search** goes through
  :func:`~bingoboard.api.book_search.search_books`, backed by one
  :class:`~bingoboard.core.response_cache.ResponseCache` per process.
- **Errors** raised by the core are mapped to HTTP status codes here and
  logged with the board id and failing cell index.

Endpoints
---------
========  ================================  ==============================
Method    Path                              Purpose
========  ================================  ==============================
GET       ``/api/boards``                   Board catalog
POST      ``/api/boards/{board_id}/render`` Render a board to PNG
GET       ``/api/books``                    Google Books search
========  ================================  ==============================

Usage
-----
CLI (installed entry point)::

    bingoboard

Direct invocation::

    python -m bingoboard.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Body, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from bingoboard import __version__
from bingoboard.api.book_search import search_books
from bingoboard.api.models import BookResult, PromptCellPayload
from bingoboard.core.assets import AssetCache
from bingoboard.core.boards import board_registry
from bingoboard.core.config import config
from bingoboard.core.covers import CoverPipeline
from bingoboard.core.errors import (
    AssetLoadError,
    BingoBoardError,
    CoverDecodeError,
    CoverFetchError,
    LookupFetchError,
    UnknownBoardError,
)
from bingoboard.core.models import MAX_CELLS
from bingoboard.core.renderer import BoardRenderer
from bingoboard.core.response_cache import ResponseCache

logger = logging.getLogger(__name__)

# Status code for each error type, most specific first.
_ERROR_STATUS: tuple[tuple[type[BingoBoardError], int], ...] = (
    (UnknownBoardError, 404),
    (CoverFetchError, 502),
    (CoverDecodeError, 422),
    (AssetLoadError, 500),
    (LookupFetchError, 502),
)


def _status_for(exc: BingoBoardError) -> int:
    for error_type, status in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status
    return 500


def build_renderer() -> BoardRenderer:
    """Create the process-wide renderer from the global configuration."""
    return BoardRenderer(
        AssetCache(config.assets_dir, config.font_path),
        CoverPipeline(timeout=config.cover_fetch_timeout),
        text_color=config.text_color,
    )


# ---------------------------------------------------------------------------
# Application lifecycle.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the renderer and lookup cache on startup, release them on shutdown.

    Assets are not loaded here; the asset cache fills on first use.
    """
    app.state.renderer = build_renderer()
    app.state.response_cache = ResponseCache(
        max_entries=config.cache_max_entries,
        default_ttl=config.cache_ttl_seconds,
    )
    logger.info(f"Renderer initialised (assets: {config.assets_dir})")

    yield

    app.state.renderer.assets.clear()
    app.state.response_cache.clear()
    logger.info("Renderer caches cleared on shutdown.")


app = FastAPI(
    title="bingoboard",
    description="Renders personalised reading-bingo boards.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/api/boards")
async def list_boards() -> dict:
    """Return the board catalog: geometry summary, features and default labels."""
    return {
        "version": __version__,
        "boards": [board_registry.get_board_info(b) for b in board_registry.list_available()],
    }


@app.post("/api/boards/{board_id}/render")
async def render_board(
    board_id: str,
    request: Request,
    cells: list[PromptCellPayload] = Body(...),
) -> Response:
    """Render the submitted cells onto ``board_id`` and return the PNG.

    The body is a JSON array of up to 29 cells in grid order.  Cells 25-28
    are only drawn on boards with an extra-entries footer.

    Raises:
        HTTPException: 400 for too many cells, 404 for an unknown board,
            502/422 for cover download/decode failures, 500 for missing
            board assets.
    """
    if len(cells) > MAX_CELLS:
        raise HTTPException(
            status_code=400,
            detail=f"A board holds at most {MAX_CELLS} cells, got {len(cells)}",
        )

    renderer: BoardRenderer = request.app.state.renderer
    prompt_cells = [payload.to_cell(index) for index, payload in enumerate(cells)]

    try:
        png = await renderer.render_board(board_id, prompt_cells)
    except BingoBoardError as exc:
        status = _status_for(exc)
        logger.error(f"Render failed: {exc}", extra=exc.context())
        raise HTTPException(status_code=status, detail=str(exc)) from exc

    return Response(content=png, media_type="image/png")


@app.get("/api/books", response_model=list[BookResult])
async def books(request: Request, search_q: str = Query(default="")) -> list[BookResult]:
    """Search Google Books and return prompt-cell-shaped results."""
    try:
        return await search_books(
            search_q,
            request.app.state.response_cache,
            api_key=config.google_books_api_key,
            max_results=config.books_max_results,
        )
    except LookupFetchError as exc:
        logger.error(f"Book search failed for '{search_q}': {exc}")
        raise HTTPException(status_code=_status_for(exc), detail=str(exc)) from exc


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Configure logging and launch the uvicorn ASGI server.

    Host, port and log level come from :data:`~bingoboard.core.config.config`
    (``BINGOBOARD_SERVER_HOST``, ``BINGOBOARD_SERVER_PORT``,
    ``BINGOBOARD_LOG_LEVEL``).

    This function is registered as the ``bingoboard`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "bingoboard.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
