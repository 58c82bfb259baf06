"""Core board composition engine.

This package turns a board id and a list of prompt cells into a PNG:

- **config.py**: environment-based settings (``BINGOBOARD_`` prefix)
- **boards.py**: board families, geometry records and the read-only
  ``board_registry`` catalog
- **renderer.py**: ``BoardRenderer``, the sequential render pipeline
- **surface.py**: ``RenderContext``, the per-render canvas with its current
  font and alignment
- **text_layout.py**: greedy word wrap
- **overlays.py**: rating stars and the hard-mode badge
- **covers.py**: cover download and PNG normalization
- **assets.py**: memoized template, icon and font loading
- **response_cache.py**: TTL/size bounded cache for lookup responses
- **errors.py**: the exception hierarchy

Usage Example
-------------
    from bingoboard.core import BoardRenderer, AssetCache, CoverPipeline, PromptCell

    renderer = BoardRenderer(AssetCache("assets"), CoverPipeline())
    png = await renderer.render_board("fullybooked24", [PromptCell(index=0)])
"""

from bingoboard.core.assets import AssetCache
from bingoboard.core.boards import BoardConfig, BoardConfigRegistry, BoardFamily, board_registry
from bingoboard.core.config import BingoBoardConfig, config
from bingoboard.core.covers import CoverPipeline
from bingoboard.core.models import PromptCell
from bingoboard.core.renderer import BoardRenderer
from bingoboard.core.response_cache import ResponseCache

__all__ = [
    "AssetCache",
    "BingoBoardConfig",
    "BoardConfig",
    "BoardConfigRegistry",
    "BoardFamily",
    "BoardRenderer",
    "CoverPipeline",
    "PromptCell",
    "ResponseCache",
    "board_registry",
    "config",
]
