"""bingoboard - Personalised reading-bingo board renderer."""

__version__ = "0.3.0"

from bingoboard.core.boards import BoardConfig, BoardConfigRegistry, board_registry
from bingoboard.core.config import BingoBoardConfig, config
from bingoboard.core.models import PromptCell
from bingoboard.core.renderer import BoardRenderer

__all__ = [
    "BingoBoardConfig",
    "BoardConfig",
    "BoardConfigRegistry",
    "BoardRenderer",
    "PromptCell",
    "board_registry",
    "config",
]
