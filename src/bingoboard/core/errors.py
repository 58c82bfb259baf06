"""Exception hierarchy for board rendering.

Every failure that can escape the composition core is one of the types
defined here.  Each carries enough context (board id, failing cell index) for
the HTTP layer to log it and map it to a status code.

Hierarchy
---------
::

    BingoBoardError
    ├── ConfigError
    │   └── UnknownBoardError
    ├── RenderError
    │   ├── AssetLoadError
    │   │   └── TemplateLoadError
    │   └── CoverError
    │       ├── CoverFetchError
    │       └── CoverDecodeError
    └── LookupFetchError

All ``RenderError`` subclasses are fatal: a render that raises one produces
no output buffer at all.
"""

from __future__ import annotations


class BingoBoardError(Exception):
    """Base class for all bingoboard errors.

    Attributes:
        board_id: Board identifier the failure relates to, if known.
        cell_index: Grid index of the failing cell, if the failure is
            cell-specific.
    """

    def __init__(
        self,
        message: str,
        *,
        board_id: str | None = None,
        cell_index: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.board_id = board_id
        self.cell_index = cell_index

    def attach(self, *, board_id: str | None = None, cell_index: int | None = None):
        """Fill in render context that was not known where the error was raised.

        Returns:
            The same exception instance, so callers can ``raise exc.attach(...)``.
        """
        if board_id is not None and self.board_id is None:
            self.board_id = board_id
        if cell_index is not None and self.cell_index is None:
            self.cell_index = cell_index
        return self

    def context(self) -> dict:
        """Return the error context as a dictionary suitable for log records."""
        return {
            "error": type(self).__name__,
            "board_id": self.board_id,
            "cell_index": self.cell_index,
        }

    def __str__(self) -> str:
        parts = [self.message]
        if self.board_id is not None:
            parts.append(f"board={self.board_id}")
        if self.cell_index is not None:
            parts.append(f"cell={self.cell_index}")
        return " ".join(parts)


class ConfigError(BingoBoardError):
    """Raised when a board configuration cannot be resolved."""


class UnknownBoardError(ConfigError):
    """Raised when a board id is not in the catalog."""


class RenderError(BingoBoardError):
    """Base class for fatal render failures."""


class AssetLoadError(RenderError):
    """Raised when a background or icon asset is missing or corrupt.

    Attributes:
        name: Asset name that failed to load.
    """

    def __init__(self, message: str, *, name: str | None = None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.name = name


class TemplateLoadError(AssetLoadError):
    """Raised when the board's background template cannot be loaded."""


class CoverError(RenderError):
    """Base class for cover pipeline failures.

    Attributes:
        url: Cover URL that failed.
    """

    def __init__(self, message: str, *, url: str | None = None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.url = url


class CoverFetchError(CoverError):
    """Raised when a cover cannot be retrieved (network error or HTTP status)."""


class CoverDecodeError(CoverError):
    """Raised when fetched cover bytes are not a decodable image."""


class LookupFetchError(BingoBoardError):
    """Raised when an upstream catalog lookup fails."""
