"""Configuration management for bingoboard.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the BINGOBOARD_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (BINGOBOARD_* prefix)
2. .env file in the project root
3. Default values defined in BingoBoardConfig

Example .env file:
    BINGOBOARD_ASSETS_DIR=assets
    BINGOBOARD_FONT_PATH=assets/fonts/calibri.ttf
    BINGOBOARD_COVER_FETCH_TIMEOUT=10
    BINGOBOARD_GOOGLE_BOOKS_API_KEY=...

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
This ensures a single source of truth for all configuration values across
the application.

Usage Example
-------------
    from bingoboard.core.config import config

    print(config.assets_dir)
    print(config.server_port)

Assets Directory
----------------
The assets directory holds the board background templates and icons as PNG
files named after the asset, e.g. ``fullybooked24.png``, ``star.png`` and
``hard_mode.png``.  Unlike output directories it is never created
automatically: a missing template is a render error, not something to paper
over with an empty folder.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BingoBoardConfig(BaseSettings):
    """Main configuration for bingoboard.

    Attributes
    ----------
    Rendering:
        assets_dir : Path
            Directory containing background templates and icon PNGs
        font_path : Path | None
            TrueType font used for all board text.  ``None`` uses Pillow's
            bundled scalable font.
        text_color : str
            Fill color for board text (any Pillow color string)

    Cover fetching:
        cover_fetch_timeout : float
            Total timeout in seconds for a single cover download

    Lookup cache:
        cache_max_entries : int
            Maximum number of cached lookup responses
        cache_ttl_seconds : int
            Default time-to-live of a cached lookup response

    Book search:
        google_books_api_key : str | None
            Optional Google Books API key
        books_max_results : int
            Number of volumes returned per search

    Server:
        server_host : str
            Bind address for uvicorn
        server_port : int
            Bind port for uvicorn
        cors_origins : list[str]
            Origins allowed by the CORS middleware
        log_level : str
            Root logging level used by the CLI entry point
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BINGOBOARD_",
        case_sensitive=False,
    )

    # Rendering
    assets_dir: Path = Field(
        default=Path("assets"),
        description="Directory containing background templates and icons",
    )
    font_path: Path | None = Field(
        default=None,
        description="TrueType font for board text (None uses Pillow's default font)",
    )
    text_color: str = Field(
        default="#000000",
        description="Fill color for board text",
    )

    # Cover fetching
    cover_fetch_timeout: float = Field(
        default=15.0,
        description="Total timeout in seconds for one cover download",
        gt=0,
        le=120,
    )

    # Lookup response cache
    cache_max_entries: int = Field(
        default=500,
        description="Maximum number of cached lookup responses",
        ge=1,
    )
    cache_ttl_seconds: int = Field(
        default=3600,
        description="Default TTL of cached lookup responses",
        ge=1,
    )

    # Book search
    google_books_api_key: str | None = Field(
        default=None,
        description="Google Books API key (optional for low request volumes)",
    )
    books_max_results: int = Field(default=5, ge=1, le=40)

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address",
    )
    server_port: int = Field(
        default=4000,
        description="Server port",
        ge=1024,
        le=65535,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3001"],
        description="Origins allowed to call the API from a browser",
    )
    log_level: str = Field(default="INFO")


# Global configuration instance
# Loads values from environment variables (BINGOBOARD_* prefix) and .env file.
config = BingoBoardConfig()
