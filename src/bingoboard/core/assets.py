"""Background template, icon and font loading.

:class:`AssetCache` is owned by a :class:`~bingoboard.core.renderer.BoardRenderer`.
Assets are read from ``<assets_dir>/<name>.png`` the first time they are
requested and kept decoded in memory for the life of the cache.  Cached
images are shared between renders and are only ever read: the render context
resizes or crops a copy before compositing.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from PIL import Image, ImageFont, UnidentifiedImageError

from .errors import AssetLoadError

logger = logging.getLogger(__name__)


class AssetCache:
    """Lazily populated, per-name memo of decoded assets and fonts.

    Attributes:
        assets_dir: Directory the PNG assets are read from.
        font_path: Optional TrueType font.  ``None`` uses Pillow's default
            scalable font.
    """

    def __init__(self, assets_dir: Path, font_path: Path | None = None) -> None:
        self.assets_dir = Path(assets_dir)
        self.font_path = Path(font_path) if font_path else None
        self._images: dict[str, Image.Image] = {}
        self._fonts: dict[int, ImageFont.ImageFont | ImageFont.FreeTypeFont] = {}
        self._lock = threading.Lock()

    def path_for(self, name: str) -> Path:
        return self.assets_dir / f"{name}.png"

    def load(self, name: str) -> Image.Image:
        """Return the decoded asset called ``name``.

        Raises:
            AssetLoadError: If the file is missing or is not a readable image.
        """
        with self._lock:
            cached = self._images.get(name)
            if cached is not None:
                return cached

            path = self.path_for(name)
            try:
                with Image.open(path) as handle:
                    handle.load()
                    image = handle.convert("RGBA")
            except FileNotFoundError as exc:
                raise AssetLoadError(f"Asset '{name}' not found at {path}", name=name) from exc
            except (Image.DecompressionBombError, UnidentifiedImageError, OSError) as exc:
                raise AssetLoadError(f"Asset '{name}' is not a valid image", name=name) from exc

            self._images[name] = image
            logger.info(f"Loaded asset '{name}' ({image.width}x{image.height})")
            return image

    def font(self, size: int):
        """Return the board font at ``size`` pixels, loading it on first use.

        Raises:
            AssetLoadError: If the configured font file is missing or unreadable.
        """
        with self._lock:
            cached = self._fonts.get(size)
            if cached is not None:
                return cached

            if self.font_path is not None:
                try:
                    font = ImageFont.truetype(str(self.font_path), size)
                except OSError as exc:
                    raise AssetLoadError(
                        f"Font {self.font_path} could not be loaded", name=str(self.font_path)
                    ) from exc
            else:
                font = ImageFont.load_default(size=size)
            self._fonts[size] = font
            return font

    def clear(self) -> None:
        with self._lock:
            self._images.clear()
            self._fonts.clear()

    def __len__(self) -> int:
        return len(self._images)
