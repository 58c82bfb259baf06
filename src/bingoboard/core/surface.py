"""Drawing surface used for a single render.

:class:`RenderContext` wraps a Pillow canvas together with the mutable
drawing state the renderer threads through a render: the current font and
the text alignment.  A context is created per render, written to by exactly
one task in a fixed order, encoded once and then discarded.
"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Literal

from PIL import Image, ImageDraw, ImageFont

from .models import Size

logger = logging.getLogger(__name__)

Alignment = Literal["center", "left"]

# Top-middle / top-left anchors keep ``y`` at the top of the line, so that
# ``y + line_height * n`` stacks lines the same way regardless of alignment.
_ANCHORS: dict[str, str] = {"center": "ma", "left": "la"}

OUTPUT_FORMAT = "PNG"


class RenderContext:
    """Canvas plus current font and alignment.

    Attributes:
        image: The RGBA canvas being drawn on.
        font: Font used by :meth:`measure_text` and :meth:`fill_text`.
        alignment: ``"center"`` draws text centered on ``x``; ``"left"``
            draws it starting at ``x``.
    """

    def __init__(
        self,
        size: Size,
        *,
        text_color: str = "#000000",
        background: str = "white",
    ) -> None:
        self.image = Image.new("RGBA", size.as_tuple(), background)
        self._draw = ImageDraw.Draw(self.image)
        self.text_color = text_color
        self.font: ImageFont.ImageFont | ImageFont.FreeTypeFont = ImageFont.load_default()
        self.alignment: Alignment = "center"

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size

    def set_font(self, font) -> None:
        self.font = font

    def set_alignment(self, alignment: Alignment) -> None:
        if alignment not in _ANCHORS:
            raise ValueError(f"Unsupported alignment: {alignment}")
        self.alignment = alignment

    def measure_text(self, text: str) -> float:
        """Return the advance width of ``text`` under the current font."""
        return self._draw.textlength(text, font=self.font)

    def fill_text(self, text: str, x: float, y: float) -> None:
        self._draw.text(
            (x, y),
            text,
            font=self.font,
            fill=self.text_color,
            anchor=_ANCHORS[self.alignment],
        )

    def draw_image(
        self,
        image: Image.Image,
        x: float,
        y: float,
        width: int | None = None,
        height: int | None = None,
        clip_width: int | None = None,
    ) -> None:
        """Composite ``image`` onto the canvas.

        Args:
            image: Source image.  It is never modified.
            x: Left edge on the canvas.
            y: Top edge on the canvas.
            width: Target width.  ``None`` keeps the natural size.
            height: Target height.  ``None`` keeps the natural size.
            clip_width: When set, only the leftmost ``clip_width`` pixels of
                the scaled image are composited.
        """
        if width is not None and height is not None:
            target = (int(round(width)), int(round(height)))
            if image.size != target:
                image = image.resize(target, Image.Resampling.LANCZOS)
        if clip_width is not None:
            image = image.crop((0, 0, int(clip_width), image.height))

        if image.mode != "RGBA":
            image = image.convert("RGBA")
        self.image.paste(image, (int(round(x)), int(round(y))), image)

    def encode(self, fmt: str = OUTPUT_FORMAT) -> bytes:
        buffer = BytesIO()
        self.image.save(buffer, format=fmt)
        return buffer.getvalue()
