"""Rating and hard-mode overlays drawn on top of a cell's cover."""

from __future__ import annotations

import logging
import math

from PIL import Image

from .boards import BadgeGeometry, StarGeometry
from .models import Point, clamp_rating

logger = logging.getLogger(__name__)


def draw_rating(
    ctx,
    icon: Image.Image,
    origin: Point,
    geometry: StarGeometry,
    rating: float,
) -> float:
    """Draw ``rating`` as a run of star icons.

    ``floor(rating)`` full icons are drawn at ``origin + k * pitch``.  When the
    geometry supports fractional ratings and ``rating`` has a remainder, one
    more icon is drawn clipped to the left half of its box.  Otherwise the
    remainder is dropped.

    Args:
        ctx: Render context to draw on.
        icon: Star icon image.
        origin: Position of the first icon (cell origin plus star offset).
        geometry: Star pitch, icon size and fractional support.
        rating: Rating between 0 and 5.  Values outside are clamped.

    Returns:
        Number of icons drawn, with the half icon counted as 0.5.
    """
    rating = clamp_rating(rating)
    full = math.floor(rating)
    w, h = geometry.icon_size.as_tuple()

    for k in range(full):
        pos = origin + geometry.pitch.scaled(k)
        ctx.draw_image(icon, pos.x, pos.y, w, h)

    if geometry.fractional and rating % 1 != 0:
        pos = origin + geometry.pitch.scaled(full)
        ctx.draw_image(icon, pos.x, pos.y, w, h, clip_width=w // 2)
        return full + 0.5

    return float(full)


def draw_badge(ctx, icon: Image.Image, origin: Point, geometry: BadgeGeometry) -> None:
    """Draw the hard-mode badge at ``origin`` (cell origin plus badge offset)."""
    ctx.draw_image(icon, origin.x, origin.y, geometry.size.w, geometry.size.h)
