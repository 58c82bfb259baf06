"""Greedy word wrapping for board text.

Titles, prompt labels and footer entries are wrapped with the same greedy
algorithm:

1. Split the text on single spaces.
2. Grow a candidate line one token at a time while its measured width stays
   within ``max_width``.
3. When a token overflows, commit the tokens before it as a line and start
   the next line with the overflowing token.  A token that does not fit even
   on its own line is committed alone, so wrapping always terminates and no
   text is dropped.

Line breaking (:func:`wrap_lines`) depends only on the text, the measure
function (i.e. the font) and ``max_width``.  Drawing (:func:`wrap_draw`) uses
whatever font and alignment the context currently holds.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


def wrap_lines(text: str, max_width: float, measure: Callable[[str], float]) -> list[str]:
    """Break ``text`` into lines no wider than ``max_width``.

    Args:
        text: Text to wrap.
        max_width: Maximum line width in pixels.  ``<= 0`` disables wrapping.
        measure: Returns the rendered width of a string under the active font.

    Returns:
        The wrapped lines.  Joining them with single spaces gives back
        ``text``.
    """
    if max_width <= 0:
        return [text]

    lines: list[str] = []
    current: list[str] = []

    for token in text.split(" "):
        candidate = current + [token]
        if measure(" ".join(candidate)) <= max_width:
            current = candidate
            continue

        if current:
            lines.append(" ".join(current))
            current = [token]
        else:
            # A single token wider than the line is committed on its own.
            lines.append(token)

    if current:
        lines.append(" ".join(current))

    return lines


def wrap_draw(ctx, text: str, x: float, y: float, line_height: float, max_width: float) -> int:
    """Wrap ``text`` and draw it line by line onto ``ctx``.

    Line ``n`` is drawn at ``(x, y + line_height * n)`` with the context's
    current font and alignment.

    Returns:
        Number of lines drawn.
    """
    if max_width <= 0:
        ctx.fill_text(text, x, y)
        return 1

    lines = wrap_lines(text, max_width, ctx.measure_text)
    for line_index, line in enumerate(lines):
        ctx.fill_text(line, x, y + line_height * line_index)
    return len(lines)
