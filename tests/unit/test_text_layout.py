"""Tests for bingoboard.core.text_layout — greedy word wrap.

A fake context measures every character as 10 pixels wide so expected line
breaks can be worked out by hand.
"""

from __future__ import annotations

import pytest

from bingoboard.core.text_layout import wrap_draw, wrap_lines

CHAR_WIDTH = 10


def measure(text: str) -> float:
    return len(text) * CHAR_WIDTH


class FakeContext:
    """Minimal context: fixed-width measuring, recorded draws."""

    def __init__(self):
        self.draws: list[tuple[str, float, float]] = []

    def measure_text(self, text: str) -> float:
        return measure(text)

    def fill_text(self, text: str, x: float, y: float) -> None:
        self.draws.append((text, x, y))


class TestWrapLines:
    """Test the pure line-breaking half."""

    def test_fits_on_one_line(self):
        assert wrap_lines("The Hobbit", 200, measure) == ["The Hobbit"]

    def test_breaks_before_overflowing_token(self):
        # "one two" is 70px, "one two three" is 130px.
        assert wrap_lines("one two three", 100, measure) == ["one two", "three"]

    def test_exact_fit_is_allowed(self):
        # "one two" is exactly 70px.
        assert wrap_lines("one two", 70, measure) == ["one two"]

    def test_single_long_token_forced(self):
        assert wrap_lines("Supercalifragilistic", 50, measure) == ["Supercalifragilistic"]

    def test_long_token_between_short_ones(self):
        lines = wrap_lines("a Supercalifragilistic b", 50, measure)
        assert lines == ["a", "Supercalifragilistic", "b"]

    def test_several_long_tokens(self):
        lines = wrap_lines("abcdefgh ijklmnop qrstuvwx", 30, measure)
        assert lines == ["abcdefgh", "ijklmnop", "qrstuvwx"]

    def test_non_positive_width_returns_text_unchanged(self):
        assert wrap_lines("no wrapping here at all", 0, measure) == ["no wrapping here at all"]
        assert wrap_lines("no wrapping", -5, measure) == ["no wrapping"]

    def test_empty_text(self):
        assert wrap_lines("", 100, measure) == [""]

    def test_deterministic(self):
        text = "The Fellowship of the Ring and the Two Towers"
        assert wrap_lines(text, 120, measure) == wrap_lines(text, 120, measure)

    @pytest.mark.parametrize(
        "text",
        [
            "The Left Hand of Darkness",
            "A Wizard of Earthsea by Ursula K. Le Guin",
            "Pneumonoultramicroscopicsilicovolcanoconiosis explained",
            "double  spaced  title",
            "x",
        ],
    )
    @pytest.mark.parametrize("max_width", [1, 40, 90, 250])
    def test_token_round_trip(self, text, max_width):
        """Re-wrapping each line with a huge width gives back the original tokens."""
        lines = wrap_lines(text, max_width, measure)
        tokens: list[str] = []
        for line in lines:
            (rewrapped,) = wrap_lines(line, 10**9, measure)
            tokens.extend(rewrapped.split(" "))
        assert tokens == text.split(" ")

    def test_lines_respect_width_unless_single_token(self):
        text = "It was a bright cold day in April and the clocks were striking thirteen"
        for line in wrap_lines(text, 100, measure):
            assert measure(line) <= 100 or " " not in line


class TestWrapDraw:
    """Test the drawing half."""

    def test_non_positive_width_single_draw(self):
        ctx = FakeContext()
        text = "A very long title that would normally wrap onto many lines"
        assert wrap_draw(ctx, text, 50, 60, 20, 0) == 1
        assert ctx.draws == [(text, 50, 60)]

    def test_lines_stacked_by_line_height(self):
        ctx = FakeContext()
        count = wrap_draw(ctx, "one two three four", 100, 200, 24, 100)
        assert count == 2
        assert ctx.draws == [("one two", 100, 200), ("three four", 100, 224)]

    def test_single_oversized_token_drawn_alone(self):
        ctx = FakeContext()
        count = wrap_draw(ctx, "Antidisestablishmentarianism", 0, 0, 10, 20)
        assert count == 1
        assert ctx.draws == [("Antidisestablishmentarianism", 0, 0)]

    def test_wrapped_text_centered_on_same_x(self):
        ctx = FakeContext()
        wrap_draw(ctx, "alpha beta gamma delta", 321, 0, 10, 60)
        assert {x for _, x, _ in ctx.draws} == {321}
