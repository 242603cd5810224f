"""Unit tests for GradientParser."""

import pytest

from snowmark.color import Color, parse_color
from snowmark.errors import MalformedColor, MalformedGradient, MalformedNumber, StopListOverflow

from .lib import parse_gradient


def _stops(count: int) -> str:
    return ", ".join(f"#000000@{i / 10}" for i in range(count))


class TestGradient:
    """Tests for well-formed gradients."""

    @pytest.mark.unit
    def test_three_stops_in_order(self):
        """Stops keep their written order, positions and colors."""
        gradient = parse_gradient("gradient(0.8,[#202030@0.0, #404045@0.5, #323030@1.0])")
        assert gradient.angle == 0.8
        assert [stop.position for stop in gradient.stops] == [0.0, 0.5, 1.0]
        assert [stop.color for stop in gradient.stops] == [
            parse_color("#202030"),
            parse_color("#404045"),
            parse_color("#323030"),
        ]

    @pytest.mark.unit
    def test_functional_stop_colors(self):
        """Stop colors may use the color() form."""
        gradient = parse_gradient("Gradient( 1.57 , [ color(255, 0, 0) @ 0, color(0.0, 0.0, 1.0, 0.5)@1 ] )")
        assert gradient.stops[0].color == Color(r=1.0, g=0.0, b=0.0)
        assert gradient.stops[1].color == Color(r=0.0, g=0.0, b=1.0, a=0.5)
        assert gradient.stops[1].position == 1.0

    @pytest.mark.unit
    def test_positions_outside_unit_range_are_accepted(self):
        """The grammar does not bound stop positions."""
        gradient = parse_gradient("gradient(0, [#fff@-0.5, #000@1.5])")
        assert [stop.position for stop in gradient.stops] == [-0.5, 1.5]

    @pytest.mark.unit
    def test_eight_stops_allowed(self):
        """Eight stops is the maximum accepted."""
        assert len(parse_gradient(f"gradient(0, [{_stops(8)}])").stops) == 8


class TestMalformedGradient:
    """Tests for gradient failures."""

    @pytest.mark.unit
    def test_nine_stops_overflow(self):
        """A ninth stop is reported at its own position."""
        text = f"gradient(0, [{_stops(9)}])"
        with pytest.raises(StopListOverflow) as info:
            parse_gradient(text)
        assert info.value.count == 9
        assert info.value.position == text.index("#000000@0.8")

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text",
        [
            "gradient(0.8)",
            "gradient(0.8, [])",
            "gradient(0.8, [#fff])",
            "gradient(0.8, [#fff@])",
            "gradient([#fff@0])",
            "linear(0.8, [#fff@0])",
        ],
    )
    def test_malformed(self, text):
        """Text that is not a gradient raises MalformedGradient."""
        with pytest.raises(MalformedGradient):
            parse_gradient(text)

    @pytest.mark.unit
    def test_bad_stop_color_is_relocated(self):
        """Stop color errors point into the gradient text."""
        text = "gradient(0, [#fff@0, #ggg@1])"
        with pytest.raises(MalformedColor) as info:
            parse_gradient(text)
        assert info.value.position == text.index("#ggg")
        assert info.value.text == text

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text, token",
        [("gradient(1e999, [#fff@0.5])", "1e999"), ("gradient(0.5, [#fff@0.0, #000@-1e999])", "-1e999")],
    )
    def test_non_finite_numbers_rejected(self, text, token):
        """Angles and positions that overflow to infinity are malformed numbers."""
        with pytest.raises(MalformedNumber) as info:
            parse_gradient(text)
        assert info.value.position == text.index(token)
