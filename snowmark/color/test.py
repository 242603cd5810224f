"""Unit tests for ColorParser."""

import pytest

from snowmark.errors import MalformedColor

from .lib import Color, parse_color

WHITE = Color(r=1.0, g=1.0, b=1.0, a=1.0)
RED = Color(r=1.0, g=0.0, b=0.0, a=1.0)


class TestHexColors:
    """Tests for #hex forms."""

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["#ffffff", "#ffffffff", "#fff", "#FFFF"])
    def test_white(self, text):
        """#fff is opaque white."""
        assert parse_color(text) == WHITE

    @pytest.mark.unit
    def test_short_form_doubles_digits(self):
        """Short hex forms repeat each digit."""
        assert parse_color("#f00") == RED
        assert parse_color("#1234") == Color.from_rgba8(0x11, 0x22, 0x33, 0x44)

    @pytest.mark.unit
    def test_alpha_pair(self):
        """Eight hex digits carry alpha."""
        color = parse_color("#20203080")
        assert color.r == 0x20 / 255
        assert color.b == 0x30 / 255
        assert color.a == 0x80 / 255

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["#ff", "#fffff", "#ggg", "#fffffffff", "ffffff"])
    def test_malformed(self, text):
        """Wrong hex lengths and digits raise MalformedColor."""
        with pytest.raises(MalformedColor):
            parse_color(text)


class TestFunctionalColors:
    """Tests for color(...) forms."""

    @pytest.mark.unit
    def test_eight_bit(self):
        """Digit-only components are 8-bit channels."""
        assert parse_color("color(255,0,0)") == RED

    @pytest.mark.unit
    def test_normalized(self):
        """Decimal components are already normalized."""
        assert parse_color("color(1.0,0.0,0.0)") == RED

    @pytest.mark.unit
    def test_trailing_point_is_decimal(self):
        """A trailing point marks a decimal component."""
        assert parse_color("color(1., 0., 0.)") == RED

    @pytest.mark.unit
    def test_eight_bit_with_alpha(self):
        """The 8-bit form takes a normalized alpha."""
        assert parse_color("color(255, 255, 255, 0.5)") == Color(r=1.0, g=1.0, b=1.0, a=0.5)

    @pytest.mark.unit
    def test_normalized_with_alpha(self):
        """The normalized form takes a fourth component."""
        assert parse_color("Color( 0.5 , 0.25, 0.0, 0.75 )") == Color(r=0.5, g=0.25, b=0.0, a=0.75)

    @pytest.mark.unit
    def test_one_is_eight_bit(self):
        """A bare 1 is an 8-bit channel, not full intensity."""
        color = parse_color("color(1, 1, 1)")
        assert color.r == 1 / 255

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text",
        [
            "color(1.0, 0, 0)",
            "color(255, 0.0, 0)",
            "color(256, 0, 0)",
            "color(1.5, 0.0, 0.0)",
            "color(-0.5, 0.0, 0.0)",
            "color(255, 0, 0, 2)",
            "color(255, 0)",
            "color(255, 0, 0",
            "colour(255, 0, 0)",
        ],
    )
    def test_malformed(self, text):
        """Out-of-range, mixed or incomplete calls raise MalformedColor."""
        with pytest.raises(MalformedColor):
            parse_color(text)

    @pytest.mark.unit
    def test_error_position_points_at_component(self):
        """Channel range errors are positioned inside the color call."""
        text = "color(255, 300, 0)"
        with pytest.raises(MalformedColor) as info:
            parse_color(text)
        assert info.value.position == text.index("255")
