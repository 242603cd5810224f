"""Color literals and their parser."""

from .lib import COLOR_RULES, Color, ColorParser, parse_color

__all__ = ["COLOR_RULES", "Color", "ColorParser", "parse_color"]
