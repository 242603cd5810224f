"""Color literals and the ColorParser stage.

Accepted forms:
- `#RGB`, `#RGBA`, `#RRGGBB`, `#RRGGBBAA`
- `color(r, g, b[, a])` with every component a decimal token (`0.5`, `1.`),
  read as already normalized
- `color(r, g, b[, a])` with r, g, b digit-only tokens in 0-255 and an
  optional alpha in [0, 1]

Whether the r, g, b tokens carry a decimal point is what separates the
normalized form from the 8-bit form; `color(1.0, 0, 0)` mixes them and is
rejected.
"""

from typing import Literal

from parsimonious.exceptions import ParseError
from pydantic import BaseModel, Field

from snowmark.core.log import get_logger
from snowmark.errors import MalformedColor, MarkupError
from snowmark.grammar import LEXICAL_RULES, SpanParser, build_grammar, optional

logger = get_logger("snowmark.color")


class Color(BaseModel):
    """RGBA color with every channel normalized to [0, 1].

    Example:
        >>> Color.from_rgba8(255, 0, 0)
        Color(type='color', r=1.0, g=0.0, b=0.0, a=1.0)
    """

    type: Literal["color"] = "color"
    r: float = Field(..., ge=0.0, le=1.0, description="Red channel")
    g: float = Field(..., ge=0.0, le=1.0, description="Green channel")
    b: float = Field(..., ge=0.0, le=1.0, description="Blue channel")
    a: float = Field(1.0, ge=0.0, le=1.0, description="Alpha channel")

    model_config = {"frozen": True}

    @classmethod
    def from_rgba8(cls, r: int, g: int, b: int, a: int = 255) -> "Color":
        return cls(r=r / 255, g=g / 255, b=b / 255, a=a / 255)


COLOR_RULES = r"""
    color_root  = ws (hex_color / color_fn) ws
    hex_color   = ~r"#(?:[0-9a-fA-F]{8}|[0-9a-fA-F]{6}|[0-9a-fA-F]{4}|[0-9a-fA-F]{3})(?![0-9A-Za-z])"
    color_fn    = ~r"color"i ws "(" ws channels ws ")"
    channels    = normalized / eight_bit
    normalized  = decimal comma decimal comma decimal (comma decimal)?
    eight_bit   = integer comma integer comma integer (comma float)?
    decimal     = ~r"-?(?:0|[1-9][0-9]*)\.[0-9]*(?:[eE][+-]?[0-9]+)?"
"""


class ColorParser(SpanParser):
    """Parses a color spec into a normalized Color."""

    grammar = build_grammar(COLOR_RULES, LEXICAL_RULES)
    default_rule = "color_root"

    def syntax_error(self, text: str, exc: ParseError) -> MarkupError:
        return MalformedColor(text.strip(), position=exc.pos, text=text)

    def visit_color_root(self, node, visited_children) -> Color:
        _, (color,), _ = visited_children
        logger.debug("parsed color %s", color)
        return color

    def visit_hex_color(self, node, visited_children) -> Color:
        digits = node.text[1:]
        if len(digits) in (3, 4):
            digits = "".join(digit * 2 for digit in digits)
        if len(digits) == 6:
            digits += "ff"
        channels = [int(digits[i : i + 2], 16) for i in range(0, 8, 2)]
        return Color.from_rgba8(*channels)

    def visit_color_fn(self, node, visited_children) -> Color:
        return visited_children[4]

    def visit_channels(self, node, visited_children) -> Color:
        return visited_children[0]

    def visit_normalized(self, node, visited_children) -> Color:
        r, _, g, _, b, alpha = visited_children
        alpha = optional(alpha)
        a = alpha[1] if alpha else 1.0
        for channel in (r, g, b, a):
            if not 0.0 <= channel <= 1.0:
                raise MalformedColor(
                    node.text, f"component {channel} outside [0, 1]", node.start, node.full_text
                )
        return Color(r=r, g=g, b=b, a=a)

    def visit_eight_bit(self, node, visited_children) -> Color:
        r, _, g, _, b, alpha = visited_children
        alpha = optional(alpha)
        a = alpha[1] if alpha else 1.0
        for channel in (r, g, b):
            if channel > 255:
                raise MalformedColor(
                    node.text, f"component {channel} outside [0, 255]", node.start, node.full_text
                )
        if not 0.0 <= a <= 1.0:
            raise MalformedColor(node.text, f"alpha {a} outside [0, 1]", node.start, node.full_text)
        return Color(r=r / 255, g=g / 255, b=b / 255, a=a)

    def visit_decimal(self, node, visited_children) -> float:
        return float(node.text)

    def visit_float(self, node, visited_children) -> float:
        return float(node.text)

    def visit_integer(self, node, visited_children) -> int:
        return int(node.text)


_parser = ColorParser()


def parse_color(text: str) -> Color:
    """Parse a color spec.

    Raises:
        MalformedColor: The text is not one of the accepted forms.
    """
    return _parser.parse(text)


__all__ = ["COLOR_RULES", "Color", "ColorParser", "parse_color"]
