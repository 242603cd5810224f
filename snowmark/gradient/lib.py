"""Linear gradients and the GradientParser stage.

A gradient is `gradient(angle, [stop, ...])` where each stop is a color spec,
`@`, and a position. Stop colors are captured opaquely and handed to
ColorParser. Stop positions are conventionally in [0, 1] but the grammar
does not enforce it; see `snowmark.validation`.
"""

import math
from typing import Literal

from parsimonious.exceptions import ParseError
from pydantic import BaseModel, Field

from snowmark.color import Color, parse_color
from snowmark.core.log import get_logger
from snowmark.errors import MalformedGradient, MalformedNumber, MarkupError, StopListOverflow
from snowmark.grammar import LEXICAL_RULES, SPAN_RULES, SpanParser, build_grammar, repeated

logger = get_logger("snowmark.gradient")

MAX_STOPS = 8


class Stop(BaseModel):
    """A color at a position along the gradient axis."""

    color: Color = Field(..., description="Stop color")
    position: float = Field(
        ..., allow_inf_nan=False, description="Offset along the axis, conventionally 0-1"
    )

    model_config = {"frozen": True}


class Gradient(BaseModel):
    """Linear gradient.

    Attributes:
        angle: Direction of the gradient axis in radians.
        stops: Color stops in the order written.
    """

    type: Literal["gradient"] = "gradient"
    angle: float = Field(..., allow_inf_nan=False, description="Axis angle in radians")
    stops: tuple[Stop, ...] = Field(..., min_length=1, max_length=MAX_STOPS)

    model_config = {"frozen": True}


GRADIENT_RULES = r"""
    gradient_root = ws ~r"gradient"i ws "(" ws float comma "[" ws stops ws "]" ws ")" ws
    stops         = stop (comma stop)*
    stop          = stop_color ws "@" ws float
    stop_color    = ~r"#[0-9A-Za-z]*" / color_call
    color_call    = ~r"color"i ws paren_span
"""


class GradientParser(SpanParser):
    """Parses a gradient spec; stop colors are re-parsed by ColorParser."""

    grammar = build_grammar(GRADIENT_RULES, LEXICAL_RULES, SPAN_RULES)
    default_rule = "gradient_root"

    def syntax_error(self, text: str, exc: ParseError) -> MarkupError:
        return MalformedGradient(text.strip(), exc.pos, text)

    def visit_gradient_root(self, node, visited_children) -> Gradient:
        angle = visited_children[5]
        stops = visited_children[9]
        logger.debug("parsed gradient with %d stops", len(stops))
        return Gradient(angle=angle, stops=stops)

    def visit_stops(self, node, visited_children) -> list[Stop]:
        first, rest = visited_children
        stops = [first, *(stop for _, stop in repeated(rest))]
        if len(stops) > MAX_STOPS:
            overflow = node.children[1].children[MAX_STOPS - 1].children[1]
            raise StopListOverflow(len(stops), MAX_STOPS, overflow.start, node.full_text)
        return stops

    def visit_stop(self, node, visited_children) -> Stop:
        color, _, _, _, position = visited_children
        return Stop(color=color, position=position)

    def visit_stop_color(self, node, visited_children) -> Color:
        try:
            return parse_color(node.text)
        except MarkupError as exc:
            exc.relocate(node.start, node.full_text)
            raise

    def visit_float(self, node, visited_children) -> float:
        value = float(node.text)
        if not math.isfinite(value):
            raise MalformedNumber(node.text, node.start, node.full_text)
        return value


_parser = GradientParser()


def parse_gradient(text: str) -> Gradient:
    """Parse a gradient spec.

    Raises:
        MalformedGradient: The text is not a gradient.
        StopListOverflow: More than eight stops are listed.
        MalformedColor: A stop color is malformed.
        MalformedNumber: The angle or a stop position overflows a float.
    """
    return _parser.parse(text)


__all__ = [
    "MAX_STOPS",
    "GRADIENT_RULES",
    "Gradient",
    "GradientParser",
    "Stop",
    "parse_gradient",
]
