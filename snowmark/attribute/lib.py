"""Attribute blocks and the AttributeParser stage.

The structural grammar hands over the text between `<` and `>` untouched.
Parsing happens in two steps:

1. The block grammar splits it into `key: value` pairs. A value runs until
   the next top-level `, key:`; strings and bracketed spans inside it are
   skipped whole, so commas in `padding: 5, 10` or `"a, b"` stay in the value.
2. Each key is resolved through the schema registry and its value text is
   parsed against that kind's shape rule. A value that starts like a module
   invocation is parsed by ModuleInvocationParser instead, for every kind.

Example:
    >>> attrs = parse_attributes("padding: 5, 10, width: fill-portion(3)")
    >>> attrs[AttributeKind.WIDTH].value
    Length(type='length', mode=<LengthMode.FILL_PORTION: 'fill-portion'>, pixels=None, portion=3)
"""

import math
from typing import Annotated, Iterator, Literal, Union

from parsimonious.exceptions import ParseError
from parsimonious.grammar import Grammar
from pydantic import BaseModel, Field, model_validator

from snowmark.color import parse_color
from snowmark.config import DuplicateKeyPolicy, get_duplicate_key_policy
from snowmark.core.log import get_logger
from snowmark.errors import (
    DuplicateKey,
    InvalidValueShape,
    MarkupError,
    UnexpectedToken,
    UnknownAttributeKey,
)
from snowmark.gradient import parse_gradient
from snowmark.grammar import (
    LEXICAL_RULES,
    SPAN_RULES,
    SpanParser,
    build_grammar,
    decode_string,
    keyword_pattern,
    lookup_keyword,
    optional,
    repeated,
)
from snowmark.module import ModuleRef, looks_like_module, parse_module
from snowmark.schema import (
    BOOLEAN_KEYWORDS,
    DIRECTION_KEYWORDS,
    HORIZONTAL_KEYWORDS,
    LENGTH_KEYWORDS,
    SHAPING_KEYWORDS,
    SIDE_KEYWORDS,
    VERTICAL_KEYWORDS,
    WRAPPING_KEYWORDS,
    AttributeKind,
    ValueShape,
    get_attribute_meta,
    resolve_attribute_kind,
)
from snowmark.value import Value

from .types import (
    U32_MAX,
    Background,
    Border,
    Direction,
    Flag,
    HorizontalAlign,
    Length,
    Padding,
    Pixels,
    Radius,
    Shadow,
    Shaping,
    Text,
    TypedValue,
    VerticalAlign,
    Wrapping,
)

logger = get_logger("snowmark.attribute")

# Name of the argument synthesized for resolvers; user arguments may not
# start with an underscore.
ATTRIBUTE_ARGUMENT = "_attribute"


# =============================================================================
# Attribute values
# =============================================================================


class LiteralValue(BaseModel):
    """An attribute value written out in the markup."""

    type: Literal["literal"] = "literal"
    value: TypedValue

    model_config = {"frozen": True}


class Deferred(BaseModel):
    """An attribute value produced later by a module resolver.

    Attributes:
        kind: The attribute the value is for.
        module: The invocation exactly as written.
    """

    type: Literal["deferred"] = "deferred"
    kind: AttributeKind
    module: ModuleRef

    model_config = {"frozen": True}

    def resolver_ref(self) -> ModuleRef:
        """The invocation with the attribute kind appended as `_attribute`.

        Resolvers use it to pick a strategy, e.g. a theme module returning a
        color for `background` and a length for `width`.
        """
        return self.module.with_argument(ATTRIBUTE_ARGUMENT, Value.from_string(self.kind.value))


AttributeValue = Annotated[Union[LiteralValue, Deferred], Field(discriminator="type")]


class Attribute(BaseModel):
    kind: AttributeKind
    value: AttributeValue

    model_config = {"frozen": True}


class AttributeSet(BaseModel):
    """Ordered mapping of attribute kind to value; kinds are unique.

    Example:
        >>> attrs = parse_attributes("clip: true")
        >>> AttributeKind.CLIP in attrs
        True
    """

    entries: tuple[Attribute, ...] = Field(default=(), description="Attributes in block order")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_unique(self) -> "AttributeSet":
        kinds = [entry.kind for entry in self.entries]
        if len(kinds) != len(set(kinds)):
            raise ValueError("attribute kinds must be unique within a set")
        return self

    @classmethod
    def from_mapping(cls, mapping: dict[AttributeKind, LiteralValue | Deferred]) -> "AttributeSet":
        return cls(entries=tuple(Attribute(kind=kind, value=value) for kind, value in mapping.items()))

    def get(self, kind: AttributeKind, default=None):
        for entry in self.entries:
            if entry.kind == kind:
                return entry.value
        return default

    def __getitem__(self, kind: AttributeKind) -> LiteralValue | Deferred:
        value = self.get(kind)
        if value is None:
            raise KeyError(kind)
        return value

    def __contains__(self, kind: object) -> bool:
        return any(entry.kind == kind for entry in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def kinds(self) -> list[AttributeKind]:
        return [entry.kind for entry in self.entries]

    def items(self) -> Iterator[tuple[AttributeKind, LiteralValue | Deferred]]:
        for entry in self.entries:
            yield entry.kind, entry.value

    def literal(self, kind: AttributeKind):
        """The typed value for `kind` if it was written literally, else None."""
        value = self.get(kind)
        return value.value if isinstance(value, LiteralValue) else None

    def deferred(self) -> list[Deferred]:
        return [entry.value for entry in self.entries if isinstance(entry.value, Deferred)]


# =============================================================================
# Value shapes
# =============================================================================

SHAPE_RULES = r"""
    padding         = ws (side_options / padding_four / padding_two / float) ws
    padding_four    = float comma float comma float comma float
    padding_two     = float comma float
    side_options    = side_option (comma side_option)*
    side_option     = side ws "(" ws float ws ")"

    length          = ws (fill_portion / fixed / length_keyword / float) ws
    fill_portion    = ~r"fill-portion"i ws "(" ws integer ws ")"
    fixed           = ~r"fixed"i ws "(" ws float ws ")"
    pixels          = ws float ws

    align_x         = ws horizontal ws
    align_y         = ws vertical ws
    align           = ws (horizontal / vertical) ws

    color           = ws color_spec ws
    background      = ws (gradient_call / color_spec) ws
    color_spec      = hex_span / color_call
    hex_span        = ~r"#[0-9A-Za-z]*"
    color_call      = ~r"color"i ws paren_span
    gradient_call   = ~r"gradient"i ws paren_span

    border          = ws border_option (comma border_option)* ws
    border_option   = border_color / border_width / border_radius
    border_color    = ~r"color"i ws paren_span
    border_width    = ~r"(?:width|w)(?![A-Za-z-])"i ws "(" ws float ws ")"
    border_radius   = ~r"radius"i ws "(" ws (radius_four / float) ws ")"
    radius_four     = float comma float comma float comma float

    shadow          = ws side_option (comma side_option)* ws
    text            = ws string ws
    flag            = ws boolean ws
    wrapping        = ws wrap_keyword ws
    shaping         = ws shaping_keyword ws
    direction       = ws direction_keyword ws
"""

KEYWORD_RULES = "\n".join(
    f"{name} = {keyword_pattern(table)}"
    for name, table in (
        ("side", SIDE_KEYWORDS),
        ("length_keyword", LENGTH_KEYWORDS),
        ("horizontal", HORIZONTAL_KEYWORDS),
        ("vertical", VERTICAL_KEYWORDS),
        ("boolean", BOOLEAN_KEYWORDS),
        ("wrap_keyword", WRAPPING_KEYWORDS),
        ("shaping_keyword", SHAPING_KEYWORDS),
        ("direction_keyword", DIRECTION_KEYWORDS),
    )
)


class ShapeParser(SpanParser):
    """Parses one attribute value text against a ValueShape rule.

    Shape failures raise InvalidValueShape without a key; AttributeParser
    fills the key in. Color and gradient specs are handed to their own
    parsers.
    """

    grammar: Grammar = build_grammar(SHAPE_RULES, KEYWORD_RULES, LEXICAL_RULES, SPAN_RULES)

    def parse_shape(self, shape: ValueShape, text: str) -> TypedValue:
        return self.parse(text, rule=shape.value)

    def syntax_error(self, text: str, exc: ParseError) -> MarkupError:
        return InvalidValueShape("", text.strip(), 0, text)

    def _delegate(self, parse, node, offset: int = 0, text: str | None = None):
        try:
            return parse(node.text if text is None else text)
        except MarkupError as exc:
            exc.relocate(node.start + offset, node.full_text)
            raise

    # --- scalars ------------------------------------------------------------

    def visit_float(self, node, visited_children) -> float:
        value = float(node.text)
        if not math.isfinite(value):
            raise InvalidValueShape("", node.text, node.start, node.full_text)
        return value

    def visit_integer(self, node, visited_children) -> int:
        return int(node.text)

    def visit_string(self, node, visited_children) -> str:
        return decode_string(node.text, node.start, node.full_text)

    def visit_boolean(self, node, visited_children) -> bool:
        return lookup_keyword(BOOLEAN_KEYWORDS, node.text)

    # --- padding and shadow -------------------------------------------------

    def visit_padding(self, node, visited_children) -> Padding:
        _, (padding,), _ = visited_children
        if isinstance(padding, float):
            return Padding.uniform(padding)
        if isinstance(padding, dict):
            return Padding(**{side.value: value for side, value in padding.items()})
        return padding

    def visit_padding_four(self, node, visited_children) -> Padding:
        top, _, right, _, bottom, _, left = visited_children
        return Padding(top=top, right=right, bottom=bottom, left=left)

    def visit_padding_two(self, node, visited_children) -> Padding:
        vertical, _, horizontal = visited_children
        return Padding.symmetric(vertical, horizontal)

    def visit_side_options(self, node, visited_children) -> dict:
        first, rest = visited_children
        # later options for the same side win
        return dict([first, *(option for _, option in repeated(rest))])

    def visit_side_option(self, node, visited_children) -> tuple:
        side, _, _, _, value, _, _ = visited_children
        return side, value

    def visit_side(self, node, visited_children):
        return lookup_keyword(SIDE_KEYWORDS, node.text)

    def visit_shadow(self, node, visited_children) -> Shadow:
        _, first, rest, _ = visited_children
        options = dict([first, *(option for _, option in repeated(rest))])
        return Shadow(**{side.value: value for side, value in options.items()})

    # --- lengths ------------------------------------------------------------

    def visit_length(self, node, visited_children) -> Length | Pixels:
        _, (length,), _ = visited_children
        if isinstance(length, float):
            return Pixels(value=length)
        return length

    def visit_fill_portion(self, node, visited_children) -> Length:
        portion = visited_children[4]
        if portion > U32_MAX:
            raise InvalidValueShape("", node.text, node.start, node.full_text)
        return Length.fill_portion(portion)

    def visit_fixed(self, node, visited_children) -> Length:
        return Length.fixed(visited_children[4])

    def visit_length_keyword(self, node, visited_children) -> Length:
        return Length(mode=lookup_keyword(LENGTH_KEYWORDS, node.text))

    def visit_pixels(self, node, visited_children) -> Pixels:
        return Pixels(value=visited_children[1])

    # --- alignment ----------------------------------------------------------

    def visit_horizontal(self, node, visited_children) -> HorizontalAlign:
        return HorizontalAlign(align=lookup_keyword(HORIZONTAL_KEYWORDS, node.text))

    def visit_vertical(self, node, visited_children) -> VerticalAlign:
        return VerticalAlign(align=lookup_keyword(VERTICAL_KEYWORDS, node.text))

    def visit_align_x(self, node, visited_children) -> HorizontalAlign:
        return visited_children[1]

    def visit_align_y(self, node, visited_children) -> VerticalAlign:
        return visited_children[1]

    def visit_align(self, node, visited_children) -> HorizontalAlign | VerticalAlign:
        _, (align,), _ = visited_children
        return align

    # --- colors -------------------------------------------------------------

    def visit_color(self, node, visited_children):
        return visited_children[1]

    def visit_color_spec(self, node, visited_children):
        return visited_children[0]

    def visit_hex_span(self, node, visited_children):
        return self._delegate(parse_color, node)

    def visit_color_call(self, node, visited_children):
        return self._delegate(parse_color, node)

    def visit_gradient_call(self, node, visited_children):
        return self._delegate(parse_gradient, node)

    def visit_background(self, node, visited_children) -> Background:
        _, (fill,), _ = visited_children
        return Background(fill=fill)

    # --- border -------------------------------------------------------------

    def visit_border(self, node, visited_children) -> Border:
        _, first, rest, _ = visited_children
        options = dict([first, *(option for _, option in repeated(rest))])
        return Border(**options)

    def visit_border_option(self, node, visited_children) -> tuple:
        return visited_children[0]

    def visit_border_color(self, node, visited_children) -> tuple:
        paren = node.children[2]
        inner = paren.text[1:-1]
        if inner.strip().startswith("#") or inner.strip().lower().startswith("color"):
            # color(#ff0000) or color(color(...)): the parenthesized text is the spec
            return "color", self._delegate(parse_color, paren, offset=1, text=inner)
        # color(r, g, b): the option is itself a color call
        return "color", self._delegate(parse_color, node)

    def visit_border_width(self, node, visited_children) -> tuple:
        return "width", visited_children[4]

    def visit_border_radius(self, node, visited_children) -> tuple:
        (radius,) = visited_children[4]
        if isinstance(radius, float):
            radius = Radius.uniform(radius)
        return "radius", radius

    def visit_radius_four(self, node, visited_children) -> Radius:
        top_left, _, top_right, _, bottom_right, _, bottom_left = visited_children
        return Radius(
            top_left=top_left,
            top_right=top_right,
            bottom_right=bottom_right,
            bottom_left=bottom_left,
        )

    # --- keywords and scalars -----------------------------------------------

    def visit_text(self, node, visited_children) -> Text:
        return Text(value=visited_children[1])

    def visit_flag(self, node, visited_children) -> Flag:
        return Flag(value=visited_children[1])

    def visit_wrapping(self, node, visited_children) -> Wrapping:
        return Wrapping(mode=lookup_keyword(WRAPPING_KEYWORDS, node.children[1].text))

    def visit_shaping(self, node, visited_children) -> Shaping:
        return Shaping(mode=lookup_keyword(SHAPING_KEYWORDS, node.children[1].text))

    def visit_direction(self, node, visited_children) -> Direction:
        return Direction(axis=lookup_keyword(DIRECTION_KEYWORDS, node.children[1].text))


# =============================================================================
# AttributeParser
# =============================================================================

BLOCK_RULES = r"""
    attribute_list  = ws (attribute (comma attribute)*)? (ws ",")? ws
    attribute       = attribute_key ws ":" ws attribute_value
    attribute_key   = ~r"[A-Za-z_][A-Za-z0-9_-]*"
    attribute_value = (!value_end value_piece)+
    value_end       = comma (attribute_key ws ":" / !~r"[\s\S]")
    value_piece     = string / paren_span / brace_span / bracket_span / comment / ~r'[^,()\[\]{}"/]+' / ","
    comment         = ~r"//[^\n]*"
"""

_shapes = ShapeParser()


class AttributeParser(SpanParser):
    """Parses the text of an attribute block into an AttributeSet.

    Args:
        policy: Duplicate key policy. Defaults to SNOWMARK_DUPLICATE_KEYS,
            read on every parse.
    """

    grammar = build_grammar(BLOCK_RULES, LEXICAL_RULES, SPAN_RULES)
    default_rule = "attribute_list"

    def __init__(self, policy: DuplicateKeyPolicy | str | None = None):
        self.policy = policy

    def syntax_error(self, text: str, exc: ParseError) -> MarkupError:
        return UnexpectedToken(exc.pos, text, expected="'key: value'")

    def visit_attribute_list(self, node, visited_children) -> AttributeSet:
        _, attributes, _, _ = visited_children
        attributes = optional(attributes)
        parsed = []
        if attributes:
            first, rest = attributes
            parsed = [first, *(attribute for _, attribute in repeated(rest))]

        policy = get_duplicate_key_policy(self.policy)
        values: dict[AttributeKind, LiteralValue | Deferred] = {}
        for kind, value, key_node in parsed:
            if kind in values:
                if policy == DuplicateKeyPolicy.REJECT:
                    raise DuplicateKey(key_node.text, key_node.start, key_node.full_text)
                logger.warning("duplicate attribute '%s'; later value wins", key_node.text)
            values[kind] = value
        return AttributeSet.from_mapping(values)

    def visit_attribute(self, node, visited_children) -> tuple:
        key_node, _, _, _, value_node = visited_children
        kind = resolve_attribute_kind(key_node.text)
        if kind is None:
            raise UnknownAttributeKey(key_node.text, key_node.start, key_node.full_text)
        value = self._parse_value(kind, key_node.text, value_node)
        logger.debug("attribute %s = %s", kind.value, value.type)
        return kind, value, key_node

    def visit_attribute_key(self, node, visited_children):
        return node

    def visit_attribute_value(self, node, visited_children):
        return node

    def _parse_value(self, kind: AttributeKind, key: str, value_node) -> LiteralValue | Deferred:
        text = value_node.text
        try:
            if looks_like_module(text):
                return Deferred(kind=kind, module=parse_module(text))
            shape = get_attribute_meta(kind).shape
            return LiteralValue(value=_shapes.parse_shape(shape, text))
        except InvalidValueShape as exc:
            raise InvalidValueShape(
                key, text.strip(), value_node.start, value_node.full_text
            ) from exc
        except MarkupError as exc:
            exc.relocate(value_node.start, value_node.full_text)
            raise


_parser = AttributeParser()


def parse_attributes(text: str, policy: DuplicateKeyPolicy | str | None = None) -> AttributeSet:
    """Parse the text of an attribute block (without the angle brackets).

    Raises:
        UnknownAttributeKey: A key is not an attribute kind or synonym.
        InvalidValueShape: A value does not fit its kind.
        DuplicateKey: A key repeats and the policy is "reject".
    """
    parser = _parser if policy is None else AttributeParser(policy)
    return parser.parse(text)


__all__ = [
    "ATTRIBUTE_ARGUMENT",
    "Attribute",
    "AttributeParser",
    "AttributeSet",
    "AttributeValue",
    "Deferred",
    "LiteralValue",
    "ShapeParser",
    "parse_attributes",
]
