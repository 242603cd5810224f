"""Attribute blocks: typed values and the AttributeParser stage."""

from .lib import (
    ATTRIBUTE_ARGUMENT,
    Attribute,
    AttributeParser,
    AttributeSet,
    AttributeValue,
    Deferred,
    LiteralValue,
    ShapeParser,
    parse_attributes,
)
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
    "U32_MAX",
    "Background",
    "Border",
    "Direction",
    "Flag",
    "HorizontalAlign",
    "Length",
    "Padding",
    "Pixels",
    "Radius",
    "Shadow",
    "Shaping",
    "Text",
    "TypedValue",
    "VerticalAlign",
    "Wrapping",
]
