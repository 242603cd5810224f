"""Authoritative vocabulary: enumerations and keyword alias tables."""

from .lib import (
    ATTRIBUTE_REGISTRY,
    BOOLEAN_KEYWORDS,
    DIRECTION_KEYWORDS,
    HORIZONTAL_KEYWORDS,
    LAYOUT_KEYWORDS,
    LENGTH_KEYWORDS,
    SHAPING_KEYWORDS,
    SIDE_KEYWORDS,
    VERTICAL_KEYWORDS,
    WRAPPING_KEYWORDS,
    Alignment,
    AttributeKind,
    AttributeMeta,
    Axis,
    LengthMode,
    NodeKind,
    ShapingMode,
    Side,
    ValueShape,
    WrapMode,
    canonical_keyword,
    get_attribute_meta,
    get_kinds_by_shape,
    resolve_attribute_kind,
)

__all__ = [
    "NodeKind",
    "AttributeKind",
    "ValueShape",
    "Alignment",
    "Side",
    "LengthMode",
    "Axis",
    "WrapMode",
    "ShapingMode",
    "AttributeMeta",
    "ATTRIBUTE_REGISTRY",
    "LAYOUT_KEYWORDS",
    "HORIZONTAL_KEYWORDS",
    "VERTICAL_KEYWORDS",
    "SIDE_KEYWORDS",
    "LENGTH_KEYWORDS",
    "WRAPPING_KEYWORDS",
    "SHAPING_KEYWORDS",
    "DIRECTION_KEYWORDS",
    "BOOLEAN_KEYWORDS",
    "get_attribute_meta",
    "resolve_attribute_kind",
    "get_kinds_by_shape",
    "canonical_keyword",
]
