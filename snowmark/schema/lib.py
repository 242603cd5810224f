"""Authoritative vocabulary for the markup language.

Single source of truth for every closed enumeration and keyword alias the
grammars accept:
- Attribute kinds, their accepted value shape and key synonyms
- Layout keywords (row/column/stack and their symbolic forms)
- Alignment, side, length, wrapping, shaping and direction keywords

Grammar rules are generated from these tables, and visitors map matched text
back through them, so adding a synonym is a one-line change here.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class NodeKind(str, Enum):
    """Structural document node kinds."""

    CONTAINER = "container"
    ROW = "row"
    COLUMN = "column"
    STACK = "stack"
    WIDGET = "widget"
    MODULE = "module"


class AttributeKind(str, Enum):
    """Closed set of attribute keys."""

    PADDING = "padding"
    WIDTH = "width"
    HEIGHT = "height"
    MAX_WIDTH = "max-width"
    MAX_HEIGHT = "max-height"
    SIZE = "size"
    ALIGN = "align"
    ALIGN_X = "align-x"
    ALIGN_Y = "align-y"
    TEXT_COLOR = "text-color"
    BACKGROUND = "background"
    BORDER = "border"
    SHADOW = "shadow"
    SPACING = "spacing"
    SELECTED = "selected"
    CELL_SIZE = "cell-size"
    LABEL = "label"
    CLIP = "clip"
    TOGGLED = "toggled"
    WRAPPING = "wrapping"
    SHAPING = "shaping"
    DIRECTION = "direction"


class ValueShape(str, Enum):
    """Literal shape families; each names a rule in the attribute grammar."""

    PADDING = "padding"
    LENGTH = "length"
    PIXELS = "pixels"
    ALIGN_X = "align_x"
    ALIGN_Y = "align_y"
    ALIGN = "align"
    COLOR = "color"
    BACKGROUND = "background"
    BORDER = "border"
    SHADOW = "shadow"
    TEXT = "text"
    FLAG = "flag"
    WRAPPING = "wrapping"
    SHAPING = "shaping"
    DIRECTION = "direction"


class Alignment(str, Enum):
    """Position along one axis."""

    START = "start"
    CENTER = "center"
    END = "end"


class Side(str, Enum):
    """Box sides used by padding and shadow option lists."""

    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"


class LengthMode(str, Enum):
    """One-axis sizing strategy."""

    FIXED = "fixed"
    FILL = "fill"
    FILL_PORTION = "fill-portion"
    SHRINK = "shrink"


class Axis(str, Enum):
    """Scroll direction."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    BOTH = "both"


class WrapMode(str, Enum):
    """Text wrapping strategy."""

    GLYPH = "glyph"
    WORD = "word"
    NONE = "none"
    EITHER = "either"


class ShapingMode(str, Enum):
    """Text shaping strategy."""

    BASIC = "basic"
    ADVANCED = "advanced"


@dataclass(frozen=True)
class AttributeMeta:
    """Metadata for one attribute kind.

    Attributes:
        kind: The attribute kind.
        shape: Literal shape accepted besides a module invocation.
        description: Human-readable description.
        aliases: Extra key spellings accepted besides the kind's value.
    """

    kind: AttributeKind
    shape: ValueShape
    description: str
    aliases: tuple[str, ...] = field(default_factory=tuple)

    @property
    def keys(self) -> tuple[str, ...]:
        return (self.kind.value, *self.aliases)


ATTRIBUTE_REGISTRY: dict[AttributeKind, AttributeMeta] = {
    # === LAYOUT ===
    AttributeKind.PADDING: AttributeMeta(
        kind=AttributeKind.PADDING,
        shape=ValueShape.PADDING,
        description="Inner spacing: uniform, vertical/horizontal, four sides or side options",
    ),
    AttributeKind.WIDTH: AttributeMeta(
        kind=AttributeKind.WIDTH,
        shape=ValueShape.LENGTH,
        description="Horizontal sizing strategy or fixed pixels",
    ),
    AttributeKind.HEIGHT: AttributeMeta(
        kind=AttributeKind.HEIGHT,
        shape=ValueShape.LENGTH,
        description="Vertical sizing strategy or fixed pixels",
    ),
    AttributeKind.MAX_WIDTH: AttributeMeta(
        kind=AttributeKind.MAX_WIDTH,
        shape=ValueShape.PIXELS,
        description="Upper bound on width in pixels",
    ),
    AttributeKind.MAX_HEIGHT: AttributeMeta(
        kind=AttributeKind.MAX_HEIGHT,
        shape=ValueShape.PIXELS,
        description="Upper bound on height in pixels",
    ),
    AttributeKind.SIZE: AttributeMeta(
        kind=AttributeKind.SIZE,
        shape=ValueShape.PIXELS,
        description="Text or icon size in pixels",
    ),
    AttributeKind.SPACING: AttributeMeta(
        kind=AttributeKind.SPACING,
        shape=ValueShape.PIXELS,
        description="Gap between children in pixels",
    ),
    AttributeKind.CELL_SIZE: AttributeMeta(
        kind=AttributeKind.CELL_SIZE,
        shape=ValueShape.PIXELS,
        description="Cell size of a generated code in pixels",
    ),
    # === ALIGNMENT ===
    AttributeKind.ALIGN: AttributeMeta(
        kind=AttributeKind.ALIGN,
        shape=ValueShape.ALIGN,
        description="Alignment on whichever axis the keyword names",
    ),
    AttributeKind.ALIGN_X: AttributeMeta(
        kind=AttributeKind.ALIGN_X,
        shape=ValueShape.ALIGN_X,
        description="Horizontal alignment of content",
    ),
    AttributeKind.ALIGN_Y: AttributeMeta(
        kind=AttributeKind.ALIGN_Y,
        shape=ValueShape.ALIGN_Y,
        description="Vertical alignment of content",
    ),
    # === STYLE ===
    AttributeKind.TEXT_COLOR: AttributeMeta(
        kind=AttributeKind.TEXT_COLOR,
        shape=ValueShape.COLOR,
        description="Foreground text color",
        aliases=("text-colour",),
    ),
    AttributeKind.BACKGROUND: AttributeMeta(
        kind=AttributeKind.BACKGROUND,
        shape=ValueShape.BACKGROUND,
        description="Background fill, a color or a gradient",
        aliases=("bg",),
    ),
    AttributeKind.BORDER: AttributeMeta(
        kind=AttributeKind.BORDER,
        shape=ValueShape.BORDER,
        description="Border color, width and corner radius options",
    ),
    AttributeKind.SHADOW: AttributeMeta(
        kind=AttributeKind.SHADOW,
        shape=ValueShape.SHADOW,
        description="Shadow offsets per side",
    ),
    # === CONTENT ===
    AttributeKind.SELECTED: AttributeMeta(
        kind=AttributeKind.SELECTED,
        shape=ValueShape.TEXT,
        description="Selected entry of a pick list",
    ),
    AttributeKind.LABEL: AttributeMeta(
        kind=AttributeKind.LABEL,
        shape=ValueShape.TEXT,
        description="Caption shown next to a control",
    ),
    AttributeKind.CLIP: AttributeMeta(
        kind=AttributeKind.CLIP,
        shape=ValueShape.FLAG,
        description="Whether overflowing content is clipped",
    ),
    AttributeKind.TOGGLED: AttributeMeta(
        kind=AttributeKind.TOGGLED,
        shape=ValueShape.FLAG,
        description="Initial state of a toggle",
    ),
    # === TEXT ===
    AttributeKind.WRAPPING: AttributeMeta(
        kind=AttributeKind.WRAPPING,
        shape=ValueShape.WRAPPING,
        description="Text wrapping strategy",
    ),
    AttributeKind.SHAPING: AttributeMeta(
        kind=AttributeKind.SHAPING,
        shape=ValueShape.SHAPING,
        description="Text shaping strategy",
    ),
    AttributeKind.DIRECTION: AttributeMeta(
        kind=AttributeKind.DIRECTION,
        shape=ValueShape.DIRECTION,
        description="Scroll direction",
    ),
}


# =============================================================================
# Keyword alias tables
# =============================================================================

LAYOUT_KEYWORDS: dict[NodeKind, tuple[str, ...]] = {
    NodeKind.ROW: ("row", "-"),
    NodeKind.COLUMN: ("column", "col", "|"),
    NodeKind.STACK: ("stack", "^"),
}

HORIZONTAL_KEYWORDS: dict[Alignment, tuple[str, ...]] = {
    Alignment.START: ("left", "l"),
    Alignment.CENTER: ("center", "centre", "c"),
    Alignment.END: ("right", "r"),
}

VERTICAL_KEYWORDS: dict[Alignment, tuple[str, ...]] = {
    Alignment.START: ("top", "t"),
    Alignment.CENTER: ("center", "centre", "c"),
    Alignment.END: ("bottom", "b"),
}

SIDE_KEYWORDS: dict[Side, tuple[str, ...]] = {side: (side.value,) for side in Side}

LENGTH_KEYWORDS: dict[LengthMode, tuple[str, ...]] = {
    LengthMode.FILL: ("fill",),
    LengthMode.SHRINK: ("shrink",),
}

WRAPPING_KEYWORDS: dict[WrapMode, tuple[str, ...]] = {
    WrapMode.GLYPH: ("glyph",),
    WrapMode.WORD: ("word",),
    WrapMode.NONE: ("none",),
    WrapMode.EITHER: ("either", "both"),
}

SHAPING_KEYWORDS: dict[ShapingMode, tuple[str, ...]] = {
    mode: (mode.value,) for mode in ShapingMode
}

DIRECTION_KEYWORDS: dict[Axis, tuple[str, ...]] = {axis: (axis.value,) for axis in Axis}

BOOLEAN_KEYWORDS: dict[bool, tuple[str, ...]] = {True: ("true",), False: ("false",)}


def get_attribute_meta(kind: AttributeKind) -> AttributeMeta:
    """Get metadata for an attribute kind.

    Raises:
        KeyError: If the kind is not registered.
    """
    return ATTRIBUTE_REGISTRY[kind]


def resolve_attribute_kind(key: str) -> AttributeKind | None:
    """Resolve an attribute key or synonym to its kind.

    Args:
        key: The key as written (case-insensitive).

    Returns:
        The AttributeKind, or None if the key is unknown.
    """
    key_lower = key.lower().strip()
    for meta in ATTRIBUTE_REGISTRY.values():
        if key_lower in meta.keys:
            return meta.kind
    return None


def get_kinds_by_shape(shape: ValueShape) -> list[AttributeKind]:
    """Get all attribute kinds sharing a literal shape."""
    return [meta.kind for meta in ATTRIBUTE_REGISTRY.values() if meta.shape == shape]


def canonical_keyword(table: dict[Any, tuple[str, ...]], key: Any) -> str:
    """The spelling used when serializing a table entry: its first alias."""
    return table[key][0]


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
