"""Canonical markup output.

Formats typed values and document trees back into markup text. The output
is canonical rather than a reproduction of the source: floats always carry
a decimal point, colors use the normalized `color(r, g, b, a)` form,
padding lists all four sides, and keys and keywords use their primary
spelling. Parsing canonical output yields the same typed value again.

Example output:
    ```
    column #settings <padding: 10.0, 10.0, 10.0, 10.0> [
      text ("Settings"),
      button <width: fill> ("Save")
    ]
    ```
"""

from snowmark.attribute import (
    AttributeSet,
    Background,
    Border,
    Deferred,
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
    VerticalAlign,
    Wrapping,
)
from snowmark.color import Color
from snowmark.gradient import Gradient
from snowmark.grammar import encode_string, format_float
from snowmark.ir import Container, Document, LayoutBase, Module, Widget
from snowmark.module import POSITIONAL, ModuleRef
from snowmark.schema import (
    HORIZONTAL_KEYWORDS,
    LAYOUT_KEYWORDS,
    VERTICAL_KEYWORDS,
    WRAPPING_KEYWORDS,
    LengthMode,
    canonical_keyword,
)
from snowmark.value import Value, ValueKind


def format_value(value: Value) -> str:
    """Format a literal value."""
    if value.kind == ValueKind.STRING:
        return encode_string(value.data)
    if value.kind == ValueKind.NUMBER:
        return format_float(value.data)
    if value.kind == ValueKind.INTEGER:
        return str(value.data)
    if value.kind == ValueKind.BOOLEAN:
        return "true" if value.data else "false"
    if value.kind == ValueKind.NULL:
        return "null"
    return "[" + ", ".join(format_value(item) for item in value.data) + "]"


def format_color(color: Color) -> str:
    """Format a color in the normalized functional form."""
    channels = ", ".join(format_float(channel) for channel in (color.r, color.g, color.b, color.a))
    return f"color({channels})"


def format_gradient(gradient: Gradient) -> str:
    stops = ", ".join(
        f"{format_color(stop.color)}@{format_float(stop.position)}" for stop in gradient.stops
    )
    return f"gradient({format_float(gradient.angle)}, [{stops}])"


def format_module(module: ModuleRef) -> str:
    """Format a module invocation.

    A lone positional argument uses the `name!(value)` shorthand; anything
    else uses the braced form.

    Raises:
        ValueError: A positional argument is mixed with named ones.
    """
    if len(module.arguments) == 1 and module.arguments[0].name == POSITIONAL:
        return f"{module.name}!({format_value(module.arguments[0].value)})"
    if module.has(POSITIONAL):
        raise ValueError(f"module '{module.name}' mixes positional and named arguments")
    arguments = ", ".join(
        f"{argument.name}: {format_value(argument.value)}" for argument in module.arguments
    )
    return f"{module.name}!{{{arguments}}}"


def _floats(*values: float) -> str:
    return ", ".join(format_float(value) for value in values)


def format_typed(value) -> str:
    """Format a typed attribute value in the shape its kind parses."""
    if isinstance(value, Padding):
        return _floats(value.top, value.right, value.bottom, value.left)
    if isinstance(value, Length):
        if value.mode == LengthMode.FIXED:
            return f"fixed({format_float(value.pixels)})"
        if value.mode == LengthMode.FILL_PORTION:
            return f"fill-portion({value.portion})"
        return value.mode.value
    if isinstance(value, Pixels):
        return format_float(value.value)
    if isinstance(value, HorizontalAlign):
        return canonical_keyword(HORIZONTAL_KEYWORDS, value.align)
    if isinstance(value, VerticalAlign):
        return canonical_keyword(VERTICAL_KEYWORDS, value.align)
    if isinstance(value, Color):
        return format_color(value)
    if isinstance(value, Background):
        if isinstance(value.fill, Gradient):
            return format_gradient(value.fill)
        return format_color(value.fill)
    if isinstance(value, Border):
        return _format_border(value)
    if isinstance(value, Shadow):
        return (
            f"top({format_float(value.top)}), bottom({format_float(value.bottom)}), "
            f"left({format_float(value.left)}), right({format_float(value.right)})"
        )
    if isinstance(value, Direction):
        return value.axis.value
    if isinstance(value, Wrapping):
        return canonical_keyword(WRAPPING_KEYWORDS, value.mode)
    if isinstance(value, Shaping):
        return value.mode.value
    if isinstance(value, Flag):
        return "true" if value.value else "false"
    if isinstance(value, Text):
        return encode_string(value.value)
    raise TypeError(f"not a typed attribute value: {type(value).__name__}")


def _format_border(border: Border) -> str:
    options = []
    if border.color is not None:
        # `color(r, g, b, a)` is itself the option
        options.append(format_color(border.color))
    if border.width is not None:
        options.append(f"width({format_float(border.width)})")
    if border.radius != Radius() or not options:
        options.append(f"radius({_floats(*border.radius.corners)})")
    return ", ".join(options)


def format_attributes(attributes: AttributeSet) -> str:
    """Format an attribute block body (without angle brackets)."""
    entries = []
    for kind, value in attributes.items():
        if isinstance(value, Deferred):
            text = format_module(value.module)
        else:
            text = format_typed(value.value)
        entries.append(f"{kind.value}: {text}")
    return ", ".join(entries)


class MarkupFormatter:
    """Formats a document tree as canonical markup.

    Layout children go on their own lines, indented by `indent` spaces per
    level. Widgets and modules stay on one line.
    """

    def __init__(self, indent: int = 2):
        self.indent = indent

    def format(self, node) -> str:
        if isinstance(node, Document):
            node = node.root
        return self._format_node(node, 0)

    def _format_node(self, node, depth: int) -> str:
        header = self._header(node)
        if isinstance(node, Module):
            return format_module(node.module)
        if isinstance(node, Widget):
            return f"{node.label}{header} ({self._format_content(node.content, depth)})"
        if isinstance(node, Container):
            if node.child is None:
                return f"{{{header} }}" if header else "{}"
            child = self._format_node(node.child, depth + 1)
            return f"{{{header}\n{self._pad(depth + 1)}{child}\n{self._pad(depth)}}}"
        if isinstance(node, LayoutBase):
            keyword = LAYOUT_KEYWORDS[node.node_kind][0]
            children = f",\n{self._pad(depth + 1)}".join(
                self._format_node(child, depth + 1) for child in node.children
            )
            return f"{keyword}{header} [\n{self._pad(depth + 1)}{children}\n{self._pad(depth)}]"
        raise TypeError(f"not a document node: {type(node).__name__}")

    def _format_content(self, content, depth: int) -> str:
        if content is None:
            return ""
        if isinstance(content, Value):
            return format_value(content)
        return self._format_node(content, depth)

    def _header(self, node) -> str:
        parts = []
        if node.id is not None:
            parts.append(f"#{node.id}")
        if len(node.attributes):
            parts.append(f"<{format_attributes(node.attributes)}>")
        return "".join(f" {part}" for part in parts)

    def _pad(self, depth: int) -> str:
        return " " * (self.indent * depth)


def to_markup(node, indent: int = 2) -> str:
    """Format a Document or node as canonical markup text."""
    return MarkupFormatter(indent).format(node)


__all__ = [
    "MarkupFormatter",
    "format_attributes",
    "format_color",
    "format_gradient",
    "format_module",
    "format_typed",
    "format_value",
    "to_markup",
]
