"""Document tree models."""

from .lib import (
    LABEL_PATTERN,
    LAYOUT_TYPES,
    Column,
    Container,
    Document,
    LayoutBase,
    Module,
    Node,
    NodeBase,
    Row,
    Stack,
    Widget,
    export_json_schema,
)

__all__ = [
    "LABEL_PATTERN",
    "LAYOUT_TYPES",
    "NodeBase",
    "Container",
    "LayoutBase",
    "Row",
    "Column",
    "Stack",
    "Widget",
    "Module",
    "Node",
    "Document",
    "export_json_schema",
]
