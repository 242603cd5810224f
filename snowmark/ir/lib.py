"""Document tree models.

This module defines the typed tree the MarkupParser produces and the
rendering layer consumes. Nodes are immutable pydantic models; the tree is
strictly hierarchical, so a node never refers back to its parent. Each node
carries a literal `kind` tag, which makes a Document round-trip through
JSON without losing which node type it was.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from snowmark.attribute import AttributeSet
from snowmark.module import ModuleRef
from snowmark.schema import NodeKind
from snowmark.value import Value

LABEL_PATTERN = r"^[A-Za-z][A-Za-z-]*$"


class NodeBase(BaseModel):
    """Fields shared by every node kind.

    Attributes:
        id: Identifier written as `#label`, used by the rendering layer for
            lookup and keying. Opaque to the parser.
        attributes: The node's attribute block, empty when none was written.
    """

    id: str | None = Field(None, pattern=LABEL_PATTERN, description="Identifier without '#'")
    attributes: AttributeSet = Field(default_factory=AttributeSet, description="Attribute block")

    model_config = {"frozen": True}

    @property
    def node_kind(self) -> NodeKind:
        return NodeKind(self.kind)

    def child_nodes(self) -> tuple["Node", ...]:
        """Direct children that are nodes, in document order."""
        return ()


class Container(NodeBase):
    """Wraps at most one child."""

    kind: Literal["container"] = "container"
    child: "Node | None" = Field(None, description="The single child, if any")

    def child_nodes(self) -> tuple["Node", ...]:
        return (self.child,) if self.child is not None else ()


class LayoutBase(NodeBase):
    children: tuple["Node", ...] = Field(..., min_length=1, description="Children in order")

    def child_nodes(self) -> tuple["Node", ...]:
        return self.children


class Row(LayoutBase):
    kind: Literal["row"] = "row"


class Column(LayoutBase):
    kind: Literal["column"] = "column"


class Stack(LayoutBase):
    kind: Literal["stack"] = "stack"


class Widget(NodeBase):
    """A leaf element: a label and optional content.

    Content is a literal value, a module node, or one nested node.

    Example:
        >>> widget = Widget(label="text", content=Value.from_string("Hello"))
        >>> widget.content.as_string()
        'Hello'
    """

    kind: Literal["widget"] = "widget"
    label: str = Field(..., pattern=LABEL_PATTERN, description="Widget label")
    content: "Node | Value | None" = Field(None, description="Widget content")

    def child_nodes(self) -> tuple["Node", ...]:
        if self.content is None or isinstance(self.content, Value):
            return ()
        return (self.content,)


class Module(NodeBase):
    """A module invocation standing in for a node or value."""

    kind: Literal["module"] = "module"
    module: ModuleRef


Node = Annotated[
    Union[Container, Row, Column, Stack, Widget, Module],
    Field(discriminator="kind"),
]

LAYOUT_TYPES: dict[NodeKind, type[LayoutBase]] = {
    NodeKind.ROW: Row,
    NodeKind.COLUMN: Column,
    NodeKind.STACK: Stack,
}

for _model in (NodeBase, Container, LayoutBase, Row, Column, Stack, Widget, Module):
    _model.model_rebuild()


class Document(BaseModel):
    """A parsed markup document."""

    root: Node

    model_config = {"frozen": True}


def export_json_schema() -> dict:
    """Export the Document JSON Schema.

    Returns:
        dict: JSON Schema of the tree a rendering layer receives.

    Example:
        >>> schema = export_json_schema()
        >>> schema["title"]
        'Document'
    """
    return Document.model_json_schema()


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
