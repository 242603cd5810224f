"""Unit tests for the document tree models."""

import pytest
from pydantic import ValidationError

from snowmark.attribute import parse_attributes
from snowmark.module import parse_module
from snowmark.schema import NodeKind
from snowmark.value import Value

from .lib import Column, Container, Document, Module, Row, Stack, Widget, export_json_schema


def text_widget(content: str) -> Widget:
    return Widget(label="text", content=Value.from_string(content))


class TestNodes:
    """Tests for node construction and invariants."""

    @pytest.mark.unit
    def test_layouts_require_children(self):
        """Rows, columns and stacks reject an empty child tuple."""
        for model in (Row, Column, Stack):
            with pytest.raises(ValidationError):
                model(children=())

    @pytest.mark.unit
    def test_kind_tags(self):
        """Each node type carries its own kind tag."""
        row = Row(children=(text_widget("a"),))
        assert row.kind == "row"
        assert row.node_kind == NodeKind.ROW
        assert Module(module=parse_module("themer!{}")).node_kind == NodeKind.MODULE

    @pytest.mark.unit
    @pytest.mark.parametrize("label", ["", "9lives", "under_score", "-lead"])
    def test_label_pattern(self, label):
        """Widget labels must start with a letter."""
        with pytest.raises(ValidationError):
            Widget(label=label)

    @pytest.mark.unit
    def test_id_pattern(self):
        """Ids follow the label pattern."""
        assert Widget(label="text", id="main-title").id == "main-title"
        with pytest.raises(ValidationError):
            Widget(label="text", id="#main")

    @pytest.mark.unit
    def test_nodes_are_frozen(self):
        """Nodes cannot be mutated after construction."""
        widget = text_widget("a")
        with pytest.raises(ValidationError):
            widget.label = "button"

    @pytest.mark.unit
    def test_default_attributes_are_empty(self):
        """Nodes default to an empty attribute set."""
        assert len(Container().attributes) == 0


class TestChildNodes:
    """Tests for child_nodes()."""

    @pytest.mark.unit
    def test_container(self):
        """Containers hold at most one child."""
        assert Container().child_nodes() == ()
        child = text_widget("a")
        assert Container(child=child).child_nodes() == (child,)

    @pytest.mark.unit
    def test_widget_value_content_is_not_a_child(self):
        """Literal widget content is not a child node."""
        assert text_widget("a").child_nodes() == ()

    @pytest.mark.unit
    def test_widget_nested_node(self):
        """A nested node in widget content is a child."""
        inner = Container()
        assert Widget(label="button", content=inner).child_nodes() == (inner,)

    @pytest.mark.unit
    def test_layout_order(self):
        """Layout children keep their order."""
        a, b = text_widget("a"), text_widget("b")
        assert Column(children=(a, b)).child_nodes() == (a, b)


class TestDocument:
    """Tests for serialization."""

    @pytest.mark.unit
    def test_json_round_trip(self):
        """Documents survive a JSON round trip via the kind discriminator."""
        document = Document(
            root=Container(
                id="root",
                attributes=parse_attributes("padding: 5, background: themer!{}"),
                child=Row(
                    children=(
                        text_widget("hello"),
                        Widget(label="image", content=Module(module=parse_module('file!("a.png")'))),
                        Stack(children=(Widget(label="button", content=Container()),)),
                    )
                ),
            )
        )
        restored = Document.model_validate_json(document.model_dump_json())
        assert restored == document
        assert isinstance(restored.root.child.children[1].content, Module)
        assert isinstance(restored.root.child.children[0].content, Value)

    @pytest.mark.unit
    def test_export_json_schema(self):
        """The exported schema describes every node kind."""
        schema = export_json_schema()
        assert schema["title"] == "Document"
        assert "root" in schema["properties"]
