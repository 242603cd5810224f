"""Unit tests for tree traversal and comparison."""

import pytest

from snowmark.parser import parse_markup
from snowmark.value import Value

from .lib import (
    NodeComparison,
    attributes_hash,
    collect_modules,
    compare,
    content_hash,
    find_by_id,
    node_count,
    tree_depth,
    walk,
)

SOURCE = """
column #root <background: themer!{mode: "dark"}> [
    text #title ("Title"),
    row [ icon(file!("a.svg")), card({ button #ok ("OK") }) ],
    qr!{data: "x"}
]
"""


@pytest.fixture
def document():
    """A small document with modules at every level."""
    return parse_markup(SOURCE)


class TestTraversal:
    """Tests for walk and friends."""

    @pytest.mark.unit
    def test_walk_pre_order(self, document):
        """Parents are yielded before their children, in document order."""
        kinds = [node.kind for node in walk(document)]
        assert kinds == [
            "column", "widget", "row", "widget", "module", "widget", "container", "widget", "module"
        ]

    @pytest.mark.unit
    def test_find_by_id(self, document):
        """Nodes are found by id anywhere in the tree."""
        assert find_by_id(document, "ok").content == Value.from_string("OK")
        assert find_by_id(document, "missing") is None

    @pytest.mark.unit
    def test_node_count_and_depth(self, document):
        """Counting and depth include nested widget content."""
        assert node_count(document) == 9
        # column > row > card > container > button
        assert tree_depth(document) == 5
        assert tree_depth(parse_markup("a()")) == 1

    @pytest.mark.unit
    def test_collect_modules_order_and_synthesized_argument(self, document):
        """Modules are collected in walk order with the attribute kind added."""
        modules = collect_modules(document)
        # module content of a widget is a node in the tree
        assert [module.name for module in modules] == ["themer", "file", "qr"]
        assert modules[0].get("_attribute") == Value.from_string("background")


class TestCompare:
    """Tests for hashing and NodeComparison."""

    @pytest.mark.unit
    def test_equal(self):
        """Identical nodes compare equal."""
        a = parse_markup('text <label: "foo"> ("foo")').root
        b = parse_markup('text<label:"foo">("foo")').root
        assert compare(a, b) == NodeComparison.EQUAL
        assert content_hash(a) == content_hash(b)

    @pytest.mark.unit
    def test_data_differ(self):
        """A change in content alone is a data difference."""
        a = parse_markup('text ("foo")').root
        b = parse_markup('text ("bar")').root
        assert compare(a, b) == NodeComparison.DATA_DIFFER

    @pytest.mark.unit
    def test_attribute_differ(self):
        """A change in attributes alone is an attribute difference."""
        a = parse_markup('text <label: "foo"> ("foo")').root
        b = parse_markup('text <label: "bar"> ("foo")').root
        assert compare(a, b) == NodeComparison.ATTRIBUTE_DIFFER
        assert attributes_hash(a.attributes) != attributes_hash(b.attributes)

    @pytest.mark.unit
    def test_both_differ(self):
        """Changes in content and attributes are both reported."""
        a = parse_markup("a <clip: true> ()").root
        b = parse_markup("b <clip: false> ()").root
        assert compare(a, b) == NodeComparison.BOTH_DIFFER

    @pytest.mark.unit
    def test_children_do_not_count(self):
        """Child nodes do not affect the content hash."""
        a = parse_markup("row #r [ a() ]").root
        b = parse_markup("row #r [ b(), c() ]").root
        assert compare(a, b) == NodeComparison.EQUAL

    @pytest.mark.unit
    def test_id_and_kind_count(self):
        """Id and node kind are part of the content hash."""
        assert compare(parse_markup("row #a [ x() ]"), parse_markup("row #b [ x() ]")) == NodeComparison.DATA_DIFFER
        assert compare(parse_markup("row [ x() ]"), parse_markup("col [ x() ]")) == NodeComparison.DATA_DIFFER

    @pytest.mark.unit
    def test_nested_widget_content_is_a_child(self):
        """A nested node in widget content hashes as its kind only."""
        a = parse_markup("card({ a() })").root
        b = parse_markup("card({ b() })").root
        assert compare(a, b) == NodeComparison.EQUAL
        assert compare(a, parse_markup("card(row [ a() ])").root) == NodeComparison.DATA_DIFFER
