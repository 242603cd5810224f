"""Traversal, hashing and comparison of document trees.

These helpers are for consumers of a parsed Document: a reload layer uses
the hashes and `compare()` to decide which nodes to rebuild, and a resolver
uses `collect_modules()` to find every invocation it has to schedule.
"""

import hashlib
import json
from enum import Enum
from typing import Iterator

from snowmark.attribute import AttributeSet
from snowmark.ir import Document, Module, Widget
from snowmark.module import ModuleRef


class NodeComparison(str, Enum):
    """How two nodes differ, ignoring their children."""

    EQUAL = "equal"
    DATA_DIFFER = "data_differ"
    ATTRIBUTE_DIFFER = "attribute_differ"
    BOTH_DIFFER = "both_differ"


def _root(node):
    return node.root if isinstance(node, Document) else node


def walk(node) -> Iterator:
    """Yield every node depth-first, parents before children.

    Args:
        node: A Document or any node.
    """
    node = _root(node)
    yield node
    for child in node.child_nodes():
        yield from walk(child)


def find_by_id(node, node_id: str):
    """Return the first node with the given id, or None."""
    return next((n for n in walk(node) if n.id == node_id), None)


def node_count(node) -> int:
    """Count nodes in a tree, the root included."""
    return sum(1 for _ in walk(node))


def tree_depth(node) -> int:
    """Calculate the depth of a tree.

    Returns:
        Maximum depth (root = 1).
    """
    node = _root(node)
    children = node.child_nodes()
    if not children:
        return 1
    return 1 + max(tree_depth(child) for child in children)


def collect_modules(node) -> list[ModuleRef]:
    """Collect every module invocation in document order.

    Module nodes contribute their reference as written. Deferred attribute
    values contribute `resolver_ref()`, which carries the attribute kind.
    """
    modules: list[ModuleRef] = []
    for n in walk(node):
        modules.extend(deferred.resolver_ref() for deferred in n.attributes.deferred())
        if isinstance(n, Module):
            modules.append(n.module)
    return modules


def _digest(data) -> str:
    payload = json.dumps(data, sort_keys=True, separators=(",", ":"))
    return hashlib.md5(payload.encode()).hexdigest()


def content_hash(node) -> str:
    """Stable digest of a node's own data: kind, id and content.

    Attributes and child nodes are excluded, so a change in either leaves
    the hash unchanged.
    """
    node = _root(node)
    data = node.model_dump(mode="json", exclude={"attributes", "child", "children"})
    if isinstance(node, Widget) and node.child_nodes():
        # a nested node is a child; only its kind counts as content
        data["content"] = {"kind": node.content.kind}
    return _digest(data)


def attributes_hash(attributes: AttributeSet) -> str:
    """Stable digest of an attribute set; order of entries counts."""
    return _digest(attributes.model_dump(mode="json"))


def compare(a, b) -> NodeComparison:
    """Compare two nodes, ignoring their children.

    Example:
        >>> compare(parse_markup("a()").root, parse_markup("a <clip: true> ()").root)
        <NodeComparison.ATTRIBUTE_DIFFER: 'attribute_differ'>
    """
    a, b = _root(a), _root(b)
    data_equal = content_hash(a) == content_hash(b)
    attributes_equal = attributes_hash(a.attributes) == attributes_hash(b.attributes)
    if data_equal and attributes_equal:
        return NodeComparison.EQUAL
    if data_equal:
        return NodeComparison.ATTRIBUTE_DIFFER
    if attributes_equal:
        return NodeComparison.DATA_DIFFER
    return NodeComparison.BOTH_DIFFER


__all__ = [
    "NodeComparison",
    "attributes_hash",
    "collect_modules",
    "compare",
    "content_hash",
    "find_by_id",
    "node_count",
    "tree_depth",
    "walk",
]
