"""Traversal, hashing and comparison of document trees."""

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
