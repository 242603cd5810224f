"""snowmark: staged parser for a hierarchical UI markup language."""

from snowmark.attribute import AttributeSet, Deferred, LiteralValue, parse_attributes
from snowmark.canonical import (
    format_attributes,
    format_color,
    format_gradient,
    format_module,
    format_value,
    to_markup,
)
from snowmark.color import Color, parse_color
from snowmark.config import DuplicateKeyPolicy
from snowmark.core.log import get_logger, setup_logging
from snowmark.errors import MarkupError
from snowmark.gradient import Gradient, Stop, parse_gradient
from snowmark.ir import Column, Container, Document, Module, Row, Stack, Widget, export_json_schema
from snowmark.module import ModuleRef, parse_module
from snowmark.parser import parse_markup
from snowmark.tree import NodeComparison, collect_modules, compare, walk
from snowmark.validation import ValidationIssue, is_valid, validate_document
from snowmark.value import Value, parse_value

__all__ = [
    # Parsing
    "parse_markup",
    "parse_attributes",
    "parse_value",
    "parse_color",
    "parse_gradient",
    "parse_module",
    "MarkupError",
    "DuplicateKeyPolicy",
    # Tree
    "Document",
    "Container",
    "Row",
    "Column",
    "Stack",
    "Widget",
    "Module",
    "export_json_schema",
    # Values
    "AttributeSet",
    "LiteralValue",
    "Deferred",
    "Value",
    "Color",
    "Gradient",
    "Stop",
    "ModuleRef",
    # Output
    "to_markup",
    "format_attributes",
    "format_value",
    "format_color",
    "format_gradient",
    "format_module",
    # Traversal and validation
    "walk",
    "collect_modules",
    "compare",
    "NodeComparison",
    "validate_document",
    "is_valid",
    "ValidationIssue",
    # Logging
    "get_logger",
    "setup_logging",
]
