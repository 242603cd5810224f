"""Canonical markup output."""

from .lib import (
    MarkupFormatter,
    format_attributes,
    format_color,
    format_gradient,
    format_module,
    format_typed,
    format_value,
    to_markup,
)

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
