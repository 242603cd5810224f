"""Structural document grammar."""

from .lib import KEYWORD_RULES, MARKUP_RULES, MarkupParser, find_unbalanced, parse_markup

__all__ = ["KEYWORD_RULES", "MARKUP_RULES", "MarkupParser", "find_unbalanced", "parse_markup"]
