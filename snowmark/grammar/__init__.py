"""Shared grammar fragments and the parsimonious stage base."""

from .lib import (
    FLOAT_PATTERN,
    LEXICAL_RULES,
    SPAN_RULES,
    SpanParser,
    build_grammar,
    decode_string,
    encode_string,
    format_float,
    keyword_pattern,
    lookup_keyword,
    nesting_depth,
    optional,
    repeated,
)

__all__ = [
    "FLOAT_PATTERN",
    "LEXICAL_RULES",
    "SPAN_RULES",
    "SpanParser",
    "build_grammar",
    "keyword_pattern",
    "lookup_keyword",
    "nesting_depth",
    "optional",
    "repeated",
    "decode_string",
    "encode_string",
    "format_float",
]
