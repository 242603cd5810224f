"""Generic literal values and their parser."""

from .lib import INTEGER_MAX, VALUE_RULES, Value, ValueKind, ValueParser, parse_value

__all__ = [
    "INTEGER_MAX",
    "VALUE_RULES",
    "Value",
    "ValueKind",
    "ValueParser",
    "parse_value",
]
