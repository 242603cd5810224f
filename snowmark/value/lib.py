"""Generic literal values and the ValueParser stage.

Values are what module arguments and widget content hold: strings, numbers,
integers, booleans, null and arbitrarily nested arrays of those.

Example:
    >>> parse_value('[1, 2.5, "three", [true, null]]').as_array()[1]
    Value(kind=<ValueKind.NUMBER: 'number'>, data=2.5)
"""

import math
import re
from enum import Enum
from typing import Any

from parsimonious.exceptions import IncompleteParseError, ParseError
from pydantic import BaseModel, Field, model_validator

from snowmark.core.log import get_logger
from snowmark.errors import (
    ConversionError,
    MalformedNumber,
    MalformedString,
    MalformedValue,
    MarkupError,
)
from snowmark.grammar import (
    FLOAT_PATTERN,
    LEXICAL_RULES,
    SpanParser,
    build_grammar,
    decode_string,
    keyword_pattern,
    lookup_keyword,
    repeated,
)
from snowmark.schema import BOOLEAN_KEYWORDS

logger = get_logger("snowmark.value")

INTEGER_MAX = 2**63 - 1


class ValueKind(str, Enum):
    """Kinds of literal value."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    NULL = "null"
    ARRAY = "array"


_PYTHON_TYPES: dict[ValueKind, tuple[type, ...]] = {
    ValueKind.STRING: (str,),
    ValueKind.NUMBER: (float,),
    ValueKind.INTEGER: (int,),
    ValueKind.BOOLEAN: (bool,),
    ValueKind.NULL: (type(None),),
    ValueKind.ARRAY: (tuple,),
}


class Value(BaseModel):
    """A literal value.

    Attributes:
        kind: Which literal this is.
        data: The Python payload; a tuple of Values for arrays.

    Example:
        >>> Value.from_integer(3).as_float()
        3.0
    """

    kind: ValueKind = Field(..., description="Literal kind")
    # bool precedes int so True is never read back as 1
    data: bool | int | float | str | tuple["Value", ...] | None = Field(
        None, description="Payload matching the kind"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_payload(self) -> "Value":
        expected = _PYTHON_TYPES[self.kind]
        if not isinstance(self.data, expected) or (
            self.kind == ValueKind.INTEGER and isinstance(self.data, bool)
        ):
            raise ValueError(f"{self.kind.value} value cannot hold {self.data!r}")
        return self

    # --- constructors -------------------------------------------------------

    @classmethod
    def from_string(cls, value: str) -> "Value":
        return cls(kind=ValueKind.STRING, data=value)

    @classmethod
    def from_float(cls, value: float) -> "Value":
        return cls(kind=ValueKind.NUMBER, data=float(value))

    @classmethod
    def from_integer(cls, value: int) -> "Value":
        return cls(kind=ValueKind.INTEGER, data=value)

    @classmethod
    def from_bool(cls, value: bool) -> "Value":
        return cls(kind=ValueKind.BOOLEAN, data=value)

    @classmethod
    def null(cls) -> "Value":
        return cls(kind=ValueKind.NULL)

    @classmethod
    def from_array(cls, items) -> "Value":
        return cls(kind=ValueKind.ARRAY, data=tuple(items))

    @classmethod
    def from_python(cls, obj: Any) -> "Value":
        """Build a Value from plain Python data (lists become arrays)."""
        if isinstance(obj, Value):
            return obj
        if obj is None:
            return cls.null()
        if isinstance(obj, bool):
            return cls.from_bool(obj)
        if isinstance(obj, int):
            return cls.from_integer(obj)
        if isinstance(obj, float):
            return cls.from_float(obj)
        if isinstance(obj, str):
            return cls.from_string(obj)
        if isinstance(obj, (list, tuple)):
            return cls.from_array(cls.from_python(item) for item in obj)
        raise TypeError(f"cannot convert {type(obj).__name__} to a Value")

    # --- accessors ----------------------------------------------------------

    def is_kind(self, kind: ValueKind) -> bool:
        return self.kind == kind

    def as_float(self) -> float:
        """Numeric payload as float; integers widen."""
        if self.kind == ValueKind.NUMBER:
            return self.data
        if self.kind == ValueKind.INTEGER:
            return float(self.data)
        raise ConversionError("number", self.kind.value)

    def as_integer(self) -> int:
        if self.kind != ValueKind.INTEGER:
            raise ConversionError("integer", self.kind.value)
        return self.data

    def as_bool(self) -> bool:
        if self.kind != ValueKind.BOOLEAN:
            raise ConversionError("boolean", self.kind.value)
        return self.data

    def as_string(self) -> str:
        if self.kind != ValueKind.STRING:
            raise ConversionError("string", self.kind.value)
        return self.data

    def as_array(self) -> tuple["Value", ...]:
        if self.kind != ValueKind.ARRAY:
            raise ConversionError("array", self.kind.value)
        return self.data

    def to_python(self) -> Any:
        """Plain Python data; arrays become lists."""
        if self.kind == ValueKind.ARRAY:
            return [item.to_python() for item in self.data]
        return self.data


# =============================================================================
# ValueParser
# =============================================================================

# Shared with grammars that embed literal values (module arguments, widget
# content); only ValueParser interprets them.
VALUE_RULES = (
    r"""
    value   = string / array / boolean / null / integer / float
    array   = "[" ws value (comma value)* ws "]"
    null    = ~r"null(?![A-Za-z-])"i
    """
    + "boolean = "
    + keyword_pattern(BOOLEAN_KEYWORDS)
    + "\n"
)

_NUMERIC_RUN = re.compile(r"[-+.0-9eE]*")
_NUMBER = re.compile(r"(?:[0-9]+|" + FLOAT_PATTERN + r")\Z")
_SPACE = re.compile(r"\s*")


class ValueParser(SpanParser):
    """Parses one literal value, surrounded by optional whitespace/comments."""

    grammar = build_grammar(
        "value_root = ws value ws",
        VALUE_RULES,
        LEXICAL_RULES,
    )
    default_rule = "value_root"

    def syntax_error(self, text: str, exc: ParseError) -> MarkupError:
        pos = exc.pos
        head = text[pos : pos + 1]
        trailing = isinstance(exc, IncompleteParseError)
        if head == '"' and not trailing:
            return MalformedString(text[pos:], "unterminated", pos, text)
        if head and head in "-0123456789.":
            start = pos
            while start > 0 and text[start - 1] in "-+.0123456789eE":
                start -= 1
            token = text[start:pos] + _NUMERIC_RUN.match(text, pos).group()
            if not _NUMBER.match(token):
                return MalformedNumber(token, start, text)
            # the number itself is fine; what follows it is not
            if not (trailing and start == pos):
                pos = _SPACE.match(text, start + len(token)).end()
        found = repr(text[pos : pos + 10]) if pos < len(text) else "end of input"
        if trailing or pos > exc.pos:
            return MalformedValue(f"unexpected {found} after a value", pos, text)
        return MalformedValue(f"expected a value, found {found}", pos, text)

    def visit_value_root(self, node, visited_children) -> Value:
        _, value, _ = visited_children
        logger.debug("parsed %s value", value.kind.value)
        return value

    def visit_value(self, node, visited_children) -> Value:
        return visited_children[0]

    def visit_array(self, node, visited_children) -> Value:
        _, _, first, rest, _, _ = visited_children
        return Value.from_array([first, *(item for _, item in repeated(rest))])

    def visit_string(self, node, visited_children) -> Value:
        return Value.from_string(decode_string(node.text, node.start, node.full_text))

    def visit_integer(self, node, visited_children) -> Value:
        value = int(node.text)
        if value > INTEGER_MAX:
            raise MalformedNumber(node.text, node.start, node.full_text)
        return Value.from_integer(value)

    def visit_float(self, node, visited_children) -> Value:
        value = float(node.text)
        if not math.isfinite(value):
            raise MalformedNumber(node.text, node.start, node.full_text)
        return Value.from_float(value)

    def visit_boolean(self, node, visited_children) -> Value:
        return Value.from_bool(lookup_keyword(BOOLEAN_KEYWORDS, node.text))

    def visit_null(self, node, visited_children) -> Value:
        return Value.null()


_parser = ValueParser()


def parse_value(text: str) -> Value:
    """Parse a literal value.

    Raises:
        MalformedValue: The text is not a literal value.
    """
    return _parser.parse(text)


__all__ = [
    "INTEGER_MAX",
    "VALUE_RULES",
    "Value",
    "ValueKind",
    "ValueParser",
    "parse_value",
]
