"""Shared grammar machinery for the staged parsers.

Each stage is a parsimonious grammar paired with a NodeVisitor. The lexical
rules every stage agrees on (whitespace and comments, numbers, strings,
balanced spans) live here as grammar text so the stages cannot drift apart.
"""

from __future__ import annotations

import math
import re
from typing import Any, Mapping

from parsimonious.exceptions import ParseError
from parsimonious.grammar import Grammar
from parsimonious.nodes import Node, NodeVisitor

from snowmark.core.log import get_logger
from snowmark.errors import MalformedString, MarkupError, NestingTooDeep, UnexpectedToken

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

logger = get_logger("snowmark.grammar")

FLOAT_PATTERN = r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]*)?(?:[eE][+-]?[0-9]+)?"

# Rules shared by every stage. `integer` refuses a digit run that continues
# as a float so ordered choices can try it first.
LEXICAL_RULES = r"""
    ws      = ~r"(?:\s+|//[^\n]*)*"
    comma   = ws "," ws
    float   = ~r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]*)?(?:[eE][+-]?[0-9]+)?"
    integer = ~r"[0-9]+(?![.eE0-9])"
    string  = ~r'"(?:\\"|\\(?!")|[^"\\])*"'
"""

# Opaque balanced spans: recognized without interpreting their content.
SPAN_RULES = r"""
    brace_span    = "{" (string / brace_span / ~r'[^{}"]+')* "}"
    paren_span    = "(" (string / paren_span / ~r'[^()"]+')* ")"
    bracket_span  = "[" (string / bracket_span / ~r'[^\[\]"]+')* "]"
"""

_WORD = re.compile(r"[A-Za-z][A-Za-z-]*\Z")
_ESCAPE = re.compile(r'\\"|\\u([0-9a-fA-F]{4})')
_NESTING_TOKEN = re.compile(r'"(?:\\"|\\(?!")|[^"\\])*"|//[^\n]*|[\[{(<\]})>]')


def build_grammar(*sections: str) -> Grammar:
    """Compile grammar text; the first rule of the first section is the default."""
    return Grammar("\n".join(sections))


def keyword_pattern(table: Mapping[Any, tuple[str, ...]]) -> str:
    """Build a case-insensitive parsimonious regex matching any alias in a table.

    Word aliases must not run into a following letter or hyphen, so `fill`
    does not match the start of `fill-portion`. Symbolic aliases match as-is.
    """
    aliases = sorted(
        (alias for group in table.values() for alias in group),
        key=len,
        reverse=True,
    )
    parts = [
        re.escape(alias) + "(?![A-Za-z-])" if _WORD.match(alias) else re.escape(alias)
        for alias in aliases
    ]
    return '~r"(?:' + "|".join(parts) + ')"i'


def lookup_keyword(table: Mapping[Any, tuple[str, ...]], text: str) -> Any:
    """Return the table key whose alias set contains `text` (case-insensitive)."""
    wanted = text.strip().lower()
    for key, aliases in table.items():
        if wanted in aliases:
            return key
    raise KeyError(text)


def nesting_depth(text: str) -> tuple[int, int | None]:
    """Return the deepest bracket nesting in text and where it is reached.

    Strings and comments are skipped. The offset is that of the first opener
    at the deepest level, or None when nothing is nested.
    """
    depth = deepest = 0
    position = None
    for match in _NESTING_TOKEN.finditer(text):
        token = match.group()
        if len(token) != 1:
            continue
        if token in "[{(<":
            depth += 1
            if depth > deepest:
                deepest, position = depth, match.start()
        else:
            depth = max(depth - 1, 0)
    return deepest, position


def optional(visited: Any) -> Any:
    """Collapse the visit result of an `expr?` node to its value or None."""
    if isinstance(visited, list):
        return visited[0] if visited else None
    return None


def repeated(visited: Any) -> list:
    """Collapse the visit result of an `expr*` node to a (possibly empty) list."""
    return visited if isinstance(visited, list) else []


def decode_string(token: str, position: int | None = None, text: str | None = None) -> str:
    """Decode a quoted string token.

    Only two escapes exist: backslash-quote and `\\uXXXX` with exactly four
    hex digits. Every other backslash sequence is kept literally.

    Raises:
        MalformedString: The token is unquoted or escapes a surrogate.
    """
    if len(token) < 2 or token[0] != '"' or token[-1] != '"':
        raise MalformedString(token, "missing quotes", position, text)

    def replace(match: re.Match) -> str:
        if match.group(1) is None:
            return '"'
        code = int(match.group(1), 16)
        if 0xD800 <= code <= 0xDFFF:
            raise MalformedString(token, f"\\u{match.group(1)} is not a scalar value", position, text)
        return chr(code)

    return _ESCAPE.sub(replace, token[1:-1])


def encode_string(value: str) -> str:
    """Quote a string so that decode_string returns it unchanged."""
    return '"' + value.replace("\\", "\\u005c").replace('"', '\\"') + '"'


def format_float(value: float) -> str:
    """Format a float as a token that always carries a decimal point.

    `repr` keeps the exact value; the point is inserted when repr omits it
    (`1e-05` becomes `1.0e-05`) so color components stay on the float path.
    """
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"cannot format non-finite number {value!r}")
    mantissa, _, exponent = repr(value).partition("e")
    if "." not in mantissa:
        mantissa += ".0"
    return mantissa + ("e" + exponent if exponent else "")


class SpanParser(NodeVisitor):
    """Base for one parsing stage.

    Subclasses set `grammar` and `default_rule` and implement `visit_*`
    methods. `parse()` translates parsimonious failures into the stage's
    own error taxonomy via `syntax_error()`; MarkupErrors raised while
    visiting pass through unwrapped. Input nested deeper than the
    interpreter recursion limit allows raises NestingTooDeep.
    """

    grammar: Grammar
    default_rule: str = ""
    unwrapped_exceptions = (MarkupError, RecursionError)

    def parse(self, text: str, rule: str | None = None) -> Any:
        expression = self.grammar[rule or self.default_rule]
        logger.debug("%s: parsing %r", type(self).__name__, text)
        try:
            try:
                tree = expression.parse(text)
            except ParseError as exc:
                raise self.syntax_error(text, exc) from exc
            return self.visit(tree)
        except RecursionError:
            # parsimonious matches and visits recursively, one frame per level
            depth, position = nesting_depth(text)
            raise NestingTooDeep(depth, position, text) from None

    def syntax_error(self, text: str, exc: ParseError) -> MarkupError:
        """Translate a grammar failure; override per stage."""
        return UnexpectedToken(exc.pos, text)

    def generic_visit(self, node: Node, visited_children: list) -> Any:
        return visited_children or node
