"""MarkupParser: the structural document grammar.

The grammar recognizes containers, layouts, widgets and modules, but it
treats attribute blocks and module bodies as opaque balanced spans. Once a
span is captured it is handed to its own stage (AttributeParser,
ModuleInvocationParser, ValueParser) and errors from that stage are
relocated onto the document text.

Example:
    >>> document = parse_markup('column [ text("Hello"), button <width: fill> ("Go") ]')
    >>> [child.label for child in document.root.children]
    ['text', 'button']
"""

import re

from parsimonious.exceptions import ParseError
from parsimonious.grammar import Grammar

from snowmark.attribute import AttributeParser, AttributeSet
from snowmark.config import DuplicateKeyPolicy
from snowmark.core.log import get_logger
from snowmark.errors import (
    EmptyElementList,
    ExpectedElementList,
    MarkupError,
    UnbalancedDelimiter,
    UnexpectedToken,
)
from snowmark.grammar import (
    LEXICAL_RULES,
    SPAN_RULES,
    SpanParser,
    build_grammar,
    keyword_pattern,
    optional,
    repeated,
)
from snowmark.ir import LAYOUT_TYPES, Container, Document, Module, Widget
from snowmark.module import parse_module
from snowmark.schema import LAYOUT_KEYWORDS, NodeKind
from snowmark.value import VALUE_RULES, parse_value

logger = get_logger("snowmark.parser")

MARKUP_RULES = r"""
    markup          = ws element ws end_of_input
    end_of_input    = !~r"[\s\S]"
    element         = module / container / widget / row / column / stack
    elements        = element (comma element)*
    element_list    = "[" ws elements? ws "]"

    container       = "{" ws element_id? ws attributes? ws element? ws "}"
    row             = row_keyword ws element_id? ws attributes? ws element_list?
    column          = column_keyword ws element_id? ws attributes? ws element_list?
    stack           = stack_keyword ws element_id? ws attributes? ws element_list?
    widget          = label ws element_id? ws attributes? ws "(" ws content? ws ")"

    content         = module / literal / element
    literal         = value &(ws ")")
    module          = ~r"[A-Za-z0-9_-]+(?=!)" "!" ws (brace_span / paren_span)

    element_id      = "#" label
    label           = ~r"[A-Za-z][A-Za-z-]*"
    attributes      = "<" attribute_piece* ">"
    attribute_piece = string / brace_span / paren_span / bracket_span / comment / ~r'[^<>"(){}\[\]/]+' / "/"
    comment         = ~r"//[^\n]*"
"""

KEYWORD_RULES = "\n".join(
    f"{kind.value}_keyword = {keyword_pattern({kind: aliases})}"
    for kind, aliases in LAYOUT_KEYWORDS.items()
)

_OPENERS = {"{": "}", "[": "]", "(": ")", "<": ">"}
_CLOSERS = {closer: opener for opener, closer in _OPENERS.items()}
_STRING = re.compile(r'"(?:\\"|\\(?!")|[^"\\])*"')
# Where a layout keyword may start; the grammar decides whether one does.
_LAYOUT_START = re.compile(
    "|".join(
        rf"(?<![A-Za-z-]){re.escape(alias)}" if alias[0].isalpha() else re.escape(alias)
        for aliases in LAYOUT_KEYWORDS.values()
        for alias in aliases
    ),
    re.IGNORECASE,
)


def find_unbalanced(text: str) -> MarkupError | None:
    """Scan for the first delimiter problem, skipping strings and comments.

    Returns:
        UnexpectedToken at a closer that does not match the innermost open
        delimiter, UnbalancedDelimiter at the innermost delimiter left open
        at end of input, or None when every delimiter is balanced.
    """
    stack: list[tuple[str, int]] = []
    pos = 0
    while pos < len(text):
        char = text[pos]
        if char == '"':
            match = _STRING.match(text, pos)
            if match is None:
                return UnbalancedDelimiter('"', pos, text)
            pos = match.end()
            continue
        if text.startswith("//", pos):
            newline = text.find("\n", pos)
            pos = len(text) if newline == -1 else newline
            continue
        if char in _OPENERS:
            stack.append((char, pos))
        elif char in _CLOSERS:
            if not stack or stack[-1][0] != _CLOSERS[char]:
                expected = f"'{_OPENERS[stack[-1][0]]}'" if stack else ""
                return UnexpectedToken(pos, text, expected=expected)
            stack.pop()
        pos += 1
    if stack:
        opener, start = stack[-1]
        return UnbalancedDelimiter(opener, start, text)
    return None


class MarkupParser(SpanParser):
    """Parses markup text into a Document.

    Args:
        policy: Duplicate attribute key policy passed to AttributeParser.
    """

    grammar: Grammar = build_grammar(MARKUP_RULES, KEYWORD_RULES, VALUE_RULES, LEXICAL_RULES, SPAN_RULES)
    default_rule = "markup"

    def __init__(self, policy: DuplicateKeyPolicy | str | None = None):
        self.attribute_parser = AttributeParser(policy)

    def syntax_error(self, text: str, exc: ParseError) -> MarkupError:
        return (
            find_unbalanced(text)
            or self._missing_element_list(text, exc.pos)
            or UnexpectedToken(exc.pos, text)
        )

    def _missing_element_list(self, text: str, pos: int) -> ExpectedElementList | None:
        """Find a layout whose header ends where parsing failed, with no list after it."""
        starts = [match.start() for match in _LAYOUT_START.finditer(text, 0, pos)]
        for start in reversed(starts):
            for kind in LAYOUT_KEYWORDS:
                try:
                    layout = self.grammar[kind.value].match(text, start)
                except ParseError:
                    continue
                if layout.end == pos and not layout.children[-1].text:
                    keyword = layout.children[0]
                    return ExpectedElementList(keyword.text, keyword.start, text)
        return None

    def visit_markup(self, node, visited_children) -> Document:
        _, root, _, _ = visited_children
        logger.debug("parsed %s document", root.kind)
        return Document(root=root)

    def visit_element(self, node, visited_children):
        return visited_children[0]

    def visit_elements(self, node, visited_children) -> list:
        first, rest = visited_children
        return [first, *(element for _, element in repeated(rest))]

    def visit_element_list(self, node, visited_children) -> list:
        elements = optional(visited_children[2])
        if not elements:
            raise EmptyElementList(node.start, node.full_text)
        return elements

    # --- nodes ----------------------------------------------------------------

    def visit_container(self, node, visited_children) -> Container:
        _, _, element_id, _, attributes, _, child, _, _ = visited_children
        return Container(
            id=optional(element_id),
            attributes=optional(attributes) or AttributeSet(),
            child=optional(child),
        )

    def _layout(self, kind: NodeKind, node, visited_children):
        keyword, _, element_id, _, attributes, _, children = visited_children
        children = optional(children)
        if children is None:
            raise ExpectedElementList(keyword.text, keyword.start, node.full_text)
        return LAYOUT_TYPES[kind](
            id=optional(element_id),
            attributes=optional(attributes) or AttributeSet(),
            children=tuple(children),
        )

    def visit_row(self, node, visited_children):
        return self._layout(NodeKind.ROW, node, visited_children)

    def visit_column(self, node, visited_children):
        return self._layout(NodeKind.COLUMN, node, visited_children)

    def visit_stack(self, node, visited_children):
        return self._layout(NodeKind.STACK, node, visited_children)

    def visit_widget(self, node, visited_children) -> Widget:
        label, _, element_id, _, attributes, _, _, _, content, _, _ = visited_children
        return Widget(
            label=label,
            id=optional(element_id),
            attributes=optional(attributes) or AttributeSet(),
            content=optional(content),
        )

    def visit_module(self, node, visited_children) -> Module:
        try:
            ref = parse_module(node.text)
        except MarkupError as exc:
            exc.relocate(node.start, node.full_text)
            raise
        return Module(module=ref)

    # --- pieces ---------------------------------------------------------------

    def visit_content(self, node, visited_children):
        return visited_children[0]

    def visit_literal(self, node, visited_children):
        value_node = node.children[0]
        try:
            return parse_value(value_node.text)
        except MarkupError as exc:
            exc.relocate(value_node.start, node.full_text)
            raise

    def visit_element_id(self, node, visited_children) -> str:
        return visited_children[1]

    def visit_label(self, node, visited_children) -> str:
        return node.text

    def visit_attributes(self, node, visited_children) -> AttributeSet:
        try:
            return self.attribute_parser.parse(node.text[1:-1])
        except MarkupError as exc:
            exc.relocate(node.start + 1, node.full_text)
            raise


_parser = MarkupParser()


def parse_markup(text: str, policy: DuplicateKeyPolicy | str | None = None) -> Document:
    """Parse markup text into a Document.

    Parsing is fail-fast: the first error anywhere in the text is raised and
    no partial tree is returned.

    Args:
        text: The markup source.
        policy: Duplicate attribute key policy; defaults to
            SNOWMARK_DUPLICATE_KEYS.

    Raises:
        MarkupError: A positioned error from whichever stage failed.
    """
    parser = _parser if policy is None else MarkupParser(policy)
    return parser.parse(text)


__all__ = ["KEYWORD_RULES", "MARKUP_RULES", "MarkupParser", "find_unbalanced", "parse_markup"]
