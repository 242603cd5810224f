"""Tests for shared grammar machinery."""

import pytest

from snowmark.errors import MalformedString, NestingTooDeep, UnexpectedToken

from .lib import (
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
)

TABLE = {"row": ("row", "-"), "column": ("column", "col", "|")}


class PairParser(SpanParser):
    """Minimal stage used to exercise the base class."""

    grammar = build_grammar(
        r"""
        pair = ws float comma paren_span? ws
        """,
        LEXICAL_RULES,
        SPAN_RULES,
    )
    default_rule = "pair"

    def visit_pair(self, node, visited_children):
        _, number, _, span, _ = visited_children
        return number, optional(span)

    def visit_float(self, node, visited_children):
        return float(node.text)

    def visit_paren_span(self, node, visited_children):
        return node.text


class TestKeywords:
    """Tests for alias tables."""

    @pytest.mark.unit
    def test_lookup_is_case_insensitive(self):
        """Aliases match regardless of case."""
        assert lookup_keyword(TABLE, "COL") == "column"
        assert lookup_keyword(TABLE, "-") == "row"

    @pytest.mark.unit
    def test_lookup_unknown_raises(self):
        """Unknown aliases raise KeyError."""
        with pytest.raises(KeyError):
            lookup_keyword(TABLE, "grid")

    @pytest.mark.unit
    def test_pattern_matches_whole_words(self):
        """Word aliases do not match a longer word."""
        grammar = build_grammar("kw = " + keyword_pattern(TABLE))
        assert grammar["kw"].parse("Column").text == "Column"
        assert grammar["kw"].parse("|").text == "|"
        with pytest.raises(Exception):
            grammar["kw"].parse("columns")


class TestStrings:
    """Tests for the narrow string escape set."""

    @pytest.mark.unit
    def test_escaped_quote(self):
        """Backslash-quote decodes to a quote."""
        assert decode_string(r'"say \"hi\""') == 'say "hi"'

    @pytest.mark.unit
    def test_unicode_escape(self):
        """Unicode escapes decode in either hex case."""
        assert decode_string(r'"\u00e9t\u00E9"') == "été"

    @pytest.mark.unit
    def test_other_escapes_are_literal(self):
        """Other backslash sequences are kept as written."""
        assert decode_string(r'"a\nb\t"') == "a\\nb\\t"

    @pytest.mark.unit
    def test_short_unicode_escape_is_literal(self):
        """Fewer than four hex digits is not an escape."""
        assert decode_string(r'"\u12"') == "\\u12"

    @pytest.mark.unit
    def test_surrogate_rejected(self):
        """Surrogate code points are rejected."""
        with pytest.raises(MalformedString):
            decode_string(r'"\ud800"')

    @pytest.mark.unit
    def test_unquoted_rejected(self):
        """Tokens without quotes are rejected."""
        with pytest.raises(MalformedString):
            decode_string("abc")

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ['plain', 'with "quotes"', "back\\slash", "tail\\", "\\u0041", ""])
    def test_encode_inverts_decode(self, value):
        """Encoded strings decode to the original."""
        assert decode_string(encode_string(value)) == value


class TestFormatFloat:
    """Tests for canonical float tokens."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value, expected",
        [(1.0, "1.0"), (0.5, "0.5"), (-2.0, "-2.0"), (1e-05, "1.0e-05"), (1e16, "1.0e+16"), (10, "10.0")],
    )
    def test_always_has_point(self, value, expected):
        """Formatted floats always carry a decimal point."""
        assert format_float(value) == expected

    @pytest.mark.unit
    def test_round_trips_exactly(self):
        """Formatting keeps the exact float value."""
        value = 32 / 255
        assert float(format_float(value)) == value

    @pytest.mark.unit
    def test_rejects_nan(self):
        """Non-finite numbers cannot be formatted."""
        with pytest.raises(ValueError):
            format_float(float("nan"))


class TestSpanParser:
    """Tests for the stage base class."""

    @pytest.mark.unit
    def test_visits_tree(self):
        """Visitors receive spans as opaque text."""
        assert PairParser().parse('1.5, (a, "b)", (c))') == (1.5, '(a, "b)", (c))')

    @pytest.mark.unit
    def test_optional_missing(self):
        """Absent optional parts collapse to None."""
        assert PairParser().parse("2 , // trailing comment") == (2.0, None)

    @pytest.mark.unit
    def test_syntax_error_translated(self):
        """Grammar failures become positioned UnexpectedToken errors."""
        with pytest.raises(UnexpectedToken) as info:
            PairParser().parse("1.5 (x)")
        assert info.value.text == "1.5 (x)"
        assert info.value.position is not None


class NestedParser(SpanParser):
    """Stage whose grammar recurses once per bracket level."""

    grammar = build_grammar(r'nested = "[" nested? "]"')
    default_rule = "nested"

    def visit_nested(self, node, visited_children):
        return 1 + (optional(visited_children[1]) or 0)


class TestNesting:
    """Tests for deeply nested input."""

    @pytest.mark.unit
    def test_depth_and_position(self):
        """The deepest opener is reported, skipping strings and comments."""
        assert nesting_depth('a( "((((" , [b]) // {{{{') == (2, 12)

    @pytest.mark.unit
    def test_flat_text(self):
        """Text without brackets has no nesting."""
        assert nesting_depth("plain") == (0, None)

    @pytest.mark.unit
    def test_moderate_depth_parses(self):
        """Ordinary nesting stays well inside the recursion limit."""
        assert NestedParser().parse("[" * 50 + "]" * 50) == 50

    @pytest.mark.unit
    def test_recursion_limit_is_a_markup_error(self):
        """Nesting past the recursion limit raises NestingTooDeep at the deepest opener."""
        depth = 5000
        text = "[" * depth + "]" * depth
        with pytest.raises(NestingTooDeep) as info:
            NestedParser().parse(text)
        assert info.value.depth == depth
        assert info.value.position == depth - 1
        assert info.value.text == text
