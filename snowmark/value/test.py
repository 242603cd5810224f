"""Unit tests for literal values and ValueParser."""

import pytest
from pydantic import ValidationError

from snowmark.errors import ConversionError, MalformedNumber, MalformedString, MalformedValue, NestingTooDeep

from .lib import Value, ValueKind, parse_value


class TestValueModel:
    """Tests for Value construction and accessors."""

    @pytest.mark.unit
    def test_integer_and_boolean_are_distinct(self):
        """Integer payloads are never booleans."""
        assert Value.from_integer(1) != Value.from_bool(True)
        assert Value.from_integer(1) != Value.from_float(1.0)

    @pytest.mark.unit
    def test_payload_must_match_kind(self):
        """The payload type is checked against the kind."""
        with pytest.raises(ValidationError):
            Value(kind=ValueKind.INTEGER, data="3")
        with pytest.raises(ValidationError):
            Value(kind=ValueKind.INTEGER, data=True)

    @pytest.mark.unit
    def test_as_float_widens_integers(self):
        """as_float accepts integers."""
        assert Value.from_integer(3).as_float() == 3.0

    @pytest.mark.unit
    def test_accessor_mismatch_raises(self):
        """Reading the wrong type raises ConversionError."""
        with pytest.raises(ConversionError):
            Value.from_string("x").as_integer()
        with pytest.raises(ConversionError):
            Value.from_float(1.5).as_integer()
        with pytest.raises(ConversionError):
            Value.null().as_bool()

    @pytest.mark.unit
    def test_from_python_round_trip(self):
        """Plain Python data converts both ways."""
        data = ["a", 1, 2.5, True, None, [[]]]
        assert Value.from_python(data).to_python() == data

    @pytest.mark.unit
    def test_frozen(self):
        """Values cannot be mutated."""
        value = Value.from_string("x")
        with pytest.raises(ValidationError):
            value.data = "y"

    @pytest.mark.unit
    def test_json_round_trip(self):
        """Values survive a JSON round trip."""
        value = Value.from_python([1, 1.0, True, "s", None])
        assert Value.model_validate_json(value.model_dump_json()) == value


class TestScalars:
    """Tests for scalar literals."""

    @pytest.mark.unit
    def test_digits_are_integer(self):
        """Digit-only tokens are integers."""
        assert parse_value("42") == Value.from_integer(42)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text, expected",
        [("-3", -3.0), ("3.", 3.0), ("0.25", 0.25), ("1e5", 100000.0), ("2.5E-1", 0.25)],
    )
    def test_other_numbers_are_float(self, text, expected):
        """Signed, decimal and exponent tokens are numbers."""
        assert parse_value(text) == Value.from_float(expected)

    @pytest.mark.unit
    @pytest.mark.parametrize("text, expected", [("true", True), ("FALSE", False), ("True", True)])
    def test_booleans_case_insensitive(self, text, expected):
        """Boolean keywords ignore case."""
        assert parse_value(text) == Value.from_bool(expected)

    @pytest.mark.unit
    def test_null(self):
        """null is the null literal."""
        assert parse_value("Null").is_kind(ValueKind.NULL)

    @pytest.mark.unit
    def test_surrounding_whitespace_and_comments(self):
        """Whitespace and comments around a value are skipped."""
        assert parse_value("  7 // seven\n") == Value.from_integer(7)


class TestStrings:
    """Tests for string decoding."""

    @pytest.mark.unit
    def test_escaped_quote(self):
        """Backslash-quote decodes to a quote."""
        assert parse_value(r'"a \"b\""').as_string() == 'a "b"'

    @pytest.mark.unit
    def test_unicode_escape(self):
        """Four-digit unicode escapes decode."""
        assert parse_value(r'"\u0041\u00df"').as_string() == "Aß"

    @pytest.mark.unit
    def test_newline_escape_is_literal(self):
        """Backslash-n stays literal."""
        assert parse_value(r'"line\nbreak"').as_string() == "line\\nbreak"

    @pytest.mark.unit
    def test_unterminated(self):
        """An unterminated string raises MalformedString."""
        with pytest.raises(MalformedString):
            parse_value('"open')


class TestArrays:
    """Tests for nested arrays."""

    @pytest.mark.unit
    def test_mixed_array(self):
        """Arrays may mix value kinds."""
        value = parse_value('[1, 2.5, "three", true, null]')
        assert value.to_python() == [1, 2.5, "three", True, None]
        assert [item.kind for item in value.as_array()] == [
            ValueKind.INTEGER,
            ValueKind.NUMBER,
            ValueKind.STRING,
            ValueKind.BOOLEAN,
            ValueKind.NULL,
        ]

    @pytest.mark.unit
    @pytest.mark.parametrize("depth", [1, 5, 40])
    def test_deep_nesting(self, depth):
        """Nested arrays unwrap to the innermost value."""
        text = "[" * depth + '"x"' + "]" * depth
        value = parse_value(text)
        for _ in range(depth):
            (value,) = value.as_array()
        assert value == Value.from_string("x")

    @pytest.mark.unit
    def test_multiline_array(self):
        """Arrays may span lines with comments."""
        value = parse_value("[\n  1, // one\n  [2, 3]\n]")
        assert value.to_python() == [1, [2, 3]]

    @pytest.mark.unit
    def test_unclosed_array(self):
        """An unclosed array is a malformed value."""
        with pytest.raises(MalformedValue):
            parse_value("[1, 2")


class TestMalformed:
    """Tests for error classification."""

    @pytest.mark.unit
    def test_double_point(self):
        """A second decimal point makes the whole token malformed."""
        with pytest.raises(MalformedNumber) as info:
            parse_value("1.2.3")
        assert info.value.token == "1.2.3"

    @pytest.mark.unit
    def test_integer_overflow(self):
        """Integers beyond 64 bits are malformed."""
        with pytest.raises(MalformedNumber):
            parse_value(str(2**63))

    @pytest.mark.unit
    def test_float_overflow(self):
        """Numbers overflowing to infinity are malformed."""
        with pytest.raises(MalformedNumber):
            parse_value("1e999")

    @pytest.mark.unit
    def test_bare_word(self):
        """An unquoted word is not a value."""
        with pytest.raises(MalformedValue) as info:
            parse_value("hello")
        assert info.value.position == 0

    @pytest.mark.unit
    def test_empty(self):
        """Empty input is not a value."""
        with pytest.raises(MalformedValue):
            parse_value("")

    @pytest.mark.unit
    def test_second_value_is_not_a_bad_number(self):
        """A valid number followed by another value is reported where the extra value starts."""
        with pytest.raises(MalformedValue) as info:
            parse_value("1 2")
        assert not isinstance(info.value, MalformedNumber)
        assert info.value.position == 2

    @pytest.mark.unit
    def test_unterminated_array_points_past_last_number(self):
        """An unclosed array fails at the end of input, not on its last element."""
        text = "[1, 2"
        with pytest.raises(MalformedValue) as info:
            parse_value(text)
        assert not isinstance(info.value, MalformedNumber)
        assert info.value.position == len(text)

    @pytest.mark.unit
    def test_nesting_past_recursion_limit(self):
        """Arrays nested past the recursion limit raise NestingTooDeep, not RecursionError."""
        depth = 3000
        with pytest.raises(NestingTooDeep) as info:
            parse_value("[" * depth + "1" + "]" * depth)
        assert info.value.depth == depth
