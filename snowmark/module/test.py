"""Unit tests for ModuleInvocationParser."""

import pytest

from snowmark.errors import (
    InvalidModuleName,
    MalformedString,
    MissingArgument,
    ReservedArgumentName,
    UnexpectedToken,
)
from snowmark.value import Value

from .lib import POSITIONAL, ModuleArgument, ModuleRef, looks_like_module, parse_module


class TestParseModule:
    """Tests for well-formed invocations."""

    @pytest.mark.unit
    def test_named_arguments_in_order(self):
        """Named arguments keep their written order."""
        ref = parse_module('file!{path: "./test.txt", watch: true, retries: 3}')
        assert ref.name == "file"
        assert [argument.name for argument in ref.arguments] == ["path", "watch", "retries"]
        assert ref.get("path") == Value.from_string("./test.txt")
        assert ref.get("retries") == Value.from_integer(3)

    @pytest.mark.unit
    def test_integer_argument(self):
        """Digit-only arguments are integers."""
        ref = parse_module("my-module!{x:1}")
        assert ref == ModuleRef(
            name="my-module",
            arguments=(ModuleArgument(name="x", value=Value.from_integer(1)),),
        )

    @pytest.mark.unit
    def test_positional_shorthand(self):
        """The parenthesized form yields one argument with an empty name."""
        ref = parse_module('url!("https://example.com/a.png")')
        assert ref.positional == Value.from_string("https://example.com/a.png")
        assert ref.arguments[0].name == POSITIONAL

    @pytest.mark.unit
    def test_empty_arguments(self):
        """Empty braces give zero arguments."""
        ref = parse_module("themer!{}")
        assert ref.arguments == ()
        assert ref.positional is None

    @pytest.mark.unit
    def test_array_argument_and_comments(self):
        """Array values and comments are accepted inside arguments."""
        ref = parse_module("qr!{\n  // payload\n  data: [1, [2, 3]],\n  size: 1.5\n}")
        assert ref.get("data").to_python() == [1, [2, 3]]
        assert ref.get("size") == Value.from_float(1.5)

    @pytest.mark.unit
    def test_duplicate_argument_later_wins(self, caplog):
        """A repeated argument keeps its first slot and takes the later value."""
        ref = parse_module("file!{path: \"a\", watch: true, path: \"b\"}")
        assert [argument.name for argument in ref.arguments] == ["path", "watch"]
        assert ref.get("path") == Value.from_string("b")
        assert "duplicate module argument" in caplog.text

    @pytest.mark.unit
    def test_unknown_names_are_valid(self):
        """Module names are not checked against a known set."""
        assert parse_module("anything-at-all!{a: null}").name == "anything-at-all"


class TestModuleErrors:
    """Tests for invocation failures."""

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["my_mod!{}", "mod2!{}", "_x!(1)"])
    def test_invalid_name(self, text):
        """Names with digits or underscores raise InvalidModuleName."""
        with pytest.raises(InvalidModuleName) as info:
            parse_module(text)
        assert info.value.position == 0

    @pytest.mark.unit
    def test_reserved_argument(self):
        """Underscore-prefixed argument names are reserved."""
        text = "file!{path: \"a\", _attribute: \"x\"}"
        with pytest.raises(ReservedArgumentName) as info:
            parse_module(text)
        assert info.value.position == text.index("_attribute")

    @pytest.mark.unit
    def test_unterminated_string(self):
        """An unterminated argument string is a malformed string."""
        with pytest.raises(MalformedString):
            parse_module('file!{path: "abc}')

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["file", "file!", "file!{path}", "file!{path: }", "file!(1, 2)"])
    def test_not_an_invocation(self, text):
        """Text that is not an invocation is an unexpected token."""
        with pytest.raises(UnexpectedToken):
            parse_module(text)

    @pytest.mark.unit
    def test_extra_positional_argument(self):
        """A second positional argument is reported at the comma, not as a bad number."""
        with pytest.raises(UnexpectedToken) as info:
            parse_module("x!(1, 2)")
        assert info.value.position == 4


class TestModuleRef:
    """Tests for ModuleRef helpers."""

    @pytest.mark.unit
    def test_missing_argument(self):
        """Looking up an absent argument raises MissingArgument."""
        with pytest.raises(MissingArgument) as info:
            parse_module("file!{}").get("path")
        assert info.value.module == "file"
        assert info.value.name == "path"

    @pytest.mark.unit
    def test_with_argument_replaces(self):
        """Adding an argument replaces one of the same name."""
        ref = parse_module("file!{a: 1, b: 2}").with_argument("a", Value.from_integer(9))
        assert ref.as_dict() == {"b": Value.from_integer(2), "a": Value.from_integer(9)}

    @pytest.mark.unit
    def test_name_pattern_enforced(self):
        """The model rejects names outside the pattern."""
        with pytest.raises(ValueError):
            ModuleRef(name="bad name")

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text, expected",
        [("file!{}", True), ("  my-mod!(1)", True), ("fill", False), ('"x!"', False), ("1.0", False)],
    )
    def test_looks_like_module(self, text, expected):
        """Only text starting with a name and a bang looks like a module."""
        assert looks_like_module(text) is expected
