"""Tests for the error taxonomy."""

import pytest

from .lib import (
    ColorError,
    ConversionError,
    InvalidValueShape,
    MalformedColor,
    MarkupError,
    MissingArgument,
    StopListOverflow,
    StructuralError,
    UnbalancedDelimiter,
    UnexpectedToken,
)


class TestPositions:
    """Tests for line/column derivation."""

    @pytest.mark.unit
    def test_first_line(self):
        """Positions on the first line give line 1."""
        err = MarkupError("boom", position=4, text="row[x]")
        assert (err.line, err.column) == (1, 5)

    @pytest.mark.unit
    def test_later_line(self):
        """Line and column count from the last newline."""
        text = "{\n  row[\n    x(\n"
        err = MarkupError("boom", position=text.index("x"), text=text)
        assert (err.line, err.column) == (3, 5)

    @pytest.mark.unit
    def test_unknown_position(self):
        """Without a position there is no line or column."""
        err = MarkupError("boom")
        assert err.line is None
        assert err.column is None
        assert str(err) == "boom"

    @pytest.mark.unit
    def test_str_includes_location(self):
        """The string form appends line and column."""
        err = MarkupError("boom", position=0, text="x")
        assert str(err) == "boom (line 1, column 1)"


class TestRelocate:
    """Tests for re-basing sub-parser errors."""

    @pytest.mark.unit
    def test_relocate_shifts_position(self):
        """Relocation adds the offset and swaps the text."""
        outer = "{ <padding: x> }"
        err = InvalidValueShape("padding", "x", position=9, text="padding: x")
        err.relocate(outer.index("<") + 1, outer)
        assert err.position == outer.index("x")
        assert err.text == outer

    @pytest.mark.unit
    def test_relocate_without_position_is_noop(self):
        """Errors without a position are left alone."""
        err = MissingArgument("file", "path")
        err.relocate(10, "whatever")
        assert err.position is None
        assert err.text is None

    @pytest.mark.unit
    def test_relocate_returns_self(self):
        """relocate() returns the error for use in raise."""
        err = MarkupError("boom", position=0, text="a")
        assert err.relocate(1, "ba") is err


class TestDescribe:
    """Tests for caret diagnostics."""

    @pytest.mark.unit
    def test_caret_under_position(self):
        """The caret sits under the error position."""
        text = "row[\n  text(\"a\"),\n  ?\n]"
        err = UnexpectedToken(position=text.index("?"), text=text)
        lines = err.describe().splitlines()
        assert lines[0].startswith("error: unexpected '?")
        assert lines[3] == "3 |   ?"
        assert lines[4] == "  |   ^"

    @pytest.mark.unit
    def test_end_of_input(self):
        """A position at the end of input still renders."""
        text = "row[\n"
        err = UnbalancedDelimiter("[", position=len(text), text=text)
        assert err.line == 2
        assert err.describe().splitlines()[-1] == "  | ^"

    @pytest.mark.unit
    def test_without_position(self):
        """Errors without a position render the message only."""
        assert MarkupError("boom").describe() == "error: boom"


class TestHierarchy:
    """Tests for family membership."""

    @pytest.mark.unit
    def test_families(self):
        """Each error belongs to its family and the right builtin base."""
        assert issubclass(UnbalancedDelimiter, StructuralError)
        assert issubclass(MalformedColor, ColorError)
        assert issubclass(StopListOverflow, ColorError)
        assert issubclass(MarkupError, ValueError)
        assert issubclass(ConversionError, TypeError)

    @pytest.mark.unit
    def test_attributes_kept(self):
        """Constructor arguments are kept as attributes."""
        err = InvalidValueShape("width", "wide")
        assert err.key == "width"
        assert err.value_text == "wide"
        assert "wide" in str(err)

    @pytest.mark.unit
    def test_unexpected_end_of_input(self):
        """UnexpectedToken names the end of input when nothing follows."""
        err = UnexpectedToken(position=3, text="row")
        assert "end of input" in err.message
