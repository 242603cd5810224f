"""Unit tests for validation module."""

import pytest

from snowmark.parser import parse_markup

from .lib import ValidationIssue, is_valid, validate_document


class TestValidateDocument:
    """Tests for validate_document function."""

    @pytest.mark.unit
    def test_valid_document(self):
        """Well-formed document passes validation."""
        document = parse_markup("column #root [ a #one (), b #two (), c () ]")
        assert validate_document(document) == []
        assert is_valid(document)

    @pytest.mark.unit
    def test_duplicate_ids(self):
        """Duplicate ids are detected across nesting levels."""
        document = parse_markup("column #dupe [ a #dupe (), row [ b #x (), c #x () ] ]")
        issues = validate_document(document)
        assert {issue.node_id for issue in issues} == {"dupe", "x"}
        assert all(issue.issue_type == "duplicate_id" for issue in issues)
        assert "2 times" in issues[0].message

    @pytest.mark.unit
    def test_anonymous_nodes_are_not_duplicates(self):
        """Nodes without ids never collide."""
        assert is_valid(parse_markup("row [ a(), a(), a() ]"))

    @pytest.mark.unit
    def test_stop_out_of_range(self):
        """Gradient stops outside [0, 1] are reported."""
        document = parse_markup(
            "{ #panel <background: gradient(0.0, [#fff@-0.5, #000@0.5, #f00@1.5])> }"
        )
        issues = validate_document(document)
        assert issues == [
            ValidationIssue(
                node_id="panel",
                message="background stop 0 at -0.5 outside 0-1",
                issue_type="stop_out_of_range",
            ),
            ValidationIssue(
                node_id="panel",
                message="background stop 2 at 1.5 outside 0-1",
                issue_type="stop_out_of_range",
            ),
        ]
        assert not is_valid(document)

    @pytest.mark.unit
    def test_deferred_background_is_skipped(self):
        """Deferred values are not inspected."""
        assert is_valid(parse_markup("a <background: themer!{}> ()"))
