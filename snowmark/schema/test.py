"""Unit tests for the schema module."""

import pytest

from snowmark.schema import (
    ATTRIBUTE_REGISTRY,
    HORIZONTAL_KEYWORDS,
    LAYOUT_KEYWORDS,
    WRAPPING_KEYWORDS,
    Alignment,
    AttributeKind,
    NodeKind,
    ValueShape,
    WrapMode,
    canonical_keyword,
    get_attribute_meta,
    get_kinds_by_shape,
    resolve_attribute_kind,
)


class TestAttributeRegistry:
    """Tests for ATTRIBUTE_REGISTRY completeness."""

    @pytest.mark.unit
    def test_all_kinds_registered(self):
        """Every AttributeKind has registry metadata."""
        for kind in AttributeKind:
            assert kind in ATTRIBUTE_REGISTRY, f"Missing metadata for {kind}"

    @pytest.mark.unit
    def test_registry_has_22_entries(self):
        """The registry covers all twenty-two attribute kinds."""
        assert len(ATTRIBUTE_REGISTRY) == 22

    @pytest.mark.unit
    def test_keys_are_unique(self):
        """No key or synonym maps to two kinds."""
        keys = [key for meta in ATTRIBUTE_REGISTRY.values() for key in meta.keys]
        assert len(keys) == len(set(keys))

    @pytest.mark.unit
    def test_pixel_kinds(self):
        """Kinds taking a bare pixel value share the pixels shape."""
        assert set(get_kinds_by_shape(ValueShape.PIXELS)) == {
            AttributeKind.MAX_WIDTH,
            AttributeKind.MAX_HEIGHT,
            AttributeKind.SIZE,
            AttributeKind.SPACING,
            AttributeKind.CELL_SIZE,
        }

    @pytest.mark.unit
    def test_meta_lookup(self):
        """Metadata is looked up by kind."""
        assert get_attribute_meta(AttributeKind.WIDTH).shape == ValueShape.LENGTH


class TestResolveAttributeKind:
    """Tests for key synonym resolution."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "key, kind",
        [
            ("padding", AttributeKind.PADDING),
            ("Text-Colour", AttributeKind.TEXT_COLOR),
            ("text-color", AttributeKind.TEXT_COLOR),
            ("BG", AttributeKind.BACKGROUND),
            ("cell-size", AttributeKind.CELL_SIZE),
        ],
    )
    def test_known_keys(self, key, kind):
        """Keys and synonyms resolve case-insensitively."""
        assert resolve_attribute_kind(key) is kind

    @pytest.mark.unit
    def test_unknown_key(self):
        """Unknown keys resolve to None."""
        assert resolve_attribute_kind("foo") is None


class TestKeywordTables:
    """Tests for keyword tables."""

    @pytest.mark.unit
    def test_layout_keywords_cover_list_kinds(self):
        """Every list-bearing node kind has keyword aliases."""
        assert set(LAYOUT_KEYWORDS) == {NodeKind.ROW, NodeKind.COLUMN, NodeKind.STACK}

    @pytest.mark.unit
    def test_canonical_spelling_is_first_alias(self):
        """The first alias is the spelling used when formatting."""
        assert canonical_keyword(HORIZONTAL_KEYWORDS, Alignment.END) == "right"
        assert canonical_keyword(LAYOUT_KEYWORDS, NodeKind.COLUMN) == "column"

    @pytest.mark.unit
    def test_both_is_either(self):
        """Wrapping keyword both is a synonym of either."""
        assert "both" in WRAPPING_KEYWORDS[WrapMode.EITHER]
