"""Integration tests for the full markup pipeline."""

import logging

import pytest

from snowmark import (
    Column,
    Deferred,
    DuplicateKeyPolicy,
    MarkupError,
    Module,
    NodeComparison,
    Value,
    collect_modules,
    compare,
    is_valid,
    parse_markup,
    setup_logging,
    to_markup,
)
from snowmark.attribute import Background, Border, Length, Padding, Radius
from snowmark.color import Color
from snowmark.errors import (
    DuplicateKey,
    ExpectedElementList,
    MalformedColor,
    MalformedNumber,
    StopListOverflow,
    UnbalancedDelimiter,
    UnknownAttributeKey,
)
from snowmark.schema import Alignment, AttributeKind
from snowmark.tree import find_by_id, node_count


@pytest.mark.integration
class TestSampleDocument:
    """End-to-end tests against the shared sample markup."""

    def test_structure(self, sample_document):
        """The sample parses into the expected tree."""
        root = sample_document.root
        assert isinstance(root, Column)
        assert root.id == "settings"
        assert node_count(sample_document) == 7
        assert find_by_id(sample_document, "title").content == Value.from_string("Settings")

    def test_typed_attributes(self, sample_document):
        """Attribute values reach the tree fully typed."""
        root = sample_document.root
        assert root.attributes.literal(AttributeKind.PADDING) == Padding.uniform(10.0)
        assert root.attributes.literal(AttributeKind.BACKGROUND) == Background(
            fill=Color.from_rgba8(0x20, 0x20, 0x30, 0xFF)
        )
        row = root.children[1]
        assert row.attributes.literal(AttributeKind.ALIGN_Y).align == Alignment.CENTER
        button = row.children[1]
        assert button.attributes.literal(AttributeKind.WIDTH) == Length.fill_portion(2)
        assert button.attributes.literal(AttributeKind.BORDER) == Border(
            color=Color(r=1.0, g=1.0, b=1.0), width=1.0, radius=Radius.uniform(4.0)
        )

    def test_modules_are_left_unresolved(self, sample_document):
        """Module invocations come back as references, never values."""
        image = sample_document.root.children[2]
        assert isinstance(image.content, Module)
        assert [module.name for module in collect_modules(sample_document)] == ["file"]

    def test_canonical_round_trip(self, sample_document):
        """Canonical output re-parses to an identical tree."""
        canonical = to_markup(sample_document)
        reparsed = parse_markup(canonical)
        assert reparsed == sample_document
        assert to_markup(reparsed) == canonical
        assert compare(reparsed, sample_document) == NodeComparison.EQUAL

    def test_valid(self, sample_document):
        """The sample document passes validation."""
        assert is_valid(sample_document)

    def test_json_round_trip(self, sample_document):
        """The tree survives JSON serialization for the rendering layer."""
        restored = type(sample_document).model_validate_json(sample_document.model_dump_json())
        assert restored == sample_document


@pytest.mark.integration
class TestDeferredEverywhere:
    """Module invocations are accepted in every value position."""

    def test_all_positions(self):
        """Modules parse as root, attribute values, content and list entries."""
        document = parse_markup("themed!{}")
        assert isinstance(document.root, Module)

        document = parse_markup(
            'row <background: themer!{mode: "dark"}, width: sizes!("wide")> '
            '[ text(intl!{key: "hello"}), qr!{data: [1, 2]} ]'
        )
        attributes = document.root.attributes
        assert all(isinstance(attributes[kind], Deferred) for kind in attributes.kinds())
        names = [module.name for module in collect_modules(document)]
        assert names == ["themer", "sizes", "intl", "qr"]


@pytest.mark.integration
class TestFailFast:
    """The first error anywhere aborts the parse with a position."""

    @pytest.mark.parametrize(
        "text,error,needle",
        [
            ("column [ text <foo: 1> () ]", UnknownAttributeKey, "foo"),
            ("column [ text <text-color: #12345> () ]", MalformedColor, "#12345"),
            ("row [ a( ", UnbalancedDelimiter, "("),
            ("column [ row ]", ExpectedElementList, "row"),
        ],
    )
    def test_positioned_errors(self, text, error, needle):
        """Errors from every stage carry a document position."""
        with pytest.raises(error) as info:
            parse_markup(text)
        assert info.value.text == text
        assert info.value.position >= text.index(needle)
        assert "line 1" in info.value.describe()

    def test_non_finite_gradient_inside_document(self):
        """An overflowing gradient angle fails the parse instead of reaching to_markup."""
        text = "{<bg: gradient(1e999, [#fff@1e999])>}"
        with pytest.raises(MalformedNumber) as info:
            parse_markup(text)
        assert info.value.position == text.index("1e999")
        assert info.value.text == text

    def test_stop_overflow_inside_document(self):
        """A ninth gradient stop fails the whole document."""
        stops = ", ".join(f"#000@{i / 10}" for i in range(9))
        with pytest.raises(StopListOverflow):
            parse_markup(f"{{ <background: gradient(0.0, [{stops}])> }}")

    def test_first_error_wins(self):
        """Parsing stops at the first error."""
        text = "column [ a <foo: 1> (), b <bar: 2> () ]"
        with pytest.raises(UnknownAttributeKey) as info:
            parse_markup(text)
        assert info.value.key == "foo"

    def test_all_errors_are_markup_errors(self):
        """Every stage error derives from MarkupError."""
        with pytest.raises(MarkupError):
            parse_markup("}")


@pytest.mark.integration
class TestConfiguration:
    """Environment-driven behavior."""

    def test_duplicate_policy_from_environment(self, monkeypatch):
        """The environment policy reaches nested attribute blocks."""
        text = "a <clip: true, clip: false> ()"
        assert parse_markup(text).root.attributes.literal(AttributeKind.CLIP).value is False
        monkeypatch.setenv("SNOWMARK_DUPLICATE_KEYS", "reject")
        with pytest.raises(DuplicateKey):
            parse_markup(text)
        assert parse_markup(text, policy=DuplicateKeyPolicy.LAST_WINS).root is not None

    def test_debug_logging(self, monkeypatch, caplog):
        """Stages log at debug level once logging is configured."""
        monkeypatch.setenv("SNOWMARK_LOG_LEVEL", "debug")
        setup_logging()
        with caplog.at_level(logging.DEBUG, logger="snowmark"):
            parse_markup("a()")
        assert "MarkupParser" in caplog.text
