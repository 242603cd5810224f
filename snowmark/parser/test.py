"""Unit tests for MarkupParser."""

import pytest

from snowmark.attribute import Deferred, Length, Padding
from snowmark.config import DuplicateKeyPolicy
from snowmark.errors import (
    DuplicateKey,
    EmptyElementList,
    ExpectedElementList,
    InvalidModuleName,
    InvalidValueShape,
    MalformedNumber,
    NestingTooDeep,
    UnbalancedDelimiter,
    UnexpectedToken,
    UnknownAttributeKey,
)
from snowmark.ir import Column, Container, Module, Row, Stack, Widget
from snowmark.schema import AttributeKind
from snowmark.value import Value

from .lib import find_unbalanced, parse_markup


class TestStructure:
    """Tests for node recognition."""

    @pytest.mark.unit
    def test_widget_with_string(self):
        """A widget holds a string literal."""
        root = parse_markup('text("Hello")').root
        assert root == Widget(label="text", content=Value.from_string("Hello"))

    @pytest.mark.unit
    def test_empty_widget(self):
        """Empty parentheses give a widget without content."""
        assert parse_markup("divider()").root == Widget(label="divider")

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text,model",
        [
            ("row [ a() ]", Row),
            ("- [ a() ]", Row),
            ("ROW[a()]", Row),
            ("column [ a() ]", Column),
            ("col [ a() ]", Column),
            ("| [ a() ]", Column),
            ("stack [ a() ]", Stack),
            ("^ [ a() ]", Stack),
        ],
    )
    def test_layout_aliases(self, text, model):
        """Symbolic and short keywords map to layout kinds."""
        root = parse_markup(text).root
        assert isinstance(root, model)
        assert root.children == (Widget(label="a"),)

    @pytest.mark.unit
    def test_container(self):
        """Containers take an optional id, attributes and child."""
        assert parse_markup("{}").root == Container()
        root = parse_markup("{ #main <padding: 4> text(1) }").root
        assert root.id == "main"
        assert root.attributes.literal(AttributeKind.PADDING) == Padding.uniform(4.0)
        assert root.child == Widget(label="text", content=Value.from_integer(1))

    @pytest.mark.unit
    def test_nested_document(self):
        text = """
        // settings screen
        column #settings <padding: 10, spacing: 5> [
            text <text-color: #fff> ("Settings"),
            row [
                toggle #wifi <toggled: true> (),
                button <width: fill-portion(2)> ("Save"),
            ]
        ]
        """
        # trailing commas are not allowed in element lists
        with pytest.raises(UnexpectedToken):
            parse_markup(text)

        root = parse_markup(text.replace('("Save"),', '("Save")')).root
        assert isinstance(root, Column)
        assert root.id == "settings"
        title, buttons = root.children
        assert title.content == Value.from_string("Settings")
        assert buttons.children[0].id == "wifi"
        assert buttons.children[1].attributes.literal(AttributeKind.WIDTH) == Length.fill_portion(2)

    @pytest.mark.unit
    def test_keyword_labels_are_widgets_when_called(self):
        """A keyword followed by parentheses is a widget label."""
        root = parse_markup("row [ row(), column(1) ]").root
        assert root.children[0] == Widget(label="row")
        assert root.children[1].content == Value.from_integer(1)

    @pytest.mark.unit
    def test_keyword_values_and_nested_widgets(self):
        """Literal keywords stay values; a keyword called with parentheses is a widget."""
        assert parse_markup("flag(true)").root.content == Value.from_bool(True)
        assert parse_markup("box(null())").root.content == Widget(label="null")
        assert parse_markup("num(-5)").root.content == Value.from_float(-5.0)
        assert parse_markup("num(5)").root.content == Value.from_integer(5)

    @pytest.mark.unit
    def test_widget_content_forms(self):
        """Widget content may be a value, a module or a node."""
        assert parse_markup("list([1, [2.5, \"x\"], null])").root.content.to_python() == [1, [2.5, "x"], None]
        assert parse_markup("card({ text() })").root.content == Container(child=Widget(label="text"))
        assert parse_markup("card(row [ a() ])").root.content == Row(children=(Widget(label="a"),))


class TestModules:
    """Tests for module placeholders."""

    @pytest.mark.unit
    def test_module_element(self):
        """A module may stand as the whole document."""
        root = parse_markup('file!{path: "./layout.snow"}').root
        assert isinstance(root, Module)
        assert root.module.get("path") == Value.from_string("./layout.snow")

    @pytest.mark.unit
    def test_module_content_and_list_entry(self):
        """Modules work as widget content and as list entries."""
        root = parse_markup('row [ image(url!("https://example.com/a.png")), qr!{data: "x"} ]').root
        assert root.children[0].content.module.name == "url"
        assert root.children[1].module.name == "qr"

    @pytest.mark.unit
    def test_deferred_attribute(self):
        """Module-valued attributes are deferred."""
        root = parse_markup("text <selected: my-module!{x: 1}> ()").root
        value = root.attributes[AttributeKind.SELECTED]
        assert isinstance(value, Deferred)
        assert value.module.get("x") == Value.from_integer(1)

    @pytest.mark.unit
    def test_module_error_position(self):
        """Module errors point into the document."""
        text = "row [ a(), bad_name!{} ]"
        with pytest.raises(InvalidModuleName) as info:
            parse_markup(text)
        assert info.value.position == text.index("bad_name")
        assert info.value.text == text


class TestErrors:
    """Tests for structural and relocated errors."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text,keyword",
        [
            ("row", "row"),
            ("column <padding: 1>", "column"),
            ("{ stack }", "stack"),
            ('row text("a")', "row"),
            ('row <spacing: 5> text("a")', "row"),
            ('column [ row text("a") ]', "row"),
            ('column [ a(), - #bar b() ]', "-"),
        ],
    )
    def test_expected_element_list(self, text, keyword):
        """A layout keyword without a bracketed list is reported at the keyword."""
        with pytest.raises(ExpectedElementList) as info:
            parse_markup(text)
        assert info.value.keyword == keyword
        assert info.value.position == text.rindex(keyword)

    @pytest.mark.unit
    def test_widget_named_like_a_keyword(self):
        """A keyword followed by parentheses is a widget, not a layout."""
        root = parse_markup('row("a")').root
        assert isinstance(root, Widget)
        assert root.label == "row"

    @pytest.mark.unit
    def test_deep_nesting_is_a_markup_error(self):
        """Containers nested past the recursion limit raise NestingTooDeep."""
        text = "{" * 3000 + "}" * 3000
        with pytest.raises(NestingTooDeep) as info:
            parse_markup(text)
        assert info.value.position == 2999

    @pytest.mark.unit
    def test_moderate_nesting_parses(self):
        """Nesting well inside the recursion limit parses normally."""
        document = parse_markup("{" * 20 + "}" * 20)
        assert isinstance(document.root, Container)

    @pytest.mark.unit
    def test_empty_element_list(self):
        """An empty list is reported at its opening bracket."""
        text = "column [ ]"
        with pytest.raises(EmptyElementList) as info:
            parse_markup(text)
        assert info.value.position == text.index("[")

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text,delimiter,position",
        [
            ('{ text("a")', "{", 0),
            ("row [ a() ", "[", 4),
            ("text <padding: 1 ()", "<", 5),
            ('text("abc)', '"', 5),
        ],
    )
    def test_unbalanced_delimiter(self, text, delimiter, position):
        """The innermost unclosed delimiter is reported."""
        with pytest.raises(UnbalancedDelimiter) as info:
            parse_markup(text)
        assert info.value.delimiter == delimiter
        assert info.value.position == position

    @pytest.mark.unit
    def test_mismatched_closer(self):
        """A wrong closer names the one expected."""
        text = "row [ a() )"
        with pytest.raises(UnexpectedToken) as info:
            parse_markup(text)
        assert info.value.position == text.rindex(")")
        assert info.value.expected == "']'"

    @pytest.mark.unit
    def test_unexpected_token(self):
        """Trailing text after the root element is unexpected."""
        text = "row [ a() ] extra"
        with pytest.raises(UnexpectedToken) as info:
            parse_markup(text)
        assert info.value.position == text.index("extra")

    @pytest.mark.unit
    def test_attribute_errors_are_relocated(self):
        """Attribute errors carry document line and column."""
        text = "column [\n  text <foo: bar> ()\n]"
        with pytest.raises(UnknownAttributeKey) as info:
            parse_markup(text)
        assert info.value.position == text.index("foo")
        assert (info.value.line, info.value.column) == (2, 9)

    @pytest.mark.unit
    def test_shape_errors_are_relocated(self):
        """Shape errors point at the value in the document."""
        text = "text <width: wide> ()"
        with pytest.raises(InvalidValueShape) as info:
            parse_markup(text)
        assert info.value.position == text.index("wide")

    @pytest.mark.unit
    def test_value_errors_are_relocated(self):
        """Literal content errors carry the document text."""
        text = "count(99999999999999999999)"
        with pytest.raises(MalformedNumber) as info:
            parse_markup(text)
        assert info.value.text == text

    @pytest.mark.unit
    def test_duplicate_policy(self):
        """The policy argument reaches the attribute stage."""
        text = "text <clip: true, clip: false> ()"
        assert parse_markup(text).root.attributes.literal(AttributeKind.CLIP).value is False
        with pytest.raises(DuplicateKey):
            parse_markup(text, policy=DuplicateKeyPolicy.REJECT)


class TestFindUnbalanced:
    """Tests for the delimiter scanner."""

    @pytest.mark.unit
    def test_balanced(self):
        """Delimiters in strings and comments are ignored."""
        assert find_unbalanced('row [ a("[ ( <"), b() ] // ) ] }') is None

    @pytest.mark.unit
    def test_innermost_open_delimiter(self):
        """The most recent unclosed opener is reported."""
        error = find_unbalanced("{ row [ a(")
        assert isinstance(error, UnbalancedDelimiter)
        assert error.delimiter == "("
        assert error.position == 9

    @pytest.mark.unit
    def test_stray_closer(self):
        """A closer with nothing open is unexpected."""
        error = find_unbalanced("a() }")
        assert isinstance(error, UnexpectedToken)
        assert error.position == 4
