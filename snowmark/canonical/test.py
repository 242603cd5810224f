"""Unit tests for canonical markup output."""

import pytest

from snowmark.attribute import Border, Radius, parse_attributes
from snowmark.color import Color, parse_color
from snowmark.gradient import parse_gradient
from snowmark.ir import Container, Widget
from snowmark.module import parse_module
from snowmark.parser import parse_markup
from snowmark.schema import AttributeKind
from snowmark.value import Value, parse_value

from .lib import (
    MarkupFormatter,
    format_attributes,
    format_color,
    format_gradient,
    format_module,
    format_typed,
    format_value,
    to_markup,
)


class TestFormatValue:
    """Tests for literal value output."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [
            (Value.from_integer(42), "42"),
            (Value.from_float(2.0), "2.0"),
            (Value.from_float(1e-05), "1.0e-05"),
            (Value.from_bool(False), "false"),
            (Value.null(), "null"),
            (Value.from_string('say "hi"'), '"say \\"hi\\""'),
        ],
    )
    def test_scalars(self, value, expected):
        """Scalars format to their canonical tokens."""
        assert format_value(value) == expected

    @pytest.mark.unit
    def test_nested_array_reparses(self):
        """Nested arrays re-parse to the same value."""
        value = parse_value('[1, [2.5, ["deep", null]], true, "\\u00e9"]')
        assert parse_value(format_value(value)) == value

    @pytest.mark.unit
    def test_backslashes_survive(self):
        """Backslashes survive formatting."""
        value = Value.from_string("C:\\path\\n")
        assert parse_value(format_value(value)) == value


class TestFormatColors:
    """Tests for color and gradient output."""

    @pytest.mark.unit
    def test_color_is_normalized_form(self):
        """Colors print in the normalized color() form."""
        assert format_color(Color(r=1.0, g=0.0, b=0.0)) == "color(1.0, 0.0, 0.0, 1.0)"

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["#202030", "#20203080", "color(255, 128, 0, 0.5)", "color(0.1, 0.2, 0.3)"])
    def test_color_reparses(self, text):
        """Printed colors re-parse exactly."""
        color = parse_color(text)
        assert parse_color(format_color(color)) == color

    @pytest.mark.unit
    def test_gradient_reparses(self):
        """Printed gradients re-parse exactly."""
        gradient = parse_gradient("gradient(0.8,[#202030@0.0, #404045@0.5, #323030@1.0])")
        text = format_gradient(gradient)
        assert text.startswith("gradient(0.8, [color(")
        assert parse_gradient(text) == gradient


class TestFormatModule:
    """Tests for module invocation output."""

    @pytest.mark.unit
    def test_named(self):
        """Named arguments print in braces."""
        assert format_module(parse_module('file!{ path : "a",watch:true }')) == 'file!{path: "a", watch: true}'

    @pytest.mark.unit
    def test_positional_and_empty(self):
        """Positional and empty invocations keep their form."""
        assert format_module(parse_module("qr!( 1 )")) == "qr!(1)"
        assert format_module(parse_module("themer!{}")) == "themer!{}"

    @pytest.mark.unit
    def test_mixed_arguments_rejected(self):
        """A positional argument mixed with named ones cannot be printed."""
        module = parse_module('qr!("x")').with_argument("size", Value.from_integer(2))
        with pytest.raises(ValueError):
            format_module(module)


class TestFormatAttributes:
    """Tests for attribute block output."""

    @pytest.mark.unit
    def test_canonical_keys_and_shapes(self):
        """Attributes print with canonical keys and shapes."""
        attrs = parse_attributes("bg: #f00, padding: 5, 10, align-x: c, wrapping: both")
        assert format_attributes(attrs) == (
            "background: color(1.0, 0.0, 0.0, 1.0), padding: 5.0, 10.0, 5.0, 10.0, "
            "align-x: center, wrapping: either"
        )

    @pytest.mark.unit
    def test_block_round_trip(self):
        """Formatting then re-parsing yields the same typed values."""
        attrs = parse_attributes(
            "padding: top(5), width: fill-portion(3), height: fixed(40), max-width: 300, "
            "align: right, align-y: b, text-color: #0f08, "
            "background: gradient(1.5, [#fff@0.0, color(0, 0, 255)@1.0]), "
            "border: w(2), radius(1, 2, 3, 4), color(#333), shadow: left(3), "
            'label: "a, \\"b\\"", selected: my-module!{x: 1}, clip: TRUE, '
            "shaping: advanced, direction: both, spacing: 1e-3"
        )
        canonical = format_attributes(attrs)
        assert parse_attributes(canonical) == attrs
        assert format_attributes(parse_attributes(canonical)) == canonical

    @pytest.mark.unit
    def test_border_defaults(self):
        """A default radius is omitted unless it is the only option."""
        assert format_typed(Border()) == "radius(0.0, 0.0, 0.0, 0.0)"
        assert format_typed(Border(width=1.0)) == "width(1.0)"
        assert parse_attributes(f"border: {format_typed(Border())}").literal(AttributeKind.BORDER) == Border(radius=Radius())

    @pytest.mark.unit
    def test_not_a_typed_value(self):
        """Formatting an unknown type raises TypeError."""
        with pytest.raises(TypeError):
            format_typed(Value.null())


class TestToMarkup:
    """Tests for document output."""

    @pytest.mark.unit
    def test_layout_indentation(self):
        """Layout children are indented one level."""
        document = parse_markup('col#main<spacing:4>[text("a"),- [b(),c(1.5)]]')
        assert to_markup(document) == (
            'column #main <spacing: 4.0> [\n'
            '  text ("a"),\n'
            "  row [\n"
            "    b (),\n"
            "    c (1.5)\n"
            "  ]\n"
            "]"
        )

    @pytest.mark.unit
    def test_containers(self):
        """Containers print inline unless they hold a child."""
        assert to_markup(Container()) == "{}"
        assert to_markup(Container(id="x")) == "{ #x }"
        assert to_markup(Container(child=Widget(label="a"))) == "{\n  a ()\n}"

    @pytest.mark.unit
    def test_custom_indent(self):
        """The indent width is configurable."""
        text = MarkupFormatter(indent=4).format(parse_markup("stack [ a() ]"))
        assert text == "stack [\n    a ()\n]"

    @pytest.mark.unit
    def test_document_round_trip(self):
        source = """
        column #root <padding: 8, background: themer!{mode: "dark"}> [
            { #empty },
            { text <label: "x"> ("hello") },
            card (row [ icon(file!("a.svg")), toggle <toggled: false> (true) ]),
            qr!{data: [1, 2, null]},
            stack [ layer(-0.5), layer() ]
        ]
        """
        document = parse_markup(source)
        canonical = to_markup(document)
        assert parse_markup(canonical) == document
        assert to_markup(parse_markup(canonical)) == canonical
