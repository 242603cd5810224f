"""Unit tests for AttributeParser and the value shapes."""

import pytest
from pydantic import ValidationError

from snowmark.color import Color
from snowmark.config import DuplicateKeyPolicy
from snowmark.errors import (
    DuplicateKey,
    InvalidValueShape,
    MalformedColor,
    ReservedArgumentName,
    UnexpectedToken,
    UnknownAttributeKey,
)
from snowmark.gradient import Gradient
from snowmark.module import ModuleArgument, ModuleRef, parse_module
from snowmark.schema import Alignment, AttributeKind, Axis, LengthMode, ShapingMode, WrapMode
from snowmark.value import Value

from .lib import Attribute, AttributeSet, Deferred, LiteralValue, parse_attributes
from .types import (
    Background,
    Border,
    Direction,
    Flag,
    HorizontalAlign,
    Length,
    Padding,
    Pixels,
    Radius,
    Shadow,
    Shaping,
    Text,
    VerticalAlign,
    Wrapping,
)

RED = Color(r=1.0, g=0.0, b=0.0, a=1.0)


def literal(text: str, kind: AttributeKind):
    return parse_attributes(text).literal(kind)


class TestPadding:
    """Tests for the four padding forms."""

    @pytest.mark.unit
    def test_uniform(self):
        """One number pads all four sides."""
        assert literal("padding:10", AttributeKind.PADDING) == Padding.uniform(10.0)

    @pytest.mark.unit
    def test_vertical_horizontal(self):
        """Two numbers pad vertical then horizontal."""
        assert literal("padding:5,10", AttributeKind.PADDING) == Padding(
            top=5.0, right=10.0, bottom=5.0, left=10.0
        )

    @pytest.mark.unit
    def test_four_sides_clockwise(self):
        """Four numbers go top, right, bottom, left."""
        assert literal("padding:1,2,3,4", AttributeKind.PADDING) == Padding(
            top=1.0, right=2.0, bottom=3.0, left=4.0
        )

    @pytest.mark.unit
    def test_side_options(self):
        """Named sides set only those sides."""
        assert literal("padding:top(5),left(2)", AttributeKind.PADDING) == Padding(
            top=5.0, left=2.0, bottom=0.0, right=0.0
        )

    @pytest.mark.unit
    def test_side_options_any_order_and_case(self):
        """Side options accept any order and case."""
        padding = literal("padding: RIGHT(1), bottom( 2 ), Top(3)", AttributeKind.PADDING)
        assert padding == Padding(top=3.0, right=1.0, bottom=2.0, left=0.0)

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["1, 2, 3", "wide", "top 5", "1, 2, 3, 4, 5"])
    def test_invalid(self, value):
        """Other padding forms raise InvalidValueShape at the value."""
        with pytest.raises(InvalidValueShape) as info:
            parse_attributes(f"padding: {value}")
        assert info.value.key == "padding"
        assert info.value.value_text == value
        assert info.value.position == len("padding: ")


class TestLength:
    """Tests for width/height and the pixel kinds."""

    @pytest.mark.unit
    def test_fill_portion(self):
        """fill-portion takes an integer weight."""
        assert literal("width:fill-portion(3)", AttributeKind.WIDTH) == Length.fill_portion(3)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("fill", Length.fill()),
            ("Shrink", Length.shrink()),
            ("fixed(120)", Length.fixed(120.0)),
            ("FILL-PORTION( 2 )", Length.fill_portion(2)),
            ("100", Pixels(value=100.0)),
            ("-2.5e1", Pixels(value=-25.0)),
        ],
    )
    def test_forms(self, value, expected):
        """Every length form parses."""
        assert literal(f"height: {value}", AttributeKind.HEIGHT) == expected

    @pytest.mark.unit
    def test_fill_portion_requires_integer(self):
        """A fractional weight is rejected."""
        with pytest.raises(InvalidValueShape):
            parse_attributes("width: fill-portion(1.5)")

    @pytest.mark.unit
    def test_fill_portion_range(self):
        """Weights beyond 32 bits are rejected."""
        with pytest.raises(InvalidValueShape):
            parse_attributes("width: fill-portion(4294967296)")
        assert literal("width: fill-portion(4294967295)", AttributeKind.WIDTH).portion == 2**32 - 1

    @pytest.mark.unit
    @pytest.mark.parametrize("key", ["max-width", "max-height", "size", "cell-size", "spacing"])
    def test_pixel_kinds(self, key):
        """Pixel kinds take a bare number."""
        attrs = parse_attributes(f"{key}: 300.5")
        (kind,) = attrs.kinds()
        assert attrs.literal(kind) == Pixels(value=300.5)

    @pytest.mark.unit
    def test_pixel_kinds_reject_keywords(self):
        """Pixel kinds do not accept length keywords."""
        with pytest.raises(InvalidValueShape):
            parse_attributes("spacing: fill")

    @pytest.mark.unit
    def test_length_model_ties_payload_to_mode(self):
        """Length payloads must match the mode."""
        with pytest.raises(ValidationError):
            Length(mode=LengthMode.FIXED)
        with pytest.raises(ValidationError):
            Length(mode=LengthMode.FILL, portion=2)


class TestAlignment:
    """Tests for the alignment alias tables."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [("left", Alignment.START), ("l", Alignment.START), ("centre", Alignment.CENTER),
         ("C", Alignment.CENTER), ("right", Alignment.END), ("R", Alignment.END)],
    )
    def test_align_x(self, value, expected):
        """Horizontal alignment keywords resolve."""
        assert literal(f"align-x: {value}", AttributeKind.ALIGN_X) == HorizontalAlign(align=expected)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [("top", Alignment.START), ("t", Alignment.START), ("center", Alignment.CENTER),
         ("bottom", Alignment.END), ("B", Alignment.END)],
    )
    def test_align_y(self, value, expected):
        """Vertical alignment keywords resolve."""
        assert literal(f"align-y: {value}", AttributeKind.ALIGN_Y) == VerticalAlign(align=expected)

    @pytest.mark.unit
    def test_align_accepts_either_axis(self):
        """align takes horizontal or vertical keywords."""
        assert literal("align: bottom", AttributeKind.ALIGN) == VerticalAlign(align=Alignment.END)
        assert literal("align: left", AttributeKind.ALIGN) == HorizontalAlign(align=Alignment.START)

    @pytest.mark.unit
    def test_align_center_is_horizontal(self):
        """center under align is horizontal."""
        assert literal("align: center", AttributeKind.ALIGN) == HorizontalAlign(align=Alignment.CENTER)

    @pytest.mark.unit
    def test_align_x_rejects_vertical_keywords(self):
        """align-x does not take vertical keywords."""
        with pytest.raises(InvalidValueShape):
            parse_attributes("align-x: top")


class TestColors:
    """Tests for text-color and background."""

    @pytest.mark.unit
    def test_text_color_forms(self):
        """Text colors accept hex and color() forms."""
        assert literal("text-color: #ff0000", AttributeKind.TEXT_COLOR) == RED
        assert literal("text-color: color(255, 0, 0)", AttributeKind.TEXT_COLOR) == RED
        assert literal("text-color: color(1.0, 0.0, 0.0)", AttributeKind.TEXT_COLOR) == RED

    @pytest.mark.unit
    def test_text_color_rejects_gradient(self):
        """Text colors cannot be gradients."""
        with pytest.raises(InvalidValueShape):
            parse_attributes("text-color: gradient(0.0, [#fff@0.0])")

    @pytest.mark.unit
    def test_background_color(self):
        """A background may be a plain color."""
        assert literal("bg: #f00", AttributeKind.BACKGROUND) == Background(fill=RED)

    @pytest.mark.unit
    def test_background_gradient(self):
        """A background may be a gradient."""
        background = literal(
            "background: gradient(0.8,[#202030@0.0, #404045@0.5, #323030@1.0]), clip: true",
            AttributeKind.BACKGROUND,
        )
        assert isinstance(background.fill, Gradient)
        assert background.fill.angle == 0.8
        assert [stop.position for stop in background.fill.stops] == [0.0, 0.5, 1.0]

    @pytest.mark.unit
    def test_malformed_color_is_positioned_in_block(self):
        """Color errors point into the attribute block."""
        text = "clip: true, background: #ggg"
        with pytest.raises(MalformedColor) as info:
            parse_attributes(text)
        assert info.value.text == text
        assert info.value.position >= text.index("#")


class TestBorderAndShadow:
    """Tests for option-list shapes."""

    @pytest.mark.unit
    def test_border_all_options(self):
        """Border takes color, width and radius options."""
        border = literal("border: color(#ff0000), w(2), radius(4)", AttributeKind.BORDER)
        assert border == Border(color=RED, width=2.0, radius=Radius.uniform(4.0))

    @pytest.mark.unit
    def test_border_any_order(self):
        """Border options may come in any order."""
        border = literal("border: radius(1, 2, 3, 4), width(1.5), color(255, 0, 0)", AttributeKind.BORDER)
        assert border.color == RED
        assert border.width == 1.5
        assert border.radius.corners == (1.0, 2.0, 3.0, 4.0)

    @pytest.mark.unit
    def test_border_missing_options_stay_unset(self):
        """Omitted border options keep their defaults."""
        border = literal("border: width(3)", AttributeKind.BORDER)
        assert border.color is None
        assert border.radius == Radius()

    @pytest.mark.unit
    def test_border_unknown_option(self):
        """An unknown border option is an invalid shape."""
        with pytest.raises(InvalidValueShape):
            parse_attributes("border: style(dashed)")

    @pytest.mark.unit
    def test_shadow(self):
        """Shadow offsets use the side forms."""
        shadow = literal("shadow: top(2), left(1.5)", AttributeKind.SHADOW)
        assert shadow == Shadow(top=2.0, left=1.5, bottom=0.0, right=0.0)


class TestScalars:
    """Tests for strings, flags and keyword kinds."""

    @pytest.mark.unit
    def test_text_keeps_commas(self):
        """Quoted text may contain commas."""
        attrs = parse_attributes('label: "Hello, world: again", selected: "a"')
        assert attrs.literal(AttributeKind.LABEL) == Text(value="Hello, world: again")
        assert attrs.literal(AttributeKind.SELECTED) == Text(value="a")

    @pytest.mark.unit
    def test_flags_case_insensitive(self):
        """Boolean flags ignore case."""
        attrs = parse_attributes("clip: TRUE, toggled: False")
        assert attrs.literal(AttributeKind.CLIP) == Flag(value=True)
        assert attrs.literal(AttributeKind.TOGGLED) == Flag(value=False)

    @pytest.mark.unit
    def test_keywords(self):
        """Wrapping, shaping and direction keywords resolve."""
        attrs = parse_attributes("wrapping: both, shaping: Advanced, direction: both")
        assert attrs.literal(AttributeKind.WRAPPING) == Wrapping(mode=WrapMode.EITHER)
        assert attrs.literal(AttributeKind.SHAPING) == Shaping(mode=ShapingMode.ADVANCED)
        assert attrs.literal(AttributeKind.DIRECTION) == Direction(axis=Axis.BOTH)

    @pytest.mark.unit
    def test_wrapping_none(self):
        """Wrapping none is a keyword, not a null."""
        assert literal("wrapping: none", AttributeKind.WRAPPING) == Wrapping(mode=WrapMode.NONE)

    @pytest.mark.unit
    def test_unquoted_text(self):
        """Text values must be quoted."""
        with pytest.raises(InvalidValueShape):
            parse_attributes("label: hello")


class TestDeferred:
    """Tests for module invocations in attribute slots."""

    @pytest.mark.unit
    def test_selected_module(self):
        """A module value becomes a deferred entry."""
        attrs = parse_attributes("selected:my-module!{x:1}")
        assert attrs[AttributeKind.SELECTED] == Deferred(
            kind=AttributeKind.SELECTED,
            module=ModuleRef(
                name="my-module",
                arguments=(ModuleArgument(name="x", value=Value.from_integer(1)),),
            ),
        )

    @pytest.mark.unit
    @pytest.mark.parametrize("kind", list(AttributeKind))
    def test_every_kind_accepts_a_module(self, kind):
        """Every attribute kind accepts a module."""
        attrs = parse_attributes(f'{kind.value}: themer!{{name: "dark", level: 2}}')
        value = attrs[kind]
        assert isinstance(value, Deferred)
        assert value.module.get("name") == Value.from_string("dark")

    @pytest.mark.unit
    def test_module_with_commas_then_more_attributes(self):
        """Commas inside module arguments do not split entries."""
        attrs = parse_attributes('background: themer!{light: "#fff", dark: "#000"}, clip: true')
        assert attrs.kinds() == [AttributeKind.BACKGROUND, AttributeKind.CLIP]
        assert len(attrs.deferred()) == 1

    @pytest.mark.unit
    def test_positional_module(self):
        """The positional module form is accepted."""
        value = parse_attributes('label: file!("./label.txt")')[AttributeKind.LABEL]
        assert value.module.positional == Value.from_string("./label.txt")

    @pytest.mark.unit
    def test_resolver_ref_appends_attribute_kind(self):
        """resolver_ref() adds the attribute kind as an argument."""
        deferred = Deferred(kind=AttributeKind.BACKGROUND, module=parse_module('themer!{name: "dark"}'))
        ref = deferred.resolver_ref()
        assert ref.get("_attribute") == Value.from_string("background")
        assert ref.get("name") == Value.from_string("dark")
        assert not deferred.module.has("_attribute")

    @pytest.mark.unit
    def test_module_errors_are_positioned_in_block(self):
        """Module errors point into the attribute block."""
        text = "clip: true, label: file!{_x: 1}"
        with pytest.raises(ReservedArgumentName) as info:
            parse_attributes(text)
        assert info.value.position == text.index("_x")
        assert info.value.text == text


class TestBlock:
    """Tests for keys, separators and duplicates."""

    @pytest.mark.unit
    def test_unknown_key(self):
        """Unknown keys raise UnknownAttributeKey."""
        with pytest.raises(UnknownAttributeKey) as info:
            parse_attributes("foo:bar")
        assert info.value.key == "foo"
        assert info.value.position == 0

    @pytest.mark.unit
    def test_unknown_key_position(self):
        """Unknown keys are reported at the key."""
        with pytest.raises(UnknownAttributeKey) as info:
            parse_attributes("clip: true, colour: #fff")
        assert info.value.position == 12

    @pytest.mark.unit
    def test_synonyms_and_case(self):
        """Keys resolve through synonyms in any case."""
        attrs = parse_attributes("text-colour: #f00, BG: #f00, Padding: 4")
        assert attrs.kinds() == [AttributeKind.TEXT_COLOR, AttributeKind.BACKGROUND, AttributeKind.PADDING]

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["", "   ", "  // nothing here\n"])
    def test_empty_block(self, text):
        """An empty block has no entries."""
        assert len(parse_attributes(text)) == 0

    @pytest.mark.unit
    def test_trailing_comma_and_comments(self):
        """Blocks accept a trailing comma and comments."""
        attrs = parse_attributes("\n  padding: 5, // outer\n  width: fill,\n")
        assert attrs.literal(AttributeKind.PADDING) == Padding.uniform(5.0)
        assert attrs.literal(AttributeKind.WIDTH) == Length.fill()

    @pytest.mark.unit
    def test_missing_colon(self):
        """An entry without a colon is an unexpected token."""
        with pytest.raises(UnexpectedToken):
            parse_attributes("padding 5")

    @pytest.mark.unit
    def test_duplicate_last_wins(self, caplog):
        """By default the later value wins in the first slot."""
        attrs = parse_attributes("width: 10, clip: true, width: fill")
        assert attrs.kinds() == [AttributeKind.WIDTH, AttributeKind.CLIP]
        assert attrs.literal(AttributeKind.WIDTH) == Length.fill()
        assert "duplicate attribute 'width'" in caplog.text

    @pytest.mark.unit
    def test_duplicate_through_synonym(self):
        """A synonym counts as the same key."""
        attrs = parse_attributes("bg: #000, background: #f00")
        assert attrs.literal(AttributeKind.BACKGROUND) == Background(fill=RED)

    @pytest.mark.unit
    def test_duplicate_reject(self):
        """The reject policy fails at the second key."""
        with pytest.raises(DuplicateKey) as info:
            parse_attributes("width: 10, clip: true, width: fill", policy=DuplicateKeyPolicy.REJECT)
        assert info.value.key == "width"
        assert info.value.position == 23

    @pytest.mark.unit
    def test_duplicate_policy_from_environment(self, monkeypatch):
        """The policy is read from the environment on each parse."""
        monkeypatch.setenv("SNOWMARK_DUPLICATE_KEYS", "reject")
        with pytest.raises(DuplicateKey):
            parse_attributes("clip: true, clip: false")


class TestAttributeSet:
    """Tests for the AttributeSet mapping API."""

    @pytest.mark.unit
    def test_mapping_access(self):
        """Entries are reachable by kind."""
        attrs = parse_attributes("clip: true, label: theme!(1)")
        assert AttributeKind.CLIP in attrs
        assert AttributeKind.WIDTH not in attrs
        assert attrs.get(AttributeKind.WIDTH) is None
        assert attrs[AttributeKind.CLIP] == LiteralValue(value=Flag(value=True))
        assert attrs.literal(AttributeKind.LABEL) is None
        assert [kind for kind, _ in attrs.items()] == [AttributeKind.CLIP, AttributeKind.LABEL]
        with pytest.raises(KeyError):
            attrs[AttributeKind.WIDTH]

    @pytest.mark.unit
    def test_unique_kinds(self):
        """A set cannot hold the same kind twice."""
        entry = Attribute(kind=AttributeKind.CLIP, value=LiteralValue(value=Flag(value=True)))
        with pytest.raises(ValidationError):
            AttributeSet(entries=(entry, entry))

    @pytest.mark.unit
    def test_json_round_trip(self):
        """Attribute sets survive a JSON round trip."""
        attrs = parse_attributes(
            "padding: 1, 2, width: fill-portion(2), background: gradient(0.5, [#fff@0.0]), label: a!{b: [1, null]}"
        )
        assert AttributeSet.model_validate_json(attrs.model_dump_json()) == attrs
