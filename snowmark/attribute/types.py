"""Typed attribute values, one model per attribute family.

Each model carries a literal `type` tag so a TypedValue round-trips through
JSON without ambiguity.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, model_validator

from snowmark.color import Color
from snowmark.gradient import Gradient
from snowmark.schema import Alignment, Axis, LengthMode, ShapingMode, WrapMode

U32_MAX = 2**32 - 1


class Padding(BaseModel):
    """Inner spacing per side, in pixels."""

    type: Literal["padding"] = "padding"
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0

    model_config = {"frozen": True}

    @classmethod
    def uniform(cls, value: float) -> "Padding":
        return cls(top=value, right=value, bottom=value, left=value)

    @classmethod
    def symmetric(cls, vertical: float, horizontal: float) -> "Padding":
        return cls(top=vertical, right=horizontal, bottom=vertical, left=horizontal)


class Length(BaseModel):
    """One-axis sizing strategy.

    Attributes:
        mode: Fixed size, fill, weighted fill or shrink-to-content.
        pixels: Size for FIXED.
        portion: Weight for FILL_PORTION.
    """

    type: Literal["length"] = "length"
    mode: LengthMode
    pixels: float | None = None
    portion: int | None = Field(None, ge=0, le=U32_MAX)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_payload(self) -> "Length":
        if (self.mode == LengthMode.FIXED) != (self.pixels is not None):
            raise ValueError("pixels is set exactly when mode is fixed")
        if (self.mode == LengthMode.FILL_PORTION) != (self.portion is not None):
            raise ValueError("portion is set exactly when mode is fill-portion")
        return self

    @classmethod
    def fill(cls) -> "Length":
        return cls(mode=LengthMode.FILL)

    @classmethod
    def shrink(cls) -> "Length":
        return cls(mode=LengthMode.SHRINK)

    @classmethod
    def fill_portion(cls, portion: int) -> "Length":
        return cls(mode=LengthMode.FILL_PORTION, portion=portion)

    @classmethod
    def fixed(cls, pixels: float) -> "Length":
        return cls(mode=LengthMode.FIXED, pixels=pixels)


class Pixels(BaseModel):
    type: Literal["pixels"] = "pixels"
    value: float

    model_config = {"frozen": True}


class HorizontalAlign(BaseModel):
    type: Literal["horizontal_align"] = "horizontal_align"
    align: Alignment

    model_config = {"frozen": True}


class VerticalAlign(BaseModel):
    type: Literal["vertical_align"] = "vertical_align"
    align: Alignment

    model_config = {"frozen": True}


class Background(BaseModel):
    """Background fill: a solid color or a gradient."""

    type: Literal["background"] = "background"
    fill: Annotated[Union[Color, Gradient], Field(discriminator="type")]

    model_config = {"frozen": True}


class Radius(BaseModel):
    """Corner radii, clockwise from the top-left corner."""

    top_left: float = 0.0
    top_right: float = 0.0
    bottom_right: float = 0.0
    bottom_left: float = 0.0

    model_config = {"frozen": True}

    @classmethod
    def uniform(cls, value: float) -> "Radius":
        return cls(top_left=value, top_right=value, bottom_right=value, bottom_left=value)

    @property
    def corners(self) -> tuple[float, float, float, float]:
        return (self.top_left, self.top_right, self.bottom_right, self.bottom_left)


class Border(BaseModel):
    type: Literal["border"] = "border"
    color: Color | None = None
    width: float | None = None
    radius: Radius = Field(default_factory=Radius)

    model_config = {"frozen": True}


class Shadow(BaseModel):
    """Shadow offsets per side, in pixels."""

    type: Literal["shadow"] = "shadow"
    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0

    model_config = {"frozen": True}


class Direction(BaseModel):
    type: Literal["direction"] = "direction"
    axis: Axis

    model_config = {"frozen": True}


class Wrapping(BaseModel):
    type: Literal["wrapping"] = "wrapping"
    mode: WrapMode

    model_config = {"frozen": True}


class Shaping(BaseModel):
    type: Literal["shaping"] = "shaping"
    mode: ShapingMode

    model_config = {"frozen": True}


class Flag(BaseModel):
    type: Literal["flag"] = "flag"
    value: bool

    model_config = {"frozen": True}


class Text(BaseModel):
    type: Literal["text"] = "text"
    value: str

    model_config = {"frozen": True}


TypedValue = Annotated[
    Union[
        Padding,
        Length,
        Pixels,
        HorizontalAlign,
        VerticalAlign,
        Color,
        Background,
        Border,
        Shadow,
        Direction,
        Wrapping,
        Shaping,
        Flag,
        Text,
    ],
    Field(discriminator="type"),
]

__all__ = [
    "U32_MAX",
    "Padding",
    "Length",
    "Pixels",
    "HorizontalAlign",
    "VerticalAlign",
    "Background",
    "Radius",
    "Border",
    "Shadow",
    "Direction",
    "Wrapping",
    "Shaping",
    "Flag",
    "Text",
    "TypedValue",
]
