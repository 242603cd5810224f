"""Error taxonomy for snowmark parsing stages."""

from .lib import (
    AttributeBlockError,
    ColorError,
    ConversionError,
    DuplicateKey,
    EmptyElementList,
    ExpectedElementList,
    InvalidModuleName,
    InvalidValueShape,
    MalformedColor,
    MalformedGradient,
    MalformedNumber,
    MalformedString,
    MalformedValue,
    MarkupError,
    MissingArgument,
    ModuleError,
    NestingTooDeep,
    ReservedArgumentName,
    StopListOverflow,
    StructuralError,
    UnbalancedDelimiter,
    UnexpectedToken,
    UnknownAttributeKey,
)

__all__ = [
    "MarkupError",
    "StructuralError",
    "UnbalancedDelimiter",
    "UnexpectedToken",
    "ExpectedElementList",
    "EmptyElementList",
    "NestingTooDeep",
    "AttributeBlockError",
    "UnknownAttributeKey",
    "InvalidValueShape",
    "DuplicateKey",
    "MalformedValue",
    "MalformedNumber",
    "MalformedString",
    "ColorError",
    "MalformedColor",
    "MalformedGradient",
    "StopListOverflow",
    "ModuleError",
    "InvalidModuleName",
    "ReservedArgumentName",
    "MissingArgument",
    "ConversionError",
]
