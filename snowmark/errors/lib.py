"""Positioned error taxonomy shared by every parsing stage.

Every failure raised while turning markup text into a document derives from
MarkupError. Errors carry the input they refer to and a character offset
into it, so callers can render a diagnostic without re-reading the source.
Stages that hand a span to a sub-parser call `relocate()` on the way out so
the position always refers to the outermost input.
"""

from __future__ import annotations

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


class MarkupError(ValueError):
    """Base class for all markup parse failures.

    Attributes:
        message: Human readable description without location.
        position: Character offset into `text`, or None when unknown.
        text: The input the position refers to.
    """

    def __init__(
        self,
        message: str,
        position: int | None = None,
        text: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.position = position
        self.text = text

    @property
    def line(self) -> int | None:
        """1-based line of the error position."""
        if self.position is None or self.text is None:
            return None
        return self.text.count("\n", 0, self.position) + 1

    @property
    def column(self) -> int | None:
        """1-based column of the error position."""
        if self.position is None or self.text is None:
            return None
        line_start = self.text.rfind("\n", 0, self.position) + 1
        return self.position - line_start + 1

    def relocate(self, offset: int, text: str) -> MarkupError:
        """Re-base the position onto an enclosing input.

        Args:
            offset: Where the sub-parser's input starts inside `text`.
            text: The enclosing input.

        Returns:
            The same error, for use in `raise` statements.
        """
        if self.position is not None:
            self.position += offset
            self.text = text
        return self

    def describe(self) -> str:
        """Render the error with the offending source line and a caret."""
        if self.line is None:
            return f"error: {self.message}"

        line_start = self.text.rfind("\n", 0, self.position) + 1
        line_end = self.text.find("\n", self.position)
        source_line = self.text[line_start : line_end if line_end != -1 else len(self.text)]
        gutter = " " * len(str(self.line))
        return "\n".join(
            [
                f"error: {self.message}",
                f"{gutter}--> line {self.line}, column {self.column}",
                f"{gutter} |",
                f"{self.line} | {source_line}",
                f"{gutter} | {' ' * (self.column - 1)}^",
            ]
        )

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} (line {self.line}, column {self.column})"


# =============================================================================
# Structural errors
# =============================================================================


class StructuralError(MarkupError):
    """Failure in the document-level grammar."""


class UnbalancedDelimiter(StructuralError):
    """An opening delimiter was never closed."""

    def __init__(self, delimiter: str, position: int | None = None, text: str | None = None):
        super().__init__(f"unterminated '{delimiter}'", position, text)
        self.delimiter = delimiter


class UnexpectedToken(StructuralError):
    """Input did not match the grammar at the given position."""

    def __init__(self, position: int | None = None, text: str | None = None, expected: str = ""):
        found = _excerpt(text, position)
        message = f"unexpected {found}"
        if expected:
            message += f", expected {expected}"
        super().__init__(message, position, text)
        self.expected = expected


class ExpectedElementList(StructuralError):
    """A row, column or stack was not followed by a bracketed element list."""

    def __init__(self, keyword: str, position: int | None = None, text: str | None = None):
        super().__init__(f"'{keyword}' requires a bracketed element list", position, text)
        self.keyword = keyword


class EmptyElementList(StructuralError):
    """A bracketed element list has no elements."""

    def __init__(self, position: int | None = None, text: str | None = None):
        super().__init__("element list must not be empty", position, text)


class NestingTooDeep(StructuralError):
    """Input nests deeper than the interpreter recursion limit lets a stage follow."""

    def __init__(self, depth: int, position: int | None = None, text: str | None = None):
        super().__init__(f"nesting of {depth} levels exceeds the recursion limit", position, text)
        self.depth = depth


# =============================================================================
# Attribute errors
# =============================================================================


class AttributeBlockError(MarkupError):
    """Failure inside an attribute block."""


class UnknownAttributeKey(AttributeBlockError):
    def __init__(self, key: str, position: int | None = None, text: str | None = None):
        super().__init__(f"unknown attribute '{key}'", position, text)
        self.key = key


class InvalidValueShape(AttributeBlockError):
    """The value text does not match any shape the attribute accepts."""

    def __init__(
        self,
        key: str,
        value_text: str,
        position: int | None = None,
        text: str | None = None,
    ):
        super().__init__(f"invalid value '{value_text}' for attribute '{key}'", position, text)
        self.key = key
        self.value_text = value_text


class DuplicateKey(AttributeBlockError):
    def __init__(self, key: str, position: int | None = None, text: str | None = None):
        super().__init__(f"duplicate attribute '{key}'", position, text)
        self.key = key


# =============================================================================
# Value errors
# =============================================================================


class MalformedValue(MarkupError):
    """Text that is not a literal value."""


class MalformedNumber(MalformedValue):
    def __init__(self, token: str, position: int | None = None, text: str | None = None):
        super().__init__(f"malformed number '{token}'", position, text)
        self.token = token


class MalformedString(MalformedValue):
    def __init__(
        self,
        token: str,
        reason: str = "",
        position: int | None = None,
        text: str | None = None,
    ):
        message = f"malformed string {token}"
        if reason:
            message += f": {reason}"
        super().__init__(message, position, text)
        self.token = token
        self.reason = reason


# =============================================================================
# Color and gradient errors
# =============================================================================


class ColorError(MarkupError):
    """Failure in a color or gradient literal."""


class MalformedColor(ColorError):
    def __init__(
        self,
        color_text: str,
        reason: str = "",
        position: int | None = None,
        text: str | None = None,
    ):
        message = f"malformed color '{color_text}'"
        if reason:
            message += f": {reason}"
        super().__init__(message, position, text)
        self.color_text = color_text
        self.reason = reason


class MalformedGradient(ColorError):
    def __init__(self, gradient_text: str, position: int | None = None, text: str | None = None):
        super().__init__(f"malformed gradient '{gradient_text}'", position, text)
        self.gradient_text = gradient_text


class StopListOverflow(ColorError):
    """A gradient listed more stops than the format allows."""

    def __init__(self, count: int, limit: int, position: int | None = None, text: str | None = None):
        super().__init__(f"gradient has {count} stops, at most {limit} allowed", position, text)
        self.count = count
        self.limit = limit


# =============================================================================
# Module errors
# =============================================================================


class ModuleError(MarkupError):
    """Failure in a module invocation."""


class InvalidModuleName(ModuleError):
    def __init__(self, name: str, position: int | None = None, text: str | None = None):
        super().__init__(f"invalid module name '{name}'", position, text)
        self.name = name


class ReservedArgumentName(ModuleError):
    """Argument names starting with '_' are reserved for synthesized arguments."""

    def __init__(self, name: str, position: int | None = None, text: str | None = None):
        super().__init__(f"argument name '{name}' is reserved", position, text)
        self.name = name


class MissingArgument(ModuleError):
    def __init__(self, module: str, name: str):
        super().__init__(f"module '{module}' has no argument '{name}'")
        self.module = module
        self.name = name


class ConversionError(TypeError):
    """A value was read as a type it does not hold."""

    def __init__(self, expected: str, actual: str):
        super().__init__(f"expected {expected} value, got {actual}")
        self.expected = expected
        self.actual = actual


def _excerpt(text: str | None, position: int | None) -> str:
    if text is None or position is None:
        return "input"
    if position >= len(text):
        return "end of input"
    return repr(text[position : position + 10].split("\n")[0])
