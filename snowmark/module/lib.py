"""Module invocations and the ModuleInvocationParser stage.

A module invocation is a named placeholder resolved outside the parser:
`file!{path: "./logo.png"}`, `qr!("https://example.com")`. The parser
recognizes the syntax and types the arguments; which names exist and what
they do is the resolver's business, so unknown names are valid.
"""

import re

from parsimonious.exceptions import ParseError
from pydantic import BaseModel, Field

from snowmark.core.log import get_logger
from snowmark.errors import (
    InvalidModuleName,
    MalformedNumber,
    MalformedString,
    MarkupError,
    MissingArgument,
    ReservedArgumentName,
    UnexpectedToken,
)
from snowmark.grammar import LEXICAL_RULES, build_grammar, optional, repeated
from snowmark.value import VALUE_RULES, Value, ValueParser

logger = get_logger("snowmark.module")

# Name of the single argument of the `name!(value)` shorthand.
POSITIONAL = ""

_NAME = re.compile(r"[A-Za-z-]+\Z")
_INVOCATION_START = re.compile(r"\s*[A-Za-z0-9_-]+!")


class ModuleArgument(BaseModel):
    """One named argument of a module invocation."""

    name: str = Field(..., description="Argument name; empty for the positional shorthand")
    value: Value = Field(..., description="Argument value")

    model_config = {"frozen": True}


class ModuleRef(BaseModel):
    """A module invocation awaiting resolution.

    Attributes:
        name: Module name, letters and hyphens.
        arguments: Arguments in the order written.

    Example:
        >>> ref = parse_module('file!{path: "./a.txt"}')
        >>> ref.get("path").as_string()
        './a.txt'
    """

    name: str = Field(..., pattern=r"^[A-Za-z-]+$", description="Module name")
    arguments: tuple[ModuleArgument, ...] = Field(default=(), description="Ordered arguments")

    model_config = {"frozen": True}

    def get(self, name: str) -> Value:
        """Look up an argument value by name.

        Raises:
            MissingArgument: No argument has that name.
        """
        for argument in self.arguments:
            if argument.name == name:
                return argument.value
        raise MissingArgument(self.name, name)

    def has(self, name: str) -> bool:
        return any(argument.name == name for argument in self.arguments)

    @property
    def positional(self) -> Value | None:
        """Value of the `name!(value)` shorthand, if this invocation used it."""
        return self.get(POSITIONAL) if self.has(POSITIONAL) else None

    def with_argument(self, name: str, value: Value) -> "ModuleRef":
        """Copy with an argument added, replacing any argument of the same name."""
        arguments = [argument for argument in self.arguments if argument.name != name]
        arguments.append(ModuleArgument(name=name, value=value))
        return self.model_copy(update={"arguments": tuple(arguments)})

    def as_dict(self) -> dict[str, Value]:
        return {argument.name: argument.value for argument in self.arguments}


def looks_like_module(text: str) -> bool:
    """Whether text starts like a module invocation (`name!`)."""
    return _INVOCATION_START.match(text) is not None


MODULE_RULES = r"""
    module_root     = ws module_name "!" ws (named_args / positional_arg) ws
    module_name     = ~r"[A-Za-z0-9_-]+"
    named_args      = "{" ws arguments? ws "}"
    arguments       = argument (comma argument)*
    argument        = argument_name ws ":" ws value
    argument_name   = ~r"[A-Za-z_][A-Za-z0-9_-]*"
    positional_arg  = "(" ws value ws ")"
"""


class ModuleInvocationParser(ValueParser):
    """Parses `name!{arg: value, ...}` or `name!(value)` into a ModuleRef.

    Argument values use the literal value grammar, so the value visitors
    are inherited from ValueParser.
    """

    grammar = build_grammar(MODULE_RULES, VALUE_RULES, LEXICAL_RULES)
    default_rule = "module_root"

    def syntax_error(self, text: str, exc: ParseError) -> MarkupError:
        error = super().syntax_error(text, exc)
        if isinstance(error, (MalformedNumber, MalformedString)):
            return error
        return UnexpectedToken(error.position, text, expected="a module invocation")

    def visit_module_root(self, node, visited_children) -> ModuleRef:
        _, name, _, _, (arguments,), _ = visited_children
        logger.debug("parsed module %s with %d arguments", name, len(arguments))
        return ModuleRef(name=name, arguments=tuple(arguments))

    def visit_module_name(self, node, visited_children) -> str:
        if not _NAME.match(node.text):
            raise InvalidModuleName(node.text, node.start, node.full_text)
        return node.text

    def visit_named_args(self, node, visited_children) -> list[ModuleArgument]:
        _, _, arguments, _, _ = visited_children
        return optional(arguments) or []

    def visit_arguments(self, node, visited_children) -> list[ModuleArgument]:
        first, rest = visited_children
        merged: dict[str, ModuleArgument] = {}
        for argument in [first, *(argument for _, argument in repeated(rest))]:
            if argument.name in merged:
                logger.warning("duplicate module argument '%s'; later value wins", argument.name)
            merged[argument.name] = argument
        return list(merged.values())

    def visit_argument(self, node, visited_children) -> ModuleArgument:
        name, _, _, _, value = visited_children
        return ModuleArgument(name=name, value=value)

    def visit_argument_name(self, node, visited_children) -> str:
        if node.text.startswith("_"):
            raise ReservedArgumentName(node.text, node.start, node.full_text)
        return node.text

    def visit_positional_arg(self, node, visited_children) -> list[ModuleArgument]:
        _, _, value, _, _ = visited_children
        return [ModuleArgument(name=POSITIONAL, value=value)]


_parser = ModuleInvocationParser()


def parse_module(text: str) -> ModuleRef:
    """Parse a module invocation.

    Raises:
        InvalidModuleName: The name has characters other than letters and hyphens.
        ReservedArgumentName: An argument name starts with an underscore.
        UnexpectedToken: The text is not a module invocation.
    """
    return _parser.parse(text)


__all__ = [
    "POSITIONAL",
    "MODULE_RULES",
    "ModuleArgument",
    "ModuleRef",
    "ModuleInvocationParser",
    "looks_like_module",
    "parse_module",
]
