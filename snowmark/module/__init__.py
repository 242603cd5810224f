"""Module invocations and their parser."""

from .lib import (
    MODULE_RULES,
    POSITIONAL,
    ModuleArgument,
    ModuleInvocationParser,
    ModuleRef,
    looks_like_module,
    parse_module,
)

__all__ = [
    "POSITIONAL",
    "MODULE_RULES",
    "ModuleArgument",
    "ModuleRef",
    "ModuleInvocationParser",
    "looks_like_module",
    "parse_module",
]
