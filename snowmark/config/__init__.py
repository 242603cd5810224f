"""Centralized configuration management for snowmark.

Environment Variable Categories:
    logging: Log output configuration
    parser: Parsing policy switches
"""

from .lib import (
    # Core types
    DuplicateKeyPolicy,
    EnvConfig,
    EnvVar,
    # Main interface
    get_duplicate_key_policy,
    get_environment,
    get_environment_info,
    get_log_level,
    # Introspection
    list_environment_variables,
)

__all__ = [
    "DuplicateKeyPolicy",
    "EnvConfig",
    "EnvVar",
    "get_environment",
    "get_environment_info",
    "get_log_level",
    "get_duplicate_key_policy",
    "list_environment_variables",
]
