"""Centralized environment configuration management for snowmark.

Provides a unified interface for the few knobs the parsers expose:
- Single `get_environment()` function for all configuration
- Type-safe enum with metadata (default, type, description)
- Consistent resolution: override > environment > default

Example:
    >>> from snowmark.config import EnvVar, get_environment
    >>>
    >>> level = get_environment(EnvVar.SNOWMARK_LOG_LEVEL)  # "WARNING"
    >>> policy = get_duplicate_key_policy()  # DuplicateKeyPolicy.LAST_WINS
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "SNOWMARK_LOG_LEVEL").
        default: Default value if not set in environment.
        description: Human-readable description.
        category: Grouping category for documentation.
    """

    name: str
    default: str
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """All environment variables used by snowmark.

    Categories:
        - logging: Log output configuration
        - parser: Parsing policy switches
    """

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    SNOWMARK_LOG_LEVEL = EnvConfig(
        name="SNOWMARK_LOG_LEVEL",
        default="WARNING",
        description="Level used by setup_logging() when none is given",
        category="logging",
    )

    # -------------------------------------------------------------------------
    # Parser Policy
    # -------------------------------------------------------------------------
    SNOWMARK_DUPLICATE_KEYS = EnvConfig(
        name="SNOWMARK_DUPLICATE_KEYS",
        default="last-wins",
        description="Duplicate attribute key policy: 'last-wins' or 'reject'",
        category="parser",
    )


class DuplicateKeyPolicy(str, Enum):
    """What an attribute block does when a key appears twice."""

    LAST_WINS = "last-wins"
    REJECT = "reject"


# =============================================================================
# Main Interface
# =============================================================================


def get_environment(env_var: EnvVar, override: str | None = None) -> str:
    """Get an environment variable value.

    Resolution priority:
        1. Explicit override parameter (highest)
        2. Environment variable value
        3. Default from EnvConfig (lowest)

    Args:
        env_var: Environment variable enum member.
        override: Optional override value (bypasses env lookup).

    Returns:
        The override, the environment value, or the default.
    """
    config: EnvConfig = env_var.value

    if override is not None:
        return override

    return os.environ.get(config.name, config.default)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable."""
    return env_var.value


# =============================================================================
# Convenience Functions
# =============================================================================


def get_log_level(override: str | None = None) -> str:
    """Get the configured log level name, upper-cased."""
    return get_environment(EnvVar.SNOWMARK_LOG_LEVEL, override).upper()


def get_duplicate_key_policy(
    override: DuplicateKeyPolicy | str | None = None,
) -> DuplicateKeyPolicy:
    """Get the duplicate attribute key policy.

    Resolution: override > SNOWMARK_DUPLICATE_KEYS > last-wins. An
    unrecognized environment value falls back to the default; an
    unrecognized override raises ValueError.
    """
    if override is not None:
        return DuplicateKeyPolicy(override)

    raw = get_environment(EnvVar.SNOWMARK_DUPLICATE_KEYS)
    try:
        return DuplicateKeyPolicy(raw.strip().lower())
    except ValueError:
        return DuplicateKeyPolicy(EnvVar.SNOWMARK_DUPLICATE_KEYS.value.default)


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List all environment variables, optionally filtered by category.

    Args:
        category: Filter by category (logging, parser).
                 None returns all variables.

    Returns:
        List of EnvVar enum members.
    """
    if category is None:
        return list(EnvVar)

    return [var for var in EnvVar if var.value.category == category]


__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    "DuplicateKeyPolicy",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Convenience functions
    "get_log_level",
    "get_duplicate_key_policy",
    # Introspection
    "list_environment_variables",
]
