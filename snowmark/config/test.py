"""Tests for configuration management."""

import pytest

from .lib import (
    DuplicateKeyPolicy,
    EnvConfig,
    EnvVar,
    get_duplicate_key_policy,
    get_environment,
    get_environment_info,
    get_log_level,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("SNOWMARK_LOG_LEVEL", raising=False)
        assert get_environment(EnvVar.SNOWMARK_LOG_LEVEL) == "WARNING"

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("SNOWMARK_LOG_LEVEL", "DEBUG")
        assert get_environment(EnvVar.SNOWMARK_LOG_LEVEL, override="ERROR") == "ERROR"

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("SNOWMARK_DUPLICATE_KEYS", "reject")
        assert get_environment(EnvVar.SNOWMARK_DUPLICATE_KEYS) == "reject"


# =============================================================================
# Tests for convenience accessors
# =============================================================================


class TestDuplicateKeyPolicy:
    """Tests for get_duplicate_key_policy."""

    @pytest.mark.unit
    def test_default_is_last_wins(self, monkeypatch):
        """Without configuration the later duplicate wins."""
        monkeypatch.delenv("SNOWMARK_DUPLICATE_KEYS", raising=False)
        assert get_duplicate_key_policy() is DuplicateKeyPolicy.LAST_WINS

    @pytest.mark.unit
    def test_reject_from_environment(self, monkeypatch):
        """The environment value is trimmed and case-folded."""
        monkeypatch.setenv("SNOWMARK_DUPLICATE_KEYS", " Reject ")
        assert get_duplicate_key_policy() is DuplicateKeyPolicy.REJECT

    @pytest.mark.unit
    def test_unknown_environment_value_falls_back(self, monkeypatch):
        """An unrecognized environment value falls back to the default."""
        monkeypatch.setenv("SNOWMARK_DUPLICATE_KEYS", "first-wins")
        assert get_duplicate_key_policy() is DuplicateKeyPolicy.LAST_WINS

    @pytest.mark.unit
    def test_override_string(self, monkeypatch):
        """An explicit policy string beats the environment."""
        monkeypatch.setenv("SNOWMARK_DUPLICATE_KEYS", "reject")
        assert get_duplicate_key_policy("last-wins") is DuplicateKeyPolicy.LAST_WINS

    @pytest.mark.unit
    def test_invalid_override_raises(self):
        """An unrecognized explicit policy is a ValueError."""
        with pytest.raises(ValueError):
            get_duplicate_key_policy("sometimes")


class TestIntrospection:
    """Tests for metadata helpers."""

    @pytest.mark.unit
    def test_log_level_upper_cased(self, monkeypatch):
        """Log level names are upper-cased."""
        monkeypatch.setenv("SNOWMARK_LOG_LEVEL", "info")
        assert get_log_level() == "INFO"

    @pytest.mark.unit
    def test_environment_info(self):
        """Metadata is available per variable."""
        info = get_environment_info(EnvVar.SNOWMARK_DUPLICATE_KEYS)
        assert isinstance(info, EnvConfig)
        assert info.category == "parser"

    @pytest.mark.unit
    def test_list_by_category(self):
        """Variables can be listed by category."""
        assert list_environment_variables("logging") == [EnvVar.SNOWMARK_LOG_LEVEL]
        assert len(list_environment_variables()) == len(EnvVar)
