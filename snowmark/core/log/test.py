"""Tests for core logging module."""

import logging
from io import StringIO

import pytest

from .lib import get_logger, setup_logging


class TestLogging:
    """Test core logging API."""

    @pytest.mark.unit
    def test_get_logger(self) -> None:
        """Verify logger instance creation."""
        logger = get_logger("snowmark.test")
        assert logger.name == "snowmark.test"
        assert isinstance(logger, logging.Logger)

    @pytest.mark.unit
    def test_get_logger_default_name(self) -> None:
        """Verify default logger name."""
        logger = get_logger()
        assert logger.name == "snowmark"

    @pytest.mark.unit
    def test_parser_loggers_are_children(self) -> None:
        """Stage loggers propagate to the package logger."""
        logger = get_logger("snowmark.parser")
        assert logger.parent is get_logger()

    @pytest.mark.unit
    def test_setup_logging_accepts_level_names(self, monkeypatch) -> None:
        """String levels and the configured default are both accepted."""
        monkeypatch.setenv("SNOWMARK_LOG_LEVEL", "debug")
        setup_logging(stream=StringIO())
        setup_logging(level="INFO", stream=StringIO())

        # basicConfig is a no-op once the root logger has handlers, so only
        # the API contract is checked here.
        assert get_logger("snowmark.setup").level == logging.NOTSET
