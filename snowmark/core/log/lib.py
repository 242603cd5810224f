"""Core logging implementation for snowmark."""

import logging
import sys
from typing import Optional, Union

__all__ = ["get_logger", "setup_logging"]


def setup_logging(level: Optional[Union[int, str]] = None, stream=sys.stderr) -> None:
    """Configure basic logging.

    The parsers only emit records; configuring handlers is left to the
    application embedding snowmark.

    Args:
        level: Logging level. Defaults to SNOWMARK_LOG_LEVEL.
        stream: Output stream.
    """
    if level is None:
        from snowmark.config import get_log_level

        level = get_log_level()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=stream,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Name of the logger.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name or "snowmark")
