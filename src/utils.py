"""Shared utilities for depgraph-core."""

from __future__ import annotations

import logging
import sys

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

SIMPLE_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Marks the handler installed here so repeated calls replace rather than stack.
_HANDLER_NAME = "depgraph-console"


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Install a single stderr handler on the root logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL),
            case-insensitive.

    Returns:
        The configured root logger.

    Raises:
        ValueError: If level is not a valid log level.
    """
    normalized = level.upper()
    if normalized not in VALID_LOG_LEVELS:
        msg = f"Invalid log level: {level}. Must be one of {', '.join(VALID_LOG_LEVELS)}"
        raise ValueError(msg)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, normalized))

    for handler in list(root_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(SIMPLE_FORMAT))
    root_logger.addHandler(handler)

    return root_logger


__all__ = ["VALID_LOG_LEVELS", "configure_logging"]
