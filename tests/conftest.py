"""Shared fixtures for depgraph-core tests."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    """Drop the console handler ``cli.main`` installs on the root logger."""
    root_logger = logging.getLogger()
    original_level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if handler.get_name() == "depgraph-console":
            root_logger.removeHandler(handler)
    root_logger.setLevel(original_level)
