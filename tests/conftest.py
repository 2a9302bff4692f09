"""Shared fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def _restore_wren_logger():
    """Undo handler/level changes made by configure_logging() and the CLI."""
    logger = logging.getLogger("wren")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
