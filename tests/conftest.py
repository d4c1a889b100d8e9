"""Shared fixtures for the RSS reader tests."""

from __future__ import annotations

import logging

import pytest

from rss_reader.logging_utils import LOGGER_NAME


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo handler/propagation changes made by setup_logging in CLI tests."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
