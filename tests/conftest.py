"""Shared fixtures."""

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def _restore_wicket_logger() -> Iterator[None]:
    """Undo ``configure_logging()`` so caplog keeps seeing ``wicket.*`` records."""
    logger = logging.getLogger("wicket")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
