"""Shared pytest fixtures."""

import pytest

from bleeder.logger import logger


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers added by setup_logging so each test starts clean."""
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel("NOTSET")
