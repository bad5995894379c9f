"""Shared pytest fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_alnentropy_logger():
    """Drop handlers the CLI attaches so they never outlive a test's captured stderr."""
    yield
    logger = logging.getLogger("alnentropy")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
