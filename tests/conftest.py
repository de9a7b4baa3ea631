"""Shared test setup."""
import sys

import pytest
from loguru import logger


@pytest.fixture(scope="session", autouse=True)
def quiet_logger():
    """Only warnings and above; the ladder sweeps log a debug line per call."""
    logger.remove()
    logger.add(sys.stderr, level="WARNING")
    yield
