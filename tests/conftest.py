"""
Main pytest configuration for doccache tests.

Fixtures, configuration, and utilities for unit tests.
"""

import os
from unittest.mock import MagicMock

import pytest

# Set test environment variables before importing package modules
os.environ["DOCCACHE_ENVIRONMENT"] = "test"
os.environ["DOCCACHE_LOG_LEVEL"] = "DEBUG"

from doccache.core.config import get_settings
from doccache.core.logging import configure_logging
from doccache.domain.cache import LogLevel, LogMapping, ModelCache

from tests.fixtures.cache_records import EventRecorder, make_cars

configure_logging(get_settings())


@pytest.fixture
def debug_log_mapping():
    """Log mapping routing every operation to debug."""
    return LogMapping(
        add=LogLevel.DEBUG,
        update=LogLevel.DEBUG,
        delete=LogLevel.DEBUG,
        import_=LogLevel.DEBUG,
        clear=LogLevel.DEBUG,
    )


@pytest.fixture
def log_spy():
    """Logger spy; every level method is a MagicMock."""
    return MagicMock()


@pytest.fixture
def car_cache(log_spy, debug_log_mapping):
    """Empty Car cache wired to the log spy."""
    return ModelCache("Car", logger=log_spy, log_mapping=debug_log_mapping)


@pytest.fixture
def recorder(car_cache):
    """Event recorder subscribed to every car_cache event."""
    return EventRecorder(car_cache)


@pytest.fixture
def cars():
    """Thirty cars with generated record ids."""
    return make_cars(30)
