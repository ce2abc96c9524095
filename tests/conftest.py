"""
Main pytest configuration for cachebridge tests.

Fixtures, configuration, and utilities for unit and integration tests.
"""

import os
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
import structlog

# Set test environment variables before importing package modules
os.environ["ENVIRONMENT"] = "test"
os.environ["REDIS_URL"] = "redis://localhost:6379/15"
os.environ["CACHE_PREFIX"] = "cachebridge-test:"
os.environ["LOG_LEVEL"] = "DEBUG"

from cachebridge.core.config import Settings
from cachebridge.domain.cache.repository_interfaces import CacheStore
from cachebridge.services.cache.item_pool import CacheItemPool

# Configure logging for tests
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

FIXED_NOW = datetime(2030, 6, 30, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def test_settings():
    """Provide isolated test settings."""
    return Settings(
        ENVIRONMENT="test",
        REDIS_URL="redis://localhost:6379/15",
        CACHE_PREFIX="cachebridge-test:",
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def mock_store():
    """Create mock backing store with an empty-cache default."""
    store = MagicMock(spec=CacheStore)
    store.has.return_value = False
    store.forget.return_value = True
    return store


@pytest.fixture
def pool(mock_store):
    """Create a cache item pool over the mock store."""
    pool = CacheItemPool(mock_store)
    yield pool
    pool.close()


@pytest.fixture
def frozen_now():
    """Freeze the pool's clock at FIXED_NOW, honouring the requested timezone."""

    def _now(tz=None):
        return FIXED_NOW.astimezone(tz or timezone.utc)

    with patch("cachebridge.services.cache.item_pool.current_time", side_effect=_now):
        yield FIXED_NOW


def pytest_collection_modifyitems(config, items):
    """Add markers based on test file location."""
    for item in items:
        if "redis" in item.nodeid:
            item.add_marker(pytest.mark.redis)
        if "integration" in item.nodeid:
            item.add_marker(pytest.mark.integration)
