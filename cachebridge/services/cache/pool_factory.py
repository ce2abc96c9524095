"""
Cache Item Pool Factory

Wires settings, backing store and item pool together, and provides a
scoped pool whose deferred items are committed on every exit path.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

import structlog

from ...core.config import Settings, get_settings
from ...domain.cache.repository_interfaces import CacheStore
from ...infrastructure.redis.redis_store import RedisCacheStore
from .item_pool import CacheItemPool

logger = structlog.get_logger(__name__)


def create_cache_item_pool(
    store: Optional[CacheStore] = None, settings: Optional[Settings] = None
) -> CacheItemPool:
    """Create a pool over ``store``, or over a Redis store built from settings."""
    if store is None:
        settings = settings or get_settings()
        store = RedisCacheStore.from_settings(settings)
        logger.debug("Created Redis cache store", prefix=settings.cache_prefix)

    return CacheItemPool(store)


@contextmanager
def cache_item_pool(
    store: Optional[CacheStore] = None, settings: Optional[Settings] = None
) -> Iterator[CacheItemPool]:
    """
    Yield a pool for one unit of work and commit it when the block exits.

    The commit also runs when the block raises; the exception still propagates.
    """
    pool = create_cache_item_pool(store=store, settings=settings)
    try:
        yield pool
    finally:
        if not pool.close():
            logger.warning("Cache item pool committed with failures")
