"""
Integration tests for the item pool over a live Redis server.

Skipped when Redis at REDIS_URL is not reachable.
"""

from datetime import timedelta

import pytest

from cachebridge.domain.cache.entities import CacheItem
from cachebridge.infrastructure.redis.exceptions import RedisConnectionException
from cachebridge.infrastructure.redis.redis_store import RedisCacheStore
from cachebridge.infrastructure.redis.connection_factory import create_redis_client
from cachebridge.services.cache.pool_factory import cache_item_pool


@pytest.fixture
def redis_store(test_settings):
    """Create a Redis store in an isolated namespace, flushing it afterwards."""
    try:
        client = create_redis_client(test_settings, ping=True)
    except RedisConnectionException as e:
        pytest.skip(f"Redis not reachable - ensure it's running: {e.message}")

    store = RedisCacheStore(client, prefix=test_settings.CACHE_PREFIX)
    store.flush()
    yield store
    store.flush()
    client.close()


class TestRedisPoolIntegration:
    """Exercise the full read / defer / commit cycle against Redis."""

    def test_deferred_items_reach_redis_on_exit(self, redis_store):
        with cache_item_pool(store=redis_store) as pool:
            item = pool.get_item("profile")
            assert item.is_hit() is False

            item.set({"name": "Matthew"}).expires_after(timedelta(minutes=10))
            assert pool.save_deferred(item) is True
            assert redis_store.has("profile") is False

        assert redis_store.has("profile") is True
        ttl = redis_store.client.ttl(f"{redis_store.prefix}profile")
        assert 9 * 60 <= ttl <= 10 * 60

    def test_round_trip_values(self, redis_store):
        with cache_item_pool(store=redis_store) as pool:
            assert pool.save(CacheItem("counter", 5, True)) is True
            assert pool.save(CacheItem("nothing", None, True)) is True

            counter = pool.get_item("counter")
            assert counter.is_hit() is True
            assert counter.get() == 5
            assert redis_store.client.incr(f"{redis_store.prefix}counter") == 6

            nothing = pool.get_item("nothing")
            assert nothing.is_hit() is True
            assert nothing.get() is None

    def test_delete_and_clear(self, redis_store):
        with cache_item_pool(store=redis_store) as pool:
            pool.save(CacheItem("a", "A", True))
            pool.save(CacheItem("b", "B", True))

            assert pool.delete_items(["a", "missing"]) is True
            assert pool.has_item("a") is False
            assert pool.has_item("b") is True

            assert pool.clear() is True
            assert pool.has_item("b") is False
