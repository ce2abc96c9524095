"""
Redis Cache Store

Redis implementation of the CacheStore interface.
Keys are namespaced with a prefix; whole-minute TTLs map to SET ... EX.
"""

import logging
import pickle
import re
from typing import Any, List, Optional

import redis
from redis.exceptions import RedisError

from ...core.config import Settings, get_settings
from ...domain.cache.repository_interfaces import CacheStore
from ...domain.cache.value_objects import TTL
from .connection_factory import create_redis_client
from .exceptions import RedisStoreException

logger = logging.getLogger(__name__)

_INTEGER_PATTERN = re.compile(rb"^-?[0-9]+$")
_GLOB_SPECIALS = re.compile(r"([*?\[\]\\])")


class RedisCacheStore(CacheStore):
    """
    Redis-backed cache store.

    Integers are stored as plain strings so they stay usable with INCR;
    every other value is pickled.
    """

    FLUSH_BATCH_SIZE = 500

    def __init__(self, client: redis.Redis, prefix: str = ""):
        """
        Initialize the store.

        Args:
            client: Synchronous Redis client (decode_responses must be off)
            prefix: Namespace prepended to every key
        """
        self.client = client
        self.prefix = prefix

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "RedisCacheStore":
        """Create a store with a client built from settings."""
        settings = settings or get_settings()
        return cls(create_redis_client(settings), prefix=settings.cache_prefix)

    def has(self, key: str) -> bool:
        return self._call("exists", key, self.client.exists, self._prefixed(key)) > 0

    def get(self, key: str) -> Any:
        raw = self._call("get", key, self.client.get, self._prefixed(key))
        if raw is None:
            return None
        return self.unserialize(raw)

    def put(self, key: str, value: Any, minutes: int) -> None:
        if minutes < 1:
            raise ValueError(f"TTL must be at least one minute, got {minutes}")
        self._call(
            "set",
            key,
            self.client.set,
            self._prefixed(key),
            self.serialize(value),
            ex=TTL(minutes).seconds,
        )
        logger.debug(f"Stored cache key {key} for {minutes} minutes")

    def forever(self, key: str, value: Any) -> None:
        self._call("set", key, self.client.set, self._prefixed(key), self.serialize(value))
        logger.debug(f"Stored cache key {key} without expiry")

    def forget(self, key: str) -> bool:
        return self._call("delete", key, self.client.delete, self._prefixed(key)) > 0

    def flush(self) -> None:
        """Delete every key in this store's namespace."""
        if not self.prefix:
            self._call("flushdb", None, self.client.flushdb)
            return

        pattern = _GLOB_SPECIALS.sub(r"\\\1", self.prefix) + "*"
        deleted = 0
        try:
            batch: List[bytes] = []
            for redis_key in self.client.scan_iter(match=pattern, count=self.FLUSH_BATCH_SIZE):
                batch.append(redis_key)
                if len(batch) >= self.FLUSH_BATCH_SIZE:
                    deleted += self.client.delete(*batch)
                    batch = []
            if batch:
                deleted += self.client.delete(*batch)
        except RedisError as e:
            logger.error(f"Failed to flush cache namespace {self.prefix}: {e}")
            raise RedisStoreException("flush", original_error=e) from e

        logger.info(f"Flushed {deleted} keys from cache namespace {self.prefix}")

    @staticmethod
    def serialize(value: Any) -> bytes:
        if isinstance(value, int) and not isinstance(value, bool):
            return repr(value).encode()
        return pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL)

    @staticmethod
    def unserialize(raw: bytes) -> Any:
        if _INTEGER_PATTERN.match(raw):
            return int(raw)
        return pickle.loads(raw)

    def _prefixed(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def _call(self, operation: str, key: Optional[str], func, *args, **kwargs):
        try:
            return func(*args, **kwargs)
        except RedisError as e:
            logger.error(f"Redis {operation} failed for cache key {key}: {e}")
            raise RedisStoreException(operation, key=key, original_error=e) from e
