"""
Redis Infrastructure Module

Redis-backed implementation of the cache store contract.

This module provides:
- RedisCacheStore: CacheStore on a synchronous Redis client
- create_redis_client: client construction from settings
- Exceptions wrapping Redis client errors
"""

from .connection_factory import create_redis_client
from .exceptions import RedisConnectionException, RedisStoreException
from .redis_store import RedisCacheStore

__all__ = [
    # Store
    "RedisCacheStore",
    # Connection management
    "create_redis_client",
    # Exceptions
    "RedisStoreException",
    "RedisConnectionException",
]
