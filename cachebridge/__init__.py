"""
cachebridge

Item pool facade with deferred writes over whole-minute TTL cache stores.
"""

from .domain.cache import (
    CacheException,
    CacheItem,
    CacheStore,
    InvalidExpiryException,
    InvalidKeyException,
)
from .services.cache import CacheItemPool, cache_item_pool, create_cache_item_pool

__version__ = "0.1.0"

__all__ = [
    "CacheItem",
    "CacheItemPool",
    "CacheStore",
    "cache_item_pool",
    "create_cache_item_pool",
    "CacheException",
    "InvalidKeyException",
    "InvalidExpiryException",
]
