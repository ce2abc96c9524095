"""
Cache Domain Module

Domain-Driven Design implementation for cache items.
Contains the cache item entity, value objects, the backing store
interface and domain exceptions.
"""

from .entities import CacheItem
from .exceptions import CacheException, InvalidExpiryException, InvalidKeyException
from .repository_interfaces import CacheStore
from .value_objects import TTL, CacheKey

__all__ = [
    "CacheItem",
    "CacheKey",
    "TTL",
    "CacheStore",
    "CacheException",
    "InvalidKeyException",
    "InvalidExpiryException",
]
