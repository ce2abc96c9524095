"""
Cache Services

Item pool facade with deferred writes, and its factory.
"""

from .item_pool import CacheItemPool
from .pool_factory import cache_item_pool, create_cache_item_pool

__all__ = ["CacheItemPool", "cache_item_pool", "create_cache_item_pool"]
