"""
Cache Repository Interfaces

Abstract backing-store contract consumed by the cache item pool.
The store speaks whole-minute TTLs and writes immediately; any
deferral or expiry translation happens in the pool.
"""

from abc import ABC, abstractmethod
from typing import Any


class CacheStore(ABC):
    """
    Abstract key-value cache store.

    ``put``, ``forever``, ``forget`` and ``flush`` may raise; the pool
    turns such failures into boolean results.
    """

    @abstractmethod
    def has(self, key: str) -> bool:
        """Check if a value exists for key."""
        pass

    @abstractmethod
    def get(self, key: str) -> Any:
        """Get the value stored under key. Only called after has() is true."""
        pass

    @abstractmethod
    def put(self, key: str, value: Any, minutes: int) -> None:
        """Store value under key for a positive number of minutes."""
        pass

    @abstractmethod
    def forever(self, key: str, value: Any) -> None:
        """Store value under key without expiry."""
        pass

    @abstractmethod
    def forget(self, key: str) -> bool:
        """Remove key, returning whether the store reports success."""
        pass

    @abstractmethod
    def flush(self) -> None:
        """Remove every value in the store."""
        pass
