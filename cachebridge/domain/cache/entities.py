"""
Cache Domain Entities

The cache item entity: one cache slot with an immutable key, a mutable
value and a mutable absolute expiry. Items never persist themselves;
the item pool translates them into store calls.
"""

import copy
from datetime import datetime
from typing import Any, Optional

import structlog

from .exceptions import InvalidExpiryException
from .value_objects import (
    CacheKey,
    DurationInput,
    ExpiryInput,
    current_time,
    normalize_duration,
    normalize_expiry,
)

logger = structlog.get_logger(__name__)


def copy_value(value: Any) -> Any:
    """
    Copy a cache value as deeply as it allows.

    Falls back to a shallow copy, then to the value itself, for payloads
    such as locks, generators or client handles that refuse deep copies.
    """
    try:
        return copy.deepcopy(value)
    except Exception as e:
        logger.debug(
            "Cache value cannot be deep-copied",
            value_type=type(value).__name__,
            error=str(e),
        )

    try:
        return copy.copy(value)
    except Exception:
        return value


class CacheItem:
    """
    Cache item entity.

    ``hit`` records whether the value existed when the item was built.
    A miss item always starts with a ``None`` value, whatever was passed.
    """

    __slots__ = ("_key", "_value", "_hit", "_expires_at")

    def __init__(self, key: str, value: Any = None, hit: bool = False):
        self._key = CacheKey.validate(key)
        self._hit = bool(hit)
        self._value = value if self._hit else None
        self._expires_at: Optional[datetime] = None

    @property
    def key(self) -> str:
        return self._key

    def get_key(self) -> str:
        """Return the item's key."""
        return self._key

    def get(self) -> Any:
        """Return the item's current value."""
        return self._value

    def is_hit(self) -> bool:
        """Whether the value was found in the pool when the item was built."""
        return self._hit

    def set(self, value: Any) -> "CacheItem":
        """Replace the value. Does not change ``hit``."""
        self._value = value
        return self

    def expires_at(self, expiration: ExpiryInput) -> "CacheItem":
        """Set an absolute expiry; None means the item never expires."""
        self._expires_at = normalize_expiry(expiration)
        return self

    def expires_after(self, duration: DurationInput) -> "CacheItem":
        """Set the expiry relative to now; None means the item never expires."""
        delta = normalize_duration(duration)
        if delta is None:
            self._expires_at = None
            return self

        try:
            self._expires_at = current_time() + delta
        except OverflowError as e:
            raise InvalidExpiryException(
                duration, "duration out of range", original_error=e
            ) from e
        return self

    def get_expires_at(self) -> Optional[datetime]:
        return self._expires_at

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Whether the expiry lies strictly before ``now``."""
        if self._expires_at is None:
            return False
        if now is None:
            now = current_time(self._expires_at.tzinfo)
        return self._expires_at < now

    def copy(self) -> "CacheItem":
        """Independent copy; mutating either item never affects the other."""
        clone = CacheItem(self._key, copy_value(self._value), self._hit)
        clone._expires_at = self._expires_at
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CacheItem):
            return NotImplemented
        return (
            self._key == other._key
            and self._value == other._value
            and self._hit == other._hit
            and self._expires_at == other._expires_at
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"CacheItem(key={self._key!r}, value={self._value!r}, "
            f"hit={self._hit}, expires_at={self._expires_at!r})"
        )
