"""
Cache Item Pool Service

Item pool facade over a minute-granular key-value store.
Stages deferred writes in a local buffer that shadows the store until
commit, and translates absolute item expiries into whole-minute TTLs.

Store failures never escape the pool: they are logged and reported
as ``False``. Invalid keys always raise ``InvalidKeyException``.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

import structlog

from ...domain.cache.entities import CacheItem, copy_value
from ...domain.cache.repository_interfaces import CacheStore
from ...domain.cache.value_objects import (
    TTL,
    CacheKey,
    current_time,
    normalize_expiry,
)

logger = structlog.get_logger(__name__)


class CacheItemPool:
    """
    Cache item pool with a deferred-write buffer.

    Intended for one unit of work at a time and not thread-safe.
    Use it as a context manager, or call ``close()``, so that
    deferred items are committed exactly once.
    """

    def __init__(self, store: CacheStore):
        self._store = store
        self._deferred: Dict[str, CacheItem] = {}
        self._closed = False

    def get_store(self) -> CacheStore:
        return self._store

    def get_deferred(self) -> Dict[str, CacheItem]:
        """Copies of the buffered items, keyed by cache key."""
        return {key: item.copy() for key, item in self._deferred.items()}

    @property
    def closed(self) -> bool:
        return self._closed

    # Reads

    def get_item(self, key: str) -> CacheItem:
        """
        Return the item for key, looking in the deferred buffer first.

        A miss is returned as an item with ``is_hit() == False``.
        Buffered items are returned as copies.
        """
        CacheKey.validate(key)
        return self._fetch(key)

    def get_items(self, keys: Iterable[str]) -> Dict[str, CacheItem]:
        """Return items for all keys, in input order. Keys are validated first."""
        keys = self._validate_keys(keys)

        items: Dict[str, CacheItem] = {}
        for key in keys:
            if key not in items:
                items[key] = self._fetch(key)
        return items

    def has_item(self, key: str) -> bool:
        """Check whether key is present without fetching its value."""
        CacheKey.validate(key)

        item = self._deferred.get(key)
        if item is not None:
            return not self._is_expired(item)

        return self._store.has(key)

    def _fetch(self, key: str) -> CacheItem:
        item = self._deferred.get(key)
        if item is not None:
            return item.copy()

        if self._store.has(key):
            return CacheItem(key, self._store.get(key), True)

        return CacheItem(key)

    # Deletes

    def clear(self) -> bool:
        """Drop the deferred buffer, then flush the store."""
        self._deferred.clear()

        try:
            self._store.flush()
        except Exception as e:
            logger.warning("Cache store flush failed", error=str(e), exc_info=True)
            return False

        logger.info("Cache pool cleared")
        return True

    def delete_item(self, key: str) -> bool:
        """Remove key from the deferred buffer and from the store."""
        CacheKey.validate(key)
        return self._delete(key)

    def delete_items(self, keys: Iterable[str]) -> bool:
        """Delete every key; True only if all deletions succeeded."""
        return all(self.delete_items_detailed(keys).values())

    def delete_items_detailed(self, keys: Iterable[str]) -> Dict[str, bool]:
        """Delete every key and report the outcome per key."""
        keys = self._validate_keys(keys)

        results: Dict[str, bool] = {}
        for key in keys:
            outcome = self._delete(key)
            results[key] = results.get(key, True) and outcome
        return results

    def _delete(self, key: str) -> bool:
        self._deferred.pop(key, None)

        try:
            if not self._store.has(key):
                return True
            return bool(self._store.forget(key))
        except Exception as e:
            logger.warning(
                "Cache store delete failed", key=key, error=str(e), exc_info=True
            )
            return False

    # Writes

    def save(self, item: CacheItem) -> bool:
        """
        Persist item immediately.

        Items without expiry are stored forever. Otherwise the remaining
        lifetime is rounded down to whole minutes; less than one minute
        left means the save fails without touching the store.
        """
        key = CacheKey.validate(item.get_key())
        expires_at = self._expiry_of(item)

        if expires_at is None:
            try:
                self._store.forever(key, item.get())
            except Exception as e:
                logger.warning(
                    "Cache store write failed", key=key, error=str(e), exc_info=True
                )
                return False
            return True

        ttl = TTL.until(expires_at, now=current_time(expires_at.tzinfo))
        if ttl is None:
            # Expired, or less than a minute left; the store cannot represent either
            logger.debug("Cache item expires too soon to save", key=key)
            return False

        try:
            self._store.put(key, item.get(), ttl.minutes)
        except Exception as e:
            logger.warning(
                "Cache store write failed",
                key=key,
                minutes=ttl.minutes,
                error=str(e),
                exc_info=True,
            )
            return False
        return True

    def save_deferred(self, item: CacheItem) -> bool:
        """
        Buffer a copy of item until the next commit.

        Fails only when the item has already expired. A later call for the
        same key replaces the buffered copy.
        """
        CacheKey.validate(item.get_key())
        expires_at = self._expiry_of(item)

        if expires_at is not None and expires_at < current_time(expires_at.tzinfo):
            logger.debug("Refusing to defer expired cache item", key=item.get_key())
            return False

        buffered = CacheItem(item.get_key(), copy_value(item.get()), True)
        buffered.expires_at(expires_at)

        if self._closed:
            logger.warning(
                "Deferring cache item on a closed pool; "
                "it is committed by commit() or at garbage collection",
                key=buffered.get_key(),
            )

        self._deferred[buffered.get_key()] = buffered
        return True

    def commit(self) -> bool:
        """Save every deferred item; True only if all saves succeeded."""
        return all(self.commit_detailed().values())

    def commit_detailed(self) -> Dict[str, bool]:
        """Save every deferred item and report the outcome per key."""
        pending: List[CacheItem] = list(self._deferred.values())
        self._deferred.clear()

        results = {item.get_key(): self.save(item) for item in pending}

        if pending:
            failed = [key for key, ok in results.items() if not ok]
            logger.debug(
                "Committed deferred cache items",
                total=len(pending),
                failed=len(failed),
            )
            if failed:
                logger.warning("Deferred cache items failed to save", keys=failed)

        return results

    # Lifecycle

    def close(self) -> bool:
        """Commit deferred items once; later calls do nothing."""
        if self._closed:
            return True
        self._closed = True
        return self.commit()

    def __enter__(self) -> "CacheItemPool":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __del__(self) -> None:
        try:
            if getattr(self, "_deferred", None):
                self._closed = True
                self.commit()
        except Exception:
            # Interpreter shutdown may have torn down the store or logging
            pass

    # Helpers

    @staticmethod
    def _validate_keys(keys: Iterable[str]) -> List[str]:
        keys = list(keys)
        for key in keys:
            CacheKey.validate(key)
        return keys

    @staticmethod
    def _expiry_of(item: Any) -> Optional[datetime]:
        getter = getattr(item, "get_expires_at", None)
        return normalize_expiry(getter()) if callable(getter) else None

    @staticmethod
    def _is_expired(item: CacheItem) -> bool:
        expires_at = item.get_expires_at()
        return expires_at is not None and expires_at < current_time(expires_at.tzinfo)
