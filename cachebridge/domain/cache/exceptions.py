"""
Cache Domain Exceptions

Exceptions raised by the cache item and pool contracts.
Key and expiry errors are programming errors and always reach the caller.
"""

from typing import Optional, Any, Dict


class CacheException(Exception):
    """Base exception for cache-related errors.

    Carries a machine-readable error code and structured details
    so callers can log or inspect failures without parsing messages.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidKeyException(CacheException, ValueError):
    """Raised when a cache key is not a string or contains reserved characters."""

    def __init__(self, key: Any, reason: Optional[str] = None):
        details = {"key": repr(key), "key_type": type(key).__name__}
        if reason:
            details["reason"] = reason

        super().__init__(
            message=f"Invalid cache key {key!r}" + (f": {reason}" if reason else ""),
            error_code="CACHE_INVALID_KEY",
            details=details,
        )


class InvalidExpiryException(CacheException, ValueError):
    """Raised when an expiry timestamp or duration cannot be interpreted."""

    def __init__(
        self,
        value: Any,
        reason: str,
        original_error: Optional[Exception] = None,
    ):
        details = {"value": repr(value), "value_type": type(value).__name__}
        if original_error:
            details["original_error"] = str(original_error)
            details["original_error_type"] = type(original_error).__name__

        super().__init__(
            message=f"Invalid cache expiry {value!r}: {reason}",
            error_code="CACHE_INVALID_EXPIRY",
            details=details,
        )
        if original_error:
            self.__cause__ = original_error
