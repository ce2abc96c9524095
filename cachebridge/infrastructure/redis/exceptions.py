"""
Redis Infrastructure Exceptions

Exceptions for the Redis-backed cache store.
Redis client errors are wrapped with their original cause preserved;
the item pool converts them into boolean failures.
"""

from typing import Optional

from ...domain.cache.exceptions import CacheException


class RedisStoreException(CacheException):
    """Raised when a Redis cache store operation fails."""

    def __init__(
        self,
        operation: str,
        key: Optional[str] = None,
        original_error: Optional[Exception] = None,
        message: Optional[str] = None,
    ):
        details = {"operation": operation}
        if key is not None:
            details["key"] = key
        if original_error:
            details["original_error"] = str(original_error)
            details["original_error_type"] = type(original_error).__name__

        super().__init__(
            message=message or f"Redis operation '{operation}' failed",
            error_code="REDIS_STORE_ERROR",
            details=details,
        )
        # Preserve exception context for debugging (exception chaining)
        if original_error:
            self.__cause__ = original_error


class RedisConnectionException(RedisStoreException):
    """Raised when a Redis client cannot be configured or reached."""

    def __init__(
        self,
        message: str = "Redis connection failed",
        host: Optional[str] = None,
        port: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            operation="connect", original_error=original_error, message=message
        )
        self.error_code = "REDIS_CONNECTION_ERROR"
        if host:
            self.details["host"] = host
        if port:
            self.details["port"] = port
