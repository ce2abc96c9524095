"""
Redis Connection Factory

Builds synchronous Redis clients for the cache store from settings.
"""

import logging
from typing import Optional, Tuple
from urllib.parse import urlparse

import redis
from redis.exceptions import RedisError

from ...core.config import Settings, get_settings
from .exceptions import RedisConnectionException

logger = logging.getLogger(__name__)


def _endpoint(url: str) -> Tuple[Optional[str], Optional[int]]:
    """Host and port of a Redis URL, None where they cannot be read."""
    parsed_url = urlparse(url)
    try:
        port = parsed_url.port
    except ValueError:
        port = None
    return parsed_url.hostname, port


def create_redis_client(
    settings: Optional[Settings] = None, ping: bool = False
) -> redis.Redis:
    """
    Create a Redis client from settings.

    Responses are left undecoded because cached values are binary.

    Args:
        settings: Settings to use (defaults to the cached global settings)
        ping: Verify connectivity before returning the client

    Raises:
        RedisConnectionException: If the URL is invalid or the ping fails
    """
    settings = settings or get_settings()
    host, port = _endpoint(settings.redis_url)

    try:
        client = redis.Redis.from_url(
            settings.redis_url,
            decode_responses=False,
            socket_connect_timeout=settings.REDIS_CONNECTION_TIMEOUT,
            socket_timeout=settings.REDIS_OPERATION_TIMEOUT,
            retry_on_timeout=True,
            max_connections=settings.redis_max_connections,
        )
    except (ValueError, RedisError) as e:
        raise RedisConnectionException(
            message=f"Invalid Redis configuration: {e}",
            host=host,
            port=port,
            original_error=e,
        ) from e

    if ping:
        try:
            client.ping()
        except RedisError as e:
            raise RedisConnectionException(
                message="Redis connection test failed",
                host=host,
                port=port,
                original_error=e,
            ) from e
        logger.debug("Redis connection test successful")

    logger.info(
        "Redis client created",
        extra={
            "host": host or "localhost",
            "port": port or 6379,
            "max_connections": settings.redis_max_connections,
        },
    )
    return client
