"""Redis connection service for managing Redis client lifecycle and health checks."""

from typing import Any

import redis
from loguru import logger
from redis.backoff import ExponentialBackoff
from redis.retry import Retry

from product_catalog.runtime.context import get_config


class RedisService:
    """Service for managing the Redis connection lifecycle and health checks.

    Provides the shared synchronous client used by the product cache.
    Follows the same pattern as DbSessionService.
    """

    def __init__(self):
        """Initialize the Redis service with connection pooling."""
        logger.info("Setting up Redis service")
        config = get_config()
        redis_config = config.redis

        self._enabled = redis_config.enabled
        self._client = None
        self._url = redis_config.url

        if not self._enabled:
            logger.info("Redis is disabled, service will not connect")
            return

        if not self._url:
            logger.warning("Redis URL not configured, service will not connect")
            self._enabled = False
            return

        logger.info(
            "Initializing Redis client with connection string: {}",
            redis_config.sanitized_connection_string,
        )

        retry = Retry(ExponentialBackoff(base=1, cap=10), retries=3)

        # from_url only builds the pool; nothing connects until the first command
        self._client = redis.from_url(
            redis_config.connection_string,
            encoding="utf-8",
            decode_responses=redis_config.decode_responses,
            max_connections=redis_config.max_connections,
            socket_timeout=redis_config.socket_timeout,
            socket_connect_timeout=redis_config.socket_connect_timeout,
            health_check_interval=30,
            retry=retry,
            client_name="product_catalog",
        )

    def get_client(self):
        """Get the Redis client instance.

        Returns:
            Redis client if enabled, None otherwise.
        """
        if not self._enabled or not self._client:
            logger.debug("Redis is disabled, returning None")
            return None

        return self._client

    def get_info(self) -> dict[str, Any] | None:
        """Get Redis server information for monitoring."""
        if not self._enabled or not self._client:
            return None

        try:
            info = self._client.info()
            return {
                "version": info.get("redis_version"),
                "uptime_seconds": info.get("uptime_in_seconds"),
                "connected_clients": info.get("connected_clients"),
                "used_memory_human": info.get("used_memory_human"),
            }
        except Exception as e:
            logger.error(
                "Failed to get Redis info",
                extra={
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
            )
            return None

    def close(self) -> None:
        """Close the Redis connection and clean up resources."""
        if self._client:
            try:
                logger.info("Closing Redis connection")
                self._client.close()
            finally:
                self._client = None
