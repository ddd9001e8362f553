"""Product cache interface and implementations.

One cache region (``PRODUCT_CACHE``) holds ``ProductDto`` values keyed by
product id. Redis is used when configured and reachable, with an in-memory
fallback outside production.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod

from cachetools import TTLCache
from loguru import logger
from pydantic import ValidationError

from product_catalog.core.exceptions import CacheBackendError
from product_catalog.entities.product import EXACT_PRICE, ProductDto
from product_catalog.runtime.config.config_data import PRODUCT_CACHE, ConfigData

# TTLCache needs a finite ttl; entries configured with no expiry live ~forever.
_NO_EXPIRY_SECONDS = 10 * 365 * 24 * 3600


class ProductCache(ABC):
    """Abstract interface for product cache backends."""

    @property
    def name(self) -> str:
        """Name of the cache region."""
        return PRODUCT_CACHE

    @abstractmethod
    def get(self, product_id: int) -> ProductDto | None:
        """Return the cached DTO, or None on a miss."""

    @abstractmethod
    def put(self, product_id: int, product: ProductDto) -> None:
        """Store ``product`` under ``product_id``, replacing any prior entry."""

    @abstractmethod
    def evict(self, product_id: int) -> None:
        """Remove the entry for ``product_id``; missing entries are ignored."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every entry of the region."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the cache backend is healthy."""


class InMemoryProductCache(ProductCache):
    """In-process cache backed by a cachetools ``TTLCache``.

    ``ProductDto`` is frozen, so entries are stored as-is without any risk of
    callers mutating a cached value. cachetools caches are not thread-safe
    and request handlers share one instance, so every access holds ``_lock``.
    """

    def __init__(self, maxsize: int = 1024, ttl_seconds: int = 0) -> None:
        self._ttl_seconds = ttl_seconds
        self._lock = threading.Lock()
        self._data: TTLCache[int, ProductDto] = TTLCache(
            maxsize=maxsize, ttl=ttl_seconds or _NO_EXPIRY_SECONDS
        )

    def get(self, product_id: int) -> ProductDto | None:
        with self._lock:
            return self._data.get(product_id)

    def put(self, product_id: int, product: ProductDto) -> None:
        with self._lock:
            self._data[product_id] = product

    def evict(self, product_id: int) -> None:
        with self._lock:
            self._data.pop(product_id, None)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def is_available(self) -> bool:
        """In-memory storage is always available."""
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


def _encode(product: ProductDto) -> str:
    return product.model_dump_json(context={EXACT_PRICE: True})


class RedisProductCache(ProductCache):
    """Redis-backed cache storing DTO JSON under ``products::<id>`` keys."""

    def __init__(self, redis_client, ttl_seconds: int = 0) -> None:
        self._redis = redis_client
        self._ttl_seconds = ttl_seconds
        self._available = True

    def key(self, product_id: int) -> str:
        return f"{self.name}::{product_id}"

    def get(self, product_id: int) -> ProductDto | None:
        key = self.key(product_id)
        try:
            data = self._redis.get(key)
            self._available = True
        except Exception as e:
            self._available = False
            raise CacheBackendError(f"Redis get failed: {e}") from e

        if data is None:
            return None

        # Bad UTF-8 in a bytes value is a corrupt entry as well
        try:
            return ProductDto.model_validate_json(data)
        except (ValidationError, UnicodeDecodeError):
            logger.warning("Dropping corrupted cache entry {}", key)
            self.evict(product_id)
            return None

    def put(self, product_id: int, product: ProductDto) -> None:
        key = self.key(product_id)
        try:
            if self._ttl_seconds > 0:
                self._redis.setex(key, self._ttl_seconds, _encode(product))
            else:
                self._redis.set(key, _encode(product))
            self._available = True
        except Exception as e:
            self._available = False
            raise CacheBackendError(f"Redis set failed: {e}") from e

    def evict(self, product_id: int) -> None:
        try:
            self._redis.delete(self.key(product_id))
            self._available = True
        except Exception as e:
            self._available = False
            raise CacheBackendError(f"Redis delete failed: {e}") from e

    def clear(self) -> None:
        try:
            keys = list(self._redis.scan_iter(match=f"{self.name}::*", count=100))
            if keys:
                self._redis.delete(*keys)
            self._available = True
        except Exception as e:
            self._available = False
            raise CacheBackendError(f"Redis clear failed: {e}") from e

    def is_available(self) -> bool:
        """Check if Redis connection is healthy."""
        return self._available

    def ping(self) -> bool:
        """Test Redis connection health."""
        try:
            self._redis.ping()
            self._available = True
            return True
        except Exception:
            self._available = False
            return False


def build_product_cache(config: ConfigData, redis_client=None) -> ProductCache:
    """Pick the cache backend for ``config``.

    Redis is used when the backend is ``redis``, or ``auto`` with a usable
    client. An unreachable Redis falls back to memory except in production,
    where it is fatal.
    """
    cache_config = config.cache
    memory_cache = InMemoryProductCache(
        maxsize=cache_config.max_entries, ttl_seconds=cache_config.ttl_seconds
    )

    if cache_config.backend == "memory":
        logger.info("Product cache: in-memory (configured)")
        return memory_cache

    if redis_client is None:
        if cache_config.backend == "redis":
            raise CacheBackendError("Redis cache backend requested but Redis is not configured")
        logger.info("Product cache: in-memory (Redis not configured)")
        return memory_cache

    redis_cache = RedisProductCache(redis_client, ttl_seconds=cache_config.ttl_seconds)
    if redis_cache.ping():
        logger.info("Product cache: Redis connected")
        return redis_cache

    if cache_config.backend == "redis" or config.app.environment == "production":
        raise CacheBackendError("Redis cache backend is unreachable")

    logger.warning("Redis unavailable, using in-memory product cache")
    return memory_cache
