"""Product cache abstractions."""

from .product_cache import (
    InMemoryProductCache,
    ProductCache,
    RedisProductCache,
    build_product_cache,
)

__all__ = [
    "InMemoryProductCache",
    "ProductCache",
    "RedisProductCache",
    "build_product_cache",
]
