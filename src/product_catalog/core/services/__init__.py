"""Core services exports."""

from .database.db_session import DbSessionService
from .product_service import ProductCatalogService
from .redis_service import RedisService

__all__ = [
    "DbSessionService",
    "ProductCatalogService",
    "RedisService",
]
