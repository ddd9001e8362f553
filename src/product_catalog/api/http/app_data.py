from dataclasses import dataclass

from product_catalog.core.services import DbSessionService, RedisService
from product_catalog.core.storage import ProductCache


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    redis_service: RedisService
    product_cache: ProductCache
