"""Service fixtures for testing."""

from __future__ import annotations

from collections import Counter
from collections.abc import Generator
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlmodel import Session

from product_catalog.api.http.app import create_app
from product_catalog.api.http.app_data import ApplicationDependencies
from product_catalog.core.services import (
    DbSessionService,
    ProductCatalogService,
    RedisService,
)
from product_catalog.core.storage import (
    InMemoryProductCache,
    ProductCache,
    RedisProductCache,
)
from product_catalog.entities.product import ProductRepository, ProductTable

from .dummies import DummyRedis


class CountingProductRepository(ProductRepository):
    """ProductRepository that records how often each store method is called."""

    def __init__(self, session: Session) -> None:
        super().__init__(session)
        self.calls: Counter[str] = Counter()

    def find_all(self) -> list[ProductTable]:
        self.calls["find_all"] += 1
        return super().find_all()

    def find_by_id(self, product_id: int) -> ProductTable | None:
        self.calls["find_by_id"] += 1
        return super().find_by_id(product_id)

    def save(self, product: ProductTable) -> ProductTable:
        self.calls["save"] += 1
        return super().save(product)

    def delete_by_id(self, product_id: int) -> None:
        self.calls["delete_by_id"] += 1
        super().delete_by_id(product_id)

    @property
    def reads(self) -> int:
        return self.calls["find_by_id"] + self.calls["find_all"]

    def reset_calls(self) -> None:
        self.calls.clear()


@pytest.fixture
def repository(session: Session) -> CountingProductRepository:
    return CountingProductRepository(session)


@pytest.fixture
def product_cache() -> InMemoryProductCache:
    return InMemoryProductCache(maxsize=128)


@pytest.fixture(params=["memory", "redis"])
def service_cache(request: pytest.FixtureRequest) -> ProductCache:
    """Each backend the catalog service can run over."""
    if request.param == "memory":
        return InMemoryProductCache(maxsize=128)
    return RedisProductCache(DummyRedis(), ttl_seconds=60)


@pytest.fixture
def catalog_service(
    repository: CountingProductRepository, service_cache: ProductCache
) -> ProductCatalogService:
    return ProductCatalogService(repository, service_cache)


@pytest.fixture
def mock_redis() -> MagicMock:
    """A stand-in for a synchronous redis client."""
    return MagicMock()


@pytest.fixture
def redis_cache(mock_redis: MagicMock) -> RedisProductCache:
    return RedisProductCache(mock_redis, ttl_seconds=60)


@pytest.fixture
def app_dependencies(
    engine: Engine, product_cache: InMemoryProductCache
) -> ApplicationDependencies:
    """Dependencies sharing the test engine and an in-memory cache."""
    return ApplicationDependencies(
        database_service=DbSessionService(engine=engine),
        redis_service=RedisService(),
        product_cache=product_cache,
    )


@pytest.fixture
def client(app_dependencies: ApplicationDependencies) -> Generator[TestClient]:
    """Yield a TestClient for an app wired to the test dependencies."""
    app = create_app(app_dependencies)
    with TestClient(app) as test_client:
        yield test_client
