"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from product_catalog.api.http.app_data import ApplicationDependencies
from product_catalog.core.services import (
    DbSessionService,
    ProductCatalogService,
)
from product_catalog.core.storage import ProductCache
from product_catalog.entities.product import ProductRepository


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_database_service(request: Request) -> DbSessionService:
    """Get the database service instance."""
    return get_app_dependencies(request).database_service


def get_product_cache(request: Request) -> ProductCache:
    """Get the product cache instance."""
    return get_app_dependencies(request).product_cache


def get_db_session(
    database_service: DbSessionService = Depends(get_database_service),
) -> Iterator[Session]:
    """Yield a database session that is closed when the request ends."""
    session = database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_product_repository(db: Session = Depends(get_db_session)) -> ProductRepository:
    return ProductRepository(db)


def get_product_service(
    repository: ProductRepository = Depends(get_product_repository),
    cache: ProductCache = Depends(get_product_cache),
) -> ProductCatalogService:
    """Get a catalog service bound to the request's session."""
    return ProductCatalogService(repository, cache)
