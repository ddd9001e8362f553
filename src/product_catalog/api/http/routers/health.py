"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from product_catalog.api.http.app_data import ApplicationDependencies
from product_catalog.core.storage import RedisProductCache
from product_catalog.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


def _database_type() -> str:
    return "sqlite" if get_config().database.is_sqlite else "postgresql"


@router.get("")
def health() -> dict[str, str]:
    """Liveness probe; does not check dependencies."""
    return {"status": "healthy", "service": "product-catalog"}


@router.get("/ready", response_model=None)
def readiness(request: Request) -> dict[str, Any] | JSONResponse:
    """Readiness check - validates service dependencies.

    Returns 200 if the database is reachable, 503 otherwise. The cache is
    reported but never fails readiness.
    """
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    config = get_config()

    checks: dict[str, Any] = {}
    all_healthy = True

    db_healthy = app_deps.database_service.health_check()
    checks["database"] = {
        "status": "healthy" if db_healthy else "unhealthy",
        "type": _database_type(),
    }
    if not db_healthy:
        all_healthy = False

    cache = app_deps.product_cache
    checks["cache"] = {
        "status": "healthy" if cache.is_available() else "degraded",
        "type": "redis" if isinstance(cache, RedisProductCache) else "in-memory",
        "name": cache.name,
    }

    response = {
        "status": "ready" if all_healthy else "not_ready",
        "environment": config.app.environment,
        "checks": checks,
    }

    if not all_healthy:
        return JSONResponse(status_code=503, content=response)

    return response


@router.get("/database", response_model=None)
def health_database(request: Request) -> dict[str, Any] | JSONResponse:
    """Database-specific health check with connection pool status."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies

    healthy = app_deps.database_service.health_check()
    result = {
        "status": "healthy" if healthy else "unhealthy",
        "type": _database_type(),
        "pool": app_deps.database_service.get_pool_status(),
    }
    if not healthy:
        return JSONResponse(status_code=503, content=result)
    return result


@router.get("/cache", response_model=None)
def health_cache(request: Request) -> dict[str, Any] | JSONResponse:
    """Product cache health check, including Redis server info when in use."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    cache = app_deps.product_cache

    if not isinstance(cache, RedisProductCache):
        return {"status": "healthy", "type": "in-memory", "name": cache.name}

    healthy = cache.ping()
    result: dict[str, Any] = {
        "status": "healthy" if healthy else "unhealthy",
        "type": "redis",
        "name": cache.name,
        "url": get_config().redis.sanitized_connection_string,
    }
    info = app_deps.redis_service.get_info()
    if info:
        result["info"] = info

    if not healthy:
        return JSONResponse(status_code=503, content=result)
    return result
