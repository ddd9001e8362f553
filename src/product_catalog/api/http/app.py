"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from product_catalog.api.http.app_data import ApplicationDependencies
from product_catalog.api.http.routers.health import router as health_router
from product_catalog.api.http.routers.product import router as product_router
from product_catalog.api.utils.app_startup import configure_logging
from product_catalog.core.exceptions import ProductNotFoundError
from product_catalog.core.services import DbSessionService, RedisService
from product_catalog.core.storage import build_product_cache
from product_catalog.runtime.context import get_config


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        if get_config().app.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        return response


def build_dependencies() -> ApplicationDependencies:
    """Create the database, Redis and cache services from the current config."""
    config = get_config()
    database_service = DbSessionService()
    database_service.create_all()
    redis_service = RedisService()
    product_cache = build_product_cache(config, redis_service.get_client())
    return ApplicationDependencies(
        database_service=database_service,
        redis_service=redis_service,
        product_cache=product_cache,
    )


async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
    }

    start = time.perf_counter()

    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


async def product_not_found_handler(request: Request, exc: ProductNotFoundError) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    logger.info("Product {} not found", exc.product_id)
    return JSONResponse(
        status_code=404,
        content={"detail": str(exc), "request_id": request_id},
    )


def create_app(dependencies: ApplicationDependencies | None = None) -> FastAPI:
    """Build the FastAPI application.

    ``dependencies`` lets callers (tests, embedding code) supply their own
    database service and cache; otherwise they are built from configuration
    at startup.
    """
    config = get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging()
        if getattr(app.state, "app_dependencies", None) is None:
            app.state.app_dependencies = build_dependencies()
        logger.info("Starting up application in {} environment", get_config().app.environment)
        try:
            yield
        finally:
            logger.info("Shutting down application")
            app.state.app_dependencies.redis_service.close()

    app = FastAPI(
        title="Product Catalog",
        lifespan=lifespan,
        docs_url=None if config.app.environment == "production" else "/docs",
        redoc_url=None if config.app.environment == "production" else "/redoc",
    )
    app.state.app_dependencies = dependencies

    app.add_middleware(SecurityHeadersMiddleware)

    if config.app.environment == "production" and "*" in config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )
    app.middleware("http")(log_requests)
    app.add_exception_handler(ProductNotFoundError, product_not_found_handler)

    app.include_router(health_router)
    app.include_router(product_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,  # request logging is done in middleware
    )
