"""
Mooza Search service entry point.

Run with ``uvicorn mooza.main:app`` or ``python -m mooza.main``.
"""

import sys
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from mooza.api import create_api_router
from mooza.core.config import Settings, get_settings
from mooza.core.logging import configure_logging
from mooza.infrastructure.persistence.seed import seed_reference_data
from mooza.infrastructure.providers.cache_provider import get_cache_service, reset_cache_service
from mooza.infrastructure.providers.catalog_provider import get_catalog_service, reset_catalog_service
from mooza.infrastructure.providers.database_provider import get_database_manager, reset_database_manager
from mooza.infrastructure.providers.search_provider import reset_search_service

logger = structlog.get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds a request id to the log context and logs request completion."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id, path=request.url.path)

        started = time.perf_counter()
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        logger.info(
            "Request completed",
            method=request.method,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response


async def _start_services(settings: Settings):
    db_manager = await get_database_manager()
    if settings.DB_CREATE_TABLES:
        await db_manager.create_tables()
    if settings.SEED_REFERENCE_DATA:
        await seed_reference_data(db_manager)

    # First search should not pay for the catalog load
    catalog = await (await get_catalog_service()).get_catalog()
    logger.info("Reference catalog ready", options=len(catalog), version=catalog.version)
    return db_manager


async def _stop_services(db_manager) -> None:
    try:
        await (await get_cache_service()).clear()
        if db_manager is not None:
            await db_manager.shutdown()
    except Exception as e:
        logger.error("Error during shutdown", error=str(e))
    finally:
        await reset_search_service()
        await reset_catalog_service()
        await reset_cache_service()
        await reset_database_manager()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info("Starting Mooza Search", version=app.version, environment=settings.ENVIRONMENT)

    db_manager = None
    try:
        db_manager = await _start_services(settings)
    except Exception as e:
        logger.error("Startup failed", error=str(e))
        if settings.is_production():
            sys.exit(1)

    yield

    logger.info("Stopping Mooza Search")
    await _stop_services(db_manager)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    expose_docs = not settings.is_production()
    app = FastAPI(
        title=settings.APP_NAME,
        description="Hierarchical faceted search for musicians",
        version=settings.APP_VERSION,
        docs_url="/docs" if expose_docs else None,
        redoc_url="/redoc" if expose_docs else None,
        openapi_url="/openapi.json" if expose_docs else None,
        lifespan=lifespan,
    )

    # Added last runs first: CORS wraps the request context
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(create_api_router())

    @app.get("/health")
    async def health_check():
        """Liveness only; store health is not probed here."""
        return {
            "status": "healthy",
            "version": app.version,
            "environment": settings.ENVIRONMENT,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "mooza.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
        log_config=None,
    )
