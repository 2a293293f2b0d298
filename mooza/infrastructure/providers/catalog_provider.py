"""Provider for the catalog application service with dependency injection."""

from __future__ import annotations

import asyncio
from typing import Optional

from mooza.application.catalog_service import CatalogApplicationService
from mooza.core.config import get_settings
from mooza.infrastructure.persistence.repositories.catalog_repository import SQLCatalogRepository
from mooza.infrastructure.persistence.repositories.search_repository import SQLSearchRepository
from mooza.infrastructure.providers.cache_provider import get_cache_service
from mooza.infrastructure.providers.database_provider import get_database_manager

_catalog_service: Optional[CatalogApplicationService] = None
_lock = asyncio.Lock()


async def get_catalog_service() -> CatalogApplicationService:
    """Get or create catalog application service."""
    global _catalog_service

    if _catalog_service is not None:
        return _catalog_service

    async with _lock:
        if _catalog_service is not None:
            return _catalog_service

        settings = get_settings()
        db_manager = await get_database_manager()
        cache_service = await get_cache_service()

        _catalog_service = CatalogApplicationService(
            catalog_repository=SQLCatalogRepository(db_manager),
            cache_service=cache_service,
            search_repository=SQLSearchRepository(
                db_manager,
                statement_timeout=settings.DB_STATEMENT_TIMEOUT_SECONDS,
            ),
            cache_ttl=settings.CATALOG_CACHE_TTL,
        )

        return _catalog_service


async def reset_catalog_service() -> None:
    """Reset catalog service (for testing)."""
    global _catalog_service
    async with _lock:
        _catalog_service = None


__all__ = ["get_catalog_service", "reset_catalog_service"]
