"""Provider for the search application service."""

from __future__ import annotations

import asyncio
from typing import Optional

from mooza.application.search_service import SearchApplicationService
from mooza.core.config import get_settings
from mooza.infrastructure.persistence.repositories.search_repository import SQLSearchRepository
from mooza.infrastructure.providers.cache_provider import get_cache_service
from mooza.infrastructure.providers.catalog_provider import get_catalog_service
from mooza.infrastructure.providers.database_provider import get_database_manager

_search_service: Optional[SearchApplicationService] = None
_lock = asyncio.Lock()


async def get_search_service() -> SearchApplicationService:
    """Get or create search application service."""
    global _search_service

    if _search_service is not None:
        return _search_service

    async with _lock:
        if _search_service is not None:
            return _search_service

        settings = get_settings()
        db_manager = await get_database_manager()

        _search_service = SearchApplicationService(
            catalog_service=await get_catalog_service(),
            search_repository=SQLSearchRepository(
                db_manager,
                statement_timeout=settings.DB_STATEMENT_TIMEOUT_SECONDS,
            ),
            cache_service=await get_cache_service(),
            result_cache_ttl=settings.SEARCH_RESULT_CACHE_TTL,
            max_page_size=settings.SEARCH_MAX_PAGE_SIZE,
        )

        return _search_service


async def reset_search_service() -> None:
    """Reset search service (for testing)."""
    global _search_service
    async with _lock:
        _search_service = None


__all__ = ["get_search_service", "reset_search_service"]
