"""Cache service provider."""

from __future__ import annotations

import asyncio
from typing import Optional

from mooza.core.config import get_settings
from mooza.domain.interfaces import ICacheService
from mooza.infrastructure.adapters.memory_cache_adapter import MemoryCacheService

_cache_service: Optional[ICacheService] = None
_lock = asyncio.Lock()


async def get_cache_service() -> ICacheService:
    """Get or create the process-wide cache service."""
    global _cache_service

    if _cache_service is not None:
        return _cache_service

    async with _lock:
        if _cache_service is not None:
            return _cache_service

        _cache_service = MemoryCacheService(max_size=get_settings().CACHE_MAX_SIZE)
        return _cache_service


async def reset_cache_service() -> None:
    """Reset cache service (for testing)."""
    global _cache_service
    async with _lock:
        _cache_service = None


__all__ = ["get_cache_service", "reset_cache_service"]
