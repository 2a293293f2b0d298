"""Infrastructure adapters implementing domain interfaces."""

from .memory_cache_adapter import MemoryCacheService

__all__ = ["MemoryCacheService"]
