"""Persistence repository implementations."""

from .catalog_repository import SQLCatalogRepository
from .search_repository import SQLSearchRepository

__all__ = ["SQLCatalogRepository", "SQLSearchRepository"]
