"""Domain repository abstractions."""

from .catalog_repository import ICatalogRepository
from .search_repository import ISearchRepository

__all__ = [
    "ICatalogRepository",
    "ISearchRepository",
]
