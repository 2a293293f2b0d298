"""Infrastructure provider accessors package."""

from .cache_provider import get_cache_service, reset_cache_service  # noqa: F401
from .catalog_provider import get_catalog_service, reset_catalog_service  # noqa: F401
from .database_provider import get_database_manager, reset_database_manager  # noqa: F401
from .search_provider import get_search_service, reset_search_service  # noqa: F401

__all__ = [name for name in globals() if name.startswith("get_") or name.startswith("reset_")]
