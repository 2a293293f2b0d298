"""
Application service for the reference catalog.

Responsibilities:
- Load the catalog snapshot, caching it between requests
- Serve scoped option lists through the dependency resolver
- Attach per-option user counts on demand
"""

import asyncio
from typing import Dict, Mapping, Optional, Tuple

import structlog

from mooza.domain.entities.catalog import ReferenceCatalog
from mooza.domain.entities.facet import FacetId, Option
from mooza.domain.interfaces import ICacheService
from mooza.domain.repositories.catalog_repository import ICatalogRepository
from mooza.domain.repositories.search_repository import ISearchRepository
from mooza.domain.services.facet_resolver import FacetDependencyResolver

logger = structlog.get_logger(__name__)


class CatalogApplicationService:
    """Application service orchestrating catalog loading and option lookup."""

    CACHE_TTL_SECONDS = 3600
    CACHE_KEY = "catalog:snapshot"

    def __init__(
        self,
        catalog_repository: ICatalogRepository,
        cache_service: ICacheService,
        search_repository: Optional[ISearchRepository] = None,
        cache_ttl: Optional[int] = None,
    ):
        self.repository = catalog_repository
        self.cache = cache_service
        self.search_repository = search_repository
        self.cache_ttl = self.CACHE_TTL_SECONDS if cache_ttl is None else cache_ttl
        self._resolver: Optional[FacetDependencyResolver] = None
        self._load_lock = asyncio.Lock()

    async def get_catalog(self, force_refresh: bool = False) -> ReferenceCatalog:
        """
        Get the catalog snapshot.

        Workflow:
        1. Check cache (unless force_refresh)
        2. If miss, load from the store
        3. Cache result
        """
        if not force_refresh:
            cached = await self.cache.get(self.CACHE_KEY)
            if isinstance(cached, ReferenceCatalog):
                return cached

        async with self._load_lock:
            if not force_refresh:
                cached = await self.cache.get(self.CACHE_KEY)
                if isinstance(cached, ReferenceCatalog):
                    return cached

            catalog = await self.repository.load_catalog()
            logger.info("Loaded reference catalog", options=len(catalog), version=catalog.version)

            if self.cache_ttl > 0:
                await self.cache.set(key=self.CACHE_KEY, value=catalog, ttl=self.cache_ttl)
            return catalog

    async def get_resolver(self) -> FacetDependencyResolver:
        """Resolver bound to the current catalog; rebuilt when the catalog changes."""
        catalog = await self.get_catalog()
        resolver = self._resolver
        if resolver is None or resolver.catalog.version != catalog.version:
            resolver = FacetDependencyResolver(catalog)
            self._resolver = resolver
        return resolver

    async def list_options(
        self,
        facet_id: FacetId,
        scope: Optional[Mapping[FacetId, Optional[str]]] = None,
        search: Optional[str] = None,
        with_counts: bool = False,
    ) -> Tuple[Option, ...]:
        """
        List the options of a facet.

        Args:
            facet_id: facet to list
            scope: scope key selections; the first one present narrows the list
            search: case-insensitive substring filter on the option name
            with_counts: attach the number of discoverable users per option
        """
        resolver = await self.get_resolver()
        options = resolver.list_options(facet_id, scope)

        term = search.strip().casefold() if search else ""
        if term:
            options = tuple(
                o for o in options
                if term in o.name.casefold() or (o.name_en and term in o.name_en.casefold())
            )

        if with_counts and self.search_repository is not None:
            counts = await self.search_repository.count_users_by_option(FacetId(facet_id))
            options = tuple(o.with_user_count(counts.get(o.id, 0)) for o in options)

        return options

    async def list_all(self) -> Dict[FacetId, Tuple[Option, ...]]:
        """Every facet with its full option list."""
        catalog = await self.get_catalog()
        return {facet_id: catalog.options(facet_id) for facet_id in catalog.hierarchy.facet_ids}

    async def invalidate(self) -> None:
        """Drop the cached catalog; the next read reloads it."""
        logger.info("Invalidating catalog cache")
        await self.cache.delete(self.CACHE_KEY)
        self._resolver = None


__all__ = ["CatalogApplicationService"]
