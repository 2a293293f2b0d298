"""
Search application service.

Orchestrates one musician search: validate the selections against the
catalog, compile them, execute through the aggregator, and cache the page.
"""

import time
from dataclasses import dataclass, field
from typing import Dict, Optional

import structlog

from mooza.application.catalog_service import CatalogApplicationService
from mooza.application.result_aggregator import ResultAggregator
from mooza.domain.entities.facet import FacetId
from mooza.domain.entities.filter_state import DEFAULT_PAGE_SIZE, FilterState
from mooza.domain.entities.search import SearchPage
from mooza.domain.exceptions import ValidationError
from mooza.domain.interfaces import ICacheService
from mooza.domain.repositories.search_repository import ISearchRepository
from mooza.domain.services.query_compiler import QueryCompiler

logger = structlog.get_logger(__name__)


@dataclass
class SearchRequest:
    """Facet selections, free text and paging for one search."""

    selections: Dict[FacetId, Optional[str]] = field(default_factory=dict)
    query: Optional[str] = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    include_facets: bool = True


class SearchApplicationService:
    """Application service for SEARCH requests."""

    CACHE_PREFIX = "search:page"

    def __init__(
        self,
        catalog_service: CatalogApplicationService,
        search_repository: ISearchRepository,
        cache_service: Optional[ICacheService] = None,
        result_cache_ttl: int = 0,
        max_page_size: int = 100,
        compiler: Optional[QueryCompiler] = None,
    ):
        self.catalog_service = catalog_service
        self.search_repository = search_repository
        self.cache = cache_service
        self.result_cache_ttl = result_cache_ttl
        self.max_page_size = max_page_size
        self.compiler = compiler or QueryCompiler()

    async def search(self, request: SearchRequest, caller_id: str) -> SearchPage:
        """
        Run a search on behalf of ``caller_id``.

        Raises:
            InvalidOptionError: a selected option is unknown or inconsistent
                with its selected ancestor
            ValidationError: paging is out of range or the caller is missing
            SearchUnavailableError: the store cannot be reached
        """
        if request.page_size < 1 or request.page_size > self.max_page_size:
            raise ValidationError(f"page size must be between 1 and {self.max_page_size}")

        started = time.perf_counter()
        catalog = await self.catalog_service.get_catalog()

        filter_state = FilterState.from_selections(
            request.selections,
            catalog=catalog,
            page=request.page,
            page_size=request.page_size,
            query=request.query,
            hierarchy=catalog.hierarchy,
        )
        descriptor = self.compiler.compile(filter_state, exclude_user_id=caller_id)

        cache_key = self._build_cache_key(descriptor.cache_key(), catalog.version, request.include_facets)
        if self.cache is not None and self.result_cache_ttl > 0:
            cached = await self.cache.get(cache_key)
            if isinstance(cached, SearchPage):
                logger.debug("Returning cached search page", cache_key=cache_key)
                return cached

        aggregator = ResultAggregator(self.search_repository, catalog)
        page = await aggregator.execute(descriptor, include_facets=request.include_facets)

        if self.cache is not None and self.result_cache_ttl > 0:
            await self.cache.set(key=cache_key, value=page, ttl=self.result_cache_ttl)

        logger.info(
            "search_executed",
            facets=len(descriptor.predicates),
            has_text=descriptor.text_predicate is not None,
            page=page.pagination.page,
            total=page.pagination.total_count,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return page

    def _build_cache_key(self, digest: str, catalog_version: str, include_facets: bool) -> str:
        return f"{self.CACHE_PREFIX}:{catalog_version}:{int(include_facets)}:{digest}"


__all__ = ["SearchApplicationService", "SearchRequest"]
