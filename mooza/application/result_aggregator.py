"""
Result aggregation for musician search.

Executes a compiled descriptor, resolves display names through the catalog,
and attaches per-facet counts for the hierarchical facets.
"""

from typing import Dict, List, Optional, Tuple

import structlog

from mooza.domain.entities.catalog import ReferenceCatalog
from mooza.domain.entities.facet import FacetId
from mooza.domain.entities.search import (
    FacetCount,
    NamedRef,
    Pagination,
    QueryDescriptor,
    SearchPage,
    SearchResult,
    SearchResultProfile,
    SearchResultUser,
    UserRow,
)
from mooza.domain.repositories.search_repository import ISearchRepository

logger = structlog.get_logger(__name__)

COUNTED_FACETS: Tuple[FacetId, ...] = (
    FacetId.FIELD,
    FacetId.PROFESSION,
    FacetId.SERVICE,
    FacetId.GENRE,
)


class ResultAggregator:
    """Runs count, page and facet queries for one descriptor."""

    def __init__(
        self,
        search_repository: ISearchRepository,
        catalog: ReferenceCatalog,
        counted_facets: Tuple[FacetId, ...] = COUNTED_FACETS,
    ):
        self.repository = search_repository
        self.catalog = catalog
        self.counted_facets = counted_facets

    async def execute(self, descriptor: QueryDescriptor, include_facets: bool = True) -> SearchPage:
        """
        Execute a descriptor.

        The count shares every predicate with the page query. Pages past the
        end, and empty result sets, yield an empty list rather than an error.
        Store failures propagate as SearchUnavailableError.
        """
        total_count = await self.repository.count(descriptor.without_pagination())
        pagination = Pagination(page=descriptor.page, page_size=descriptor.limit, total_count=total_count)

        results: List[SearchResult] = []
        if total_count > 0 and descriptor.offset < total_count:
            rows = await self.repository.fetch_page(descriptor)
            results = [self.to_result(row) for row in rows[: descriptor.limit]]

        facets: Dict[FacetId, List[FacetCount]] = {}
        if include_facets:
            for facet_id in self.counted_facets:
                facets[facet_id] = await self._facet_counts(descriptor, facet_id)

        return SearchPage(results=results, pagination=pagination, facets=facets)

    async def _facet_counts(self, descriptor: QueryDescriptor, facet_id: FacetId) -> List[FacetCount]:
        # Each facet is counted without its own predicate so siblings stay visible.
        counts = await self.repository.facet_counts(
            descriptor.without_pagination().without_facet(facet_id), facet_id
        )

        entries: List[FacetCount] = []
        for option_id, count in counts.items():
            if not option_id or count <= 0:
                continue
            option = self.catalog.get_option(facet_id, option_id)
            entries.append(
                FacetCount(
                    facet_id=facet_id,
                    option_id=option_id,
                    name=option.name if option else None,
                    count=count,
                    parent_id=option.parent_id if option else None,
                )
            )
        entries.sort(key=lambda e: (-e.count, (e.name or "").casefold(), e.option_id))
        return entries

    def _ref(self, facet_id: FacetId, option_id: Optional[str]) -> Optional[NamedRef]:
        if option_id is None:
            return None
        name = self.catalog.display_name(facet_id, option_id)
        if name is None:
            logger.debug("Unresolved option on result row", facet_id=facet_id.value, option_id=option_id)
            return None
        return NamedRef(id=option_id, name=name)

    def to_result(self, row: UserRow) -> SearchResult:
        """Project a store row into a SearchResult with display names."""
        return SearchResult(
            id=row.search_profile_id or row.id,
            user=SearchResultUser(
                id=row.id,
                first_name=row.first_name,
                last_name=row.last_name,
                nickname=row.nickname,
                avatar=row.avatar,
                city=row.city,
                field_of_activity=self._ref(FacetId.FIELD, row.field_of_activity_id),
                profession=self._ref(FacetId.PROFESSION, row.profession_id),
            ),
            search_profile=SearchResultProfile(
                service=self._ref(FacetId.SERVICE, row.service_id),
                genre=self._ref(FacetId.GENRE, row.genre_id),
                work_format=self._ref(FacetId.WORK_FORMAT, row.work_format_id),
                employment_type=self._ref(FacetId.EMPLOYMENT_TYPE, row.employment_type_id),
                skill_level=self._ref(FacetId.SKILL_LEVEL, row.skill_level_id),
                availability=self._ref(FacetId.AVAILABILITY, row.availability_id),
                price_per_hour=row.price_per_hour,
                price_per_event=row.price_per_event,
            ),
        )
