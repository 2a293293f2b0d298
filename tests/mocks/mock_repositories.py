"""
Mock repository implementations for testing.

These mocks implement the repository interfaces over in-memory data and
track method calls for verification.
"""

from collections import Counter
from typing import Dict, List, Optional

from mooza.domain.entities.catalog import ReferenceCatalog
from mooza.domain.entities.facet import DEFAULT_HIERARCHY, FacetId
from mooza.domain.entities.search import QueryDescriptor, UserRow
from mooza.domain.exceptions import SearchUnavailableError
from mooza.domain.repositories.catalog_repository import ICatalogRepository
from mooza.domain.repositories.search_repository import ISearchRepository


class MockCatalogRepository(ICatalogRepository):
    """Mock catalog repository for testing."""

    def __init__(self, catalog: ReferenceCatalog):
        self.catalog = catalog
        self.call_log: List[tuple] = []
        self.should_fail = False

    async def load_catalog(self) -> ReferenceCatalog:
        self.call_log.append(("load_catalog",))
        if self.should_fail:
            raise SearchUnavailableError("Mock catalog failure")
        return self.catalog


class MockSearchRepository(ISearchRepository):
    """Mock search repository evaluating descriptors over UserRow objects."""

    def __init__(self, rows: Optional[List[UserRow]] = None):
        self.rows: List[UserRow] = list(rows or [])
        self.call_log: List[tuple] = []
        self.should_fail = False

    def _check(self, operation: str, *args) -> None:
        self.call_log.append((operation, *args))
        if self.should_fail:
            raise SearchUnavailableError("Mock store failure")

    @staticmethod
    def matches(row: UserRow, descriptor: QueryDescriptor) -> bool:
        if row.id == descriptor.exclude_user_id:
            return False
        for predicate in descriptor.predicates:
            if getattr(row, predicate.column) != predicate.value:
                return False
        if descriptor.text_predicate is not None:
            term = descriptor.text_predicate.term.casefold()
            if not any(term in (getattr(row, f) or "").casefold() for f in descriptor.text_predicate.fields):
                return False
        return True

    def _matching(self, descriptor: QueryDescriptor) -> List[UserRow]:
        rows = [row for row in self.rows if self.matches(row, descriptor)]
        return sorted(rows, key=lambda r: tuple(getattr(r, c) for c in descriptor.order_by))

    async def count(self, descriptor: QueryDescriptor) -> int:
        self._check("count", descriptor)
        return len(self._matching(descriptor))

    async def fetch_page(self, descriptor: QueryDescriptor) -> List[UserRow]:
        self._check("fetch_page", descriptor)
        rows = self._matching(descriptor)
        return rows[descriptor.offset:descriptor.offset + descriptor.limit]

    async def facet_counts(self, descriptor: QueryDescriptor, facet_id: FacetId) -> Dict[str, int]:
        self._check("facet_counts", descriptor, facet_id)
        column = DEFAULT_HIERARCHY.get(facet_id).column
        counter = Counter(getattr(row, column) for row in self._matching(descriptor))
        return {key: value for key, value in counter.items() if key is not None}

    async def count_users_by_option(self, facet_id: FacetId) -> Dict[str, int]:
        self._check("count_users_by_option", facet_id)
        column = DEFAULT_HIERARCHY.get(facet_id).column
        counter = Counter(getattr(row, column) for row in self.rows)
        return {key: value for key, value in counter.items() if key is not None}
