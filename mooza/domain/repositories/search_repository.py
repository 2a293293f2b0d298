"""Domain repository contract for musician search queries."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List

from mooza.domain.entities.facet import FacetId
from mooza.domain.entities.search import QueryDescriptor, UserRow


class ISearchRepository(ABC):
    """Executes compiled query descriptors against the user store.

    Implementations raise ``SearchUnavailableError`` when the store cannot
    be reached or a query times out.
    """

    @abstractmethod
    async def count(self, descriptor: QueryDescriptor) -> int:
        """Count users matching the descriptor, ignoring offset and limit."""
        raise NotImplementedError

    @abstractmethod
    async def fetch_page(self, descriptor: QueryDescriptor) -> List[UserRow]:
        """Fetch one ordered page of matching users."""
        raise NotImplementedError

    @abstractmethod
    async def facet_counts(self, descriptor: QueryDescriptor, facet_id: FacetId) -> Dict[str, int]:
        """Count matching users grouped by the option of ``facet_id``."""
        raise NotImplementedError

    @abstractmethod
    async def count_users_by_option(self, facet_id: FacetId) -> Dict[str, int]:
        """Count discoverable users per option of ``facet_id``."""
        raise NotImplementedError
