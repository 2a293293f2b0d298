"""Domain repository contract for the reference catalog."""

from __future__ import annotations

from abc import ABC, abstractmethod

from mooza.domain.entities.catalog import ReferenceCatalog


class ICatalogRepository(ABC):
    """Loads the reference catalog from the store."""

    @abstractmethod
    async def load_catalog(self) -> ReferenceCatalog:
        """Load every facet option as one snapshot."""
        raise NotImplementedError
