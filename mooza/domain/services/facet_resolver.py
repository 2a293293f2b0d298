"""
Facet dependency resolution.

Given a filter state, decides which scoped facets are enabled and which
options they offer. Option lists are pure functions of the catalog and the
scope key, so they are memoized per resolver instance.
"""

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

import structlog

from mooza.domain.entities.catalog import ReferenceCatalog
from mooza.domain.entities.facet import FacetHierarchy, FacetId, Option
from mooza.domain.entities.filter_state import FilterState

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class FacetOptions:
    """Availability and option list of one facet."""

    facet_id: FacetId
    enabled: bool
    options: Tuple[Option, ...]
    scoped_by: Optional[FacetId] = None


class FacetDependencyResolver:
    """Resolves enabled state and scoped option lists for every facet."""

    def __init__(self, catalog: ReferenceCatalog, hierarchy: Optional[FacetHierarchy] = None):
        self.catalog = catalog
        self.hierarchy = hierarchy or catalog.hierarchy
        self._cache: Dict[Tuple[FacetId, Optional[FacetId], Optional[str]], Tuple[Option, ...]] = {}

    def options_for(self, facet_id: FacetId, filter_state: FilterState) -> FacetOptions:
        """Enabled flag and options of ``facet_id`` under ``filter_state``."""
        definition = self.hierarchy.get(facet_id)

        if not definition.is_scoped:
            return FacetOptions(
                facet_id=definition.facet_id,
                enabled=True,
                options=self.catalog.options(definition.facet_id),
            )

        for scope_key in definition.scope_keys:
            scope_value = filter_state.selected(scope_key)
            if scope_value is not None:
                return FacetOptions(
                    facet_id=definition.facet_id,
                    enabled=True,
                    options=self._scoped(definition.facet_id, scope_key, scope_value),
                    scoped_by=scope_key,
                )

        return FacetOptions(facet_id=definition.facet_id, enabled=False, options=())

    def resolve_all(self, filter_state: FilterState) -> Dict[FacetId, FacetOptions]:
        return {
            facet_id: self.options_for(facet_id, filter_state)
            for facet_id in self.hierarchy.facet_ids
        }

    def list_options(
        self,
        facet_id: FacetId,
        scope: Optional[Mapping[FacetId, Optional[str]]] = None,
    ) -> Tuple[Option, ...]:
        """
        List options of a facet for an explicit scope.

        The first scope key present in ``scope`` (by precedence) narrows the
        list. Without any scope key the facet's full list is returned.
        """
        definition = self.hierarchy.get(facet_id)
        scope = {FacetId(k): v for k, v in (scope or {}).items() if v}

        for scope_key in definition.scope_keys:
            if scope_key in scope:
                return self._scoped(definition.facet_id, scope_key, scope[scope_key])

        return self.catalog.options(definition.facet_id)

    def _scoped(self, facet_id: FacetId, scope_key: FacetId, scope_value: str) -> Tuple[Option, ...]:
        cache_key = (facet_id, scope_key, scope_value)
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        if not self.catalog.contains(scope_key, scope_value):
            logger.debug(
                "Stale scope reference",
                facet_id=facet_id.value,
                scope_key=scope_key.value,
                scope_value=scope_value,
            )
            options: Tuple[Option, ...] = ()
        else:
            options = self._descend(facet_id, scope_key, (scope_value,))

        self._cache[cache_key] = options
        return options

    def _descend(self, facet_id: FacetId, scope_key: FacetId, scope_values: Tuple[str, ...]) -> Tuple[Option, ...]:
        """Walk the parent chain from ``facet_id`` up to ``scope_key``."""
        parent = self.hierarchy.get(facet_id).parent
        if parent == scope_key:
            return self.catalog.children_of(facet_id, scope_values)
        if parent is None:
            return ()
        intermediate = self._descend(parent, scope_key, scope_values)
        return self.catalog.children_of(facet_id, (o.id for o in intermediate))
