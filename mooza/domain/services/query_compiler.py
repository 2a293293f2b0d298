"""
Query compilation.

Translates a filter state into a QueryDescriptor. Field and profession are
attributes of the user record; every other facet lives on the user's search
profile, so predicates carry their join target.
"""

from typing import List, Optional

from mooza.domain.entities.facet import FacetHierarchy
from mooza.domain.entities.filter_state import FilterState
from mooza.domain.entities.search import (
    DEFAULT_ORDER_BY,
    TEXT_SEARCH_FIELDS,
    Predicate,
    QueryDescriptor,
    TextPredicate,
)
from mooza.domain.exceptions import ValidationError


class QueryCompiler:
    """Deterministic FilterState -> QueryDescriptor translation."""

    def __init__(self, hierarchy: Optional[FacetHierarchy] = None):
        self.hierarchy = hierarchy

    def compile(
        self,
        filter_state: FilterState,
        text_query: Optional[str] = None,
        *,
        exclude_user_id: str,
    ) -> QueryDescriptor:
        """
        Compile a filter state.

        Args:
            filter_state: selections and pagination
            text_query: free text; falls back to ``filter_state.query``
            exclude_user_id: the caller, never part of the results
        """
        if not exclude_user_id:
            raise ValidationError("exclude_user_id is required")

        hierarchy = self.hierarchy or filter_state.hierarchy
        snapshot = filter_state.to_query_parameters()

        predicates: List[Predicate] = []
        for facet_id, option_id in snapshot.active_selections():
            definition = hierarchy.get(facet_id)
            predicates.append(
                Predicate(
                    facet_id=definition.facet_id,
                    target=definition.join_target,
                    column=definition.column,
                    value=option_id,
                )
            )

        term = text_query if text_query is not None else snapshot.query
        term = term.strip() if term else None

        return QueryDescriptor(
            predicates=tuple(predicates),
            text_predicate=TextPredicate(term=term, fields=TEXT_SEARCH_FIELDS) if term else None,
            exclude_user_id=str(exclude_user_id),
            offset=snapshot.offset,
            limit=snapshot.page_size,
            order_by=DEFAULT_ORDER_BY,
        )
