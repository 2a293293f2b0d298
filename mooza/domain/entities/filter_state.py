"""
Filter state for musician search.

A FilterState is an immutable value: every mutation returns a new instance.
It owns the cascade rule: when a facet's selection changes, every facet
scoped by it (directly or transitively) is cleared in the same update.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Mapping, Optional, Tuple

from mooza.domain.entities.catalog import ReferenceCatalog
from mooza.domain.entities.facet import DEFAULT_HIERARCHY, FacetHierarchy, FacetId
from mooza.domain.exceptions import InvalidOptionError, ValidationError

DEFAULT_PAGE_SIZE = 20


def _normalize_option(option_id: Optional[str]) -> Optional[str]:
    if option_id is None:
        return None
    option_id = str(option_id).strip()
    return option_id or None


def _normalize_query(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    text = text.strip()
    return text or None


@dataclass(frozen=True)
class FilterState:
    """Current facet selections plus pagination and free text."""

    selections_items: Tuple[Tuple[FacetId, str], ...] = ()
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    query: Optional[str] = None
    hierarchy: FacetHierarchy = field(default=DEFAULT_HIERARCHY, compare=False, repr=False)
    # Checked on every set_facet; None skips option validation
    catalog: Optional[ReferenceCatalog] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValidationError("page_size must be at least 1")
        if self.page < 1:
            object.__setattr__(self, "page", 1)
        position = {fid: i for i, fid in enumerate(self.hierarchy.facet_ids)}
        items = tuple(
            sorted(
                ((FacetId(k), v) for k, v in self.selections_items if v is not None),
                key=lambda item: position[item[0]],
            )
        )
        object.__setattr__(self, "selections_items", items)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def empty(
        cls,
        page_size: int = DEFAULT_PAGE_SIZE,
        hierarchy: Optional[FacetHierarchy] = None,
        catalog: Optional[ReferenceCatalog] = None,
    ) -> "FilterState":
        """Blank state. With ``catalog`` every later selection is validated."""
        if hierarchy is None:
            hierarchy = catalog.hierarchy if catalog is not None else DEFAULT_HIERARCHY
        return cls(page_size=page_size, hierarchy=hierarchy, catalog=catalog)

    @classmethod
    def from_selections(
        cls,
        selections: Mapping[FacetId, Optional[str]],
        catalog: Optional[ReferenceCatalog] = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        query: Optional[str] = None,
        hierarchy: Optional[FacetHierarchy] = None,
    ) -> "FilterState":
        """
        Build a state from request parameters.

        Selections are applied top-down in hierarchy order so that an
        ancestor is always set before its descendants. With a catalog, every
        option is validated against its facet and the selected ancestors,
        and the catalog stays bound to the returned state.
        """
        state = cls.empty(page_size=page_size, hierarchy=hierarchy, catalog=catalog)
        given = {FacetId(k): v for k, v in selections.items()}
        for facet_id in state.hierarchy.facet_ids:
            option_id = _normalize_option(given.get(facet_id))
            if option_id is not None:
                state = state.set_facet(facet_id, option_id)
        return state.set_query(query).set_page(page)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def selections(self) -> Dict[FacetId, Optional[str]]:
        """Selection for every facet, None when unselected."""
        chosen = dict(self.selections_items)
        return {facet_id: chosen.get(facet_id) for facet_id in self.hierarchy.facet_ids}

    def selected(self, facet_id: FacetId) -> Optional[str]:
        facet_id = self.hierarchy.get(facet_id).facet_id
        for key, value in self.selections_items:
            if key == facet_id:
                return value
        return None

    def active_selections(self) -> Tuple[Tuple[FacetId, str], ...]:
        """Non-null selections in hierarchy order."""
        return self.selections_items

    @property
    def is_empty(self) -> bool:
        return not self.selections_items and self.query is None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def to_query_parameters(self) -> "FilterState":
        """Snapshot handed to the query compiler."""
        return replace(self)

    # ------------------------------------------------------------------
    # Mutations (each returns a new state)
    # ------------------------------------------------------------------

    def set_facet(
        self,
        facet_id: FacetId,
        option_id: Optional[str],
        catalog: Optional[ReferenceCatalog] = None,
    ) -> "FilterState":
        """
        Select ``option_id`` for ``facet_id`` (None clears it).

        A changed value clears every descendant facet and resets the page.
        Re-selecting the current value returns the state unchanged. An
        explicit ``catalog`` overrides the one bound to the state.

        Raises:
            InvalidOptionError: the option is not part of the facet, or it
                sits under a different ancestor than the one selected.
        """
        facet_id = self.hierarchy.get(facet_id).facet_id
        option_id = _normalize_option(option_id)

        catalog = catalog if catalog is not None else self.catalog
        if option_id is not None and catalog is not None:
            self._validate_option(catalog, facet_id, option_id)

        if self.selected(facet_id) == option_id:
            return self

        updated = dict(self.selections_items)
        if option_id is None:
            updated.pop(facet_id, None)
        else:
            updated[facet_id] = option_id
        for descendant in self.hierarchy.descendants(facet_id):
            updated.pop(descendant, None)

        return replace(self, selections_items=tuple(updated.items()), page=1)

    def clear_facet(self, facet_id: FacetId) -> "FilterState":
        return self.set_facet(facet_id, None)

    def set_page(self, page: int) -> "FilterState":
        """Move to ``page``; values below 1 are clamped to 1."""
        return replace(self, page=max(1, int(page)))

    def next_page(self) -> "FilterState":
        return self.set_page(self.page + 1)

    def prev_page(self) -> "FilterState":
        return self.set_page(self.page - 1)

    def set_page_size(self, page_size: int) -> "FilterState":
        if page_size == self.page_size:
            return self
        return replace(self, page_size=page_size, page=1)

    def set_query(self, text: Optional[str]) -> "FilterState":
        text = _normalize_query(text)
        if text == self.query:
            return self
        return replace(self, query=text, page=1)

    def reset_all(self) -> "FilterState":
        """Clear every selection and the free text; back to page 1."""
        return replace(self, selections_items=(), page=1, query=None)

    # ------------------------------------------------------------------

    def _validate_option(self, catalog: ReferenceCatalog, facet_id: FacetId, option_id: str) -> None:
        if not catalog.contains(facet_id, option_id):
            raise InvalidOptionError(facet_id.value, option_id)

        for ancestor, ancestor_option in catalog.lineage(facet_id, option_id).items():
            chosen = self.selected(ancestor)
            if chosen is not None and chosen != ancestor_option:
                raise InvalidOptionError(
                    facet_id.value,
                    option_id,
                    reason=f"does not belong to selected {ancestor.value} '{chosen}'",
                )
