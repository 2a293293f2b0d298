"""
Reference catalog aggregate.

Holds every option of every facet as one read-only snapshot. Options are
seeded by administrators and never change during a request, so a snapshot
can be shared across concurrent searches.
"""

import hashlib
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from mooza.domain.entities.facet import (
    DEFAULT_HIERARCHY,
    FacetHierarchy,
    FacetId,
    Option,
    OptionOrdering,
)


def _sort_key(ordering: OptionOrdering):
    if ordering == OptionOrdering.NAME:
        return lambda o: (o.name.casefold(), o.id)
    return lambda o: (o.sort_order, o.name.casefold(), o.id)


@dataclass(frozen=True)
class ReferenceCatalog:
    """Immutable snapshot of all facet options."""

    options_by_facet: Mapping[FacetId, Tuple[Option, ...]]
    hierarchy: FacetHierarchy = DEFAULT_HIERARCHY
    loaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc), compare=False)
    _index: Dict[Tuple[FacetId, str], Option] = field(init=False, repr=False, compare=False)
    _version: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        ordered: Dict[FacetId, Tuple[Option, ...]] = {}
        for definition in self.hierarchy:
            options = self.options_by_facet.get(definition.facet_id, ())
            ordered[definition.facet_id] = tuple(sorted(options, key=_sort_key(definition.ordering)))
        object.__setattr__(self, "options_by_facet", ordered)

        index = {
            (facet_id, option.id): option
            for facet_id, options in ordered.items()
            for option in options
        }
        object.__setattr__(self, "_index", index)

        digest = hashlib.sha256()
        for facet_id, options in ordered.items():
            for option in options:
                digest.update(
                    f"{facet_id.value}|{option.id}|{option.name}|{option.parent_id or ''}|{option.sort_order}\n".encode("utf-8")
                )
        object.__setattr__(self, "_version", digest.hexdigest()[:16])

    @classmethod
    def from_options(
        cls,
        options: Iterable[Option],
        hierarchy: FacetHierarchy = DEFAULT_HIERARCHY,
    ) -> "ReferenceCatalog":
        """Build a catalog from a flat list of options."""
        grouped: Dict[FacetId, List[Option]] = {}
        for option in options:
            grouped.setdefault(option.facet_id, []).append(option)
        return cls(
            options_by_facet={k: tuple(v) for k, v in grouped.items()},
            hierarchy=hierarchy,
        )

    @property
    def version(self) -> str:
        """Content fingerprint, stable across processes for equal data."""
        return self._version

    def options(self, facet_id: FacetId) -> Tuple[Option, ...]:
        """All options of a facet in display order."""
        self.hierarchy.get(facet_id)
        return self.options_by_facet.get(FacetId(facet_id), ())

    def get_option(self, facet_id: FacetId, option_id: str) -> Optional[Option]:
        return self._index.get((FacetId(facet_id), option_id))

    def contains(self, facet_id: FacetId, option_id: str) -> bool:
        return (FacetId(facet_id), option_id) in self._index

    def children_of(self, facet_id: FacetId, parent_ids: Iterable[str]) -> Tuple[Option, ...]:
        """Options of ``facet_id`` whose direct parent is one of ``parent_ids``."""
        wanted = set(parent_ids)
        if not wanted:
            return ()
        return tuple(o for o in self.options(facet_id) if o.parent_id in wanted)

    def lineage(self, facet_id: FacetId, option_id: str) -> Dict[FacetId, str]:
        """Ancestor option ids of an option, keyed by ancestor facet."""
        result: Dict[FacetId, str] = {}
        option = self.get_option(facet_id, option_id)
        for ancestor in self.hierarchy.ancestors(facet_id):
            if option is None or option.parent_id is None:
                break
            result[ancestor] = option.parent_id
            option = self.get_option(ancestor, option.parent_id)
        return result

    def display_name(self, facet_id: FacetId, option_id: Optional[str]) -> Optional[str]:
        if option_id is None:
            return None
        option = self.get_option(facet_id, option_id)
        return option.name if option else None

    def __len__(self) -> int:
        return len(self._index)
