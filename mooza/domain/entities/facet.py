"""
Domain entities for facet definitions and options.

This module defines the facet graph used by musician search. Four facets
form a dependency chain (field > profession > service > genre); the rest
are flat and never scoped by other selections.

A hierarchical facet declares its scope keys in precedence order. The first
key is its direct parent. Service declares (profession, field) so that it can
be listed under a field when no profession is chosen.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from mooza.domain.exceptions import UnknownFacetError


class FacetId(str, Enum):
    """Identifiers of every facet supported by search."""

    FIELD = "field"
    PROFESSION = "profession"
    SERVICE = "service"
    GENRE = "genre"
    WORK_FORMAT = "work_format"
    EMPLOYMENT_TYPE = "employment_type"
    SKILL_LEVEL = "skill_level"
    AVAILABILITY = "availability"


class JoinTarget(str, Enum):
    """Entity that carries a facet value in the store."""

    USER = "user"
    SEARCH_PROFILE = "search_profile"


class OptionOrdering(str, Enum):
    """How option lists of a facet are ordered."""

    NAME = "name"
    SORT_ORDER = "sort_order"


@dataclass(frozen=True)
class FacetDefinition:
    """Static description of one facet."""

    facet_id: FacetId
    label: str
    join_target: JoinTarget
    column: str
    scope_keys: Tuple[FacetId, ...] = ()
    ordering: OptionOrdering = OptionOrdering.SORT_ORDER

    @property
    def parent(self) -> Optional[FacetId]:
        """Direct parent facet, if any."""
        return self.scope_keys[0] if self.scope_keys else None

    @property
    def is_scoped(self) -> bool:
        return bool(self.scope_keys)


@dataclass(frozen=True)
class Option:
    """A concrete selectable value within a facet."""

    id: str
    name: str
    facet_id: FacetId
    parent_id: Optional[str] = None
    name_en: Optional[str] = None
    sort_order: int = 0
    user_count: Optional[int] = None

    def with_user_count(self, count: int) -> "Option":
        """Return a copy carrying the number of users matching this option."""
        return Option(
            id=self.id,
            name=self.name,
            facet_id=self.facet_id,
            parent_id=self.parent_id,
            name_en=self.name_en,
            sort_order=self.sort_order,
            user_count=count,
        )


@dataclass(eq=False)
class FacetHierarchy:
    """
    Registry of facet definitions and the dependency edges between them.

    An edge A -> B exists when A is one of B's scope keys. Changing A's
    selection invalidates B and, transitively, everything scoped by B.
    """

    definitions: List[FacetDefinition]
    _by_id: Dict[FacetId, FacetDefinition] = field(init=False, repr=False)
    _children: Dict[FacetId, Tuple[FacetId, ...]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._by_id = {d.facet_id: d for d in self.definitions}
        children: Dict[FacetId, List[FacetId]] = {d.facet_id: [] for d in self.definitions}
        for definition in self.definitions:
            for key in definition.scope_keys:
                if key not in self._by_id:
                    raise UnknownFacetError(key.value)
                children[key].append(definition.facet_id)
        self._children = {k: tuple(v) for k, v in children.items()}

    def __iter__(self):
        return iter(self.definitions)

    def __contains__(self, facet_id: object) -> bool:
        try:
            return FacetId(facet_id) in self._by_id
        except ValueError:
            return False

    @property
    def facet_ids(self) -> Tuple[FacetId, ...]:
        return tuple(d.facet_id for d in self.definitions)

    def get(self, facet_id: FacetId) -> FacetDefinition:
        """Get a facet definition, failing fast on unknown ids."""
        try:
            return self._by_id[FacetId(facet_id)]
        except (KeyError, ValueError):
            raise UnknownFacetError(str(getattr(facet_id, "value", facet_id))) from None

    def children(self, facet_id: FacetId) -> Tuple[FacetId, ...]:
        """Facets directly scoped by ``facet_id``."""
        self.get(facet_id)
        return self._children[FacetId(facet_id)]

    def descendants(self, facet_id: FacetId) -> Tuple[FacetId, ...]:
        """All facets transitively scoped by ``facet_id``, top-down."""
        ordered: List[FacetId] = []
        queue = list(self.children(facet_id))
        while queue:
            current = queue.pop(0)
            if current in ordered:
                continue
            ordered.append(current)
            queue.extend(self._children[current])
        position = {fid: i for i, fid in enumerate(self.facet_ids)}
        return tuple(sorted(ordered, key=position.__getitem__))

    def ancestors(self, facet_id: FacetId) -> Tuple[FacetId, ...]:
        """Facets along the direct-parent chain, nearest first."""
        chain: List[FacetId] = []
        parent = self.get(facet_id).parent
        while parent is not None:
            chain.append(parent)
            parent = self._by_id[parent].parent
        return tuple(chain)

    def is_hierarchical(self, facet_id: FacetId) -> bool:
        """True when the facet takes part in any dependency edge."""
        return self.get(facet_id).is_scoped or bool(self.children(facet_id))

    def for_target(self, target: JoinTarget) -> Iterable[FacetDefinition]:
        return (d for d in self.definitions if d.join_target == target)


DEFAULT_HIERARCHY = FacetHierarchy(
    definitions=[
        FacetDefinition(
            facet_id=FacetId.FIELD,
            label="Field of activity",
            join_target=JoinTarget.USER,
            column="field_of_activity_id",
            ordering=OptionOrdering.NAME,
        ),
        FacetDefinition(
            facet_id=FacetId.PROFESSION,
            label="Profession",
            join_target=JoinTarget.USER,
            column="profession_id",
            scope_keys=(FacetId.FIELD,),
            ordering=OptionOrdering.NAME,
        ),
        FacetDefinition(
            facet_id=FacetId.SERVICE,
            label="Service",
            join_target=JoinTarget.SEARCH_PROFILE,
            column="service_id",
            scope_keys=(FacetId.PROFESSION, FacetId.FIELD),
        ),
        FacetDefinition(
            facet_id=FacetId.GENRE,
            label="Genre",
            join_target=JoinTarget.SEARCH_PROFILE,
            column="genre_id",
            scope_keys=(FacetId.SERVICE,),
        ),
        FacetDefinition(
            facet_id=FacetId.WORK_FORMAT,
            label="Work format",
            join_target=JoinTarget.SEARCH_PROFILE,
            column="work_format_id",
        ),
        FacetDefinition(
            facet_id=FacetId.EMPLOYMENT_TYPE,
            label="Employment type",
            join_target=JoinTarget.SEARCH_PROFILE,
            column="employment_type_id",
        ),
        FacetDefinition(
            facet_id=FacetId.SKILL_LEVEL,
            label="Skill level",
            join_target=JoinTarget.SEARCH_PROFILE,
            column="skill_level_id",
        ),
        FacetDefinition(
            facet_id=FacetId.AVAILABILITY,
            label="Availability",
            join_target=JoinTarget.SEARCH_PROFILE,
            column="availability_id",
        ),
    ]
)
