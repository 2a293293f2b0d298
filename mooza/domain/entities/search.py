"""
Domain entities for compiled search queries and their results.
"""

import hashlib
import json
import math
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple

from mooza.domain.entities.facet import FacetId, JoinTarget

TEXT_SEARCH_FIELDS: Tuple[str, ...] = ("first_name", "last_name", "nickname", "bio")
DEFAULT_ORDER_BY: Tuple[str, ...] = ("first_name", "last_name", "id")


@dataclass(frozen=True)
class Predicate:
    """Equality predicate against one column of a join target."""

    facet_id: FacetId
    target: JoinTarget
    column: str
    value: str


@dataclass(frozen=True)
class TextPredicate:
    """Case-insensitive substring match OR'd across ``fields``."""

    term: str
    fields: Tuple[str, ...] = TEXT_SEARCH_FIELDS


@dataclass(frozen=True)
class QueryDescriptor:
    """Store-agnostic compiled form of a filter state."""

    predicates: Tuple[Predicate, ...]
    text_predicate: Optional[TextPredicate]
    exclude_user_id: str
    offset: int
    limit: int
    order_by: Tuple[str, ...] = DEFAULT_ORDER_BY

    @property
    def page(self) -> int:
        if self.limit <= 0:
            return 1
        return self.offset // self.limit + 1

    @property
    def page_size(self) -> int:
        return self.limit

    def predicates_for(self, target: JoinTarget) -> Tuple[Predicate, ...]:
        return tuple(p for p in self.predicates if p.target == target)

    def has_facet(self, facet_id: FacetId) -> bool:
        return any(p.facet_id == facet_id for p in self.predicates)

    def without_pagination(self) -> "QueryDescriptor":
        """Same query covering every match, as used for totals."""
        return replace(self, offset=0, limit=0)

    def without_facet(self, facet_id: FacetId) -> "QueryDescriptor":
        """Same query with the predicate on ``facet_id`` removed."""
        return replace(self, predicates=tuple(p for p in self.predicates if p.facet_id != facet_id))

    def cache_key(self) -> str:
        """Stable digest of the descriptor."""
        payload = {
            "predicates": [[p.facet_id.value, p.target.value, p.column, p.value] for p in self.predicates],
            "text": [self.text_predicate.term, list(self.text_predicate.fields)] if self.text_predicate else None,
            "exclude": self.exclude_user_id,
            "offset": self.offset,
            "limit": self.limit,
            "order_by": list(self.order_by),
        }
        encoded = json.dumps(payload, sort_keys=True, ensure_ascii=False).encode("utf-8")
        return hashlib.sha256(encoded).hexdigest()


@dataclass(frozen=True)
class NamedRef:
    """Identifier with its resolved display name."""

    id: str
    name: str


@dataclass
class UserRow:
    """Raw user + search profile row as returned by the store."""

    id: str
    first_name: str
    last_name: str
    nickname: Optional[str] = None
    avatar: Optional[str] = None
    city: Optional[str] = None
    bio: Optional[str] = None
    field_of_activity_id: Optional[str] = None
    profession_id: Optional[str] = None
    search_profile_id: Optional[str] = None
    service_id: Optional[str] = None
    genre_id: Optional[str] = None
    work_format_id: Optional[str] = None
    employment_type_id: Optional[str] = None
    skill_level_id: Optional[str] = None
    availability_id: Optional[str] = None
    price_per_hour: Optional[float] = None
    price_per_event: Optional[float] = None


@dataclass
class SearchResultUser:
    id: str
    first_name: str
    last_name: str
    nickname: Optional[str] = None
    avatar: Optional[str] = None
    city: Optional[str] = None
    field_of_activity: Optional[NamedRef] = None
    profession: Optional[NamedRef] = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class SearchResultProfile:
    service: Optional[NamedRef] = None
    genre: Optional[NamedRef] = None
    work_format: Optional[NamedRef] = None
    employment_type: Optional[NamedRef] = None
    skill_level: Optional[NamedRef] = None
    availability: Optional[NamedRef] = None
    price_per_hour: Optional[float] = None
    price_per_event: Optional[float] = None


@dataclass
class SearchResult:
    """Projection of a user and their search profile."""

    id: str
    user: SearchResultUser
    search_profile: SearchResultProfile


@dataclass(frozen=True)
class Pagination:
    """Page position plus totals; total_pages is 0 for an empty result."""

    page: int
    page_size: int
    total_count: int

    @property
    def total_pages(self) -> int:
        if self.total_count <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)


@dataclass(frozen=True)
class FacetCount:
    """Number of matching users carrying one option of a facet."""

    facet_id: FacetId
    option_id: str
    name: Optional[str]
    count: int
    parent_id: Optional[str] = None


@dataclass
class SearchPage:
    """One page of results with totals and per-facet counts."""

    results: List[SearchResult]
    pagination: Pagination
    facets: Dict[FacetId, List[FacetCount]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.results
