"""Domain entities for faceted musician search."""

from .catalog import ReferenceCatalog
from .facet import (
    DEFAULT_HIERARCHY,
    FacetDefinition,
    FacetHierarchy,
    FacetId,
    JoinTarget,
    Option,
    OptionOrdering,
)
from .filter_state import DEFAULT_PAGE_SIZE, FilterState
from .search import (
    FacetCount,
    NamedRef,
    Pagination,
    Predicate,
    QueryDescriptor,
    SearchPage,
    SearchResult,
    SearchResultProfile,
    SearchResultUser,
    TextPredicate,
    UserRow,
)

__all__ = [
    "DEFAULT_HIERARCHY",
    "DEFAULT_PAGE_SIZE",
    "FacetCount",
    "FacetDefinition",
    "FacetHierarchy",
    "FacetId",
    "FilterState",
    "JoinTarget",
    "NamedRef",
    "Option",
    "OptionOrdering",
    "Pagination",
    "Predicate",
    "QueryDescriptor",
    "ReferenceCatalog",
    "SearchPage",
    "SearchResult",
    "SearchResultProfile",
    "SearchResultUser",
    "TextPredicate",
    "UserRow",
]
