"""Pure domain services."""

from .facet_resolver import FacetDependencyResolver, FacetOptions
from .query_compiler import QueryCompiler

__all__ = ["FacetDependencyResolver", "FacetOptions", "QueryCompiler"]
