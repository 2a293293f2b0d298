"""Persistence mappers."""

from .catalog_mapper import REFERENCE_TABLES, CatalogMapper, UserRowMapper

__all__ = ["REFERENCE_TABLES", "CatalogMapper", "UserRowMapper"]
