"""SQL implementation of ICatalogRepository."""

from __future__ import annotations

from typing import List

import structlog
from sqlmodel import select

from mooza.database.error_handling import DatabaseError, handle_database_errors, is_connection_error
from mooza.database.sqlmodel_engine import SQLModelDatabaseManager
from mooza.domain.entities.catalog import ReferenceCatalog
from mooza.domain.entities.facet import Option
from mooza.domain.exceptions import SearchUnavailableError
from mooza.domain.repositories.catalog_repository import ICatalogRepository
from mooza.infrastructure.persistence.mappers.catalog_mapper import REFERENCE_TABLES, CatalogMapper

logger = structlog.get_logger(__name__)


class SQLCatalogRepository(ICatalogRepository):
    """Loads every reference table into one ReferenceCatalog."""

    def __init__(self, db_manager: SQLModelDatabaseManager):
        self.db_manager = db_manager

    async def load_catalog(self) -> ReferenceCatalog:
        try:
            options = await self._load_options()
        except DatabaseError as e:
            if e.original_error is not None and is_connection_error(e.original_error):
                raise SearchUnavailableError("Reference catalog is unavailable", original_error=e) from e
            raise
        return ReferenceCatalog.from_options(options)

    @handle_database_errors(context={"operation": "load_catalog"})
    async def _load_options(self) -> List[Option]:
        options: List[Option] = []
        async with self.db_manager.get_session() as session:
            for facet_id, (table, _) in REFERENCE_TABLES.items():
                result = await session.execute(select(table))
                rows = result.scalars().all()
                options.extend(CatalogMapper.to_option(row, facet_id) for row in rows)

        logger.debug("Reference rows loaded", count=len(options))
        return options


__all__ = ["SQLCatalogRepository"]
