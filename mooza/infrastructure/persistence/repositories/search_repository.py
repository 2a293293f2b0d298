"""SQL implementation of ISearchRepository."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

import structlog
from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from mooza.database.error_handling import ConnectionError, QueryTimeoutError, map_sqlalchemy_error
from mooza.database.sqlmodel_engine import SQLModelDatabaseManager
from mooza.domain.entities.facet import DEFAULT_HIERARCHY, FacetHierarchy, FacetId, JoinTarget
from mooza.domain.entities.search import QueryDescriptor, UserRow
from mooza.domain.exceptions import SearchUnavailableError
from mooza.domain.repositories.search_repository import ISearchRepository
from mooza.infrastructure.persistence.mappers.catalog_mapper import UserRowMapper
from mooza.infrastructure.persistence.models.user_tables import SearchProfileTable, UserTable

logger = structlog.get_logger(__name__)

T = TypeVar("T")

_TARGET_TABLES = {
    JoinTarget.USER: UserTable,
    JoinTarget.SEARCH_PROFILE: SearchProfileTable,
}


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLSearchRepository(ISearchRepository):
    """
    Runs compiled descriptors against the users table.

    Users are LEFT JOINed to their search profile, so users without one are
    still found until a profile-level predicate is applied.
    """

    def __init__(
        self,
        db_manager: SQLModelDatabaseManager,
        hierarchy: FacetHierarchy = DEFAULT_HIERARCHY,
        statement_timeout: Optional[float] = None,
    ):
        self.db_manager = db_manager
        self.hierarchy = hierarchy
        self.statement_timeout = statement_timeout

    # ------------------------------------------------------------------
    # Statement building
    # ------------------------------------------------------------------

    def _conditions(self, descriptor: Optional[QueryDescriptor]) -> List[Any]:
        if descriptor is None:
            return []

        conditions: List[Any] = [UserTable.id != descriptor.exclude_user_id]

        for predicate in descriptor.predicates:
            table = _TARGET_TABLES[predicate.target]
            conditions.append(getattr(table, predicate.column) == predicate.value)

        if descriptor.text_predicate is not None:
            pattern = f"%{_escape_like(descriptor.text_predicate.term)}%"
            conditions.append(
                or_(*[
                    getattr(UserTable, column).ilike(pattern, escape="\\")
                    for column in descriptor.text_predicate.fields
                ])
            )
        return conditions

    @staticmethod
    def _joined(stmt):
        return stmt.select_from(UserTable).outerjoin(
            SearchProfileTable, SearchProfileTable.user_id == UserTable.id
        )

    def _facet_column(self, facet_id: FacetId):
        definition = self.hierarchy.get(facet_id)
        return getattr(_TARGET_TABLES[definition.join_target], definition.column)

    # ------------------------------------------------------------------
    # ISearchRepository
    # ------------------------------------------------------------------

    async def count(self, descriptor: QueryDescriptor) -> int:
        stmt = self._joined(select(func.count(UserTable.id))).where(*self._conditions(descriptor))

        async def run() -> int:
            async with self.db_manager.get_session() as session:
                result = await session.execute(stmt)
                return int(result.scalar() or 0)

        return await self._run("count", run)

    async def fetch_page(self, descriptor: QueryDescriptor) -> List[UserRow]:
        order_by = [getattr(UserTable, column) for column in descriptor.order_by]
        stmt = (
            self._joined(select(UserTable, SearchProfileTable))
            .where(*self._conditions(descriptor))
            .order_by(*order_by)
            .offset(descriptor.offset)
            .limit(descriptor.limit)
        )

        async def run() -> List[UserRow]:
            async with self.db_manager.get_session() as session:
                result = await session.execute(stmt)
                return [UserRowMapper.to_domain(user, profile) for user, profile in result.all()]

        return await self._run("fetch_page", run)

    async def facet_counts(self, descriptor: QueryDescriptor, facet_id: FacetId) -> Dict[str, int]:
        return await self._grouped_counts(facet_id, descriptor, "facet_counts")

    async def count_users_by_option(self, facet_id: FacetId) -> Dict[str, int]:
        return await self._grouped_counts(facet_id, None, "count_users_by_option")

    async def _grouped_counts(
        self,
        facet_id: FacetId,
        descriptor: Optional[QueryDescriptor],
        operation: str,
    ) -> Dict[str, int]:
        column = self._facet_column(facet_id)
        stmt = (
            self._joined(select(column, func.count(UserTable.id)))
            .where(*self._conditions(descriptor), column.is_not(None))
            .group_by(column)
        )

        async def run() -> Dict[str, int]:
            async with self.db_manager.get_session() as session:
                result = await session.execute(stmt)
                return {str(option_id): int(count) for option_id, count in result.all()}

        return await self._run(operation, run)

    # ------------------------------------------------------------------

    async def _run(self, operation: str, func_: Callable[[], Awaitable[T]]) -> T:
        try:
            if self.statement_timeout:
                return await asyncio.wait_for(func_(), timeout=self.statement_timeout)
            return await func_()
        except (SQLAlchemyError, asyncio.TimeoutError, OSError) as e:
            error_class = map_sqlalchemy_error(e)
            if issubclass(error_class, (ConnectionError, QueryTimeoutError)):
                logger.warning("Search store unavailable", operation=operation, error=str(e))
                raise SearchUnavailableError(original_error=e) from e
            raise error_class(
                f"Search query failed in {operation}: {str(e)}",
                original_error=e,
                context={"operation": operation},
            ) from e


__all__ = ["SQLSearchRepository"]
