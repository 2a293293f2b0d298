"""
Async engine and session management.

PostgreSQL through asyncpg in production. Any async SQLAlchemy URL is
accepted; the tests run against ``sqlite+aiosqlite:///:memory:``.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from mooza.core.config import Settings

logger = structlog.get_logger(__name__)


class SQLModelDatabaseManager:
    """Owns the engine and hands out short-lived sessions."""

    def __init__(self, settings: Settings, database_url: Optional[str] = None):
        self.settings = settings
        self.database_url = database_url or settings.get_database_url()
        self.engine: Optional[AsyncEngine] = None
        self._sessions: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_initialized(self) -> bool:
        return self.engine is not None

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    def _engine_options(self) -> Dict[str, Any]:
        if self.is_sqlite:
            # In-memory SQLite lives on a single connection
            return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}

        timeout = self.settings.DB_STATEMENT_TIMEOUT_SECONDS
        return {
            "pool_size": self.settings.DB_POOL_SIZE,
            "max_overflow": self.settings.DB_MAX_OVERFLOW,
            "pool_pre_ping": True,
            "pool_recycle": 1800,
            "connect_args": {
                "command_timeout": timeout,
                "server_settings": {
                    "application_name": "mooza-search",
                    "statement_timeout": str(timeout * 1000),
                },
            },
        }

    def _require_engine(self) -> AsyncEngine:
        if self.engine is None:
            raise RuntimeError("Database manager not initialized")
        return self.engine

    async def initialize(self) -> None:
        """Create the engine and check that the store answers."""
        if self.engine is not None:
            return

        engine = create_async_engine(self.database_url, **self._engine_options())
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception:
            await engine.dispose()
            logger.error("Database unreachable", target=self.database_url.rsplit("@", 1)[-1])
            raise

        self.engine = engine
        self._sessions = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        logger.info("Database engine ready", dialect=engine.dialect.name)

    async def create_tables(self) -> None:
        """create_all for local runs and tests; deployments use alembic."""
        from mooza.infrastructure.persistence.models import reference_tables, user_tables  # noqa: F401

        async with self._require_engine().begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Tables created")

    async def drop_tables(self) -> None:
        async with self._require_engine().begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)
        logger.warning("Tables dropped")

    @asynccontextmanager
    async def get_session(self) -> AsyncIterator[AsyncSession]:
        """Session committed on success and rolled back on error."""
        if self._sessions is None:
            raise RuntimeError("Database manager not initialized")

        async with self._sessions() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def health_check(self) -> Dict[str, Any]:
        if self.engine is None:
            return {"status": "unhealthy", "error": "not initialized"}
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Database health check failed", error=str(e))
            return {"status": "unhealthy", "error": str(e)}
        return {"status": "healthy", "dialect": self.engine.dialect.name}

    async def shutdown(self) -> None:
        engine, self.engine, self._sessions = self.engine, None, None
        if engine is not None:
            await engine.dispose()
            logger.info("Database engine disposed")


__all__ = ["SQLModelDatabaseManager"]
