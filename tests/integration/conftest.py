"""Fixtures for integration tests against an in-memory SQLite store."""

from collections.abc import AsyncIterator

import pytest

from mooza.core.config import get_settings
from mooza.database.sqlmodel_engine import SQLModelDatabaseManager
from mooza.infrastructure.persistence.models.user_tables import SearchProfileTable, UserTable
from mooza.infrastructure.persistence.seed import seed_reference_data
from mooza.infrastructure.providers.cache_provider import reset_cache_service
from mooza.infrastructure.providers.catalog_provider import reset_catalog_service
from mooza.infrastructure.providers.database_provider import reset_database_manager
from mooza.infrastructure.providers.search_provider import reset_search_service
from tests.fixtures.search_fixtures import USER_ROWS, catalog_seed_data

SQLITE_URL = "sqlite+aiosqlite:///:memory:"

_USER_COLUMNS = ("first_name", "last_name", "nickname", "avatar", "city", "bio", "field_of_activity_id", "profession_id")
_PROFILE_COLUMNS = (
    "service_id",
    "genre_id",
    "work_format_id",
    "employment_type_id",
    "skill_level_id",
    "availability_id",
    "price_per_hour",
    "price_per_event",
)


@pytest.fixture(autouse=True)
async def reset_provider_state() -> AsyncIterator[None]:
    """Ensure each test starts with clean provider singletons."""
    await reset_search_service()
    await reset_catalog_service()
    await reset_cache_service()
    await reset_database_manager()
    yield
    await reset_search_service()
    await reset_catalog_service()
    await reset_cache_service()
    await reset_database_manager()


@pytest.fixture
async def db_manager() -> AsyncIterator[SQLModelDatabaseManager]:
    """Initialized manager with every table created and the catalog seeded."""
    manager = SQLModelDatabaseManager(get_settings(), database_url=SQLITE_URL)
    await manager.initialize()
    await manager.create_tables()
    await seed_reference_data(manager, catalog_seed_data())
    yield manager
    await manager.shutdown()


@pytest.fixture
async def populated_db(db_manager: SQLModelDatabaseManager) -> SQLModelDatabaseManager:
    """Seeded store plus the shared user rows and one user without a profile."""
    async with db_manager.get_session() as session:
        for row in USER_ROWS:
            session.add(UserTable(id=row.id, **{c: getattr(row, c) for c in _USER_COLUMNS}))
        session.add(UserTable(id="u-newbie", first_name="Zoya", last_name="Newman", field_of_activity_id="performance"))
        await session.flush()
        for row in USER_ROWS:
            session.add(
                SearchProfileTable(
                    id=row.search_profile_id,
                    user_id=row.id,
                    **{c: getattr(row, c) for c in _PROFILE_COLUMNS},
                )
            )
    return db_manager
