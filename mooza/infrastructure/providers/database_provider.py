"""Database manager provider."""

from __future__ import annotations

import asyncio
from typing import Optional

from mooza.core.config import get_settings
from mooza.database.sqlmodel_engine import SQLModelDatabaseManager

_database_manager: Optional[SQLModelDatabaseManager] = None
_lock = asyncio.Lock()


async def get_database_manager() -> SQLModelDatabaseManager:
    """Return the initialized process-wide database manager."""
    global _database_manager

    if _database_manager is not None:
        return _database_manager

    async with _lock:
        if _database_manager is not None:
            return _database_manager

        manager = SQLModelDatabaseManager(get_settings())
        await manager.initialize()
        _database_manager = manager
        return _database_manager


async def reset_database_manager() -> None:
    """Forget the manager without disposing it (for testing)."""
    global _database_manager
    async with _lock:
        _database_manager = None


__all__ = ["get_database_manager", "reset_database_manager"]
