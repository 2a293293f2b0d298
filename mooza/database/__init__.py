"""Async engine, sessions and store error types."""

from .error_handling import (
    ConnectionError,
    DatabaseError,
    QueryError,
    QueryTimeoutError,
)
from .sqlmodel_engine import SQLModelDatabaseManager

__all__ = [
    "SQLModelDatabaseManager",
    "DatabaseError",
    "ConnectionError",
    "QueryError",
    "QueryTimeoutError",
]
