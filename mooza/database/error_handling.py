"""
Store error translation.

SQLAlchemy and driver failures are re-raised as ``DatabaseError`` subclasses
so repositories can tell an unreachable store from a broken query.
"""

import asyncio
from functools import wraps
from typing import Any, Dict, Optional, Tuple, Type

import structlog
from sqlalchemy import exc as sa_exc

logger = structlog.get_logger(__name__)


class DatabaseError(Exception):
    """Store failure carrying the underlying error and call context."""

    def __init__(
        self,
        message: str,
        original_error: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.original_error = original_error
        self.context = dict(context or {})
        logger.error(
            "Store operation failed",
            kind=type(self).__name__,
            detail=message,
            cause=repr(original_error) if original_error is not None else None,
            **self.context,
        )


class ConnectionError(DatabaseError):
    """Store unreachable or connection dropped."""


class QueryTimeoutError(DatabaseError):
    """Statement ran past its deadline."""


class QueryError(DatabaseError):
    """Statement rejected by the store."""


class ConfigurationError(DatabaseError):
    """Bad URL or engine arguments."""


# First match wins; timeouts are checked before OperationalError.
_ERROR_TABLE: Tuple[Tuple[Tuple[Type[BaseException], ...], Type[DatabaseError]], ...] = (
    ((asyncio.TimeoutError, sa_exc.TimeoutError), QueryTimeoutError),
    ((sa_exc.DisconnectionError, sa_exc.OperationalError, sa_exc.InterfaceError, OSError), ConnectionError),
    ((sa_exc.DataError, sa_exc.ProgrammingError, sa_exc.CompileError, sa_exc.InvalidRequestError), QueryError),
    ((sa_exc.ArgumentError,), ConfigurationError),
)


def map_sqlalchemy_error(error: BaseException) -> Type[DatabaseError]:
    for kinds, target in _ERROR_TABLE:
        if isinstance(error, kinds):
            return target
    return DatabaseError


def is_connection_error(error: BaseException) -> bool:
    """True for failures where retrying later could succeed."""
    return map_sqlalchemy_error(error) in (ConnectionError, QueryTimeoutError)


def handle_database_errors(
    reraise_as: Optional[Type[DatabaseError]] = None,
    context: Optional[Dict[str, Any]] = None,
):
    """Wrap store errors escaping an async callable.

    ``reraise_as`` forces one error class instead of the mapped one. Errors
    that do not come from the store propagate untouched.
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except DatabaseError:
                raise
            except (sa_exc.SQLAlchemyError, asyncio.TimeoutError, OSError) as e:
                error_class = reraise_as or map_sqlalchemy_error(e)
                raise error_class(f"{func.__name__}: {e}", original_error=e, context=context) from e

        return wrapper

    return decorator


__all__ = [
    "DatabaseError",
    "ConnectionError",
    "QueryTimeoutError",
    "QueryError",
    "ConfigurationError",
    "map_sqlalchemy_error",
    "is_connection_error",
    "handle_database_errors",
]
