"""Ports the application layer needs beyond repositories."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class ICacheService(ABC):
    """Key/value cache with per-entry expiry.

    Implementations may hold values by reference; callers never mutate a
    value after storing or reading it.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Return the live value for ``key`` or None."""

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int = 3600) -> bool:
        """Store ``value`` for ``ttl`` seconds; False when nothing was stored."""

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove ``key``; False when it was absent."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """True when ``key`` holds a live value."""

    @abstractmethod
    async def clear(self, pattern: str = "*") -> int:
        """Remove keys matching ``pattern`` and return how many were removed."""

    @abstractmethod
    async def check_health(self) -> Dict[str, Any]:
        """Status details for the health endpoint."""
