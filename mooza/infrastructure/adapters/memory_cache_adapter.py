"""
In-process cache for catalog snapshots and search pages.

Values are kept as Python objects (no serialization), so callers must treat
what they get back as read-only. Entries expire lazily on access; a full
cache drops its least recently written entry.
"""

import asyncio
import time
from collections import OrderedDict
from typing import Any, Callable, Dict, NamedTuple, Optional

import structlog

from mooza.domain.interfaces import ICacheService

logger = structlog.get_logger(__name__)


class _Entry(NamedTuple):
    value: Any
    expires_at: float


class MemoryCacheService(ICacheService):
    """TTL cache bounded by ``max_size`` entries."""

    def __init__(self, max_size: int = 10000, clock: Callable[[], float] = time.monotonic):
        self.max_size = max_size
        self._clock = clock
        self._entries: "OrderedDict[str, _Entry]" = OrderedDict()
        self._lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def _live(self, key: str) -> Optional[_Entry]:
        entry = self._entries.get(key)
        if entry is not None and self._clock() >= entry.expires_at:
            del self._entries[key]
            return None
        return entry

    async def get(self, key: str) -> Optional[Any]:
        async with self._lock:
            entry = self._live(key)
            if entry is None:
                self._misses += 1
                return None
            self._hits += 1
            return entry.value

    async def set(self, key: str, value: Any, ttl: int = 3600) -> bool:
        if ttl <= 0:
            return False

        async with self._lock:
            self._entries.pop(key, None)
            while len(self._entries) >= self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                self._evictions += 1
                logger.debug("Cache entry evicted", key=evicted)
            self._entries[key] = _Entry(value, self._clock() + ttl)
            return True

    async def delete(self, key: str) -> bool:
        async with self._lock:
            return self._entries.pop(key, None) is not None

    async def exists(self, key: str) -> bool:
        async with self._lock:
            return self._live(key) is not None

    async def clear(self, pattern: str = "*") -> int:
        """
        Remove entries by pattern.

        ``*`` removes everything, ``prefix*`` removes keys starting with the
        prefix, anything else is an exact key.
        """
        async with self._lock:
            if pattern == "*":
                doomed = list(self._entries)
            elif pattern.endswith("*"):
                doomed = [key for key in self._entries if key.startswith(pattern[:-1])]
            else:
                doomed = [pattern] if pattern in self._entries else []

            for key in doomed:
                del self._entries[key]

        logger.info("Cache cleared", pattern=pattern, removed=len(doomed))
        return len(doomed)

    async def purge_expired(self) -> int:
        async with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if now >= entry.expires_at]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def get_stats(self) -> Dict[str, Any]:
        lookups = self._hits + self._misses
        return {
            "hits": self._hits,
            "misses": self._misses,
            "evictions": self._evictions,
            "cache_size": len(self._entries),
            "max_size": self.max_size,
            "hit_rate": self._hits / lookups if lookups else 0.0,
        }

    async def check_health(self) -> Dict[str, Any]:
        return {"status": "healthy", "service": "MemoryCacheService", **self.get_stats()}

    async def close(self) -> None:
        await self.clear()
