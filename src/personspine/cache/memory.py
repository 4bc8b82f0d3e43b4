"""In-memory cache backend.

Provides a dict-backed implementation of CacheBackend, useful for testing,
development and single-process deployments.

Example:
    >>> from personspine.cache.memory import MemoryCache
    >>> cache = MemoryCache()
    >>> hasattr(cache, 'get')
    True
    >>> hasattr(cache, 'set')
    True
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from personspine.protocols.cache import cache_key


@dataclass
class CacheEntry:
    """A cached attribute value.

    Example:
        >>> from personspine.cache.memory import CacheEntry
        >>> entry = CacheEntry(kind="gender", name="Anna", value="female")
        >>> entry.key
        'gender:Anna'
    """

    kind: str
    name: str
    value: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def key(self) -> str:
        return cache_key(self.kind, self.name)


class MemoryCache:
    """In-memory cache without expiry.

    Safe for single-process async usage; concurrent writers to the same key
    simply overwrite each other.

    Example:
        >>> import asyncio
        >>> from personspine.cache.memory import MemoryCache
        >>> cache = MemoryCache()
        >>> asyncio.run(cache.set("age", "Zahar", "35"))
        True
        >>> asyncio.run(cache.get("age", "Zahar"))
        '35'
        >>> asyncio.run(cache.get("age", "Ivan")) is None
        True
    """

    def __init__(self) -> None:
        self._data: dict[str, CacheEntry] = {}
        self._initialized = False

    async def initialize(self) -> None:
        """No-op for memory cache."""
        self._initialized = True

    async def close(self) -> None:
        """Clear cache."""
        self._data.clear()
        self._initialized = False

    async def get(self, kind: str, name: str) -> str | None:
        """Get value from cache, returning None if missing."""
        entry = self._data.get(cache_key(kind, name))
        if entry is None:
            return None
        return entry.value

    async def set(self, kind: str, name: str, value: str) -> bool:
        """Set value in cache (last write wins)."""
        entry = CacheEntry(kind=kind, name=name, value=str(value))
        self._data[entry.key] = entry
        return True

    async def delete(self, kind: str, name: str) -> bool:
        """Delete from cache.

        Returns:
            True if key existed and was deleted.
        """
        return self._data.pop(cache_key(kind, name), None) is not None

    async def clear(self) -> int:
        """Clear all entries.

        Returns:
            Number of entries cleared.
        """
        count = len(self._data)
        self._data.clear()
        return count

    # --- Utility Methods ---

    def __len__(self) -> int:
        return len(self._data)

    def keys(self) -> list[str]:
        """All stored keys."""
        return list(self._data)
