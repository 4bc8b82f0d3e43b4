"""Cache backend protocol.

Defines the interface for the enrichment cache (Redis, in-memory).
Entries are keyed by ``(kind, name)`` and never expire; last write wins.

Example:
    >>> from personspine.protocols.cache import CacheBackend, cache_key
    >>> hasattr(CacheBackend, "get")
    True
    >>> cache_key("age", "Zahar")
    'age:Zahar'
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


def cache_key(kind: str, name: str) -> str:
    """Build the storage key for an attribute of a name."""
    return f"{kind}:{name}"


@runtime_checkable
class CacheBackend(Protocol):
    """Cache backend protocol.

    A miss is signalled by ``None``, never by an exception. ``set`` reports
    failure through its return value so callers can carry on with the value
    they already hold.
    """

    async def get(self, kind: str, name: str) -> str | None:
        """Get cached value, or None on a miss."""
        ...

    async def set(self, kind: str, name: str, value: str) -> bool:
        """Store value. Returns False if the write failed."""
        ...

    async def delete(self, kind: str, name: str) -> bool:
        """Delete from cache. Returns True if existed."""
        ...

    async def clear(self) -> int:
        """Clear all entries. Returns count cleared."""
        ...

    async def initialize(self) -> None:
        """Initialize cache."""
        ...

    async def close(self) -> None:
        """Clean up resources."""
        ...
