"""Record store protocol.

Defines the interface for person record persistence. The store performs plain
CRUD; enrichment always happens before ``create``.

Example:
    >>> from personspine.protocols.storage import PersonStore
    >>> hasattr(PersonStore, "create")
    True
    >>> hasattr(PersonStore, "get_by_name")
    True
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from personspine.models.person import Person


@runtime_checkable
class PersonStore(Protocol):
    """Record store protocol.

    Implementations raise ``PersistenceError`` when the backend fails.

    See Also:
        personspine.storage.memory.MemoryPersonStore: In-memory implementation
        personspine.storage.sqlalchemy_storage.SQLAlchemyPersonStore: SQL implementation
    """

    async def create(self, person: Person) -> Person:
        """Insert a fully enriched record and return it with its new id."""
        ...

    async def get(self, person_id: int) -> Person | None:
        """Get record by id, None if absent."""
        ...

    async def get_by_name(self, name: str) -> Person | None:
        """Get the first record with the given name, None if absent."""
        ...

    async def update(self, person: Person) -> Person | None:
        """Replace all fields of an existing record. None if absent."""
        ...

    async def delete(self, person_id: int) -> bool:
        """Delete a record. Returns True if existed."""
        ...

    async def count(self) -> int:
        """Number of stored records."""
        ...

    async def initialize(self) -> None:
        """Initialize storage (create tables, etc.)."""
        ...

    async def close(self) -> None:
        """Clean up resources."""
        ...
