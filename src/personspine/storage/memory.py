"""In-memory record store for testing.

Provides a complete in-memory implementation of PersonStore, useful for
testing, development and demos.

Example:
    >>> from personspine.storage.memory import MemoryPersonStore
    >>> store = MemoryPersonStore()
    >>> hasattr(store, 'create')
    True

Note:
    All methods are async. Use within async context or with asyncio.run().
"""

from __future__ import annotations

import itertools

from personspine.core.exceptions import PersistenceError
from personspine.models.person import Person


class MemoryPersonStore:
    """In-memory store using a dictionary keyed by id.

    Ids come from a monotonically increasing counter starting at 1 and are
    never reused. Stored records are copies, so callers cannot mutate them
    behind the store's back.

    Example:
        >>> import asyncio
        >>> from personspine.models.person import Person
        >>> from personspine.storage.memory import MemoryPersonStore
        >>> store = MemoryPersonStore()
        >>> p = Person(name="Zahar", surname="Ivanov", age=35, gender="male", nationality="RU")
        >>> asyncio.run(store.create(p)).id
        1
    """

    def __init__(self) -> None:
        self._records: dict[int, Person] = {}
        self._ids = itertools.count(1)
        self._initialized = False

    async def initialize(self) -> None:
        """No-op for memory storage."""
        self._initialized = True

    async def close(self) -> None:
        """Clear all data."""
        self._records.clear()
        self._initialized = False

    async def create(self, person: Person) -> Person:
        if person.id is not None:
            raise PersistenceError(f"Person already has id {person.id}")
        if not person.is_enriched:
            raise PersistenceError(f"Refusing to store unenriched person {person.name!r}")
        person.id = next(self._ids)
        self._records[person.id] = person.model_copy()
        return person

    async def get(self, person_id: int) -> Person | None:
        record = self._records.get(person_id)
        return record.model_copy() if record is not None else None

    async def get_by_name(self, name: str) -> Person | None:
        for person_id in sorted(self._records):
            if self._records[person_id].name == name:
                return self._records[person_id].model_copy()
        return None

    async def update(self, person: Person) -> Person | None:
        if person.id is None:
            raise PersistenceError("Cannot update a person without id")
        if person.id not in self._records:
            return None
        self._records[person.id] = person.model_copy()
        return person

    async def delete(self, person_id: int) -> bool:
        return self._records.pop(person_id, None) is not None

    async def count(self) -> int:
        return len(self._records)

    # --- Utility Methods ---

    def all(self) -> list[Person]:
        """All stored records ordered by id."""
        return [self._records[i].model_copy() for i in sorted(self._records)]
