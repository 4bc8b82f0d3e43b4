"""Person service - the operations both ingestion paths share.

``create_person`` is the enrichment pipeline proper: build the record from
decoded input, enrich it, then persist it. The read/update/delete operations
go straight to the store without enrichment.

Example:
    >>> import asyncio
    >>> from personspine.service import PersonService
    >>> from personspine.storage.memory import MemoryPersonStore
    >>> service = PersonService(store=MemoryPersonStore(), coordinator=None)
    >>> asyncio.run(service.get_person(42)) is None
    True
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from personspine.models.person import Person

if TYPE_CHECKING:
    from personspine.enricher.coordinator import EnrichmentCoordinator
    from personspine.models.person import PersonInput, PersonUpdate
    from personspine.protocols.storage import PersonStore

logger = logging.getLogger(__name__)


class PersonService:
    """Enrich-then-persist pipeline plus plain record access.

    Errors propagate typed (``AttributeLookupError``, ``PersistenceError``);
    callers decide how to surface them.

    Args:
        store: Record store.
        coordinator: Enrichment coordinator used by ``create_person``.
    """

    def __init__(self, store: PersonStore, coordinator: EnrichmentCoordinator | None) -> None:
        self._store = store
        self._coordinator = coordinator

    @property
    def store(self) -> PersonStore:
        return self._store

    @property
    def coordinator(self) -> EnrichmentCoordinator | None:
        return self._coordinator

    async def enrich(self, raw: PersonInput) -> Person:
        """Build and enrich a record without storing it."""
        if self._coordinator is None:
            raise RuntimeError("PersonService was created without an enrichment coordinator")
        person = Person.from_input(raw)
        return await self._coordinator.enrich(person)

    async def create_person(self, raw: PersonInput) -> Person:
        """Enrich ``raw`` and persist it.

        Raises:
            AttributeLookupError: Enrichment failed; nothing was stored.
            PersistenceError: The store rejected the record.
        """
        person = await self.enrich(raw)
        created = await self._store.create(person)
        logger.info(
            f"Created person {created.id}: {created.name} {created.surname} "
            f"(age={created.age}, gender={created.gender}, nationality={created.nationality})"
        )
        return created

    async def get_person(self, person_id: int) -> Person | None:
        return await self._store.get(person_id)

    async def get_person_by_name(self, name: str) -> Person | None:
        return await self._store.get_by_name(name)

    async def update_person(self, person_id: int, update: PersonUpdate) -> Person | None:
        """Replace every field of record ``person_id``. None if absent."""
        return await self._store.update(update.apply_to(person_id))

    async def delete_person(self, person_id: int) -> bool:
        return await self._store.delete(person_id)
