"""Enrichment coordinator.

Runs the age, gender and nationality lookups for one record concurrently and
assigns the results only when all three succeed. The first failure cancels
the remaining lookups and is raised to the caller, leaving the record
untouched.

Example:
    >>> import asyncio
    >>> from personspine.enricher.coordinator import EnrichmentCoordinator
    >>> from personspine.models.person import Person
    >>> from personspine.protocols.enricher import AttributeKind
    >>> class Fixed:
    ...     def __init__(self, kind, value):
    ...         self.kind, self._value = kind, value
    ...     async def resolve(self, name):
    ...         return self._value
    >>> coordinator = EnrichmentCoordinator([
    ...     Fixed(AttributeKind.AGE, 35),
    ...     Fixed(AttributeKind.GENDER, "male"),
    ...     Fixed(AttributeKind.NATIONALITY, "RU"),
    ... ])
    >>> person = asyncio.run(coordinator.enrich(Person(name="Zahar", surname="Ivanov")))
    >>> (person.age, person.gender, person.nationality)
    (35, 'male', 'RU')
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import Iterable
from typing import TYPE_CHECKING

from personspine.core.exceptions import AttributeLookupError
from personspine.protocols.enricher import (
    AttributeKind,
    AttributeResolver,
    EnrichmentResult,
    EnrichmentStatus,
)

if TYPE_CHECKING:
    from personspine.models.person import Person

logger = logging.getLogger(__name__)


class EnrichmentCoordinator:
    """Enrich a person with every attribute kind.

    Args:
        resolvers: One resolver per attribute kind.

    Raises:
        ValueError: If a kind is missing or provided twice.
    """

    def __init__(self, resolvers: Iterable[AttributeResolver]) -> None:
        self._resolvers: dict[AttributeKind, AttributeResolver] = {}
        for resolver in resolvers:
            kind = AttributeKind(resolver.kind)
            if kind in self._resolvers:
                raise ValueError(f"Duplicate resolver for {kind.value}")
            self._resolvers[kind] = resolver

        missing = set(AttributeKind) - set(self._resolvers)
        if missing:
            names = ", ".join(sorted(k.value for k in missing))
            raise ValueError(f"Missing resolvers for: {names}")

    @property
    def resolvers(self) -> dict[AttributeKind, AttributeResolver]:
        return dict(self._resolvers)

    async def enrich(self, person: Person) -> Person:
        """Populate age, gender and nationality of ``person`` in place.

        Raises:
            AttributeLookupError: The first lookup failure; ``person`` is unchanged.
        """
        values = await self._resolve_all(person.name)

        person.age = values[AttributeKind.AGE]
        person.gender = values[AttributeKind.GENDER]
        person.nationality = values[AttributeKind.NATIONALITY]
        return person

    async def enrich_with_result(self, person: Person) -> EnrichmentResult:
        """Like ``enrich`` but report the outcome instead of raising lookup errors."""
        start = time.perf_counter()
        before = {kind: getattr(person, kind.value) for kind in AttributeKind}

        try:
            await self.enrich(person)
        except AttributeLookupError as e:
            return EnrichmentResult(
                name=person.name,
                status=EnrichmentStatus.FAILED,
                error_message=str(e),
                failed_kind=e.kind,
                duration_ms=(time.perf_counter() - start) * 1000,
            )

        fields_added = [k.value for k, v in before.items() if v is None]
        fields_updated = [k.value for k, v in before.items() if v is not None]
        return EnrichmentResult(
            name=person.name,
            status=EnrichmentStatus.SUCCESS,
            fields_added=sorted(fields_added),
            fields_updated=sorted(fields_updated),
            duration_ms=(time.perf_counter() - start) * 1000,
        )

    async def _resolve_all(self, name: str) -> dict[AttributeKind, int | str]:
        tasks = {
            kind: asyncio.create_task(resolver.resolve(name), name=f"resolve-{kind.value}")
            for kind, resolver in self._resolvers.items()
        }
        try:
            done, pending = await asyncio.wait(
                tasks.values(), return_when=asyncio.FIRST_EXCEPTION
            )
        except asyncio.CancelledError:
            await _cancel_all(tasks.values())
            raise

        if pending:
            await _cancel_all(pending)

        # Lookups failing in the same wakeup are reported in kind order
        order = list(tasks.values())
        for task in sorted(done, key=order.index):
            if task.cancelled():
                continue
            error = task.exception()
            if error is not None:
                logger.debug(f"Enrichment of {name!r} aborted: {error}")
                raise error

        return {kind: task.result() for kind, task in tasks.items()}


async def _cancel_all(tasks: Iterable[asyncio.Task]) -> None:
    tasks = list(tasks)
    for task in tasks:
        task.cancel()
    for task in tasks:
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await task
