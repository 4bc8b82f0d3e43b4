"""Attribute enrichment: cache-aside provider clients and their coordinator.

Example:
    >>> import asyncio
    >>> from personspine.cache.memory import MemoryCache
    >>> from personspine.enricher import build_coordinator
    >>> from personspine.http import HttpClient
    >>> from personspine.models.person import Person
    >>> cache = MemoryCache()
    >>> for kind, value in [("age", "35"), ("gender", "male"), ("nationality", "RU")]:
    ...     _ = asyncio.run(cache.set(kind, "Zahar", value))
    >>> coordinator = build_coordinator(http=HttpClient(timeout=5.0), cache=cache)
    >>> person = asyncio.run(coordinator.enrich(Person(name="Zahar", surname="Ivanov")))
    >>> (person.age, person.gender, person.nationality)
    (35, 'male', 'RU')
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from personspine.enricher.client import EnrichmentClient
from personspine.enricher.coordinator import EnrichmentCoordinator
from personspine.enricher.providers import PROVIDERS, Provider, get_provider
from personspine.protocols.enricher import AttributeKind

if TYPE_CHECKING:
    from personspine.http.client import HttpClient
    from personspine.protocols.cache import CacheBackend


def build_coordinator(
    *,
    http: HttpClient,
    cache: CacheBackend,
    urls: dict[AttributeKind, str] | None = None,
) -> EnrichmentCoordinator:
    """Create one EnrichmentClient per attribute kind sharing ``http`` and ``cache``."""
    urls = urls or {}
    return EnrichmentCoordinator(
        EnrichmentClient(kind, http=http, cache=cache, url=urls.get(kind))
        for kind in AttributeKind
    )


__all__ = [
    "PROVIDERS",
    "EnrichmentClient",
    "EnrichmentCoordinator",
    "Provider",
    "build_coordinator",
    "get_provider",
]
