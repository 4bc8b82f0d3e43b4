"""Shared fixtures: provider stubs and a fully wired in-memory pipeline."""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest

from personspine.cache.memory import MemoryCache
from personspine.enricher import build_coordinator
from personspine.enricher.coordinator import EnrichmentCoordinator
from personspine.http.client import HttpClient
from personspine.service import PersonService
from personspine.storage.memory import MemoryPersonStore

# name -> (age, gender, country_id)
PROVIDER_DATA: dict[str, tuple[int | None, str | None, str | None]] = {
    "Zahar": (35, "male", "RU"),
    "Anna": (41, "female", "UA"),
    # Known to agify and genderize, unknown to nationalize
    "Nobody": (30, "male", None),
}

PROVIDER_HOSTS = {
    "api.agify.io": "age",
    "api.genderize.io": "gender",
    "api.nationalize.io": "nationality",
}


class ProviderStub:
    """Answers agify/genderize/nationalize requests from ``PROVIDER_DATA``.

    Attributes:
        calls: ``(kind, name)`` of every request received.
        status: Per-kind status code override (e.g. ``{"gender": 503}``).
    """

    def __init__(self, data: dict | None = None) -> None:
        self.data = dict(PROVIDER_DATA if data is None else data)
        self.calls: list[tuple[str, str]] = []
        self.status: dict[str, int] = {}

    def calls_for(self, kind: str) -> list[str]:
        return [name for k, name in self.calls if k == kind]

    def handler(self, request: httpx.Request) -> httpx.Response:
        kind = PROVIDER_HOSTS[request.url.host]
        name = request.url.params.get("name", "")
        self.calls.append((kind, name))

        if kind in self.status:
            return httpx.Response(self.status[kind], json={"error": "unavailable"})

        age, gender, country = self.data.get(name, (None, None, None))
        if kind == "age":
            body = {"count": 10, "name": name, "age": age}
        elif kind == "gender":
            body = {"count": 10, "name": name, "gender": gender, "probability": 0.99}
        else:
            countries = [{"country_id": country, "probability": 0.4}] if country else []
            body = {"count": 10, "name": name, "country": countries}
        return httpx.Response(200, json=body)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def provider_stub() -> ProviderStub:
    return ProviderStub()


@pytest.fixture
async def http_client(provider_stub: ProviderStub) -> AsyncIterator[HttpClient]:
    client = HttpClient(timeout=5.0, transport=provider_stub.transport())
    yield client
    await client.close()


@pytest.fixture
def memory_cache() -> MemoryCache:
    return MemoryCache()


@pytest.fixture
def coordinator(http_client: HttpClient, memory_cache: MemoryCache) -> EnrichmentCoordinator:
    return build_coordinator(http=http_client, cache=memory_cache)


@pytest.fixture
def person_store() -> MemoryPersonStore:
    return MemoryPersonStore()


@pytest.fixture
def person_service(
    person_store: MemoryPersonStore, coordinator: EnrichmentCoordinator
) -> PersonService:
    return PersonService(store=person_store, coordinator=coordinator)
