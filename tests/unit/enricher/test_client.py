"""Tests for the cache-aside EnrichmentClient.

Tests cover:
- Cache hits skip the provider
- Misses fetch, then populate the cache
- Error mapping (transport, status, body, no data)
- Cache write failures are not fatal
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest

from personspine.cache.memory import MemoryCache
from personspine.core.exceptions import NotFoundError, ProviderError, TransportError
from personspine.enricher.client import EnrichmentClient
from personspine.http.client import HttpClient
from personspine.protocols.enricher import AttributeKind

# =============================================================================
# Cache-Aside Behavior
# =============================================================================


class TestEnrichmentClientCaching:
    """Tests for cache-aside resolution."""

    async def test_cache_hit_skips_provider(self, http_client, memory_cache, provider_stub) -> None:
        """A cached name never reaches the provider."""
        await memory_cache.set("age", "Zahar", "35")
        client = EnrichmentClient(AttributeKind.AGE, http=http_client, cache=memory_cache)

        assert await client.resolve("Zahar") == 35
        assert client.remote_calls == 0
        assert provider_stub.calls == []

    async def test_miss_fetches_and_caches(self, http_client, memory_cache, provider_stub) -> None:
        """A miss calls the provider and stores the result."""
        client = EnrichmentClient(AttributeKind.GENDER, http=http_client, cache=memory_cache)

        assert await client.resolve("Anna") == "female"
        assert provider_stub.calls == [("gender", "Anna")]
        assert await memory_cache.get("gender", "Anna") == "female"

    async def test_resolve_is_idempotent(self, http_client, memory_cache, provider_stub) -> None:
        """Repeated resolution gives the same value with one remote call."""
        client = EnrichmentClient(AttributeKind.NATIONALITY, http=http_client, cache=memory_cache)

        first = await client.resolve("Zahar")
        second = await client.resolve("Zahar")

        assert first == second == "RU"
        assert client.remote_calls == 1
        assert provider_stub.calls_for("nationality") == ["Zahar"]

    async def test_age_cached_as_text(self, http_client, memory_cache) -> None:
        """Ages round-trip through the cache as decimal text."""
        client = EnrichmentClient(AttributeKind.AGE, http=http_client, cache=memory_cache)

        assert await client.resolve("Zahar") == 35
        assert await memory_cache.get("age", "Zahar") == "35"

    async def test_unreadable_cached_value_refetched(
        self, http_client, memory_cache, provider_stub
    ) -> None:
        """A corrupt cache entry falls through to the provider."""
        await memory_cache.set("age", "Zahar", "not-a-number")
        client = EnrichmentClient(AttributeKind.AGE, http=http_client, cache=memory_cache)

        assert await client.resolve("Zahar") == 35
        assert client.remote_calls == 1
        assert await memory_cache.get("age", "Zahar") == "35"

    async def test_cache_write_failure_not_fatal(self, http_client, caplog) -> None:
        """A failed cache write still returns the fetched value."""
        cache = AsyncMock()
        cache.get = AsyncMock(return_value=None)
        cache.set = AsyncMock(return_value=False)
        client = EnrichmentClient(AttributeKind.AGE, http=http_client, cache=cache)

        with caplog.at_level("WARNING", logger="personspine.enricher.client"):
            assert await client.resolve("Zahar") == 35

        cache.set.assert_awaited_once_with("age", "Zahar", "35")
        assert "Failed to cache age" in caplog.text

    async def test_custom_url(self, memory_cache) -> None:
        """Requests go to the configured endpoint with the name parameter."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"age": 50})

        async with HttpClient(transport=httpx.MockTransport(handler)) as http:
            client = EnrichmentClient(
                "age", http=http, cache=memory_cache, url="http://agify.local/"
            )
            assert await client.resolve("Ivan") == 50

        assert seen[0].url.host == "agify.local"
        assert seen[0].url.params["name"] == "Ivan"


# =============================================================================
# Error Mapping
# =============================================================================


class TestEnrichmentClientErrors:
    """Tests for lookup failures."""

    async def test_empty_country_list_not_found(self, http_client, memory_cache) -> None:
        """``{"country": []}`` is a NotFoundError and nothing is cached."""
        client = EnrichmentClient(AttributeKind.NATIONALITY, http=http_client, cache=memory_cache)

        with pytest.raises(NotFoundError) as exc_info:
            await client.resolve("Nobody")

        assert exc_info.value.kind == "nationality"
        assert exc_info.value.name == "Nobody"
        assert await memory_cache.get("nationality", "Nobody") is None

    async def test_zero_age_not_found(self, memory_cache) -> None:
        """agify's age 0 means no data."""
        transport = httpx.MockTransport(lambda r: httpx.Response(200, json={"age": 0}))

        async with HttpClient(transport=transport) as http:
            client = EnrichmentClient(AttributeKind.AGE, http=http, cache=memory_cache)
            with pytest.raises(NotFoundError):
                await client.resolve("Xyzzy")

    async def test_status_error(self, http_client, memory_cache, provider_stub) -> None:
        """A non-success status is a ProviderError carrying the code."""
        provider_stub.status["gender"] = 503
        client = EnrichmentClient(AttributeKind.GENDER, http=http_client, cache=memory_cache)

        with pytest.raises(ProviderError) as exc_info:
            await client.resolve("Zahar")

        assert exc_info.value.status_code == 503

    async def test_invalid_json(self, memory_cache) -> None:
        """An unreadable body is a ProviderError."""
        transport = httpx.MockTransport(lambda r: httpx.Response(200, content=b"<html>"))

        async with HttpClient(transport=transport) as http:
            client = EnrichmentClient(AttributeKind.AGE, http=http, cache=memory_cache)
            with pytest.raises(ProviderError):
                await client.resolve("Zahar")

    async def test_timeout(self, memory_cache) -> None:
        """A provider timeout is a TransportError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        async with HttpClient(transport=httpx.MockTransport(handler)) as http:
            client = EnrichmentClient(AttributeKind.AGE, http=http, cache=memory_cache)
            with pytest.raises(TransportError) as exc_info:
                await client.resolve("Zahar")

        assert "timeout" in str(exc_info.value)

    async def test_failure_not_cached(self, memory_cache) -> None:
        """Failed lookups leave the cache empty."""
        transport = httpx.MockTransport(lambda r: httpx.Response(500))

        async with HttpClient(transport=transport) as http:
            client = EnrichmentClient(AttributeKind.AGE, http=http, cache=memory_cache)
            with pytest.raises(ProviderError):
                await client.resolve("Zahar")

        assert len(memory_cache) == 0


def test_default_urls_per_kind() -> None:
    """Each kind defaults to its public provider."""
    cache = MemoryCache()
    http = HttpClient()
    age = EnrichmentClient("age", http=http, cache=cache)
    gender = EnrichmentClient("gender", http=http, cache=cache)

    assert age.kind is AttributeKind.AGE
    assert gender.kind is AttributeKind.GENDER
    assert age.url == "https://api.agify.io/"
