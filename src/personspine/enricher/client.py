"""Cache-aside client for one enrichment attribute.

Resolution order for ``resolve(name)``:

1. Cache hit for ``(kind, name)``: returned without a remote call.
2. Miss: ``GET {url}?name={name}`` on the attribute's provider.
3. Value extracted from the response and written back to the cache.
   A failed cache write is logged and does not fail the lookup.

Example:
    >>> from personspine.enricher.client import EnrichmentClient
    >>> from personspine.cache.memory import MemoryCache
    >>> from personspine.http import HttpClient
    >>> client = EnrichmentClient("age", http=HttpClient(), cache=MemoryCache())
    >>> client.kind
    <AttributeKind.AGE: 'age'>
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from personspine.core.exceptions import NotFoundError, ProviderError, TransportError
from personspine.enricher.providers import get_provider
from personspine.http.client import HttpStatusError, HttpTransportError
from personspine.protocols.enricher import AttributeKind

if TYPE_CHECKING:
    from personspine.http.client import HttpClient
    from personspine.protocols.cache import CacheBackend

logger = logging.getLogger(__name__)


class EnrichmentClient:
    """Resolve one attribute kind through the cache and its provider.

    Args:
        kind: Attribute kind this client resolves.
        http: Shared HTTP client (carries the request timeout).
        cache: Shared cache backend.
        url: Provider endpoint, defaults to the public service.
    """

    def __init__(
        self,
        kind: AttributeKind | str,
        *,
        http: HttpClient,
        cache: CacheBackend,
        url: str | None = None,
    ) -> None:
        self._provider = get_provider(kind)
        self._http = http
        self._cache = cache
        self._url = url or self._provider.default_url
        self.remote_calls = 0

    @property
    def kind(self) -> AttributeKind:
        return self._provider.kind

    @property
    def url(self) -> str:
        return self._url

    async def resolve(self, name: str) -> int | str:
        """Return the attribute value for ``name``.

        Raises:
            TransportError: Provider unreachable or timed out.
            ProviderError: Non-success status or unreadable body.
            NotFoundError: Provider has no usable value for the name.
        """
        kind = self.kind.value

        cached = await self._cache.get(kind, name)
        if cached is not None:
            value = self._provider.parse_cached(cached)
            if value is not None:
                logger.debug(f"Cache hit for {kind}:{name}")
                return value
            logger.warning(f"Ignoring unreadable cached {kind} for {name!r}: {cached!r}")

        value = await self._fetch(name)

        if not await self._cache.set(kind, name, str(value)):
            logger.warning(f"Failed to cache {kind} for {name!r}")

        return value

    async def _fetch(self, name: str) -> int | str:
        kind = self.kind.value
        self.remote_calls += 1

        try:
            payload = await self._http.get_json(self._url, params={"name": name})
        except HttpTransportError as e:
            raise TransportError(kind, name, e.reason) from e
        except HttpStatusError as e:
            raise ProviderError(
                kind, name, f"provider answered {e.status_code}", status_code=e.status_code
            ) from e
        except ValueError as e:
            raise ProviderError(kind, name, "response is not valid JSON") from e

        value = self._provider.extract(payload)
        if value is None:
            raise NotFoundError(kind, name, f"no {kind} data")

        logger.debug(f"Fetched {kind}={value!r} for {name!r}")
        return value
