"""Redis cache backend.

Cache-aside storage for enrichment results shared by every process that
points at the same Redis. Keys follow ``{kind}:{name}`` and are written
without expiry.

Backend failures never escape: a failed ``get`` is a miss and a failed
``set`` is a warning, so the enrichment flow keeps going on a Redis outage.

Usage:
    from personspine.cache.redis import RedisCache

    cache = RedisCache("redis://localhost:6379/0")
    await cache.initialize()
    await cache.set("age", "Zahar", "35")
"""

from __future__ import annotations

import logging

from redis.asyncio import Redis
from redis.exceptions import RedisError

from personspine.protocols.cache import cache_key
from personspine.protocols.enricher import AttributeKind

logger = logging.getLogger(__name__)


class RedisCache:
    """Async Redis cache.

    Args:
        redis_url: Redis connection URL (used if client not provided).
        client: Pre-built client; its lifecycle is then owned by the caller.
        socket_timeout: Per-command timeout in seconds.
        key_prefix: Optional namespace prepended to every key.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        *,
        client: Redis | None = None,
        socket_timeout: float = 2.0,
        key_prefix: str = "",
    ) -> None:
        self._redis_url = redis_url
        self._socket_timeout = socket_timeout
        self._key_prefix = key_prefix
        self._owns_client = client is None
        self._client: Redis | None = client

    def _key(self, kind: str, name: str) -> str:
        return f"{self._key_prefix}{cache_key(kind, name)}"

    @property
    def client(self) -> Redis:
        if self._client is None:
            self._client = Redis.from_url(
                self._redis_url,
                decode_responses=True,
                socket_timeout=self._socket_timeout,
                socket_connect_timeout=self._socket_timeout,
            )
        return self._client

    async def initialize(self) -> None:
        """Create the client and check connectivity.

        An unreachable Redis is logged, not raised; lookups will then
        fall through to the providers.
        """
        try:
            await self.client.ping()
            logger.info(f"Redis cache connected: {self._redis_url}")
        except RedisError as e:
            logger.warning(f"Redis cache not reachable, continuing without it: {e}")

    async def close(self) -> None:
        """Close the client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def get(self, kind: str, name: str) -> str | None:
        try:
            value = await self.client.get(self._key(kind, name))
        except RedisError as e:
            logger.warning(f"Cache read failed for {kind}:{name}: {e}")
            return None
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    async def set(self, kind: str, name: str, value: str) -> bool:
        try:
            await self.client.set(self._key(kind, name), str(value))
        except RedisError as e:
            logger.warning(f"Failed to cache {kind} for {name!r}: {e}")
            return False
        return True

    async def delete(self, kind: str, name: str) -> bool:
        try:
            removed = await self.client.delete(self._key(kind, name))
        except RedisError as e:
            logger.warning(f"Cache delete failed for {kind}:{name}: {e}")
            return False
        return bool(removed)

    async def clear(self) -> int:
        """Delete every enrichment key under this cache's namespace."""
        count = 0
        try:
            for kind in AttributeKind:
                async for key in self.client.scan_iter(match=f"{self._key_prefix}{kind.value}:*"):
                    count += await self.client.delete(key)
        except RedisError as e:
            logger.warning(f"Cache clear failed: {e}")
        return count
