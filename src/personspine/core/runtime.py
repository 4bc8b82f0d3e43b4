"""Runtime - wires the backends together from settings.

The Runtime owns every long-lived resource (cache, HTTP client, record
store, queue source, dead-letter publisher) and the queue consumer task.
The HTTP adapter and the CLI share it.

Example:
    >>> import asyncio
    >>> from personspine.core.config import get_settings
    >>> from personspine.core.runtime import Runtime
    >>> async def example():
    ...     async with Runtime.from_settings(get_settings()) as runtime:
    ...         print(runtime.info()["storage"])
    >>> asyncio.run(example())
    MemoryPersonStore
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from personspine.cache.memory import MemoryCache
from personspine.cache.redis import RedisCache
from personspine.core.exceptions import ConfigurationError
from personspine.deadletter import DeadLetterSink
from personspine.enricher import build_coordinator
from personspine.http.client import HttpClient
from personspine.ingest.consumer import QueueConsumer
from personspine.protocols.enricher import AttributeKind
from personspine.queue.memory import MemoryQueue
from personspine.service import PersonService
from personspine.storage.memory import MemoryPersonStore
from personspine.storage.sqlalchemy_storage import SQLAlchemyPersonStore

if TYPE_CHECKING:
    from personspine.core.config import Settings
    from personspine.protocols.cache import CacheBackend
    from personspine.protocols.queue import MessagePublisher, MessageSource
    from personspine.protocols.storage import PersonStore

logger = logging.getLogger(__name__)


def build_cache(settings: Settings) -> CacheBackend:
    if settings.cache_backend == "redis":
        if not settings.redis_url:
            raise ConfigurationError("cache_backend=redis requires redis_url")
        return RedisCache(settings.redis_url, socket_timeout=settings.redis_socket_timeout)
    return MemoryCache()


def build_store(settings: Settings) -> PersonStore:
    if settings.storage_backend == "sqlalchemy":
        if not settings.database_url:
            raise ConfigurationError("storage_backend=sqlalchemy requires database_url")
        return SQLAlchemyPersonStore(settings.database_url, pool_size=settings.db_pool_size)
    return MemoryPersonStore()


def build_queue(
    settings: Settings,
) -> tuple[MessageSource, MessagePublisher, MemoryQueue | None]:
    """Create the ingestion source and the dead-letter publisher.

    Returns:
        ``(source, publisher, memory_queue)``; ``memory_queue`` is None for Kafka.
    """
    if settings.queue_backend == "kafka":
        from personspine.queue.kafka import KafkaMessageSource, KafkaPublisher

        source = KafkaMessageSource(
            settings.kafka_bootstrap_servers,
            settings.kafka_topic,
            settings.kafka_partition,
        )
        publisher = KafkaPublisher(
            settings.kafka_bootstrap_servers,
            request_timeout_ms=int(settings.request_timeout * 1000),
        )
        return source, publisher, None

    queue = MemoryQueue()
    return queue.source(settings.kafka_topic), queue, queue


class Runtime:
    """Owner of the service graph and its lifecycle.

    Args:
        settings: Application settings.
        cache: Attribute cache.
        http: Shared provider HTTP client.
        store: Record store.
        source: Queue message source.
        publisher: Dead-letter transport.
        memory_queue: The in-process queue when no broker is configured.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        cache: CacheBackend,
        http: HttpClient,
        store: PersonStore,
        source: MessageSource,
        publisher: MessagePublisher,
        memory_queue: MemoryQueue | None = None,
    ) -> None:
        self.settings = settings
        self.cache = cache
        self.http = http
        self.store = store
        self.source = source
        self.memory_queue = memory_queue

        coordinator = build_coordinator(
            http=http,
            cache=cache,
            urls={
                AttributeKind.AGE: settings.age_provider_url,
                AttributeKind.GENDER: settings.gender_provider_url,
                AttributeKind.NATIONALITY: settings.nationality_provider_url,
            },
        )
        self.service = PersonService(store=store, coordinator=coordinator)
        self.dead_letter = DeadLetterSink(
            publisher, topic=settings.dead_letter_topic, timeout=settings.request_timeout
        )
        self.consumer = QueueConsumer(
            source,
            self.service,
            self.dead_letter,
            dead_letter_enrichment_failures=settings.dead_letter_enrichment_failures,
        )
        self._initialized = False

    @classmethod
    def from_settings(cls, settings: Settings) -> Runtime:
        """Build every backend selected by ``settings``.

        Raises:
            ConfigurationError: A selected backend is missing its URL.
        """
        source, publisher, memory_queue = build_queue(settings)
        return cls(
            settings,
            cache=build_cache(settings),
            http=HttpClient(
                rate_limit=settings.provider_rate_limit,
                timeout=settings.request_timeout,
            ),
            store=build_store(settings),
            source=source,
            publisher=publisher,
            memory_queue=memory_queue,
        )

    async def initialize(self) -> None:
        """Initialize all backends."""
        if self._initialized:
            return
        await self.store.initialize()
        await self.cache.initialize()
        await self.dead_letter.initialize()
        await self.source.initialize()
        self._initialized = True
        logger.info(f"Runtime initialized: {self.info()}")

    async def close(self) -> None:
        """Stop the consumer and close all backends."""
        await self.consumer.stop()
        await self.source.close()
        await self.dead_letter.close()
        await self.http.close()
        await self.cache.close()
        await self.store.close()
        self._initialized = False

    async def start(self) -> None:
        """Initialize backends and start consuming the queue."""
        await self.initialize()
        if not self.consumer.running:
            self.consumer.start()

    async def stop(self) -> None:
        await self.close()
        logger.info("Runtime stopped")

    async def __aenter__(self) -> Runtime:
        await self.initialize()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def info(self) -> dict[str, Any]:
        """Backend summary."""
        return {
            "storage": type(self.store).__name__,
            "cache": type(self.cache).__name__,
            "queue": type(self.source).__name__,
            "topic": self.settings.kafka_topic,
            "dead_letter_topic": self.dead_letter.topic,
            "initialized": self._initialized,
        }
