"""Kafka transport built on aiokafka.

- ``KafkaMessageSource`` reads one topic partition from the oldest retained
  offset, without a consumer group (manual assignment), one message at a time.
- ``KafkaPublisher`` sends raw bytes, used for the dead-letter topic.

Usage:
    from personspine.queue.kafka import KafkaMessageSource, KafkaPublisher

    source = KafkaMessageSource("localhost:9092", topic="FIO", partition=0)
    await source.initialize()
    async for message in source.messages():
        ...
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from aiokafka import AIOKafkaConsumer, AIOKafkaProducer, TopicPartition

from personspine.protocols.queue import Message

logger = logging.getLogger(__name__)


class KafkaMessageSource:
    """Ordered reader over a single Kafka partition.

    Args:
        bootstrap_servers: Comma-separated broker list.
        topic: Topic to read.
        partition: Partition number.
        client_id: Client id reported to the brokers.
        request_timeout_ms: Broker request timeout.
    """

    def __init__(
        self,
        bootstrap_servers: str,
        topic: str,
        partition: int = 0,
        *,
        client_id: str = "personspine-consumer",
        request_timeout_ms: int = 30000,
    ) -> None:
        self._bootstrap_servers = bootstrap_servers
        self._topic = topic
        self._partition = TopicPartition(topic, partition)
        self._client_id = client_id
        self._request_timeout_ms = request_timeout_ms
        self._consumer: AIOKafkaConsumer | None = None

    @property
    def topic(self) -> str:
        return self._topic

    def _create_consumer(self) -> AIOKafkaConsumer:
        return AIOKafkaConsumer(
            bootstrap_servers=self._bootstrap_servers,
            client_id=self._client_id,
            group_id=None,
            enable_auto_commit=False,
            auto_offset_reset="earliest",
            request_timeout_ms=self._request_timeout_ms,
        )

    async def initialize(self) -> None:
        """Connect, assign the partition and seek to its oldest offset."""
        if self._consumer is not None:
            return
        consumer = self._create_consumer()
        await consumer.start()
        consumer.assign([self._partition])
        await consumer.seek_to_beginning(self._partition)
        self._consumer = consumer
        logger.info(
            f"Consuming {self._topic}[{self._partition.partition}] "
            f"from oldest offset via {self._bootstrap_servers}"
        )

    async def close(self) -> None:
        if self._consumer is not None:
            await self._consumer.stop()
            self._consumer = None

    async def messages(self) -> AsyncIterator[Message]:
        if self._consumer is None:
            await self.initialize()
        assert self._consumer is not None
        async for record in self._consumer:
            yield Message(
                value=record.value if record.value is not None else b"",
                topic=record.topic,
                partition=record.partition,
                offset=record.offset,
                key=record.key,
            )


class KafkaPublisher:
    """Raw-bytes producer.

    Args:
        bootstrap_servers: Comma-separated broker list.
        client_id: Client id reported to the brokers.
        request_timeout_ms: Upper bound for a single send.
    """

    def __init__(
        self,
        bootstrap_servers: str,
        *,
        client_id: str = "personspine-dead-letter",
        request_timeout_ms: int = 10000,
    ) -> None:
        self._bootstrap_servers = bootstrap_servers
        self._client_id = client_id
        self._request_timeout_ms = request_timeout_ms
        self._producer: AIOKafkaProducer | None = None

    async def initialize(self) -> None:
        if self._producer is not None:
            return
        producer = AIOKafkaProducer(
            bootstrap_servers=self._bootstrap_servers,
            client_id=self._client_id,
            request_timeout_ms=self._request_timeout_ms,
        )
        await producer.start()
        self._producer = producer

    async def close(self) -> None:
        if self._producer is not None:
            await self._producer.stop()
            self._producer = None

    async def publish(self, topic: str, value: bytes) -> None:
        if self._producer is None:
            await self.initialize()
        assert self._producer is not None
        metadata = await self._producer.send_and_wait(topic, value)
        logger.debug(
            f"Published to {topic} - partition {metadata.partition}, offset {metadata.offset}"
        )
