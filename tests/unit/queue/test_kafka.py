"""Tests for the Kafka adapters with mocked aiokafka clients."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from aiokafka import TopicPartition

from personspine.queue import kafka as kafka_module
from personspine.queue.kafka import KafkaMessageSource, KafkaPublisher


def make_consumer(records: list[SimpleNamespace]) -> MagicMock:
    consumer = MagicMock()
    consumer.start = AsyncMock()
    consumer.stop = AsyncMock()
    consumer.seek_to_beginning = AsyncMock()

    async def iterate():
        for record in records:
            yield record

    consumer.__aiter__ = lambda self: iterate()
    return consumer


class TestKafkaMessageSource:
    """Tests for the single-partition reader."""

    async def test_assigns_partition_from_oldest_offset(self, monkeypatch) -> None:
        consumer = make_consumer([])
        source = KafkaMessageSource("broker:9092", "FIO", 0)
        monkeypatch.setattr(source, "_create_consumer", lambda: consumer)

        await source.initialize()

        consumer.start.assert_awaited_once()
        consumer.assign.assert_called_once_with([TopicPartition("FIO", 0)])
        consumer.seek_to_beginning.assert_awaited_once_with(TopicPartition("FIO", 0))

    async def test_messages_carry_position(self, monkeypatch) -> None:
        records = [
            SimpleNamespace(value=b"one", topic="FIO", partition=0, offset=0, key=None),
            SimpleNamespace(value=None, topic="FIO", partition=0, offset=1, key=b"k"),
        ]
        consumer = make_consumer(records)
        source = KafkaMessageSource("broker:9092", "FIO")
        monkeypatch.setattr(source, "_create_consumer", lambda: consumer)

        messages = [m async for m in source.messages()]

        assert [m.value for m in messages] == [b"one", b""]
        assert [m.offset for m in messages] == [0, 1]
        assert messages[1].key == b"k"

    async def test_close_stops_consumer(self, monkeypatch) -> None:
        consumer = make_consumer([])
        source = KafkaMessageSource("broker:9092", "FIO")
        monkeypatch.setattr(source, "_create_consumer", lambda: consumer)
        await source.initialize()

        await source.close()
        await source.close()

        consumer.stop.assert_awaited_once()


class TestKafkaPublisher:
    """Tests for the raw-bytes producer."""

    async def test_publish_waits_for_ack(self, monkeypatch) -> None:
        producer = MagicMock()
        producer.start = AsyncMock()
        producer.stop = AsyncMock()
        producer.send_and_wait = AsyncMock(return_value=SimpleNamespace(partition=0, offset=9))
        monkeypatch.setattr(kafka_module, "AIOKafkaProducer", MagicMock(return_value=producer))
        publisher = KafkaPublisher("broker:9092")

        await publisher.publish("FIO_FAILED", b"garbage")
        await publisher.close()

        producer.start.assert_awaited_once()
        producer.send_and_wait.assert_awaited_once_with("FIO_FAILED", b"garbage")
        producer.stop.assert_awaited_once()
