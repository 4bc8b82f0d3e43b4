"""Tests for MemoryQueue and MemoryMessageSource.

Tests cover:
- Publishing and retention
- Reading in arrival order from the oldest offset
- Waiting for new messages
- Shutdown wakes blocked readers
"""

from __future__ import annotations

import asyncio

from personspine.protocols.queue import MessagePublisher, MessageSource
from personspine.queue.memory import MemoryQueue

# =============================================================================
# Publishing
# =============================================================================


class TestMemoryQueuePublish:
    """Tests for the topic log."""

    async def test_publish_retains_messages(self) -> None:
        """Published values stay on the topic in order."""
        queue = MemoryQueue()

        await queue.publish("FIO", b"one")
        await queue.publish("FIO", b"two")

        assert queue.values("FIO") == [b"one", b"two"]
        assert [m.offset for m in queue.messages("FIO")] == [0, 1]

    async def test_topics_are_separate(self) -> None:
        """Each topic has its own log."""
        queue = MemoryQueue()

        await queue.publish("FIO", b"person")
        await queue.publish("FIO_FAILED", b"garbage")

        assert queue.values("FIO") == [b"person"]
        assert queue.values("FIO_FAILED") == [b"garbage"]
        assert queue.topic_count() == 2

    def test_unknown_topic_is_empty(self) -> None:
        assert MemoryQueue().values("nope") == []

    def test_implements_protocols(self) -> None:
        queue = MemoryQueue()

        assert isinstance(queue, MessagePublisher)
        assert isinstance(queue.source("FIO"), MessageSource)


# =============================================================================
# Reading
# =============================================================================


class TestMemoryMessageSource:
    """Tests for sequential reading."""

    async def test_reads_from_oldest_offset(self) -> None:
        """A source opened after publishing still sees earlier messages."""
        queue = MemoryQueue()
        await queue.publish("FIO", b"a")
        await queue.publish("FIO", b"b")
        source = queue.source("FIO")

        received = []
        async for message in source.messages():
            received.append(message.value)
            if len(received) == 2:
                break

        assert received == [b"a", b"b"]
        assert source.position == 2

    async def test_start_offset(self) -> None:
        """A start offset skips earlier messages."""
        queue = MemoryQueue()
        for value in (b"a", b"b", b"c"):
            await queue.publish("FIO", value)

        source = queue.source("FIO", start_offset=2)
        message = await anext(source.messages())

        assert message.value == b"c"
        assert message.topic == "FIO"
        assert message.partition == 0

    async def test_waits_for_new_messages(self) -> None:
        """A reader at the end of the log receives later messages."""
        queue = MemoryQueue()
        source = queue.source("FIO")

        async def first() -> bytes:
            async for message in source.messages():
                return message.value
            return b""

        reader = asyncio.create_task(first())
        await asyncio.sleep(0.01)
        assert not reader.done()

        await queue.publish("FIO", b"late")

        assert await asyncio.wait_for(reader, timeout=1.0) == b"late"

    async def test_close_source_ends_iteration(self) -> None:
        """Closing the source wakes and ends a blocked reader."""
        queue = MemoryQueue()
        source = queue.source("FIO")

        async def drain() -> int:
            count = 0
            async for _ in source.messages():
                count += 1
            return count

        reader = asyncio.create_task(drain())
        await queue.publish("FIO", b"x")
        await asyncio.sleep(0.01)
        await source.close()

        assert await asyncio.wait_for(reader, timeout=1.0) == 1

    async def test_close_queue_ends_iteration(self) -> None:
        """Closing the queue stops every source."""
        queue = MemoryQueue()
        source = queue.source("FIO")

        reader = asyncio.create_task(anext(source.messages(), None))
        await asyncio.sleep(0.01)
        await queue.close()

        assert await asyncio.wait_for(reader, timeout=1.0) is None
        assert queue.closed
