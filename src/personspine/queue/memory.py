"""In-memory message queue implementation.

Provides an in-process topic log implementing both MessagePublisher and
(through ``source()``) MessageSource. Topics are append-only and retained,
so a source opened after publishing still starts from the oldest message,
like a Kafka partition read from the earliest offset.

Example:
    >>> from personspine.queue.memory import MemoryQueue
    >>> queue = MemoryQueue()
    >>> hasattr(queue, 'publish')
    True
    >>> hasattr(queue, 'source')
    True
"""

from __future__ import annotations

import asyncio
from collections import defaultdict
from collections.abc import AsyncIterator

from personspine.protocols.queue import Message


class MemoryQueue:
    """In-memory topic log.

    Best for: Testing, development, single-process apps.

    Example:
        >>> import asyncio
        >>> from personspine.queue.memory import MemoryQueue
        >>> queue = MemoryQueue()
        >>> asyncio.run(queue.publish("FIO", b'{"name": "Anna"}'))
        >>> queue.values("FIO")
        [b'{"name": "Anna"}']
    """

    def __init__(self) -> None:
        self._topics: dict[str, list[Message]] = defaultdict(list)
        self._changed = asyncio.Condition()
        self._closed = False
        self._initialized = False

    async def initialize(self) -> None:
        self._initialized = True

    async def close(self) -> None:
        """Wake and stop all open sources."""
        self._closed = True
        async with self._changed:
            self._changed.notify_all()
        self._initialized = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def publish(self, topic: str, value: bytes) -> None:
        """Append a message to a topic.

        Args:
            topic: Topic name.
            value: Raw message bytes.
        """
        log = self._topics[topic]
        log.append(Message(value=bytes(value), topic=topic, partition=0, offset=len(log)))
        async with self._changed:
            self._changed.notify_all()

    def source(self, topic: str, start_offset: int = 0) -> MemoryMessageSource:
        """Open a reader on ``topic`` starting at ``start_offset``."""
        return MemoryMessageSource(self, topic, start_offset)

    # --- Utility Methods ---

    def messages(self, topic: str) -> list[Message]:
        """All messages retained on a topic."""
        return list(self._topics.get(topic, []))

    def values(self, topic: str) -> list[bytes]:
        """Raw values retained on a topic."""
        return [m.value for m in self._topics.get(topic, [])]

    def topic_count(self) -> int:
        """Return number of topics with at least one message."""
        return len([t for t, log in self._topics.items() if log])


class MemoryMessageSource:
    """Sequential reader over one MemoryQueue topic.

    ``messages()`` waits for new messages until the source or its queue
    is closed.
    """

    def __init__(self, queue: MemoryQueue, topic: str, start_offset: int = 0) -> None:
        self._queue = queue
        self._topic = topic
        self._offset = start_offset
        self._closed = False

    @property
    def topic(self) -> str:
        return self._topic

    @property
    def position(self) -> int:
        """Offset of the next message to be read."""
        return self._offset

    async def initialize(self) -> None:
        self._closed = False

    async def close(self) -> None:
        self._closed = True
        async with self._queue._changed:
            self._queue._changed.notify_all()

    def _stopped(self) -> bool:
        return self._closed or self._queue.closed

    async def messages(self) -> AsyncIterator[Message]:
        while True:
            log = self._queue._topics[self._topic]
            if self._offset < len(log):
                message = log[self._offset]
                self._offset += 1
                yield message
                continue
            if self._stopped():
                return
            async with self._queue._changed:
                await self._queue._changed.wait_for(
                    lambda: self._stopped()
                    or self._offset < len(self._queue._topics[self._topic])
                )
