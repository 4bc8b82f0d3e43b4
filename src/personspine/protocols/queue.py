"""Message queue protocols.

Defines the interface for consuming raw person payloads and publishing raw
bytes (the dead-letter channel).

Example:
    >>> from personspine.protocols.queue import Message
    >>> msg = Message(value=b'{"name": "Zahar"}', topic="FIO", offset=7)
    >>> msg.offset
    7
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol, runtime_checkable
from uuid import uuid4


@dataclass
class Message:
    """A message read from a topic partition.

    Example:
        >>> from personspine.protocols.queue import Message
        >>> m = Message(value=b"raw", topic="FIO", partition=0, offset=3)
        >>> m.value
        b'raw'
        >>> m.partition
        0
    """

    value: bytes
    topic: str = ""
    partition: int = 0
    offset: int = -1
    key: bytes | None = None
    message_id: str = field(default_factory=lambda: str(uuid4()))
    received_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@runtime_checkable
class MessageSource(Protocol):
    """Ordered stream of messages from one topic partition."""

    def messages(self) -> AsyncIterator[Message]:
        """Yield messages in arrival order until the source is closed."""
        ...

    async def initialize(self) -> None:
        """Connect and position at the starting offset."""
        ...

    async def close(self) -> None:
        """Clean up resources."""
        ...


@runtime_checkable
class MessagePublisher(Protocol):
    """Publishes raw bytes to a topic."""

    async def publish(self, topic: str, value: bytes) -> None:
        """Publish a message. Raises on failure."""
        ...

    async def initialize(self) -> None:
        """Connect."""
        ...

    async def close(self) -> None:
        """Clean up resources."""
        ...
