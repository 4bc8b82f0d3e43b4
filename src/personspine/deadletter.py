"""Dead-letter sink for undecodable queue payloads.

Forwards the original bytes, unchanged, to a fixed topic for operators to
inspect or replay. Publishing is best effort: failures and timeouts are
logged and reported through the return value, never raised, so the consumer
loop keeps running.

Example:
    >>> import asyncio
    >>> from personspine.deadletter import DeadLetterSink
    >>> from personspine.queue.memory import MemoryQueue
    >>> queue = MemoryQueue()
    >>> sink = DeadLetterSink(queue, topic="FIO_FAILED")
    >>> asyncio.run(sink.publish(b"not json"))
    True
    >>> queue.values("FIO_FAILED")
    [b'not json']
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from personspine.protocols.queue import MessagePublisher

logger = logging.getLogger(__name__)

DEFAULT_TOPIC = "FIO_FAILED"


class DeadLetterSink:
    """Fire-and-forget publisher of raw payloads.

    Args:
        publisher: Transport used to send the bytes.
        topic: Dead-letter topic name.
        timeout: Upper bound in seconds for a single publish.
    """

    def __init__(
        self,
        publisher: MessagePublisher,
        topic: str = DEFAULT_TOPIC,
        timeout: float = 10.0,
    ) -> None:
        self._publisher = publisher
        self._topic = topic
        self._timeout = timeout
        self.published = 0
        self.failed = 0

    @property
    def topic(self) -> str:
        return self._topic

    async def publish(self, payload: bytes) -> bool:
        """Send ``payload`` to the dead-letter topic.

        Returns:
            True if the broker accepted the message.
        """
        try:
            await asyncio.wait_for(
                self._publisher.publish(self._topic, bytes(payload)),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            self.failed += 1
            logger.warning(
                f"Timed out sending message to {self._topic} after {self._timeout}s",
                extra={"payload_size": len(payload)},
            )
            return False
        except Exception as e:
            self.failed += 1
            logger.warning(
                f"Error sending message to {self._topic}: {e}",
                extra={"payload_size": len(payload)},
            )
            return False

        self.published += 1
        logger.info(f"Sent message to {self._topic} ({len(payload)} bytes)")
        return True

    async def initialize(self) -> None:
        await self._publisher.initialize()

    async def close(self) -> None:
        await self._publisher.close()
