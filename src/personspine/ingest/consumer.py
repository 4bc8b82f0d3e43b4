"""Queue consumer - the asynchronous ingestion path.

Reads raw person payloads from one topic partition, strictly one at a time
in arrival order, and drives each message to a terminal outcome:

    received -> decoded -> enriched -> persisted        PERSISTED
    received -> decode_failed -> dead-lettered          DEAD_LETTERED
    received -> decoded -> enrich_failed -> dropped     ENRICH_FAILED
    received -> decoded -> enriched -> persist_failed   PERSIST_FAILED

A failing message never stops the loop. Delivery is at-most-once: dropped
messages are logged, not redelivered.

Example:
    >>> from personspine.ingest.consumer import ConsumerStats
    >>> stats = ConsumerStats(received=10, persisted=7, dead_lettered=2, enrich_failed=1)
    >>> stats.failed
    3
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING

from personspine.core.exceptions import AttributeLookupError, DecodeError, PersistenceError
from personspine.ingest.decode import decode_person

if TYPE_CHECKING:
    from personspine.deadletter import DeadLetterSink
    from personspine.protocols.queue import Message, MessageSource
    from personspine.service import PersonService

logger = logging.getLogger(__name__)


class ProcessingOutcome(str, Enum):
    """Terminal state of one consumed message."""

    PERSISTED = "persisted"
    DEAD_LETTERED = "dead_lettered"
    ENRICH_FAILED = "enrich_failed"
    PERSIST_FAILED = "persist_failed"
    ERROR = "error"


@dataclass
class ConsumerStats:
    """Counters for a consumer's lifetime.

    Example:
        >>> from personspine.ingest.consumer import ConsumerStats
        >>> ConsumerStats().received
        0
    """

    received: int = 0
    persisted: int = 0
    dead_lettered: int = 0
    enrich_failed: int = 0
    persist_failed: int = 0
    errors: int = 0
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def failed(self) -> int:
        return self.dead_lettered + self.enrich_failed + self.persist_failed + self.errors

    def record(self, outcome: ProcessingOutcome) -> None:
        if outcome is ProcessingOutcome.PERSISTED:
            self.persisted += 1
        elif outcome is ProcessingOutcome.DEAD_LETTERED:
            self.dead_lettered += 1
        elif outcome is ProcessingOutcome.ENRICH_FAILED:
            self.enrich_failed += 1
        elif outcome is ProcessingOutcome.PERSIST_FAILED:
            self.persist_failed += 1
        else:
            self.errors += 1


class QueueConsumer:
    """Sequential consumer of raw person messages.

    Args:
        source: Ordered message source (one partition).
        service: Enrich-then-persist pipeline.
        dead_letter: Sink for undecodable payloads.
        dead_letter_enrichment_failures: Also dead-letter messages whose
            enrichment failed instead of only dropping them.

    Example:
        >>> import asyncio
        >>> from personspine.queue.memory import MemoryQueue
        >>> queue = MemoryQueue()
        >>> # consumer = QueueConsumer(queue.source("FIO"), service, sink)
        >>> # consumer.start() ... await consumer.stop()
    """

    def __init__(
        self,
        source: MessageSource,
        service: PersonService,
        dead_letter: DeadLetterSink,
        *,
        dead_letter_enrichment_failures: bool = False,
    ) -> None:
        self._source = source
        self._service = service
        self._dead_letter = dead_letter
        self._dead_letter_enrichment_failures = dead_letter_enrichment_failures
        self._task: asyncio.Task[None] | None = None
        self.stats = ConsumerStats()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def process(self, message: Message) -> ProcessingOutcome:
        """Drive one message to its terminal outcome. Never raises."""
        self.stats.received += 1
        outcome = await self._process(message)
        self.stats.record(outcome)
        return outcome

    async def _process(self, message: Message) -> ProcessingOutcome:
        where = f"{message.topic}[{message.partition}]@{message.offset}"

        try:
            raw = decode_person(message.value)
        except DecodeError as e:
            logger.warning(f"Error processing message {where}: {e}")
            await self._dead_letter.publish(message.value)
            return ProcessingOutcome.DEAD_LETTERED
        except Exception:
            logger.exception(f"Unexpected error decoding message {where}")
            await self._dead_letter.publish(message.value)
            return ProcessingOutcome.DEAD_LETTERED

        try:
            person = await self._service.create_person(raw)
        except AttributeLookupError as e:
            logger.warning(f"Error enriching person data for message {where}, dropping: {e}")
            if self._dead_letter_enrichment_failures:
                await self._dead_letter.publish(message.value)
            return ProcessingOutcome.ENRICH_FAILED
        except PersistenceError as e:
            logger.error(f"Error creating person from message {where}, dropping: {e}")
            return ProcessingOutcome.PERSIST_FAILED
        except Exception:
            logger.exception(f"Unexpected error processing message {where}, dropping")
            return ProcessingOutcome.ERROR

        logger.debug(f"Message {where} persisted as person {person.id}")
        return ProcessingOutcome.PERSISTED

    async def run(self) -> ConsumerStats:
        """Consume until the source is exhausted or the task is cancelled."""
        logger.info("Queue consumer started")
        try:
            async for message in self._source.messages():
                await self.process(message)
        finally:
            logger.info(
                f"Queue consumer stopped: {self.stats.received} received, "
                f"{self.stats.persisted} persisted, {self.stats.failed} failed"
            )
        return self.stats

    def start(self) -> asyncio.Task[None]:
        """Run the consumer as a background task."""
        if self.running:
            raise RuntimeError("Consumer already running")
        self._task = asyncio.create_task(self._run_forever(), name="queue-consumer")
        return self._task

    async def _run_forever(self) -> None:
        try:
            await self.run()
        except Exception:
            logger.exception("Queue consumer crashed")
            raise

    async def stop(self) -> None:
        """Cancel the background task and wait for it to finish."""
        if self._task is None:
            return
        if not self._task.done():
            self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
