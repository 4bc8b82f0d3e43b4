"""Message transports: in-memory topic log and Kafka."""

from personspine.queue.memory import MemoryMessageSource, MemoryQueue

__all__ = ["MemoryMessageSource", "MemoryQueue"]
