"""Protocol definitions for pluggable backends."""

from personspine.protocols.cache import CacheBackend, cache_key
from personspine.protocols.enricher import (
    AttributeKind,
    AttributeResolver,
    EnrichmentResult,
    EnrichmentStatus,
)
from personspine.protocols.queue import Message, MessagePublisher, MessageSource
from personspine.protocols.storage import PersonStore

__all__ = [
    "AttributeKind",
    "AttributeResolver",
    "CacheBackend",
    "EnrichmentResult",
    "EnrichmentStatus",
    "Message",
    "MessagePublisher",
    "MessageSource",
    "PersonStore",
    "cache_key",
]
