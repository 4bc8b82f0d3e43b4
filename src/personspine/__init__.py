"""
PersonSpine - Person Record Enrichment Service.

Accepts person records (name, surname, patronymic) over HTTP or from a
queue topic, enriches them with age, gender and nationality from public
name-statistics providers, and persists the result.

Key Features:
- Two ingestion paths sharing one enrich-then-persist pipeline
- Concurrent, all-or-nothing attribute lookups
- Cache-aside lookups keyed by attribute kind and name
- Dead-letter topic for undecodable queue payloads
- Protocol-based backends (memory, Redis, SQLAlchemy, Kafka)

Quick Start:
    >>> from personspine import Runtime, get_settings
    >>> async with Runtime.from_settings(get_settings()) as runtime:
    ...     person = await runtime.service.create_person(raw)

Architecture:
    Record Stores: MemoryPersonStore, SQLAlchemyPersonStore
    Caches: MemoryCache, RedisCache
    Queues: MemoryQueue, KafkaMessageSource
    Interfaces: REST + GraphQL (FastAPI), queue consumer
"""

# Cache backends
from personspine.cache.memory import MemoryCache

# Core
from personspine.core.config import Settings, get_settings
from personspine.core.exceptions import (
    AttributeLookupError,
    DecodeError,
    PersistenceError,
    PersonSpineError,
)
from personspine.core.runtime import Runtime

# Enrichment
from personspine.deadletter import DeadLetterSink
from personspine.enricher import EnrichmentClient, EnrichmentCoordinator, build_coordinator

# Ingestion
from personspine.ingest.consumer import QueueConsumer
from personspine.ingest.decode import decode_person

# Models
from personspine.models.person import Person, PersonInput, PersonUpdate
from personspine.protocols.enricher import AttributeKind

# Queues
from personspine.queue.memory import MemoryQueue
from personspine.service import PersonService

# Record stores
from personspine.storage.memory import MemoryPersonStore

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core
    "Runtime",
    "Settings",
    "get_settings",
    # Errors
    "AttributeLookupError",
    "DecodeError",
    "PersistenceError",
    "PersonSpineError",
    # Models
    "AttributeKind",
    "Person",
    "PersonInput",
    "PersonUpdate",
    # Pipeline
    "DeadLetterSink",
    "EnrichmentClient",
    "EnrichmentCoordinator",
    "PersonService",
    "QueueConsumer",
    "build_coordinator",
    "decode_person",
    # Backends
    "MemoryCache",
    "MemoryPersonStore",
    "MemoryQueue",
]
