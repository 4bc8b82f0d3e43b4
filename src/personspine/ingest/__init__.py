"""Ingestion: payload decoding and the queue consumer."""

from personspine.ingest.consumer import ConsumerStats, ProcessingOutcome, QueueConsumer
from personspine.ingest.decode import decode_json_object, decode_model, decode_person

__all__ = [
    "ConsumerStats",
    "ProcessingOutcome",
    "QueueConsumer",
    "decode_json_object",
    "decode_model",
    "decode_person",
]
