"""Decoding of raw ingestion payloads.

Both ingestion paths hand raw bytes (an HTTP body or a queue message value)
to ``decode_person``. Anything that is not a JSON object describing a person
raises ``DecodeError`` carrying the original bytes.

Example:
    >>> from personspine.ingest.decode import decode_person
    >>> decode_person(b'{"name":"Zahar","surname":"Ivanov","patronymic":"Andreevich"}').name
    'Zahar'
    >>> decode_person(b"not json")  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
    DecodeError: payload is not valid JSON
"""

from __future__ import annotations

import json
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from personspine.core.exceptions import DecodeError
from personspine.models.person import PersonInput

M = TypeVar("M", bound=BaseModel)


def decode_json_object(raw: bytes | str) -> dict:
    """Parse ``raw`` as a JSON object.

    Raises:
        DecodeError: Not UTF-8, not JSON (including nesting or number sizes the
            parser refuses), or not an object.
    """
    payload = raw.encode("utf-8") if isinstance(raw, str) else bytes(raw)

    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError("payload is not valid UTF-8", payload=payload) from e

    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise DecodeError("payload is not valid JSON", payload=payload) from e

    if not isinstance(data, dict):
        raise DecodeError(
            f"payload must be a JSON object, got {type(data).__name__}", payload=payload
        )
    return data


def decode_model(raw: bytes | str, model: type[M]) -> M:
    """Parse ``raw`` and validate it as ``model``."""
    data = decode_json_object(raw)
    try:
        return model.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        payload = raw.encode("utf-8") if isinstance(raw, str) else bytes(raw)
        raise DecodeError(f"invalid fields: {fields}", payload=payload) from e


def decode_person(raw: bytes | str) -> PersonInput:
    """Decode a raw person record.

    Raises:
        DecodeError: Malformed payload or missing name/surname.
    """
    return decode_model(raw, PersonInput)
