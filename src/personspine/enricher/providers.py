"""Response shapes of the enrichment providers.

Each provider answers ``GET {url}?name=...`` with JSON; only the field
extraction differs:

    age          {"count": 1, "name": "Zahar", "age": 35}
    gender       {"count": 1, "name": "Zahar", "gender": "male", "probability": 0.99}
    nationality  {"count": 1, "name": "Zahar", "country": [{"country_id": "RU", "probability": 0.4}]}

Extractors return ``None`` when the payload has no usable value.

Example:
    >>> from personspine.enricher.providers import get_provider
    >>> from personspine.protocols.enricher import AttributeKind
    >>> get_provider(AttributeKind.NATIONALITY).extract({"country": [{"country_id": "RU"}]})
    'RU'
    >>> get_provider(AttributeKind.AGE).extract({"age": 0}) is None
    True
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from personspine.protocols.enricher import AttributeKind

# agify answers age=0 (or null) for names it has no data on
UNKNOWN_AGE = 0


def extract_age(payload: Any) -> int | None:
    if not isinstance(payload, dict):
        return None
    age = payload.get("age")
    if isinstance(age, bool) or not isinstance(age, int):
        return None
    if age <= UNKNOWN_AGE:
        return None
    return age


def extract_gender(payload: Any) -> str | None:
    if not isinstance(payload, dict):
        return None
    gender = payload.get("gender")
    if not isinstance(gender, str) or not gender.strip():
        return None
    return gender.strip()


def extract_nationality(payload: Any) -> str | None:
    """First (most probable) country of the ``country`` list."""
    if not isinstance(payload, dict):
        return None
    countries = payload.get("country")
    if not isinstance(countries, list) or not countries:
        return None
    first = countries[0]
    if not isinstance(first, dict):
        return None
    country_id = first.get("country_id")
    if not isinstance(country_id, str) or not country_id.strip():
        return None
    return country_id.strip()


def parse_cached_age(value: str) -> int | None:
    try:
        age = int(value)
    except ValueError:
        return None
    return age if age > UNKNOWN_AGE else None


def parse_cached_text(value: str) -> str | None:
    return value or None


@dataclass(frozen=True)
class Provider:
    """How to query and read one attribute kind.

    Attributes:
        kind: Attribute produced by this provider.
        default_url: Public endpoint of the provider.
        extract: Pulls the value out of a decoded response body.
        parse_cached: Turns a cached string back into a value.
    """

    kind: AttributeKind
    default_url: str
    extract: Callable[[Any], int | str | None]
    parse_cached: Callable[[str], int | str | None]


PROVIDERS: dict[AttributeKind, Provider] = {
    AttributeKind.AGE: Provider(
        kind=AttributeKind.AGE,
        default_url="https://api.agify.io/",
        extract=extract_age,
        parse_cached=parse_cached_age,
    ),
    AttributeKind.GENDER: Provider(
        kind=AttributeKind.GENDER,
        default_url="https://api.genderize.io/",
        extract=extract_gender,
        parse_cached=parse_cached_text,
    ),
    AttributeKind.NATIONALITY: Provider(
        kind=AttributeKind.NATIONALITY,
        default_url="https://api.nationalize.io/",
        extract=extract_nationality,
        parse_cached=parse_cached_text,
    ),
}


def get_provider(kind: AttributeKind | str) -> Provider:
    """Look up the provider for an attribute kind."""
    return PROVIDERS[AttributeKind(kind)]
