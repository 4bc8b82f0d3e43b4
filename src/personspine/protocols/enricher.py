"""Enricher protocol for attribute lookup.

This module defines the attribute kinds a person is enriched with, the
protocol for a single-attribute resolver, and the result type the
coordinator reports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, runtime_checkable


class AttributeKind(str, Enum):
    """Enrichment attribute, also the cache key prefix.

    Example:
        >>> AttributeKind.AGE.value
        'age'
        >>> [k.value for k in AttributeKind]
        ['age', 'gender', 'nationality']
    """

    AGE = "age"
    GENDER = "gender"
    NATIONALITY = "nationality"


class EnrichmentStatus(Enum):
    """Status of an enrichment operation.

    Attributes:
        SUCCESS: All attributes resolved and assigned.
        FAILED: A lookup failed; the record was left untouched.
    """

    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class EnrichmentResult:
    """Result of enriching one record.

    Attributes:
        name: The given name used as lookup key.
        status: The outcome of the enrichment.
        fields_added: Attributes that were unset before enrichment.
        fields_updated: Attributes that already had a value and were replaced.
        error_message: Error message if status is FAILED.
        failed_kind: Attribute whose lookup failed, if any.
        duration_ms: Time taken for enrichment in milliseconds.

    Example:
        >>> result = EnrichmentResult(
        ...     name="Zahar",
        ...     status=EnrichmentStatus.SUCCESS,
        ...     fields_added=["age", "gender", "nationality"],
        ... )
        >>> result.succeeded
        True
    """

    name: str
    status: EnrichmentStatus
    fields_added: list[str] = field(default_factory=list)
    fields_updated: list[str] = field(default_factory=list)
    error_message: str | None = None
    failed_kind: str | None = None
    duration_ms: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.status is EnrichmentStatus.SUCCESS


@runtime_checkable
class AttributeResolver(Protocol):
    """Resolves one attribute kind for a given name.

    Example:
        >>> class FixedAge:
        ...     kind = AttributeKind.AGE
        ...
        ...     async def resolve(self, name: str) -> int:
        ...         return 35
    """

    @property
    def kind(self) -> AttributeKind:
        """The attribute this resolver produces."""
        ...

    async def resolve(self, name: str) -> int | str:
        """Return the attribute value or raise ``AttributeLookupError``."""
        ...
