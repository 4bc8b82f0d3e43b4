"""Person models - the core data unit.

This module contains the person record types:

- `PersonInput`: Raw input decoded from an HTTP body or queue payload
- `Person`: The record that is enriched and persisted
- `PersonUpdate`: Replacement body for updating a stored record

Example:
    >>> from personspine.models.person import Person, PersonInput
    >>> raw = PersonInput(name=" Zahar ", surname="Ivanov", patronymic="Andreevich")
    >>> raw.name  # Whitespace stripped
    'Zahar'
    >>> person = Person.from_input(raw)
    >>> person.is_enriched
    False
"""

from __future__ import annotations

from pydantic import ConfigDict, Field, field_validator

from personspine.models.base import PersonSpineModel


class PersonInput(PersonSpineModel):
    """Raw person record as received from an ingestion source.

    Unknown keys are ignored so producers can send extra fields.

    Example:
        >>> from personspine.models.person import PersonInput
        >>> PersonInput(name="Anna", surname="Petrova").patronymic
        ''
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        extra="ignore",
    )

    name: str = Field(..., min_length=1, description="Given name, used as the lookup key")
    surname: str = Field(..., min_length=1, description="Family name")
    patronymic: str = Field(default="", description="Patronymic (optional)")

    @field_validator("patronymic", mode="before")
    @classmethod
    def empty_patronymic(cls, v: object) -> object:
        """Treat an explicit null patronymic as empty."""
        return "" if v is None else v


class Person(PersonSpineModel):
    """A person record, enriched or awaiting enrichment.

    The identifier is assigned by the record store on creation and never
    changes afterwards.

    Example:
        >>> from personspine.models.person import Person
        >>> p = Person(name="Zahar", surname="Ivanov", age=35, gender="male", nationality="RU")
        >>> p.is_enriched
        True
        >>> p.id is None
        True
    """

    id: int | None = Field(default=None, description="Store-assigned identifier")
    name: str = Field(..., min_length=1)
    surname: str = Field(default="")
    patronymic: str = Field(default="")
    age: int | None = Field(default=None, ge=0, description="Estimated age")
    gender: str | None = Field(default=None, description="Estimated gender token")
    nationality: str | None = Field(default=None, description="Most likely country code")

    @property
    def is_enriched(self) -> bool:
        """True when age, gender and nationality are all populated."""
        return self.age is not None and bool(self.gender) and bool(self.nationality)

    @classmethod
    def from_input(cls, raw: PersonInput) -> Person:
        """Create an unenriched record from decoded input."""
        return cls(name=raw.name, surname=raw.surname, patronymic=raw.patronymic)


class PersonUpdate(PersonSpineModel):
    """Replacement fields for an existing record.

    Every non-identifier field of the stored record is replaced, so omitted
    enrichment fields become unset.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        extra="ignore",
    )

    name: str = Field(..., min_length=1)
    surname: str = Field(..., min_length=1)
    patronymic: str = Field(default="")
    age: int | None = Field(default=None, ge=0)
    gender: str | None = None
    nationality: str | None = None

    @field_validator("patronymic", mode="before")
    @classmethod
    def empty_patronymic(cls, v: object) -> object:
        return "" if v is None else v

    def apply_to(self, person_id: int) -> Person:
        """Build the replacement record for ``person_id``."""
        return Person(id=person_id, **self.model_dump())
