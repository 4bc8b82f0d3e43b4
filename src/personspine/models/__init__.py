"""PersonSpine data models."""

from personspine.models.base import PersonSpineModel
from personspine.models.person import Person, PersonInput, PersonUpdate

__all__ = [
    "Person",
    "PersonInput",
    "PersonSpineModel",
    "PersonUpdate",
]
