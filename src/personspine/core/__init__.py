"""Core configuration, errors and logging."""

from personspine.core.config import Settings, get_settings
from personspine.core.exceptions import (
    AttributeLookupError,
    ConfigurationError,
    DecodeError,
    NotFoundError,
    PersistenceError,
    PersonSpineError,
    ProviderError,
    TransportError,
)
from personspine.core.logging import JsonFormatter, configure_logging

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Errors
    "AttributeLookupError",
    "ConfigurationError",
    "DecodeError",
    "NotFoundError",
    "PersistenceError",
    "PersonSpineError",
    "ProviderError",
    "TransportError",
    # Logging
    "JsonFormatter",
    "configure_logging",
]
