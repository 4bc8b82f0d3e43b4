"""Custom exceptions.

PersonSpine uses a hierarchy of exceptions so that ingestion adapters can
decide how each failure is surfaced:

Example:
    >>> from personspine.core.exceptions import NotFoundError, PersonSpineError
    >>> isinstance(NotFoundError("age", "Zahar"), PersonSpineError)
    True
    >>> try:
    ...     raise NotFoundError("age", "Zahar")
    ... except AttributeLookupError as e:
    ...     print(f"Caught: {type(e).__name__} ({e.kind})")
    Caught: NotFoundError (age)
"""

from __future__ import annotations


class PersonSpineError(Exception):
    """Base exception for PersonSpine.

    Example:
        >>> from personspine.core.exceptions import PersonSpineError
        >>> e = PersonSpineError("something went wrong")
        >>> str(e)
        'something went wrong'
    """


class DecodeError(PersonSpineError):
    """Raw input could not be decoded into a person record.

    The original payload is kept so the queue path can dead-letter it.

    Example:
        >>> from personspine.core.exceptions import DecodeError
        >>> e = DecodeError("not JSON", payload=b"\\x00garbage")
        >>> e.payload
        b'\\x00garbage'
    """

    def __init__(self, message: str, payload: bytes | None = None) -> None:
        self.payload = payload
        super().__init__(message)


class AttributeLookupError(PersonSpineError):
    """An enrichment attribute could not be resolved.

    Neither the cache nor the remote provider yielded a usable value.

    Attributes:
        kind: Attribute kind ("age", "gender", "nationality").
        name: The given name that was looked up.
    """

    def __init__(self, kind: str, name: str, reason: str = "") -> None:
        self.kind = kind
        self.name = name
        self.reason = reason
        message = f"{kind} lookup failed for {name!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class TransportError(AttributeLookupError):
    """Provider request could not be sent or timed out.

    Example:
        >>> from personspine.core.exceptions import TransportError
        >>> str(TransportError("gender", "Anna", "timed out"))
        "gender lookup failed for 'Anna': timed out"
    """


class ProviderError(AttributeLookupError):
    """Provider answered with a non-success status or an unreadable body.

    Attributes:
        status_code: HTTP status returned by the provider, if any.
    """

    def __init__(
        self,
        kind: str,
        name: str,
        reason: str = "",
        status_code: int | None = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(kind, name, reason)


class NotFoundError(AttributeLookupError):
    """Provider answered but had no usable value for the name.

    Example:
        >>> from personspine.core.exceptions import NotFoundError
        >>> raise NotFoundError("nationality", "Zahar")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        NotFoundError: nationality lookup failed for 'Zahar'
    """


class PersistenceError(PersonSpineError):
    """Record store operation failed.

    Example:
        >>> from personspine.core.exceptions import PersistenceError
        >>> raise PersistenceError("connection lost")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        PersistenceError: connection lost
    """


class ConfigurationError(PersonSpineError):
    """Configuration is invalid.

    Example:
        >>> from personspine.core.exceptions import ConfigurationError
        >>> raise ConfigurationError("unknown backend")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ConfigurationError: unknown backend
    """
