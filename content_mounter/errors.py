"""Exceptions raised by the content mounter."""

from __future__ import annotations


class ContentMounterError(Exception):
    """Base class for every error raised by this package."""


class UnknownFieldError(ContentMounterError, AttributeError):
    """Raised when a name is neither a core field nor a field of the content type.

    Subclasses AttributeError so callers treating entries like regular objects
    see the usual unresolved-member error.
    """

    def __init__(self, name: str, content_type: str | None = None):
        if content_type:
            message = f"Unknown field '{name}' for content type '{content_type}'"
        else:
            message = f"Unknown field '{name}'"
        super().__init__(message)
        # AttributeError.__init__ resets .name, so assign afterwards
        self.name = name
        self.content_type = content_type


class CastError(ContentMounterError, ValueError):
    """Raised when a stored value cannot be cast to its field type."""

    def __init__(self, field: str, value: object, reason: str = ""):
        self.field = field
        self.value = value
        message = f"Cannot cast {value!r} for field '{field}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
