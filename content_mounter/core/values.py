"""
Stored and cast value types for dynamic attributes.

A dynamic attribute is stored either as a single shared value (Scalar) or as
a mapping of locale codes to values (Localized). The shape is picked from the
field schema when the attribute is first written, never from the value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from collections.abc import Mapping
from typing import Any, Union

from dateutil import parser as date_parser

from ..errors import CastError
from ..i18n import normalize_locale


@dataclass
class Scalar:
    """A value shared by every locale."""

    value: Any = None

    def resolve(self, locale: str) -> Any:
        return self.value

    def export(self) -> Any:
        return stringify_keys(self.value)


@dataclass
class Localized:
    """Per-locale values of a translated field.

    Attributes:
        translations: Mapping of locale code to value
    """

    translations: dict[str, Any] = field(default_factory=dict)

    def resolve(self, locale: str) -> Any:
        # A missing translation reads as None
        return self.translations.get(locale)

    def assign(self, locale: str, value: Any) -> None:
        self.translations[locale] = value

    def merge(self, values: Mapping[Any, Any]) -> None:
        """Deep-merge ``values``: incoming locales overwrite, others are kept."""
        for locale, value in values.items():
            self.translations[normalize_locale(locale)] = value

    def export(self) -> dict[str, Any]:
        return {locale: stringify_keys(value) for locale, value in self.translations.items()}


StoredValue = Union[Scalar, Localized]


@dataclass(frozen=True)
class FileRef:
    """Reference to an uploaded file; only its URL is known to the entry."""

    url: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url}


def cast_date(name: str, value: Any) -> Any:
    """Parse textual dates; date and datetime values pass through unchanged.

    Raises:
        CastError: If the text cannot be parsed as a date
    """
    if not isinstance(value, str):
        return value
    try:
        return date_parser.parse(value).date()
    except (ValueError, OverflowError) as exc:
        raise CastError(name, value, str(exc)) from exc


def stringify_keys(value: Any) -> Any:
    """Recursively convert mapping keys to strings."""
    if isinstance(value, Mapping):
        return {str(key): stringify_keys(item) for key, item in value.items()}
    if isinstance(value, list):
        return [stringify_keys(item) for item in value]
    return value
