"""
Attribute framework shared by the models.

Models declare their core fields as Attribute records. Base stores their
values, applies defaults, keeps localized fields per locale, tracks the
locales the model is translated in and runs an after-initialize hook once
the constructor attributes are written.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from ..core.values import stringify_keys
from ..core.permalink import is_blank
from ..errors import UnknownFieldError
from ..i18n import normalize_locale, resolve_locale


@dataclass(frozen=True)
class Attribute:
    """Declaration of a core field.

    Attributes:
        name: Python-side name of the field
        key: Name used in exported payloads, defaults to ``name``
        localized: Whether the value varies per locale
        default: Value assigned at construction (copied per instance)
        association: Whether the field references another model; associations
            are never exported
    """

    name: str
    key: str | None = None
    localized: bool = False
    default: Any = None
    association: bool = False

    @property
    def wire_key(self) -> str:
        return self.key or self.name


class Base:
    """Model with declared, optionally localized, core attributes."""

    ATTRIBUTES: ClassVar[tuple[Attribute, ...]] = ()

    def __init__(self, **attributes: Any):
        self._values: dict[str, Any] = {}
        self._locales: list[str] = []

        for attribute in self.ATTRIBUTES:
            if attribute.localized:
                self._values[attribute.name] = {}
            else:
                self._values[attribute.name] = copy.deepcopy(attribute.default)

        # Declared attributes first, so associations exist before anything
        # that depends on them is written.
        ordered = sorted(attributes.items(), key=lambda item: self.find_attribute(item[0]) is None)
        for name, value in ordered:
            self.assign(name, value)

        self.after_initialize()

    @classmethod
    def find_attribute(cls, name: str) -> Attribute | None:
        """Return the core attribute declared under ``name`` or its wire key."""
        for attribute in cls.ATTRIBUTES:
            if name in (attribute.name, attribute.key):
                return attribute
        return None

    def after_initialize(self) -> None:
        """Hook run once the constructor attributes are written."""

    def assign(self, name: str, value: Any, locale: str | None = None) -> None:
        """Write ``value`` to the core attribute ``name``.

        Raises:
            UnknownFieldError: If no core attribute is declared under ``name``
        """
        attribute = self.find_attribute(name)
        if attribute is None:
            raise UnknownFieldError(name)
        self.write_attribute(attribute, value, locale)

    def read_attribute(self, attribute: Attribute, locale: str | None = None) -> Any:
        value = self._values.get(attribute.name)
        if attribute.localized:
            return (value or {}).get(resolve_locale(locale))
        return value

    def write_attribute(self, attribute: Attribute, value: Any, locale: str | None = None) -> None:
        if not attribute.localized:
            self._values[attribute.name] = value
            return

        translations = self._values.setdefault(attribute.name, {})
        if isinstance(value, Mapping):
            for code, translation in value.items():
                code = normalize_locale(code)
                self.add_locale(code)
                translations[code] = translation
        else:
            code = resolve_locale(locale)
            self.add_locale(code)
            translations[code] = value

    @property
    def locales(self) -> list[str]:
        """Locales this model holds values for, in registration order."""
        return list(self._locales)

    def add_locale(self, locale: Any) -> None:
        code = normalize_locale(locale)
        if code not in self._locales:
            self._locales.append(code)

    def translated_in(self, locale: Any) -> bool:
        return normalize_locale(locale) in self._locales

    def attributes(self, locale: str | None = None) -> dict[str, Any]:
        """Return the core values for one locale keyed by wire key."""
        return {
            attribute.wire_key: self.read_attribute(attribute, locale)
            for attribute in self.ATTRIBUTES
            if not attribute.association
        }

    def to_hash(self, locale: str | None = None) -> dict[str, Any]:
        """Return every non-blank core value keyed by wire key.

        Localized attributes are exported with all their translations.
        """
        data: dict[str, Any] = {}
        for attribute in self.ATTRIBUTES:
            if attribute.association:
                continue
            value = self._values.get(attribute.name)
            if attribute.localized:
                value = {
                    code: translation
                    for code, translation in (value or {}).items()
                    if not is_blank(translation)
                }
            if is_blank(value):
                continue
            data[attribute.wire_key] = stringify_keys(value)
        return data
