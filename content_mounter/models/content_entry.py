"""Content entry: one record of a content type.

The fields of an entry are defined at runtime by its content type. They are
reached through ``get``/``set``, which look the field up in the schema, pick
the value for the requested locale and cast it according to the field type.

Each entry also carries a permalink (slug) derived from its label field and
kept unique among the entries of the same content type.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..core.permalink import is_blank, is_present
from ..core.permalink import permalink as to_permalink
from ..core.values import FileRef, Localized, Scalar, StoredValue, cast_date
from ..errors import UnknownFieldError
from ..i18n import resolve_locale
from ..logging_utils import log_event
from .base import Attribute, Base
from .content_field import ContentField

if TYPE_CHECKING:
    from .content_type import ContentType

logger = logging.getLogger(__name__)

SLUG = Attribute("slug", key="_slug", localized=True)
POSITION = Attribute("position", key="_position", default=0)
VISIBLE = Attribute("visible", key="_visible", default=True)
SEO_TITLE = Attribute("seo_title", localized=True)
META_KEYWORDS = Attribute("meta_keywords", localized=True)
META_DESCRIPTION = Attribute("meta_description", localized=True)
CONTENT_TYPE = Attribute("content_type", association=True)

# Core fields sent to the remote API
PARAMS_KEYS = ("_slug", "_position", "_visible", "seo_title", "meta_keywords", "meta_description")

PLAIN_TYPES = ("string", "text", "select", "boolean", "category")


def _field_name(name: str) -> str:
    name = str(name)
    if name.endswith("="):
        return name[:-1]
    return name


class ContentEntry(Base):
    """An entry whose dynamic fields are described by a ContentType.

    Attributes:
        dynamic_attributes: Stored values of the dynamic fields, keyed by
            field name. Each value is a Scalar or, for translated fields, a
            Localized mapping of locale to value.
    """

    ATTRIBUTES = (SLUG, POSITION, VISIBLE, SEO_TITLE, META_KEYWORDS, META_DESCRIPTION, CONTENT_TYPE)

    def __init__(self, content_type: ContentType | None = None, **attributes: Any):
        self.dynamic_attributes: dict[str, StoredValue] = {}
        super().__init__(content_type=content_type, **attributes)

    def __repr__(self) -> str:
        slug = self.content_type.slug if self.content_type is not None else None
        return f"ContentEntry(content_type={slug!r}, slug={self.slug!r})"

    def after_initialize(self) -> None:
        self.set_slug()

    # core fields

    @property
    def content_type(self) -> ContentType | None:
        return self.read_attribute(CONTENT_TYPE)

    @property
    def slug(self) -> str | None:
        return self.read_attribute(SLUG)

    @slug.setter
    def slug(self, value: str | None) -> None:
        self.write_attribute(SLUG, value)

    permalink = slug

    @property
    def position(self) -> int:
        return self.read_attribute(POSITION)

    @position.setter
    def position(self, value: int) -> None:
        self.write_attribute(POSITION, value)

    @property
    def visible(self) -> bool:
        return self.read_attribute(VISIBLE)

    @visible.setter
    def visible(self, value: bool) -> None:
        self.write_attribute(VISIBLE, value)

    @property
    def seo_title(self) -> str | None:
        return self.read_attribute(SEO_TITLE)

    @seo_title.setter
    def seo_title(self, value: str | None) -> None:
        self.write_attribute(SEO_TITLE, value)

    @property
    def meta_keywords(self) -> str | None:
        return self.read_attribute(META_KEYWORDS)

    @meta_keywords.setter
    def meta_keywords(self, value: str | None) -> None:
        self.write_attribute(META_KEYWORDS, value)

    @property
    def meta_description(self) -> str | None:
        return self.read_attribute(META_DESCRIPTION)

    @meta_description.setter
    def meta_description(self, value: str | None) -> None:
        self.write_attribute(META_DESCRIPTION, value)

    def permalink_in(self, locale: str | None = None) -> str | None:
        return self.read_attribute(SLUG, locale)

    def permalinks(self) -> list[str]:
        """Every stored translation of the slug."""
        translations = self._values.get(SLUG.name) or {}
        return [slug for slug in translations.values() if is_present(slug)]

    # label

    @property
    def label(self) -> Any:
        """Value of the label field in the current locale."""
        return self.label_in()

    def label_in(self, locale: str | None = None) -> Any:
        content_type = self.content_type
        if content_type is None or content_type.label_field_name is None:
            return None
        return self.dynamic_getter(content_type.label_field_name, locale)

    # typed accessor

    def is_dynamic_field(self, name: str) -> bool:
        """Return True if ``name``, minus one trailing ``=``, is a schema field."""
        content_type = self.content_type
        if content_type is None:
            return False
        return content_type.find_field(_field_name(name)) is not None

    def get(self, name: str, locale: str | None = None) -> Any:
        """Return the value of a core or dynamic field.

        Raises:
            UnknownFieldError: If ``name`` is neither a core nor a dynamic field
            CastError: If a stored date cannot be parsed
        """
        name = _field_name(name)
        attribute = self.find_attribute(name)
        if attribute is not None:
            return self.read_attribute(attribute, locale)
        return self.dynamic_getter(name, locale)

    def set(self, name: str, value: Any, locale: str | None = None) -> None:
        """Write the value of a core or dynamic field.

        Raises:
            UnknownFieldError: If ``name`` is neither a core nor a dynamic field
        """
        name = _field_name(name)
        attribute = self.find_attribute(name)
        if attribute is not None:
            self.write_attribute(attribute, value, locale)
            return
        self.dynamic_setter(name, value, locale)

    def assign(self, name: str, value: Any, locale: str | None = None) -> None:
        self.set(name, value, locale)

    def raw(self, name: str, locale: str | None = None) -> Any:
        """Return the stored value of a dynamic field for a locale, uncast."""
        field = self._schema_field(name)
        stored = self.dynamic_attributes.get(field.name)
        if stored is None:
            return None
        return stored.resolve(resolve_locale(locale))

    def dynamic_getter(self, name: str, locale: str | None = None) -> Any:
        """Return the value of a dynamic field cast according to its type.

        Args:
            name: Name of the dynamic field
            locale: Locale to read, defaults to the current locale

        Returns:
            The cast value: the raw value for string-like types, a date,
            a FileRef, the referenced entry or a list of entries
        """
        field = self._schema_field(name)
        value = self.raw(field.name, locale)
        return self._cast(field, value, locale)

    def dynamic_setter(self, name: str, value: Any, locale: str | None = None) -> None:
        """Write the value of a dynamic field.

        Relationships and untranslated fields hold a single value. Translated
        fields hold one value per locale: a mapping is merged in as a set of
        translations, anything else is stored under the current locale.
        Every locale written is registered on the entry.
        """
        field = self._schema_field(name)

        if not field.stores_translations:
            self.dynamic_attributes[field.name] = Scalar(value)
            return

        stored = self.dynamic_attributes.get(field.name)
        if not isinstance(stored, Localized):
            stored = Localized()

        if isinstance(value, Mapping):
            for code in value:
                self.add_locale(code)
            stored.merge(value)
        else:
            code = resolve_locale(locale)
            self.add_locale(code)
            stored.assign(code, value)

        self.dynamic_attributes[field.name] = stored

    def _schema_field(self, name: str) -> ContentField:
        content_type = self.content_type
        field = None if content_type is None else content_type.find_field(_field_name(name))
        if field is None:
            slug = content_type.slug if content_type is not None else None
            logger.debug("Unknown field %s on %s", name, slug)
            raise UnknownFieldError(_field_name(name), slug)
        return field

    def _cast(self, field: ContentField, value: Any, locale: str | None) -> Any:
        if field.type in PLAIN_TYPES:
            return value
        if field.type == "date":
            return cast_date(field.name, value)
        if field.type == "file":
            return FileRef(value)

        target = field.klass
        if field.type == "belongs_to":
            return None if target is None else target.find_entry(value, locale)
        if target is None:
            return []
        if field.type == "has_many":
            # The inverse side may point at us by label or by permalink
            keys = [key for key in (self.label_in(locale), self.permalink_in(locale)) if key is not None]
            return target.find_entries_by(field.inverse_of, keys, locale)
        return target.find_entries_among(value, locale)

    # projections

    def to_hash(self, locale: str | None = None) -> dict[Any, dict[str, Any]]:
        """Return the entry keyed by its label, for export.

        The position is never exported and the visibility only when the entry
        is hidden. The current-locale translation of a translated label field
        is implied by the key, so it is left out.
        """
        code = resolve_locale(locale)
        data = super().to_hash(code)
        data.pop(POSITION.wire_key, None)
        if data.get(VISIBLE.wire_key) is True:
            data.pop(VISIBLE.wire_key)

        for name, stored in self.dynamic_attributes.items():
            data[name] = stored.export()

        label_field = self.content_type.label_field if self.content_type is not None else None
        if label_field is not None and label_field.stores_translations:
            translations = data.get(label_field.name)
            if isinstance(translations, dict) and translations:
                translations.pop(code, None)
                if not translations:
                    del data[label_field.name]

        return {self.label_in(code): data}

    def to_params(self, locale: str | None = None) -> dict[str, Any]:
        """Return the core fields sent to the remote API, blanks left out."""
        code = resolve_locale(locale)
        # the slug may be missing in a locale other than the main one
        self.set_slug(code)
        return {
            key: value
            for key, value in self.attributes(code).items()
            if key in PARAMS_KEYS and is_present(value)
        }

    # slug

    def set_slug(self, locale: str | None = None) -> None:
        """Derive the slug from the label and make it unique among siblings."""
        code = resolve_locale(locale)
        slug = self.permalink_in(code)
        if is_blank(slug):
            label = self.label_in(code)
            if is_blank(label):
                return
            slug = str(label)

        slug = to_permalink(slug)
        if not slug:
            return

        if self._slug_already_taken(slug, code):
            unique = self.next_unique_slug(slug, code)
            log_event(
                logger,
                "Slug already taken",
                content_type=self.content_type.slug,
                slug=slug,
                unique_slug=unique,
                locale=code,
            )
            slug = unique

        self.write_attribute(SLUG, slug, code)

    def next_unique_slug(self, slug: str | None = None, locale: str | None = None) -> str:
        """Return ``slug`` with a numeric suffix above every sibling's suffix.

        Any existing ``-<digits>`` suffix is dropped first, so ``paris-2``
        and ``paris`` share the base ``paris``.
        """
        code = resolve_locale(locale)
        if slug is None:
            slug = self.permalink_in(code) or ""
        base = re.sub(r"-\d*$", "", slug)
        pattern = re.compile(rf"{re.escape(base)}-?(\d*)", re.IGNORECASE)

        next_number = 0
        entries = self.content_type.entries if self.content_type is not None else []
        for entry in entries:
            candidate = entry.permalink_in(code)
            if not candidate:
                continue
            match = pattern.fullmatch(candidate)
            if match:
                next_number = max(next_number, int(match.group(1) or 0))

        return f"{base}-{next_number + 1}"

    def _slug_already_taken(self, slug: str, locale: str) -> bool:
        content_type = self.content_type
        if content_type is None:
            return False
        return any(
            entry is not self and entry.permalink_in(locale) == slug
            for entry in content_type.entries
        )
