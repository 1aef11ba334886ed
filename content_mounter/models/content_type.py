"""In-memory content type: a field schema plus the entries built from it."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from .content_field import ContentField

if TYPE_CHECKING:
    from .content_entry import ContentEntry

logger = logging.getLogger(__name__)


class ContentType:
    """Schema shared by a collection of content entries.

    Lookups over the entries never raise on a miss: they return None or an
    empty list.
    """

    def __init__(
        self,
        slug: str,
        name: str | None = None,
        fields: Iterable[ContentField] = (),
        label_field_name: str | None = None,
    ):
        self.slug = slug
        self.name = name or slug
        self.fields: list[ContentField] = list(fields)
        self._label_field_name = label_field_name
        self.entries: list[ContentEntry] = []

    def __repr__(self) -> str:
        return f"ContentType(slug={self.slug!r}, fields={[f.name for f in self.fields]!r})"

    def add_field(self, field: ContentField) -> ContentField:
        self.fields.append(field)
        return field

    def find_field(self, name: str) -> ContentField | None:
        """Return the field called ``name``, ignoring one trailing ``=``."""
        name = str(name)
        if name.endswith("="):
            name = name[:-1]
        for field in self.fields:
            if field.name == name:
                return field
        return None

    @property
    def label_field_name(self) -> str | None:
        """Name of the field identifying entries, the first field by default."""
        if self._label_field_name:
            return self._label_field_name
        if not self.fields:
            return None
        return self.fields[0].name

    @label_field_name.setter
    def label_field_name(self, name: str | None) -> None:
        self._label_field_name = name

    @property
    def label_field(self) -> ContentField | None:
        name = self.label_field_name
        if name is None:
            return None
        return self.find_field(name)

    def find_entry(self, identifier: Any, locale: str | None = None) -> ContentEntry | None:
        """Return the first entry identified by ``identifier``.

        An entry matches on any translation of its permalink, or on its
        label in ``locale`` (the current locale by default).
        """
        if identifier is None:
            return None
        for entry in self.entries:
            if _identified_by(entry, [identifier], locale):
                return entry
        return None

    def find_entries_by(
        self, name: str, values: Any, locale: str | None = None
    ) -> list[ContentEntry]:
        """Return entries whose raw value of field ``name`` is one of ``values``."""
        if self.find_field(name) is None:
            return []
        candidates = _as_list(values)
        return [entry for entry in self.entries if entry.raw(name, locale) in candidates]

    def find_entries_among(
        self, identifiers: Any, locale: str | None = None
    ) -> list[ContentEntry]:
        """Return entries identified by one of ``identifiers``, in collection order."""
        candidates = _as_list(identifiers)
        if not candidates:
            return []
        return [entry for entry in self.entries if _identified_by(entry, candidates, locale)]

    def build_entry(self, **attributes: Any) -> ContentEntry:
        """Build an entry of this type and append it to the entries.

        The slug is resolved before the entry joins the collection, so it is
        checked against the entries built before it.
        """
        from .content_entry import ContentEntry

        entry = ContentEntry(content_type=self, **attributes)
        self.entries.append(entry)
        logger.debug(
            "Built entry",
            extra={"content_type": self.slug, "slug": entry.slug, "entries": len(self.entries)},
        )
        return entry

    def build_entries(self, rows: Iterable[Mapping[str, Any]]) -> list[ContentEntry]:
        """Build entries in declaration order."""
        return [self.build_entry(**dict(row)) for row in rows]

    def to_hash(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "slug": self.slug}
        if self.label_field_name:
            data["label_field_name"] = self.label_field_name
        data["fields"] = [field.to_hash() for field in self.fields]
        return data


def _identified_by(entry: ContentEntry, candidates: list[Any], locale: str | None) -> bool:
    # Relationship values are shared by every locale, so any slug translation counts
    if any(slug in candidates for slug in entry.permalinks()):
        return True
    return entry.label_in(locale) in candidates


def _as_list(values: Any) -> list[Any]:
    if values is None:
        return []
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        return [values]
    return list(values)
