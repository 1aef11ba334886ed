"""Field schema of a content type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .content_type import ContentType

RELATIONSHIP_TYPES = ("belongs_to", "has_many", "many_to_many")

FIELD_TYPES = (
    "string",
    "text",
    "select",
    "boolean",
    "category",
    "date",
    "file",
) + RELATIONSHIP_TYPES


@dataclass
class ContentField:
    """Describes one dynamic field of a content type.

    Attributes:
        name: Field name, used as the attribute key on entries
        type: One of FIELD_TYPES
        localized: Whether values are translated per locale
        label: Human-readable field label
        klass: Target content type of a relationship field
        inverse_of: Field of the target type pointing back (has_many only)
        required: Whether the field must be filled in
    """

    name: str
    type: str = "string"
    localized: bool = False
    label: str | None = None
    klass: ContentType | None = None
    inverse_of: str | None = None
    required: bool = False

    def __post_init__(self) -> None:
        self.name = str(self.name)
        self.type = str(self.type)
        if self.type not in FIELD_TYPES:
            supported = ", ".join(FIELD_TYPES)
            raise ValueError(f"Unsupported field type: {self.type}. Supported: {supported}")
        if self.label is None:
            self.label = self.name.replace("_", " ").capitalize()

    @property
    def is_relationship(self) -> bool:
        return self.type in RELATIONSHIP_TYPES

    @property
    def stores_translations(self) -> bool:
        """True when entries keep one value per locale for this field.

        Relationships reference entries, not text, so they are never
        translated even when flagged as localized.
        """
        return self.localized and not self.is_relationship

    def to_hash(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "type": self.type, "label": self.label}
        if self.localized:
            data["localized"] = True
        if self.required:
            data["required"] = True
        if self.klass is not None:
            data["class_name"] = self.klass.slug
        if self.inverse_of:
            data["inverse_of"] = self.inverse_of
        return data
