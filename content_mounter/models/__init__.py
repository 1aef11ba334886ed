"""
Content models.

This package contains the attribute framework, the content type schema
and the content entries built from it.
"""

from .base import Attribute, Base
from .content_entry import ContentEntry
from .content_field import FIELD_TYPES, RELATIONSHIP_TYPES, ContentField
from .content_type import ContentType

__all__ = [
    "Attribute",
    "Base",
    "ContentEntry",
    "ContentField",
    "ContentType",
    "FIELD_TYPES",
    "RELATIONSHIP_TYPES",
]
