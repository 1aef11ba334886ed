"""
Core value handling.

This package contains permalink normalization and the value types
stored in and returned by content entries.
"""

from .permalink import is_blank, is_present, permalink
from .values import FileRef, Localized, Scalar, StoredValue, cast_date, stringify_keys

__all__ = [
    "permalink",
    "is_blank",
    "is_present",
    "FileRef",
    "Localized",
    "Scalar",
    "StoredValue",
    "cast_date",
    "stringify_keys",
]
