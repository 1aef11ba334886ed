"""Permalink normalization helpers."""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Mapping, Sequence, Set
from typing import Any


def permalink(text: str, separator: str = "-") -> str:
    """Convert text to a URL-safe permalink.

    Accented characters are transliterated to their ASCII base letter, the
    result is lowercased, runs of non-alphanumeric characters collapse into a
    single separator and leading/trailing separators are stripped.

    Args:
        text: The text to normalize
        separator: String placed between words

    Returns:
        The permalink, possibly empty when ``text`` has no alphanumeric characters
    """
    # Drop combining marks so "Café" becomes "cafe"
    ascii_text = unicodedata.normalize("NFKD", str(text)).encode("ascii", "ignore").decode("ascii")
    slug = ascii_text.lower()
    slug = re.sub(r"[^a-z0-9]+", separator, slug)
    if separator:
        slug = slug.strip(separator)
    return slug


def is_blank(value: Any) -> bool:
    """Return True for None, whitespace-only strings and empty containers.

    Booleans and numbers are never blank, so ``False`` and ``0`` count as present.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (Mapping, Sequence, Set)):
        return len(value) == 0
    return False


def is_present(value: Any) -> bool:
    return not is_blank(value)
