"""Ambient current-locale context.

The locale used to read and write localized values is held in a ContextVar,
so it is scoped to the current thread or task. Accessors also accept an
explicit ``locale`` argument which always wins over the context.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

DEFAULT_LOCALE = "en"

_DEFAULT_LOCALE = DEFAULT_LOCALE
_CURRENT_LOCALE: ContextVar[str | None] = ContextVar("content_mounter_locale", default=None)


def normalize_locale(locale: object) -> str:
    """Return the canonical string form of a locale code."""
    return str(locale).strip()


def set_default_locale(locale: str) -> None:
    """Set the process-wide locale used when no locale is scoped."""
    global _DEFAULT_LOCALE  # noqa: PLW0603
    _DEFAULT_LOCALE = normalize_locale(locale)


def default_locale() -> str:
    return _DEFAULT_LOCALE


def current_locale() -> str:
    """Return the locale scoped by ``use_locale`` or the default locale."""
    locale = _CURRENT_LOCALE.get()
    if locale is None:
        return _DEFAULT_LOCALE
    return locale


def resolve_locale(locale: object | None = None) -> str:
    """Return ``locale`` normalized, or the current locale when it is None."""
    if locale is None:
        return current_locale()
    return normalize_locale(locale)


@contextmanager
def use_locale(locale: str) -> Iterator[str]:
    """Scope ``locale`` as the current locale for the duration of the block."""
    normalized = normalize_locale(locale)
    token = _CURRENT_LOCALE.set(normalized)
    try:
        yield normalized
    finally:
        _CURRENT_LOCALE.reset(token)
