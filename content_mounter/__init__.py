"""
Content Mounter - typed access to the entries of user-defined content types.

Entries expose the fields declared by their content type through ``get`` and
``set``, resolving translated values for the current locale, and carry a
permalink kept unique among the entries of the same type.

Example:
    >>> from content_mounter import ContentField, ContentType
    >>> cities = ContentType("cities", fields=[ContentField("name", localized=True)])
    >>> cities.build_entry(name="Paris").slug
    'paris'
"""

__all__ = [
    "__version__",
    "ContentEntry",
    "ContentField",
    "ContentType",
    "FileRef",
    "UnknownFieldError",
    "CastError",
    "ContentMounterError",
    "current_locale",
    "use_locale",
    "load_config",
    "bootstrap",
]
__version__ = "0.1.0"

from .bootstrap import bootstrap
from .config import load_config
from .core.values import FileRef
from .errors import CastError, ContentMounterError, UnknownFieldError
from .i18n import current_locale, use_locale
from .models import ContentEntry, ContentField, ContentType
