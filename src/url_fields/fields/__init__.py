"""
Field accessors.

Named views (scheme, domain, path, ...) over a normalized URL.
"""

from .accessors import ACCESSORS, FIELD_ALIASES, MULTI_VALUE_FIELDS, URLFields
from .models import URLRecord

__all__ = [
    "URLFields",
    "ACCESSORS",
    "FIELD_ALIASES",
    "MULTI_VALUE_FIELDS",
    "URLRecord",
]
