"""
URL equivalence and deduplication.

Orders URLs with a tolerance for one differing path segment and merges the
query parameters of equivalent URLs.
"""

from .merger import STRATEGIES, deduplicate, merge_queries
from .ordering import (
    EquivalenceKey,
    compare_keys,
    compare_urls,
    equivalence_key,
    is_volatile_segment,
    sort_urls,
)

__all__ = [
    "EquivalenceKey",
    "equivalence_key",
    "is_volatile_segment",
    "compare_keys",
    "compare_urls",
    "sort_urls",
    "merge_queries",
    "deduplicate",
    "STRATEGIES",
]
