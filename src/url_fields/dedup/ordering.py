"""
Fuzzy ordering of normalized URLs.

Two URLs compare equal when they share scheme and authority and their paths
differ in at most one segment once all-numeric segments (IDs, page numbers)
are ignored. Otherwise they order by scheme, authority, number of
significant segments and finally the first differing segment.

The relation is not transitive: /a/b ~ /a/c and /a/c ~ /x/c, but /a/b and
/x/c differ in two positions.
"""

from functools import cmp_to_key
from typing import Iterable, NamedTuple, Optional

from url_fields.normalization import NormalizedURL


class EquivalenceKey(NamedTuple):
    """Comparison key of a URL."""

    scheme: str
    authority: str
    segments: Optional[tuple[str, ...]]


def is_volatile_segment(segment: str) -> bool:
    """True for segments made only of digits (including the empty segment)."""
    return all(ch.isnumeric() for ch in segment)


def equivalence_key(url: NormalizedURL) -> EquivalenceKey:
    """Build the comparison key of a URL."""
    segments = url.path_segments()
    if segments is not None:
        segments = tuple(s for s in segments if not is_volatile_segment(s))
    return EquivalenceKey(url.scheme, url.authority, segments)


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def compare_segments(
    left: Optional[tuple[str, ...]], right: Optional[tuple[str, ...]]
) -> int:
    """
    Compare significant path segments.

    Returns:
        0 if equal or differing in a single position, otherwise -1/1 by
        segment count, then by the first differing segment
    """
    if left is None or right is None:
        # Unrooted paths sort before rooted ones
        return _cmp(left is not None, right is not None)

    if len(left) != len(right):
        return _cmp(len(left), len(right))

    diff = 0
    first = 0
    for lseg, rseg in zip(left, right):
        if lseg != rseg:
            diff += 1
            if diff == 1:
                first = _cmp(lseg, rseg)
            else:
                return first

    return 0


def compare_keys(left: EquivalenceKey, right: EquivalenceKey) -> int:
    """Compare two equivalence keys (-1, 0, 1)."""
    order = _cmp(left.scheme, right.scheme)
    if order:
        return order

    order = _cmp(left.authority, right.authority)
    if order:
        return order

    return compare_segments(left.segments, right.segments)


def compare_urls(left: NormalizedURL, right: NormalizedURL) -> int:
    """Compare two URLs (-1, 0, 1); 0 means 'the same page'."""
    return compare_keys(equivalence_key(left), equivalence_key(right))


def sort_urls(urls: Iterable[NormalizedURL]) -> list[NormalizedURL]:
    """Stable sort by compare_urls."""
    keyed = [(equivalence_key(url), url) for url in urls]
    keyed.sort(key=cmp_to_key(lambda a, b: compare_keys(a[0], b[0])))
    return [url for _, url in keyed]
