"""
Deduplication of equivalent URLs.

URLs that compare equal (see ordering.py) are collapsed into one record whose
query string is the union of their parameters.
"""

import logging
from typing import Iterable
from urllib.parse import quote, urlencode

from url_fields.normalization import NormalizedURL

from .ordering import compare_keys, equivalence_key, sort_urls

logger = logging.getLogger(__name__)

STRATEGIES = ("adjacent", "cluster")


def merge_queries(first: NormalizedURL, later: NormalizedURL) -> str:
    """
    Union the query parameters of two URLs.

    Keys are unique (later value wins) and emitted in sorted order.

    Returns:
        Encoded query string ('' if neither URL has parameters)
    """
    pairs = dict(first.query_pairs())
    pairs.update(later.query_pairs())
    return urlencode(sorted(pairs.items()), quote_via=quote)


def deduplicate(
    urls: Iterable[NormalizedURL], strategy: str = "adjacent"
) -> list[NormalizedURL]:
    """
    Collapse equivalent URLs and merge their query parameters.

    Args:
        urls: Normalized URLs
        strategy: 'adjacent' folds each URL into the previous kept one after
            sorting, so only neighbours are merged; 'cluster' merges the
            transitive closure of equivalent URLs

    Returns:
        Merged URLs in sorted order
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown dedup strategy: {strategy}")

    ordered = sort_urls(urls)
    if strategy == "cluster":
        result = _dedup_clusters(ordered)
    else:
        result = _dedup_adjacent(ordered)

    logger.info(
        "Dedup (%s): %d URLs -> %d records", strategy, len(ordered), len(result)
    )
    return result


def _dedup_adjacent(ordered: list[NormalizedURL]) -> list[NormalizedURL]:
    kept: list[NormalizedURL] = []
    last_key = None

    for url in ordered:
        key = equivalence_key(url)
        if kept and compare_keys(last_key, key) == 0:
            kept[-1] = kept[-1].with_query(merge_queries(kept[-1], url))
            continue
        kept.append(url)
        last_key = key

    return kept


def _dedup_clusters(ordered: list[NormalizedURL]) -> list[NormalizedURL]:
    keys = [equivalence_key(url) for url in ordered]
    parent = list(range(len(ordered)))

    def find(i: int) -> int:
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    # Only URLs with the same scheme and authority can be equal
    groups: dict[tuple[str, str], list[int]] = {}
    for i, key in enumerate(keys):
        groups.setdefault((key.scheme, key.authority), []).append(i)

    for members in groups.values():
        for pos, i in enumerate(members):
            for j in members[pos + 1 :]:
                if compare_keys(keys[i], keys[j]) == 0:
                    ri, rj = find(i), find(j)
                    if ri != rj:
                        # Keep the earliest sorted member as representative
                        parent[max(ri, rj)] = min(ri, rj)

    merged: dict[int, NormalizedURL] = {}
    for i, url in enumerate(ordered):
        root = find(i)
        if root in merged:
            merged[root] = merged[root].with_query(merge_queries(merged[root], url))
        else:
            merged[root] = url

    return [merged[root] for root in sorted(merged)]
