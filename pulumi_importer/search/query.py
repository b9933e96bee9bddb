"""Tag filter handling for AWS Resource Explorer queries.

Users pass tag filters as free text, `"env=prod;team=web"`. The filters
are merged into the Resource Explorer query string and, because Resource
Explorer ANDs its filters, applied again as an OR filter on the results.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Tuple

logger = logging.getLogger(__name__)

TagFilter = Tuple[str, str]


def parse_tag_filters(tags: str) -> List[TagFilter]:
    """Parse `"k1=v1;k2=v2"` into trimmed (key, value) pairs.

    Pairs without exactly one `=`, or with a blank key or value, are
    dropped without error.
    """
    if not tags or not tags.strip():
        return []
    filters: List[TagFilter] = []
    for pair in tags.split(";"):
        parts = pair.split("=")
        if len(parts) != 2:
            if pair.strip():
                logger.debug(f"Ignoring malformed tag filter: {pair!r}")
            continue
        key, value = parts[0].strip(), parts[1].strip()
        if not key or not value:
            logger.debug(f"Ignoring tag filter with empty key or value: {pair!r}")
            continue
        filters.append((key, value))
    return filters


def _already_in_query(query: str, key: str, value: str) -> bool:
    return f"tag.{key}={value}" in query or f'tag:{key}="{value}"' in query


def augment_query(query: str, tags: str) -> str:
    """Prepend tag predicates to a Resource Explorer query string.

    Args:
        query: Raw query string as typed by the user
        tags: Semicolon separated `key=value` pairs

    Returns:
        `"<tag predicates> <query>"`, or `query` unchanged when no new
        predicate remains

    Example:
        >>> augment_query("region:us-east-1", "env=prod")
        'tag.env=prod region:us-east-1'
    """
    if not tags or not tags.strip():
        return query
    predicates = [
        f"tag.{key}={value}"
        for key, value in parse_tag_filters(tags)
        if not _already_in_query(query, key, value)
    ]
    if not predicates:
        return query
    return f"{' '.join(predicates)} {query}"


def matches_tag_filters(resource_tags: Mapping[str, str], tags: str) -> bool:
    """True when at least one filter pair matches the resource's tags.

    Filter keys and values are trimmed; the resource's tag value is trimmed
    before comparison. Pairs that do not split into exactly key and value
    never match.
    """
    for pair in tags.split(";"):
        parts = pair.split("=")
        if len(parts) != 2:
            continue
        key, value = parts[0].strip(), parts[1].strip()
        if key in resource_tags and resource_tags[key].strip() == value:
            return True
    return False
