"""Resource Explorer query helpers."""

from .query import augment_query, matches_tag_filters, parse_tag_filters

__all__ = ["augment_query", "matches_tag_filters", "parse_tag_filters"]
