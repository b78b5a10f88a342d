"""Utilities module for the Google News resolver."""

from .url_utils import AggregatorMatcher, is_absolute_url, url_host
from .jsonld_scanner import find_url_fields, MAX_DEPTH

__all__ = [
    "AggregatorMatcher",
    "is_absolute_url",
    "url_host",
    "find_url_fields",
    "MAX_DEPTH",
]
