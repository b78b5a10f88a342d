"""Fallback strategies for escaping aggregator pages."""
from .base import FallbackStrategy
from .canonical import CanonicalLinkFallback
from .meta_refresh import MetaRefreshFallback, parse_refresh_url
from .anchor_scan import AnchorScanFallback
from .query_param import QueryParamFallback, find_redirect_param, REDIRECT_PARAMS
from .jsonld import JsonLdFallback, parse_jsonld_block
from .html_regex import HtmlRegexFallback, external_url_pattern

# Precedence order of the fallback chain.
DEFAULT_CHAIN = (
    CanonicalLinkFallback,
    MetaRefreshFallback,
    AnchorScanFallback,
    QueryParamFallback,
    JsonLdFallback,
    HtmlRegexFallback,
)


def build_default_chain(matcher=None, settings=None):
    """Instantiate the six strategies in precedence order."""
    return [cls(matcher=matcher, settings=settings) for cls in DEFAULT_CHAIN]


__all__ = [
    "FallbackStrategy",
    "CanonicalLinkFallback",
    "MetaRefreshFallback",
    "AnchorScanFallback",
    "QueryParamFallback",
    "JsonLdFallback",
    "HtmlRegexFallback",
    "DEFAULT_CHAIN",
    "build_default_chain",
    "parse_refresh_url",
    "find_redirect_param",
    "REDIRECT_PARAMS",
    "parse_jsonld_block",
    "external_url_pattern",
]
