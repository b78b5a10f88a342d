"""URL predicates shared by the orchestrator and every fallback strategy."""

from typing import Optional
from urllib.parse import urlparse

SAFE_SCHEMES = {"http", "https"}


def is_absolute_url(url: Optional[str]) -> bool:
    """True for a non-empty http(s) URL with a network location."""
    if not url or not isinstance(url, str):
        return False
    try:
        parsed = urlparse(url.strip())
        return parsed.scheme.lower() in SAFE_SCHEMES and bool(parsed.netloc)
    except ValueError:
        return False


def url_host(url: str) -> str:
    """Lower-cased network location of ``url`` ('' when it has none)."""
    try:
        return urlparse(url).netloc.lower()
    except ValueError:
        return ""


class AggregatorMatcher:
    """
    Decides whether a URL still belongs to the news aggregator.

    Two filters exist. ``is_aggregator`` matches the news-redirect host only and
    is the continuation signal of the fallback chain. The brand checks are
    looser and exclude every property of the aggregator's brand (search, ads,
    accounts, ...), which is what anchor, JSON-LD and raw-HTML candidates are
    filtered with.
    """

    def __init__(self, host: str = "news.google.com", brand: str = "google."):
        self.host = host.lower()
        self.brand = brand.lower()

    def is_aggregator(self, url: str) -> bool:
        return self.host in (url or "").lower()

    def contains_brand(self, url: str) -> bool:
        return self.brand in (url or "").lower()

    def host_has_brand(self, url: str) -> bool:
        return self.brand in url_host(url)

    @classmethod
    def from_settings(cls, settings) -> "AggregatorMatcher":
        return cls(host=settings.aggregator_host, brand=settings.aggregator_brand)
