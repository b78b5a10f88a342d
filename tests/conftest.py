"""
Pytest configuration and fixtures for the Google News resolver tests.

Provides a scripted browser session so that no test launches a real browser.
"""

from typing import Any, Dict, List, Optional

import pytest

from gnews_resolver.browser import scripts
from gnews_resolver.browser.session import BrowserSession
from gnews_resolver.config.settings import Settings
from gnews_resolver.core.exceptions import EvaluationFailure, NavigationFailure
from gnews_resolver.utils.url_utils import AggregatorMatcher


GNEWS_URL = "https://news.google.com/rss/articles/ABC"


class FakeSession(BrowserSession):
    """
    Scripted stand-in for a browser tab.

    ``page`` maps page scripts to the value they return (an Exception instance
    is raised instead). ``redirects`` maps a navigated URL to where the tab
    ends up. Navigations listed in ``failing`` raise NavigationFailure.
    """

    def __init__(
        self,
        page: Optional[Dict[str, Any]] = None,
        redirects: Optional[Dict[str, str]] = None,
        history: Optional[List[str]] = None,
        failing: Optional[set] = None,
        history_error: bool = False,
        close_error: Optional[Exception] = None,
    ):
        self.page = dict(page or {})
        self.redirects = dict(redirects or {})
        self.history = list(history or [])
        self.failing = set(failing or ())
        self.history_error = history_error
        self.close_error = close_error

        self.started = False
        self.closed = False
        self.navigations: List[str] = []
        self.evaluated: List[str] = []

    async def start(self) -> None:
        self.started = True

    async def navigate(self, url: str) -> None:
        self.navigations.append(url)
        if url in self.failing:
            raise NavigationFailure(f"net::ERR_TIMED_OUT at {url}")
        self.history.append(self.redirects.get(url, url))

    async def navigation_history(self) -> List[str]:
        if self.history_error:
            raise EvaluationFailure("Page.getNavigationHistory failed")
        return list(self.history)

    async def evaluate(self, script: str) -> Any:
        self.evaluated.append(script)
        value = self.page.get(script)
        if isinstance(value, Exception):
            raise value
        return value

    async def close(self) -> None:
        self.closed = True
        if self.close_error is not None:
            raise self.close_error


def aggregator_page(
    canonical: str = "",
    refresh: str = "",
    anchors: Optional[List[str]] = None,
    jsonld: Optional[List[str]] = None,
    html: str = "<html><body></body></html>",
) -> Dict[str, Any]:
    """Script results of an aggregator interstitial page."""
    return {
        scripts.CANONICAL_LINK: canonical,
        scripts.META_REFRESH: refresh,
        scripts.ANCHOR_HREFS: anchors or [],
        scripts.JSONLD_BLOCKS: jsonld or [],
        scripts.OUTER_HTML: html,
    }


@pytest.fixture
def test_settings():
    """Settings with zero delays."""
    return Settings(
        settle_delay=0,
        follow_settle_delay=0,
        retry_backoff=0,
        max_attempts=3,
        navigation_timeout=5,
        evaluation_timeout=5,
        request_timeout=5,
        batch_size=2,
        max_workers=2,
        collect_delay=0,
        log_level="DEBUG",
    )


@pytest.fixture
def matcher():
    return AggregatorMatcher(host="news.google.com", brand="google.")


@pytest.fixture
def gnews_url():
    return GNEWS_URL


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")
