"""
Unit tests for the Playwright-backed browser session.

The Playwright objects are replaced with mocks; no browser is launched.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from gnews_resolver.browser import PlaywrightSession, current_location
from gnews_resolver.core.exceptions import (
    EvaluationFailure,
    NavigationFailure,
    SessionReleaseFailure,
)

from .conftest import GNEWS_URL, FakeSession


@pytest.fixture
def session():
    """Session with mocked page, CDP channel and browser handles."""
    s = PlaywrightSession(headless=True, navigation_timeout=5, evaluation_timeout=0.05)
    s._page = MagicMock()
    s._page.goto = AsyncMock()
    s._page.evaluate = AsyncMock()
    s._cdp = MagicMock()
    s._cdp.send = AsyncMock()
    s._context = MagicMock()
    s._context.close = AsyncMock()
    s._browser = MagicMock()
    s._browser.close = AsyncMock()
    s._playwright = MagicMock()
    s._playwright.stop = AsyncMock()
    return s


class TestPlaywrightSession:
    @pytest.mark.asyncio
    async def test_navigate_waits_for_dom(self, session):
        await session.navigate(GNEWS_URL)
        session._page.goto.assert_awaited_once_with(
            GNEWS_URL, wait_until="domcontentloaded", timeout=5000
        )

    @pytest.mark.asyncio
    async def test_navigate_timeout(self, session):
        session._page.goto.side_effect = PlaywrightTimeoutError("Timeout 5000ms exceeded")
        with pytest.raises(NavigationFailure, match="timed out"):
            await session.navigate(GNEWS_URL)

    @pytest.mark.asyncio
    async def test_navigate_error(self, session):
        session._page.goto.side_effect = PlaywrightError("net::ERR_NAME_NOT_RESOLVED")
        with pytest.raises(NavigationFailure, match="ERR_NAME_NOT_RESOLVED"):
            await session.navigate(GNEWS_URL)

    @pytest.mark.asyncio
    async def test_navigate_before_start(self):
        with pytest.raises(NavigationFailure):
            await PlaywrightSession().navigate(GNEWS_URL)

    @pytest.mark.asyncio
    async def test_navigation_history_entries(self, session):
        session._cdp.send.return_value = {
            "currentIndex": 1,
            "entries": [{"url": GNEWS_URL}, {"url": "https://publisher.example/a"}],
        }
        assert await session.navigation_history() == [GNEWS_URL, "https://publisher.example/a"]
        session._cdp.send.assert_awaited_once_with("Page.getNavigationHistory")

    @pytest.mark.asyncio
    async def test_navigation_history_error(self, session):
        session._cdp.send.side_effect = PlaywrightError("Target closed")
        with pytest.raises(EvaluationFailure):
            await session.navigation_history()

    @pytest.mark.asyncio
    async def test_evaluate_returns_value(self, session):
        session._page.evaluate.return_value = ["https://a.example/"]
        assert await session.evaluate("() => []") == ["https://a.example/"]

    @pytest.mark.asyncio
    async def test_evaluate_error(self, session):
        session._page.evaluate.side_effect = PlaywrightError("Execution context was destroyed")
        with pytest.raises(EvaluationFailure):
            await session.evaluate("() => 1")

    @pytest.mark.asyncio
    async def test_evaluate_timeout(self, session):
        async def hang(script):
            await asyncio.sleep(10)

        session._page.evaluate.side_effect = hang
        with pytest.raises(EvaluationFailure, match="timed out"):
            await session.evaluate("() => 1")

    @pytest.mark.asyncio
    async def test_close_releases_everything(self, session):
        context, browser, pw = session._context, session._browser, session._playwright
        await session.close()

        context.close.assert_awaited_once()
        browser.close.assert_awaited_once()
        pw.stop.assert_awaited_once()
        assert session._page is None

    @pytest.mark.asyncio
    async def test_close_continues_after_failure(self, session):
        session._context.close.side_effect = PlaywrightError("Target closed")
        browser, pw = session._browser, session._playwright

        with pytest.raises(SessionReleaseFailure):
            await session.close()

        browser.close.assert_awaited_once()
        pw.stop.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_unstarted_is_noop(self):
        await PlaywrightSession().close()


class TestCurrentLocation:
    @pytest.mark.asyncio
    async def test_last_entry(self):
        session = FakeSession(history=[GNEWS_URL, "https://publisher.example/a"])
        assert await current_location(session, GNEWS_URL) == "https://publisher.example/a"

    @pytest.mark.asyncio
    async def test_empty_history(self):
        assert await current_location(FakeSession(), GNEWS_URL) == GNEWS_URL

    @pytest.mark.asyncio
    async def test_unreadable_history(self):
        session = FakeSession(history=["https://x.example/"], history_error=True)
        assert await current_location(session, GNEWS_URL) == GNEWS_URL
