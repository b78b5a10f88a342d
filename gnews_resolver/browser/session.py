# ┌───────────────────────────────────────────────────────────────┐
# │  Copyright (c) 2025 Ateet Vatan Bahmani                       │
# │  Project: gnews-resolver – Google News URL Resolver           │
# │  All rights reserved.                                         │
# └───────────────────────────────────────────────────────────────┘
#
# gnews-resolver is a proprietary software system developed and owned by Ateet Vatan Bahmani.
# The source code, documentation, workflows and designs are protected by applicable
# copyright and trademark laws.
#
# Redistribution, modification, commercial use, or publication of any portion of this
# project without explicit written consent is strictly prohibited.
#
# This project is not open-source and is intended solely for internal, research,
# or demonstration use by the author.
#
# Contact: ab@masxai.com

"""
Browser session handles used by the resolver.

A session wraps one browser tab for the duration of a single navigation attempt:
it is started, used for navigation and page inspection, then closed.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from gnews_resolver.config import get_service_logger, get_settings
from gnews_resolver.core.exceptions import (
    EvaluationFailure,
    NavigationFailure,
    SessionReleaseFailure,
)


class BrowserSession(ABC):
    """Capability over one controllable browser tab."""

    async def start(self) -> None:
        """Acquire the underlying browser resources."""

    @abstractmethod
    async def navigate(self, url: str) -> None:
        """Load ``url``; raises NavigationFailure on error or timeout."""

    @abstractmethod
    async def navigation_history(self) -> List[str]:
        """Visited URLs in order, last entry is the current location."""

    @abstractmethod
    async def evaluate(self, script: str) -> Any:
        """Run a page script; raises EvaluationFailure on error or timeout."""

    async def close(self) -> None:
        """Release the browser resources; raises SessionReleaseFailure."""

    async def __aenter__(self) -> "BrowserSession":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


async def current_location(session: BrowserSession, fallback_url: str) -> str:
    """
    Last navigation history entry, or ``fallback_url`` when the history is
    empty or cannot be read.
    """
    try:
        history = await session.navigation_history()
    except EvaluationFailure:
        return fallback_url
    return history[-1] if history else fallback_url


class PlaywrightSession(BrowserSession):
    """
    Headless Chromium tab driven through Playwright.

    Navigation history comes from the Chrome DevTools Protocol
    (``Page.getNavigationHistory``) so that client-side redirects are visible.
    """

    BROWSER_ARGS = [
        "--no-sandbox",
        "--disable-dev-shm-usage",
        "--disable-gpu",
        "--disable-blink-features=AutomationControlled",
    ]

    def __init__(
        self,
        headless: Optional[bool] = None,
        navigation_timeout: Optional[float] = None,
        evaluation_timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        settings = get_settings()
        self.headless = settings.browser_headless if headless is None else headless
        self.navigation_timeout = navigation_timeout or settings.navigation_timeout
        self.evaluation_timeout = evaluation_timeout or settings.evaluation_timeout
        self.user_agent = user_agent or settings.browser_user_agent
        self.logger = get_service_logger("PlaywrightSession")

        self._playwright = None
        self._browser = None
        self._context = None
        self._page = None
        self._cdp = None

    async def start(self) -> None:
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.headless, args=self.BROWSER_ARGS
            )
            self._context = await self._browser.new_context(user_agent=self.user_agent)
            self._page = await self._context.new_page()
            self._cdp = await self._context.new_cdp_session(self._page)
        except PlaywrightError as e:
            raise NavigationFailure(f"Browser launch failed: {e}") from e

    def _require_page(self):
        if self._page is None:
            raise NavigationFailure("Browser session is not started")
        return self._page

    async def navigate(self, url: str) -> None:
        page = self._require_page()
        try:
            await page.goto(
                url,
                wait_until="domcontentloaded",
                timeout=self.navigation_timeout * 1000,
            )
        except PlaywrightTimeoutError as e:
            raise NavigationFailure(
                f"Navigation timed out after {self.navigation_timeout}s", context=url
            ) from e
        except PlaywrightError as e:
            raise NavigationFailure(f"Navigation failed: {e}", context=url) from e

    async def navigation_history(self) -> List[str]:
        if self._cdp is None:
            raise EvaluationFailure("Browser session is not started")
        try:
            history = await asyncio.wait_for(
                self._cdp.send("Page.getNavigationHistory"),
                timeout=self.evaluation_timeout,
            )
        except asyncio.TimeoutError as e:
            raise EvaluationFailure("Navigation history timed out") from e
        except PlaywrightError as e:
            raise EvaluationFailure(f"Navigation history unavailable: {e}") from e

        return [entry.get("url", "") for entry in history.get("entries", [])]

    async def evaluate(self, script: str) -> Any:
        page = self._require_page()
        try:
            return await asyncio.wait_for(
                page.evaluate(script), timeout=self.evaluation_timeout
            )
        except asyncio.TimeoutError as e:
            raise EvaluationFailure(
                f"Script evaluation timed out after {self.evaluation_timeout}s"
            ) from e
        except PlaywrightError as e:
            raise EvaluationFailure(f"Script evaluation failed: {e}") from e

    async def close(self) -> None:
        errors = []
        for name, resource in (
            ("context", self._context),
            ("browser", self._browser),
        ):
            if resource is None:
                continue
            try:
                await resource.close()
            except PlaywrightError as e:
                errors.append(f"{name}: {e}")

        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except PlaywrightError as e:
                errors.append(f"playwright: {e}")

        self._playwright = self._browser = self._context = None
        self._page = self._cdp = None

        if errors:
            raise SessionReleaseFailure(
                "Browser session did not close cleanly", context=errors
            )
