"""
Base class for the fallback strategies applied while a page is still on the
news aggregator.
"""

import asyncio
from typing import Any, Optional

from gnews_resolver.browser.session import BrowserSession, current_location
from gnews_resolver.config import get_service_logger, get_settings
from gnews_resolver.core.exceptions import EvaluationFailure, NavigationFailure
from gnews_resolver.utils.url_utils import AggregatorMatcher


class FallbackStrategy:
    """
    One heuristic for escaping an aggregator page.

    ``apply`` returns a replacement URL, or ``None`` when the strategy has
    nothing better to offer. ``None`` is the only "unchanged" signal; a
    returned string is always a candidate, even if it equals the input.
    """

    name = "fallback"

    def __init__(self, matcher: Optional[AggregatorMatcher] = None, settings=None):
        self.settings = settings or get_settings()
        self.matcher = matcher or AggregatorMatcher.from_settings(self.settings)
        self.logger = get_service_logger(self.__class__.__name__)

    async def apply(self, session: BrowserSession, current_url: str) -> Optional[str]:
        raise NotImplementedError

    async def _evaluate(self, session: BrowserSession, script: str) -> Any:
        """Evaluate ``script``; a failure reads as "nothing found" (None)."""
        try:
            return await session.evaluate(script)
        except EvaluationFailure as e:
            self.logger.debug("Page evaluation failed", strategy=self.name, error=str(e))
            return None

    async def _follow(self, session: BrowserSession, target: str) -> Optional[str]:
        """
        Navigate the live session to ``target`` and report where it landed.

        Returns None when the navigation itself fails.
        """
        self.logger.info("Following fallback URL", strategy=self.name, target=target)
        try:
            await session.navigate(target)
        except NavigationFailure as e:
            self.logger.warning(
                "Fallback navigation failed",
                strategy=self.name,
                target=target,
                error=str(e),
            )
            return None

        await asyncio.sleep(self.settings.follow_settle_delay)
        landed = await current_location(session, target)

        if self.matcher.is_aggregator(landed):
            self.logger.info(
                "Fallback navigation still on aggregator",
                strategy=self.name,
                landed=landed,
            )
        return landed
