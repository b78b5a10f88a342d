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
This module runs the fallback chain against a page that is still on the news aggregator.
"""

from typing import List, Optional, Sequence

from gnews_resolver.browser.session import BrowserSession, current_location
from gnews_resolver.config import get_service_logger, get_settings
from gnews_resolver.fallbacks import FallbackStrategy, build_default_chain
from gnews_resolver.utils.url_utils import AggregatorMatcher, is_absolute_url


class FallbackOrchestrator:
    """
    Applies the fallback strategies in precedence order.

    Each strategy receives the previous result. The chain stops as soon as the
    current URL is off the aggregator; otherwise the last result is returned,
    which may still be the aggregator URL.
    """

    def __init__(
        self,
        strategies: Optional[Sequence[FallbackStrategy]] = None,
        matcher: Optional[AggregatorMatcher] = None,
        settings=None,
    ):
        self.settings = settings or get_settings()
        self.matcher = matcher or AggregatorMatcher.from_settings(self.settings)
        self.strategies = list(
            strategies
            if strategies is not None
            else build_default_chain(matcher=self.matcher, settings=self.settings)
        )
        self.logger = get_service_logger("FallbackOrchestrator")

    async def orchestrate(
        self,
        session: BrowserSession,
        url: str,
        history: Optional[List[str]] = None,
    ) -> str:
        """
        Best destination URL reachable from the session's current page.

        ``history`` may carry an already-read navigation history; when omitted
        it is read from the session.
        """
        if history is None:
            current = await current_location(session, url)
        else:
            current = history[-1] if history else url

        if not is_absolute_url(current):
            current = url

        if not self.matcher.is_aggregator(current):
            self.logger.info("Landed off aggregator", url=url, final_url=current)
            return current

        self.logger.info("Aggregator URL detected", url=url, current=current)

        for strategy in self.strategies:
            try:
                candidate = await strategy.apply(session, current)
            except Exception as e:
                self.logger.error(
                    "Fallback strategy failed",
                    strategy=strategy.name,
                    error=str(e),
                    exc_info=True,
                )
                candidate = None

            if candidate is not None and is_absolute_url(candidate):
                current = candidate

            if not self.matcher.is_aggregator(current):
                self.logger.info(
                    "Fallback resolved URL",
                    strategy=strategy.name,
                    url=url,
                    final_url=current,
                )
                return current

        self.logger.info("Fallback chain exhausted", url=url, final_url=current)
        return current
