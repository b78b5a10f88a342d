from typing import Optional

from gnews_resolver.browser import scripts
from gnews_resolver.browser.session import BrowserSession
from gnews_resolver.utils.url_utils import is_absolute_url

from .base import FallbackStrategy


class CanonicalLinkFallback(FallbackStrategy):
    """Use the page's ``<link rel="canonical">`` when it points off the aggregator."""

    name = "canonical"

    async def apply(self, session: BrowserSession, current_url: str) -> Optional[str]:
        canonical = await self._evaluate(session, scripts.CANONICAL_LINK)

        if not canonical or not isinstance(canonical, str):
            self.logger.info("No canonical link found", url=current_url)
            return None

        if self.matcher.is_aggregator(canonical):
            self.logger.info("Canonical link is the aggregator", canonical=canonical)
            return None

        if not is_absolute_url(canonical):
            self.logger.info("Canonical link is not absolute", canonical=canonical)
            return None

        self.logger.info("Found canonical link", candidate=canonical)
        return canonical
