from typing import Optional

from gnews_resolver.browser import scripts
from gnews_resolver.browser.session import BrowserSession
from gnews_resolver.utils.url_utils import is_absolute_url

from .base import FallbackStrategy


class AnchorScanFallback(FallbackStrategy):
    """First hyperlink on the page whose host is outside the aggregator's brand."""

    name = "anchor_scan"

    async def apply(self, session: BrowserSession, current_url: str) -> Optional[str]:
        links = await self._evaluate(session, scripts.ANCHOR_HREFS)
        if not isinstance(links, list):
            return None

        for link in links:
            if not isinstance(link, str) or not is_absolute_url(link):
                continue
            if self.matcher.host_has_brand(link):
                continue
            self.logger.info("External link found", candidate=link)
            return link

        self.logger.info("No external anchors found", url=current_url, scanned=len(links))
        return None
