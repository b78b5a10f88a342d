import re
from typing import Optional

from gnews_resolver.browser import scripts
from gnews_resolver.browser.session import BrowserSession
from gnews_resolver.utils.url_utils import is_absolute_url

from .base import FallbackStrategy

# content="0; url=https://publisher.example/story" -> first url= value up to ';'
REFRESH_URL_RE = re.compile(r"url\s*=\s*['\"]?([^;'\"]*)", re.IGNORECASE)


def parse_refresh_url(content: str) -> Optional[str]:
    """Target of a meta refresh ``content`` attribute, or None."""
    match = REFRESH_URL_RE.search(content or "")
    if not match:
        return None
    target = match.group(1).strip()
    return target or None


class MetaRefreshFallback(FallbackStrategy):
    """Follow a ``<meta http-equiv="refresh">`` redirect in the same session."""

    name = "meta_refresh"

    async def apply(self, session: BrowserSession, current_url: str) -> Optional[str]:
        content = await self._evaluate(session, scripts.META_REFRESH)
        if not content or not isinstance(content, str):
            self.logger.info("No meta refresh found", url=current_url)
            return None

        self.logger.info("Found meta refresh", content=content)
        target = parse_refresh_url(content)
        if not is_absolute_url(target):
            self.logger.info("Meta refresh has no absolute URL", content=content)
            return None

        # Returned even when still on the aggregator; the orchestrator decides.
        return await self._follow(session, target)
