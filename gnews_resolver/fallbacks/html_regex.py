import re
from typing import Optional, Pattern

from gnews_resolver.browser import scripts
from gnews_resolver.browser.session import BrowserSession

from .base import FallbackStrategy


def external_url_pattern(brand: str) -> Pattern:
    """
    Absolute http(s) URL whose host does not contain ``brand``, ending before
    the first quote, angle bracket or whitespace.
    """
    return re.compile(
        r"https?://(?![^/?#\s\"'<>]*" + re.escape(brand) + r")[^\s\"'<>]+?(?=[\s\"'<>])",
        re.IGNORECASE,
    )


class HtmlRegexFallback(FallbackStrategy):
    """Last resort: first external absolute URL anywhere in the serialized page."""

    name = "html_regex"

    def __init__(self, matcher=None, settings=None):
        super().__init__(matcher=matcher, settings=settings)
        self.pattern = external_url_pattern(self.matcher.brand)

    def first_external_url(self, html: str) -> Optional[str]:
        match = self.pattern.search(html or "")
        return match.group(0) if match else None

    async def apply(self, session: BrowserSession, current_url: str) -> Optional[str]:
        html = await self._evaluate(session, scripts.OUTER_HTML)
        if not html or not isinstance(html, str):
            return None

        found = self.first_external_url(html)
        if found is None:
            self.logger.info("No external link found in HTML", url=current_url)
            return None

        self.logger.info("Found external link in HTML", candidate=found)
        return found
