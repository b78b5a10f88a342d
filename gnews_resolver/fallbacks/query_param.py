from typing import Optional, Tuple
from urllib.parse import parse_qs, urlparse

from gnews_resolver.browser.session import BrowserSession
from gnews_resolver.utils.url_utils import is_absolute_url

from .base import FallbackStrategy

# Checked in this order; the first usable one wins.
REDIRECT_PARAMS = ("continue", "url", "u")


def find_redirect_param(url: str) -> Optional[Tuple[str, str]]:
    """(name, value) of the first redirect parameter holding an absolute URL."""
    try:
        query = parse_qs(urlparse(url).query, keep_blank_values=True)
    except ValueError:
        return None

    for name in REDIRECT_PARAMS:
        values = query.get(name)
        if not values:
            continue
        value = values[0].strip()
        if value and is_absolute_url(value):
            return name, value
    return None


class QueryParamFallback(FallbackStrategy):
    """Follow a destination carried in the URL's ``continue``/``url``/``u`` parameter."""

    name = "query_param"

    async def apply(self, session: BrowserSession, current_url: str) -> Optional[str]:
        found = find_redirect_param(current_url)
        if found is None:
            self.logger.info(
                "No redirect parameter with valid link",
                url=current_url,
                params=list(REDIRECT_PARAMS),
            )
            return None

        name, target = found
        self.logger.info("Found redirect parameter", param=name, target=target)
        return await self._follow(session, target)
