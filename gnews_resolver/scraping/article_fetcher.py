"""
Article page downloader for resolved publisher URLs.

Uses httpx with a browser-like user agent and rejects responses that cannot
carry an article: images/icons, non-200 statuses, non-HTML content types and
blank pages.
"""

import re
from typing import Optional

import httpx

from gnews_resolver.config import get_service_logger, get_settings
from gnews_resolver.core.exceptions import FetchError


logger = get_service_logger(__name__)

NON_HTML_EXTENSION_RE = re.compile(r"\.(ico|jpg|jpeg|png|gif)$", re.IGNORECASE)


class ArticleFetcher:
    """Downloads the HTML of a publisher page."""

    def __init__(self, settings=None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings or get_settings()
        self.timeout = self.settings.request_timeout
        self.min_html_length = self.settings.min_html_length
        self.headers = {"User-Agent": self.settings.fetch_user_agent}
        self._transport = transport

    @staticmethod
    def is_non_html_resource(url: str) -> bool:
        return bool(NON_HTML_EXTENSION_RE.search(url or ""))

    async def fetch_html(self, url: str) -> str:
        """
        Download ``url`` and return its HTML text.

        Raises:
            FetchError: If the URL is not an HTML page or cannot be downloaded
        """
        if self.is_non_html_resource(url):
            raise FetchError(f"Skipping non-HTML resource: {url}", context=url)

        try:
            async with httpx.AsyncClient(
                headers=self.headers,
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except httpx.TimeoutException as e:
            raise FetchError(f"Timeout for URL: {url}", context=url) from e
        except httpx.HTTPError as e:
            raise FetchError(f"Connection error for URL: {url}: {e}", context=url) from e

        if response.status_code != 200:
            raise FetchError(
                f"Non-200 status {response.status_code}: {url}", context=url
            )

        content_type = response.headers.get("content-type", "")
        if "text/html" not in content_type.lower():
            raise FetchError(
                f"Non-HTML or missing content type ({content_type or 'none'}): {url}",
                context=url,
            )

        html = response.text
        if len(html.strip()) < self.min_html_length:
            raise FetchError(
                f"Blank or near-blank page (possible authentication requirement): {url}",
                context=url,
            )

        logger.debug("Fetched article HTML", url=url, length=len(html))
        return html
