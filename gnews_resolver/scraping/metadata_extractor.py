"""
Publication date, body text and domain extraction from article HTML.
"""

import json
from typing import Any, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup


class MetadataExtractor:
    """
    Extracts article metadata from parsed HTML with BeautifulSoup.
    """

    # JSON-LD wrappers some publishers nest the article object under
    NESTED_ARTICLE_KEYS = ("article", "newsArticle")

    @staticmethod
    def parse(html: str) -> BeautifulSoup:
        return BeautifulSoup(html, "html.parser")

    def extract_publication_date(self, soup: BeautifulSoup) -> Optional[str]:
        """
        Publication date in the page's own format.

        Checked in order: ``article:published_time`` meta, ``date``/``pubdate``
        meta, the first ``<time datetime>``, then JSON-LD ``datePublished``.
        """
        for selector in (
            "meta[property='article:published_time']",
            "meta[name='date'], meta[name='pubdate']",
        ):
            meta = soup.select_one(selector)
            content = (meta.get("content") or "").strip() if meta else ""
            if content:
                return content

        time_tag = soup.find("time")
        if time_tag is not None:
            stamp = (time_tag.get("datetime") or "").strip()
            if stamp:
                return stamp

        for script in soup.select("script[type='application/ld+json']"):
            try:
                data = json.loads(script.get_text(strip=True))
            except ValueError:
                continue
            found = self._jsonld_date(data)
            if found:
                return found

        return None

    def _jsonld_date(self, data: Any) -> Optional[str]:
        if isinstance(data, list):
            for item in data:
                found = self._jsonld_date(item)
                if found:
                    return found
            return None

        if not isinstance(data, dict):
            return None

        published = data.get("datePublished")
        if isinstance(published, list):
            published = published[0] if published else None
        if isinstance(published, str) and published.strip():
            return published.strip()

        for key in self.NESTED_ARTICLE_KEYS:
            nested = data.get(key)
            if isinstance(nested, dict) and nested.get("datePublished"):
                return str(nested["datePublished"])

        return None

    def extract_full_text(self, soup: BeautifulSoup) -> Optional[str]:
        """Paragraphs inside ``<article>``, else every paragraph on the page."""
        paragraphs = [p.get_text().strip() for p in soup.select("article p")]
        if not paragraphs:
            paragraphs = [p.get_text().strip() for p in soup.find_all("p")]

        if not paragraphs:
            return None
        return "\n\n".join(paragraphs)

    @staticmethod
    def extract_domain(url: str) -> Optional[str]:
        try:
            host = urlparse(url).hostname
        except ValueError:
            return None
        return host or None
