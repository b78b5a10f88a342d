"""
Collects Google News article URLs for a keyword from the RSS search feed.

The search is split into one-day ``after:``/``before:`` windows because a
single feed returns at most ~100 items. Windows whose feed fails or is empty
are skipped; the rest are written to one CSV whose ``item_link`` column is the
input of the batch runner.
"""

import asyncio
import csv
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple
from urllib.parse import urlencode

import feedparser
import httpx

from gnews_resolver.config import get_service_logger, get_settings
from gnews_resolver.core.exceptions import FetchError

FEED_FIELDS = [
    "item_title",
    "item_link",
    "item_pub_date",
    "item_source",
    "item_description",
    "window_start",
    "window_end",
]


def date_windows(start: date, end: date) -> Iterator[Tuple[date, date]]:
    """
    Consecutive one-day windows covering ``start`` up to ``end`` (exclusive).

    >>> list(date_windows(date(2022, 8, 1), date(2022, 8, 3)))
    [(datetime.date(2022, 8, 1), datetime.date(2022, 8, 2)), (datetime.date(2022, 8, 2), datetime.date(2022, 8, 3))]
    """
    day = start
    while day < end:
        yield day, day + timedelta(days=1)
        day += timedelta(days=1)


def build_feed_url(keyword: str, start: date, end: date, settings=None) -> str:
    """RSS search URL for ``keyword`` published after ``start`` and before ``end``."""
    settings = settings or get_settings()
    country = settings.collect_country
    language = settings.collect_language
    query = urlencode(
        {
            "q": f"{keyword} after:{start.isoformat()} before:{end.isoformat()}",
            "hl": language,
            "gl": country,
            "ceid": f"{country}:{language}",
        }
    )
    return f"{settings.collect_feed_url}?{query}"


def _entry_row(entry: Any, start: date, end: date) -> Dict[str, str]:
    source = entry.get("source") or {}
    return {
        "item_title": str(entry.get("title") or "").strip(),
        "item_link": str(entry.get("link") or "").strip(),
        "item_pub_date": str(entry.get("published") or ""),
        "item_source": str(source.get("title") or ""),
        "item_description": str(entry.get("summary") or ""),
        "window_start": start.isoformat(),
        "window_end": end.isoformat(),
    }


class RssCollector:
    """Downloads and flattens the RSS search feed, one date window at a time."""

    def __init__(self, settings=None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings or get_settings()
        self.transport = transport
        self.logger = get_service_logger("RssCollector")

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers={"User-Agent": self.settings.fetch_user_agent},
            timeout=self.settings.request_timeout,
            follow_redirects=True,
            transport=self.transport,
        )

    async def fetch_feed(
        self, client: httpx.AsyncClient, url: str, start: date, end: date
    ) -> List[Dict[str, str]]:
        """Rows of one feed; raises FetchError when the feed cannot be read."""
        try:
            response = await client.get(url)
        except httpx.TimeoutException as e:
            raise FetchError(f"Timeout for feed {url}") from e
        except httpx.HTTPError as e:
            raise FetchError(f"Connection error for feed {url}: {e}") from e

        if response.status_code != 200:
            raise FetchError(f"Non-200 status {response.status_code}", context=url)

        feed = feedparser.parse(response.content)
        if feed.bozo and not feed.entries:
            raise FetchError(f"Malformed feed: {feed.get('bozo_exception')}", context=url)

        rows = [_entry_row(entry, start, end) for entry in feed.entries]
        return [row for row in rows if row["item_link"]]

    async def collect(
        self,
        keyword: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[Dict[str, str]]:
        keyword = keyword or self.settings.collect_keyword
        start = start or self.settings.collect_start_date
        end = end or self.settings.collect_end_date

        rows: List[Dict[str, str]] = []
        async with self._client() as client:
            for window_start, window_end in date_windows(start, end):
                url = build_feed_url(keyword, window_start, window_end, self.settings)
                try:
                    found = await self.fetch_feed(client, url, window_start, window_end)
                except FetchError as e:
                    found = None
                    self.logger.warning(
                        "Failed to fetch feed",
                        window_start=str(window_start),
                        window_end=str(window_end),
                        error=str(e),
                    )

                await asyncio.sleep(self.settings.collect_delay)

                if found is None:
                    continue
                if not found:
                    self.logger.info(
                        "No results for date range",
                        window_start=str(window_start),
                        window_end=str(window_end),
                    )
                    continue

                self.logger.info(
                    "Feed collected",
                    window_start=str(window_start),
                    items=len(found),
                )
                rows.extend(found)

        self.logger.info("Collection finished", keyword=keyword, total=len(rows))
        return rows


def write_feed_csv(rows: List[Dict[str, str]], path: Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=FEED_FIELDS)
        writer.writeheader()
        writer.writerows(rows)
