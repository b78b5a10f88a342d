"""Google News RSS collection: builds the input CSV for the batch runner."""
from .rss_collector import (
    FEED_FIELDS,
    RssCollector,
    build_feed_url,
    date_windows,
    write_feed_csv,
)

__all__ = [
    "FEED_FIELDS",
    "RssCollector",
    "build_feed_url",
    "date_windows",
    "write_feed_csv",
]
