"""
Collection entry point: search the Google News RSS feed for a keyword over a
date range and write the found article URLs to one CSV for run_batch.py.
"""

import argparse
import asyncio
import sys
from datetime import date
from pathlib import Path

from gnews_resolver.collect import RssCollector, write_feed_csv
from gnews_resolver.config import get_service_logger, get_settings, setup_logging


def parse_args(argv=None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--keyword", default=settings.collect_keyword)
    parser.add_argument(
        "--start",
        type=date.fromisoformat,
        default=settings.collect_start_date,
        help="First day searched (YYYY-MM-DD)",
    )
    parser.add_argument(
        "--end",
        type=date.fromisoformat,
        default=settings.collect_end_date,
        help="Day after the last day searched (YYYY-MM-DD)",
    )
    parser.add_argument("--delay", type=float, default=settings.collect_delay)
    parser.add_argument("--output", default=settings.collect_output)
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging()
    logger = get_service_logger(__name__)

    settings = get_settings().model_copy(update={"collect_delay": args.delay})
    collector = RssCollector(settings=settings)
    rows = asyncio.run(collector.collect(keyword=args.keyword, start=args.start, end=args.end))

    if not rows:
        logger.warning("No data collected", keyword=args.keyword)
        return 1

    write_feed_csv(rows, Path(args.output))
    logger.info("Collected URLs written", path=args.output, total=len(rows))
    return 0


if __name__ == "__main__":
    sys.exit(main())
