#!/usr/bin/env python3
"""
Batch entry point: resolve every Google News URL in a CSV export and write
one result CSV per batch.
"""

import argparse
import asyncio
import sys

from gnews_resolver.config import get_service_logger, get_settings, setup_logging
from gnews_resolver.pipeline import BatchProcessor, load_urls


def parse_args(argv=None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("input_csv", help="CSV file with Google News URLs")
    parser.add_argument(
        "--column", default="item_link", help="Column holding the URLs (default: item_link)"
    )
    parser.add_argument("--start", type=int, default=0, help="First row to process (0-based)")
    parser.add_argument("--limit", type=int, default=None, help="Number of rows to process")
    parser.add_argument("--output-dir", default=".", help="Directory for batch CSV files")
    parser.add_argument("--batch-size", type=int, default=settings.batch_size)
    parser.add_argument("--workers", type=int, default=settings.max_workers)
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging()
    logger = get_service_logger(__name__)

    settings = get_settings().model_copy(
        update={"batch_size": args.batch_size, "max_workers": args.workers}
    )

    try:
        urls = load_urls(args.input_csv, column=args.column, start=args.start, limit=args.limit)
    except (OSError, ValueError) as e:
        logger.error("Cannot read input CSV", path=args.input_csv, error=str(e))
        return 1

    processor = BatchProcessor(settings=settings)
    records = asyncio.run(processor.run(urls, output_dir=args.output_dir))

    logger.info(
        "Batch run finished",
        total=len(records),
        resolved=sum(1 for r in records if r.resolved),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
