"""
Batch driver for resolving many Google News URLs.

Reads input URLs from CSV, drops excluded domains, processes fixed-size batches
with bounded concurrency and writes one CSV file per batch.
"""

import asyncio
import csv
import re
import time
from pathlib import Path
from typing import Iterable, List, Optional

from gnews_resolver.config import get_service_logger, get_settings
from gnews_resolver.models import ArticleRecord, CSV_FIELDS

from .article_service import ArticleService


logger = get_service_logger(__name__)


def load_urls(
    csv_path: str,
    column: str = "item_link",
    start: int = 0,
    limit: Optional[int] = None,
) -> List[str]:
    """
    URLs from ``column`` of a CSV file (``url`` is accepted as an alias).

    ``start``/``limit`` select a row window, like processing rows 1..N of an
    RSS export.
    """
    with open(csv_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        fields = reader.fieldnames or []
        if column not in fields:
            if "url" in fields:
                column = "url"
            else:
                raise ValueError(f"Column '{column}' not found in {csv_path}")
        urls = [(row.get(column) or "").strip() for row in reader]

    urls = [u for u in urls if u]
    end = None if limit is None else start + limit
    return urls[start:end]


def filter_urls(urls: Iterable[str], excluded_domains: Iterable[str]) -> List[str]:
    """Drop URLs that mention any excluded domain (case-insensitive)."""
    domains = [d for d in excluded_domains if d]
    if not domains:
        return list(urls)
    pattern = re.compile("|".join(re.escape(d) for d in domains), re.IGNORECASE)
    return [u for u in urls if not pattern.search(u)]


def write_batch_csv(records: List[ArticleRecord], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for record in records:
            writer.writerow(record.to_row())


class BatchProcessor:
    """Runs ArticleService over URL batches with at most ``max_workers`` in flight."""

    def __init__(self, service: Optional[ArticleService] = None, settings=None):
        self.settings = settings or get_settings()
        self.service = service or ArticleService(settings=self.settings)
        self.batch_size = self.settings.batch_size
        self.max_workers = self.settings.max_workers

    async def process_batch(self, urls: List[str]) -> List[ArticleRecord]:
        semaphore = asyncio.Semaphore(self.max_workers)

        async def process_with_limit(url: str) -> ArticleRecord:
            async with semaphore:
                return await self.service.process(url)

        results = await asyncio.gather(
            *(process_with_limit(url) for url in urls), return_exceptions=True
        )

        records = []
        for url, result in zip(urls, results):
            if isinstance(result, Exception):
                logger.error("Unexpected failure processing URL", url=url, error=str(result))
                result = ArticleRecord(original_url=url, final_url=url)
            records.append(result)
        return records

    async def run(
        self, urls: List[str], output_dir: Optional[str] = None
    ) -> List[ArticleRecord]:
        urls = filter_urls(urls, self.settings.excluded_domains)
        num_batches = (len(urls) + self.batch_size - 1) // self.batch_size
        all_records: List[ArticleRecord] = []

        for batch in range(1, num_batches + 1):
            start_idx = (batch - 1) * self.batch_size
            batch_urls = urls[start_idx : start_idx + self.batch_size]
            logger.info(
                "Processing batch",
                batch=batch,
                num_batches=num_batches,
                start=start_idx + 1,
                end=start_idx + len(batch_urls),
            )

            started = time.time()
            records = await self.process_batch(batch_urls)
            all_records.extend(records)

            if output_dir is not None:
                out_file = (
                    Path(output_dir) / f"{self.settings.output_prefix}_Batch_{batch}.csv"
                )
                write_batch_csv(records, out_file)
                logger.info("Batch written", batch=batch, path=str(out_file))

            logger.info(
                "Batch completed",
                batch=batch,
                resolved=sum(1 for r in records if r.resolved),
                total=len(records),
                duration_seconds=round(time.time() - started, 2),
            )

        return all_records
