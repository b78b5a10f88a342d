# ┌───────────────────────────────────────────────────────────────┐
# │  Copyright (c) 2025 Ateet Vatan Bahmani                       │
# │  Project: gnews-resolver – Google News URL Resolver           │
# │  All rights reserved.                                         │
# └───────────────────────────────────────────────────────────────┘
#
# gnews-resolver is a proprietary software system developed and owned by Ateet Vatan Bahmani.
# The source code, documentation, workflows and designs are protected by applicable
# copyright and trademark laws.
#
# Redistribution, modification, commercial use, or publication of any portion of this
# project without explicit written consent is strictly prohibited.
#
# This project is not open-source and is intended solely for internal, research,
# or demonstration use by the author.
#
# Contact: ab@masxai.com

"""This module turns one Google News URL into an ArticleRecord: resolve, fetch, extract."""

import time
from typing import Optional

from pydantic import ValidationError

from gnews_resolver.config import get_service_logger, get_settings, log_resolution_step
from gnews_resolver.core.exceptions import FetchError
from gnews_resolver.models import ArticleRecord
from gnews_resolver.resolver import UrlResolver
from gnews_resolver.scraping import ArticleFetcher, MetadataExtractor


class ArticleService:
    """
    Resolves an aggregator URL and extracts date, text and domain from the
    publisher page. Never raises for a single URL.
    """

    def __init__(
        self,
        resolver: Optional[UrlResolver] = None,
        fetcher: Optional[ArticleFetcher] = None,
        extractor: Optional[MetadataExtractor] = None,
        settings=None,
    ):
        self.settings = settings or get_settings()
        self.resolver = resolver or UrlResolver(settings=self.settings)
        self.fetcher = fetcher or ArticleFetcher(settings=self.settings)
        self.extractor = extractor or MetadataExtractor()
        self.logger = get_service_logger("ArticleService")

    async def process(self, url: str) -> ArticleRecord:
        start_time = time.time()

        try:
            resolution = await self.resolver.resolve(url)
        except ValidationError as e:
            self.logger.warning("Skipping malformed URL", url=url, error=str(e))
            return ArticleRecord(original_url=url, final_url=url)

        record = ArticleRecord(
            original_url=resolution.original_url,
            final_url=resolution.final_url,
            resolved=resolution.resolved,
            domain=self.extractor.extract_domain(resolution.final_url),
        )

        try:
            html = await self.fetcher.fetch_html(record.final_url)
        except FetchError as e:
            self.logger.info("Skipping metadata extraction", url=record.final_url, reason=str(e))
            return record

        soup = self.extractor.parse(html)
        record.pub_date = self.extractor.extract_publication_date(soup)
        record.full_text = self.extractor.extract_full_text(soup)

        log_resolution_step(
            self.logger,
            "article",
            url,
            output_data={
                "final_url": record.final_url,
                "domain": record.domain,
                "has_date": record.pub_date is not None,
                "has_text": record.full_text is not None,
            },
            duration=time.time() - start_time,
        )
        return record
