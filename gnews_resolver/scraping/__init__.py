"""Article download and metadata extraction for resolved URLs."""
from .article_fetcher import ArticleFetcher
from .metadata_extractor import MetadataExtractor

__all__ = ["ArticleFetcher", "MetadataExtractor"]
