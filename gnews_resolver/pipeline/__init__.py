"""Article pipeline: per-URL service and batch driver."""
from .article_service import ArticleService
from .batch_processor import BatchProcessor, load_urls, filter_urls, write_batch_csv

__all__ = [
    "ArticleService",
    "BatchProcessor",
    "load_urls",
    "filter_urls",
    "write_batch_csv",
]
