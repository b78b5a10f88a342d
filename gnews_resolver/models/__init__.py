from .resolution import ResolutionRequest, ResolutionResult, NavigationOutcome
from .article_record import ArticleRecord, CSV_FIELDS

__all__ = [
    "ResolutionRequest",
    "ResolutionResult",
    "NavigationOutcome",
    "ArticleRecord",
    "CSV_FIELDS",
]
