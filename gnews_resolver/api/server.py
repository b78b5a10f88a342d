"""
FastAPI server for the Google News resolver.

Exposes single-URL resolution and article extraction over HTTP for callers
that do not run the batch driver.
"""

from typing import Any, Dict, Optional
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from pydantic import BaseModel, Field, field_validator

from gnews_resolver import __version__
from gnews_resolver.config import get_api_logger, get_settings
from gnews_resolver.models import ArticleRecord, ResolutionResult
from gnews_resolver.pipeline import ArticleService
from gnews_resolver.resolver import UrlResolver
from gnews_resolver.utils.url_utils import is_absolute_url


logger = get_api_logger(__name__)
settings = get_settings()


class ResolveRequest(BaseModel):
    url: str
    max_attempts: Optional[int] = Field(default=None, gt=0)

    @field_validator("url")
    @classmethod
    def _absolute_url(cls, value: str) -> str:
        value = value.strip()
        if not is_absolute_url(value):
            raise ValueError("url must be an absolute http(s) URL")
        return value


class ArticleRequest(BaseModel):
    url: str

    @field_validator("url")
    @classmethod
    def _absolute_url(cls, value: str) -> str:
        value = value.strip()
        if not is_absolute_url(value):
            raise ValueError("url must be an absolute http(s) URL")
        return value


class HealthResponse(BaseModel):
    """Response model for health check."""

    overall: str
    components: Dict[str, Any]
    timestamp: str


async def verify_api_key(request: Request):
    """
    Verify API key from request headers.

    Raises:
        HTTPException: If API key is missing or invalid
    """
    settings = get_settings()

    if not settings.require_api_key:
        return True

    api_key = request.headers.get("X-API-Key") or request.headers.get("Authorization")

    if not api_key:
        raise HTTPException(
            status_code=401,
            detail="API key required. Please provide X-API-Key or Authorization header",
        )

    if api_key.startswith("Bearer "):
        api_key = api_key[7:]

    if api_key != settings.api_key:
        raise HTTPException(status_code=401, detail="Invalid API key")

    return True


app = FastAPI(
    title="Google News Resolver",
    description="Resolves Google News redirect URLs and extracts article metadata",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    dependencies=[Depends(verify_api_key)],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)


def get_resolver() -> UrlResolver:
    return UrlResolver()


def get_article_service() -> ArticleService:
    return ArticleService()


@app.get("/", response_model=Dict[str, str])
async def root():
    """Root endpoint with API information."""
    return {
        "message": "Google News Resolver API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "status": "operational",
    }


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Configuration-level health of the resolver components."""
    return HealthResponse(
        overall="healthy",
        components={
            "resolver": {
                "status": "healthy",
                "aggregator_host": settings.aggregator_host,
                "max_attempts": settings.max_attempts,
            },
            "browser": {"status": "healthy", "headless": settings.browser_headless},
        },
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@app.post("/resolve", response_model=ResolutionResult)
async def resolve_url(
    request: ResolveRequest, resolver: UrlResolver = Depends(get_resolver)
):
    """Resolve one Google News URL to the publisher URL."""
    logger.info("Resolve requested", url=request.url)
    return await resolver.resolve(request.url, max_attempts=request.max_attempts)


@app.post("/article", response_model=ArticleRecord)
async def extract_article(
    request: ArticleRequest, service: ArticleService = Depends(get_article_service)
):
    """Resolve one Google News URL and extract date, text and domain."""
    logger.info("Article requested", url=request.url)
    return await service.process(request.url)
