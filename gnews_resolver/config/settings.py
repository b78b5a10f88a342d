"""
Configuration settings for the Google News resolver.

Uses pydantic-settings for robust configuration management with environment
variable support and validation.
"""

from datetime import date
from typing import List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

LOG_ROTATIONS = ("hourly", "daily", "weekly", "monthly")


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Aggregator Configuration
    aggregator_host: str = Field(
        default="news.google.com",
        description="Host of the news-redirect pages that wrap publisher URLs",
    )
    aggregator_brand: str = Field(
        default="google.",
        description="Brand domain fragment excluded from anchor/JSON-LD/regex candidates",
    )

    # Resolver Configuration
    max_attempts: int = Field(
        default=3, gt=0, description="Navigation attempts per URL"
    )
    settle_delay: float = Field(
        default=5.0, ge=0, description="Wait after the first navigation in seconds"
    )
    follow_settle_delay: float = Field(
        default=3.0,
        ge=0,
        description="Wait after a fallback navigation (meta refresh, query param)",
    )
    retry_backoff: float = Field(
        default=2.0, ge=0, description="Delay between failed attempts in seconds"
    )
    navigation_timeout: float = Field(
        default=30.0, gt=0, description="Navigation timeout in seconds"
    )
    evaluation_timeout: float = Field(
        default=10.0, gt=0, description="Page script evaluation timeout in seconds"
    )
    attempt_timeout: float = Field(
        default=0.0,
        ge=0,
        description="Wall-clock ceiling per attempt in seconds (0 disables it)",
    )

    # Browser Configuration
    browser_headless: bool = Field(default=True, description="Run Chromium headless")
    browser_user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
        ),
        description="User agent of the browser context",
    )

    # Article Fetch Configuration
    request_timeout: int = Field(default=60, description="Request timeout in seconds")
    fetch_user_agent: str = Field(
        default="Mozilla/5.0", description="User agent for article downloads"
    )
    min_html_length: int = Field(
        default=100, description="Pages shorter than this are treated as blank"
    )

    # Batch Configuration
    batch_size: int = Field(default=100, gt=0, description="URLs per output batch")
    max_workers: int = Field(
        default=4, gt=0, description="Concurrent resolutions per batch"
    )
    excluded_domains: List[str] = Field(
        default=["nature.com", "biomedcentral.com", "reliefweb.int"],
        description="Input URLs containing these domains are skipped",
    )
    output_prefix: str = Field(default="Resolved", description="Batch CSV file prefix")

    # RSS Collection Configuration
    collect_keyword: str = Field(default="ebola", description="Google News search keyword")
    collect_start_date: date = Field(
        default=date(2022, 8, 1), description="First day searched"
    )
    collect_end_date: date = Field(
        default=date(2022, 10, 31), description="Day after the last day searched"
    )
    collect_delay: float = Field(
        default=1.0, ge=0, description="Pause between feed requests in seconds"
    )
    collect_feed_url: str = Field(
        default="https://news.google.com/rss/search",
        description="Google News RSS search endpoint",
    )
    collect_country: str = Field(default="US", description="Country edition (gl)")
    collect_language: str = Field(default="en", description="Headline language (hl)")
    collect_output: str = Field(
        default="google_news_urls.csv", description="Collected URLs CSV path"
    )

    # Server Configuration
    api_key: str = Field(default="", description="API key")
    require_api_key: bool = Field(
        default=False, description="Require API key for requests"
    )
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port")
    debug: bool = Field(default=False, description="Debug mode")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Log format (json or text)")
    log_file: Optional[str] = Field(default=None, description="Log file path")
    log_rotation: str = Field(
        default="daily",
        description="Start a new log file every period (hourly, daily, weekly, monthly)",
    )
    log_retention: int = Field(default=30, ge=0, description="Rotated log files to keep")
    environment: str = Field(default="development", description="Runtime environment")

    @field_validator("aggregator_host", "aggregator_brand")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("aggregator host and brand must not be empty")
        return value

    @field_validator("log_rotation")
    @classmethod
    def _known_rotation(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in LOG_ROTATIONS:
            raise ValueError(f"log_rotation must be one of {', '.join(LOG_ROTATIONS)}")
        return value

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings
