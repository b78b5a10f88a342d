"""Configuration module for the Google News resolver."""
from .settings import Settings, settings, get_settings
from .logging_config import (
    setup_logging,
    get_service_logger,
    get_api_logger,
    log_resolution_step,
)

__all__ = [
    "Settings",
    "settings",
    "get_settings",
    "setup_logging",
    "get_service_logger",
    "get_api_logger",
    "log_resolution_step",
]
