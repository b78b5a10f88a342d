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

"""
Structured logging for the resolver, the batch runner and the API.

Every module logs through structlog; ``setup_logging`` routes the events to
stdout and, when ``LOG_FILE`` is set, to a file rotated on a calendar period.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from structlog.stdlib import LoggerFactory

from .settings import get_settings

# LOG_ROTATION -> (TimedRotatingFileHandler ``when``, ``interval``)
ROTATION_PERIODS = {
    "hourly": ("H", 1),
    "daily": ("midnight", 1),
    "weekly": ("W0", 1),
    "monthly": ("D", 30),
}

# Chatty libraries kept at WARNING regardless of LOG_LEVEL
QUIET_LOGGERS = ("httpx", "httpcore", "asyncio", "playwright", "uvicorn.access")


def _renderer(log_format: str):
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Arguments override the LOG_LEVEL, LOG_FILE and LOG_FORMAT settings.
    Safe to call more than once; existing root handlers are replaced.
    """
    settings = get_settings()
    log_level = (log_level or settings.log_level).upper()
    log_file = log_file or settings.log_file
    log_format = log_format or settings.log_format

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _renderer(log_format),
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, log_level)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    if log_file:
        root_logger.addHandler(
            create_file_handler(log_file, settings.log_rotation, settings.log_retention)
        )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_level=log_level,
        log_file=log_file,
        log_format=log_format,
        environment=settings.environment,
    )


def create_file_handler(
    log_file: str, rotation: str, retention: int
) -> logging.handlers.TimedRotatingFileHandler:
    """
    File handler that starts a new file every ``rotation`` period
    (hourly, daily, weekly, monthly) and keeps ``retention`` old files.
    """
    if rotation not in ROTATION_PERIODS:
        raise ValueError(
            f"Unknown log rotation '{rotation}', expected one of {sorted(ROTATION_PERIODS)}"
        )
    when, interval = ROTATION_PERIODS[rotation]

    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.TimedRotatingFileHandler(
        log_file,
        when=when,
        interval=interval,
        backupCount=retention,
        encoding="utf-8",
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def log_resolution_step(
    logger: structlog.stdlib.BoundLogger,
    step_name: str,
    url: str,
    output_data: Optional[Dict[str, Any]] = None,
    duration: Optional[float] = None,
) -> None:
    """Emit one "Resolution step executed" event for ``url``."""
    event: Dict[str, Any] = {"step_name": step_name, "url": url}
    if output_data:
        event["output"] = output_data
    if duration is not None:
        event["duration_seconds"] = round(duration, 3)
    logger.info("Resolution step executed", **event)


def get_service_logger(service_name: str) -> structlog.stdlib.BoundLogger:
    """Logger named ``service.<service_name>`` (resolver, fallbacks, pipeline)."""
    return structlog.get_logger(f"service.{service_name}")


def get_api_logger(api_name: str) -> structlog.stdlib.BoundLogger:
    """Logger named ``api.<api_name>``."""
    return structlog.get_logger(f"api.{api_name}")
