"""Redirect resolution engine."""
from .orchestrator import FallbackOrchestrator
from .url_resolver import UrlResolver, SessionFactory

__all__ = ["FallbackOrchestrator", "UrlResolver", "SessionFactory"]
