"""Browser automation layer for the Google News resolver."""
from .session import BrowserSession, PlaywrightSession, current_location
from . import scripts

__all__ = ["BrowserSession", "PlaywrightSession", "current_location", "scripts"]
