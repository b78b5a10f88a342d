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
Exceptions for the Google News resolver.
Defines custom exceptions for browser navigation, page inspection, structured-data
parsing and article fetching. None of them escapes a single-URL resolution: each
one is caught at the smallest enclosing scope and turned into a fallback value.

Usage: from gnews_resolver.core.exceptions import NavigationFailure, EvaluationFailure

All exceptions inherit from ResolverException and can include a message and optional context.
"""

from typing import Any, Optional


class ResolverException(Exception):
    """
    Base exception for all resolver errors.
    """

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message)
        self.context = context


class NavigationFailure(ResolverException):
    """
    Raised when the browser cannot start or cannot load a URL in time.
    Attempt-scoped: the retry controller counts it as a failed attempt.
    """

    pass


class EvaluationFailure(ResolverException):
    """
    Raised when a page script or the navigation history cannot be read.
    Strategy-scoped: treated as "strategy found nothing".
    """

    pass


class ParseFailure(ResolverException):
    """Raised when a JSON-LD block is malformed; the block is skipped."""

    pass


class SessionReleaseFailure(ResolverException):
    """Raised when a browser session cannot be closed cleanly."""

    pass


class FetchError(ResolverException):
    """Exception raised when an article page cannot be downloaded or is unusable."""

    pass
