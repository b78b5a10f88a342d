"""Core definitions shared across the resolver."""
from .exceptions import (
    ResolverException,
    NavigationFailure,
    EvaluationFailure,
    ParseFailure,
    SessionReleaseFailure,
    FetchError,
)

__all__ = [
    "ResolverException",
    "NavigationFailure",
    "EvaluationFailure",
    "ParseFailure",
    "SessionReleaseFailure",
    "FetchError",
]
