from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gnews_resolver.utils.url_utils import is_absolute_url


class ResolutionRequest(BaseModel):
    """One aggregator URL to resolve."""

    model_config = ConfigDict(frozen=True)

    url: str
    max_attempts: int = Field(default=3, gt=0)

    @field_validator("url")
    @classmethod
    def _absolute_url(cls, value: str) -> str:
        value = value.strip()
        if not is_absolute_url(value):
            raise ValueError(f"not an absolute http(s) URL: {value!r}")
        return value


class ResolutionResult(BaseModel):
    """Outcome of resolving one aggregator URL."""

    original_url: str
    final_url: str
    resolved: bool = False
    attempts: int = 0

    @classmethod
    def unresolved(cls, url: str, attempts: int) -> "ResolutionResult":
        return cls(original_url=url, final_url=url, resolved=False, attempts=attempts)


@dataclass
class NavigationOutcome:
    """Result of a single navigation attempt."""

    attempt: int
    success: bool
    history: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def current_location(self) -> Optional[str]:
        return self.history[-1] if self.history else None
