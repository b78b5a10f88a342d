from typing import Optional
from pydantic import BaseModel

CSV_FIELDS = [
    "original_url",
    "final_url",
    "resolved",
    "domain",
    "pub_date",
    "full_text",
]


class ArticleRecord(BaseModel):
    """Resolved URL plus the metadata extracted from the publisher page."""

    original_url: str
    final_url: str
    resolved: bool = False
    domain: Optional[str] = None
    pub_date: Optional[str] = None
    full_text: Optional[str] = None

    def to_row(self) -> dict:
        """Flat mapping in CSV column order."""
        data = self.model_dump()
        return {name: data[name] for name in CSV_FIELDS}
