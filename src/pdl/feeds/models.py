"""Data models for podcast episodes."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Episode(BaseModel):
    """Represents a single downloadable podcast episode."""

    title: str
    media_url: str  # Direct audio URL from the enclosure
    published: Optional[datetime] = None
    description: Optional[str] = None
    media_type: Optional[str] = None
    media_length: Optional[int] = Field(default=None, ge=0)

    @property
    def published_date(self) -> str | None:
        """Publication date as YYYY-MM-DD, if known."""
        if self.published is None:
            return None
        return self.published.strftime("%Y-%m-%d")
