"""Configuration schema models using Pydantic."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class FeedConfig(BaseModel):
    """A named podcast feed."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    url: HttpUrl


class GlobalConfig(BaseModel):
    """Global pdl configuration."""

    version: str = "1"
    output_dir: Path = Field(default=Path("podcast-downloads"))
    episode_limit: int = Field(default=10, ge=1)
    log_level: LogLevel = "WARNING"
    request_timeout: float = Field(default=30.0, gt=0)
    chunk_size: int = Field(default=8192, ge=1)
    feeds: list[FeedConfig] = Field(default_factory=list)

    @field_validator("feeds")
    @classmethod
    def _unique_feed_names(cls, feeds: list[FeedConfig]) -> list[FeedConfig]:
        names = [feed.name for feed in feeds]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate feed names: {', '.join(duplicates)}")
        return feeds
