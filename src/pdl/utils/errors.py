"""Custom exceptions for pdl."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pdl.audio.downloader import DownloadSession


class PdlError(Exception):
    """Base exception for all pdl errors."""

    #: Human-readable name of the stage that failed, used in CLI messages.
    stage = "pdl"


class ConfigError(PdlError):
    """Configuration-related errors."""

    stage = "Configuration"


class InvalidConfigError(ConfigError):
    """Invalid configuration data."""

    pass


class FeedNotFoundError(ConfigError):
    """Feed name not present in the configuration."""

    pass


class FetchError(PdlError):
    """Fetching or parsing an RSS feed failed.

    Covers transport errors, timeouts, non-2xx responses and documents
    that cannot be parsed as a feed.
    """

    stage = "Feed fetch"

    def __init__(self, url: str, message: str, cause: BaseException | None = None) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"{message} ({url})")


class DownloadError(PdlError):
    """Downloading an episode failed.

    Any partial file is left at ``path``.
    """

    stage = "Download"

    def __init__(
        self,
        url: str,
        message: str,
        path: Path | None = None,
        session: DownloadSession | None = None,
    ) -> None:
        self.url = url
        self.path = path
        self.session = session
        super().__init__(message)
