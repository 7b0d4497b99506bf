"""Audio download module for pdl."""

from pdl.audio.downloader import (
    AudioDownloader,
    DownloadProgress,
    DownloadSession,
    DownloadState,
)
from pdl.audio.progress import ProgressReporter
from pdl.utils.errors import DownloadError

__all__ = [
    "AudioDownloader",
    "DownloadError",
    "DownloadProgress",
    "DownloadSession",
    "DownloadState",
    "ProgressReporter",
]
