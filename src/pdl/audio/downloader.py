"""Streaming episode downloader using httpx."""

import logging
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import httpx
from pydantic import BaseModel, Field

from pdl.feeds.models import Episode
from pdl.utils.errors import DownloadError
from pdl.utils.filenames import build_filename
from pdl.utils.http import create_http_client
from pdl.utils.paths import ensure_dir

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = Path("podcast-downloads")
DEFAULT_CHUNK_SIZE = 8192


class DownloadState(str, Enum):
    """Lifecycle of a single download."""

    PENDING = "pending"
    IN_FLIGHT = "in_flight"
    COMPLETED = "completed"
    FAILED = "failed"


_TRANSITIONS: dict[DownloadState, frozenset[DownloadState]] = {
    DownloadState.PENDING: frozenset({DownloadState.IN_FLIGHT, DownloadState.FAILED}),
    DownloadState.IN_FLIGHT: frozenset({DownloadState.COMPLETED, DownloadState.FAILED}),
    DownloadState.COMPLETED: frozenset(),
    DownloadState.FAILED: frozenset(),
}


class DownloadProgress(BaseModel):
    """Progress information for an episode download."""

    status: DownloadState = Field(..., description="Current download state")
    downloaded_bytes: int = Field(default=0, ge=0, description="Bytes downloaded so far")
    total_bytes: int | None = Field(
        default=None, ge=0, description="Total bytes to download (if known)"
    )
    elapsed: float = Field(default=0.0, ge=0, description="Seconds since the download started")
    speed: float | None = Field(
        default=None, ge=0, description="Average download speed in bytes/sec"
    )
    eta: float | None = Field(
        default=None, ge=0, description="Estimated time remaining (seconds)"
    )

    @property
    def percentage(self) -> float | None:
        """Calculate download percentage if total is known."""
        if self.total_bytes and self.total_bytes > 0:
            return (self.downloaded_bytes / self.total_bytes) * 100
        return None


@dataclass
class DownloadSession:
    """Mutable state of one download, owned by the downloader."""

    url: str
    path: Path
    state: DownloadState = DownloadState.PENDING
    total_bytes: int | None = None
    bytes_received: int = 0
    started_at: float | None = None
    finished_at: float | None = None
    error: str | None = field(default=None, repr=False)

    def transition(self, new_state: DownloadState) -> None:
        """Move to ``new_state``, rejecting transitions the lifecycle forbids."""
        if new_state not in _TRANSITIONS[self.state]:
            raise RuntimeError(
                f"Invalid download state transition {self.state.value} -> {new_state.value}"
            )
        if new_state == DownloadState.IN_FLIGHT:
            self.started_at = time.monotonic()
        elif new_state in (DownloadState.COMPLETED, DownloadState.FAILED):
            self.finished_at = time.monotonic()
        self.state = new_state

    def record(self, num_bytes: int) -> None:
        """Account for ``num_bytes`` more bytes written to disk."""
        if self.state != DownloadState.IN_FLIGHT:
            raise RuntimeError(f"Cannot record bytes in state {self.state.value}")
        self.bytes_received += num_bytes

    @property
    def elapsed(self) -> float:
        """Seconds spent in flight so far (or in total once finished)."""
        if self.started_at is None:
            return 0.0
        end = self.finished_at if self.finished_at is not None else time.monotonic()
        return max(end - self.started_at, 0.0)

    def snapshot(self) -> DownloadProgress:
        """Build a progress snapshot with average speed and ETA."""
        elapsed = self.elapsed
        speed = self.bytes_received / elapsed if elapsed > 0 else None

        eta = None
        if self.total_bytes is not None and speed:
            eta = max(self.total_bytes - self.bytes_received, 0) / speed

        return DownloadProgress(
            status=self.state,
            downloaded_bytes=self.bytes_received,
            total_bytes=self.total_bytes,
            elapsed=elapsed,
            speed=speed,
            eta=eta,
        )


class AudioDownloader:
    """Download episode audio over HTTP into a fixed output directory.

    The response body is streamed in chunks straight to disk. After each
    chunk the optional progress callback receives a DownloadProgress
    snapshot. Failed downloads leave whatever was written on disk.
    """

    def __init__(
        self,
        output_dir: Path | None = None,
        client: httpx.Client | None = None,
        timeout: float = 30.0,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        progress_callback: Callable[[DownloadProgress], None] | None = None,
    ):
        """Initialize audio downloader.

        Args:
            output_dir: Directory to save downloaded audio (created on first download)
            client: HTTP client to use; one is created per download if omitted
            timeout: HTTP timeout in seconds (ignored when a client is supplied)
            chunk_size: Read size for the streamed body
            progress_callback: Optional callback for progress updates
        """
        self.output_dir = output_dir or DEFAULT_OUTPUT_DIR
        self.client = client
        self.timeout = timeout
        self.chunk_size = chunk_size
        self.progress_callback = progress_callback

    def download_episode(self, episode: Episode) -> DownloadSession:
        """Download an episode to ``<output_dir>/<sanitized title>.<ext>``."""
        return self.download(episode.media_url, build_filename(episode))

    def download(self, url: str, filename: str) -> DownloadSession:
        """Download ``url`` to ``output_dir / filename``.

        Args:
            url: Media URL
            filename: Destination filename inside the output directory

        Returns:
            The completed DownloadSession

        Raises:
            DownloadError: If the directory or file cannot be written, the
                server answers with an error, or the stream breaks off
        """
        session = DownloadSession(url=url, path=self.output_dir / filename)

        try:
            ensure_dir(self.output_dir)
        except OSError as e:
            raise self._fail(
                session, f"Failed to create download directory {self.output_dir}: {e}"
            ) from e

        logger.info("Downloading %s -> %s", url, session.path)

        if self.client is None:
            with create_http_client(self.timeout) as client:
                self._stream_to_file(client, session)
        else:
            self._stream_to_file(self.client, session)

        return session

    def iter_chunks(self, response: httpx.Response) -> Iterator[bytes]:
        """Lazily yield the body of a streamed response.

        The sequence is finite and can be consumed only once.
        """
        for chunk in response.iter_bytes(chunk_size=self.chunk_size):
            if chunk:
                yield chunk

    def _stream_to_file(self, client: httpx.Client, session: DownloadSession) -> None:
        url = session.url
        try:
            with client.stream("GET", url) as response:
                response.raise_for_status()
                session.total_bytes = self._content_length(response)
                session.transition(DownloadState.IN_FLIGHT)
                self._report(session)

                with open(session.path, "wb") as f:
                    for chunk in self.iter_chunks(response):
                        f.write(chunk)
                        session.record(len(chunk))
                        self._report(session)

        except httpx.HTTPStatusError as e:
            raise self._fail(
                session, f"Server returned HTTP {e.response.status_code} for {url}"
            ) from e
        except httpx.TimeoutException as e:
            raise self._fail(session, f"Timed out downloading {url}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise self._fail(session, f"Connection failed while downloading {url}: {e}") from e
        except OSError as e:
            raise self._fail(session, f"Failed to write {session.path}: {e}") from e

        if session.total_bytes is not None and session.bytes_received < session.total_bytes:
            raise self._fail(
                session,
                f"Download interrupted: received {session.bytes_received} of "
                f"{session.total_bytes} bytes",
            )

        session.transition(DownloadState.COMPLETED)
        self._report(session)
        logger.info(
            "Downloaded %d bytes to %s in %.1fs",
            session.bytes_received,
            session.path,
            session.elapsed,
        )

    def _fail(self, session: DownloadSession, message: str) -> DownloadError:
        """Mark the session failed and build the error to raise."""
        session.error = message
        session.transition(DownloadState.FAILED)
        logger.info("Download failed: %s", message)
        self._report(session)
        return DownloadError(session.url, message, session.path, session)

    def _report(self, session: DownloadSession) -> None:
        if self.progress_callback:
            self.progress_callback(session.snapshot())

    @staticmethod
    def _content_length(response: httpx.Response) -> int | None:
        """Declared body size, or None for indeterminate downloads."""
        value = response.headers.get("content-length", "").strip()
        if not (value.isascii() and value.isdigit()):
            return None
        # Compressed bodies are decoded on the fly, so the header no longer
        # matches what we write.
        if response.headers.get("content-encoding", "identity") not in ("identity", ""):
            return None
        return int(value)
