"""Terminal progress display for downloads.

On an interactive terminal a rich progress bar is drawn. Anywhere else, or
as soon as drawing fails, the reporter falls back to plain text lines
printed at a bounded interval. Display problems never abort a download.
"""

import contextlib
import logging
import time

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)

from pdl.audio.downloader import DownloadProgress, DownloadState
from pdl.utils.display import format_bytes, format_duration, format_rate

logger = logging.getLogger(__name__)

_TERMINAL_STATES = (DownloadState.COMPLETED, DownloadState.FAILED)


class ProgressReporter:
    """Render DownloadProgress snapshots.

    Use as a context manager and pass the instance as the downloader's
    ``progress_callback``:

        with ProgressReporter("Downloading") as reporter:
            AudioDownloader(progress_callback=reporter).download(url, name)
    """

    def __init__(
        self,
        description: str = "Downloading",
        console: Console | None = None,
        refresh_per_second: float = 4.0,
        plain_interval: float = 2.0,
        force_plain: bool = False,
    ) -> None:
        """Initialize the reporter.

        Args:
            description: Label shown next to the bar
            console: Console to draw on (stdout by default)
            refresh_per_second: Upper bound on bar redraws
            plain_interval: Minimum seconds between plain-text lines
            force_plain: Skip the progress bar even on a terminal
        """
        self.description = description
        self.console = console or Console()
        self.refresh_interval = 1.0 / refresh_per_second
        self.plain_interval = plain_interval
        self.plain = force_plain or not self.console.is_terminal
        self.last_progress: DownloadProgress | None = None

        self._progress: Progress | None = None
        self._task_id: TaskID | None = None
        self._last_refresh = 0.0
        self._last_plain_line = 0.0
        self._plain_lines = 0

    def __enter__(self) -> "ProgressReporter":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def start(self) -> None:
        """Start the progress bar (no-op in plain mode)."""
        if self.plain:
            return
        try:
            self._progress = Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                DownloadColumn(),
                TransferSpeedColumn(),
                TimeElapsedColumn(),
                TimeRemainingColumn(),
                console=self.console,
                auto_refresh=False,
            )
            self._progress.start()
            self._task_id = self._progress.add_task(escape(self.description), total=None)
        except Exception as e:
            self._degrade(e)

    def __call__(self, progress: DownloadProgress) -> None:
        """Record and display one snapshot."""
        self.last_progress = progress

        if not self.plain and self._progress is not None and self._task_id is not None:
            try:
                self._render_bar(progress)
                return
            except Exception as e:
                self._degrade(e)

        self._render_plain(progress)

    def stop(self) -> None:
        """Finish the display, leaving the final state on screen."""
        if self._progress is None:
            return
        try:
            if self.last_progress is not None and self._task_id is not None:
                self._render_bar(self.last_progress, force=True)
            self._progress.stop()
        except Exception as e:
            logger.debug("Progress display failed to stop cleanly: %s", e)
        finally:
            self._progress = None

    def _render_bar(self, progress: DownloadProgress, force: bool = False) -> None:
        assert self._progress is not None and self._task_id is not None
        self._progress.update(
            self._task_id,
            total=progress.total_bytes,
            completed=progress.downloaded_bytes,
        )

        now = time.monotonic()
        if force or progress.status in _TERMINAL_STATES or (
            now - self._last_refresh >= self.refresh_interval
        ):
            self._progress.refresh()
            self._last_refresh = now

    def _render_plain(self, progress: DownloadProgress) -> None:
        now = time.monotonic()
        final = progress.status in _TERMINAL_STATES
        if self._plain_lines and not final and now - self._last_plain_line < self.plain_interval:
            return
        # The IN_FLIGHT snapshot with zero bytes carries no information.
        if progress.status == DownloadState.IN_FLIGHT and progress.downloaded_bytes == 0:
            return

        self.console.print(escape(self.format_line(progress)), highlight=False)
        self._last_plain_line = now
        self._plain_lines += 1

    def format_line(self, progress: DownloadProgress) -> str:
        """Plain-text rendering of a snapshot."""
        if progress.total_bytes is not None:
            percentage = progress.percentage if progress.percentage is not None else 100.0
            amount = (
                f"{percentage:5.1f}% {format_bytes(progress.downloaded_bytes)}"
                f" / {format_bytes(progress.total_bytes)}"
            )
        else:
            amount = format_bytes(progress.downloaded_bytes)

        eta = progress.eta if progress.total_bytes is not None and progress.speed else None

        return (
            f"{self.description}: {amount} at {format_rate(progress.speed)}, "
            f"elapsed {format_duration(progress.elapsed)}, ETA {format_duration(eta)}"
        )

    def _degrade(self, error: Exception) -> None:
        """Switch to plain output after a display failure."""
        logger.debug("Progress bar unavailable, using plain output: %s", error)
        self.plain = True
        if self._progress is not None:
            with contextlib.suppress(Exception):
                self._progress.stop()
        self._progress = None
