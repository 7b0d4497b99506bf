"""CLI entry point for pdl."""

import logging
import sys
from pathlib import Path
from typing import NoReturn

import httpx
import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from pdl import __version__
from pdl.audio import AudioDownloader, ProgressReporter
from pdl.config.logging import setup_logging
from pdl.config.manager import ConfigManager, get_feed
from pdl.config.schema import FeedConfig, GlobalConfig
from pdl.feeds.parser import RSSParser
from pdl.ui import EpisodeSelector, SelectionCancelled, get_theme, render_banner
from pdl.utils.errors import DownloadError, PdlError
from pdl.utils.http import create_http_client

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="pdl",
    help="Download podcast episodes from RSS feeds",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

# Conventional exit status for SIGINT
EXIT_INTERRUPTED = 130


def version_callback(value: bool) -> None:
    """Print the version and exit."""
    if value:
        console.print(f"Podcast Downloader v{__version__}", highlight=False)
        raise typer.Exit()


@app.command()
def main(
    number: int | None = typer.Option(
        None, "-n", "--number", min=1, help="Number of episodes to display [default: 10]"
    ),
    feed_name: str | None = typer.Option(
        None, "--feed", "-f", help="Name of the configured feed to use (skips the feed menu)"
    ),
    output_dir: Path | None = typer.Option(
        None, "--output-dir", "-o", help="Directory to save episodes in"
    ),
    config_file: Path | None = typer.Option(
        None, "--config", help="Configuration file (YAML)"
    ),
    no_banner: bool = typer.Option(False, "--no-banner", help="Do not print the banner"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose (DEBUG) logging"),
    log_file: Path | None = typer.Option(None, "--log-file", help="Write logs to file"),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Print version and exit",
    ),
) -> None:
    """Pick an episode from a podcast feed and download it.

    Examples:
        pdl

        pdl -n 20

        pdl --feed "Cozy Up (Doctor)" --output-dir ~/Music/podcasts
    """
    setup_logging(verbose=verbose, log_file=log_file)

    try:
        config = ConfigManager(config_file).load_config()
    except PdlError as e:
        _exit_with_error(e)

    # Re-apply logging now that the configured level is known
    setup_logging(verbose=verbose, log_file=log_file, level=config.log_level)

    if not no_banner:
        render_banner(console)

    try:
        with create_http_client(config.request_timeout) as client:
            run(
                config,
                client,
                limit=number or config.episode_limit,
                output_dir=output_dir or config.output_dir,
                feed_name=feed_name,
            )
    except PdlError as e:
        _exit_with_error(e)
    except KeyboardInterrupt:
        err_console.print(
            get_theme().warning_text(
                "\nInterrupted. Any partially downloaded file was left on disk."
            )
        )
        sys.exit(EXIT_INTERRUPTED)


def run(
    config: GlobalConfig,
    client: httpx.Client,
    limit: int,
    output_dir: Path,
    feed_name: str | None = None,
    selector: EpisodeSelector | None = None,
) -> None:
    """Select a feed and an episode, then download it.

    Raises:
        PdlError: If any stage fails
    """
    theme = get_theme()
    selector = selector or EpisodeSelector()

    if feed_name is not None:
        feed: FeedConfig | SelectionCancelled = get_feed(config, feed_name)
    else:
        feed = selector.select_feed(config.feeds)
    if isinstance(feed, SelectionCancelled):
        _report_cancelled(feed)
        return

    console.print(theme.info_text(f"Fetching RSS feed for {escape(feed.name)}...\n"))
    parser = RSSParser(client=client)
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Parsing RSS feed...", total=None)
        episodes = parser.fetch_episodes(str(feed.url), limit=limit)

    if not episodes:
        console.print(theme.warning_text("No episodes found in the feed."))
        return

    episode = selector.select_episode(episodes)
    if isinstance(episode, SelectionCancelled):
        _report_cancelled(episode)
        return

    console.print(f"\nDownloading: [{theme.episode}]{escape(episode.title)}[/{theme.episode}]")

    with ProgressReporter(console=console) as reporter:
        downloader = AudioDownloader(
            output_dir=output_dir,
            client=client,
            chunk_size=config.chunk_size,
            progress_callback=reporter,
        )
        session = downloader.download_episode(episode)

    console.print()
    console.print(theme.success_text("Download complete!"))
    console.print(f"Saved to: [{theme.path}]{escape(str(session.path))}[/{theme.path}]")


def _report_cancelled(result: SelectionCancelled) -> None:
    logger.info("Selection cancelled: %s", result.reason)
    console.print(get_theme().warning_text("Cancelled."))


def _exit_with_error(error: PdlError) -> NoReturn:
    """Print a stage-specific error on stderr and exit non-zero."""
    theme = get_theme()
    err_console.print(
        theme.error_text(f"{error.stage} failed: {escape(str(error))}"), soft_wrap=True
    )
    if isinstance(error, DownloadError) and error.path is not None and error.path.exists():
        err_console.print(
            theme.muted_text(f"  Partial file left at {escape(str(error.path))}"), soft_wrap=True
        )
    sys.exit(1)


if __name__ == "__main__":
    app()
