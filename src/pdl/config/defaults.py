"""Built-in configuration values."""

from pdl.config.schema import FeedConfig, GlobalConfig

DEFAULT_FEEDS: tuple[FeedConfig, ...] = (
    FeedConfig(
        name="Cozy Up (Doctor)",
        url="https://omny.fm/shows/cozy-up/playlists/doctor.rss",  # type: ignore[arg-type]
    ),
)


def default_config() -> GlobalConfig:
    """Return a fresh GlobalConfig populated with the built-in feeds."""
    return GlobalConfig(feeds=list(DEFAULT_FEEDS))
