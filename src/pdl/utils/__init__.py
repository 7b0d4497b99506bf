"""Utility functions and helpers for pdl."""

from pdl.utils.errors import (
    ConfigError,
    DownloadError,
    FeedNotFoundError,
    FetchError,
    InvalidConfigError,
    PdlError,
)
from pdl.utils.paths import ensure_dir, get_config_dir, get_config_file

__all__ = [
    # Errors
    "PdlError",
    "ConfigError",
    "InvalidConfigError",
    "FeedNotFoundError",
    "FetchError",
    "DownloadError",
    # Paths
    "get_config_dir",
    "get_config_file",
    "ensure_dir",
]
