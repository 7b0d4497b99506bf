"""Filesystem locations used by pdl."""

import logging
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "pdl"

logger = logging.getLogger(__name__)


def get_config_dir() -> Path:
    """Return the per-user configuration directory (XDG aware)."""
    return Path(user_config_dir(APP_NAME))


def get_config_file() -> Path:
    """Return the default configuration file path."""
    return get_config_dir() / "config.yaml"


def ensure_dir(path: Path) -> Path:
    """Create ``path`` and any missing parents, returning it.

    Raises:
        OSError: If the directory cannot be created
    """
    if not path.is_dir():
        logger.debug("Creating directory %s", path)
    path.mkdir(parents=True, exist_ok=True)
    return path
