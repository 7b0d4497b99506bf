"""Configuration manager for loading pdl config."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from pdl.config.defaults import DEFAULT_FEEDS, default_config
from pdl.config.schema import FeedConfig, GlobalConfig
from pdl.utils.errors import FeedNotFoundError, InvalidConfigError
from pdl.utils.paths import get_config_file

logger = logging.getLogger(__name__)


class ConfigManager:
    """Loads the pdl configuration file.

    A missing file is not an error: the built-in defaults (including the
    built-in feed list) are used instead. Feeds declared in the file replace
    the built-in list; an empty or absent ``feeds`` key keeps it.
    """

    def __init__(self, config_file: Path | None = None) -> None:
        """Initialize the config manager.

        Args:
            config_file: Optional config file path. Defaults to the XDG config dir.
        """
        self.config_file = config_file or get_config_file()

    def load_config(self) -> GlobalConfig:
        """Load and validate configuration.

        Returns:
            Validated GlobalConfig instance

        Raises:
            InvalidConfigError: If the file cannot be read or is invalid
        """
        if not self.config_file.exists():
            logger.debug("No config file at %s, using defaults", self.config_file)
            return default_config()

        try:
            with open(self.config_file) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise InvalidConfigError(
                f"Could not read configuration {self.config_file}: {e}"
            ) from e

        if not isinstance(data, dict):
            raise InvalidConfigError(
                f"Invalid configuration in {self.config_file}: expected a mapping"
            )

        if not data.get("feeds"):
            data["feeds"] = [feed.model_dump() for feed in DEFAULT_FEEDS]

        try:
            config = GlobalConfig(**data)
        except ValidationError as e:
            raise InvalidConfigError(
                f"Invalid configuration in {self.config_file}: {e}"
            ) from e

        logger.debug("Loaded %d feed(s) from %s", len(config.feeds), self.config_file)
        return config


def get_feed(config: GlobalConfig, name: str) -> FeedConfig:
    """Look up a configured feed by name.

    Raises:
        FeedNotFoundError: If no feed has that name
    """
    for feed in config.feeds:
        if feed.name == name:
            return feed

    available = ", ".join(f"'{feed.name}'" for feed in config.feeds) or "none"
    raise FeedNotFoundError(f"Feed '{name}' not found. Available feeds: {available}")
