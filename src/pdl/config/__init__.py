"""Configuration management for pdl."""

from pdl.config.defaults import DEFAULT_FEEDS, default_config
from pdl.config.manager import ConfigManager, get_feed
from pdl.config.schema import FeedConfig, GlobalConfig

__all__ = [
    "ConfigManager",
    "DEFAULT_FEEDS",
    "FeedConfig",
    "GlobalConfig",
    "default_config",
    "get_feed",
]
