"""Tests for ConfigManager and the configuration schema."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from pdl.config import DEFAULT_FEEDS, ConfigManager, FeedConfig, GlobalConfig, get_feed
from pdl.utils.errors import FeedNotFoundError, InvalidConfigError


@pytest.fixture
def sample_config_dict() -> dict:
    return {
        "episode_limit": 5,
        "output_dir": "downloads/podcasts",
        "log_level": "INFO",
        "feeds": [
            {"name": "First", "url": "https://example.com/first.rss"},
            {"name": "Second", "url": "https://example.com/second.rss"},
        ],
    }


def write_yaml(path: Path, data: object) -> Path:
    with open(path, "w") as f:
        yaml.safe_dump(data, f)
    return path


class TestConfigManager:
    """Tests for ConfigManager class."""

    def test_init_with_custom_file(self, tmp_path: Path) -> None:
        """Test ConfigManager initialization with a custom file."""
        manager = ConfigManager(config_file=tmp_path / "pdl.yaml")

        assert manager.config_file == tmp_path / "pdl.yaml"

    def test_default_location_follows_xdg(self, tmp_path: Path, monkeypatch) -> None:
        """The default file lives in the XDG config directory."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        manager = ConfigManager()

        assert manager.config_file.name == "config.yaml"
        assert manager.config_file.parent.name == "pdl"

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        """A missing file yields the built-in configuration without creating it."""
        manager = ConfigManager(config_file=tmp_path / "missing.yaml")

        config = manager.load_config()

        assert config.episode_limit == 10
        assert config.output_dir == Path("podcast-downloads")
        assert config.feeds == list(DEFAULT_FEEDS)
        assert not manager.config_file.exists()

    def test_builtin_feed(self) -> None:
        """The built-in feed is the Cozy Up doctor playlist."""
        (feed,) = DEFAULT_FEEDS

        assert feed.name == "Cozy Up (Doctor)"
        assert str(feed.url) == "https://omny.fm/shows/cozy-up/playlists/doctor.rss"

    def test_load_from_existing_file(self, tmp_path: Path, sample_config_dict: dict) -> None:
        """Test loading config from existing file."""
        path = write_yaml(tmp_path / "config.yaml", sample_config_dict)

        config = ConfigManager(config_file=path).load_config()

        assert config.episode_limit == 5
        assert config.output_dir == Path("downloads/podcasts")
        assert config.log_level == "INFO"
        assert [f.name for f in config.feeds] == ["First", "Second"]

    def test_file_without_feeds_keeps_builtin_feeds(self, tmp_path: Path) -> None:
        """Only overriding settings leaves the feed list alone."""
        path = write_yaml(tmp_path / "config.yaml", {"episode_limit": 3})

        config = ConfigManager(config_file=path).load_config()

        assert config.episode_limit == 3
        assert config.feeds == list(DEFAULT_FEEDS)

    def test_empty_file(self, tmp_path: Path) -> None:
        """An empty file behaves like no file."""
        path = tmp_path / "config.yaml"
        path.write_text("")

        config = ConfigManager(config_file=path).load_config()

        assert config.feeds == list(DEFAULT_FEEDS)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Unparseable YAML raises InvalidConfigError."""
        path = tmp_path / "config.yaml"
        path.write_text("feeds: [unclosed")

        with pytest.raises(InvalidConfigError, match="Could not read configuration"):
            ConfigManager(config_file=path).load_config()

    def test_invalid_values(self, tmp_path: Path) -> None:
        """Schema violations raise InvalidConfigError."""
        path = write_yaml(tmp_path / "config.yaml", {"episode_limit": 0})

        with pytest.raises(InvalidConfigError, match="Invalid configuration"):
            ConfigManager(config_file=path).load_config()

    def test_non_mapping(self, tmp_path: Path) -> None:
        """A top-level list is rejected."""
        path = write_yaml(tmp_path / "config.yaml", ["not", "a", "mapping"])

        with pytest.raises(InvalidConfigError, match="expected a mapping"):
            ConfigManager(config_file=path).load_config()


class TestSchema:
    """Tests for the pydantic models."""

    def test_feed_is_immutable(self) -> None:
        """Feeds cannot be changed after creation."""
        feed = FeedConfig(name="Show", url="https://example.com/feed.rss")  # type: ignore[arg-type]

        with pytest.raises(ValidationError):
            feed.name = "Other"  # type: ignore[misc]

    def test_feed_url_must_be_http(self) -> None:
        """Feed URLs are validated."""
        with pytest.raises(ValidationError):
            FeedConfig(name="Show", url="not a url")  # type: ignore[arg-type]

    def test_duplicate_feed_names_rejected(self) -> None:
        """Feed names identify feeds, so they must be unique."""
        with pytest.raises(ValidationError, match="Duplicate feed names: Show"):
            GlobalConfig(
                feeds=[
                    {"name": "Show", "url": "https://example.com/a.rss"},
                    {"name": "Show", "url": "https://example.com/b.rss"},
                ]
            )


class TestGetFeed:
    """Tests for get_feed."""

    def test_found(self, fixture_config: GlobalConfig) -> None:
        """Feeds are looked up by exact name."""
        assert get_feed(fixture_config, "Other Show") is fixture_config.feeds[1]

    def test_not_found_lists_available(self, fixture_config: GlobalConfig) -> None:
        """Unknown names raise FeedNotFoundError naming the options."""
        with pytest.raises(FeedNotFoundError, match="'Cozy Up \\(Doctor\\)', 'Other Show'"):
            get_feed(fixture_config, "Missing")
