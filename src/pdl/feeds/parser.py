"""RSS feed parser using feedparser."""

import logging
from datetime import datetime, timezone
from typing import Any

import feedparser
import httpx

from pdl.feeds.models import Episode
from pdl.utils.errors import FetchError
from pdl.utils.http import create_http_client

logger = logging.getLogger(__name__)


class RSSParser:
    """Fetches RSS feeds and extracts episode information."""

    def __init__(self, client: httpx.Client | None = None, timeout: float = 30.0) -> None:
        """Initialize the RSS parser.

        Args:
            client: HTTP client to use. A short-lived client is created per
                fetch when omitted.
            timeout: HTTP request timeout in seconds (ignored when a client
                is supplied).
        """
        self.client = client
        self.timeout = timeout

    def fetch_feed(self, url: str) -> feedparser.FeedParserDict:
        """Fetch and parse an RSS feed.

        Args:
            url: Feed URL

        Returns:
            Parsed feed

        Raises:
            FetchError: On network failure, non-2xx status, or a document
                that is not a feed
        """
        logger.info("Fetching feed %s", url)

        if self.client is None:
            with create_http_client(self.timeout) as client:
                content = self._get(client, url)
        else:
            content = self._get(self.client, url)

        feed = feedparser.parse(content)

        if not feed.get("version") and not feed.entries:
            cause = feed.get("bozo_exception")
            if cause is not None:
                raise FetchError(url, f"Failed to parse RSS feed: {cause}", cause)
            raise FetchError(url, "Document is not an RSS feed")

        if feed.bozo:
            logger.debug("Feed %s parsed with warnings: %s", url, feed.get("bozo_exception"))

        logger.debug("Feed %s has %d entries", url, len(feed.entries))
        return feed

    def _get(self, client: httpx.Client, url: str) -> bytes:
        try:
            response = client.get(url)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise FetchError(url, "Timed out fetching RSS feed", e) from e
        except httpx.HTTPStatusError as e:
            raise FetchError(
                url, f"RSS feed returned HTTP {e.response.status_code}", e
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(url, f"Failed to fetch RSS feed: {e}", e) from e

        return response.content

    def extract_episode(self, entry: Any) -> Episode | None:
        """Build an Episode from a feed entry.

        Args:
            entry: feedparser entry

        Returns:
            Episode, or None when the entry has no title or no audio enclosure
        """
        title = (entry.get("title") or "").strip()
        enclosure = self._find_enclosure(entry)

        if not title or enclosure is None:
            logger.debug("Skipping entry without title or enclosure: %r", title or entry.get("id"))
            return None

        length = str(enclosure.get("length") or "").strip()

        return Episode(
            title=title,
            media_url=enclosure["href"],
            published=self._parse_published(entry),
            description=entry.get("summary"),
            media_type=enclosure.get("type") or None,
            media_length=int(length) if length.isascii() and length.isdigit() else None,
        )

    def fetch_episodes(self, url: str, limit: int | None = None) -> list[Episode]:
        """Fetch a feed and return its episodes in feed order.

        Args:
            url: Feed URL
            limit: Maximum number of episodes to return

        Returns:
            Up to ``limit`` episodes, in the order the feed publishes them

        Raises:
            FetchError: If the feed cannot be fetched or parsed
        """
        feed = self.fetch_feed(url)

        episodes: list[Episode] = []
        for entry in feed.entries:
            if limit is not None and len(episodes) >= limit:
                break
            episode = self.extract_episode(entry)
            if episode is not None:
                episodes.append(episode)

        return episodes

    @staticmethod
    def _find_enclosure(entry: Any) -> dict[str, Any] | None:
        """Pick the audio enclosure of an entry, else its first enclosure."""
        enclosures = [e for e in entry.get("enclosures", []) if e.get("href")]
        if not enclosures:
            return None

        for enclosure in enclosures:
            if str(enclosure.get("type", "")).startswith("audio/"):
                return enclosure

        return enclosures[0]

    @staticmethod
    def _parse_published(entry: Any) -> datetime | None:
        parsed = entry.get("published_parsed") or entry.get("updated_parsed")
        if not parsed:
            return None
        return datetime(*parsed[:6], tzinfo=timezone.utc)
