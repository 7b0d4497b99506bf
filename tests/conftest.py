"""Shared test fixtures."""

from collections.abc import Callable, Iterator
from typing import Any
from xml.sax.saxutils import escape, quoteattr

import httpx
import pytest
import questionary

from pdl.config.schema import FeedConfig, GlobalConfig
from pdl.feeds.models import Episode

COZY_URL = "https://omny.fm/shows/cozy-up/playlists/doctor.rss"
OTHER_URL = "https://example.com/other.rss"
MEDIA_BASE = "https://cdn.example.com/audio"

Handler = Callable[[httpx.Request], httpx.Response]


def build_rss(items: list[dict[str, Any]], title: str = "Test Podcast") -> bytes:
    """Render a minimal RSS 2.0 document.

    Each item may carry ``title``, ``url`` (enclosure), ``length``, ``type``
    and ``pub_date``; missing keys are left out of the XML.
    """
    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<rss version="2.0"><channel>',
        f"<title>{escape(title)}</title>",
        "<link>https://example.com</link>",
        "<description>Fixture feed</description>",
    ]
    for item in items:
        parts.append("<item>")
        if "title" in item:
            parts.append(f"<title>{escape(item['title'])}</title>")
        if "pub_date" in item:
            parts.append(f"<pubDate>{item['pub_date']}</pubDate>")
        if "url" in item:
            parts.append(
                f"<enclosure url={quoteattr(item['url'])}"
                f" length=\"{item.get('length', 0)}\""
                f" type=\"{item.get('type', 'audio/mpeg')}\"/>"
            )
        parts.append("</item>")
    parts.append("</channel></rss>")
    return "".join(parts).encode("utf-8")


@pytest.fixture
def rss_factory() -> Callable[..., bytes]:
    """Factory that renders RSS documents from item dicts."""
    return build_rss


@pytest.fixture
def cozy_feed_xml() -> bytes:
    """The three-episode "Cozy Up (Doctor)" fixture feed."""
    return build_rss(
        [
            {"title": "Ep 1: Intro", "url": f"{MEDIA_BASE}/ep1.mp3", "length": 11},
            {"title": "Ep/2", "url": f"{MEDIA_BASE}/ep2.mp3?token=abc", "length": 22},
            {"title": "Ep 3", "url": f"{MEDIA_BASE}/ep3.mp3", "length": 33},
        ],
        title="Cozy Up",
    )


@pytest.fixture
def mock_client() -> Iterator[Callable[[Handler], httpx.Client]]:
    """Build an httpx.Client whose requests are answered by a handler."""
    clients: list[httpx.Client] = []

    def factory(handler: Handler) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler), follow_redirects=True)
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()


@pytest.fixture
def sample_episode() -> Episode:
    """An episode whose title needs sanitizing."""
    return Episode(title="Ep/2", media_url=f"{MEDIA_BASE}/ep2.mp3", media_type="audio/mpeg")


@pytest.fixture
def fixture_config() -> GlobalConfig:
    """Config with two fixture feeds."""
    return GlobalConfig(
        feeds=[
            FeedConfig(name="Cozy Up (Doctor)", url=COZY_URL),  # type: ignore[arg-type]
            FeedConfig(name="Other Show", url=OTHER_URL),  # type: ignore[arg-type]
        ]
    )


class FakeSelect:
    """Stand-in for ``questionary.select`` that answers without a terminal.

    ``answer`` may be a value, an exception to raise, or a callable that
    receives the offered choices and returns the chosen value.
    """

    def __init__(self, answer: Any) -> None:
        self.answer = answer
        self.calls: list[tuple[str, list[questionary.Choice]]] = []

    def __call__(
        self, message: str, choices: list[questionary.Choice], **kwargs: Any
    ) -> "FakeSelect":
        self.calls.append((message, list(choices)))
        return self

    def unsafe_ask(self) -> Any:
        if isinstance(self.answer, BaseException):
            raise self.answer
        if callable(self.answer):
            return self.answer(self.calls[-1][1])
        return self.answer

    @property
    def offered_titles(self) -> list[str]:
        """Choice labels of the most recent prompt."""
        return [choice.title for choice in self.calls[-1][1]]


@pytest.fixture
def fake_select(monkeypatch: pytest.MonkeyPatch) -> Callable[[Any], FakeSelect]:
    """Install a FakeSelect in place of questionary.select."""

    def install(answer: Any) -> FakeSelect:
        fake = FakeSelect(answer)
        monkeypatch.setattr(questionary, "select", fake)
        return fake

    return install


def choose(title_fragment: str) -> Callable[[list[questionary.Choice]], Any]:
    """Answer callable picking the first choice whose label contains the fragment."""

    def pick(choices: list[questionary.Choice]) -> Any:
        return next(c.value for c in choices if title_fragment in str(c.title))

    return pick


@pytest.fixture
def choose_title() -> Callable[[str], Callable[[list[questionary.Choice]], Any]]:
    """Expose ``choose`` to tests."""
    return choose
