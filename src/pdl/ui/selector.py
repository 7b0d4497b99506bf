"""Interactive feed and episode selection.

Prompts are arrow-key navigable single-choice lists built with questionary.
A user abort (Ctrl-C, or closed input) is returned as a SelectionCancelled
value rather than raised, so callers can tell "user declined" apart from
real failures.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

import questionary

from pdl.config.schema import FeedConfig
from pdl.feeds.models import Episode
from pdl.utils.display import truncate_text

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Long titles wrap badly inside prompt_toolkit menus
MAX_LABEL_LENGTH = 100


@dataclass(frozen=True)
class SelectionCancelled:
    """The user aborted a prompt."""

    reason: str = "cancelled by user"


class EpisodeSelector:
    """Single-choice prompts for feeds and episodes."""

    def __init__(self, qmark: str = "?") -> None:
        self.qmark = qmark

    def select_feed(self, feeds: Sequence[FeedConfig]) -> FeedConfig | SelectionCancelled:
        """Ask which feed to use.

        The prompt is skipped when only one feed is configured.

        Raises:
            ValueError: If ``feeds`` is empty
        """
        if not feeds:
            raise ValueError("No feeds configured")
        if len(feeds) == 1:
            return feeds[0]

        labels = [feed.name for feed in feeds]
        return self._ask("Select a podcast feed:", labels, list(feeds))

    def select_episode(self, episodes: Sequence[Episode]) -> Episode | SelectionCancelled:
        """Ask which episode to download.

        Episodes are listed in the given order, numbered from 1.

        Raises:
            ValueError: If ``episodes`` is empty
        """
        if not episodes:
            raise ValueError("No episodes to select from")

        labels = [self.episode_label(i, episode) for i, episode in enumerate(episodes, 1)]
        return self._ask("Select an episode to download:", labels, list(episodes))

    @staticmethod
    def episode_label(number: int, episode: Episode) -> str:
        """Menu label for an episode, e.g. ``2. Ep/2 (2024-01-31)``."""
        label = f"{number}. {truncate_text(episode.title, MAX_LABEL_LENGTH)}"
        if episode.published_date:
            label = f"{label} ({episode.published_date})"
        return label

    def _ask(self, message: str, labels: list[str], values: list[T]) -> T | SelectionCancelled:
        choices = [
            questionary.Choice(title=label, value=index) for index, label in enumerate(labels)
        ]

        try:
            index = questionary.select(message, choices=choices, qmark=self.qmark).unsafe_ask()
        except KeyboardInterrupt:
            logger.debug("Selection interrupted")
            return SelectionCancelled()
        except EOFError:
            logger.debug("Input closed during selection")
            return SelectionCancelled("input closed")

        if index is None:
            return SelectionCancelled()

        logger.debug("Selected %r", labels[index])
        return values[index]
