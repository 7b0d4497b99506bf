"""RSS feed fetching and parsing for pdl."""

from pdl.feeds.models import Episode
from pdl.feeds.parser import RSSParser

__all__ = ["Episode", "RSSParser"]
