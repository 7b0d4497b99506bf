"""UI utilities for the pdl CLI."""

from pdl.ui.banner import render_banner
from pdl.ui.selector import EpisodeSelector, SelectionCancelled
from pdl.ui.theme import Theme, ThemeMode, get_theme, reset_theme, set_theme

__all__ = [
    "EpisodeSelector",
    "SelectionCancelled",
    "Theme",
    "ThemeMode",
    "get_theme",
    "render_banner",
    "reset_theme",
    "set_theme",
]
