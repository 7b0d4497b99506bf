"""Colour theme for pdl terminal output.

Usage:
    from pdl.ui import get_theme

    theme = get_theme()
    console.print(theme.success_text("Download complete!"))
"""

import os
from dataclasses import dataclass
from enum import Enum


class ThemeMode(str, Enum):
    """Available theme modes."""

    LIGHT = "light"
    DARK = "dark"
    AUTO = "auto"


@dataclass(frozen=True)
class Theme:
    """Rich colour names used across the CLI."""

    mode: str
    success: str
    error: str
    warning: str
    info: str
    banner: str  # ASCII banner
    episode: str  # Episode titles
    path: str  # File paths
    muted: str  # Hints, metadata

    def success_text(self, text: str) -> str:
        """Format text with success color and checkmark."""
        return f"[{self.success}]✓[/{self.success}] {text}"

    def error_text(self, text: str) -> str:
        """Format text with error color and X mark."""
        return f"[{self.error}]✗[/{self.error}] {text}"

    def warning_text(self, text: str) -> str:
        """Format text with warning color."""
        return f"[{self.warning}]{text}[/{self.warning}]"

    def info_text(self, text: str) -> str:
        """Format text with info color and arrow."""
        return f"[{self.info}]→[/{self.info}] {text}"

    def muted_text(self, text: str) -> str:
        """Format text as muted/dim."""
        return f"[{self.muted}]{text}[/{self.muted}]"


DARK_THEME = Theme(
    mode="dark",
    success="green",
    error="red",
    warning="yellow",
    info="cyan",
    banner="bold cyan",
    episode="bold",
    path="steel_blue1",
    muted="dim",
)

LIGHT_THEME = Theme(
    mode="light",
    success="dark_green",
    error="red",
    warning="dark_orange",
    info="dark_cyan",
    banner="bold dark_cyan",
    episode="bold",
    path="blue",
    muted="grey50",
)


def detect_terminal_theme() -> ThemeMode:
    """Guess the terminal background; defaults to dark.

    ``PDL_THEME`` overrides detection, then ``COLORFGBG`` is consulted.
    """
    override = os.environ.get("PDL_THEME", "").lower()
    if override in (ThemeMode.LIGHT.value, ThemeMode.DARK.value):
        return ThemeMode(override)

    # Format is "foreground;background" where 15=white bg, 0=black bg
    parts = os.environ.get("COLORFGBG", "").split(";")
    if len(parts) >= 2 and parts[-1].isdigit():
        return ThemeMode.LIGHT if int(parts[-1]) >= 7 else ThemeMode.DARK

    return ThemeMode.DARK


_current_theme: Theme | None = None


def set_theme(mode: ThemeMode | str) -> Theme:
    """Set and cache the current theme."""
    global _current_theme

    mode = ThemeMode(mode.lower()) if isinstance(mode, str) else mode
    if mode == ThemeMode.AUTO:
        mode = detect_terminal_theme()

    _current_theme = LIGHT_THEME if mode == ThemeMode.LIGHT else DARK_THEME
    return _current_theme


def get_theme() -> Theme:
    """Get the current theme, auto-detecting it on first use."""
    if _current_theme is None:
        return set_theme(ThemeMode.AUTO)
    return _current_theme


def reset_theme() -> None:
    """Forget the cached theme so it is detected again on next access."""
    global _current_theme
    _current_theme = None
