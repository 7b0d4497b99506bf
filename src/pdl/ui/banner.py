"""Startup banner."""

from rich.console import Console

from pdl import __version__
from pdl.ui.theme import get_theme

BANNER = r"""
 ____   ____  _
|  _ \ |  _ \| |
| |_) || | | | |
|  __/ | |_| | |___
|_|    |____/|_____|
"""


def render_banner(console: Console) -> None:
    """Print the ASCII banner and version line."""
    theme = get_theme()
    console.print(BANNER, style=theme.banner, highlight=False)
    console.print(theme.muted_text(f"Podcast Downloader v{__version__}"))
    console.print()
