"""Shared HTTP client construction."""

import httpx

from pdl import __version__

USER_AGENT = f"pdl/{__version__} (+podcast downloader)"


def create_http_client(timeout: float = 30.0) -> httpx.Client:
    """Create the blocking HTTP client used for feeds and downloads.

    Redirects are followed since most podcast hosts bounce enclosure URLs
    through tracking redirects.
    """
    return httpx.Client(
        timeout=timeout,
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
    )
