"""Filesystem-safe filenames for downloaded episodes."""

import mimetypes
import re
from pathlib import PurePosixPath
from urllib.parse import unquote, urlparse

from pdl.feeds.models import Episode

# UTF-8 bytes of the stem; with the extension the name stays below the
# 255-byte component limit of ext4, APFS and NTFS
MAX_FILENAME_LENGTH = 200
DEFAULT_EXTENSION = "mp3"
FALLBACK_FILENAME = "episode"

_WHITESPACE = re.compile(r"\s+")
# Path separators, reserved characters and C0/C1 control characters
_ILLEGAL = re.compile(r'[\\/:*?"<>|\x00-\x1f\x7f-\x9f]')
_EXTENSION = re.compile(r"^[a-z0-9]{1,5}$")

_WINDOWS_RESERVED = frozenset(
    ["CON", "PRN", "AUX", "NUL"]
    + [f"COM{i}" for i in range(1, 10)]
    + [f"LPT{i}" for i in range(1, 10)]
)


def sanitize_filename(
    title: str,
    max_length: int = MAX_FILENAME_LENGTH,
    fallback: str = FALLBACK_FILENAME,
) -> str:
    """Turn an episode title into a filename that is legal on common filesystems.

    The result never contains path separators, control characters or any of
    ``: * ? " < > |``. Whitespace runs collapse to a single space and leading
    or trailing spaces and dots are removed. The function is idempotent.

    Args:
        title: Arbitrary episode title
        max_length: Maximum UTF-8 encoded length of the result in bytes
        fallback: Name used when nothing usable is left of the title

    Returns:
        Sanitized, non-empty filename stem (no extension)

    Example:
        >>> sanitize_filename("Ep/2")
        'Ep_2'
    """
    name = _WHITESPACE.sub(" ", title)
    name = _ILLEGAL.sub("_", name)
    name = _truncate_utf8(name.strip(" ."), max_length).rstrip(" .")

    if name.split(".")[0].upper() in _WINDOWS_RESERVED:
        name = _truncate_utf8(f"_{name}", max_length).rstrip(" .")

    return name or fallback


def _truncate_utf8(text: str, max_bytes: int) -> str:
    """Cut ``text`` to at most ``max_bytes`` UTF-8 bytes without splitting a character."""
    return text.encode("utf-8")[:max_bytes].decode("utf-8", "ignore")


def extension_from_url(
    url: str,
    media_type: str | None = None,
    default: str = DEFAULT_EXTENSION,
) -> str:
    """Work out the file extension for a media URL.

    The query string is ignored. When the URL path carries no usable suffix
    the enclosure MIME type is consulted before falling back to ``default``.

    Args:
        url: Media URL
        media_type: Optional MIME type from the feed enclosure
        default: Extension used when nothing else matches

    Returns:
        Lower-cased extension without the leading dot
    """
    path = unquote(urlparse(url).path)
    suffix = PurePosixPath(path).suffix.lstrip(".").lower()
    if _EXTENSION.match(suffix):
        return suffix

    if media_type:
        guessed = mimetypes.guess_extension(media_type.split(";")[0].strip())
        if guessed:
            return guessed.lstrip(".")

    return default


def build_filename(episode: Episode) -> str:
    """Destination filename for an episode, e.g. ``Ep_2.mp3``."""
    stem = sanitize_filename(episode.title)
    ext = extension_from_url(episode.media_url, episode.media_type)
    return f"{stem}.{ext}"
