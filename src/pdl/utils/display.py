"""Formatting helpers for terminal output."""


def format_bytes(num_bytes: float) -> str:
    """Format a byte count using binary units, e.g. ``1.50 MB``."""
    value = float(num_bytes)
    for unit in ("B", "KB", "MB"):
        if value < 1024:
            return f"{int(value)} B" if unit == "B" else f"{value:.2f} {unit}"
        value /= 1024
    return f"{value:.2f} GB"


def format_rate(bytes_per_second: float | None) -> str:
    """Format a transfer rate, e.g. ``512.00 KB/s``."""
    if not bytes_per_second:
        return "0 B/s"
    return f"{format_bytes(bytes_per_second)}/s"


def format_duration(seconds: float | None) -> str:
    """Format seconds as ``H:MM:SS``; ``unknown`` when not available."""
    if seconds is None:
        return "unknown"
    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours}:{minutes:02d}:{secs:02d}"


def truncate_text(text: str, max_length: int) -> str:
    """Truncate text to max_length, adding an ellipsis if shortened."""
    if len(text) <= max_length:
        return text
    return text[: max_length - 1] + "…"
