"""
Helper utilities for the Watchman organizer.

Common functions used across domains.
"""

from pathlib import Path
from typing import Union

HIDDEN_PREFIX = "."


def normalise_path(path: Union[str, Path]) -> Path:
    """Return a resolved version of ``path`` without forcing existence."""
    path = Path(path)
    try:
        return path.expanduser().resolve()
    except FileNotFoundError:
        return path.expanduser().absolute()


def is_hidden(path: Union[str, Path]) -> bool:
    """Check if path is hidden (starts with dot)."""
    return Path(path).name.startswith(HIDDEN_PREFIX)


def get_file_extension(path: Path) -> str:
    """Get lowercased file extension without dot (empty if none)."""
    return path.suffix.lstrip('.').lower()


def format_duration(seconds: float) -> str:
    """Format a duration as a short human-readable string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f} ms"
    if seconds < 60:
        return f"{seconds:.2f} s"
    minutes, secs = divmod(seconds, 60)
    return f"{int(minutes)}m {secs:.0f}s"
