"""
Age buckets based on a file's last modification time.

Policy, in whole days since modification (inclusive ranges):

    0-7     no bucket (file stays directly in its category folder)
    8-30    Previous_30_days
    31-59   Previous_60_days
    60+     Older_than_60_days

Modification times in the future count as fresh.
"""

import time
from pathlib import Path
from typing import Optional

SECONDS_PER_DAY = 86400

# (first day, last day or None for open-ended, bucket name), least stale first
AGE_BUCKETS = (
    (8, 30, "Previous_30_days"),
    (31, 59, "Previous_60_days"),
    (60, None, "Older_than_60_days"),
)


def age_in_days(modified: float, now: float) -> int:
    """Whole days elapsed between two POSIX timestamps (floored)."""
    return int((now - modified) // SECONDS_PER_DAY)


def bucket_for_age(modified: float, now: float) -> Optional[str]:
    """Map a modification timestamp to its age bucket relative to ``now``."""
    days = age_in_days(modified, now)

    for first, last, name in AGE_BUCKETS:
        if days >= first and (last is None or days <= last):
            return name

    return None


def classify_age(path: Path, now: Optional[float] = None) -> Optional[str]:
    """
    Return the age bucket for a file on disk.

    Args:
        path: File to inspect
        now: Reference timestamp (defaults to the current time)

    Raises:
        OSError: If the file metadata cannot be read
    """
    modified = Path(path).stat().st_mtime
    return bucket_for_age(modified, time.time() if now is None else now)
