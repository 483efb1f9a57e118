"""
Idempotent file relocation.

A move never overwrites: when the destination already holds a file with the
same name the source is left where it is. Moves use ``os.rename``; only a
cross-device rename falls back to ``shutil.move`` (copy, then delete).

The existence check and the rename are two steps, so a file created at the
destination in between by another process can still be replaced.
"""

import errno
import os
import shutil
from pathlib import Path
from typing import Optional

from loguru import logger


def relocate(
    path: Path,
    destination_root: Path,
    subfolder: Optional[str] = None,
    log=logger,
) -> bool:
    """
    Move ``path`` into ``destination_root[/subfolder]`` keeping its name.

    Args:
        path: File to move
        destination_root: Base destination folder (created if missing)
        subfolder: Optional nested folder below ``destination_root``
        log: Logger receiving move notifications

    Returns:
        True if the file was moved, False if the destination already existed

    Raises:
        OSError: If the folder cannot be created or the move fails
    """
    path = Path(path)
    target_dir = Path(destination_root)
    if subfolder:
        target_dir = target_dir / subfolder

    target_dir.mkdir(parents=True, exist_ok=True)
    target = target_dir / path.name

    if target.exists():
        log.debug(f"Skipping {path.name}: {target} already exists")
        return False

    try:
        os.rename(path, target)
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
        shutil.move(str(path), str(target))

    log.info(f"Moved {path.name} → {target}")
    return True
