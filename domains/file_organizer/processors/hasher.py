"""
Content hashing for duplicate detection.

Files are streamed through BLAKE2b in fixed-size chunks so peak memory does
not depend on file size. The digest only has to tell contents apart quickly,
it is not an integrity guarantee.
"""

import hashlib
from pathlib import Path

from domains.file_organizer.errors import HashFailure

DEFAULT_CHUNK_SIZE = 8192


def hash_file(path: Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """
    Compute the hex digest of a file's content.

    Args:
        path: File to hash
        chunk_size: Bytes read per iteration

    Returns:
        Hexadecimal digest string

    Raises:
        HashFailure: If the file cannot be opened or read
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")

    hasher = hashlib.blake2b()

    try:
        with open(path, "rb") as handle:
            for chunk in iter(lambda: handle.read(chunk_size), b""):
                hasher.update(chunk)
    except OSError as e:
        raise HashFailure(Path(path), e) from e

    return hasher.hexdigest()
