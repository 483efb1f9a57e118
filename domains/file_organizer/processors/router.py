"""
Extension-based routing into category folders.
"""

from pathlib import Path
from typing import Optional

from app.utils.helpers import get_file_extension
from domains.file_organizer.models import ClassificationDecision
from domains.file_organizer.processors.age import classify_age

DEFAULT_CATEGORY = "others"
DUPLICATES_FOLDER = "duplicates"

CATEGORY_EXTENSIONS = {
    "images": {"jpg", "jpeg", "png", "bmp", "tiff"},
    "gifs": {"gif"},
    "videos": {"mp4", "mov", "avi", "mkv"},
    "audio": {"mp3", "wav", "flac"},
    "documents": {"pdf", "docx", "txt"},
    "archives": {"zip", "rar", "7z"},
}

_EXTENSION_INDEX = {
    extension: category
    for category, extensions in CATEGORY_EXTENSIONS.items()
    for extension in extensions
}


def category_for(path: Path) -> str:
    """Return the category folder for a file based on its extension."""
    return _EXTENSION_INDEX.get(get_file_extension(Path(path)), DEFAULT_CATEGORY)


def classify(path: Path, now: Optional[float] = None) -> ClassificationDecision:
    """
    Decide where a file belongs.

    Args:
        path: File to classify
        now: Reference timestamp for the age bucket

    Raises:
        OSError: If the file metadata cannot be read
    """
    path = Path(path)
    return ClassificationDecision(
        category=category_for(path),
        age_bucket=classify_age(path, now),
    )
