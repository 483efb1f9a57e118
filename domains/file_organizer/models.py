"""Value types exchanged during an organizer pass."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class HashResult:
    """Outcome of one hashing task, sent from a worker to the coordinator.

    Exactly one of ``digest`` and ``error`` is set.
    """

    path: Path
    digest: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class ClassificationDecision:
    """Target folder name plus optional age subfolder for one file."""

    category: str
    age_bucket: Optional[str] = None

    def destination(self, root: Path) -> Tuple[Path, Optional[str]]:
        """Return ``(destination_root, subfolder)`` for the relocator."""
        return root / self.category, self.age_bucket


@dataclass(slots=True)
class PassReport:
    """Counters describing one completed organizer pass."""

    root: Path
    scanned: int = 0
    dispatched: int = 0
    moved: int = 0
    duplicates: int = 0
    skipped: int = 0
    errors: int = 0
    elapsed: float = 0.0

    def summary(self) -> str:
        return (
            f"{self.dispatched} file(s) hashed, {self.moved} moved, "
            f"{self.duplicates} duplicate(s), {self.skipped} skipped, "
            f"{self.errors} error(s)"
        )
