"""
Organizer pass for the File Organizer domain.

One pass scans the top level of a directory, hashes every visible regular file
on the worker pool, and then, on the calling thread, drops duplicates into
``duplicates/`` and routes the rest into ``<category>[/<age bucket>]``.

Only the coordinating thread touches the set of seen digests; workers only
produce ``HashResult`` values. Nothing here can be cancelled mid-flight and
there are no timeouts, so a hung filesystem stalls the pass.
"""

from __future__ import annotations

import os
import threading
import time
from pathlib import Path
from typing import Callable, Dict, Optional, Set, Union

from loguru import logger

from app.utils.config import Settings, get_settings
from app.utils.helpers import format_duration, is_hidden, normalise_path
from domains.file_organizer.models import HashResult, PassReport
from domains.file_organizer.processors.hasher import hash_file
from domains.file_organizer.processors.relocator import relocate
from domains.file_organizer.processors.router import DUPLICATES_FOLDER, classify
from domains.file_organizer.workers import ResultsChannel, WorkerPool

# One pass at a time per directory, across every Organizer in the process
_ROOT_LOCKS: Dict[Path, threading.Lock] = {}
_ROOT_LOCKS_GUARD = threading.Lock()


def _pass_lock_for(root: Path) -> threading.Lock:
    with _ROOT_LOCKS_GUARD:
        return _ROOT_LOCKS.setdefault(root, threading.Lock())


class Organizer:
    """Runs organization passes over a single directory.

    Passes over the same directory are serialized, even between separate
    Organizer instances.
    """

    def __init__(
        self,
        root: Union[str, Path],
        settings: Optional[Settings] = None,
        pool: Optional[WorkerPool] = None,
        log=logger,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize organizer.

        Args:
            root: Directory to organize
            settings: Settings instance (defaults to cached settings)
            pool: Worker pool to hash on; created and owned here if omitted
            log: Logger receiving move, duplicate and error notifications
            clock: Source of "now" for age classification
        """
        self.root = normalise_path(root)
        self.settings = settings or get_settings()
        self.log = log
        self.clock = clock

        self._owns_pool = pool is None
        self.pool = pool or WorkerPool(self.settings.get_worker_count(), log=log)
        self._pass_lock = _pass_lock_for(self.root)

    def close(self):
        """Shut down the worker pool if this organizer created it."""
        if self._owns_pool:
            self.pool.shutdown()

    def __enter__(self) -> "Organizer":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def run_pass(self) -> PassReport:
        """
        Organize the directory once.

        Returns:
            Report of what the pass did

        Raises:
            OSError: If the directory itself cannot be listed
        """
        with self._pass_lock:
            started = time.monotonic()
            report = PassReport(root=self.root)

            channel = ResultsChannel()
            self._dispatch(channel, report)
            self._collect(channel, report)

            report.elapsed = time.monotonic() - started
            self.log.debug(f"Pass over {self.root} finished in {format_duration(report.elapsed)}")
            return report

    def _dispatch(self, channel: ResultsChannel, report: PassReport):
        """Submit one hashing task per visible regular file, then seal the channel."""
        chunk_size = self.settings.hash_chunk_size

        try:
            with os.scandir(self.root) as entries:
                for entry in entries:
                    report.scanned += 1

                    if is_hidden(entry.name):
                        continue

                    try:
                        if not entry.is_file(follow_symlinks=False):
                            continue
                    except OSError as e:
                        self.log.warning(f"Cannot stat {entry.name}: {e}")
                        report.skipped += 1
                        continue

                    self._submit_hash(channel, Path(entry.path), chunk_size)
                    report.dispatched += 1
        finally:
            channel.seal()

    def _submit_hash(self, channel: ResultsChannel, path: Path, chunk_size: int):
        channel.add_sender()

        def task():
            try:
                channel.send(HashResult(path=path, digest=hash_file(path, chunk_size)))
            except Exception as e:
                channel.send(HashResult(path=path, error=e))
            finally:
                channel.release_sender()

        try:
            self.pool.submit(task)
        except Exception:
            channel.release_sender()
            raise

    def _collect(self, channel: ResultsChannel, report: PassReport):
        """Apply duplicate detection, classification and relocation in arrival order."""
        seen_hashes: Set[str] = set()

        for result in channel:
            try:
                self._apply(result, seen_hashes, report)
            except OSError as e:
                self.log.error(f"Failed to organize {result.path.name}: {e}")
                report.errors += 1

    def _apply(self, result: HashResult, seen_hashes: Set[str], report: PassReport):
        path = result.path

        if not result.ok:
            self.log.error(f"Failed to hash {path.name}: {result.error}")
            report.errors += 1
            return

        if not path.is_file():
            self.log.debug(f"Skipping {path.name}: no longer a regular file")
            report.skipped += 1
            return

        if result.digest in seen_hashes:
            self.log.warning(f"Duplicate found: {path.name}")
            report.duplicates += 1
            if relocate(path, self.root / DUPLICATES_FOLDER, log=self.log):
                report.moved += 1
            else:
                self.log.warning(
                    f"Duplicate {path.name} left in place: {DUPLICATES_FOLDER}/{path.name} already exists"
                )
            return

        seen_hashes.add(result.digest)

        decision = classify(path, now=self.clock())
        destination, subfolder = decision.destination(self.root)
        if relocate(path, destination, subfolder, log=self.log):
            report.moved += 1


def organize_directory(root: Union[str, Path], settings: Optional[Settings] = None) -> PassReport:
    """Run a single pass over ``root`` with a temporary organizer."""
    with Organizer(root, settings=settings) as organizer:
        return organizer.run_pass()
