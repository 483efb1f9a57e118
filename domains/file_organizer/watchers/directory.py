"""
Directory watcher for the File Organizer domain.

Watches the organized directory (non-recursively) with watchdog and re-runs the
organizer whenever a file is created or its content changes. Bursts of events
collapse into a single pass, and passes never overlap: the watchdog thread only
raises a flag, the pass itself always runs on the thread that called ``run()``.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable, Optional

from loguru import logger
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from app.utils.config import Settings
from app.utils.helpers import format_duration, is_hidden, normalise_path
from domains.file_organizer.errors import WatchInitError, WatchStreamError
from domains.file_organizer.organizer import Organizer


class ReorganizeEventHandler(FileSystemEventHandler):
    """Turns relevant file events into a pending-reorganization flag."""

    def __init__(self, root: Path, log=logger):
        """
        Initialize event handler.

        Args:
            root: Watched directory
            log: Logger instance
        """
        super().__init__()
        self.root = normalise_path(root)
        self.log = log
        self.pending = threading.Event()
        self.failure: Optional[WatchStreamError] = None

    def should_process(self, event: FileSystemEvent) -> bool:
        """Only visible files matter; directory events come from our own moves."""
        if event.is_directory:
            return False
        return not is_hidden(event.src_path)

    def on_created(self, event: FileSystemEvent):
        """Handle file creation."""
        if not self.should_process(event):
            return

        self.log.debug(f"Created: {event.src_path}")
        self.pending.set()

    def on_modified(self, event: FileSystemEvent):
        """Handle file content modification."""
        if not self.should_process(event):
            return

        self.log.debug(f"Modified: {event.src_path}")
        self.pending.set()

    def on_deleted(self, event: FileSystemEvent):
        """Only the loss of the watched directory itself matters."""
        if normalise_path(event.src_path) != self.root:
            return

        self.failure = WatchStreamError(f"Watched directory was removed: {self.root}")
        self.pending.set()


class DirectoryWatcher:
    """Keeps a directory organized as files arrive."""

    def __init__(
        self,
        organizer: Organizer,
        settings: Optional[Settings] = None,
        observer_factory: Callable[[], Observer] = Observer,
        log=logger,
    ):
        """
        Initialize directory watcher.

        Args:
            organizer: Organizer whose directory is watched
            settings: Settings instance (defaults to cached settings)
            observer_factory: Builds the watchdog observer
            log: Logger instance
        """
        self.organizer = organizer
        self.root = organizer.root
        self.settings = settings or organizer.settings
        self.observer_factory = observer_factory
        self.log = log

        self.handler = ReorganizeEventHandler(self.root, log=log)
        self.observer: Optional[Observer] = None
        self.passes = 0
        self._stop = threading.Event()
        self._lock = threading.RLock()

    def start(self):
        """
        Start the watchdog observer.

        Raises:
            WatchInitError: If the directory cannot be watched
        """
        if self.observer is not None:
            return

        if not self.root.is_dir():
            raise WatchInitError(f"Cannot watch {self.root}: not a directory")

        observer = self.observer_factory()
        try:
            observer.schedule(self.handler, str(self.root), recursive=False)
            observer.start()
        except Exception as e:
            raise WatchInitError(f"Failed to watch {self.root}: {e}") from e

        self.observer = observer
        self.log.info(f"Watching folder: {self.root}")

    def stop(self):
        """Stop watching."""
        self._stop.set()
        self.handler.pending.set()

        with self._lock:
            observer, self.observer = self.observer, None
        if observer is None:
            return

        observer.stop()
        if observer is not threading.current_thread():
            observer.join()
        self.log.info("Directory watcher stopped")

    def run(self):
        """
        Watch and reorganize until ``stop()`` is called.

        Raises:
            WatchInitError: If watching cannot start
            WatchStreamError: If notifications stop arriving
        """
        self.start()

        try:
            while not self._stop.is_set():
                triggered = self.handler.pending.wait(self.settings.watch_poll_interval)
                self._check_stream()

                if not triggered or self._stop.is_set():
                    continue

                # Let the burst settle, then consume everything seen so far
                if self._stop.wait(self.settings.watch_debounce_seconds):
                    break
                self.handler.pending.clear()
                self._check_stream()

                self.reorganize()
        finally:
            self.stop()

    def reorganize(self):
        """Run one pass, logging failures instead of raising them."""
        self.passes += 1
        self.log.info("New file detected. Reorganizing...")

        try:
            report = self.organizer.run_pass()
        except OSError as e:
            self.log.error(f"Error during reorganization: {e}")
            return None

        self.log.success(
            f"Reorganization finished in {format_duration(report.elapsed)}: {report.summary()}"
        )
        return report

    def _check_stream(self):
        if self._stop.is_set():
            return

        if self.handler.failure is not None:
            raise self.handler.failure

        observer = self.observer
        if observer is not None and not observer.is_alive():
            raise WatchStreamError(f"Observer for {self.root} stopped unexpectedly")

        if not self.root.is_dir():
            raise WatchStreamError(f"Watched directory is gone: {self.root}")
