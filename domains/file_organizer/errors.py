"""
Error kinds raised by the file organizer.

Plain ``OSError`` covers scan, metadata, mkdir and rename failures.
"""

from pathlib import Path


class HashFailure(OSError):
    """Reading a file failed while computing its content digest."""

    def __init__(self, path: Path, cause: OSError):
        super().__init__(cause.errno, cause.strerror or str(cause), str(path))
        self.path = Path(path)
        self.cause = cause


class WatchError(RuntimeError):
    """Base class for filesystem notification failures."""


class WatchInitError(WatchError):
    """The notification subsystem could not be started."""


class WatchStreamError(WatchError):
    """The notification subsystem failed after it was started."""
