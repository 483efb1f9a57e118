"""
Watchman Organizer - command-line entry point.

Organizes a directory once and, with ``--watch``, keeps it organized:
- Duplicate files (by content) go to duplicates/
- Everything else goes to a category folder, split by age
"""

from __future__ import annotations

import argparse
import signal
import sys
import threading
from pathlib import Path
from typing import Optional

from loguru import logger

from app.utils.config import Settings, get_settings
from app.utils.helpers import format_duration, normalise_path
from domains.file_organizer.errors import WatchError
from domains.file_organizer.organizer import Organizer
from domains.file_organizer.watchers.directory import DirectoryWatcher

__version__ = "0.1.0"

LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO"):
    """Route loguru output to stdout with the application format."""
    logger.remove()
    logger.add(sys.stdout, format=LOG_FORMAT, level=level.upper())


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments."""

    parser = argparse.ArgumentParser(
        prog="watchman-organize",
        description="Deduplicate and organize the files of a directory by type and age.",
    )
    parser.add_argument(
        "-p",
        "--path",
        type=Path,
        required=True,
        help="Directory to organize.",
    )
    parser.add_argument(
        "-w",
        "--watch",
        action="store_true",
        help="Keep running and reorganize whenever files are added or changed.",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of hashing threads (default: number of CPUs).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: LOG_LEVEL from the environment, else INFO).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Overlay CLI options on the environment settings."""
    settings = get_settings()
    overrides = {}
    if args.workers is not None:
        overrides["worker_count"] = args.workers
    if args.log_level:
        overrides["log_level"] = args.log_level
    if not overrides:
        return settings
    return Settings(**{**settings.model_dump(), **overrides})


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the CLI."""

    args = parse_args(argv)

    try:
        settings = build_settings(args)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    folder = normalise_path(args.path)
    if not folder.is_dir():
        logger.error(f"Not a directory: {folder}")
        return 1

    with Organizer(folder, settings=settings) as organizer:
        try:
            report = organizer.run_pass()
        except OSError as e:
            logger.error(f"Failed to organize {folder}: {e}")
            return 1

        logger.info(f"Organized {folder} in {format_duration(report.elapsed)}")
        logger.info(report.summary())

        if not args.watch:
            return 0

        watcher = DirectoryWatcher(organizer, settings=settings)

        def _signal_handler(signum, frame):  # noqa: D401
            logger.info(f"Received signal {signum}, shutting down.")
            watcher.stop()

        if threading.current_thread() is threading.main_thread():
            signal.signal(signal.SIGINT, _signal_handler)
            signal.signal(signal.SIGTERM, _signal_handler)

        try:
            watcher.run()
        except WatchError as e:
            logger.error(f"Watcher error: {e}")
            return 1

    return 0


if __name__ == "__main__":  # pragma: no cover - CLI bridge
    sys.exit(main())
