import os
import time

import pytest
from loguru import logger

from app.utils.config import Settings

DAY = 86400


@pytest.fixture
def log_messages():
    """Collect loguru records emitted during a test as (level, message) pairs."""
    records: list[tuple[str, str]] = []

    def sink(message):
        record = message.record
        records.append((record["level"].name, record["message"]))

    handler_id = logger.add(sink, level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        worker_count=4,
        hash_chunk_size=64,
        watch_debounce_seconds=0.2,
        watch_poll_interval=0.1,
    )


@pytest.fixture
def backdate():
    """Return a helper that marks a path as last modified ``days`` ago."""

    def _backdate(path, days: float, now: float | None = None) -> None:
        now = time.time() if now is None else now
        stamp = now - days * DAY
        os.utime(path, (stamp, stamp))

    return _backdate
