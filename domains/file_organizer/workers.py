"""
Fixed-size worker pool and the results channel used for hash fan-out/fan-in.

The pool is the only source of parallelism in a pass: tasks run on long-lived
threads and must not start threads of their own. Tasks return nothing through
the pool; they report through a ``ResultsChannel`` handed to them.
"""

from __future__ import annotations

import os
import queue
import threading
from typing import Any, Callable, Iterator, List, Optional

from loguru import logger

Task = Callable[[], None]

_STOP = object()
_CLOSED = object()


class WorkerPool:
    """N worker threads consuming one shared task queue.

    Each submitted task is executed exactly once by exactly one worker.
    Completion order is unspecified. An exception escaping a task is logged
    and the worker moves on to the next task.
    """

    def __init__(self, worker_count: Optional[int] = None, name: str = "hash-worker", log=logger):
        if worker_count is None:
            worker_count = os.cpu_count() or 1
        if worker_count < 1:
            raise ValueError(f"worker_count must be >= 1, got {worker_count}")

        self.worker_count = worker_count
        self.log = log
        self._tasks: "queue.Queue[Any]" = queue.Queue()
        self._lock = threading.Lock()
        self._shutdown = False
        self._workers: List[threading.Thread] = []

        for index in range(worker_count):
            worker = threading.Thread(
                target=self._work,
                name=f"{name}-{index}",
                daemon=True,
            )
            worker.start()
            self._workers.append(worker)

        self.log.debug(f"Worker pool started with {worker_count} thread(s)")

    def submit(self, task: Task) -> None:
        """Queue ``task`` for execution on some worker."""
        with self._lock:
            if self._shutdown:
                raise RuntimeError("cannot submit to a pool that has been shut down")
            self._tasks.put(task)

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting tasks, drain the queue and stop the workers."""
        with self._lock:
            if self._shutdown:
                already_stopped = True
            else:
                already_stopped = False
                self._shutdown = True
                # Queued after every pending task, so the queue drains first
                for _ in self._workers:
                    self._tasks.put(_STOP)

        if wait:
            for worker in self._workers:
                if worker is not threading.current_thread():
                    worker.join()

        if not already_stopped:
            self.log.debug("Worker pool shut down")

    @property
    def is_shutdown(self) -> bool:
        return self._shutdown

    def _work(self) -> None:
        while True:
            task = self._tasks.get()
            try:
                if task is _STOP:
                    return
                task()
            except Exception:
                self.log.exception("Worker task failed")
            finally:
                self._tasks.task_done()

    def __enter__(self) -> "WorkerPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()


class ResultsChannel:
    """Multi-sender, single-consumer conduit with close/drain semantics.

    Every producer registers with ``add_sender()`` and calls
    ``release_sender()`` exactly once when done. After ``seal()`` no new
    senders may register; iteration ends once the channel is sealed and the
    last registered sender has been released.
    """

    def __init__(self):
        self._items: "queue.Queue[Any]" = queue.Queue()
        self._lock = threading.Lock()
        self._senders = 0
        self._sealed = False

    def add_sender(self) -> None:
        with self._lock:
            if self._sealed:
                raise RuntimeError("channel is sealed")
            self._senders += 1

    def release_sender(self) -> None:
        with self._lock:
            if self._senders == 0:
                raise RuntimeError("release_sender() called without a registered sender")
            self._senders -= 1
            closed = self._sealed and self._senders == 0
        if closed:
            self._items.put(_CLOSED)

    def send(self, item: Any) -> None:
        self._items.put(item)

    def seal(self) -> None:
        with self._lock:
            if self._sealed:
                return
            self._sealed = True
            closed = self._senders == 0
        if closed:
            self._items.put(_CLOSED)

    def __iter__(self) -> Iterator[Any]:
        while True:
            item = self._items.get()
            if item is _CLOSED:
                return
            yield item
