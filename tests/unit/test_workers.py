import threading
import time

import pytest

from domains.file_organizer.workers import ResultsChannel, WorkerPool


def test_every_task_runs_exactly_once():
    counts: dict[int, int] = {}
    lock = threading.Lock()

    def make_task(index):
        def task():
            with lock:
                counts[index] = counts.get(index, 0) + 1
        return task

    with WorkerPool(4) as pool:
        for index in range(200):
            pool.submit(make_task(index))

    assert counts == {index: 1 for index in range(200)}


def test_tasks_run_on_pool_threads_in_parallel():
    barrier = threading.Barrier(3, timeout=5)
    names: set[str] = set()

    def task():
        names.add(threading.current_thread().name)
        barrier.wait()

    with WorkerPool(3, name="test-worker") as pool:
        for _ in range(3):
            pool.submit(task)

    assert len(names) == 3
    assert all(name.startswith("test-worker-") for name in names)


def test_failing_task_does_not_stop_the_pool(log_messages):
    done = []

    def boom():
        raise RuntimeError("bad file")

    with WorkerPool(1) as pool:
        pool.submit(boom)
        pool.submit(lambda: done.append(True))

    assert done == [True]
    assert any(level == "ERROR" and "Worker task failed" in message for level, message in log_messages)


def test_shutdown_drains_queue_and_rejects_new_tasks():
    results = []
    pool = WorkerPool(2)
    for index in range(20):
        pool.submit(lambda index=index: (time.sleep(0.001), results.append(index)))

    pool.shutdown()
    pool.shutdown()

    assert sorted(results) == list(range(20))
    assert pool.is_shutdown
    with pytest.raises(RuntimeError):
        pool.submit(lambda: None)


@pytest.mark.parametrize("count", [0, -2])
def test_worker_count_must_be_positive(count):
    with pytest.raises(ValueError):
        WorkerPool(count)


def test_default_worker_count_uses_cpu_count(monkeypatch):
    monkeypatch.setattr("domains.file_organizer.workers.os.cpu_count", lambda: None)

    with WorkerPool() as pool:
        assert pool.worker_count == 1


def test_channel_ends_after_seal_and_last_release():
    channel = ResultsChannel()

    with WorkerPool(4) as pool:
        for index in range(50):
            channel.add_sender()

            def task(index=index):
                try:
                    channel.send(index)
                finally:
                    channel.release_sender()

            pool.submit(task)
        channel.seal()

        received = list(channel)

    assert sorted(received) == list(range(50))


def test_empty_sealed_channel_is_exhausted():
    channel = ResultsChannel()
    channel.seal()

    assert list(channel) == []


def test_sealed_channel_rejects_new_senders():
    channel = ResultsChannel()
    channel.seal()

    with pytest.raises(RuntimeError):
        channel.add_sender()


def test_release_without_sender_is_an_error():
    with pytest.raises(RuntimeError):
        ResultsChannel().release_sender()
