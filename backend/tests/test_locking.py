from __future__ import annotations

import threading
import time

import pytest

from services.errors import LockAcquisitionError, SessionNotFoundError
from services.locking import ReadWriteLock


def _wait_until(predicate, timeout: float = 2.0) -> None:
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise AssertionError("condition not reached in time")
        time.sleep(0.005)


def test_readers_share_the_lock() -> None:
    lock = ReadWriteLock()
    barrier = threading.Barrier(2, timeout=2)
    errors: list[BaseException] = []

    def reader() -> None:
        try:
            with lock.read():
                # Both readers must be inside at the same time to pass the barrier.
                barrier.wait()
        except threading.BrokenBarrierError as exc:
            errors.append(exc)

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)
    assert errors == []


def test_writer_excludes_readers() -> None:
    lock = ReadWriteLock()
    acquired = threading.Event()

    def reader() -> None:
        with lock.read():
            acquired.set()

    with lock.write():
        t = threading.Thread(target=reader)
        t.start()
        assert not acquired.wait(0.1)
    assert acquired.wait(2)
    t.join(timeout=5)


def test_waiting_writer_goes_before_new_readers() -> None:
    lock = ReadWriteLock()
    order: list[str] = []

    def writer() -> None:
        with lock.write():
            order.append("writer")

    def reader() -> None:
        with lock.read():
            order.append("reader")

    lock.acquire_read()
    w = threading.Thread(target=writer)
    w.start()
    _wait_until(lambda: lock._writers_waiting == 1)
    r = threading.Thread(target=reader)
    r.start()
    time.sleep(0.05)
    assert order == []
    lock.release_read()
    w.join(timeout=5)
    r.join(timeout=5)
    assert order == ["writer", "reader"]


def test_unexpected_error_in_write_section_poisons_lock() -> None:
    lock = ReadWriteLock()
    with pytest.raises(RuntimeError):
        with lock.write():
            raise RuntimeError("boom")

    assert lock.poisoned is True
    with pytest.raises(LockAcquisitionError):
        lock.acquire_read()
    with pytest.raises(LockAcquisitionError):
        with lock.write():
            pass


def test_store_errors_in_write_section_leave_lock_healthy() -> None:
    lock = ReadWriteLock()
    with pytest.raises(SessionNotFoundError):
        with lock.write():
            raise SessionNotFoundError("missing")

    assert lock.poisoned is False
    with lock.read():
        pass


def test_blocked_reader_fails_once_lock_is_poisoned() -> None:
    lock = ReadWriteLock()
    errors: list[BaseException] = []

    def reader() -> None:
        try:
            lock.acquire_read()
        except LockAcquisitionError as exc:
            errors.append(exc)

    lock.acquire_write()
    t = threading.Thread(target=reader)
    t.start()
    time.sleep(0.05)
    lock.release_write(poison=True)
    t.join(timeout=5)
    assert len(errors) == 1
