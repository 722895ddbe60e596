from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from services.errors import LockAcquisitionError, ScrumPokerError

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """
    Shared/exclusive lock for thread-pool request handlers.

    - Any number of readers may hold the lock together; a writer holds it alone.
    - Writers are preferred: once a writer is waiting, new readers block behind it.
    - Acquisition always blocks until granted; there is no timeout or try-lock.
    - If an unexpected exception escapes a write section the lock is poisoned
      and every later acquisition raises LockAcquisitionError. ScrumPokerError
      subclasses are precondition failures and leave the lock healthy.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0
        self._poisoned = False

    @property
    def poisoned(self) -> bool:
        with self._cond:
            return self._poisoned

    def _check_poisoned(self) -> None:
        if self._poisoned:
            raise LockAcquisitionError("registry lock is poisoned by an earlier failure")

    def acquire_read(self) -> None:
        with self._cond:
            self._check_poisoned()
            while self._writer or self._writers_waiting:
                self._cond.wait()
                self._check_poisoned()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._check_poisoned()
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
                    self._check_poisoned()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self, *, poison: bool = False) -> None:
        with self._cond:
            self._writer = False
            if poison:
                self._poisoned = True
            self._cond.notify_all()

    @contextmanager
    def read(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        except ScrumPokerError:
            # Rejected preconditions are raised before anything is mutated.
            self.release_write()
            raise
        except BaseException:
            logger.error("[locking] Exception inside write section; poisoning lock")
            self.release_write(poison=True)
            raise
        self.release_write()
