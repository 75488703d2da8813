"""Reader/writer lock for volume operations."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class RWLock:
    """Manager-wide readers-writer lock.

    Any number of threads may hold the shared side at once; the exclusive
    side excludes everyone. A waiting writer blocks new readers, so a steady
    stream of Get/List calls cannot starve Create/Mount.

    Not reentrant: a thread must not re-acquire a side it already holds.

    Usage:
        with lock.exclusive():
            ...mutate...

        with lock.shared():
            ...inspect...
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a shared hold")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() called without an exclusive hold")
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def shared(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
