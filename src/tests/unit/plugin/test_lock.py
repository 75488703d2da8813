"""Unit tests for the manager-wide RWLock."""

import threading

import pytest

from filevol_plugin.runtimes.loopfs.lock import RWLock


def _start(target) -> threading.Thread:
    t = threading.Thread(target=target, daemon=True)
    t.start()
    return t


class TestRWLock:
    """Tests for RWLock."""

    def test_readers_share(self) -> None:
        lock = RWLock()
        holding = threading.Event()
        release = threading.Event()

        def reader() -> None:
            with lock.shared():
                holding.set()
                release.wait(timeout=5)

        t = _start(reader)
        assert holding.wait(timeout=5)

        acquired = threading.Event()
        second = _start(lambda: (lock.acquire_read(), acquired.set(), lock.release_read()))
        assert acquired.wait(timeout=1)

        release.set()
        t.join(timeout=5)
        second.join(timeout=5)

    def test_writer_excludes_readers(self) -> None:
        lock = RWLock()
        acquired = threading.Event()

        with lock.exclusive():
            t = _start(lambda: (lock.acquire_read(), acquired.set(), lock.release_read()))
            assert not acquired.wait(timeout=0.2)

        assert acquired.wait(timeout=5)
        t.join(timeout=5)

    def test_reader_excludes_writer(self) -> None:
        lock = RWLock()
        acquired = threading.Event()

        with lock.shared():
            t = _start(lambda: (lock.acquire_write(), acquired.set(), lock.release_write()))
            assert not acquired.wait(timeout=0.2)

        assert acquired.wait(timeout=5)
        t.join(timeout=5)

    def test_writers_exclude_each_other(self) -> None:
        lock = RWLock()
        acquired = threading.Event()

        with lock.exclusive():
            t = _start(lambda: (lock.acquire_write(), acquired.set(), lock.release_write()))
            assert not acquired.wait(timeout=0.2)

        assert acquired.wait(timeout=5)
        t.join(timeout=5)

    def test_waiting_writer_blocks_new_readers(self) -> None:
        lock = RWLock()
        order: list[str] = []

        lock.acquire_read()
        writer = _start(lambda: (lock.acquire_write(), order.append("writer"), lock.release_write()))
        # Give the writer time to queue behind the first reader
        writer.join(timeout=0.2)
        reader = _start(lambda: (lock.acquire_read(), order.append("reader"), lock.release_read()))
        reader.join(timeout=0.2)

        assert order == []
        lock.release_read()
        writer.join(timeout=5)
        reader.join(timeout=5)

        assert order == ["writer", "reader"]

    def test_release_is_exception_safe(self) -> None:
        lock = RWLock()

        with pytest.raises(ValueError):
            with lock.exclusive():
                raise ValueError("boom")

        with lock.exclusive():
            pass

    def test_release_without_hold(self) -> None:
        lock = RWLock()

        with pytest.raises(RuntimeError):
            lock.release_read()
        with pytest.raises(RuntimeError):
            lock.release_write()
