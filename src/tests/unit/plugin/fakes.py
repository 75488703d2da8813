"""Recording fake for the image tool interfaces."""

import os
import shutil
import threading
from pathlib import Path

from filevol_plugin.api.errors import ToolFailureError
from filevol_plugin.infra import ImageAllocator, ImageFormatter, LoopMounter


class FakeImageTools(ImageAllocator, ImageFormatter, LoopMounter):
    """Records tool calls and simulates their effect on a temp directory.

    Set `fail` to the operations that should exit non-zero. `hold` pauses
    an operation until the test sets the paired event.
    """

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.fail: set[str] = set()
        self.mounted: set[str] = set()
        self.entered: dict[str, threading.Event] = {}
        self.hold: dict[str, threading.Event] = {}
        self._active = 0
        self.max_active = 0
        self._guard = threading.Lock()

    def _enter(self, op: str, *args: str) -> None:
        with self._guard:
            self.calls.append((op, *args))
            self._active += 1
            self.max_active = max(self.max_active, self._active)
        if op in self.entered:
            self.entered[op].set()
        if op in self.hold:
            self.hold[op].wait(timeout=5)

    def _leave(self) -> None:
        with self._guard:
            self._active -= 1

    def _maybe_fail(self, op: str, cmd: list[str]) -> None:
        if op in self.fail:
            raise ToolFailureError(cmd, 1, f"{op} failed")

    def ops(self) -> list[str]:
        return [call[0] for call in self.calls]

    def allocate(self, path: str, size: str) -> None:
        self._enter("allocate", path, size)
        try:
            self._maybe_fail("allocate", ["dd", f"of={path}"])
            Path(path).write_bytes(b"")
        finally:
            self._leave()

    def copy(self, source: str, target: str) -> None:
        self._enter("copy", source, target)
        try:
            self._maybe_fail("copy", ["cp", source, target])
            shutil.copyfile(source, target)
        finally:
            self._leave()

    def delete(self, path: str) -> None:
        self._enter("delete", path)
        try:
            self._maybe_fail("delete", ["rm", "-f", path])
            if os.path.exists(path):
                os.remove(path)
        finally:
            self._leave()

    def format(self, path: str, fstype: str) -> None:
        self._enter("format", path, fstype)
        try:
            self._maybe_fail("format", ["mkfs", "-t", fstype, "-F", path])
            Path(path).write_text(f"fs:{fstype}")
        finally:
            self._leave()

    def mount(self, image: str, mountpoint: str, fstype: str) -> None:
        self._enter("mount", image, mountpoint, fstype)
        try:
            cmd = ["mount", "-o", "loop", "-t", fstype, image, mountpoint]
            self._maybe_fail("mount", cmd)
            with self._guard:
                if mountpoint in self.mounted:
                    raise ToolFailureError(cmd, 32, f"{mountpoint} already mounted")
                self.mounted.add(mountpoint)
        finally:
            self._leave()

    def unmount(self, mountpoint: str) -> None:
        self._enter("unmount", mountpoint)
        try:
            cmd = ["umount", mountpoint]
            self._maybe_fail("unmount", cmd)
            with self._guard:
                if mountpoint not in self.mounted:
                    raise ToolFailureError(cmd, 32, f"{mountpoint}: not mounted")
                self.mounted.discard(mountpoint)
        finally:
            self._leave()

