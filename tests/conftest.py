"""Shared fixtures: a sample directory tree and a recording filesystem."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from dirscan.fs import DirHandle, OSFileSystem


class FailingCloseHandle(DirHandle):
    def __init__(self, path: str, closed: list[str]):
        super().__init__(path)
        self._closed = closed

    def close(self) -> None:
        super().close()
        self._closed.append(self.path)
        raise OSError(5, "Input/output error", self.path)


class TrackedHandle(DirHandle):
    def __init__(self, path: str, closed: list[str], fail_read: bool = False):
        super().__init__(path)
        self._closed = closed
        self._fail_read = fail_read

    def __iter__(self):
        if self._fail_read:
            raise OSError(5, "Input/output error", self.path)
        return super().__iter__()

    def close(self) -> None:
        super().close()
        self._closed.append(self.path)


class RecordingFileSystem(OSFileSystem):
    """The live filesystem, with every call recorded and selected calls failing."""

    def __init__(
        self,
        *,
        missing: set[str] | None = None,
        unreadable: set[str] | None = None,
        unopenable: set[str] | None = None,
        fail_read: set[str] | None = None,
        fail_close: set[str] | None = None,
    ):
        self.missing = missing or set()
        self.unreadable = unreadable or set()
        self.unopenable = unopenable or set()
        self.fail_read = fail_read or set()
        self.fail_close = fail_close or set()
        self.calls: list[tuple[str, str]] = []
        self.closed: list[str] = []

    def opened(self) -> list[str]:
        return [path for op, path in self.calls if op == "open_dir"]

    def lstat(self, path: str) -> os.stat_result:
        self.calls.append(("lstat", path))
        if path in self.missing:
            raise FileNotFoundError(2, "No such file or directory", path)
        return super().lstat(path)

    def is_readable(self, path: str) -> bool:
        self.calls.append(("is_readable", path))
        if path in self.unreadable:
            return False
        return super().is_readable(path)

    def open_dir(self, path: str) -> DirHandle:
        self.calls.append(("open_dir", path))
        if path in self.unopenable:
            raise PermissionError(13, "Permission denied", path)
        if path in self.fail_close:
            return FailingCloseHandle(path, self.closed)
        return TrackedHandle(path, self.closed, fail_read=path in self.fail_read)

    def realpath(self, path: str) -> str:
        self.calls.append(("realpath", path))
        return super().realpath(path)


@pytest.fixture
def recording_fs() -> type[RecordingFileSystem]:
    return RecordingFileSystem


@pytest.fixture
def sample_dir(tmp_path: Path) -> Path:
    """Create the tree used throughout the traversal tests.

    dir/
        a  b  c.jpg  d.jpg  d.pgm
        empty_dir/
        sub_dir/
            e.pgm  f.ppm
    """
    root = tmp_path / "dir"
    root.mkdir()
    for name in ("a", "b", "c.jpg", "d.jpg", "d.pgm"):
        (root / name).write_text(name)

    (root / "empty_dir").mkdir()

    sub = root / "sub_dir"
    sub.mkdir()
    (sub / "e.pgm").write_text("e")
    (sub / "f.ppm").write_text("f")

    return root
