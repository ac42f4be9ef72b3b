"""Filesystem backend used by the traversal engine.

The engine never calls ``os`` directly; it goes through a :class:`FileSystem`
so tests can record or fail individual operations.
"""

from __future__ import annotations

import os
from typing import Iterator, Protocol


class DirHandle:
    """An open directory. Closed when the ``with`` block exits, on every path."""

    def __init__(self, path: str):
        self.path = path
        self._scandir = os.scandir(path)

    def __iter__(self) -> Iterator[str]:
        # os.scandir never yields "." or ".."
        names = sorted(entry.name for entry in self._scandir)
        return iter(names)

    def close(self) -> None:
        self._scandir.close()

    def __enter__(self) -> "DirHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class FileSystem(Protocol):
    """Operations the traversal engine needs from the filesystem."""

    def lstat(self, path: str) -> os.stat_result: ...

    def is_readable(self, path: str) -> bool: ...

    def open_dir(self, path: str) -> DirHandle: ...

    def realpath(self, path: str) -> str: ...


class OSFileSystem:
    """The live filesystem."""

    def lstat(self, path: str) -> os.stat_result:
        return os.lstat(path)

    def is_readable(self, path: str) -> bool:
        """Check read permission, following links to their targets.

        A dangling link counts as readable so that it can be reported.
        """
        if os.path.islink(path) and not os.path.exists(path):
            return True
        return os.access(path, os.R_OK)

    def open_dir(self, path: str) -> DirHandle:
        return DirHandle(path)

    def realpath(self, path: str) -> str:
        return os.path.realpath(path)
