"""Classification of filesystem entries."""

from __future__ import annotations

import logging
import stat
from enum import Enum

from dirscan.fs import FileSystem

logger = logging.getLogger(__name__)


class FileKind(str, Enum):
    """What a path was at the moment it was classified."""

    REGULAR = "regular"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    CHAR_DEVICE = "char_device"
    BLOCK_DEVICE = "block_device"
    FIFO = "fifo"
    SOCKET = "socket"
    OTHER = "other"
    UNREADABLE = "unreadable"

    @property
    def is_container(self) -> bool:
        """Directories and symlinks are both candidates for expansion."""
        return self in (FileKind.DIRECTORY, FileKind.SYMLINK)

    @property
    def is_special(self) -> bool:
        return self in _SPECIAL_DESCRIPTIONS


_SPECIAL_DESCRIPTIONS: dict[FileKind, str] = {
    FileKind.CHAR_DEVICE: "character special file",
    FileKind.BLOCK_DEVICE: "block special file",
    FileKind.FIFO: "pipe file",
    FileKind.SOCKET: "socket file",
    FileKind.OTHER: "special file",
}


def describe_special(kind: FileKind) -> str:
    """Human-readable name for a device, pipe, or socket kind."""
    return _SPECIAL_DESCRIPTIONS[kind]


def kind_from_mode(mode: int) -> FileKind:
    """Map ``st_mode`` type bits to a :class:`FileKind`."""
    if stat.S_ISREG(mode):
        return FileKind.REGULAR
    if stat.S_ISDIR(mode):
        return FileKind.DIRECTORY
    if stat.S_ISLNK(mode):
        return FileKind.SYMLINK
    if stat.S_ISCHR(mode):
        return FileKind.CHAR_DEVICE
    if stat.S_ISBLK(mode):
        return FileKind.BLOCK_DEVICE
    if stat.S_ISFIFO(mode):
        return FileKind.FIFO
    if stat.S_ISSOCK(mode):
        return FileKind.SOCKET
    return FileKind.OTHER


def classify(
    path: str,
    *,
    fs: FileSystem,
    log: logging.Logger | None = None,
) -> FileKind:
    """Classify ``path`` without following symbolic links.

    Status is queried first, then read permission, then the type bits.
    Either failure is reported as a warning and yields ``UNREADABLE``;
    the caller skips the entry and carries on.
    """
    log = log or logger

    try:
        st = fs.lstat(path)
    except OSError:
        log.warning("Unable to access file '%s'", path)
        return FileKind.UNREADABLE

    if not fs.is_readable(path):
        log.warning("Unable to read file '%s'", path)
        return FileKind.UNREADABLE

    return kind_from_mode(st.st_mode)
