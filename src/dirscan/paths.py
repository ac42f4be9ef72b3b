"""Path normalization and path-name helpers.

Paths are plain strings throughout dirscan. They are kept exactly as the
caller spelled them (relative or absolute); the only rewriting ever done is
home-directory substitution and trailing-separator stripping on the root.
"""

from __future__ import annotations

import os

from dirscan.errors import ConfigurationError

HOME_MARKER = "~"

_SEPARATORS = tuple(s for s in (os.sep, os.altsep) if s)


def home_directory() -> str:
    """Return the user's home directory from the environment, or "" if unset."""
    if os.name == "nt":
        return os.environ.get("USERPROFILE") or os.environ.get("HOMEPATH", "")
    return os.environ.get("HOME", "")


def sub_home(path: str, home: str | None = None) -> str:
    """Substitute the home directory for a leading ``~``.

    Args:
        path: Raw path as given by the caller.
        home: Home directory to use. Defaults to :func:`home_directory`.

    Returns:
        The path with ``~`` replaced. When the home directory is empty the
        path is returned unchanged.

    Raises:
        ConfigurationError: If the marker names another user (``~bob/...``).
    """
    if not path or path[0] != HOME_MARKER:
        return path

    if len(path) >= 2 and path[1] not in _SEPARATORS:
        raise ConfigurationError(
            f"Cannot substitute another user's home directory in '{path}'"
        )

    if home is None:
        home = home_directory()
    if not home:
        return path
    return home + path[1:]


def is_root(path: str) -> bool:
    """Return True if ``path`` is the filesystem's top-level separator."""
    _, rest = os.path.splitdrive(path)
    return rest in _SEPARATORS


def strip_trailing_separator(path: str) -> str:
    """Remove a single trailing separator, never reducing the root to ""."""
    if len(path) > 1 and path.endswith(_SEPARATORS) and not is_root(path):
        return path[:-1]
    return path


def normalize_root(path: str, home: str | None = None) -> str:
    """Prepare a traversal root: home substitution, then separator stripping."""
    return strip_trailing_separator(sub_home(path, home))


def join_child(parent: str, name: str) -> str:
    """Join a directory path and an entry name with exactly one separator."""
    if is_root(parent):
        return parent + name
    return parent + os.sep + name


def _last_separator(path: str) -> int:
    return max(path.rfind(sep) for sep in _SEPARATORS)


def get_dir_name(path: str) -> str:
    """Directory portion of a path: ``/home/u/img.pgm`` becomes ``/home/u``."""
    pos = _last_separator(path)
    if pos == 0:
        return path[0]
    if pos < 0:
        return ""
    return path[:pos]


def get_file_name(path: str) -> str:
    """Final path component: ``/home/u/img.pgm`` becomes ``img.pgm``."""
    return path[_last_separator(path) + 1:]


def get_base_name(path: str) -> str:
    """Path without its extension: ``dir/img.pgm`` becomes ``dir/img``."""
    start = _last_separator(path) + 1
    dot = path.rfind(".", start)
    if dot < 0:
        return path
    return path[:dot]


def get_ext_name(path: str) -> str:
    """Extension without the dot: ``img.pgm`` becomes ``pgm``.

    A trailing dot or a name with no dot yields "". A dotfile such as
    ``.xml`` is all extension.
    """
    start = _last_separator(path) + 1
    dot = path.rfind(".", start)
    if dot < 0 or dot == len(path) - 1:
        return ""
    return path[dot + 1:]
