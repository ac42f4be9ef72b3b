"""Breadth-first enumeration of regular files under a root path.

``list_dir`` expands the root directory only; ``walk_dir`` expands every
reachable directory once, keyed by its canonical path so that symbolic-link
cycles terminate.

Traversal algorithm:
    Put the root on the frontier
    While the frontier is not empty, take the path at its head
        If it is a regular file that passes the filter, record it
        If it is a directory (or a link to one) not yet expanded
            Append each of its children to the tail of the frontier
"""

from __future__ import annotations

import logging
from collections import deque

from dirscan.classify import FileKind, classify, describe_special
from dirscan.errors import TraversalAbortedError
from dirscan.filters import PathFilter, accept_all
from dirscan.fs import FileSystem, OSFileSystem
from dirscan.paths import join_child, normalize_root

logger = logging.getLogger(__name__)


def list_dir(
    root: str,
    path_filter: PathFilter | None = None,
    *,
    fs: FileSystem | None = None,
    logger: logging.Logger | None = None,
) -> list[str]:
    """List the regular files directly inside ``root``.

    Subdirectories found in ``root`` are not descended into.

    Args:
        root: Directory to list. A leading ``~`` is replaced by the home
            directory; an empty string returns an empty list.
        path_filter: Predicate called once per regular file; only paths for
            which it returns True are reported. Defaults to accepting all.
        fs: Filesystem backend. Defaults to the live filesystem.
        logger: Destination for skip warnings. Defaults to this module's logger.

    Returns:
        Matching file paths in the order they were classified.

    Raises:
        ConfigurationError: If ``root`` names another user's home (``~bob``).
        TraversalAbortedError: If a directory cannot be opened, read, or closed.
    """
    return _traverse(root, path_filter, recursive=False, fs=fs, log=logger)


def walk_dir(
    root: str,
    path_filter: PathFilter | None = None,
    *,
    fs: FileSystem | None = None,
    logger: logging.Logger | None = None,
) -> list[str]:
    """Recursively list the regular files under ``root``.

    Every directory is expanded at most once, however many links lead to it.
    Arguments, return value, and errors are as for :func:`list_dir`.
    """
    return _traverse(root, path_filter, recursive=True, fs=fs, log=logger)


def _traverse(
    root: str,
    path_filter: PathFilter | None,
    *,
    recursive: bool,
    fs: FileSystem | None,
    log: logging.Logger | None,
) -> list[str]:
    results: list[str] = []
    if not root:
        return results

    fs = fs or OSFileSystem()
    log = log or logger
    accept = path_filter or accept_all

    frontier: deque[str] = deque([normalize_root(root)])
    visited: set[str] = set()
    expanded_root = False

    while frontier:
        path = frontier.popleft()
        kind = classify(path, fs=fs, log=log)

        if kind is FileKind.UNREADABLE:
            continue

        if kind is FileKind.REGULAR:
            if accept(path):
                results.append(path)
            continue

        if kind.is_special:
            log.warning("Ignoring %s: '%s'", describe_special(kind), path)
            continue

        # Directory, or a symbolic link treated as one
        if recursive:
            try:
                key = fs.realpath(path)
            except OSError:
                log.warning("Unable to resolve path '%s'", path)
                continue
            if key in visited:
                log.debug("Already visited '%s' (via '%s')", key, path)
                continue
            visited.add(key)
        else:
            if expanded_root:
                log.debug("Not descending into '%s'", path)
                continue
            expanded_root = True

        children = _expand(path, kind, fs)
        if children is None:
            # A link that is not a directory is reported like a file
            if accept(path):
                results.append(path)
            continue

        log.debug("Expanded '%s': %d entries", path, len(children))
        frontier.extend(children)

    return results


def _expand(path: str, kind: FileKind, fs: FileSystem) -> list[str] | None:
    """Return the child paths of a directory, or None for an unopenable symlink."""
    try:
        handle = fs.open_dir(path)
    except OSError as e:
        if kind is FileKind.SYMLINK:
            return None
        raise TraversalAbortedError(f"Unable to open directory {path}: {e}", path) from e

    try:
        with handle:
            return [join_child(path, name) for name in handle]
    except OSError as e:
        raise TraversalAbortedError(f"Unable to read directory {path}: {e}", path) from e
