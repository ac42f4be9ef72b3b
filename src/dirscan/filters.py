"""Filter predicates for traversal results.

A filter is any ``Callable[[str], bool]``; it is called once per regular file
and the file is reported only when it returns True. The helpers here build
common filters and combine them.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Iterable

from pathspec import PathSpec

from dirscan.config import IgnoreConfig
from dirscan.paths import get_ext_name

PathFilter = Callable[[str], bool]

# Always ignored, regardless of config
DEFAULT_IGNORE_PATTERNS = [
    ".git/",
    ".hg/",
    ".svn/",
    "__pycache__/",
    "*.pyc",
    "*.swp",
    "*~",
    ".DS_Store",
    "Thumbs.db",
]

IGNORE_FILE_NAME = ".dirscanignore"


def accept_all(path: str) -> bool:
    """Default filter: every regular file is reported."""
    return True


def extension_filter(*extensions: str) -> PathFilter:
    """Accept files whose extension matches one of ``extensions``, case-insensitively.

    ``extension_filter("jpg", ".jpeg")`` accepts ``a.JPG`` and ``b.jpeg``.
    """
    wanted = {ext.lower().lstrip(".") for ext in extensions}

    def _filter(path: str) -> bool:
        return get_ext_name(path).lower() in wanted

    return _filter


def size_filter(max_kb: int) -> PathFilter:
    """Accept files no larger than ``max_kb`` kilobytes. ``max_kb <= 0`` means no limit."""
    max_bytes = max_kb * 1024

    def _filter(path: str) -> bool:
        if max_kb <= 0:
            return True
        try:
            return os.stat(path).st_size <= max_bytes
        except OSError:
            return True

    return _filter


def any_of(*filters: PathFilter) -> PathFilter:
    """Accept a path if any of ``filters`` accepts it."""
    return lambda path: any(f(path) for f in filters)


def all_of(*filters: PathFilter) -> PathFilter:
    """Accept a path only if every one of ``filters`` accepts it."""
    return lambda path: all(f(path) for f in filters)


def negate(path_filter: PathFilter) -> PathFilter:
    """Accept exactly the paths ``path_filter`` rejects."""
    return lambda path: not path_filter(path)


class IgnoreFilter:
    """Reject files matching gitignore-style patterns.

    Composes patterns from hardcoded defaults, ``.gitignore``,
    ``.dirscanignore`` and config-level extra patterns.

    Usage:
        keep = IgnoreFilter(root, config.ignore)
        files = walk_dir(root, keep)
    """

    def __init__(self, root: str | Path, config: IgnoreConfig | None = None):
        if config is None:
            config = IgnoreConfig()

        self.root = Path(os.path.abspath(root))
        patterns: list[str] = list(DEFAULT_IGNORE_PATTERNS)

        if config.use_gitignore:
            gitignore = self.root / ".gitignore"
            if gitignore.is_file():
                patterns.extend(self._read_ignore_file(gitignore))

        if config.use_dirscanignore:
            dirscanignore = self.root / IGNORE_FILE_NAME
            if dirscanignore.is_file():
                patterns.extend(self._read_ignore_file(dirscanignore))

        patterns.extend(config.extra_patterns)

        self.patterns = patterns
        self._spec = PathSpec.from_lines("gitignore", patterns)

    def __call__(self, path: str) -> bool:
        return not self.is_ignored(path)

    def is_ignored(self, path: str | Path) -> bool:
        """Check if a file path matches any ignore pattern.

        Relative paths are taken from the current directory, as traversal
        results are. Paths outside the root are never ignored.
        """
        try:
            rel = Path(os.path.abspath(path)).relative_to(self.root)
        except ValueError:
            return False
        return self._spec.match_file(rel.as_posix())

    def filter_paths(self, paths: Iterable[str]) -> list[str]:
        """Return only non-ignored paths."""
        return [p for p in paths if not self.is_ignored(p)]

    @staticmethod
    def _read_ignore_file(path: Path) -> list[str]:
        """Read a gitignore-style file, skipping comments and blank lines."""
        lines = []
        for line in path.read_text().splitlines():
            line = line.strip()
            if line and not line.startswith("#"):
                lines.append(line)
        return lines
