"""dirscan: list and walk regular files, safely across symbolic-link cycles."""

import logging

from dirscan.classify import FileKind, classify
from dirscan.errors import ConfigurationError, DirscanError, TraversalAbortedError
from dirscan.filters import (
    IgnoreFilter,
    accept_all,
    all_of,
    any_of,
    extension_filter,
    negate,
    size_filter,
)
from dirscan.fs import FileSystem, OSFileSystem
from dirscan.paths import normalize_root, sub_home
from dirscan.traversal import list_dir, walk_dir

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ConfigurationError",
    "DirscanError",
    "FileKind",
    "FileSystem",
    "IgnoreFilter",
    "OSFileSystem",
    "TraversalAbortedError",
    "accept_all",
    "all_of",
    "any_of",
    "classify",
    "extension_filter",
    "list_dir",
    "negate",
    "normalize_root",
    "size_filter",
    "sub_home",
    "walk_dir",
]
