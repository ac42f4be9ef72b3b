"""Exceptions raised by dirscan.

Only two conditions ever propagate out of a traversal: rejected input and a
directory that passed its checks but could not be read. Everything else is
logged and skipped.
"""

from __future__ import annotations


class DirscanError(Exception):
    """Base class for all dirscan errors."""


class ConfigurationError(DirscanError, ValueError):
    """Invalid input detected before touching the filesystem."""


class TraversalAbortedError(DirscanError, RuntimeError):
    """A directory could not be opened, read, or closed after a successful status check."""

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path
