"""Line-oriented directive files.

Each non-blank line holds a directive name followed by its arguments::

    # comments run to the end of the line
    extension jpg jpeg
    ignore 'raw images/' *.tmp

Parsing is generic; what a directive means is decided by a :class:`ConfigHook`.
:class:`ScanRules` is the hook behind ``dirscan --rules``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from dirscan.errors import ConfigurationError
from dirscan.paths import sub_home
from dirscan.text import merge_quoted_words, remove_comments, split_string

if TYPE_CHECKING:
    from dirscan.config import DirscanConfig

logger = logging.getLogger(__name__)


class ConfigFileError(ConfigurationError):
    """A directive file could not be read or contains an invalid line."""

    def __init__(self, message: str, file_name: str = "", line_num: int | None = None):
        if line_num is not None:
            message = f"Line {line_num} in '{file_name}': {message}"
        super().__init__(message)
        self.file_name = file_name
        self.line_num = line_num


class ConfigHook(Protocol):
    """Receives the directives of a file as it is read."""

    def set_variable(self, name: str, words: list[str], line_num: int) -> None:
        """Apply one directive. Raise ConfigFileError to reject it."""
        ...

    def verify_parameters(self) -> None:
        """Check the accumulated settings once the whole file has been read."""
        ...


def read_config_file(
    path: str,
    hook: ConfigHook,
    *,
    log: logging.Logger | None = None,
) -> str:
    """Read a directive file, feeding each directive to ``hook``.

    Comments are stripped, lines are split on whitespace, and quoted words
    are merged before ``hook.set_variable`` is called with the 1-based line
    number. ``hook.verify_parameters`` runs after the last line.

    Returns:
        The file name after home-directory substitution.

    Raises:
        ConfigFileError: If the file cannot be opened.
    """
    log = log or logger
    file_name = sub_home(path)

    try:
        f = open(file_name)
    except OSError as e:
        raise ConfigFileError(f"Unable to open file '{path}': {e.strerror}") from e

    with f:
        for line_num, line in enumerate(f, start=1):
            words = split_string(remove_comments(line))
            if not words:
                continue
            name, args = words[0], merge_quoted_words(words[1:], log=log)
            log.debug("%s:%d: %s %s", file_name, line_num, name, args)
            hook.set_variable(name, args, line_num)

    hook.verify_parameters()
    return file_name


_YES = {"yes", "true", "on", "1"}
_NO = {"no", "false", "off", "0"}


class ScanRules:
    """Scan settings read from a directive file.

    Directives:
        extension EXT...     report only files with these extensions
        ignore PATTERN...    add gitignore-style ignore patterns
        max_size_kb N        skip files larger than N kilobytes
        recursive yes|no     walk subdirectories or list the root only
    """

    def __init__(self, file_name: str = ""):
        self.file_name = file_name
        self.extensions: list[str] = []
        self.ignore_patterns: list[str] = []
        self.max_size_kb: int | None = None
        self.recursive: bool | None = None

    @classmethod
    def read(cls, path: str) -> "ScanRules":
        rules = cls(path)
        rules.file_name = read_config_file(path, rules)
        return rules

    def set_variable(self, name: str, words: list[str], line_num: int) -> None:
        directive = name.lower()

        if directive == "extension":
            if not words:
                self._fail("extension needs at least one value", line_num)
            self.extensions.extend(words)
        elif directive == "ignore":
            if not words:
                self._fail("ignore needs at least one pattern", line_num)
            self.ignore_patterns.extend(words)
        elif directive == "max_size_kb":
            if len(words) != 1:
                self._fail("max_size_kb takes exactly one value", line_num)
            try:
                self.max_size_kb = int(words[0])
            except ValueError:
                self._fail(f"max_size_kb must be an integer, got '{words[0]}'", line_num)
        elif directive == "recursive":
            if len(words) != 1 or words[0].lower() not in _YES | _NO:
                self._fail("recursive takes 'yes' or 'no'", line_num)
            self.recursive = words[0].lower() in _YES
        else:
            self._fail(f"unknown variable '{name}'", line_num)

    def verify_parameters(self) -> None:
        if self.max_size_kb is not None and self.max_size_kb < 0:
            raise ConfigFileError(f"max_size_kb must be >= 0 in '{self.file_name}'")

    def apply_to(self, config: "DirscanConfig") -> None:
        """Merge these rules into ``config`` in place."""
        config.scan.extensions.extend(self.extensions)
        config.ignore.extra_patterns.extend(self.ignore_patterns)
        if self.max_size_kb is not None:
            config.scan.max_file_size_kb = self.max_size_kb
        if self.recursive is not None:
            config.scan.recursive = self.recursive

    def _fail(self, message: str, line_num: int) -> None:
        raise ConfigFileError(message, self.file_name, line_num)
