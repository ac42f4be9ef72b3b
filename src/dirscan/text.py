"""Small text helpers used when reading directive files."""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

WHITESPACE = " \t\n\r"
QUOTE_CHAR = "'"


def split_string(s: str, separators: str = WHITESPACE) -> list[str]:
    """Split ``s`` on any of the ``separators`` characters, dropping empty fields."""
    if not separators:
        return [s] if s else []
    pattern = "[" + re.escape(separators) + "]"
    return [word for word in re.split(pattern, s) if word]


def remove_comments(s: str, comment_chars: str = "#") -> str:
    """Drop everything from the first comment character onwards."""
    positions = [pos for pos in (s.find(c) for c in comment_chars) if pos >= 0]
    if not positions:
        return s
    return s[: min(positions)]


def merge_quoted_words(
    words: list[str],
    *,
    log: logging.Logger | None = None,
) -> list[str]:
    """Combine words enclosed in single quotes into one string.

    A value such as ``'~/some dir'`` arrives from :func:`split_string` as two
    words; this rejoins them with a single space and removes the quotes.
    Text before an opening quote and after a closing quote is kept as
    separate words, and empty quoted strings are dropped. Double quotes,
    runs of spaces and tabs are not preserved.

    If a quote is never closed, it is erased and the remaining words are
    returned as they are.
    """
    log = log or logger
    words = list(words)
    merged: list[str] = []

    begin = 0
    while True:
        # Find the next word containing an opening quote
        quote_begin = -1
        while begin < len(words):
            quote_begin = words[begin].find(QUOTE_CHAR)
            if quote_begin >= 0:
                break
            merged.append(words[begin])
            begin += 1

        if quote_begin < 0:
            break

        # Find its match, first in the same word, then in the following ones
        end = begin
        quote_end = words[end].find(QUOTE_CHAR, quote_begin + 1)
        if quote_end < 0:
            for end in range(begin + 1, len(words)):
                quote_end = words[end].find(QUOTE_CHAR)
                if quote_end >= 0:
                    break

        if quote_end < 0:
            first = words[begin]
            words[begin] = first[:quote_begin] + first[quote_begin + 1:]
            merged.extend(words[begin:])
            log.warning("Missing matching quote: Erasing first quote")
            break

        if begin == end:
            new_word = words[begin][quote_begin + 1:quote_end]
        else:
            parts = [words[begin][quote_begin + 1:]]
            parts.extend(words[begin + 1:end])
            parts.append(words[end][:quote_end])
            new_word = " ".join(parts)

        prefix = words[begin][:quote_begin]
        if prefix:
            merged.append(prefix)
        if new_word:
            merged.append(new_word)

        # Rescan whatever follows the closing quote
        words[end] = words[end][quote_end + 1:]
        begin = end
        if not words[end]:
            begin += 1

    return merged
