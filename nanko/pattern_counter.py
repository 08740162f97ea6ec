"""Non-overlapping literal substring counting.

After each match the search resumes at ``match_start + len(pattern)``, so a
region of the buffer is never counted twice: ``b"aa"`` occurs once in
``b"aaa"`` and twice in ``b"aaaa"``.

Case-insensitive matching folds ASCII letters only. Every other byte,
including the bytes of multi-byte UTF-8 sequences, is compared literally,
independent of the current locale.
"""

from __future__ import annotations

import os

from .exceptions import NankoParameterError


def ascii_casefold(data: bytes | bytearray) -> bytes:
    """Fold ``A-Z`` to ``a-z`` and leave all other bytes untouched.

    The result always has the same length as ``data`` so match offsets in
    the folded buffer are valid offsets in the original.
    """
    # bytes.lower() only maps the ASCII range
    return bytes(data).lower()


def to_pattern_bytes(pattern: bytes | bytearray | str) -> bytes:
    """Normalize a pattern to ``bytes`` and reject the empty pattern."""
    if isinstance(pattern, str):
        value = os.fsencode(pattern)
    elif isinstance(pattern, (bytes, bytearray)):
        value = bytes(pattern)
    else:
        raise NankoParameterError(
            f"pattern must be bytes or str, not {type(pattern).__name__}",
            error_code="invalid-pattern-type",
        )
    if not value:
        raise NankoParameterError("pattern must not be empty", error_code="empty-pattern")
    return value


class PatternCounter:
    """Counts occurrences of one pattern across many buffers.

    The pattern is validated and, in case-insensitive mode, folded once.
    """

    def __init__(self, pattern: bytes | bytearray | str, *, ignore_case: bool = False) -> None:
        self.ignore_case = ignore_case
        self.pattern = to_pattern_bytes(pattern)
        self._needle = ascii_casefold(self.pattern) if ignore_case else self.pattern

    def count(self, buffer: bytes | bytearray) -> int:
        haystack = ascii_casefold(buffer) if self.ignore_case else buffer
        needle = self._needle
        step = len(needle)
        n = 0
        start = 0
        while True:
            pos = haystack.find(needle, start)
            if pos == -1:
                break
            n += 1
            start = pos + step
        return n

    def __repr__(self) -> str:
        return f"PatternCounter(pattern={self.pattern!r}, ignore_case={self.ignore_case})"


def count_occurrences(
    buffer: bytes | bytearray | str,
    pattern: bytes | bytearray | str,
    *,
    ignore_case: bool = False,
) -> int:
    """Return the number of non-overlapping occurrences of ``pattern`` in ``buffer``."""
    if isinstance(buffer, str):
        buffer = os.fsencode(buffer)
    return PatternCounter(pattern, ignore_case=ignore_case).count(buffer)
