"""Rebuild logical lines of unbounded length from bounded reads.

Raw input is pulled with ``stream.readline(buffer_size)``, so every chunk
ends either at a line terminator or at the buffer limit. A chunk that ends
at the limit is a fragment: it is collected in a growable buffer until the
line is complete or the stream ends.

Two policies decide what happens to the chunk that finally carries the
terminator of a fragmented line; see :class:`FragmentPolicy`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from enum import Enum
from typing import BinaryIO

from .constants import DEFAULT_BUFFER_SIZE, LINE_TERMINATOR, MIN_BUFFER_SIZE
from .exceptions import NankoParameterError, NankoStreamReadError

logger = logging.getLogger(__name__)


class FragmentPolicy(str, Enum):
    """How the terminator-bearing chunk of a fragmented line is handled.

    ``MERGE`` appends it to the pending fragment, so the emitted line is the
    complete line. ``DISCARD_TERMINATED`` drops it and emits the fragment
    alone, which is byte-for-byte compatible with nanko 0.1 (the
    tail of any line longer than the buffer is lost).
    """

    MERGE = "merge"
    DISCARD_TERMINATED = "discard-terminated"


def _validate_buffer_size(buffer_size: int) -> int:
    if not isinstance(buffer_size, int) or isinstance(buffer_size, bool):
        raise NankoParameterError("buffer_size must be an integer", error_code="invalid-buffer-size")
    if buffer_size < MIN_BUFFER_SIZE:
        raise NankoParameterError(
            f"buffer_size must be at least {MIN_BUFFER_SIZE}",
            error_code="invalid-buffer-size",
            details={"buffer_size": buffer_size, "minimum": MIN_BUFFER_SIZE},
        )
    return buffer_size


def iter_logical_lines(
    stream: BinaryIO,
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    fragment_policy: FragmentPolicy = FragmentPolicy.MERGE,
) -> Iterator[bytes]:
    """Yield logical lines from ``stream``.

    Lines keep whatever terminator their last chunk carried. A final run of
    bytes with no terminator is still yielded. An empty stream yields
    nothing.

    Raises:
        NankoParameterError: if ``buffer_size`` is below ``MIN_BUFFER_SIZE``.
        NankoStreamReadError: if the stream raises ``OSError`` mid-read.
    """
    buffer_size = _validate_buffer_size(buffer_size)
    policy = FragmentPolicy(fragment_policy)
    fragment = bytearray()
    pending = False

    while True:
        try:
            chunk = stream.readline(buffer_size)
        except OSError as exc:
            raise NankoStreamReadError(
                str(exc.strerror or exc),
                error_code="read-failed",
                details={"errno": exc.errno},
                original_exception=exc,
            ) from exc
        if not chunk:
            break

        if not chunk.endswith(LINE_TERMINATOR):
            fragment += chunk
            pending = True
            continue

        if not pending:
            yield bytes(chunk)
            continue

        if policy is FragmentPolicy.MERGE:
            fragment += chunk
        logger.debug("reassembled fragmented line of %d bytes", len(fragment))
        yield bytes(fragment)
        fragment.clear()
        pending = False

    if pending:
        yield bytes(fragment)


class LineReassembler:
    """Iterable wrapper around :func:`iter_logical_lines`.

    The sequence is lazy and can only be consumed once, like the stream it
    reads from.
    """

    def __init__(
        self,
        stream: BinaryIO,
        *,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        fragment_policy: FragmentPolicy = FragmentPolicy.MERGE,
    ) -> None:
        self.stream = stream
        self.buffer_size = _validate_buffer_size(buffer_size)
        self.fragment_policy = FragmentPolicy(fragment_policy)
        self._consumed = False

    def __iter__(self) -> Iterator[bytes]:
        if self._consumed:
            return iter(())
        self._consumed = True
        return iter_logical_lines(self.stream, buffer_size=self.buffer_size, fragment_policy=self.fragment_policy)
