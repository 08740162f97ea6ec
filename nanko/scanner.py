"""Per-source scanning: open, reassemble lines, count, close.

Sources are scanned one at a time, each to completion before the next is
opened. A source that cannot be opened or read is recorded as a failed
:class:`ScanResult`; it never stops the remaining sources from being
scanned.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

from .constants import DEFAULT_BUFFER_SIZE, EXIT_FAILURE, EXIT_SUCCESS, STDIN_NAME
from .exceptions import NankoError, NankoOSError, NankoPathValidationError, map_open_error
from .line_reassembler import FragmentPolicy, iter_logical_lines
from .path_validator import PathValidator
from .pattern_counter import PatternCounter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanOptions:
    ignore_case: bool = False
    buffer_size: int = DEFAULT_BUFFER_SIZE
    fragment_policy: FragmentPolicy = FragmentPolicy.MERGE


@dataclass(frozen=True)
class Source:
    """A named byte stream: either a filesystem path or an already open stream.

    Streams supplied by the caller (standard input) are never closed by the
    scanner; files opened from ``path`` always are.
    """

    name: str
    path: Path | None = None
    stream: BinaryIO | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_path(cls, path: Path | str) -> Source:
        return cls(name=str(path), path=Path(path) if path else None)

    @classmethod
    def from_stream(cls, stream: BinaryIO, name: str = STDIN_NAME) -> Source:
        return cls(name=name, stream=stream)


@dataclass
class ScanResult:
    name: str
    count: int | None = None
    error: NankoError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def reason(self) -> str:
        return self.error.message if self.error is not None else ""


@dataclass
class ScanReport:
    results: list[ScanResult] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return any(not r.ok for r in self.results)

    @property
    def exit_status(self) -> int:
        return EXIT_FAILURE if self.failed else EXIT_SUCCESS

    def __iter__(self) -> Iterator[ScanResult]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)


def _as_counter(pattern: PatternCounter | bytes | str, ignore_case: bool) -> PatternCounter:
    if isinstance(pattern, PatternCounter):
        return pattern
    return PatternCounter(pattern, ignore_case=ignore_case)


@contextmanager
def open_source(
    source: Source,
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    fragment_policy: FragmentPolicy = FragmentPolicy.MERGE,
) -> Iterator[Iterator[bytes]]:
    """Context manager yielding the logical lines of ``source``.

    A file handle opened here is closed on every exit path, including read
    errors raised while the caller iterates.

    Raises:
        NankoSourceOpenError: (or a subclass) when the file cannot be opened.
        NankoPathValidationError: when the path can never name a file.
    """
    if source.stream is not None:
        yield iter_logical_lines(source.stream, buffer_size=buffer_size, fragment_policy=fragment_policy)
        return

    try:
        if source.path is None:
            # an empty name still goes through open() so the system error is reported
            handle = open(source.name, "rb")
        else:
            handle = PathValidator.get_validated_path(source.path).open("rb")
    except OSError as exc:
        raise map_open_error(exc, source.name) from exc

    logger.debug("opened source %s", source.name)
    with handle:
        yield iter_logical_lines(handle, buffer_size=buffer_size, fragment_policy=fragment_policy)


def count_lines(lines: Iterable[bytes], counter: PatternCounter) -> int:
    total = 0
    for line in lines:
        total += counter.count(line)
    return total


def scan_stream(
    stream: BinaryIO,
    pattern: PatternCounter | bytes | str,
    *,
    ignore_case: bool = False,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    fragment_policy: FragmentPolicy = FragmentPolicy.MERGE,
) -> int:
    """Return the total occurrence count for an open binary stream.

    Raises:
        NankoStreamReadError: if the stream fails part way through.
    """
    counter = _as_counter(pattern, ignore_case)
    return count_lines(
        iter_logical_lines(stream, buffer_size=buffer_size, fragment_policy=fragment_policy),
        counter,
    )


def scan_source(
    source: Source,
    pattern: PatternCounter | bytes | str,
    options: ScanOptions | None = None,
) -> ScanResult:
    """Scan one source. Open and read failures are returned, not raised."""
    options = options or ScanOptions()
    counter = _as_counter(pattern, options.ignore_case)
    try:
        with open_source(
            source, buffer_size=options.buffer_size, fragment_policy=options.fragment_policy
        ) as lines:
            total = count_lines(lines, counter)
    except (NankoOSError, NankoPathValidationError) as exc:
        logger.info("skipping %s: %s", source.name, exc)
        return ScanResult(name=source.name, error=exc)

    logger.debug("scanned %s: %d occurrence(s)", source.name, total)
    return ScanResult(name=source.name, count=total)


def scan_sources(
    sources: Iterable[Source],
    pattern: PatternCounter | bytes | str,
    options: ScanOptions | None = None,
) -> ScanReport:
    """Scan ``sources`` in order and collect one result per source."""
    options = options or ScanOptions()
    counter = _as_counter(pattern, options.ignore_case)
    report = ScanReport()
    for source in sources:
        report.results.append(scan_source(source, counter, options))
    return report
