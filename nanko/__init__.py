"""nanko: count non-overlapping occurrences of a literal pattern in files or stdin."""

__version__ = "0.1.0"

from .exceptions import (  # noqa: E402
    NankoError,
    NankoFileNotFoundError,
    NankoIsADirectoryError,
    NankoOSError,
    NankoParameterError,
    NankoPathValidationError,
    NankoPermissionError,
    NankoSourceOpenError,
    NankoStreamReadError,
    NankoUsageError,
    NankoValueError,
)
from .line_reassembler import FragmentPolicy, LineReassembler, iter_logical_lines  # noqa: E402
from .path_validator import PathValidator  # noqa: E402
from .pattern_counter import PatternCounter, ascii_casefold, count_occurrences  # noqa: E402
from .scanner import (  # noqa: E402
    ScanOptions,
    ScanReport,
    ScanResult,
    Source,
    open_source,
    scan_source,
    scan_sources,
    scan_stream,
)

__all__ = [
    "__version__",
    "FragmentPolicy",
    "LineReassembler",
    "NankoError",
    "NankoFileNotFoundError",
    "NankoIsADirectoryError",
    "NankoOSError",
    "NankoParameterError",
    "NankoPathValidationError",
    "NankoPermissionError",
    "NankoSourceOpenError",
    "NankoStreamReadError",
    "NankoUsageError",
    "NankoValueError",
    "PathValidator",
    "PatternCounter",
    "ScanOptions",
    "ScanReport",
    "ScanResult",
    "Source",
    "ascii_casefold",
    "count_occurrences",
    "iter_logical_lines",
    "open_source",
    "scan_source",
    "scan_sources",
    "scan_stream",
]
