"""Exception hierarchy for nanko.

Every error raised by the package derives from :class:`NankoError` and
carries a short kebab-case ``error_code``, a human readable ``message``, an
optional ``details`` mapping and, when the error wraps a lower-level
exception, that exception as ``original_exception`` (it is also chained as
``__cause__``).
"""

from __future__ import annotations

import errno
import os
from pathlib import Path
from typing import Any


class NankoError(Exception):
    """Base class for all nanko errors."""

    def __init__(
        self,
        message: str = "",
        *,
        error_code: str = "general",
        details: dict[str, Any] | None = None,
        original_exception: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.original_exception = original_exception

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}" if self.message else self.error_code


class NankoUsageError(NankoError):
    """Invalid command line: missing pattern, missing files or an unknown option."""


class NankoValueError(NankoError):
    pass


class NankoParameterError(NankoValueError):
    """An API argument is out of range (empty pattern, tiny buffer, ...)."""


class NankoPathValidationError(NankoError):
    pass


class NankoOSError(NankoError):
    """A source could not be opened or read."""

    @property
    def reason(self) -> str:
        """Short text printed next to the source name."""
        return self.message


class NankoSourceOpenError(NankoOSError):
    pass


class NankoFileNotFoundError(NankoSourceOpenError):
    pass


class NankoPermissionError(NankoSourceOpenError):
    pass


class NankoIsADirectoryError(NankoSourceOpenError):
    pass


class NankoStreamReadError(NankoOSError):
    """The underlying stream failed part way through a scan."""


def _strerror(exc: OSError) -> str:
    if exc.strerror:
        return exc.strerror
    if exc.errno is not None:
        return os.strerror(exc.errno)
    return str(exc) or exc.__class__.__name__


def map_open_error(exc: OSError, path: Path | str) -> NankoOSError:
    """Translate an ``OSError`` raised while opening ``path`` into a nanko error.

    The returned error's message is the system error description, matching
    what ``strerror(3)`` would print for the same failure.
    """
    details = {"path": str(path), "errno": exc.errno}
    if isinstance(exc, FileNotFoundError):
        return NankoFileNotFoundError(
            _strerror(exc), error_code="file-not-found", details=details, original_exception=exc
        )
    if isinstance(exc, IsADirectoryError) or exc.errno == errno.EISDIR:
        return NankoIsADirectoryError(
            "Is a directory", error_code="is-a-directory", details=details, original_exception=exc
        )
    if isinstance(exc, PermissionError):
        return NankoPermissionError(
            _strerror(exc), error_code="permission-denied", details=details, original_exception=exc
        )
    return NankoSourceOpenError(_strerror(exc), error_code="open-failed", details=details, original_exception=exc)


__all__ = [
    "NankoError",
    "NankoUsageError",
    "NankoValueError",
    "NankoParameterError",
    "NankoPathValidationError",
    "NankoOSError",
    "NankoSourceOpenError",
    "NankoFileNotFoundError",
    "NankoPermissionError",
    "NankoIsADirectoryError",
    "NankoStreamReadError",
    "map_open_error",
]
