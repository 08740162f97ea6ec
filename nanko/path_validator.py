"""Validation of source paths before they are opened."""

from __future__ import annotations

import os
from pathlib import Path

from .exceptions import NankoIsADirectoryError, NankoPathValidationError


class PathValidator:
    """Checks that a path can be handed to ``open()`` as a source file.

    Existence and permissions are left to ``open()`` itself, so a failure is
    reported with the system's own error description.
    """

    @classmethod
    def validate_path(cls, file_path: Path | str) -> Path:
        """Reject values that can never name a file, without touching the filesystem."""
        if isinstance(file_path, Path):
            text = str(file_path)
        elif isinstance(file_path, str):
            text = file_path
        else:
            raise NankoPathValidationError(
                f"path must be str or Path, not {type(file_path).__name__}",
                error_code="invalid-path-type",
            )
        if not text:
            raise NankoPathValidationError("path must not be empty", error_code="empty-path")
        if "\x00" in text:
            raise NankoPathValidationError(
                "path contains a NUL character", error_code="control-char", details={"path": repr(text)}
            )
        return Path(text)

    @classmethod
    def get_validated_path(cls, file_path: Path | str, *, must_be_file: bool = True) -> Path:
        path = cls.validate_path(file_path)
        # isdir() reports False on any stat error; open() then raises the real one
        if must_be_file and os.path.isdir(path):
            raise NankoIsADirectoryError("Is a directory", error_code="is-a-directory", details={"path": str(file_path)})
        return path
