"""Command line interface: ``nanko [-i] [-h] [-v] PATTERN [FILE...]``.

Prints the number of non-overlapping occurrences of PATTERN in each FILE, or
in standard input when no FILE is given and input is piped.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from enum import Enum
from typing import TextIO

from . import __version__
from .constants import (
    CREATED_DATE,
    DEFAULT_LOG_LEVEL,
    EXIT_FAILURE,
    EXIT_SUCCESS,
    LOG_LEVEL_ENV_VAR,
    PROGRAM_NAME,
)
from .exceptions import NankoUsageError
from .pattern_counter import PatternCounter
from .scanner import ScanOptions, ScanReport, Source, scan_sources

logger = logging.getLogger(__name__)

USAGE = (
    "Usage: {prog} [OPTION] PATTERN FILE...\n"
    "       stdout | {prog} [OPTION] PATTERN\n"
    "\n"
    "This program checks how many specified character strings exist.\n"
    "\n"
    "  -h display this help and exit\n"
    "  -i ignore case distinctions\n"
    "  -v output version information\n"
)

VERSION = (
    "\n"
    "This is {prog}, version {version} ({created})\n"
    "\n"
    "Originally written by SUTO Takayuki\n"
)


class ArgumentStatus(Enum):
    OK = "ok"
    MISSING_PATTERN = "missing-pattern"
    MISSING_FILES = "missing-files"

    def usage_error(self) -> NankoUsageError | None:
        """The error reported for this status, or ``None`` when the arguments are usable."""
        if self is ArgumentStatus.OK:
            return None
        what = "PATTERN" if self is ArgumentStatus.MISSING_PATTERN else "FILE"
        return NankoUsageError(f"Please enter a {what}", error_code=self.value)


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing its own usage and exiting."""

    def error(self, message: str):  # type: ignore[override]
        raise NankoUsageError(message, error_code="unknown-option")


def build_parser(prog: str = PROGRAM_NAME) -> argparse.ArgumentParser:
    parser = _Parser(prog=prog, add_help=False)
    parser.add_argument("-i", dest="ignore_case", action="store_true")
    parser.add_argument("-h", dest="show_help", action="store_true")
    parser.add_argument("-v", dest="show_version", action="store_true")
    parser.add_argument("pattern", nargs="?")
    parser.add_argument("files", nargs="*")
    return parser


def parse_arguments(parser: argparse.ArgumentParser, argv: Sequence[str]) -> argparse.Namespace:
    """Parse ``argv``, treating everything after the first ``--`` as operands.

    Operands after ``--`` fill PATTERN first if it is still unset, then FILE.
    """
    argv = list(argv)
    tail: list[str] = []
    if "--" in argv:
        split = argv.index("--")
        argv, tail = argv[:split], argv[split + 1 :]
    args = parser.parse_intermixed_args(argv)
    if tail and args.pattern is None:
        args.pattern = tail.pop(0)
    args.files.extend(tail)
    return args


def validate_arguments(args: argparse.Namespace, *, stdin_is_pipe: bool) -> ArgumentStatus:
    """Check that a pattern was given and that there is something to read."""
    if not args.pattern:
        return ArgumentStatus.MISSING_PATTERN
    if not args.files and not stdin_is_pipe:
        return ArgumentStatus.MISSING_FILES
    return ArgumentStatus.OK


def format_report(report: ScanReport) -> list[str]:
    """Render one output line per source.

    A single successful source prints the bare count; otherwise each count
    is tagged with its source name. Failures are always tagged.
    """
    single = len(report) == 1
    lines = []
    for result in report:
        if not result.ok:
            lines.append(f"{result.name} : {result.reason}")
        elif single:
            lines.append(str(result.count))
        else:
            lines.append(f"{result.name} : {result.count}")
    return lines


_log_handler: logging.Handler | None = None


def configure_logging(stream: TextIO) -> logging.Handler:
    """Send package log records to ``stream``.

    Each call replaces the handler installed by the previous one, so records
    always reach the stream of the current invocation.
    """
    global _log_handler
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.WARNING

    package_logger = logging.getLogger(PROGRAM_NAME)
    if _log_handler is not None:
        package_logger.removeHandler(_log_handler)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(name)s: %(levelname)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    _log_handler = handler
    return handler


def _binary(stream):
    return getattr(stream, "buffer", stream)


def _is_pipe(stream) -> bool:
    try:
        return not stream.isatty()
    except (AttributeError, ValueError):
        return False


def main(
    argv: Sequence[str] | None = None,
    *,
    stdin=None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    prog: str = PROGRAM_NAME,
) -> int:
    """Run the command and return the process exit status."""
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    stderr = sys.stderr if stderr is None else stderr
    configure_logging(stderr)

    parser = build_parser(prog)
    try:
        args = parse_arguments(parser, sys.argv[1:] if argv is None else argv)
    except NankoUsageError as exc:
        logger.debug("argument parsing failed: %s", exc)
        stderr.write(f"Try '{prog} -h' for more information.\n")
        return EXIT_FAILURE

    if args.show_help:
        stdout.write(USAGE.format(prog=prog))
        return EXIT_SUCCESS
    if args.show_version:
        stdout.write(VERSION.format(prog=prog, version=__version__, created=CREATED_DATE))
        return EXIT_SUCCESS

    stdin_is_pipe = _is_pipe(stdin)
    status = validate_arguments(args, stdin_is_pipe=stdin_is_pipe)
    usage_error = status.usage_error()
    if usage_error is not None:
        logger.debug("invalid arguments: %s", usage_error)
        stderr.write(f"{prog} : {usage_error.message}\n")
        return EXIT_FAILURE

    if args.files:
        sources = [Source.from_path(name) for name in args.files]
    else:
        sources = [Source.from_stream(_binary(stdin))]

    options = ScanOptions(ignore_case=args.ignore_case)
    counter = PatternCounter(args.pattern, ignore_case=options.ignore_case)
    report = scan_sources(sources, counter, options)

    for line in format_report(report):
        stdout.write(line + "\n")
    stdout.flush()
    return report.exit_status


def run() -> None:
    """Console script entry point."""
    raise SystemExit(main())
