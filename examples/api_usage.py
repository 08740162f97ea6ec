"""Usage examples for nanko.

This script demonstrates common workflows and error handling patterns:

- Counting occurrences in a single buffer with count_occurrences
- Scanning files and streams with scan_sources
- Rebuilding long lines with iter_logical_lines and the two fragment policies
- Inspecting per-source failures and the `original_exception` attribute

Run this script as a developer reference; it does not require installation.
"""

from __future__ import annotations

import io
import tempfile
from pathlib import Path

from nanko import (
    FragmentPolicy,
    ScanOptions,
    Source,
    count_occurrences,
    iter_logical_lines,
    scan_sources,
)
from nanko.constants import MIN_BUFFER_SIZE


def demo_counting() -> None:
    print("\n== Counting demo ==")
    # Matches never overlap: "aa" occurs once in "aaa"
    print("aa in aaa:", count_occurrences(b"aaa", b"aa"))
    print("AB in ababAB (ignore case):", count_occurrences(b"ababAB", b"AB", ignore_case=True))


def demo_scanning(tmp_dir: Path) -> None:
    print("\n== Scanning demo ==")
    first = tmp_dir / "first.txt"
    first.write_bytes(b"apple banana apple\ncherry apple")
    second = tmp_dir / "second.txt"
    second.write_bytes(b"no fruit here\n")

    sources = [Source.from_path(first), Source.from_path(second), Source.from_path(tmp_dir)]
    report = scan_sources(sources, b"apple")
    for result in report:
        if result.ok:
            print(f"{result.name} : {result.count}")
        else:
            print(f"{result.name} : {result.reason} ({result.error.error_code})")
    print("exit status:", report.exit_status)


def demo_fragments() -> None:
    print("\n== Fragment policy demo ==")
    data = b"x" * MIN_BUFFER_SIZE + b"tail\n"
    for policy in FragmentPolicy:
        lines = list(iter_logical_lines(io.BytesIO(data), buffer_size=MIN_BUFFER_SIZE, fragment_policy=policy))
        print(f"{policy.value}: {lines!r}")

    options = ScanOptions(buffer_size=MIN_BUFFER_SIZE, fragment_policy=FragmentPolicy.DISCARD_TERMINATED)
    report = scan_sources([Source.from_stream(io.BytesIO(data))], b"tail", options)
    print("tail count with discard-terminated:", report.results[0].count)


def demo_error_inspection(tmp_dir: Path) -> None:
    print("\n== Error inspection demo ==")
    missing = tmp_dir / "does-not-exist.txt"
    result = scan_sources([Source.from_path(missing)], b"x").results[0]
    err = result.error
    print("error type:", type(err).__name__)
    print("message:", err.message)
    print("details:", err.details)
    print("original_exception:", repr(err.original_exception))


def main() -> None:
    with tempfile.TemporaryDirectory() as td:
        tmp_dir = Path(td)
        print("Working directory:", tmp_dir)
        demo_counting()
        demo_scanning(tmp_dir)
        demo_fragments()
        demo_error_inspection(tmp_dir)


if __name__ == "__main__":
    main()
