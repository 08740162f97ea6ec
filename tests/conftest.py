import errno
import io
import sys
from collections.abc import Callable
from pathlib import Path
from pathlib import Path as _Path

import pytest


class FlakyStream(io.BytesIO):
    """BytesIO whose ``readline`` raises ``OSError`` after ``ok_reads`` calls."""

    def __init__(self, data: bytes, ok_reads: int = 1) -> None:
        super().__init__(data)
        self.ok_reads = ok_reads
        self.reads = 0

    def readline(self, *args, **kwargs):
        self.reads += 1
        if self.reads > self.ok_reads:
            raise OSError(errno.EIO, "Input/output error")
        return super().readline(*args, **kwargs)


class TtyStream(io.BytesIO):
    """Stand-in for an interactive terminal on standard input."""

    def isatty(self) -> bool:
        return True


@pytest.fixture
def replace_path_open(monkeypatch) -> Callable[[Path, Callable[[], object]], None]:
    """Monkeypatch ``Path.open`` so opening ``target`` calls ``factory`` instead.

    ``factory`` either returns a file-like object or raises. Every other path
    is opened normally. The patch is restored by ``monkeypatch`` at teardown;
    tests using this fixture must not run in parallel.
    """

    def _patch(target: Path, factory: Callable[[], object]) -> None:
        real_open = Path.open
        target_str = str(Path(target))

        def _fake_open(self, *args, **kwargs):
            if str(self) == target_str:
                return factory()
            return real_open(self, *args, **kwargs)

        monkeypatch.setattr(Path, "open", _fake_open)

    return _patch


@pytest.fixture
def flaky_stream() -> type[FlakyStream]:
    return FlakyStream


@pytest.fixture
def tty_stdin() -> TtyStream:
    return TtyStream(b"")


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, bytes], Path]:
    def _write(name: str, data: bytes) -> Path:
        p = tmp_path / name
        p.write_bytes(data)
        return p

    return _write


# Ensure tests can import the local package when pytest runs from the
# repository root or when the test runner's CWD differs.
_ROOT = _Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))
