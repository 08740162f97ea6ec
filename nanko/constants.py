"""Module-level constants for nanko.

Buffer sizes are tuning knobs for the line reassembler; they are not exposed
on the command line.
"""

from __future__ import annotations

# Size of a single bounded read, in bytes.
DEFAULT_BUFFER_SIZE = 4096
MIN_BUFFER_SIZE = 16

LINE_TERMINATOR = b"\n"

# Display name used when scanning standard input.
STDIN_NAME = "(standard input)"

PROGRAM_NAME = "nanko"
CREATED_DATE = "2016-11-12"

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

LOG_LEVEL_ENV_VAR = "NANKO_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
