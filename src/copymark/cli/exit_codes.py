# topmark:header:start
#
#   project      : CopyMark
#   file         : exit_codes.py
#   file_relpath : src/copymark/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the CopyMark CLI.

CopyMark aligns with the BSD `sysexits` convention where practical, so that other
tooling can interpret failures consistently. The one deliberate divergence is
`WOULD_CHANGE=2`, which signals a dry-run in which at least one file is not
compliant. Click's own usage errors also exit with 2; tests must assert
``result.exception is None`` to tell the two apart.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the CopyMark CLI.

    Attributes:
        SUCCESS: All files compliant, or all fixes applied.
        FAILURE: Generic failure (non-specific error).
        WOULD_CHANGE: Dry-run: at least one file would change with ``--apply``.
        USAGE_ERROR: Invalid flags/args. Mirrors BSD ``EX_USAGE (64)``.
        ENCODING_ERROR: A file could not be decoded as UTF-8. Mirrors BSD ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Input path does not exist. Mirrors BSD ``EX_NOINPUT (66)``.
        IO_ERROR: I/O error reading/writing a file. Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Invalid configuration. Mirrors BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last-resort).
    """

    SUCCESS = 0
    FAILURE = 1
    WOULD_CHANGE = 2  # deliberate divergence from sysexits; see class docstring

    # sysexits-aligned values
    USAGE_ERROR = 64  # EX_USAGE
    ENCODING_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
