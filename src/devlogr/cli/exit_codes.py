# topmark:header:start
#
#   project      : devlogr
#   file         : exit_codes.py
#   file_relpath : src/devlogr/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Exit codes for the devlogr CLI.

Values follow the BSD `sysexits` convention where one applies, so shell
scripts can tell a bad invocation apart from a failed operation.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the devlogr CLI.

    Attributes:
        SUCCESS: Successful execution.
        FAILURE: Generic failure.
        USAGE_ERROR: Command-line invocation error. Mirrors BSD ``EX_USAGE (64)``.
        DATA_ERROR: Input could not be processed. Mirrors BSD ``EX_DATAERR (65)``.
        UNEXPECTED_ERROR: Unhandled error (last resort).
    """

    SUCCESS = 0
    FAILURE = 1

    USAGE_ERROR = 64  # EX_USAGE
    DATA_ERROR = 65  # EX_DATAERR

    UNEXPECTED_ERROR = 255
