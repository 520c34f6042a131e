# topmark:header:start
#
#   project      : devlogr
#   file         : errors.py
#   file_relpath : src/devlogr/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Exceptions raised by devlogr.

Usage:
    Usage errors (`UsageError` and subclasses) signal a programming mistake at
    the call site and are raised synchronously. Task failures are reported as
    `TaskFailedError`. Formatting and serialization never raise; they degrade to
    placeholder strings instead.
"""

from __future__ import annotations


class DevlogrError(Exception):
    """Base class for all devlogr errors."""


class UsageError(DevlogrError):
    """The caller used the API incorrectly."""


class DuplicateSpinnerError(UsageError):
    """A single-spinner session was started for a key that is still active."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Spinner '{key}' is already running; complete or stop it first")
        self.key = key


class UnknownThemeError(UsageError, KeyError):
    """A theme was requested for a level that has no theme."""

    def __init__(self, level: str) -> None:
        super().__init__(f"Unknown log level: {level}")
        self.level = level

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class TaskFailedError(DevlogrError):
    """A task (or a spinner completed with ``fail``) did not succeed.

    Attributes:
        title (str): Title of the task that failed.
    """

    def __init__(self, message: str, *, title: str = "") -> None:
        super().__init__(message)
        self.title = title


class SpinnerStoppedError(DevlogrError):
    """A spinner session was stopped before it was completed."""
