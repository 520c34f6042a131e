# topmark:header:start
#
#   project      : devlogr
#   file         : errors.py
#   file_relpath : src/devlogr/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Exceptions for the devlogr CLI.

Usage:
    Raise these in commands to stop with a formatted message and a specific
    `ExitCode`.

Styling:
    `DevlogrCliError.show()` renders through `devlogr.rendering.safe.format_error`
    and writes to the console stored on the Click context; without one it falls
    back to Click's own error display.
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Any

import click

from devlogr.cli.exit_codes import ExitCode
from devlogr.rendering.safe import format_error

if TYPE_CHECKING:
    from devlogr.console import ConsoleLike


class DevlogrCliError(click.ClickException):
    """Base class for all devlogr CLI errors.

    Attributes:
        kind (str): Short error category shown after ``error:``.
        suggestion (str | None): Optional hint shown after ``help:``.
    """

    exit_code = ExitCode.FAILURE
    kind: str = "command failed"

    def __init__(self, message: str, *, suggestion: str | None = None) -> None:
        super().__init__(message)
        self.suggestion = suggestion

    def format_message(self) -> str:
        """Return the plain error message text."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error through the project console if one is available."""
        ctx: click.Context | None = click.get_current_context(silent=True)
        console: ConsoleLike | None = None
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
        if console is None:
            super().show(file)
            return
        console.error(format_error(self.kind, self.format_message(), self.suggestion))


class DevlogrUsageError(DevlogrCliError):
    """Error for command-line invocation errors (missing input, bad combination)."""

    exit_code = ExitCode.USAGE_ERROR
    kind = "invalid usage"


class DevlogrDataError(DevlogrCliError):
    """Error for input that cannot be processed (e.g. undecodable stdin)."""

    exit_code = ExitCode.DATA_ERROR
    kind = "invalid input"
