# topmark:header:start
#
#   project      : devlogr
#   file         : console.py
#   file_relpath : src/devlogr/console.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Console abstraction for everything devlogr writes.

All output (log lines, task frames, cursor control) goes through a
`ConsoleLike`. Lines arrive fully formatted and already styled, so the
console never adds or strips styling itself.
"""

from __future__ import annotations

import sys
from typing import Protocol, TextIO

import click

from devlogr.capabilities import stream_is_interactive


class ConsoleLike(Protocol):
    """Minimal output surface used by loggers and renderers.

    Implementations may use Click or plain stdlib streams.
    """

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write a line to stdout."""
        ...

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write a warning line to stderr."""
        ...

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error line to stderr."""
        ...

    def write_raw(self, text: str) -> None:
        """Write ``text`` to stdout verbatim (cursor control sequences) and flush."""
        ...

    @property
    def is_interactive(self) -> bool:
        """True if stdout is a terminal."""
        ...


class ClickConsole:
    """Console writing through `click.echo`.

    Args:
        out (TextIO | None): Stream for standard output. Defaults to `sys.stdout`
            at write time, so stream replacement (e.g. by test runners) is honoured.
        err (TextIO | None): Stream for error output. Defaults to `sys.stderr`.

    Attributes:
        out (TextIO | None): Explicit standard output stream, if any.
        err (TextIO | None): Explicit error stream, if any.
    """

    out: TextIO | None
    err: TextIO | None

    def __init__(self, *, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self.out = out
        self.err = err

    @property
    def stdout(self) -> TextIO:
        """The effective standard output stream."""
        return self.out or sys.stdout

    @property
    def stderr(self) -> TextIO:
        """The effective error stream."""
        return self.err or sys.stderr

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write a message to stdout.

        Args:
            text (str): Message text.
            nl (bool): If True, append a newline.
        """
        # color=True: devlogr decides about styling before the text gets here
        click.echo(text, nl=nl, file=self.stdout, color=True)

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write a warning message to stderr.

        Args:
            text (str): Warning text.
            nl (bool): If True, append a newline.
        """
        click.echo(text, nl=nl, file=self.stderr, color=True)

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error message to stderr.

        Args:
            text (str): Error text.
            nl (bool): If True, append a newline.
        """
        click.echo(text, nl=nl, file=self.stderr, color=True)

    def write_raw(self, text: str) -> None:
        """Write cursor-control text to stdout and flush."""
        stream: TextIO = self.stdout
        stream.write(text)
        stream.flush()

    @property
    def is_interactive(self) -> bool:
        """True if stdout is a terminal."""
        return stream_is_interactive(self.stdout)
