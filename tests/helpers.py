# topmark:header:start
#
#   project      : devlogr
#   file         : helpers.py
#   file_relpath : tests/helpers.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Test doubles shared across the devlogr test suite.

Tests that need a particular terminal build their own `RuntimeContext` with an
explicit ``env`` mapping, a `FakeStream` (TTY or not), a `FakeConsole` that
records output, and a `FakeScheduler` that only ticks when told to.
"""

from __future__ import annotations

import io
import re
from collections.abc import Callable
from typing import Any

from devlogr.config import LogConfig
from devlogr.context import RuntimeContext, set_context
from devlogr.tasks.scheduler import CancelToken

# Environment that yields an animated terminal with a TTY stream
ANIMATED_ENV: dict[str, str] = {"FORCE_COLOR": "1", "DEVLOGR_NO_EMOJI": "1"}

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def unstyle(text: str) -> str:
    """Remove ANSI escape sequences."""
    return _ANSI_RE.sub("", text)


class FakeStream(io.StringIO):
    """In-memory stream whose TTY status is chosen by the test."""

    def __init__(self, *, tty: bool = False) -> None:
        super().__init__()
        self._tty = tty

    def isatty(self) -> bool:
        if self.closed:
            raise ValueError("I/O operation on closed file.")
        return self._tty


class FakeConsole:
    """`ConsoleLike` that records everything written to it.

    Attributes:
        out (list[str]): Lines printed to stdout.
        err (list[str]): Lines written to stderr (warnings and errors).
        raw (list[str]): Raw cursor-control writes, in order.
    """

    def __init__(self, *, interactive: bool = False) -> None:
        self.out: list[str] = []
        self.err: list[str] = []
        self.raw: list[str] = []
        self._interactive = interactive

    def print(self, text: str = "", *, nl: bool = True) -> None:
        self.out.append(text)

    def warn(self, text: str, *, nl: bool = True) -> None:
        self.err.append(text)

    def error(self, text: str, *, nl: bool = True) -> None:
        self.err.append(text)

    def write_raw(self, text: str) -> None:
        self.raw.append(text)

    @property
    def is_interactive(self) -> bool:
        return self._interactive

    @property
    def raw_text(self) -> str:
        """All raw writes concatenated."""
        return "".join(self.raw)


class FakeScheduler:
    """Scheduler that never starts a timer; tests fire callbacks explicitly.

    Attributes:
        calls (list[tuple[float, CancelToken, Callable[[], None]]]): Every
            `call_every` registration, in order.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[float, CancelToken, Callable[[], None]]] = []

    def call_every(self, interval: float, fn: Callable[[], None]) -> CancelToken:
        token = CancelToken()
        self.calls.append((interval, token, fn))
        return token

    def live(self) -> list[tuple[float, CancelToken, Callable[[], None]]]:
        """Registrations whose token is not cancelled."""
        return [call for call in self.calls if not call[1].cancelled]

    def fire(self, times: int = 1, *, interval: float | None = None) -> None:
        """Run every live callback ``times`` times (optionally only one interval)."""
        for _ in range(times):
            for every, token, fn in self.live():
                if interval is None or every == interval:
                    token._run(fn)


def make_context(
    env: dict[str, str] | None = None,
    *,
    tty: bool = False,
    console: FakeConsole | None = None,
    scheduler: FakeScheduler | None = None,
) -> RuntimeContext:
    """Build a `RuntimeContext` with explicit inputs and install it as the active one.

    Args:
        env (dict[str, str] | None): Environment snapshot (empty when None).
        tty (bool): Whether the probed stream is a terminal.
        console (FakeConsole | None): Console to record output; a new one when None.
        scheduler (FakeScheduler | None): Scheduler; a new one when None.

    Returns:
        RuntimeContext: The installed context.
    """
    context = RuntimeContext(
        env=dict(env or {}),
        stream=FakeStream(tty=tty),
        console=console or FakeConsole(interactive=tty),
        scheduler=scheduler or FakeScheduler(),
    )
    set_context(context)
    return context


def make_config(**overrides: Any) -> LogConfig:
    """Return a `LogConfig` with plain-text defaults and ``overrides`` applied."""
    return LogConfig(**overrides)
