# topmark:header:start
#
#   project      : devlogr
#   file         : scheduler.py
#   file_relpath : src/devlogr/tasks/scheduler.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Periodic callbacks with explicit cancellation.

`Scheduler.call_every()` runs a callback at a fixed interval and returns a
`CancelToken`. Inside a running asyncio event loop the callback is driven by
``loop.call_later`` on that loop; otherwise a daemon thread drives it.

Cancellation is synchronous: once `CancelToken.cancel()` returns, the callback
is not running and will not run again.
"""

from __future__ import annotations

import asyncio
import threading
from typing import TYPE_CHECKING, Protocol

from devlogr.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from devlogr.config.logging import DevlogrLogger

logger: DevlogrLogger = get_logger(__name__)


class CancelToken:
    """Handle returned by `Scheduler.call_every`.

    The token's lock is held while the callback runs, so `cancel()` waits for a
    callback in progress on another thread. Cancelling from inside the callback
    itself is allowed.
    """

    def __init__(self) -> None:
        self._cancelled = threading.Event()
        self._lock = threading.RLock()
        self._handle: asyncio.TimerHandle | None = None

    @property
    def cancelled(self) -> bool:
        """True once `cancel()` has been called."""
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Stop future invocations; idempotent."""
        with self._lock:
            self._cancelled.set()
            if self._handle is not None:
                self._handle.cancel()
                self._handle = None

    def _run(self, fn: Callable[[], None]) -> bool:
        """Invoke ``fn`` unless cancelled; return False when cancelled."""
        with self._lock:
            if self.cancelled:
                return False
            try:
                fn()
            except Exception:  # noqa: BLE001
                logger.exception("Scheduled callback %r failed; cancelling", fn)
                self._cancelled.set()
                return False
            return not self.cancelled

    def _wait(self, interval: float) -> bool:
        """Sleep up to ``interval``; return True if cancelled meanwhile."""
        return self._cancelled.wait(interval)


class SchedulerLike(Protocol):
    """Anything that can run a callback periodically."""

    def call_every(self, interval: float, fn: Callable[[], None]) -> CancelToken:
        """Run ``fn`` every ``interval`` seconds until the token is cancelled."""
        ...


class Scheduler:
    """Default scheduler: asyncio when a loop is running, a daemon thread otherwise."""

    def call_every(self, interval: float, fn: Callable[[], None]) -> CancelToken:
        """Run ``fn`` every ``interval`` seconds until the token is cancelled.

        Args:
            interval (float): Seconds between invocations (first call after one interval).
            fn (Callable[[], None]): Callback; exceptions are logged and stop the timer.

        Returns:
            CancelToken: Token that stops the timer.
        """
        token = CancelToken()
        try:
            loop: asyncio.AbstractEventLoop = asyncio.get_running_loop()
        except RuntimeError:
            self._start_thread(token, interval, fn)
        else:
            self._schedule_on_loop(loop, token, interval, fn)
        return token

    def _schedule_on_loop(
        self,
        loop: asyncio.AbstractEventLoop,
        token: CancelToken,
        interval: float,
        fn: Callable[[], None],
    ) -> None:
        def tick() -> None:
            if token._run(fn):
                with token._lock:
                    if not token.cancelled:
                        token._handle = loop.call_later(interval, tick)

        with token._lock:
            token._handle = loop.call_later(interval, tick)

    def _start_thread(self, token: CancelToken, interval: float, fn: Callable[[], None]) -> None:
        def loop() -> None:
            while not token._wait(interval):
                if not token._run(fn):
                    break

        thread = threading.Thread(target=loop, name="devlogr-timer", daemon=True)
        thread.start()
