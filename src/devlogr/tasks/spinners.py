# topmark:header:start
#
#   project      : devlogr
#   file         : spinners.py
#   file_relpath : src/devlogr/tasks/spinners.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Keyed spinner sessions sharing one live renderer.

Every active spinner is a one-node task tree registered under a key. All
sessions are roots of a single `LiveTaskRenderer`, so only one animation timer
ever writes to the terminal. The renderer is created when the first session
starts and finished once the last one ends.

Each session carries a `concurrent.futures.Future` that settles exactly once:
with the completion text on ``succeed``/``warn``/``info``, with
`TaskFailedError` on ``fail``, and with `SpinnerStoppedError` on ``stop``.

When more than one key is active, a rotation timer advances which key is
reported by `SpinnerRegistry.primary_key()`; this is only a display hint.
"""

from __future__ import annotations

import threading
from concurrent.futures import Future
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from devlogr.config.logging import get_logger
from devlogr.constants import DEFAULT_SPINNER_TEXT, ROTATION_INTERVAL_SECONDS
from devlogr.core.errors import DuplicateSpinnerError, SpinnerStoppedError, TaskFailedError
from devlogr.tasks.model import TaskNode, TaskState
from devlogr.tasks.scheduler import Scheduler

if TYPE_CHECKING:
    from collections.abc import Callable

    from devlogr.config.logging import DevlogrLogger
    from devlogr.rendering.formatter import FormatRequest
    from devlogr.tasks.renderer import LiveTaskRenderer
    from devlogr.tasks.scheduler import CancelToken, SchedulerLike

logger: DevlogrLogger = get_logger(__name__)


class CompletionKind(str, Enum):
    """How a spinner session ends."""

    SUCCEED = "succeed"
    FAIL = "fail"
    WARN = "warn"
    INFO = "info"


DEFAULT_COMPLETION_TEXT: dict[CompletionKind, str] = {
    CompletionKind.SUCCEED: "Done",
    CompletionKind.FAIL: "Failed",
    CompletionKind.WARN: "Warning",
    CompletionKind.INFO: "Info",
}


@dataclass(eq=False)
class SpinnerSession:
    """One active spinner.

    Attributes:
        key (str): Registry key.
        root (TaskNode): The single running node.
        future (Future[str | None]): Completion channel; settles exactly once.
        exclusive (bool): Started through the single-spinner API.
    """

    key: str
    root: TaskNode
    future: Future[str | None] = field(default_factory=Future)
    exclusive: bool = False

    @property
    def text(self) -> str:
        """Current spinner text."""
        return self.root.title


class SpinnerRegistry:
    """Keyed map of active spinner sessions.

    Args:
        renderer_factory (Callable[[], LiveTaskRenderer | None]): Creates the shared renderer
            when the first session of a batch starts; None when spinners are not
            animated, in which case sessions are tracked without drawing.
        scheduler (SchedulerLike | None): Timer source for key rotation.
        rotation_interval (float): Seconds between primary-key rotations.
    """

    def __init__(
        self,
        renderer_factory: Callable[[], LiveTaskRenderer | None],
        *,
        scheduler: SchedulerLike | None = None,
        rotation_interval: float = ROTATION_INTERVAL_SECONDS,
    ) -> None:
        self._renderer_factory = renderer_factory
        self._scheduler: SchedulerLike = scheduler or Scheduler()
        self._rotation_interval = rotation_interval
        self._sessions: dict[str, SpinnerSession] = {}
        self._renderer: LiveTaskRenderer | None = None
        self._rotation: CancelToken | None = None
        self._primary_index: int = 0
        self._lock = threading.RLock()

    # -- queries -------------------------------------------------------------

    def get(self, key: str) -> SpinnerSession | None:
        """Return the active session for ``key``, if any."""
        return self._sessions.get(key)

    def is_active(self, key: str) -> bool:
        """True if ``key`` has an active session."""
        return key in self._sessions

    def active_keys(self) -> list[str]:
        """Active keys in start order."""
        return list(self._sessions)

    def primary_key(self) -> str | None:
        """The key currently in the foreground, rotating when several are active."""
        keys: list[str] = self.active_keys()
        if not keys:
            return None
        return keys[self._primary_index % len(keys)]

    def stats(self) -> dict[str, object]:
        """Summary of the registry for diagnostics."""
        return {
            "active": len(self._sessions),
            "keys": self.active_keys(),
            "primary": self.primary_key(),
            "rotating": self._rotation is not None,
        }

    @property
    def renderer(self) -> LiveTaskRenderer | None:
        """The live renderer of the current batch, if any."""
        return self._renderer

    # -- lifecycle -----------------------------------------------------------

    def start(
        self,
        key: str,
        title: str | None = None,
        *,
        request: FormatRequest | None = None,
        exclusive: bool = False,
    ) -> SpinnerSession:
        """Start a spinner under ``key``.

        Args:
            key (str): Registry key.
            title (str | None): Spinner text; ``"Processing..."`` when None.
            request (FormatRequest | None): Line template (prefix, flags) for this spinner.
            exclusive (bool): Single-spinner semantics: an active ``key`` is an error
                instead of being replaced.

        Returns:
            SpinnerSession: The new session.

        Raises:
            DuplicateSpinnerError: If ``exclusive`` and ``key`` is still active.
        """
        with self._lock:
            if key in self._sessions:
                if exclusive:
                    raise DuplicateSpinnerError(key)
                self.stop(key)

            session = SpinnerSession(
                key=key, root=TaskNode(title or DEFAULT_SPINNER_TEXT), exclusive=exclusive
            )
            self._sessions[key] = session

            fresh: bool = self._renderer is None
            if fresh:
                self._renderer = self._renderer_factory()
            if self._renderer is not None:
                self._renderer.add_root(session.root, request)
            session.root.start()
            if fresh and self._renderer is not None:
                self._renderer.start()
            if len(self._sessions) > 1 and self._rotation is None:
                self._rotation = self._scheduler.call_every(self._rotation_interval, self.rotate)

        logger.debug("Spinner %r started (%d active)", key, len(self._sessions))
        return session

    def update(self, key: str, text: str) -> bool:
        """Replace the text of ``key``; return False if it is not active."""
        session: SpinnerSession | None = self._sessions.get(key)
        if session is None:
            return False
        session.root.set_title(text)
        return True

    def stop(self, key: str) -> None:
        """Stop ``key`` without a completion line; unknown keys are ignored."""
        with self._lock:
            session: SpinnerSession | None = self._sessions.pop(key, None)
            if session is None:
                return
            if self._renderer is not None:
                self._renderer.remove_root(session.root)
            if not session.future.done():
                session.future.set_exception(SpinnerStoppedError(f"Spinner '{key}' was stopped"))
        self._after_removal()

    def complete(self, key: str, kind: CompletionKind, text: str | None = None) -> str | None:
        """End ``key`` with a final state.

        The node shows ``text`` (or the default completion text for ``kind``)
        with the matching glyph; ``warn`` displays as skipped.

        Args:
            key (str): Registry key.
            kind (CompletionKind): Completion kind.
            text (str | None): Final text.

        Returns:
            str | None: The final text, or None if ``key`` was not active.
        """
        final_text: str = text or DEFAULT_COMPLETION_TEXT[kind]
        with self._lock:
            session: SpinnerSession | None = self._sessions.pop(key, None)
            if session is None:
                return None
            node: TaskNode = session.root
            if node.state is TaskState.RUNNING:
                if kind is CompletionKind.FAIL:
                    error = TaskFailedError(final_text, title=node.title)
                    node.fail(error, title=final_text)
                elif kind is CompletionKind.WARN:
                    node.set_title(final_text)
                    node.skip()
                else:
                    node.succeed(final_text)

            if kind is CompletionKind.FAIL:
                session.future.set_exception(TaskFailedError(final_text, title=key))
            else:
                session.future.set_result(final_text)
        self._after_removal()
        return final_text

    def succeed(self, key: str, text: str | None = None) -> str | None:
        """Complete ``key`` successfully."""
        return self.complete(key, CompletionKind.SUCCEED, text)

    def fail(self, key: str, text: str | None = None) -> str | None:
        """Complete ``key`` as failed."""
        return self.complete(key, CompletionKind.FAIL, text)

    def warn(self, key: str, text: str | None = None) -> str | None:
        """Complete ``key`` with a warning."""
        return self.complete(key, CompletionKind.WARN, text)

    def info(self, key: str, text: str | None = None) -> str | None:
        """Complete ``key`` with an informational note."""
        return self.complete(key, CompletionKind.INFO, text)

    def stop_all(self) -> None:
        """Stop every active session and tear the renderer down."""
        for key in self.active_keys():
            self.stop(key)
        self._primary_index = 0

    def rotate(self) -> None:
        """Advance the primary key by one position."""
        if len(self._sessions) > 1:
            self._primary_index += 1

    def _after_removal(self) -> None:
        """Cancel rotation and end the renderer batch as sessions drain."""
        rotation: CancelToken | None = None
        renderer: LiveTaskRenderer | None = None
        with self._lock:
            if len(self._sessions) <= 1:
                rotation, self._rotation = self._rotation, None
            if not self._sessions:
                renderer, self._renderer = self._renderer, None
                self._primary_index = 0

        if rotation is not None:
            rotation.cancel()
        if renderer is not None:
            if renderer.roots:
                renderer.finish()
            else:
                renderer.stop()
