# topmark:header:start
#
#   project      : devlogr
#   file         : model.py
#   file_relpath : src/devlogr/tasks/model.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Task tree nodes and their state machine.

A `TaskNode` moves ``PENDING -> RUNNING -> {SUCCEEDED | FAILED | SKIPPED}``; a
pending node may also be skipped directly. Every mutation (state, title,
output) is announced to the node's subscribers as a `TaskEvent`, which is how
renderers learn about progress without polling.

``INTERRUPTED`` is not a node state: it is how a renderer *displays* a node
that is still running when rendering ends.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from devlogr.core.errors import UsageError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


class TaskState(str, Enum):
    """Lifecycle state of a task node."""

    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"

    @property
    def is_terminal(self) -> bool:
        """True for states a node never leaves."""
        return self in (TaskState.SUCCEEDED, TaskState.FAILED, TaskState.SKIPPED)


class TaskEventKind(str, Enum):
    """What changed on a node."""

    STATE = "state"
    TITLE = "title"
    OUTPUT = "output"


@dataclass(frozen=True)
class TaskEvent:
    """Notification sent to node subscribers.

    Attributes:
        node (TaskNode): The node that changed.
        kind (TaskEventKind): What changed.
        previous (TaskState | None): Previous state, for ``STATE`` events.
    """

    node: TaskNode
    kind: TaskEventKind
    previous: TaskState | None = None


_ALLOWED: dict[TaskState, frozenset[TaskState]] = {
    TaskState.PENDING: frozenset({TaskState.RUNNING, TaskState.SKIPPED}),
    TaskState.RUNNING: frozenset({TaskState.SUCCEEDED, TaskState.FAILED, TaskState.SKIPPED}),
    TaskState.SUCCEEDED: frozenset(),
    TaskState.FAILED: frozenset(),
    TaskState.SKIPPED: frozenset(),
}


@dataclass(eq=False)
class TaskNode:
    """One task in a rendered tree.

    Attributes:
        title (str): Display title.
        state (TaskState): Current state.
        output_lines (list[str]): Buffered output lines, in arrival order.
        children (list[TaskNode]): Subtasks, in declaration order.
        started_at (float | None): Monotonic start time.
        finished_at (float | None): Monotonic completion time.
        skip_reason (str | None): Reason shown after the title when skipped.
        error (BaseException | None): Failure cause, when failed.
    """

    title: str
    state: TaskState = TaskState.PENDING
    output_lines: list[str] = field(default_factory=list)
    children: list[TaskNode] = field(default_factory=list)
    started_at: float | None = None
    finished_at: float | None = None
    skip_reason: str | None = None
    error: BaseException | None = None
    _listeners: list[Callable[[TaskEvent], None]] = field(
        default_factory=list, init=False, repr=False
    )

    # -- hooks ---------------------------------------------------------------

    def subscribe(self, listener: Callable[[TaskEvent], None], *, recursive: bool = True) -> None:
        """Register ``listener`` for this node (and, by default, its current children)."""
        self._listeners.append(listener)
        if recursive:
            for child in self.children:
                child.subscribe(listener)

    def unsubscribe(self, listener: Callable[[TaskEvent], None]) -> None:
        """Remove ``listener`` from this node and its children; unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)
        for child in self.children:
            child.unsubscribe(listener)

    def _emit(self, kind: TaskEventKind, previous: TaskState | None = None) -> None:
        event = TaskEvent(node=self, kind=kind, previous=previous)
        for listener in list(self._listeners):
            listener(event)

    # -- tree ----------------------------------------------------------------

    def add_child(self, child: TaskNode) -> TaskNode:
        """Append ``child`` and give it this node's listeners."""
        self.children.append(child)
        for listener in self._listeners:
            child.subscribe(listener)
        return child

    def walk(self, depth: int = 0) -> Iterator[tuple[TaskNode, int]]:
        """Yield ``(node, depth)`` pairs depth-first in declaration order."""
        yield self, depth
        for child in self.children:
            yield from child.walk(depth + 1)

    # -- state machine -------------------------------------------------------

    def _transition(self, new_state: TaskState) -> None:
        if new_state not in _ALLOWED[self.state]:
            raise UsageError(
                f"Task '{self.title}' cannot go from {self.state.value} to {new_state.value}"
            )
        previous: TaskState = self.state
        self.state = new_state
        if new_state is TaskState.RUNNING:
            self.started_at = time.monotonic()
        elif new_state.is_terminal:
            self.finished_at = time.monotonic()
        self._emit(TaskEventKind.STATE, previous)

    def start(self) -> None:
        """Mark the node running."""
        self._transition(TaskState.RUNNING)

    def succeed(self, title: str | None = None) -> None:
        """Mark the node succeeded, optionally replacing its title first."""
        if title:
            self.title = title
        self._transition(TaskState.SUCCEEDED)

    def fail(self, error: BaseException | None = None, title: str | None = None) -> None:
        """Mark the node failed."""
        if title:
            self.title = title
        self.error = error
        self._transition(TaskState.FAILED)

    def skip(self, reason: str | None = None) -> None:
        """Mark the node skipped; ``reason`` is shown after the title."""
        self.skip_reason = reason
        self._transition(TaskState.SKIPPED)

    def set_title(self, title: str) -> None:
        """Replace the title and notify subscribers."""
        self.title = title
        self._emit(TaskEventKind.TITLE)

    def append_output(self, text: str) -> None:
        """Buffer output; multi-line text adds one entry per non-empty line."""
        lines: list[str] = [line for line in text.strip().splitlines() if line.strip()]
        if not lines:
            return
        self.output_lines.extend(lines)
        self._emit(TaskEventKind.OUTPUT)

    @property
    def duration_ms(self) -> int | None:
        """Start-to-completion wall time in milliseconds, once both are known."""
        if self.started_at is None or self.finished_at is None:
            return None
        return round((self.finished_at - self.started_at) * 1000)

    @property
    def display_title(self) -> str:
        """Title as displayed: skipped nodes get `` -> <reason>``."""
        if self.state is TaskState.SKIPPED and self.skip_reason:
            return f"{self.title} -> {self.skip_reason}"
        return self.title
