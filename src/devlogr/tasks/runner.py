# topmark:header:start
#
#   project      : devlogr
#   file         : runner.py
#   file_relpath : src/devlogr/tasks/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Task orchestration on top of `TaskNode` trees.

A `TaskList` turns declarative `Task` definitions into `TaskNode` trees, runs
their bodies on the running event loop and drives the node state machine.
Rendering is delegated to an optional `LiveTaskRenderer`; without one the list
runs silently.

Policies:
    * ``concurrent``: run sibling tasks at the same time (``asyncio.wait``)
      or one after another.
    * ``exit_on_error``: on the first failure abort the remaining siblings
      (concurrent siblings are cancelled and display as interrupted) and raise
      `TaskFailedError`; otherwise record the failure and keep going.

Task bodies receive ``(context, handle)``. Coroutine functions are awaited on
the loop; plain callables run in a worker thread so the animation keeps
ticking while they block.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from devlogr.config.logging import get_logger
from devlogr.core.errors import TaskFailedError
from devlogr.tasks.model import TaskNode, TaskState

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from devlogr.config.logging import DevlogrLogger
    from devlogr.tasks.renderer import LiveTaskRenderer

logger: DevlogrLogger = get_logger(__name__)

TaskBody = Callable[[Any, "TaskHandle"], Any]
SkipRule = bool | str | Callable[[Any], bool | str | None]
EnabledRule = bool | Callable[[Any], bool]


@dataclass
class Task:
    """Declarative task definition.

    Attributes:
        title (str): Display title.
        body (TaskBody | None): ``body(context, handle)``; sync or async. None for a
            pure grouping task.
        subtasks (Sequence[Task]): Children, run after the body succeeds.
        concurrent_subtasks (bool): Run the children concurrently.
        skip (SkipRule): ``True`` or a non-empty reason skips the task; a callable is
            evaluated against the context when the task is reached.
        enabled (EnabledRule): Disabled tasks get no node and never run.
    """

    title: str
    body: TaskBody | None = None
    subtasks: Sequence[Task] = ()
    concurrent_subtasks: bool = False
    skip: SkipRule = False
    enabled: EnabledRule = True


@dataclass(frozen=True)
class TaskError:
    """A failure recorded while running a list.

    Attributes:
        title (str): Title of the task whose body raised.
        error (BaseException): The exception.
    """

    title: str
    error: BaseException


class TaskHandle:
    """What a task body can do to its own node."""

    def __init__(self, node: TaskNode) -> None:
        self._node = node
        self._skip_reason: str | None = None
        self._skipped: bool = False

    @property
    def node(self) -> TaskNode:
        """The node this handle drives."""
        return self._node

    @property
    def title(self) -> str:
        """Current title."""
        return self._node.title

    @title.setter
    def title(self, value: str) -> None:
        self._node.set_title(value)

    def output(self, text: str) -> None:
        """Attach output lines below the task."""
        self._node.append_output(str(text))

    def skip(self, reason: str | None = None) -> None:
        """Mark the task skipped once its body returns; subtasks do not run."""
        self._skipped = True
        self._skip_reason = reason

    @property
    def skipped(self) -> bool:
        """True if the body asked to be skipped."""
        return self._skipped

    @property
    def skip_reason(self) -> str | None:
        """Reason passed to `skip()`."""
        return self._skip_reason


def _is_enabled(task: Task, context: Any) -> bool:
    if callable(task.enabled):
        return bool(task.enabled(context))
    return bool(task.enabled)


def _skip_reason(task: Task, context: Any) -> str | None:
    """Return None to run the task, or the (possibly empty) skip reason."""
    rule: bool | str | None = task.skip(context) if callable(task.skip) else task.skip
    if rule is None or rule is False:
        return None
    if isinstance(rule, str):
        return rule if rule else None
    return ""


class TaskList:
    """Run a list of tasks and reflect their progress on `TaskNode` trees.

    Args:
        tasks (Iterable[Task]): Top-level tasks.
        concurrent (bool): Run top-level tasks concurrently.
        exit_on_error (bool): Abort on the first failure.
        context (Any): Object passed to every body and rule; a new dict when None.
        renderer (LiveTaskRenderer | None): Renderer for the roots; silent when None.

    Attributes:
        context (Any): The shared context, returned by `run()`.
        errors (list[TaskError]): Failures, in the order they were recorded.
    """

    def __init__(
        self,
        tasks: Iterable[Task],
        *,
        concurrent: bool = False,
        exit_on_error: bool = True,
        context: Any = None,
        renderer: LiveTaskRenderer | None = None,
    ) -> None:
        self.context: Any = {} if context is None else context
        self.concurrent = concurrent
        self.exit_on_error = exit_on_error
        self.renderer = renderer
        self.errors: list[TaskError] = []
        self._recorded: set[int] = set()
        self._children: dict[int, list[tuple[Task, TaskNode]]] = {}
        self._entries: list[tuple[Task, TaskNode]] = self._build(tasks)

    def _build(self, tasks: Iterable[Task]) -> list[tuple[Task, TaskNode]]:
        entries: list[tuple[Task, TaskNode]] = []
        for task in tasks:
            if not _is_enabled(task, self.context):
                logger.trace("Task %r is disabled", task.title)
                continue
            node = TaskNode(task.title)
            children: list[tuple[Task, TaskNode]] = self._build(task.subtasks)
            for _child_task, child_node in children:
                node.add_child(child_node)
            self._children[id(node)] = children
            entries.append((task, node))
        return entries

    @property
    def roots(self) -> list[TaskNode]:
        """Root nodes, one per enabled top-level task."""
        return [node for _task, node in self._entries]

    async def run(self) -> Any:
        """Run every task and return the context.

        Returns:
            Any: The shared context.

        Raises:
            TaskFailedError: If a task failed and ``exit_on_error`` is set. The
                original exception is chained as ``__cause__``.
        """
        if self.renderer is not None:
            self.renderer.start(self.roots)
        try:
            await self._run_group(self._entries, concurrent=self.concurrent)
        except Exception as exc:
            title: str = self._title_of(exc)
            raise TaskFailedError(str(exc) or type(exc).__name__, title=title) from exc
        finally:
            if self.renderer is not None:
                self.renderer.finish()
        return self.context

    def _title_of(self, exc: BaseException) -> str:
        for recorded in self.errors:
            if recorded.error is exc:
                return recorded.title
        return ""

    async def _run_group(
        self, entries: Sequence[tuple[Task, TaskNode]], *, concurrent: bool
    ) -> None:
        if not entries:
            return
        if not concurrent:
            for task, node in entries:
                try:
                    await self._run_task(task, node)
                except Exception:
                    if self.exit_on_error:
                        raise
            return

        futures: list[asyncio.Future[None]] = [
            asyncio.ensure_future(self._run_task(task, node)) for task, node in entries
        ]
        if not self.exit_on_error:
            await asyncio.gather(*futures, return_exceptions=True)
            return

        try:
            done, pending = await asyncio.wait(futures, return_when=asyncio.FIRST_EXCEPTION)
        except asyncio.CancelledError:
            for future in futures:
                future.cancel()
            raise
        for future in pending:
            future.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        for future in futures:
            if future in done and not future.cancelled():
                error: BaseException | None = future.exception()
                if error is not None:
                    raise error

    async def _run_task(self, task: Task, node: TaskNode) -> None:
        reason: str | None = _skip_reason(task, self.context)
        if reason is not None:
            node.skip(reason or None)
            return

        node.start()
        handle = TaskHandle(node)
        try:
            if task.body is not None:
                await self._call_body(task.body, handle)
            if not handle.skipped:
                await self._run_group(self._children[id(node)], concurrent=task.concurrent_subtasks)
        except Exception as exc:
            if id(exc) not in self._recorded:
                self._recorded.add(id(exc))
                self.errors.append(TaskError(title=node.title, error=exc))
                logger.debug("Task %r failed: %r", node.title, exc)
            node.fail(exc)
            raise

        if handle.skipped:
            node.skip(handle.skip_reason)
        elif node.state is TaskState.RUNNING:
            node.succeed()

    async def _call_body(self, body: TaskBody, handle: TaskHandle) -> None:
        if inspect.iscoroutinefunction(body):
            await body(self.context, handle)
            return
        result: Any = await asyncio.to_thread(body, self.context, handle)
        if inspect.isawaitable(result):
            await result
