# topmark:header:start
#
#   project      : devlogr
#   file         : renderer.py
#   file_relpath : src/devlogr/tasks/renderer.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Live rendering of task trees.

A `LiveTaskRenderer` renders one or more root `TaskNode` trees in one of three
modes, chosen once from the configuration:

* ``ANIMATED`` (interactive terminal with colors, not CI, not JSON): a
  scheduler tick advances a spinner frame and repaints the whole tree in
  place. Only the tick and the final `finish()` write to the console.
* ``STATIC`` (CI, non-interactive, or no colors): no timer; each node that
  reaches a terminal state is written immediately as one complete line.
* ``JSON``: one structured record per state transition.

Frame layout: depth-first in declaration order, two spaces of indentation
per level, output lines one level deeper than their node and only while the
node is running or failed.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Final

from devlogr.config.logging import get_logger
from devlogr.constants import (
    ASCII_SPINNER_FRAMES,
    CLEAR_LINE,
    CURSOR_LINE_START,
    CURSOR_UP,
    FRAME_INTERVAL_SECONDS,
    SPINNER_FRAMES,
)
from devlogr.rendering.formatter import FormatRequest, format_json_line, format_task_line
from devlogr.rendering.styles import get_style
from devlogr.tasks.model import TaskEvent, TaskEventKind, TaskNode, TaskState
from devlogr.tasks.scheduler import Scheduler

if TYPE_CHECKING:
    from collections.abc import Iterable

    from devlogr.config import LogConfig
    from devlogr.config.logging import DevlogrLogger
    from devlogr.console import ConsoleLike
    from devlogr.tasks.scheduler import CancelToken, SchedulerLike

logger: DevlogrLogger = get_logger(__name__)


class RenderMode(str, Enum):
    """How a renderer writes."""

    ANIMATED = "animated"
    STATIC = "static"
    JSON = "json"


def choose_mode(config: LogConfig) -> RenderMode:
    """Pick the render mode for ``config``."""
    if config.use_json:
        return RenderMode.JSON
    if config.is_interactive and config.use_colors and not config.is_ci:
        return RenderMode.ANIMATED
    return RenderMode.STATIC


@dataclass(frozen=True)
class TaskGlyphs:
    """Status glyphs and spinner frames."""

    succeeded: str
    failed: str
    skipped: str
    interrupted: str
    output: str
    frames: tuple[str, ...]


UNICODE_GLYPHS: Final[TaskGlyphs] = TaskGlyphs("✔", "✖", "◯", "❯", "›", SPINNER_FRAMES)
ASCII_GLYPHS: Final[TaskGlyphs] = TaskGlyphs("+", "x", "o", ">", ">", ASCII_SPINNER_FRAMES)

_JSON_STATUS: Final[dict[TaskState, tuple[str, str]]] = {
    TaskState.RUNNING: ("started", "info"),
    TaskState.SUCCEEDED: ("succeeded", "info"),
    TaskState.FAILED: ("failed", "error"),
    TaskState.SKIPPED: ("skipped", "warn"),
}


def erase_lines(count: int) -> str:
    """Return the control sequence that clears the last ``count`` written lines.

    The cursor is expected at the end of the block's last line and is left at
    the start of its first line. ``count == 0`` still clears the current line.
    """
    sequence: str = CURSOR_LINE_START + CLEAR_LINE
    if count > 1:
        sequence += (CURSOR_UP + CURSOR_LINE_START + CLEAR_LINE) * (count - 1)
    return sequence


class LiveTaskRenderer:
    """Render task trees to a console.

    Args:
        console (ConsoleLike): Output target.
        config (LogConfig): Configuration snapshot (mode, colors, Unicode).
        request (FormatRequest | None): Line template for roots added without one
            (prefix, flags). Built from ``config`` when None.
        scheduler (SchedulerLike | None): Timer source for animated mode.
        mode (RenderMode | None): Explicit mode; chosen from ``config`` when None.
        interval (float): Seconds between animation frames.
    """

    def __init__(
        self,
        console: ConsoleLike,
        config: LogConfig,
        *,
        request: FormatRequest | None = None,
        scheduler: SchedulerLike | None = None,
        mode: RenderMode | None = None,
        interval: float = FRAME_INTERVAL_SECONDS,
    ) -> None:
        self.console = console
        self.config = config
        self.mode: RenderMode = mode or choose_mode(config)
        self.interval = interval
        self.glyphs: TaskGlyphs = UNICODE_GLYPHS if config.supports_unicode else ASCII_GLYPHS
        self._template: FormatRequest = request or FormatRequest.from_config(config, "task", "")
        self._scheduler: SchedulerLike = scheduler or Scheduler()
        self._roots: list[TaskNode] = []
        self._requests: dict[int, FormatRequest] = {}
        self._frame_index: int = 0
        self._rendered_lines: int = 0
        self._last_frame: list[str] = []
        self._token: CancelToken | None = None
        self._started: bool = False
        self._finished: bool = False
        self._lock = threading.RLock()
        logger.debug("Task renderer mode: %s", self.mode.value)

    # -- lifecycle -----------------------------------------------------------

    @property
    def roots(self) -> tuple[TaskNode, ...]:
        """Root nodes in the order they were added."""
        return tuple(self._roots)

    @property
    def live(self) -> bool:
        """True between `start()` and `finish()`/`stop()`."""
        return self._started and not self._finished

    def add_root(self, node: TaskNode, request: FormatRequest | None = None) -> None:
        """Render ``node`` (and its subtree) as an additional root.

        Args:
            node (TaskNode): Root to add; typically still pending.
            request (FormatRequest | None): Line template for this tree (e.g. another prefix).
        """
        with self._lock:
            self._roots.append(node)
            if request is not None:
                self._requests[id(node)] = request
            if self.mode is not RenderMode.ANIMATED:
                node.subscribe(self._on_event)

    def remove_root(self, node: TaskNode) -> None:
        """Stop rendering ``node``; the next frame no longer contains it."""
        with self._lock:
            if node not in self._roots:
                return
            self._roots.remove(node)
            self._requests.pop(id(node), None)
            if self.mode is not RenderMode.ANIMATED:
                node.unsubscribe(self._on_event)
            elif self.live:
                self._draw(self.render_frame())

    def start(self, roots: Iterable[TaskNode] = ()) -> None:
        """Add ``roots`` and begin rendering; animated mode starts the frame timer."""
        for node in roots:
            self.add_root(node)
        with self._lock:
            if self._started or self.mode is not RenderMode.ANIMATED:
                self._started = True
                return
            self._started = True
            self._draw(self.render_frame())
        self._token = self._scheduler.call_every(self.interval, self.tick)

    def tick(self) -> None:
        """Advance the spinner frame and repaint (animated mode)."""
        with self._lock:
            if not self.live or self.mode is not RenderMode.ANIMATED:
                return
            self._frame_index += 1
            self._draw(self.render_frame())

    def finish(self) -> None:
        """Stop the timer and write the final state.

        Animated mode replaces the spinner block with the final frame; static
        mode writes a line for every node still running (shown as interrupted).
        """
        self._cancel_timer()
        with self._lock:
            if self._finished:
                return
            self._finished = True
            if self.mode is RenderMode.ANIMATED:
                self._draw(self.render_frame(done=True), final=True)
            elif self.mode is RenderMode.STATIC:
                for root in self._roots:
                    for node, depth in root.walk():
                        if node.state is TaskState.RUNNING:
                            self.console.print(self._node_line(root, node, depth, done=True))
            self._unsubscribe()

    def stop(self) -> None:
        """Stop rendering without a final frame.

        In animated mode the spinner block is cleared with one write, so no
        frame outlives the call.
        """
        self._cancel_timer()
        with self._lock:
            if self._finished:
                return
            self._finished = True
            if self.mode is RenderMode.ANIMATED and self._rendered_lines:
                self.console.write_raw(erase_lines(self._rendered_lines))
                self._rendered_lines = 0
            self._unsubscribe()

    def _cancel_timer(self) -> None:
        # Lock order is token then renderer: never call with self._lock held
        token, self._token = self._token, None
        if token is not None:
            token.cancel()

    def _unsubscribe(self) -> None:
        if self.mode is not RenderMode.ANIMATED:
            for root in self._roots:
                root.unsubscribe(self._on_event)

    # -- frames --------------------------------------------------------------

    def _request_for(self, root: TaskNode) -> FormatRequest:
        return self._requests.get(id(root), self._template)

    def _glyph(self, node: TaskNode, *, done: bool) -> str:
        use_colors: bool = self.config.use_colors
        state: TaskState = node.state
        if state is TaskState.RUNNING:
            if done:
                return get_style("gray", enabled=use_colors)(self.glyphs.interrupted)
            frame: str = self.glyphs.frames[self._frame_index % len(self.glyphs.frames)]
            return get_style("blue", enabled=use_colors)(frame)
        if state is TaskState.SUCCEEDED:
            return get_style("green", enabled=use_colors)(self.glyphs.succeeded)
        if state is TaskState.FAILED:
            return get_style("red", enabled=use_colors)(self.glyphs.failed)
        if state is TaskState.SKIPPED:
            return get_style("yellow", enabled=use_colors)(self.glyphs.skipped)
        return " "

    def _node_line(self, root: TaskNode, node: TaskNode, depth: int, *, done: bool) -> str:
        request: FormatRequest = self._request_for(root).with_message(node.display_title)
        return format_task_line(request, self._glyph(node, done=done), depth=depth)

    def _output_lines(self, root: TaskNode, node: TaskNode, depth: int) -> list[str]:
        marker: str = get_style("cyan", enabled=self.config.use_colors)(self.glyphs.output)
        template: FormatRequest = self._request_for(root)
        return [
            format_task_line(template.with_message(line), marker, depth=depth + 1)
            for line in node.output_lines
        ]

    def _render_node(self, root: TaskNode, node: TaskNode, depth: int, done: bool) -> list[str]:
        lines: list[str] = []
        if node.title:
            lines.append(self._node_line(root, node, depth, done=done))
        if node.state in (TaskState.RUNNING, TaskState.FAILED):
            lines.extend(self._output_lines(root, node, depth))
        if node.state is not TaskState.PENDING and node.state is not TaskState.SKIPPED:
            for child in node.children:
                lines.extend(self._render_node(root, child, depth + 1, done))
        return lines

    def render_frame(self, *, done: bool = False) -> list[str]:
        """Return the lines of one full frame.

        Args:
            done (bool): Render the final frame: running nodes show as interrupted.

        Returns:
            list[str]: One entry per display line.
        """
        with self._lock:
            lines: list[str] = []
            for root in self._roots:
                lines.extend(self._render_node(root, root, 0, done))
            return lines

    def _draw(self, lines: list[str], *, final: bool = False) -> None:
        if not final and lines == self._last_frame and self._rendered_lines:
            return
        text: str = erase_lines(self._rendered_lines) + "\n".join(lines)
        if final:
            text += "\n" if lines else ""
        self.console.write_raw(text)
        self._last_frame = lines
        self._rendered_lines = 0 if final else len(lines)

    # -- static and JSON transitions -----------------------------------------

    def _locate(self, node: TaskNode) -> tuple[TaskNode, int] | None:
        for root in self._roots:
            for candidate, depth in root.walk():
                if candidate is node:
                    return root, depth
        return None

    def _on_event(self, event: TaskEvent) -> None:
        if event.kind is not TaskEventKind.STATE:
            return
        with self._lock:
            if self._finished:
                return
            located: tuple[TaskNode, int] | None = self._locate(event.node)
            if located is None:
                return
            root, depth = located
            if self.mode is RenderMode.JSON:
                self._write_json(root, event.node, depth)
            elif event.node.state.is_terminal:
                self._write_static(root, event.node, depth)

    def _write_static(self, root: TaskNode, node: TaskNode, depth: int) -> None:
        self.console.print(self._node_line(root, node, depth, done=False))
        if node.state is TaskState.FAILED:
            for line in self._output_lines(root, node, depth):
                self.console.print(line)

    def _write_json(self, root: TaskNode, node: TaskNode, depth: int) -> None:
        status, level = _JSON_STATUS[node.state]
        task: dict[str, Any] = {"title": node.display_title, "status": status, "level": depth}
        if node.output_lines:
            task["output"] = "\n".join(node.output_lines)
        if node.state is TaskState.SUCCEEDED and node.duration_ms is not None:
            task["duration"] = node.duration_ms
        request: FormatRequest = self._request_for(root)
        self.console.print(
            format_json_line(level, node.display_title, prefix=request.prefix, extra={"task": task})
        )
