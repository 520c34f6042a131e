# topmark:header:start
#
#   project      : devlogr
#   file         : logger.py
#   file_relpath : src/devlogr/logger.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""The `Logger` facade: leveled lines, spinners and task lists.

A `Logger` is a thin, named front end over the shared `RuntimeContext`. It
filters by the effective level, formats through `devlogr.rendering.formatter`
(text or JSON) and writes through the context console: error and warning
lines go to stderr, everything else to stdout.

Example:
    ```python
    from devlogr import create_logger

    log = create_logger("build")
    log.title("Release")
    log.start_spinner("Compiling...")
    log.succeed_spinner("Compiled")
    log.info("artifacts", {"count": 3})
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from devlogr.constants import DEFAULT_SPINNER_TEXT, SEPARATOR_WIDTH
from devlogr.context import get_context
from devlogr.core.errors import TaskFailedError, UnknownThemeError
from devlogr.core.levels import THEME_FILTER_LEVEL, LogLevel
from devlogr.rendering.formatter import FormatRequest, format_json_line, format_line
from devlogr.rendering.styles import get_style
from devlogr.tasks.renderer import RenderMode, choose_mode
from devlogr.tasks.runner import TaskList
from devlogr.tasks.spinners import DEFAULT_COMPLETION_TEXT, CompletionKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from devlogr.config import LogConfig
    from devlogr.context import RuntimeContext
    from devlogr.tasks.runner import Task
    from devlogr.tasks.spinners import SpinnerRegistry, SpinnerSession


class Logger:
    """Named logger bound to a `RuntimeContext`.

    Args:
        name (str): Logger name, shown as ``[name]`` when prefixes are on.
        context (RuntimeContext | None): Context to use; the active one when None.

    Attributes:
        name (str): Logger name.
        config (LogConfig): Configuration snapshot taken at construction.
    """

    def __init__(self, name: str, *, context: RuntimeContext | None = None) -> None:
        self.name = name
        self._context = context
        self.context.tracker.register(name)
        self.config: LogConfig = self.context.config
        self._session: SpinnerSession | None = None

    @property
    def context(self) -> RuntimeContext:
        """The runtime context this logger writes through."""
        return self._context or get_context()

    # -- level control -------------------------------------------------------

    @staticmethod
    def set_level(level: LogLevel | str) -> None:
        """Override the level of every logger in the active context."""
        get_context().set_level(level)

    @staticmethod
    def reset_level() -> None:
        """Return every logger in the active context to the configured level."""
        get_context().reset_level()

    def is_enabled_for(self, level: LogLevel) -> bool:
        """True if a message at ``level`` would be written."""
        return self.context.level.allows(level)

    # -- leveled output ------------------------------------------------------

    def request(self, level: str, message: str, args: tuple[Any, ...] = ()) -> FormatRequest:
        """Build the `FormatRequest` this logger would use for a line."""
        return FormatRequest.from_config(
            self.config,
            level,
            message,
            args,
            prefix=self.name,
            max_prefix_width=self.context.tracker.max_width,
        )

    def log(self, level: str, message: str, *args: Any) -> None:
        """Write ``message`` with the theme of ``level`` if the level filter allows it.

        Args:
            level (str): Theme level (``"info"``, ``"success"``, ...).
            message (str): Message text.
            *args (Any): Extra values; scalars are appended, structures rendered as JSON.

        Raises:
            UnknownThemeError: If ``level`` is not a theme level.
        """
        filter_level: LogLevel | None = THEME_FILTER_LEVEL.get(level)
        if filter_level is None:
            raise UnknownThemeError(level)
        if not self.is_enabled_for(filter_level):
            return

        if self.config.use_json:
            line: str = format_json_line(filter_level.value, message, args, prefix=self.name)
        else:
            line = format_line(self.request(level, message, args))
        self._write(filter_level, line)

    def _write(self, level: LogLevel, line: str) -> None:
        console = self.context.console
        if level is LogLevel.ERROR:
            console.error(line)
        elif level is LogLevel.WARNING:
            console.warn(line)
        else:
            console.print(line)

    def error(self, message: str, error: BaseException | Any = None, *args: Any) -> None:
        """Log an error; ``error`` (usually an exception) is rendered after the message."""
        extra: tuple[Any, ...] = args if error is None else (error, *args)
        self.log("error", message, *extra)

    def warning(self, message: str, *args: Any) -> None:
        """Log a warning."""
        self.log("warn", message, *args)

    warn = warning

    def info(self, message: str, *args: Any) -> None:
        """Log an informational message."""
        self.log("info", message, *args)

    def debug(self, message: str, *args: Any) -> None:
        """Log a debug message."""
        self.log("debug", message, *args)

    def trace(self, message: str, *args: Any) -> None:
        """Log a trace message."""
        self.log("trace", message, *args)

    def success(self, message: str, *args: Any) -> None:
        """Log a success message (filters as info)."""
        self.log("success", message, *args)

    def title(self, message: str, *args: Any) -> None:
        """Log a section title (filters as info)."""
        self.log("title", message, *args)

    def task(self, message: str, *args: Any) -> None:
        """Log a work-in-progress line (filters as info)."""
        self.log("task", message, *args)

    def plain(self, message: str, *args: Any) -> None:
        """Log a line without a symbol (filters as info)."""
        self.log("plain", message, *args)

    def spacer(self) -> None:
        """Write an empty line (text mode only)."""
        if not self.config.use_json:
            self.context.console.print()

    def separator(self, title: str | None = None) -> None:
        """Write a dim horizontal rule, optionally titled (text mode only)."""
        if self.config.use_json:
            return
        if title:
            line: str = f"--- {title} " + "-" * max(0, SEPARATOR_WIDTH - len(title) - 8)
        else:
            line = "-" * SEPARATOR_WIDTH
        self.context.console.print(get_style("dim", enabled=self.config.use_colors)(line))

    # -- single spinner ------------------------------------------------------

    @property
    def spinners(self) -> SpinnerRegistry:
        """The shared registry, for the multi-key spinner API."""
        return self.context.spinners

    @property
    def spinners_supported(self) -> bool:
        """True when spinners animate; otherwise spinner calls log plain lines."""
        return choose_mode(self.config) is RenderMode.ANIMATED

    @property
    def spinner_key(self) -> str:
        """Registry key of this logger's single spinner."""
        return self.name

    @property
    def spinner_active(self) -> bool:
        """True while this logger's single spinner is running."""
        return self._session is not None and self.spinners.get(self.spinner_key) is self._session

    def start_spinner(self, text: str | None = None) -> SpinnerSession | None:
        """Start this logger's spinner, stopping a previous one first.

        Args:
            text (str | None): Spinner text; ``"Processing..."`` when None.

        Returns:
            SpinnerSession | None: The session, or None when spinners are unsupported
                (a ``task`` line is logged instead).

        Raises:
            DuplicateSpinnerError: If another logger holds a spinner under the same key.
        """
        spinner_text: str = text or DEFAULT_SPINNER_TEXT
        if not self.spinners_supported:
            self.task(spinner_text)
            return None

        self.stop_spinner()
        self._session = self.spinners.start(
            self.spinner_key, spinner_text, request=self.request("task", ""), exclusive=True
        )
        return self._session

    def update_spinner_text(self, text: str) -> None:
        """Replace the text of the running spinner; ignored when none is running."""
        if self.spinner_active:
            self.spinners.update(self.spinner_key, text)

    def stop_spinner(self) -> None:
        """Remove the spinner without a completion line."""
        if self.spinner_active:
            self.spinners.stop(self.spinner_key)
        self._session = None

    def complete_spinner(self, kind: CompletionKind | str, text: str | None = None) -> None:
        """Complete the spinner, or log a line of the matching level when none runs.

        Args:
            kind (CompletionKind | str): ``succeed``, ``fail``, ``warn`` or ``info``.
            text (str | None): Completion text; ``Done``/``Failed``/``Warning``/``Info``
                when None.
        """
        completion = CompletionKind(kind)
        final_text: str = text or DEFAULT_COMPLETION_TEXT[completion]
        if not self.spinner_active:
            self._session = None
            self._log_completion(completion, final_text)
            return
        self.spinners.complete(self.spinner_key, completion, final_text)
        self._session = None

    def _log_completion(self, kind: CompletionKind, text: str) -> None:
        if kind is CompletionKind.SUCCEED:
            self.success(text)
        elif kind is CompletionKind.FAIL:
            self.error(text)
        elif kind is CompletionKind.WARN:
            self.warning(text)
        else:
            self.info(text)

    def succeed_spinner(self, text: str | None = None) -> None:
        """Complete the spinner with success."""
        self.complete_spinner(CompletionKind.SUCCEED, text)

    def fail_spinner(self, text: str | None = None) -> None:
        """Complete the spinner with a failure."""
        self.complete_spinner(CompletionKind.FAIL, text)

    def warn_spinner(self, text: str | None = None) -> None:
        """Complete the spinner with a warning."""
        self.complete_spinner(CompletionKind.WARN, text)

    def info_spinner(self, text: str | None = None) -> None:
        """Complete the spinner with an informational note."""
        self.complete_spinner(CompletionKind.INFO, text)

    # -- task lists ----------------------------------------------------------

    def create_task_list(
        self,
        tasks: Iterable[Task],
        *,
        concurrent: bool = False,
        exit_on_error: bool = True,
        context: Any = None,
    ) -> TaskList:
        """Return a `TaskList` rendered with this logger's prefix and flags."""
        renderer = self.context.task_renderer(self.request("task", ""))
        return TaskList(
            tasks,
            concurrent=concurrent,
            exit_on_error=exit_on_error,
            context=context,
            renderer=renderer,
        )

    async def run_tasks(
        self,
        title: str,
        tasks: Iterable[Task],
        *,
        concurrent: bool = False,
        exit_on_error: bool = True,
        context: Any = None,
    ) -> Any:
        """Log ``title``, run ``tasks`` live, then log the outcome.

        Args:
            title (str): Heading logged before the run.
            tasks (Iterable[Task]): Tasks to run.
            concurrent (bool): Run top-level tasks concurrently.
            exit_on_error (bool): Abort on the first failure.
            context (Any): Shared context passed to task bodies.

        Returns:
            Any: The task context after the run.

        Raises:
            TaskFailedError: If a task failed and ``exit_on_error`` is set.
        """
        self.stop_spinner()
        self.info(title)
        task_list: TaskList = self.create_task_list(
            tasks, concurrent=concurrent, exit_on_error=exit_on_error, context=context
        )
        try:
            result: Any = await task_list.run()
        except TaskFailedError as exc:
            self.error(f"{title} failed", exc)
            raise
        self.success(f"{title} completed successfully")
        return result

    async def run_sequential_tasks(
        self, title: str, tasks: Iterable[Task], context: Any = None
    ) -> Any:
        """Run ``tasks`` one after another, aborting on the first failure."""
        return await self.run_tasks(
            title, tasks, concurrent=False, exit_on_error=True, context=context
        )

    async def run_concurrent_tasks(
        self, title: str, tasks: Iterable[Task], context: Any = None
    ) -> Any:
        """Run ``tasks`` concurrently; failures are shown but do not abort the others."""
        return await self.run_tasks(
            title, tasks, concurrent=True, exit_on_error=False, context=context
        )


def create_logger(name: str, *, context: RuntimeContext | None = None) -> Logger:
    """Return a new `Logger` named ``name``."""
    return Logger(name, context=context)
