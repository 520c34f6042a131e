# topmark:header:start
#
#   project      : devlogr
#   file         : context.py
#   file_relpath : src/devlogr/context.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Process-wide runtime state for devlogr.

The `RuntimeContext` owns everything that the loggers of one process share:

- the memoized `CapabilityProfile` and `LogConfig`;
- the `PrefixWidthTracker` used to align logger names;
- the level override set with `Logger.set_level()`;
- the console, the scheduler and the `SpinnerRegistry`.

`get_context()` returns the active context, creating it on first use.
`reset_context()` discards it; tests call it between cases so environment
changes are picked up again.
"""

from __future__ import annotations

import os
import threading
from typing import TYPE_CHECKING

from devlogr.capabilities import detect
from devlogr.config import resolve_config
from devlogr.config.logging import get_logger
from devlogr.console import ClickConsole
from devlogr.core.levels import LogLevel, parse_log_level
from devlogr.rendering.tracker import PrefixWidthTracker
from devlogr.tasks.renderer import LiveTaskRenderer, RenderMode, choose_mode
from devlogr.tasks.scheduler import Scheduler
from devlogr.tasks.spinners import SpinnerRegistry

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import TextIO

    from devlogr.capabilities import CapabilityProfile
    from devlogr.config import LogConfig
    from devlogr.config.logging import DevlogrLogger
    from devlogr.console import ConsoleLike
    from devlogr.rendering.formatter import FormatRequest
    from devlogr.tasks.scheduler import SchedulerLike

logger: DevlogrLogger = get_logger(__name__)


class RuntimeContext:
    """Shared state of all loggers in a process.

    Args:
        env (Mapping[str, str] | None): Environment snapshot; ``os.environ`` (read on
            first use) when None.
        stream (TextIO | None): Stream probed for TTY status; ``sys.stdout`` when None.
        console (ConsoleLike | None): Output target; a `ClickConsole` when None.
        scheduler (SchedulerLike | None): Timer source for animation and rotation.
    """

    def __init__(
        self,
        *,
        env: Mapping[str, str] | None = None,
        stream: TextIO | None = None,
        console: ConsoleLike | None = None,
        scheduler: SchedulerLike | None = None,
    ) -> None:
        self._env = env
        self._stream = stream
        self.console: ConsoleLike = console or ClickConsole()
        self.scheduler: SchedulerLike = scheduler or Scheduler()
        self.tracker = PrefixWidthTracker()
        self._profile: CapabilityProfile | None = None
        self._config: LogConfig | None = None
        self._level_override: LogLevel | None = None
        self._spinners: SpinnerRegistry | None = None
        self._lock = threading.RLock()

    @property
    def env(self) -> Mapping[str, str]:
        """The environment the profile and configuration are resolved from."""
        return dict(os.environ) if self._env is None else self._env

    @property
    def profile(self) -> CapabilityProfile:
        """Detected terminal capabilities, memoized."""
        with self._lock:
            if self._profile is None:
                self._profile = detect(self.env, self._stream)
            return self._profile

    @property
    def config(self) -> LogConfig:
        """Resolved configuration, memoized."""
        with self._lock:
            if self._config is None:
                self._config = resolve_config(self.env, self.profile)
                logger.debug("Resolved configuration: %s", self._config)
            return self._config

    # -- level ---------------------------------------------------------------

    @property
    def level(self) -> LogLevel:
        """The effective filtering level: the override if set, else the configured one."""
        return self._level_override or self.config.level

    def set_level(self, level: LogLevel | str) -> None:
        """Override the level for every logger of this context."""
        self._level_override = (
            level if isinstance(level, LogLevel) else parse_log_level(level, self.config.level)
        )

    def reset_level(self) -> None:
        """Drop the override set by `set_level`."""
        self._level_override = None

    # -- spinners and renderers ----------------------------------------------

    @property
    def spinners_supported(self) -> bool:
        """True when spinners animate in place (interactive, colors, not CI, not JSON)."""
        return choose_mode(self.config) is RenderMode.ANIMATED

    @property
    def spinners(self) -> SpinnerRegistry:
        """The spinner registry, created on first use."""
        with self._lock:
            if self._spinners is None:
                self._spinners = SpinnerRegistry(
                    self.spinner_renderer, scheduler=self.scheduler
                )
            return self._spinners

    def spinner_renderer(self) -> LiveTaskRenderer | None:
        """Create the renderer shared by spinner sessions; None when spinners are unsupported."""
        if not self.spinners_supported:
            return None
        return LiveTaskRenderer(
            self.console, self.config, scheduler=self.scheduler, mode=RenderMode.ANIMATED
        )

    def task_renderer(self, request: FormatRequest | None = None) -> LiveTaskRenderer:
        """Create a renderer for a task list, in the mode the configuration selects."""
        return LiveTaskRenderer(self.console, self.config, request=request, scheduler=self.scheduler)

    # -- lifecycle -----------------------------------------------------------

    def reset(self) -> None:
        """Stop spinners and forget every memoized value."""
        with self._lock:
            spinners, self._spinners = self._spinners, None
            self._profile = None
            self._config = None
            self._level_override = None
            self.tracker.reset()
        if spinners is not None:
            spinners.stop_all()


_context: RuntimeContext | None = None
_context_lock = threading.Lock()


def get_context() -> RuntimeContext:
    """Return the active context, creating a default one on first use."""
    global _context
    with _context_lock:
        if _context is None:
            _context = RuntimeContext()
        return _context


def set_context(context: RuntimeContext) -> RuntimeContext | None:
    """Install ``context`` as the active one and return the previous context."""
    global _context
    with _context_lock:
        previous, _context = _context, context
    return previous


def reset_context() -> None:
    """Discard the active context; the next `get_context()` builds a fresh one."""
    global _context
    with _context_lock:
        previous, _context = _context, None
    if previous is not None:
        previous.reset()
