# topmark:header:start
#
#   project      : devlogr
#   file         : levels.py
#   file_relpath : src/devlogr/core/levels.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Log levels, theme levels and timestamp styles.

Two related vocabularies live here:

* `LogLevel` is the *filtering* level (what the user selects with
  ``DEVLOGR_LOG_LEVEL``), ordered from least to most verbose.
* Theme levels (``"success"``, ``"title"``, ...) select the *visual* style of a
  line. Each theme level filters as one of the `LogLevel` members, see
  `THEME_FILTER_LEVEL`.
"""

from __future__ import annotations

from enum import Enum
from typing import Final


class LogLevel(str, Enum):
    """Filtering level, ordered by verbosity (``ERROR`` is the least verbose)."""

    ERROR = "error"
    WARNING = "warn"
    INFO = "info"
    DEBUG = "debug"
    TRACE = "trace"

    @property
    def rank(self) -> int:
        """Return the verbosity rank (0 for ``ERROR``, 4 for ``TRACE``)."""
        return _LEVEL_ORDER.index(self)

    def allows(self, level: LogLevel) -> bool:
        """Return True if a message at ``level`` passes a filter set to ``self``.

        Args:
            level (LogLevel): Level of the message being considered.

        Returns:
            bool: True when ``level`` is at most as verbose as ``self``.
        """
        return level.rank <= self.rank


_LEVEL_ORDER: Final[tuple[LogLevel, ...]] = (
    LogLevel.ERROR,
    LogLevel.WARNING,
    LogLevel.INFO,
    LogLevel.DEBUG,
    LogLevel.TRACE,
)

DEFAULT_LOG_LEVEL: Final[LogLevel] = LogLevel.INFO

_LEVEL_ALIASES: Final[dict[str, LogLevel]] = {
    "error": LogLevel.ERROR,
    "warn": LogLevel.WARNING,
    "warning": LogLevel.WARNING,
    "info": LogLevel.INFO,
    "debug": LogLevel.DEBUG,
    "trace": LogLevel.TRACE,
}


def parse_log_level(value: str | None, default: LogLevel = DEFAULT_LOG_LEVEL) -> LogLevel:
    """Parse a user-supplied level name, falling back to ``default``.

    Unrecognized values never raise: a typo in an environment variable must not
    take the host process down.

    Args:
        value (str | None): Raw level name (case-insensitive), e.g. ``"WARN"``.
        default (LogLevel): Level returned when ``value`` is empty or unknown.

    Returns:
        LogLevel: The parsed level, or ``default``.
    """
    if not value:
        return default
    return _LEVEL_ALIASES.get(value.strip().lower(), default)


class TimestampFormat(str, Enum):
    """Timestamp rendering style."""

    CLOCK = "time"
    ISO = "iso"


THEME_LEVELS: Final[tuple[str, ...]] = (
    "error",
    "warn",
    "info",
    "debug",
    "trace",
    "success",
    "title",
    "task",
    "plain",
)

# Filtering level of each theme level.
THEME_FILTER_LEVEL: Final[dict[str, LogLevel]] = {
    "error": LogLevel.ERROR,
    "warn": LogLevel.WARNING,
    "info": LogLevel.INFO,
    "debug": LogLevel.DEBUG,
    "trace": LogLevel.TRACE,
    "success": LogLevel.INFO,
    "title": LogLevel.INFO,
    "task": LogLevel.INFO,
    "plain": LogLevel.INFO,
}
