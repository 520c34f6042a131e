# topmark:header:start
#
#   project      : devlogr
#   file         : __init__.py
#   file_relpath : src/devlogr/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""devlogr package.

devlogr renders leveled log lines, spinners and live task trees for
command-line tools. Output adapts to the terminal: colors, Unicode symbols and
emoji are used only where supported, CI logs get timestamps and prefixes, and
``DEVLOGR_OUTPUT_JSON=1`` turns every line into a JSON record.
"""

from __future__ import annotations

from devlogr.config import LogConfig, resolve_config
from devlogr.context import RuntimeContext, get_context, reset_context
from devlogr.core.errors import (
    DevlogrError,
    DuplicateSpinnerError,
    SpinnerStoppedError,
    TaskFailedError,
    UnknownThemeError,
    UsageError,
)
from devlogr.core.levels import LogLevel, TimestampFormat
from devlogr.handler import DevlogrHandler
from devlogr.logger import Logger, create_logger
from devlogr.rendering.emoji import format_emoji, strip_emoji
from devlogr.tasks.runner import Task, TaskHandle, TaskList

__all__ = [
    "DevlogrError",
    "DevlogrHandler",
    "DuplicateSpinnerError",
    "LogConfig",
    "LogLevel",
    "Logger",
    "RuntimeContext",
    "SpinnerStoppedError",
    "Task",
    "TaskFailedError",
    "TaskHandle",
    "TaskList",
    "TimestampFormat",
    "UnknownThemeError",
    "UsageError",
    "create_logger",
    "format_emoji",
    "get_context",
    "reset_context",
    "resolve_config",
    "strip_emoji",
]
