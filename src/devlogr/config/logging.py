# topmark:header:start
#
#   project      : devlogr
#   file         : logging.py
#   file_relpath : src/devlogr/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Internal diagnostics logging for devlogr, with a TRACE level.

devlogr *is* a logging library, but its own diagnostics (serializer fallbacks,
renderer mode decisions, registry bookkeeping) go through the standard
`logging` module so host applications can route or silence them like any other
library. Nothing is configured by default; `setup_logging()` is opt-in and
honours ``DEVLOGR_INTERNAL_LOG_LEVEL``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

from devlogr.constants import EnvVar

if TYPE_CHECKING:
    from collections.abc import Mapping

# Define TRACE_LEVEL as a module-level constant
TRACE_LEVEL: Final[int] = logging.DEBUG - 5


class DevlogrLogger(logging.Logger):
    """Logger class for devlogr internals with support for a TRACE level below DEBUG."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log 'msg % args' with severity 'TRACE'.

        Args:
            msg (object): The message to be logged.
            *args (object): Variable length argument list for the message.
            extra (Mapping[str, object] | None): Optional dictionary of extra information to pass
                to the logger.
        """
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(
                TRACE_LEVEL,
                msg=msg,
                args=args,
                extra=extra,
                stacklevel=2,
            )


if logging.getLevelName(TRACE_LEVEL) != "TRACE":
    logging.addLevelName(TRACE_LEVEL, "TRACE")


class _ForwardingLogger(DevlogrLogger):
    """Unregistered `DevlogrLogger` that hands every record to a host-created logger.

    The target keeps its class, level and handlers; levels are resolved through
    it on every call because unregistered loggers miss the manager's cache resets.
    """

    def __init__(self, target: logging.Logger) -> None:
        super().__init__(target.name)
        self.parent = target
        self.propagate = True

    def isEnabledFor(self, level: int) -> bool:  # noqa: N802
        """Check ``level`` against the target's effective level, uncached."""
        if self.manager.disable >= level:
            return False
        return level >= self.getEffectiveLevel()


_forwarders: dict[str, _ForwardingLogger] = {}

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
DEBUG_LOG_FORMAT = "[%(levelname)s] [%(filename)s:%(lineno)d] [%(funcName)s] %(message)s"


class ChalkFormatter(logging.Formatter):
    """Formatter that outputs log records with chalk-colored formatting based on severity level."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the specified record with colors based on log level.

        Args:
            record (logging.LogRecord): The LogRecord to be formatted.

        Returns:
            str: The colorized formatted log message as a string.
        """
        level = record.levelno
        message = super().format(record)

        if level >= logging.CRITICAL:
            return chalk.red_bright(message)
        if level >= logging.ERROR:
            return chalk.red(message)
        if level >= logging.WARNING:
            return chalk.yellow(message)
        if level >= logging.INFO:
            return chalk.green(message)
        if level >= logging.DEBUG:
            return chalk.gray(message)
        if level >= TRACE_LEVEL:
            return chalk.blue(message)
        return chalk.dim.red(message)


def resolve_env_log_level(env: Mapping[str, str] | None = None) -> int | None:
    """Return an internal logging level from the environment, or None if unset.

    Honors ``DEVLOGR_INTERNAL_LOG_LEVEL`` (e.g. ``"TRACE"``, ``"DEBUG"``, numeric ``"10"``).
    """
    source: Mapping[str, str] = os.environ if env is None else env
    val = source.get(EnvVar.INTERNAL_LOG_LEVEL)
    if not val:
        return None
    v = val.strip().upper()
    if v.isdigit():
        return int(v)
    name_to_level = {
        "TRACE": TRACE_LEVEL,
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "WARN": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
        "FATAL": logging.CRITICAL,
        "NOTSET": logging.NOTSET,
    }
    return name_to_level.get(v)


def setup_logging(level: int | None = None) -> None:
    """Attach a colored stderr handler to the ``devlogr`` logger hierarchy.

    If ``level`` is None, ``DEVLOGR_INTERNAL_LOG_LEVEL`` is consulted via
    `resolve_env_log_level`. Default is CRITICAL when unspecified. Only the
    ``devlogr`` logger is touched; the host's root logger is left alone.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    pkg_logger = logging.getLogger("devlogr")
    pkg_logger.setLevel(level)

    # Remove handlers from a previous call to prevent duplicate records
    for handler in pkg_logger.handlers[:]:
        pkg_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    formatter = ChalkFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT)
    handler.setFormatter(formatter)
    pkg_logger.addHandler(handler)
    pkg_logger.propagate = False


def get_logger(name: str) -> DevlogrLogger:
    """Retrieve a DevlogrLogger instance with the specified name.

    The custom class is installed only for this lookup so devlogr never changes
    the logger class of the host application.

    Args:
        name (str): The name of the logger.

    Returns:
        DevlogrLogger: A DevlogrLogger instance.
    """
    existing = logging.Logger.manager.loggerDict.get(name)
    if isinstance(existing, DevlogrLogger):
        return existing
    if isinstance(existing, logging.Logger):
        # Created elsewhere with another class: leave it alone and log through it
        forwarder: _ForwardingLogger | None = _forwarders.get(name)
        if forwarder is None or forwarder.parent is not existing:
            forwarder = _ForwardingLogger(existing)
            _forwarders[name] = forwarder
        return forwarder

    previous = logging.getLoggerClass()
    logging.setLoggerClass(DevlogrLogger)
    try:
        logger = logging.getLogger(name)
    finally:
        logging.setLoggerClass(previous)
    return cast("DevlogrLogger", logger)
