# topmark:header:start
#
#   project      : devlogr
#   file         : handler.py
#   file_relpath : src/devlogr/handler.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Bridge from the standard `logging` module to devlogr output.

Attach a `DevlogrHandler` to any stdlib logger to have its records written as
devlogr lines:

```python
import logging

from devlogr.handler import DevlogrHandler

logging.getLogger("app").addHandler(DevlogrHandler())
```

Records are routed to a devlogr `Logger` named after the record's logger (or
to one fixed `Logger`), at the level matching ``record.levelno``. Exception
info is passed along as the error argument.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from devlogr.logger import Logger

if TYPE_CHECKING:
    from devlogr.context import RuntimeContext


class DevlogrHandler(logging.Handler):
    """`logging.Handler` that writes records through devlogr loggers.

    Args:
        logger (Logger | None): Fixed target logger; when None a `Logger` per
            record name is created on demand.
        level (int): Minimum stdlib level handled.
        context (RuntimeContext | None): Context for loggers created on demand.
    """

    def __init__(
        self,
        logger: Logger | None = None,
        level: int = logging.NOTSET,
        *,
        context: RuntimeContext | None = None,
    ) -> None:
        super().__init__(level)
        self._fixed = logger
        self._context = context
        self._loggers: dict[str, Logger] = {}

    def logger_for(self, name: str) -> Logger:
        """Return the devlogr logger records from ``name`` are written to."""
        if self._fixed is not None:
            return self._fixed
        target: Logger | None = self._loggers.get(name)
        if target is None:
            target = Logger(name, context=self._context)
            self._loggers[name] = target
        return target

    def render_message(self, record: logging.LogRecord) -> str:
        """Message text of ``record``; tracebacks are left to the error argument."""
        record.message = record.getMessage()
        formatter: logging.Formatter | None = self.formatter
        if formatter is None:
            return record.message
        if formatter.usesTime():
            record.asctime = formatter.formatTime(record, formatter.datefmt)
        return formatter.formatMessage(record)

    def emit(self, record: logging.LogRecord) -> None:
        """Write ``record`` as a devlogr line."""
        try:
            target: Logger = self.logger_for(record.name)
            message: str = self.render_message(record)
            level: int = record.levelno
            if level >= logging.ERROR:
                error: BaseException | None = record.exc_info[1] if record.exc_info else None
                target.error(message, error)
            elif level >= logging.WARNING:
                target.warning(message)
            elif level >= logging.INFO:
                target.info(message)
            elif level >= logging.DEBUG:
                target.debug(message)
            else:
                target.trace(message)
        except Exception:  # noqa: BLE001
            self.handleError(record)
