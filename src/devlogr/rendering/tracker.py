# topmark:header:start
#
#   project      : devlogr
#   file         : tracker.py
#   file_relpath : src/devlogr/rendering/tracker.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Running maximum of logger name lengths, used to align prefix brackets."""

from __future__ import annotations

import threading


class PrefixWidthTracker:
    """Record logger names and expose the widest one seen so far.

    Names are registered when a logger is constructed, never while formatting,
    so alignment already accounts for loggers that have not logged yet. The
    maximum only grows until `reset()` is called.
    """

    def __init__(self) -> None:
        self._max_width: int = 0
        self._names: set[str] = set()
        self._lock = threading.Lock()

    def register(self, name: str) -> int:
        """Record ``name`` and return the (possibly updated) maximum width."""
        with self._lock:
            self._names.add(name)
            self._max_width = max(self._max_width, len(name))
            return self._max_width

    @property
    def max_width(self) -> int:
        """Length of the longest registered name."""
        return self._max_width

    @property
    def names(self) -> frozenset[str]:
        """All registered names."""
        return frozenset(self._names)

    def reset(self) -> None:
        """Forget every registered name."""
        with self._lock:
            self._names.clear()
            self._max_width = 0
