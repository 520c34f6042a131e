# topmark:header:start
#
#   project      : devlogr
#   file         : test_handler.py
#   file_relpath : tests/test_handler.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Tests for `DevlogrHandler`, the bridge from stdlib `logging`."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
from helpers import FakeConsole, make_context

from devlogr import Logger
from devlogr.handler import DevlogrHandler


@pytest.fixture
def bridged() -> Iterator[tuple[logging.Logger, DevlogrHandler, FakeConsole]]:
    """A stdlib logger whose records go only to a `DevlogrHandler`."""
    console = FakeConsole()
    make_context({}, console=console)
    std = logging.getLogger("handler_tests.app")
    std.setLevel(1)
    std.propagate = False
    handler = DevlogrHandler()
    std.addHandler(handler)
    try:
        yield std, handler, console
    finally:
        std.removeHandler(handler)
        std.propagate = True
        std.setLevel(logging.NOTSET)


def test_levels_are_mapped(bridged: tuple[logging.Logger, DevlogrHandler, FakeConsole]) -> None:
    """INFO, WARNING and ERROR map to devlogr info, warn and error."""
    std, _, console = bridged
    std.info("hello %s", "world")
    std.warning("careful")
    std.error("broken")

    assert console.out == ["i hello world"]
    assert console.err == ["! careful", "X broken"]


def test_debug_and_trace_follow_devlogr_level(
    bridged: tuple[logging.Logger, DevlogrHandler, FakeConsole],
) -> None:
    """Records below INFO are filtered by the devlogr level, not the stdlib one."""
    std, _, console = bridged
    std.debug("hidden")
    std.log(5, "hidden")
    assert console.out == []

    Logger.set_level("trace")
    std.debug("dbg")
    std.log(5, "fine")
    assert console.out == ["? dbg", ". fine"]


def test_exception_info_is_passed(
    bridged: tuple[logging.Logger, DevlogrHandler, FakeConsole],
) -> None:
    """logger.exception() renders the exception message after the text."""
    std, _, console = bridged
    try:
        raise ValueError("boom")
    except ValueError:
        std.exception("failed")

    assert console.err == ["X failed\nboom"]


def test_formatter_shapes_the_message(
    bridged: tuple[logging.Logger, DevlogrHandler, FakeConsole],
) -> None:
    """A stdlib formatter controls the message text only."""
    std, handler, console = bridged
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    std.info("ready")
    assert console.out == ["i handler_tests.app: ready"]


def test_loggers_are_cached_per_name() -> None:
    """One devlogr logger per record name, unless a fixed one is given."""
    make_context({})
    handler = DevlogrHandler()
    assert handler.logger_for("a") is handler.logger_for("a")
    assert handler.logger_for("a") is not handler.logger_for("b")
    assert handler.logger_for("a").name == "a"

    fixed = Logger("fixed")
    pinned = DevlogrHandler(fixed)
    assert pinned.logger_for("anything") is fixed


def test_emit_errors_go_to_handle_error(monkeypatch: pytest.MonkeyPatch) -> None:
    """Failures while writing are reported through `handleError`."""
    make_context({})
    handler = DevlogrHandler()
    seen: list[logging.LogRecord] = []

    def explode(name: str) -> Logger:
        raise RuntimeError("no logger")

    monkeypatch.setattr(handler, "logger_for", explode)
    monkeypatch.setattr(handler, "handleError", seen.append)
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    handler.emit(record)

    assert seen == [record]
