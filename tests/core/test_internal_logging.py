# topmark:header:start
#
#   project      : devlogr
#   file         : test_internal_logging.py
#   file_relpath : tests/core/test_internal_logging.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Tests for devlogr's own diagnostics logging (TRACE level, env level, logger class)."""

from __future__ import annotations

import logging

import pytest

from devlogr.config.logging import (
    TRACE_LEVEL,
    ChalkFormatter,
    DevlogrLogger,
    get_logger,
    resolve_env_log_level,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("TRACE", TRACE_LEVEL),
        ("debug", logging.DEBUG),
        ("warn", logging.WARNING),
        ("fatal", logging.CRITICAL),
        ("15", 15),
        ("nonsense", None),
        ("", None),
    ],
)
def test_resolve_env_log_level(raw: str, expected: int | None) -> None:
    """Names and numbers are accepted; anything else yields None."""
    assert resolve_env_log_level({"DEVLOGR_INTERNAL_LOG_LEVEL": raw}) == expected


def test_resolve_env_log_level_unset() -> None:
    """No variable means no level."""
    assert resolve_env_log_level({}) is None


def test_trace_level_is_registered() -> None:
    """TRACE sits below DEBUG and has a name."""
    assert TRACE_LEVEL < logging.DEBUG
    assert logging.getLevelName(TRACE_LEVEL) == "TRACE"


def test_get_logger_returns_trace_capable_logger() -> None:
    """Loggers obtained through get_logger have trace()."""
    log = get_logger("devlogr_tests.sample")
    assert isinstance(log, DevlogrLogger)
    assert get_logger("devlogr_tests.sample") is log


def test_get_logger_leaves_existing_plain_logger_untouched() -> None:
    """A logger created elsewhere keeps its class; records are forwarded to it."""
    plain = logging.getLogger("devlogr_tests.preexisting")
    forwarding = get_logger("devlogr_tests.preexisting")
    assert forwarding is not plain
    assert type(plain) is logging.Logger
    assert isinstance(forwarding, DevlogrLogger)
    assert forwarding.parent is plain
    assert get_logger("devlogr_tests.preexisting") is forwarding
    assert logging.getLoggerClass() is not DevlogrLogger


def test_forwarded_trace_records_reach_the_host_logger(caplog: pytest.LogCaptureFixture) -> None:
    """trace() through a forwarding logger honours the host logger's level and handlers."""
    logging.getLogger("devlogr_tests.host")
    log = get_logger("devlogr_tests.host")
    log.trace("hidden")
    with caplog.at_level(TRACE_LEVEL, logger="devlogr_tests.host"):
        log.trace("tracing %s", "forwarded")
    messages = [record.getMessage() for record in caplog.records]
    assert messages == ["tracing forwarded"]
    assert caplog.records[0].name == "devlogr_tests.host"


def test_trace_records_reach_handlers(caplog: pytest.LogCaptureFixture) -> None:
    """trace() emits at TRACE_LEVEL when enabled."""
    log = get_logger("devlogr_tests.trace")
    log.propagate = True
    with caplog.at_level(TRACE_LEVEL, logger="devlogr_tests.trace"):
        log.trace("tracing %s", "works")
    assert any(
        record.levelno == TRACE_LEVEL and record.getMessage() == "tracing works"
        for record in caplog.records
    )


def test_chalk_formatter_keeps_message_text() -> None:
    """Coloring never alters the formatted text itself."""
    formatter = ChalkFormatter("%(levelname)s %(message)s")
    record = logging.LogRecord("x", logging.WARNING, __file__, 1, "careful", None, None)
    assert "WARNING careful" in formatter.format(record)
