# topmark:header:start
#
#   project      : devlogr
#   file         : test_context.py
#   file_relpath : tests/test_context.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Tests for the process-wide `RuntimeContext`."""

from __future__ import annotations

import pytest
from helpers import ANIMATED_ENV, FakeConsole, FakeScheduler, make_context

from devlogr.context import RuntimeContext, get_context, reset_context, set_context
from devlogr.core.levels import LogLevel
from devlogr.tasks.renderer import RenderMode


def test_profile_and_config_are_memoized() -> None:
    """Detection runs once per context until reset."""
    context = make_context({"DEVLOGR_LOG_LEVEL": "debug"})
    assert context.config is context.config
    assert context.profile is context.profile
    assert context.level is LogLevel.DEBUG


def test_reset_forgets_memoized_state() -> None:
    """After reset() the environment is read again."""
    env: dict[str, str] = {"DEVLOGR_LOG_LEVEL": "warn"}
    context = RuntimeContext(env=env, console=FakeConsole())
    first = context.config
    context.set_level("trace")
    context.tracker.register("long-name")

    env["DEVLOGR_LOG_LEVEL"] = "error"
    assert context.config is first
    context.reset()

    assert context.config is not first
    assert context.level is LogLevel.ERROR
    assert context.tracker.max_width == 0


def test_level_override() -> None:
    """set_level() wins over the configuration until reset_level()."""
    context = make_context({})
    assert context.level is LogLevel.INFO
    context.set_level(LogLevel.WARNING)
    assert context.level is LogLevel.WARNING
    context.set_level("debug")
    assert context.level is LogLevel.DEBUG
    context.reset_level()
    assert context.level is LogLevel.INFO


def test_invalid_level_string_keeps_configured_level() -> None:
    """Unknown names fall back to the configured level."""
    context = make_context({"DEVLOGR_LOG_LEVEL": "error"})
    context.set_level("loud")
    assert context.level is LogLevel.ERROR


def test_get_context_creates_and_set_context_swaps() -> None:
    """get_context() is lazy; set_context() returns what it replaced."""
    created = get_context()
    assert get_context() is created

    replacement = RuntimeContext(env={}, console=FakeConsole())
    assert set_context(replacement) is created
    assert get_context() is replacement


def test_reset_context_stops_spinners() -> None:
    """Discarding the context ends running spinner sessions."""
    make_context(ANIMATED_ENV, tty=True, scheduler=FakeScheduler())
    session = get_context().spinners.start("k", "busy")
    reset_context()

    assert session.future.done()
    assert get_context().spinners.active_keys() == []


@pytest.mark.parametrize(
    ("env", "tty", "supported", "mode"),
    [
        ({}, False, False, RenderMode.STATIC),
        (ANIMATED_ENV, True, True, RenderMode.ANIMATED),
        ({**ANIMATED_ENV, "CI": "true"}, True, False, RenderMode.STATIC),
        ({**ANIMATED_ENV, "DEVLOGR_OUTPUT_JSON": "1"}, True, False, RenderMode.JSON),
    ],
)
def test_spinner_support_and_task_renderer_mode(
    env: dict[str, str], tty: bool, supported: bool, mode: RenderMode
) -> None:
    """Spinners animate only in interactive, colored, non-CI text mode."""
    context = make_context(env, tty=tty)
    assert context.spinners_supported is supported
    assert (context.spinner_renderer() is not None) is supported
    assert context.task_renderer().mode is mode
