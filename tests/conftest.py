# topmark:header:start
#
#   project      : devlogr
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Pytest configuration for the devlogr test suite.

Every test starts from a neutral environment: `DEVLOGR_*`, CI markers and the
color/Unicode/emoji switches of the developer's shell are removed, and the
process-wide `RuntimeContext` is reset before and after the test.
"""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest
from helpers import FakeConsole, FakeScheduler

from devlogr.config import logging
from devlogr.constants import CI_MARKER_VARS
from devlogr.context import reset_context

# Variables outside the DEVLOGR_ namespace that change detection results
_TERMINAL_VARS: tuple[str, ...] = (
    "NO_COLOR",
    "FORCE_COLOR",
    "NO_UNICODE",
    "NO_EMOJI",
    "TERM",
    "TERM_PROGRAM",
    "COLORTERM",
    "WT_SESSION",
    "WSLENV",
    "ConEmuANSI",
    "LANG",
    "LC_ALL",
    "LC_CTYPE",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove variables that would make detection depend on the developer's shell.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    for name in list(os.environ):
        if name.startswith("DEVLOGR_"):
            monkeypatch.delenv(name, raising=False)
    for name in (*CI_MARKER_VARS, *_TERMINAL_VARS):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def fresh_context() -> Iterator[None]:
    """Reset the process-wide runtime context around every test."""
    reset_context()
    yield
    reset_context()


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Route devlogr's internal diagnostics through a TRACE-level handler.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def console() -> FakeConsole:
    """A non-interactive recording console."""
    return FakeConsole()


@pytest.fixture
def scheduler() -> FakeScheduler:
    """A scheduler driven by the test."""
    return FakeScheduler()
