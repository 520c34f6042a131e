# topmark:header:start
#
#   project      : devlogr
#   file         : test_env.py
#   file_relpath : tests/core/test_env.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Tests for environment variable parsing helpers."""

from __future__ import annotations

import pytest

from devlogr.core.env import get_flag, get_str, is_enabled, is_forced, is_nonempty, is_set


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1", True),
        ("true", True),
        ("YES", True),
        (" on ", True),
        ("0", False),
        ("False", False),
        ("no", False),
        ("off", False),
        ("maybe", None),
        ("", None),
    ],
)
def test_get_flag(raw: str, expected: bool | None) -> None:
    """Truthy and falsy spellings are recognized; anything else is None."""
    assert get_flag({"X": raw}, "X") is expected


def test_get_flag_unset() -> None:
    """A missing variable is None, not False."""
    assert get_flag({}, "X") is None


def test_is_set_counts_empty_values() -> None:
    """`NO_COLOR=` (empty) still counts as set."""
    assert is_set({"NO_COLOR": ""}, "NO_COLOR")
    assert not is_nonempty({"NO_COLOR": ""}, "NO_COLOR")
    assert not is_set({}, "NO_COLOR")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("3", True), ("always", True), ("0", False), ("false", False), ("", False)],
)
def test_is_forced(raw: str, expected: bool) -> None:
    """Any value except an explicit falsy one forces."""
    assert is_forced({"FORCE_COLOR": raw}, "FORCE_COLOR") is expected


def test_is_enabled_requires_truthy_spelling() -> None:
    """Only recognized truthy spellings enable."""
    assert is_enabled({"X": "true"}, "X")
    assert not is_enabled({"X": "3"}, "X")
    assert not is_enabled({}, "X")


def test_get_str_strips_and_defaults() -> None:
    """Values are trimmed; unset variables yield the default."""
    assert get_str({"TERM": " xterm "}, "TERM") == "xterm"
    assert get_str({}, "TERM", "dumb") == "dumb"
