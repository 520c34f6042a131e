# topmark:header:start
#
#   project      : devlogr
#   file         : test_config_resolver.py
#   file_relpath : tests/core/test_config_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Tests for resolving `LogConfig` from capabilities and environment overrides."""

from __future__ import annotations

import pytest

from devlogr.capabilities import CapabilityProfile
from devlogr.config import (
    LogConfig,
    resolve_config,
    resolve_show_icons,
    resolve_show_prefix,
    resolve_timestamp,
)
from devlogr.core.levels import LogLevel, TimestampFormat

INTERACTIVE = CapabilityProfile(
    color_supported=True,
    unicode_supported=True,
    emoji_supported=True,
    is_ci=False,
    is_interactive=True,
)
CI = CapabilityProfile(
    color_supported=True,
    unicode_supported=True,
    emoji_supported=False,
    is_ci=True,
    is_interactive=False,
)


def test_interactive_defaults() -> None:
    """A developer terminal hides prefix and timestamp and shows icons."""
    config = resolve_config({}, INTERACTIVE)
    assert config.level is LogLevel.INFO
    assert config.use_colors
    assert not config.use_json
    assert not config.show_prefix
    assert not config.show_timestamp
    assert config.show_icons
    assert config.is_interactive


def test_ci_defaults() -> None:
    """CI shows prefix and clock timestamps and hides icons."""
    config = resolve_config({}, CI)
    assert config.show_prefix
    assert config.show_timestamp
    assert config.timestamp_format is TimestampFormat.CLOCK
    assert not config.show_icons
    assert config.is_ci


def test_json_output_disables_colors() -> None:
    """JSON mode never carries ANSI styling."""
    config = resolve_config({"DEVLOGR_OUTPUT_JSON": "true"}, INTERACTIVE)
    assert config.use_json
    assert not config.use_colors


def test_explicit_overrides_beat_ci_defaults() -> None:
    """DEVLOGR_* overrides have the highest precedence."""
    env = {
        "DEVLOGR_SHOW_PREFIX": "false",
        "DEVLOGR_SHOW_TIMESTAMP": "false",
        "DEVLOGR_SHOW_ICONS": "true",
        "DEVLOGR_LOG_LEVEL": "debug",
    }
    config = resolve_config(env, CI)
    assert not config.show_prefix
    assert not config.show_timestamp
    assert config.show_icons
    assert config.level is LogLevel.DEBUG


@pytest.mark.parametrize(
    ("raw", "is_ci", "expected"),
    [
        ("iso", False, (True, TimestampFormat.ISO)),
        ("ISO", True, (True, TimestampFormat.ISO)),
        ("true", False, (True, TimestampFormat.CLOCK)),
        ("0", True, (False, TimestampFormat.CLOCK)),
        ("bogus", True, (True, TimestampFormat.CLOCK)),
        ("bogus", False, (False, TimestampFormat.CLOCK)),
    ],
)
def test_resolve_timestamp(raw: str, is_ci: bool, expected: tuple[bool, TimestampFormat]) -> None:
    """`iso` selects ISO-8601; flags select the clock; anything else uses the CI default."""
    assert resolve_timestamp({"DEVLOGR_SHOW_TIMESTAMP": raw}, is_ci=is_ci) == expected


def test_no_icons_wins_over_show_icons() -> None:
    """DEVLOGR_NO_ICONS has priority."""
    env = {"DEVLOGR_NO_ICONS": "true", "DEVLOGR_SHOW_ICONS": "true"}
    assert resolve_show_icons(env, is_ci=False) is False
    assert resolve_show_icons({"DEVLOGR_NO_ICONS": "false"}, is_ci=True) is True


def test_show_prefix_default_follows_ci() -> None:
    """Unset prefix visibility follows the CI flag."""
    assert resolve_show_prefix({}, is_ci=True)
    assert not resolve_show_prefix({}, is_ci=False)


def test_capabilities_are_copied() -> None:
    """Unicode, emoji and CI flags come from the profile."""
    config = resolve_config({}, CI)
    assert config.supports_unicode
    assert not config.supports_emoji
    assert not config.is_interactive


def test_resolve_config_detects_when_no_profile_given() -> None:
    """Without a profile the environment alone is used (CI marker present)."""
    config = resolve_config({"CI": "true"})
    assert config.is_ci
    assert config.show_prefix


def test_as_dict_uses_wire_values() -> None:
    """Enum members are exported by value."""
    data = LogConfig(level=LogLevel.WARNING, timestamp_format=TimestampFormat.ISO).as_dict()
    assert data["level"] == "warn"
    assert data["timestamp_format"] == "iso"
    assert data["show_icons"] is True
