# topmark:header:start
#
#   project      : devlogr
#   file         : resolver.py
#   file_relpath : src/devlogr/config/resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Resolve the logger configuration from capabilities and environment overrides.

Precedence (highest first):
    1. Explicit ``DEVLOGR_*`` environment overrides.
    2. CI-derived defaults (prefix and timestamp shown, icons hidden).
    3. Interactive defaults (prefix and timestamp hidden, icons shown).

This module depends only on `devlogr.core` and on the *type* of the capability
profile, so the capability detector can never import it back.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

from devlogr.constants import EnvVar
from devlogr.core.env import get_flag, get_str, is_enabled
from devlogr.core.levels import DEFAULT_LOG_LEVEL, LogLevel, TimestampFormat, parse_log_level

if TYPE_CHECKING:
    from collections.abc import Mapping

    from devlogr.capabilities import CapabilityProfile


@dataclass(frozen=True)
class LogConfig:
    """Immutable configuration snapshot consulted by every log call.

    Attributes:
        level (LogLevel): Filtering level.
        use_json (bool): Emit one JSON record per line instead of styled text.
        use_colors (bool): Emit ANSI styling (never in JSON mode).
        show_timestamp (bool): Prepend a timestamp to text lines.
        timestamp_format (TimestampFormat): Clock (``HH:MM:SS``) or full ISO-8601.
        show_prefix (bool): Show the level label and the ``[name]`` prefix.
        show_icons (bool): Show the theme symbol before the message.
        supports_unicode (bool): Unicode symbols may be used.
        supports_emoji (bool): Emoji may be left in messages.
        is_ci (bool): Running in CI.
        is_interactive (bool): The output stream is a terminal.
    """

    level: LogLevel = DEFAULT_LOG_LEVEL
    use_json: bool = False
    use_colors: bool = False
    show_timestamp: bool = False
    timestamp_format: TimestampFormat = TimestampFormat.CLOCK
    show_prefix: bool = False
    show_icons: bool = True
    supports_unicode: bool = False
    supports_emoji: bool = False
    is_ci: bool = False
    is_interactive: bool = False

    def as_dict(self) -> dict[str, Any]:
        """Return the configuration as a JSON-friendly dict."""
        data: dict[str, Any] = asdict(self)
        data["level"] = self.level.value
        data["timestamp_format"] = self.timestamp_format.value
        return data


def resolve_log_level(env: Mapping[str, str]) -> LogLevel:
    """Return the level selected by ``DEVLOGR_LOG_LEVEL`` (default ``info``)."""
    return parse_log_level(env.get(EnvVar.LOG_LEVEL))


def resolve_timestamp(env: Mapping[str, str], *, is_ci: bool) -> tuple[bool, TimestampFormat]:
    """Resolve timestamp visibility and style.

    ``iso`` selects ISO-8601; any truthy value selects the clock style; a falsy
    value hides timestamps. Unset (or unrecognized) values fall back to the CI
    default: shown as a clock in CI, hidden otherwise.

    Args:
        env (Mapping[str, str]): Environment snapshot.
        is_ci (bool): Whether CI defaults apply.

    Returns:
        tuple[bool, TimestampFormat]: ``(show_timestamp, timestamp_format)``.
    """
    if get_str(env, EnvVar.SHOW_TIMESTAMP).lower() == TimestampFormat.ISO.value:
        return True, TimestampFormat.ISO
    flag: bool | None = get_flag(env, EnvVar.SHOW_TIMESTAMP)
    if flag is None:
        return is_ci, TimestampFormat.CLOCK
    return flag, TimestampFormat.CLOCK


def resolve_show_prefix(env: Mapping[str, str], *, is_ci: bool) -> bool:
    """Resolve prefix (and level label) visibility."""
    flag: bool | None = get_flag(env, EnvVar.SHOW_PREFIX)
    return is_ci if flag is None else flag


def resolve_show_icons(env: Mapping[str, str], *, is_ci: bool) -> bool:
    """Resolve icon visibility; ``DEVLOGR_NO_ICONS`` wins over ``DEVLOGR_SHOW_ICONS``."""
    no_icons: bool | None = get_flag(env, EnvVar.NO_ICONS)
    if no_icons is not None:
        return not no_icons
    show_icons: bool | None = get_flag(env, EnvVar.SHOW_ICONS)
    if show_icons is not None:
        return show_icons
    return not is_ci


def resolve_config(
    env: Mapping[str, str] | None = None,
    profile: CapabilityProfile | None = None,
) -> LogConfig:
    """Combine a capability profile with environment overrides.

    Args:
        env (Mapping[str, str] | None): Environment snapshot; defaults to ``os.environ``.
        profile (CapabilityProfile | None): Detected capabilities; detected from
            ``env`` and ``sys.stdout`` when None.

    Returns:
        LogConfig: The resolved, immutable configuration.
    """
    source: Mapping[str, str] = dict(os.environ) if env is None else env
    if profile is None:
        # Deferred: the detector sits above this module in the import graph
        from devlogr.capabilities import detect

        profile = detect(source)

    use_json: bool = is_enabled(source, EnvVar.OUTPUT_JSON)
    show_timestamp, timestamp_format = resolve_timestamp(source, is_ci=profile.is_ci)

    return LogConfig(
        level=resolve_log_level(source),
        use_json=use_json,
        use_colors=profile.color_supported and not use_json,
        show_timestamp=show_timestamp,
        timestamp_format=timestamp_format,
        show_prefix=resolve_show_prefix(source, is_ci=profile.is_ci),
        show_icons=resolve_show_icons(source, is_ci=profile.is_ci),
        supports_unicode=profile.unicode_supported,
        supports_emoji=profile.emoji_supported,
        is_ci=profile.is_ci,
        is_interactive=profile.is_interactive,
    )
