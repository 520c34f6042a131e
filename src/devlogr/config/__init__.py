# topmark:header:start
#
#   project      : devlogr
#   file         : __init__.py
#   file_relpath : src/devlogr/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Configuration resolution and internal logging setup."""

from __future__ import annotations

from devlogr.config.resolver import (
    LogConfig,
    resolve_config,
    resolve_log_level,
    resolve_show_icons,
    resolve_show_prefix,
    resolve_timestamp,
)

__all__ = [
    "LogConfig",
    "resolve_config",
    "resolve_log_level",
    "resolve_show_icons",
    "resolve_show_prefix",
    "resolve_timestamp",
]
