# topmark:header:start
#
#   project      : devlogr
#   file         : safe.py
#   file_relpath : src/devlogr/rendering/safe.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Capability-aware string helpers for ad-hoc console output.

These helpers let callers build their own messages (outside a `Logger`) that
still honour the resolved color, Unicode and emoji support. Every function
takes an optional `LogConfig`; the active runtime context is consulted when it
is omitted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from devlogr.rendering.emoji import strip_emoji
from devlogr.rendering.styles import get_style

if TYPE_CHECKING:
    from devlogr.config import LogConfig


def _config(config: LogConfig | None) -> LogConfig:
    if config is not None:
        return config
    # Deferred: the context imports the task renderers, which import this package
    from devlogr.context import get_context

    return get_context().config


def color(text: str, style: str, *, config: LogConfig | None = None) -> str:
    """Apply the named style when colors are enabled."""
    return get_style(style, enabled=_config(config).use_colors)(text)


def symbol(unicode: str, fallback: str, *, config: LogConfig | None = None) -> str:
    """Return ``unicode`` when supported, ``fallback`` otherwise."""
    return unicode if _config(config).supports_unicode else fallback


def emoji(text: str, *, config: LogConfig | None = None) -> str:
    """Return ``text`` with emoji removed unless the terminal displays them."""
    return text if _config(config).supports_emoji else strip_emoji(text)


def safe(text: str, style: str | None = None, *, config: LogConfig | None = None) -> str:
    """Return ``text`` with emoji handled and an optional style applied.

    Args:
        text (str): Text to make display-safe.
        style (str | None): Optional style name (e.g. ``"green"``).
        config (LogConfig | None): Configuration; the active context's when None.

    Returns:
        str: Display-safe text.
    """
    resolved: LogConfig = _config(config)
    out: str = emoji(text, config=resolved)
    if style is None:
        return out
    return color(out, style, config=resolved)


def format_message(
    icon: str,
    fallback: str,
    label: str,
    message: str,
    *,
    style: str,
    message_style: str | None = None,
    config: LogConfig | None = None,
) -> str:
    """Format ``<icon> LABEL: message`` with capability-aware icon and styling."""
    resolved: LogConfig = _config(config)
    mark: str = color(symbol(icon, fallback, config=resolved), style, config=resolved)
    head: str = safe(label, style, config=resolved)
    return f"{mark} {head}: {safe(message, message_style, config=resolved)}"


def format_error(
    kind: str,
    message: str,
    suggestion: str | None = None,
    *,
    config: LogConfig | None = None,
) -> str:
    """Format an error report.

    Layout::

        error: <kind>
        <message>
        help: <suggestion>

    The ``help`` line is present only when ``suggestion`` is given.
    """
    resolved: LogConfig = _config(config)
    lines: list[str] = [
        f"{safe('error', 'bold.red', config=resolved)}: {safe(kind, config=resolved)}",
        safe(message, config=resolved),
    ]
    if suggestion:
        help_label: str = safe("help", "green", config=resolved)
        lines.append(f"{help_label}: {safe(suggestion, 'green', config=resolved)}")
    return "\n".join(lines)


def format_warning(message: str, *, config: LogConfig | None = None) -> str:
    """Format ``! WARNING: message``."""
    return format_message("!", "!", "WARNING", message, style="bold.yellow", config=config)


def format_info(message: str, *, config: LogConfig | None = None) -> str:
    """Format ``ℹ INFO: message`` (``i`` without Unicode)."""
    return format_message("ℹ", "i", "INFO", message, style="bold.blue", config=config)


def format_debug(message: str, *, config: LogConfig | None = None) -> str:
    """Format ``? DEBUG: message`` in gray."""
    return format_message(
        "?", "?", "DEBUG", message, style="gray", message_style="gray", config=config
    )
