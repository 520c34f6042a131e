# topmark:header:start
#
#   project      : devlogr
#   file         : themes.py
#   file_relpath : src/devlogr/rendering/themes.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Per-level visual themes (symbol, label, color).

The theme table is immutable. `get_theme()` derives the effective theme for
one line from it: the ASCII symbol replaces the Unicode one when Unicode is
unsupported, the symbol is blanked when icons are hidden, and the color
becomes `NO_STYLE` when colors are disabled.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from devlogr.core.errors import UnknownThemeError
from devlogr.rendering.styles import get_style

if TYPE_CHECKING:
    from collections.abc import Mapping

    from devlogr.rendering.styles import Style


@dataclass(frozen=True)
class ThemeSpec:
    """Static description of a level's look.

    Attributes:
        symbol (str): Unicode icon.
        ascii_symbol (str): Fallback icon for terminals without Unicode.
        label (str): Upper-case level label.
        color (str): Style name passed to `get_style`.
    """

    symbol: str
    ascii_symbol: str
    label: str
    color: str


@dataclass(frozen=True)
class Theme:
    """Effective theme for one formatted line.

    Attributes:
        level (str): Theme level name.
        symbol (str): Icon to display (may be empty).
        label (str): Upper-case level label.
        color (Style): Style applied to the symbol, label and (for some levels) the message.
    """

    level: str
    symbol: str
    label: str
    color: Style


THEMES: Final[Mapping[str, ThemeSpec]] = MappingProxyType(
    {
        "error": ThemeSpec("✗", "X", "ERROR", "red"),
        "warn": ThemeSpec("!", "!", "WARN", "yellow"),
        "info": ThemeSpec("i", "i", "INFO", "cyan"),
        "debug": ThemeSpec("?", "?", "DEBUG", "gray"),
        "trace": ThemeSpec("•", ".", "TRACE", "gray"),
        "success": ThemeSpec("✓", "+", "SUCCESS", "green"),
        "title": ThemeSpec("●", "*", "TITLE", "magenta"),
        "task": ThemeSpec("→", ">", "TASK", "white"),
        "plain": ThemeSpec(" ", "", "PLAIN", "white"),
    }
)


def available_themes() -> tuple[str, ...]:
    """Return the theme level names in table order."""
    return tuple(THEMES)


def get_theme_spec(level: str) -> ThemeSpec:
    """Return the static theme description for ``level``.

    Raises:
        UnknownThemeError: If ``level`` has no theme.
    """
    try:
        return THEMES[level]
    except KeyError:
        raise UnknownThemeError(level) from None


def get_theme(
    level: str,
    *,
    use_colors: bool = True,
    supports_unicode: bool = True,
    show_icons: bool = True,
) -> Theme:
    """Return the effective theme for ``level``.

    Args:
        level (str): Theme level name, e.g. ``"success"``.
        use_colors (bool): Whether styling is enabled.
        supports_unicode (bool): Whether to use the Unicode symbol.
        show_icons (bool): Whether to show a symbol at all.

    Returns:
        Theme: The theme to format a line with.

    Raises:
        UnknownThemeError: If ``level`` has no theme.
    """
    spec: ThemeSpec = get_theme_spec(level)
    symbol: str = ""
    if show_icons:
        symbol = spec.symbol if supports_unicode else spec.ascii_symbol
    return Theme(
        level=level,
        symbol=symbol,
        label=spec.label,
        color=get_style(spec.color, enabled=use_colors),
    )
