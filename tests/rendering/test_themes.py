# topmark:header:start
#
#   project      : devlogr
#   file         : test_themes.py
#   file_relpath : tests/rendering/test_themes.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Tests for level themes and text styles."""

from __future__ import annotations

import pytest
from helpers import unstyle

from devlogr.core.errors import UnknownThemeError, UsageError
from devlogr.core.levels import THEME_LEVELS
from devlogr.rendering.styles import NO_STYLE, get_style
from devlogr.rendering.themes import THEMES, available_themes, get_theme, get_theme_spec


def test_theme_table_covers_every_theme_level() -> None:
    """The table lists exactly the theme levels, in order."""
    assert tuple(THEMES) == THEME_LEVELS
    assert available_themes() == THEME_LEVELS


@pytest.mark.parametrize("level", THEME_LEVELS)
def test_labels_are_upper_case_level_names(level: str) -> None:
    """Labels are the upper-cased level name."""
    assert get_theme_spec(level).label == level.upper()


def test_unicode_and_ascii_symbols() -> None:
    """Unicode symbols degrade to ASCII fallbacks."""
    assert get_theme("success", supports_unicode=True).symbol == "✓"
    assert get_theme("success", supports_unicode=False).symbol == "+"
    assert get_theme("error", supports_unicode=False).symbol == "X"


def test_icons_hidden() -> None:
    """Hidden icons leave an empty symbol."""
    assert get_theme("info", show_icons=False).symbol == ""


def test_colors_disabled_use_identity_style() -> None:
    """Without colors the theme style is the identity."""
    theme = get_theme("warn", use_colors=False)
    assert theme.color is NO_STYLE
    assert theme.color("careful") == "careful"


def test_unknown_theme_raises() -> None:
    """Unknown levels are a usage error that is also a KeyError."""
    with pytest.raises(UnknownThemeError) as excinfo:
        get_theme("verbose")
    assert isinstance(excinfo.value, UsageError)
    assert isinstance(excinfo.value, KeyError)
    assert str(excinfo.value) == "Unknown log level: verbose"


def test_get_style_disabled_and_unknown() -> None:
    """Disabled styling and unknown names both yield the identity style."""
    assert get_style("red", enabled=False) is NO_STYLE
    assert get_style("sparkly", enabled=True) is NO_STYLE
    assert get_style("bold.sparkly", enabled=True) is NO_STYLE


def test_get_style_enabled_preserves_text() -> None:
    """Enabled styles only add escape sequences around the text."""
    styled = get_style("bold.green", enabled=True)("ok")
    assert unstyle(styled) == "ok"


def test_no_style_joins_arguments() -> None:
    """The identity style behaves like a chalk builder for several values."""
    assert NO_STYLE("a", 1, sep="-") == "a-1"
    assert repr(NO_STYLE) == "NO_STYLE"
