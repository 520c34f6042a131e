# topmark:header:start
#
#   project      : devlogr
#   file         : styles.py
#   file_relpath : src/devlogr/rendering/styles.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Text styling functions backed by yachalk.

A `Style` is any callable mapping text to styled text. `get_style()` returns a
yachalk builder (``chalk.red``, ``chalk.bold``, ...) when styling is enabled
and `NO_STYLE` otherwise, so callers never branch on the color flag
themselves.

Example:
    ```python
    from devlogr.rendering.styles import get_style

    red = get_style("red", enabled=True)
    print(red("failed"))
    ```
"""

from __future__ import annotations

from typing import Any, Final, Protocol, cast

from yachalk import chalk

from devlogr.config.logging import get_logger

logger = get_logger(__name__)


class Style(Protocol):
    """Callable that decorates a string for display.

    Compatible with `yachalk.ChalkBuilder.__call__`; devlogr always calls
    styles with a single string.
    """

    def __call__(self, *args: object, sep: str = " ") -> str:
        """Style and concatenate the provided arguments.

        Args:
            *args (object): One or more objects to render, typically one string.
            sep (str): Separator used when several values are given.

        Returns:
            str: The styled text.
        """
        ...


class _NoStyle:
    """Identity style used when colors are disabled."""

    def __call__(self, *args: object, sep: str = " ") -> str:
        return sep.join(str(arg) for arg in args)

    def __repr__(self) -> str:
        return "NO_STYLE"


NO_STYLE: Final[Style] = _NoStyle()

# Style names accepted by `get_style`. Dotted names chain modifiers ("bold.red").
STYLE_NAMES: Final[frozenset[str]] = frozenset(
    {
        "red",
        "green",
        "yellow",
        "blue",
        "magenta",
        "cyan",
        "white",
        "gray",
        "bold",
        "dim",
        "italic",
        "underline",
    }
)


def get_style(name: str, *, enabled: bool = True) -> Style:
    """Return the style for ``name``, or `NO_STYLE` when styling is disabled.

    Unknown names also degrade to `NO_STYLE`: styling is cosmetic and must not
    fail a log call.

    Args:
        name (str): Style name, optionally dotted (``"bold.green"``).
        enabled (bool): Whether colors are enabled.

    Returns:
        Style: A text-to-styled-text callable.
    """
    if not enabled:
        return NO_STYLE

    parts: list[str] = name.split(".")
    if not parts or any(part not in STYLE_NAMES for part in parts):
        logger.debug("Unknown style name %r; using NO_STYLE", name)
        return NO_STYLE

    builder: Any = chalk
    for part in parts:
        builder = getattr(builder, part)
    return cast("Style", builder)
