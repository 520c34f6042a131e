# topmark:header:start
#
#   project      : devlogr
#   file         : capabilities.py
#   file_relpath : src/devlogr/capabilities.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Terminal capability detection (color, Unicode, emoji, CI, interactivity).

Every check is a pure function of an environment mapping, the output stream's
TTY status, and the platform string. `detect()` bundles them into an immutable
`CapabilityProfile`; memoization lives in `devlogr.context.RuntimeContext`, not
here, so tests can call these functions with any environment they like.

Precedence for each capability:
    1. Explicit disable signals (``NO_COLOR`` and friends) always win.
    2. Explicit enable signals (``FORCE_COLOR`` and friends) win next.
    3. Inference from terminal identifiers, locale, platform and CI.
    4. The interactive-stream fallback.
"""

from __future__ import annotations

import os
import sys
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

from devlogr.config.logging import get_logger
from devlogr.constants import (
    CAPABLE_TERM_PROGRAMS,
    CI_MARKER_VARS,
    COLOR_TERM_SUBSTRINGS,
    UNICODE_TERM_SUBSTRINGS,
    EnvVar,
)
from devlogr.core.env import get_str, is_enabled, is_forced, is_nonempty, is_set

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import TextIO

    from devlogr.config.logging import DevlogrLogger

logger: DevlogrLogger = get_logger(__name__)


@dataclass(frozen=True)
class CapabilityProfile:
    """What the running terminal can display.

    Attributes:
        color_supported (bool): ANSI styling can be emitted.
        unicode_supported (bool): Non-ASCII symbols (check marks, braille frames) render.
        emoji_supported (bool): Emoji render; a stricter subset of Unicode support.
        is_ci (bool): Running inside a known CI platform.
        is_interactive (bool): The output stream is a real terminal.
    """

    color_supported: bool
    unicode_supported: bool
    emoji_supported: bool
    is_ci: bool
    is_interactive: bool

    def as_dict(self) -> dict[str, bool]:
        """Return the profile as a plain dict (for the CLI and JSON output)."""
        return asdict(self)


def stream_is_interactive(stream: TextIO | None) -> bool:
    """Return True if ``stream`` is attached to a terminal.

    Closed or detached streams count as non-interactive.
    """
    if stream is None:
        return False
    try:
        return bool(stream.isatty())
    except (OSError, ValueError, AttributeError):
        return False


def is_ci(env: Mapping[str, str]) -> bool:
    """Return True when any known CI marker variable is set to a non-empty value.

    ``DEVLOGR_DISABLE_CI_DETECTION=true`` forces non-CI behavior even inside a runner.
    """
    if is_enabled(env, EnvVar.DISABLE_CI_DETECTION):
        return False
    return any(is_nonempty(env, name) for name in CI_MARKER_VARS)


def _is_windows_terminal(env: Mapping[str, str]) -> bool:
    return get_str(env, "TERM_PROGRAM") == "Windows Terminal" or is_nonempty(env, "WT_SESSION")


def supports_color(
    env: Mapping[str, str],
    *,
    interactive: bool,
    platform: str = sys.platform,
    ci: bool | None = None,
) -> bool:
    """Decide whether ANSI colors should be emitted.

    Args:
        env (Mapping[str, str]): Environment snapshot.
        interactive (bool): Whether the output stream is a TTY.
        platform (str): ``sys.platform``-style identifier.
        ci (bool | None): Precomputed CI flag; computed from ``env`` when None.

    Returns:
        bool: True if colors should be used.
    """
    # NO_COLOR standard: any value, including the empty string, disables color
    if is_set(env, EnvVar.NO_COLOR) or is_forced(env, EnvVar.DEVLOGR_NO_COLOR):
        return False

    term: str = get_str(env, "TERM")
    # A dumb terminal cannot render escapes, even when forced
    if term == "dumb":
        return False

    if is_forced(env, EnvVar.FORCE_COLOR) or is_forced(env, EnvVar.DEVLOGR_FORCE_COLOR):
        return True

    if get_str(env, "TERM_PROGRAM") in CAPABLE_TERM_PROGRAMS:
        return True

    if term and any(marker in term for marker in COLOR_TERM_SUBSTRINGS):
        return True

    if platform == "win32":
        if _is_windows_terminal(env) or get_str(env, "ConEmuANSI") == "ON":
            return True
        if is_nonempty(env, "OS") and is_set(env, "PROCESSOR_ARCHITEW6432"):
            return True

    if is_ci(env) if ci is None else ci:
        return True

    return interactive


def supports_unicode(
    env: Mapping[str, str],
    *,
    platform: str = sys.platform,
    ci: bool | None = None,
) -> bool:
    """Decide whether Unicode symbols can be displayed.

    CI terminals usually render UTF-8 logs even without a live TTY, so CI
    defaults to True; everything else defaults to False for compatibility.
    """
    if is_set(env, EnvVar.NO_UNICODE) or is_enabled(env, EnvVar.DEVLOGR_NO_UNICODE):
        return False

    if (
        is_enabled(env, EnvVar.DEVLOGR_UNICODE)
        or is_forced(env, EnvVar.DEVLOGR_FORCE_COLOR)
        or is_forced(env, EnvVar.FORCE_COLOR)
    ):
        return True

    locale: str = (
        get_str(env, "LC_ALL") or get_str(env, "LC_CTYPE") or get_str(env, "LANG")
    ).lower()
    if "utf-8" in locale or "utf8" in locale:
        return True

    if get_str(env, "TERM_PROGRAM") in CAPABLE_TERM_PROGRAMS:
        return True

    term: str = get_str(env, "TERM")
    if term and any(marker in term for marker in UNICODE_TERM_SUBSTRINGS):
        return True

    if platform == "win32":
        if _is_windows_terminal(env):
            return True
        # PowerShell 7+ renders Unicode
        if is_nonempty(env, "PSModulePath") and not is_set(env, "PROCESSOR_ARCHITEW6432"):
            return True

    return is_ci(env) if ci is None else ci


def supports_emoji(
    env: Mapping[str, str],
    *,
    interactive: bool,
    platform: str = sys.platform,
    ci: bool | None = None,
) -> bool:
    """Decide whether emoji can be displayed.

    Emoji support is stricter than Unicode support: any no-color, no-emoji or
    no-unicode signal disables it before any enable signal is considered.
    """
    if (
        is_set(env, EnvVar.NO_COLOR)
        or is_set(env, EnvVar.NO_EMOJI)
        or is_set(env, EnvVar.NO_UNICODE)
        or is_forced(env, EnvVar.DEVLOGR_NO_COLOR)
        or is_enabled(env, EnvVar.DEVLOGR_NO_EMOJI)
        or is_enabled(env, EnvVar.DEVLOGR_NO_UNICODE)
    ):
        return False

    if (
        is_enabled(env, EnvVar.DEVLOGR_EMOJI)
        or is_enabled(env, EnvVar.DEVLOGR_SHOW_EMOJI)
        or is_enabled(env, EnvVar.DEVLOGR_UNICODE)
    ):
        return True

    term_program: str = get_str(env, "TERM_PROGRAM")
    if term_program in CAPABLE_TERM_PROGRAMS or term_program == "Windows Terminal":
        return True

    if get_str(env, "COLORTERM") == "truecolor" or "256color" in get_str(env, "TERM"):
        return True

    if platform == "darwin":
        return True

    if platform == "win32" and (is_nonempty(env, "WT_SESSION") or is_nonempty(env, "WSLENV")):
        return True

    in_ci: bool = is_ci(env) if ci is None else ci
    if in_ci:
        return supports_unicode(env, platform=platform, ci=in_ci)

    return interactive


def detect(
    env: Mapping[str, str] | None = None,
    stream: TextIO | None = None,
    *,
    platform: str | None = None,
) -> CapabilityProfile:
    """Inspect the environment and output stream once and build a profile.

    Args:
        env (Mapping[str, str] | None): Environment snapshot; defaults to ``os.environ``.
        stream (TextIO | None): Output stream to probe; defaults to ``sys.stdout``.
        platform (str | None): Platform override; defaults to ``sys.platform``.

    Returns:
        CapabilityProfile: The detected capabilities.
    """
    source: Mapping[str, str] = dict(os.environ) if env is None else env
    plat: str = sys.platform if platform is None else platform
    interactive: bool = stream_is_interactive(sys.stdout if stream is None else stream)
    ci: bool = is_ci(source)

    profile = CapabilityProfile(
        color_supported=supports_color(source, interactive=interactive, platform=plat, ci=ci),
        unicode_supported=supports_unicode(source, platform=plat, ci=ci),
        emoji_supported=supports_emoji(source, interactive=interactive, platform=plat, ci=ci),
        is_ci=ci,
        is_interactive=interactive,
    )
    logger.debug("Detected capabilities: %s", profile)
    return profile
