# topmark:header:start
#
#   project      : devlogr
#   file         : constants.py
#   file_relpath : src/devlogr/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""devlogr constants.

Environment variable names are part of the public contract: CI platforms and
users set them by name, so renaming any of them breaks detection.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Final

try:
    DEVLOGR_VERSION: str = get_version("devlogr")
except PackageNotFoundError:  # running from a source checkout
    DEVLOGR_VERSION = "0.0.0"


class EnvVar:
    """Canonical environment variable names read by devlogr."""

    # Logger configuration
    LOG_LEVEL: Final[str] = "DEVLOGR_LOG_LEVEL"
    OUTPUT_JSON: Final[str] = "DEVLOGR_OUTPUT_JSON"
    SHOW_TIMESTAMP: Final[str] = "DEVLOGR_SHOW_TIMESTAMP"
    SHOW_PREFIX: Final[str] = "DEVLOGR_SHOW_PREFIX"
    SHOW_ICONS: Final[str] = "DEVLOGR_SHOW_ICONS"
    NO_ICONS: Final[str] = "DEVLOGR_NO_ICONS"
    DISABLE_CI_DETECTION: Final[str] = "DEVLOGR_DISABLE_CI_DETECTION"

    # Internal diagnostics (stdlib logging of devlogr itself)
    INTERNAL_LOG_LEVEL: Final[str] = "DEVLOGR_INTERNAL_LOG_LEVEL"

    # Color
    NO_COLOR: Final[str] = "NO_COLOR"
    FORCE_COLOR: Final[str] = "FORCE_COLOR"
    DEVLOGR_NO_COLOR: Final[str] = "DEVLOGR_NO_COLOR"
    DEVLOGR_FORCE_COLOR: Final[str] = "DEVLOGR_FORCE_COLOR"

    # Unicode / emoji
    NO_UNICODE: Final[str] = "NO_UNICODE"
    DEVLOGR_NO_UNICODE: Final[str] = "DEVLOGR_NO_UNICODE"
    DEVLOGR_UNICODE: Final[str] = "DEVLOGR_UNICODE"
    NO_EMOJI: Final[str] = "NO_EMOJI"
    DEVLOGR_NO_EMOJI: Final[str] = "DEVLOGR_NO_EMOJI"
    DEVLOGR_EMOJI: Final[str] = "DEVLOGR_EMOJI"
    DEVLOGR_SHOW_EMOJI: Final[str] = "DEVLOGR_SHOW_EMOJI"


# Third-party CI platform markers. Any non-empty value means "running in CI".
CI_MARKER_VARS: Final[tuple[str, ...]] = (
    "CI",
    "CONTINUOUS_INTEGRATION",
    "BUILD_NUMBER",
    "GITHUB_ACTIONS",
    "GITLAB_CI",
    "CIRCLECI",
    "TRAVIS",
    "JENKINS_URL",
    "BUILDKITE",
    "DRONE",
    "TF_BUILD",
    "TEAMCITY_VERSION",
    "APPVEYOR",
    "CODEBUILD_BUILD_ID",
    "NETLIFY",
    "VERCEL",
)

# Terminal programs known to render colors, Unicode and emoji.
CAPABLE_TERM_PROGRAMS: Final[tuple[str, ...]] = (
    "iTerm.app",
    "Apple_Terminal",
    "vscode",
    "hyper",
    "terminus",
    "warp",
    "alacritty",
    "kitty",
    "ghostty",
)

COLOR_TERM_SUBSTRINGS: Final[tuple[str, ...]] = (
    "color",
    "256color",
    "truecolor",
    "xterm",
    "screen",
    "tmux",
    "ansi",
)

UNICODE_TERM_SUBSTRINGS: Final[tuple[str, ...]] = (
    "xterm-256color",
    "screen-256color",
    "tmux-256color",
    "alacritty",
    "kitty",
)

# Formatting
LEVEL_LABEL_WIDTH: Final[int] = 7
SEPARATOR_WIDTH: Final[int] = 50
CIRCULAR_MARKER: Final[str] = "[Circular Reference]"

# Live rendering
SPINNER_FRAMES: Final[tuple[str, ...]] = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")
ASCII_SPINNER_FRAMES: Final[tuple[str, ...]] = ("|", "/", "-", "\\")
FRAME_INTERVAL_SECONDS: Final[float] = 0.08
ROTATION_INTERVAL_SECONDS: Final[float] = 2.0

# Cursor control: return to line start, clear to end of line, move cursor up one line.
CURSOR_LINE_START: Final[str] = "\r"
CLEAR_LINE: Final[str] = "\x1b[K"
CURSOR_UP: Final[str] = "\x1b[1A"

DEFAULT_SPINNER_TEXT: Final[str] = "Processing..."
