# topmark:header:start
#
#   project      : devlogr
#   file         : formatter.py
#   file_relpath : src/devlogr/rendering/formatter.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Pure formatting of log lines, task lines and JSON records.

Text line layout (each component independently omittable):

    [timestamp] LABEL   [prefix]   symbol message args...

* The timestamp is ``HH:MM:SS`` or ISO-8601, dimmed when colored.
* The level label and the bracketed prefix are shown together or not at all.
  The label is padded to `LEVEL_LABEL_WIDTH`; the bracket is padded to the
  widest registered logger name so every bracket starts in the same column.
* The symbol comes from the theme (ASCII fallback, or empty when icons are off).
* Message styling depends on the level: bold for error/success, theme color for
  warn/title/task/plain, dim for trace.

Emoji are stripped from the message and string arguments when the terminal
cannot display them. The JSON path always strips them.

Nothing here performs I/O or reads the environment: every flag travels in the
`FormatRequest`.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from devlogr.constants import LEVEL_LABEL_WIDTH
from devlogr.core.levels import TimestampFormat
from devlogr.rendering.emoji import strip_emoji
from devlogr.rendering.serialize import (
    format_args,
    safe_json_dumps,
    safe_jsonable,
    safe_str,
    serialize_exception,
)
from devlogr.rendering.styles import get_style
from devlogr.rendering.themes import Theme, get_theme

if TYPE_CHECKING:
    from collections.abc import Mapping

    from devlogr.config import LogConfig

BOLD_MESSAGE_LEVELS: frozenset[str] = frozenset({"error", "success"})
COLORED_MESSAGE_LEVELS: frozenset[str] = frozenset({"warn", "title", "task", "plain"})
DIM_MESSAGE_LEVELS: frozenset[str] = frozenset({"trace"})


@dataclass(frozen=True)
class FormatRequest:
    """Everything needed to format one line.

    Flags are copied from the `LogConfig` when the request is built, so a
    configuration change cannot affect a line already being formatted.

    Attributes:
        level (str): Theme level name.
        message (str): Message text.
        args (tuple[Any, ...]): Positional arguments of the log call.
        prefix (str): Logger name.
        max_prefix_width (int): Longest registered logger name.
        use_colors (bool): Emit ANSI styling.
        show_timestamp (bool): Prepend a timestamp.
        timestamp_format (TimestampFormat): Timestamp style.
        show_prefix (bool): Show level label and prefix.
        show_icons (bool): Show the theme symbol.
        supports_unicode (bool): Use Unicode symbols.
        supports_emoji (bool): Leave emoji in the text.
        now (dt.datetime | None): Timestamp to render; the current time when None.
        theme (Theme | None): Explicit theme; derived from ``level`` when None.
    """

    level: str
    message: str
    args: tuple[Any, ...] = ()
    prefix: str = ""
    max_prefix_width: int = 0
    use_colors: bool = False
    show_timestamp: bool = False
    timestamp_format: TimestampFormat = TimestampFormat.CLOCK
    show_prefix: bool = False
    show_icons: bool = True
    supports_unicode: bool = True
    supports_emoji: bool = True
    now: dt.datetime | None = None
    theme: Theme | None = field(default=None, compare=False)

    @classmethod
    def from_config(
        cls,
        config: LogConfig,
        level: str,
        message: str,
        args: tuple[Any, ...] = (),
        *,
        prefix: str = "",
        max_prefix_width: int = 0,
        now: dt.datetime | None = None,
    ) -> FormatRequest:
        """Build a request from a configuration snapshot."""
        return cls(
            level=level,
            message=message,
            args=args,
            prefix=prefix,
            max_prefix_width=max_prefix_width,
            use_colors=config.use_colors,
            show_timestamp=config.show_timestamp,
            timestamp_format=config.timestamp_format,
            show_prefix=config.show_prefix,
            show_icons=config.show_icons,
            supports_unicode=config.supports_unicode,
            supports_emoji=config.supports_emoji,
            now=now,
        )

    def with_message(self, message: str, args: tuple[Any, ...] = ()) -> FormatRequest:
        """Return a copy carrying a different message and arguments."""
        return replace(self, message=message, args=args)

    def resolved_theme(self) -> Theme:
        """Return the explicit theme, or the one derived from the flags.

        Raises:
            UnknownThemeError: If ``level`` has no theme.
        """
        if self.theme is not None:
            return self.theme
        return get_theme(
            self.level,
            use_colors=self.use_colors,
            supports_unicode=self.supports_unicode,
            show_icons=self.show_icons,
        )


def format_timestamp(
    timestamp_format: TimestampFormat = TimestampFormat.CLOCK,
    now: dt.datetime | None = None,
) -> str:
    """Render a timestamp.

    Args:
        timestamp_format (TimestampFormat): ``CLOCK`` gives local ``HH:MM:SS``,
            ``ISO`` gives UTC ISO-8601 with milliseconds and a ``Z`` suffix.
        now (dt.datetime | None): Moment to render; the current time when None.

    Returns:
        str: The rendered timestamp.
    """
    if timestamp_format is TimestampFormat.ISO:
        moment: dt.datetime = now or dt.datetime.now(dt.timezone.utc)
        if moment.tzinfo is not None:
            moment = moment.astimezone(dt.timezone.utc)
        return moment.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"
    return (now or dt.datetime.now()).strftime("%H:%M:%S")


def iso_timestamp(now: dt.datetime | None = None) -> str:
    """Return the ISO-8601 UTC timestamp used in JSON records."""
    return format_timestamp(TimestampFormat.ISO, now)


def style_message(level: str, message: str, theme: Theme, *, use_colors: bool) -> str:
    """Apply the level-dependent message styling."""
    if not use_colors:
        return message
    if level in BOLD_MESSAGE_LEVELS:
        return get_style("bold")(theme.color(message))
    if level in COLORED_MESSAGE_LEVELS:
        return theme.color(message)
    if level in DIM_MESSAGE_LEVELS:
        return get_style("dim")(message)
    return message


def _lead_components(request: FormatRequest, theme: Theme) -> list[str]:
    """Return the timestamp, label and prefix components of a text line."""
    dim = get_style("dim", enabled=request.use_colors)
    parts: list[str] = []

    if request.show_timestamp:
        parts.append(dim(f"[{format_timestamp(request.timestamp_format, request.now)}]"))

    if request.show_prefix:
        label: str = theme.label.ljust(LEVEL_LABEL_WIDTH)
        bold = get_style("bold", enabled=request.use_colors)
        parts.append(bold(theme.color(label)))

        bracket: str = f"[{request.prefix}]"
        width: int = max(request.max_prefix_width, len(request.prefix)) + 2
        parts.append(dim(bracket) + " " * (width - len(bracket)))

    return parts


def _display_text(request: FormatRequest) -> tuple[str, tuple[Any, ...]]:
    if request.supports_emoji:
        return request.message, request.args
    args = tuple(strip_emoji(arg) if isinstance(arg, str) else arg for arg in request.args)
    return strip_emoji(request.message), args


def format_line(request: FormatRequest) -> str:
    """Format one log line.

    Args:
        request (FormatRequest): What to format and how.

    Returns:
        str: The display line (no trailing newline).

    Raises:
        UnknownThemeError: If ``request.level`` has no theme and no explicit theme is given.
    """
    theme: Theme = request.resolved_theme()
    message, args = _display_text(request)

    parts: list[str] = _lead_components(request, theme)
    if theme.symbol:
        parts.append(theme.color(theme.symbol))
    parts.append(style_message(request.level, message, theme, use_colors=request.use_colors))

    return " ".join(parts) + format_args(args)


def format_task_line(request: FormatRequest, glyph: str, *, depth: int = 0) -> str:
    """Format one line of a task tree.

    The lead components (timestamp, label, prefix) match `format_line`, so task
    lines align with ordinary log lines. ``depth`` indents the glyph by two
    spaces per nesting level.

    Args:
        request (FormatRequest): Request whose ``message`` is the task title or output line.
        glyph (str): Already-styled status glyph.
        depth (int): Nesting depth (0 for top-level tasks).

    Returns:
        str: The display line.
    """
    theme: Theme = request.resolved_theme()
    message, _ = _display_text(request)

    parts: list[str] = _lead_components(request, theme)
    parts.append("  " * depth + glyph if glyph else "  " * depth)
    parts.append(message)
    return " ".join(part for part in parts if part)


def _json_value(value: Any, seen: set[int]) -> Any:
    if isinstance(value, str):
        return strip_emoji(value)
    if isinstance(value, BaseException):
        return serialize_exception(value)
    return safe_jsonable(value, seen)


def format_json_record(
    level: str,
    message: str,
    args: tuple[Any, ...] = (),
    *,
    prefix: str = "",
    now: dt.datetime | None = None,
    extra: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the structured record for one log event.

    Plain-dict arguments are merged into the record (a key that is already
    present is namespaced as ``arg{index}_{key}``); every other argument is
    stored as ``arg{index}``. Strings are always emoji-stripped.

    Args:
        level (str): Level name.
        message (str): Message text.
        args (tuple[Any, ...]): Positional arguments.
        prefix (str): Logger name.
        now (dt.datetime | None): Event time; the current time when None.
        extra (Mapping[str, Any] | None): Additional top-level fields (e.g. ``task``).

    Returns:
        dict[str, Any]: A JSON-compatible record.
    """
    record: dict[str, Any] = {
        "level": level,
        "message": strip_emoji(message),
        "prefix": prefix,
        "timestamp": iso_timestamp(now),
    }
    if extra:
        record.update({safe_str(key): safe_jsonable(value) for key, value in extra.items()})

    for index, arg in enumerate(args):
        if isinstance(arg, dict):
            seen: set[int] = {id(arg)}
            for key, value in arg.items():
                name: str = safe_str(key)
                if name in record:
                    name = f"arg{index}_{name}"
                record[name] = _json_value(value, seen)
        else:
            record[f"arg{index}"] = _json_value(arg, set())
    return record


def format_json_line(
    level: str,
    message: str,
    args: tuple[Any, ...] = (),
    *,
    prefix: str = "",
    now: dt.datetime | None = None,
    extra: Mapping[str, Any] | None = None,
) -> str:
    """Return `format_json_record` serialized as one compact JSON line."""
    record = format_json_record(level, message, args, prefix=prefix, now=now, extra=extra)
    return safe_json_dumps(record, indent=None, compact=True)
