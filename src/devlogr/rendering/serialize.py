# topmark:header:start
#
#   project      : devlogr
#   file         : serialize.py
#   file_relpath : src/devlogr/rendering/serialize.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Circular-safe conversion of arbitrary log arguments to JSON.

`to_jsonable()` walks a value once, keeping a set of the container ids already
visited; any object reached a second time is replaced by `CIRCULAR_MARKER`.
Exceptions become ``{"name", "message", "stack"}``, dates become ISO-8601
strings, and anything else that has no JSON form degrades to a type tag
(``"[Object: Foo]"``). Nothing in this module raises.
"""

from __future__ import annotations

import datetime as dt
import json
import math
import traceback
from dataclasses import fields, is_dataclass
from enum import Enum
from pathlib import PurePath
from typing import TYPE_CHECKING, Any

from devlogr.config.logging import get_logger
from devlogr.constants import CIRCULAR_MARKER

if TYPE_CHECKING:
    from collections.abc import Iterable

    from devlogr.config.logging import DevlogrLogger

logger: DevlogrLogger = get_logger(__name__)

SCALAR_TYPES: tuple[type, ...] = (str, int, float, bool, type(None))


def type_tag(value: object) -> str:
    """Return the placeholder used for values without a JSON form."""
    return f"[Object: {type(value).__name__}]"


def safe_str(value: object) -> str:
    """Return ``str(value)``, or its type tag when ``__str__`` raises."""
    try:
        return str(value)
    except Exception as exc:  # noqa: BLE001
        logger.debug("str() failed for %s: %r", type(value).__name__, exc)
        return type_tag(value)


def serialize_exception(exc: BaseException) -> dict[str, Any]:
    """Return the ``{name, message, stack}`` form of an exception."""
    stack: str | None = None
    if exc.__traceback__ is not None:
        try:
            stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        except Exception as err:  # noqa: BLE001
            logger.debug("Could not format traceback of %s: %r", type(exc).__name__, err)
    return {"name": type(exc).__name__, "message": safe_str(exc), "stack": stack}


def _public_attributes(value: object) -> dict[str, Any] | None:
    try:
        attrs: dict[str, Any] = vars(value)
    except TypeError:
        return None
    return {k: v for k, v in attrs.items() if not k.startswith("_")}


def to_jsonable(value: Any, _seen: set[int] | None = None) -> Any:
    """Convert ``value`` into a structure `json.dumps` accepts.

    Args:
        value (Any): Any Python object.
        _seen (set[int] | None): Ids of the containers already visited (internal).

    Returns:
        Any: A JSON-compatible structure (dicts with ``str`` keys, lists and scalars).
    """
    seen: set[int] = set() if _seen is None else _seen

    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, SCALAR_TYPES):
        return value
    if isinstance(value, Enum):
        return to_jsonable(value.value, seen)
    if isinstance(value, (dt.datetime, dt.date, dt.time)):
        return value.isoformat()
    if isinstance(value, PurePath):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")

    # Containers and objects: guard re-entrant references
    if id(value) in seen:
        return CIRCULAR_MARKER
    seen.add(id(value))

    if isinstance(value, BaseException):
        return serialize_exception(value)
    if isinstance(value, dict):
        return {safe_str(k): to_jsonable(v, seen) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        items: Iterable[Any] = value
        return [to_jsonable(item, seen) for item in items]
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name), seen) for f in fields(value)}
    if callable(value):
        return type_tag(value)

    attrs: dict[str, Any] | None = _public_attributes(value)
    if attrs is not None:
        return {k: to_jsonable(v, seen) for k, v in attrs.items()}
    return type_tag(value)


def safe_jsonable(value: Any, seen: set[int] | None = None) -> Any:
    """Like `to_jsonable`, but degrades to a type tag instead of raising.

    Deeply nested values exhaust the recursion limit and objects with hostile
    ``__str__`` or attribute hooks can raise; both end up as ``"[Object: Foo]"``.
    """
    try:
        return to_jsonable(value, seen)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Falling back to type tag for %s: %r", type(value).__name__, exc)
        return type_tag(value)


def safe_json_dumps(value: Any, indent: int | None = 2, *, compact: bool = False) -> str:
    """Serialize ``value`` to JSON without ever raising.

    Args:
        value (Any): Value to serialize.
        indent (int | None): Indentation; None for a single line.
        compact (bool): Use ``,`` and ``:`` separators without spaces (wire format).

    Returns:
        str: The JSON text, or a type tag if serialization failed anyway.
    """
    try:
        separators: tuple[str, str] | None = (",", ":") if compact else None
        return json.dumps(
            to_jsonable(value), indent=indent, separators=separators, ensure_ascii=False
        )
    except Exception as exc:  # noqa: BLE001
        logger.debug("Falling back to type tag for %s: %s", type(value).__name__, exc)
        return type_tag(value)


def is_structured(value: object) -> bool:
    """Return True for values rendered as a JSON block rather than inline text."""
    return not isinstance(value, SCALAR_TYPES)


def format_args(args: Iterable[Any]) -> str:
    """Render positional log arguments as a text suffix.

    Scalars are appended inline after a space; exceptions contribute their
    message on a new line; other structured values are pretty-printed as JSON
    on a new line.

    Args:
        args (Iterable[Any]): Positional arguments of a log call.

    Returns:
        str: The suffix to append to the message (empty for no arguments).
    """
    parts: list[str] = []
    for arg in args:
        if not is_structured(arg):
            parts.append(f" {safe_str(arg)}")
        elif isinstance(arg, BaseException):
            parts.append(f"\n{safe_str(arg)}")
        else:
            parts.append(f"\n{safe_json_dumps(arg)}")
    return "".join(parts)
