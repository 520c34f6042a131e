# topmark:header:start
#
#   project      : devlogr
#   file         : test_serialize.py
#   file_relpath : tests/rendering/test_serialize.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Tests for circular-safe JSON conversion and argument rendering."""

from __future__ import annotations

import datetime as dt
import json
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath
from typing import Any

from devlogr.constants import CIRCULAR_MARKER
from devlogr.rendering.serialize import (
    format_args,
    safe_json_dumps,
    safe_jsonable,
    safe_str,
    serialize_exception,
    to_jsonable,
    type_tag,
)


class Color(Enum):
    RED = "red"


@dataclass
class Point:
    x: int
    y: int


class Plain:
    def __init__(self) -> None:
        self.visible = 1
        self._hidden = 2


class Slotted:
    __slots__ = ("value",)

    def __init__(self) -> None:
        self.value = 1


def test_self_reference_becomes_marker() -> None:
    """A dict containing itself serializes with a marker instead of recursing."""
    data: dict[str, Any] = {"name": "loop"}
    data["self"] = data
    parsed = json.loads(safe_json_dumps(data))
    assert parsed == {"name": "loop", "self": CIRCULAR_MARKER}


def test_nested_cycle_in_list() -> None:
    """Cycles through lists are detected too."""
    items: list[Any] = [1]
    items.append({"back": items})
    assert to_jsonable(items) == [1, {"back": CIRCULAR_MARKER}]


def test_scalars_pass_through() -> None:
    """Scalars are returned as is; non-finite floats become strings."""
    assert to_jsonable("x") == "x"
    assert to_jsonable(3) == 3
    assert to_jsonable(None) is None
    assert to_jsonable(float("nan")) == "nan"


def test_rich_values() -> None:
    """Enums, dates, paths, bytes, dataclasses and plain objects have JSON forms."""
    moment = dt.datetime(2025, 1, 2, 3, 4, 5)
    assert to_jsonable(Color.RED) == "red"
    assert to_jsonable(moment) == "2025-01-02T03:04:05"
    assert to_jsonable(PurePosixPath("/tmp/x")) == "/tmp/x"
    assert to_jsonable(b"abc") == "abc"
    assert to_jsonable(Point(1, 2)) == {"x": 1, "y": 2}
    assert to_jsonable(Plain()) == {"visible": 1}
    assert to_jsonable((1, 2)) == [1, 2]


def test_values_without_json_form_get_type_tags() -> None:
    """Callables and slotted objects degrade to a tag."""
    assert to_jsonable(len) == type_tag(len)
    assert to_jsonable(Slotted()) == "[Object: Slotted]"


def test_exceptions_serialize_to_name_message_stack() -> None:
    """Exceptions carry name, message and (when raised) the stack."""
    try:
        raise ValueError("bad value")
    except ValueError as exc:
        data = serialize_exception(exc)
    assert data["name"] == "ValueError"
    assert data["message"] == "bad value"
    assert "ValueError: bad value" in data["stack"]

    assert serialize_exception(KeyError("k"))["stack"] is None


def test_safe_json_dumps_compact() -> None:
    """Compact mode has no spaces between separators."""
    assert safe_json_dumps({"a": [1, 2]}, indent=None, compact=True) == '{"a":[1,2]}'


def test_safe_json_dumps_keeps_non_ascii() -> None:
    """Unicode is written as is."""
    assert safe_json_dumps("✓", indent=None) == '"✓"'


def test_format_args() -> None:
    """Scalars go inline, exceptions and structures on their own lines."""
    assert format_args(()) == ""
    assert format_args(("a", 1, True)) == " a 1 True"
    assert format_args((ValueError("bad"),)) == "\nbad"
    assert format_args(({"k": 1},)) == '\n{\n  "k": 1\n}'


# --- hostile values -----------------------------------------------------------


class UnprintableError(Exception):
    def __str__(self) -> str:
        raise RuntimeError("no str")


def _nested(depth: int) -> list[Any]:
    value: list[Any] = []
    for _ in range(depth):
        value = [value]
    return value


def test_safe_str_falls_back_to_type_tag() -> None:
    """A raising __str__ yields the type tag."""
    assert safe_str(UnprintableError()) == "[Object: UnprintableError]"
    assert safe_str(3) == "3"


def test_exception_with_raising_str() -> None:
    """Exceptions whose message cannot be rendered still serialize."""
    assert serialize_exception(UnprintableError())["message"] == "[Object: UnprintableError]"
    assert format_args((UnprintableError(),)) == "\n[Object: UnprintableError]"


def test_raised_exception_with_raising_str_keeps_a_stack() -> None:
    """Traceback formatting does not trip over the broken message."""
    try:
        raise UnprintableError()
    except UnprintableError as exc:
        data = serialize_exception(exc)
    assert data["name"] == "UnprintableError"
    assert data["message"] == "[Object: UnprintableError]"


def test_deep_nesting_degrades_to_type_tag() -> None:
    """Values nested past the recursion limit become a type tag."""
    deep = _nested(5000)
    assert safe_jsonable(deep) == "[Object: list]"
    assert safe_json_dumps(deep) == "[Object: list]"
    assert format_args((deep,)) == "\n[Object: list]"
