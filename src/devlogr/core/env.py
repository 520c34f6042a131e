# topmark:header:start
#
#   project      : devlogr
#   file         : env.py
#   file_relpath : src/devlogr/core/env.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Environment variable parsing into primitive values.

All helpers take the environment as an explicit mapping so callers (and tests)
can pass a snapshot instead of mutating ``os.environ``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Mapping

TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
FALSY: Final[frozenset[str]] = frozenset({"0", "false", "no", "off"})


def is_set(env: Mapping[str, str], name: str) -> bool:
    """Return True if ``name`` is present, even with an empty value (``NO_COLOR`` semantics)."""
    return name in env


def is_nonempty(env: Mapping[str, str], name: str) -> bool:
    """Return True if ``name`` is present with a non-empty value."""
    return bool(env.get(name))


def get_flag(env: Mapping[str, str], name: str) -> bool | None:
    """Parse a boolean-ish variable.

    Args:
        env (Mapping[str, str]): Environment snapshot.
        name (str): Variable name.

    Returns:
        bool | None: True/False for recognized truthy/falsy spellings, None when the
            variable is unset or holds anything else.
    """
    raw: str | None = env.get(name)
    if raw is None:
        return None
    value: str = raw.strip().lower()
    if value in TRUTHY:
        return True
    if value in FALSY:
        return False
    return None


def is_enabled(env: Mapping[str, str], name: str) -> bool:
    """Return True only if ``name`` holds a truthy spelling."""
    return get_flag(env, name) is True


def is_forced(env: Mapping[str, str], name: str) -> bool:
    """Return True if ``name`` is set to anything but an explicit falsy value.

    Used for ``FORCE_COLOR``-style variables where ``FORCE_COLOR=3`` also counts.
    """
    raw: str | None = env.get(name)
    if not raw:
        return False
    return raw.strip().lower() not in FALSY


def get_str(env: Mapping[str, str], name: str, default: str = "") -> str:
    """Return the stripped value of ``name`` or ``default``."""
    raw: str | None = env.get(name)
    return raw.strip() if raw is not None else default
