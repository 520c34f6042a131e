# topmark:header:start
#
#   project      : devlogr
#   file         : __init__.py
#   file_relpath : src/devlogr/rendering/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Text rendering for devlogr.

Everything in this package is pure: it turns values and flags into strings and
never writes to a stream.

Public modules:
    - devlogr.rendering.emoji
    - devlogr.rendering.formatter
    - devlogr.rendering.safe
    - devlogr.rendering.serialize
    - devlogr.rendering.styles
    - devlogr.rendering.themes
    - devlogr.rendering.tracker

"""

from __future__ import annotations
