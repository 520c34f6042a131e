# topmark:header:start
#
#   project      : devlogr
#   file         : __init__.py
#   file_relpath : src/devlogr/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Core, UI-agnostic building blocks for devlogr (levels, errors).

Nothing in this package imports yachalk, click, or the configuration layer, so
every other package can depend on it without creating import cycles.
"""

from __future__ import annotations
