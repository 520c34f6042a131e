# topmark:header:start
#
#   project      : devlogr
#   file         : __init__.py
#   file_relpath : src/devlogr/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Command-line interface for devlogr (``devlogr`` console script)."""

from __future__ import annotations
