# topmark:header:start
#
#   project      : devlogr
#   file         : __init__.py
#   file_relpath : src/devlogr/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Subcommands of the ``devlogr`` CLI, one module per command."""

from __future__ import annotations
