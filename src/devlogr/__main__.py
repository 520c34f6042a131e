# topmark:header:start
#
#   project      : devlogr
#   file         : __main__.py
#   file_relpath : src/devlogr/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Module entry point for running devlogr via ``python -m devlogr``.

Delegates directly to :func:`devlogr.cli.main.cli`, so the module and the
``devlogr`` console script behave the same.

Examples:
    Show what devlogr detected about this terminal::

        python -m devlogr env
"""

from __future__ import annotations

from devlogr.cli.main import cli

if __name__ == "__main__":
    # We call the Click group directly
    cli()
