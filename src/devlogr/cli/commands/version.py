# topmark:header:start
#
#   project      : devlogr
#   file         : version.py
#   file_relpath : src/devlogr/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""devlogr ``version`` command.

Prints the devlogr version as installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from devlogr.constants import DEVLOGR_VERSION

if TYPE_CHECKING:
    from devlogr.console import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of devlogr.",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Emit the version as a JSON object.",
)
def version_command(*, as_json: bool = False) -> None:
    """Show the current version of devlogr.

    Args:
        as_json (bool): Emit ``{"version": ...}`` instead of plain text.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    if as_json:
        console.print(json.dumps({"version": DEVLOGR_VERSION}))
    else:
        console.print(DEVLOGR_VERSION)
