# topmark:header:start
#
#   project      : devlogr
#   file         : log.py
#   file_relpath : src/devlogr/cli/commands/log.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""devlogr ``log`` command.

Writes one devlogr-formatted line, so shell scripts can share the output style
(and the ``DEVLOGR_*`` configuration) of Python tools.

Examples:
    $ devlogr log success "Build finished" --prefix build
    $ DEVLOGR_OUTPUT_JSON=1 devlogr log warn "Disk almost full"
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from devlogr.core.levels import THEME_LEVELS
from devlogr.logger import Logger

if TYPE_CHECKING:
    from devlogr.context import RuntimeContext


@click.command(
    name="log",
    help="Write MESSAGE as one devlogr line at LEVEL.",
)
@click.argument("level", type=click.Choice(THEME_LEVELS, case_sensitive=False))
@click.argument("message")
@click.option(
    "--prefix",
    "prefix",
    default="devlogr",
    show_default=True,
    help="Logger name shown in brackets when prefixes are enabled.",
)
def log_command(*, level: str, message: str, prefix: str = "devlogr") -> None:
    """Write one formatted line.

    Args:
        level (str): Theme level (``info``, ``success``, ``warn``, ...).
        message (str): Message text.
        prefix (str): Logger name.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    runtime: RuntimeContext = ctx.obj["runtime"]

    Logger(prefix, context=runtime).log(level.lower(), message)
