# topmark:header:start
#
#   project      : devlogr
#   file         : main.py
#   file_relpath : src/devlogr/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Click entry point for the ``devlogr`` command.

Key ideas:
- Group-level options are applied once: they become environment overrides of
  a fresh `RuntimeContext`, which is installed as the active context and placed
  into ``ctx.obj`` together with the console.
- Subcommands read ``ctx.obj["runtime"]`` and ``ctx.obj["console"]`` and never
  consult the environment themselves.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import click

from devlogr.cli.commands.env import env_command
from devlogr.cli.commands.log import log_command
from devlogr.cli.commands.strip import strip_command
from devlogr.cli.commands.version import version_command
from devlogr.config.logging import get_logger, resolve_env_log_level, setup_logging
from devlogr.console import ClickConsole
from devlogr.constants import EnvVar
from devlogr.context import RuntimeContext, set_context

if TYPE_CHECKING:
    from devlogr.config.logging import DevlogrLogger
    from devlogr.console import ConsoleLike

logger: DevlogrLogger = get_logger(__name__)


def init_common_state(ctx: click.Context, *, no_color: bool, json_output: bool) -> None:
    """Initialize shared state (runtime context and console) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` set.
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
        json_output (bool): Whether ``--json-output`` was passed; forces JSON log lines.
    """
    ctx.obj = ctx.obj or {}

    # Configure internal logging via env:
    level_env: int | None = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    env: dict[str, str] = dict(os.environ)
    if no_color:
        env[EnvVar.DEVLOGR_NO_COLOR] = "1"
    if json_output:
        env[EnvVar.OUTPUT_JSON] = "1"

    console = ClickConsole()
    runtime = RuntimeContext(env=env, console=console)
    set_context(runtime)
    logger.debug("CLI runtime context installed (no_color=%s, json=%s)", no_color, json_output)

    ctx.obj["console"] = console
    ctx.obj["runtime"] = runtime
    ctx.color = runtime.config.use_colors


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="devlogr CLI",
)
@click.option("--no-color", "no_color", is_flag=True, default=False, help="Disable colors.")
@click.option(
    "--json-output",
    "json_output",
    is_flag=True,
    default=False,
    help="Write log lines as JSON records (same as DEVLOGR_OUTPUT_JSON=1).",
)
@click.pass_context
def cli(ctx: click.Context, no_color: bool, json_output: bool) -> None:
    """Entry point for the devlogr CLI."""
    init_common_state(ctx, no_color=no_color, json_output=json_output)
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'devlogr env' to see what devlogr detected.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(env_command)

cli.add_command(strip_command)

cli.add_command(log_command)

if __name__ == "__main__":
    cli()
