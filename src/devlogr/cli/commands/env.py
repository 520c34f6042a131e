# topmark:header:start
#
#   project      : devlogr
#   file         : env.py
#   file_relpath : src/devlogr/cli/commands/env.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""devlogr ``env`` command.

Shows what devlogr detected about the current terminal and the configuration
it resolved from the environment. Useful when output in a CI system does not
look the way you expect.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from devlogr.rendering.safe import safe
from devlogr.rendering.serialize import safe_json_dumps

if TYPE_CHECKING:
    from devlogr.console import ConsoleLike
    from devlogr.context import RuntimeContext


def _render_section(
    console: ConsoleLike, runtime: RuntimeContext, title: str, values: dict[str, Any]
) -> None:
    config = runtime.config
    console.print(safe(title, "bold.underline", config=config))
    width: int = max((len(key) for key in values), default=0)
    for key, value in values.items():
        shown: str = str(value).lower() if isinstance(value, bool) else str(value)
        style: str | None = None
        if isinstance(value, bool):
            style = "green" if value else "gray"
        console.print(f"  {key.ljust(width)}  {safe(shown, style, config=config)}")


@click.command(
    name="env",
    help="Show detected terminal capabilities and the resolved configuration.",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Emit one JSON document instead of text.",
)
def env_command(*, as_json: bool = False) -> None:
    """Show detected terminal capabilities and the resolved configuration.

    Args:
        as_json (bool): Emit JSON instead of human-readable text.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    runtime: RuntimeContext = ctx.obj["runtime"]

    capabilities: dict[str, Any] = dict(runtime.profile.as_dict())
    configuration: dict[str, Any] = runtime.config.as_dict()

    if as_json:
        console.print(
            safe_json_dumps({"capabilities": capabilities, "config": configuration}, indent=2)
        )
        return

    _render_section(console, runtime, "Capabilities", capabilities)
    console.print()
    _render_section(console, runtime, "Configuration", configuration)
