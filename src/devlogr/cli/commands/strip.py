# topmark:header:start
#
#   project      : devlogr
#   file         : strip.py
#   file_relpath : src/devlogr/cli/commands/strip.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""devlogr ``strip`` command.

Removes emoji from text while keeping status symbols such as ``✓`` and ``✗``.

Examples:
  Strip arguments:

    $ devlogr strip "🚀 Deploying" "✅ done"

  Strip every line read from STDIN:

    $ git log --oneline | devlogr strip
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from devlogr.cli.errors import DevlogrDataError, DevlogrUsageError
from devlogr.rendering.emoji import strip_emoji

if TYPE_CHECKING:
    from typing import TextIO

    from devlogr.console import ConsoleLike


@click.command(
    name="strip",
    help="Strip emoji from TEXT arguments, or from each line on STDIN.",
)
@click.argument("text", nargs=-1)
def strip_command(*, text: tuple[str, ...] = ()) -> None:
    """Strip emoji from arguments or STDIN lines.

    Args:
        text (tuple[str, ...]): Texts to strip; STDIN is read when empty.

    Raises:
        DevlogrUsageError: If no TEXT is given and STDIN is a terminal.
        DevlogrDataError: If STDIN is not valid text in its encoding.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    if text:
        for item in text:
            console.print(strip_emoji(item))
        return

    stdin: TextIO = click.get_text_stream("stdin")
    if stdin.isatty():
        raise DevlogrUsageError(
            "No text to strip.",
            suggestion="pass TEXT arguments or pipe text on STDIN",
        )
    try:
        for line in stdin:
            console.print(strip_emoji(line.rstrip("\n")))
    except UnicodeDecodeError as exc:
        raise DevlogrDataError(
            "Could not decode STDIN.",
            suggestion=f"pipe {exc.encoding} text",
        ) from exc
