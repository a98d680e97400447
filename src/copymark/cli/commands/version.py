# topmark:header:start
#
#   project      : CopyMark
#   file         : version.py
#   file_relpath : src/copymark/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CopyMark `version` command.

Prints the current CopyMark version as installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from copymark.cli.cli_types import EnumChoiceParam
from copymark.cli.utils import get_effective_verbosity
from copymark.constants import COPYMARK_VERSION
from copymark.rendering.formats import OutputFormat

if TYPE_CHECKING:
    from copymark.cli.console import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of CopyMark.",
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Show the current version of CopyMark.

    Args:
        output_format (OutputFormat | None): Optional output format.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if fmt.is_machine:
        console.print(json.dumps({"version": COPYMARK_VERSION}))
    elif get_effective_verbosity(ctx) > 0:
        console.print(console.styled("CopyMark version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(COPYMARK_VERSION, bold=True)}")
    else:
        console.print(console.styled(COPYMARK_VERSION, bold=True))
