# topmark:header:start
#
#   project      : CopyMark
#   file         : config.py
#   file_relpath : src/copymark/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CopyMark `config` command group.

Subcommands for inspecting CopyMark configuration:

  * ``copymark config dump``: show the effective merged configuration.
"""

from __future__ import annotations

import click

from copymark.cli.commands.config_dump import config_dump_command


@click.group(
    name="config",
    help="Inspect CopyMark configuration.",
    context_settings={"help_option_names": ["-h", "--help"]},
)
def config_command() -> None:
    """Group for configuration-related subcommands (no action of its own)."""


config_command.add_command(config_dump_command, name="dump")
