# topmark:header:start
#
#   project      : CopyMark
#   file         : config_dump.py
#   file_relpath : src/copymark/cli/commands/config_dump.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CopyMark `config dump` command.

Emits the effective configuration as TOML after applying defaults, discovered
and explicit config files, and any CLI overrides. With ``-v`` the output is
wrapped between `TOML_BLOCK_START` and `TOML_BLOCK_END` markers.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from copymark.cli.cli_types import EnumChoiceParam
from copymark.cli.config_resolver import resolve_config_from_click
from copymark.cli.errors import CopymarkConfigError
from copymark.cli.options import (
    common_config_options,
    common_file_filtering_options,
    common_header_options,
)
from copymark.cli.utils import (
    build_meta_payload,
    get_effective_verbosity,
    render_config_diagnostics,
    render_toml_block,
)
from copymark.config.io import nest_under_section, to_toml
from copymark.config.logging import get_logger
from copymark.engine.errors import ConfigError
from copymark.rendering.formats import OutputFormat

if TYPE_CHECKING:
    from copymark.cli.console import ConsoleLike
    from copymark.config.logging import CopymarkLogger
    from copymark.config.model import Config, MutableConfig

logger: CopymarkLogger = get_logger(__name__)


@click.command(
    name="dump",
    help="Dump the final merged CopyMark configuration as TOML.",
)
@common_config_options
@common_header_options
@common_file_filtering_options
@click.option(
    "--pyproject",
    "as_pyproject",
    is_flag=True,
    help="Nest the output under [tool.copymark] for pasting into pyproject.toml.",
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
def config_dump_command(
    *,
    no_config: bool,
    config_paths: tuple[str, ...],
    template: str | None,
    newlines: int | None,
    extensions: tuple[str, ...],
    include_patterns: tuple[str, ...],
    exclude_patterns: tuple[str, ...],
    as_pyproject: bool,
    output_format: OutputFormat | None,
) -> None:
    """Dump the final merged configuration.

    Raises:
        CopymarkConfigError: If the merged configuration is invalid.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    try:
        draft: MutableConfig = resolve_config_from_click(
            files=[],
            no_config=no_config,
            config_paths=list(config_paths),
            template=template,
            newlines=newlines,
            extensions=list(extensions),
            include_patterns=list(include_patterns),
            exclude_patterns=list(exclude_patterns),
        )
        config: Config = draft.freeze()
    except ConfigError as e:
        raise CopymarkConfigError(str(e)) from e

    render_config_diagnostics(config.diagnostics)

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if fmt.is_machine:
        payload = {
            "meta": build_meta_payload(),
            "config": config.to_toml_dict(),
            "config_files": [str(p) for p in config.config_files],
        }
        console.print(json.dumps(payload, ensure_ascii=False))
        return

    toml_dict = config.to_toml_dict()
    if as_pyproject:
        toml_dict = nest_under_section(toml_dict, "tool.copymark")
    render_toml_block(
        console=console,
        title="CopyMark Configuration (TOML):",
        toml_text=to_toml(toml_dict),
        verbosity_level=get_effective_verbosity(ctx),
    )
