# topmark:header:start
#
#   project      : CopyMark
#   file         : check.py
#   file_relpath : src/copymark/cli/commands/check.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Default CopyMark operation (check/apply).

Checks whether each file starts with a compliant copyright notice. Performs a
dry-run check by default and applies fixes when ``--apply`` is given.

Examples:
  Check files and print a human summary:

    $ copymark check --summary src

  Emit per-file objects in NDJSON (one per line):

    $ copymark check --format=ndjson src pkg

  Write fixes and show diffs (human output only):

    $ copymark check --apply --diff .
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

import click

from copymark.cli.cli_types import EnumChoiceParam
from copymark.cli.config_resolver import resolve_config_from_click
from copymark.cli.errors import (
    CopymarkConfigError,
    CopymarkFileNotFoundError,
    CopymarkIOError,
    CopymarkUsageError,
)
from copymark.cli.exit_codes import ExitCode
from copymark.cli.options import (
    common_config_options,
    common_file_filtering_options,
    common_header_options,
)
from copymark.cli.utils import (
    emit_diffs,
    emit_results_machine,
    get_effective_verbosity,
    render_banner,
    render_config_diagnostics,
    render_file_results,
    render_summary_counts,
)
from copymark.config.logging import get_logger
from copymark.engine.errors import ConfigError
from copymark.file_resolver import resolve_file_list
from copymark.rendering.formats import OutputFormat
from copymark.runner import FileStatus, run, write_result

if TYPE_CHECKING:
    from copymark.cli.console import ConsoleLike
    from copymark.config.logging import CopymarkLogger
    from copymark.config.model import Config, MutableConfig
    from copymark.engine.model import HeaderConfig
    from copymark.runner import FileResult

logger: CopymarkLogger = get_logger(__name__)


def _missing_literal_paths(files: tuple[str, ...]) -> list[str]:
    """Return positional paths (not globs) that do not exist."""
    return [f for f in files if "*" not in f and not Path(f).exists()]


def _error_exit_code(results: list[FileResult]) -> ExitCode | None:
    """Return the exit code for read/decode failures, if any occurred."""
    if any(r.status is FileStatus.UNREADABLE for r in results):
        return ExitCode.IO_ERROR
    if any(r.status is FileStatus.UNDECODABLE for r in results):
        return ExitCode.ENCODING_ERROR
    return None


@click.command(
    name="check",
    help="Validate copyright notices (dry-run). Use --apply to fix them.",
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog="""\
Examples:

  # Preview which files would change (dry-run)
  copymark check src

  # Apply: fix notices in-place
  copymark check --apply .
""",
)
@click.argument("paths", nargs=-1, type=str)
@common_config_options
@common_header_options
@common_file_filtering_options
@click.option(
    "--year",
    "year",
    type=click.IntRange(1000, 9999),
    default=None,
    help="Year substituted for YYYY (defaults to the current year).",
)
@click.option(
    "--apply", "apply_changes", is_flag=True, help="Write fixes to files (off by default)."
)
@click.option("--diff", is_flag=True, help="Show unified diffs (human output only).")
@click.option(
    "--summary",
    "summary_mode",
    is_flag=True,
    help="Show outcome counts instead of per-file details.",
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
def check_command(
    *,
    paths: tuple[str, ...],
    no_config: bool,
    config_paths: tuple[str, ...],
    template: str | None,
    newlines: int | None,
    extensions: tuple[str, ...],
    include_patterns: tuple[str, ...],
    exclude_patterns: tuple[str, ...],
    year: int | None,
    apply_changes: bool,
    diff: bool,
    summary_mode: bool,
    output_format: OutputFormat | None,
) -> None:
    """Check (and optionally fix) copyright notices in PATHS.

    Args:
        paths (tuple[str, ...]): Files, directories or globs; defaults to ``.``.
        no_config (bool): If True, skip project config discovery.
        config_paths (tuple[str, ...]): Additional config files to merge.
        template (str | None): Notice template override.
        newlines (int | None): Line-break count override.
        extensions (tuple[str, ...]): Extension allow-list override.
        include_patterns (tuple[str, ...]): Include patterns (intersection).
        exclude_patterns (tuple[str, ...]): Exclude patterns (subtraction).
        year (int | None): Year override; defaults to the current year.
        apply_changes (bool): Write fixes to files; otherwise perform a dry run.
        diff (bool): Show unified diffs (human output only).
        summary_mode (bool): Show outcome counts instead of per-file details.
        output_format (OutputFormat | None): ``default``, ``json`` or ``ndjson``.

    Raises:
        CopymarkUsageError: If ``--diff`` is combined with a machine format.
        CopymarkFileNotFoundError: If a positional path does not exist.
        CopymarkConfigError: If the configuration is invalid.
        CopymarkIOError: If fixed content could not be written.

    Exit Status:
        SUCCESS (0): All files compliant, or all fixes written.
        FAILURE (1): Fixes were written but some file did not become compliant.
        WOULD_CHANGE (2): Dry-run found files that ``--apply`` would change.
        ENCODING_ERROR (65): A file could not be decoded as UTF-8.
        FILE_NOT_FOUND (66): A positional path does not exist.
        IO_ERROR (74): A file could not be read or written.
        CONFIG_ERROR (78): The configuration is invalid.

        A read or decode failure (74, 65) wins over FAILURE and WOULD_CHANGE, so
        a dry run mixing a non-compliant file with an unreadable one exits 74.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if fmt.is_machine and diff:
        raise CopymarkUsageError(
            f"{ctx.command.name}: --diff is not supported with machine-readable output formats."
        )

    missing: list[str] = _missing_literal_paths(paths)
    if missing:
        raise CopymarkFileNotFoundError(f"No such file or directory: {', '.join(missing)}")

    # === Build Config and file list ===
    try:
        draft: MutableConfig = resolve_config_from_click(
            files=list(paths),
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
    logger.trace("Config after merging args: %s", config)

    header_config: HeaderConfig = config.header_config()
    effective_year: int = year or datetime.now().year
    file_list: list[Path] = resolve_file_list(config)

    vlevel: int = get_effective_verbosity(ctx)

    if not file_list:
        if not fmt.is_machine:
            console.print(console.styled("\nℹ️  No files to process.\n", fg="blue"))
        else:
            emit_results_machine(config=config, results=[], fmt=fmt, summary_mode=summary_mode)
        return

    if vlevel > 0 and not fmt.is_machine:
        render_banner(ctx, n_files=len(file_list))

    results: list[FileResult] = run(file_list, header_config, year=effective_year)

    # Machine formats first
    if fmt.is_machine:
        emit_results_machine(config=config, results=results, fmt=fmt, summary_mode=summary_mode)
    else:
        if summary_mode:
            render_summary_counts(results, total=len(file_list))
        else:
            render_file_results(results, apply_changes=apply_changes, show_compliant=vlevel > 0)
        emit_diffs(results, diff=diff)

    if apply_changes:
        written: int = 0
        failed: int = 0
        for r in results:
            if not r.changed:
                continue
            try:
                write_result(r)
            except OSError as e:
                logger.error("Failed to write %s: %s", r.path, e)
                failed += 1
                continue
            written += 1

        if not fmt.is_machine:
            msg: str = (
                f"\n✅ Applied fixes to {written} file(s)." if written else "\n✅ No fixes to apply."
            )
            console.print(console.styled(msg, fg="green", bold=True))
        if failed:
            raise CopymarkIOError(f"Failed to write {failed} file(s). See log for details.")

    # Read/decode failures take precedence over FAILURE and WOULD_CHANGE
    error_code: ExitCode | None = _error_exit_code(results)
    if error_code is not None:
        ctx.exit(error_code)

    if apply_changes:
        if any(not r.converged for r in results):
            ctx.exit(ExitCode.FAILURE)
    elif any(r.status is FileStatus.NON_COMPLIANT for r in results):
        ctx.exit(ExitCode.WOULD_CHANGE)
