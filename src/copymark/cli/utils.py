# topmark:header:start
#
#   project      : CopyMark
#   file         : utils.py
#   file_relpath : src/copymark/cli/utils.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI rendering and machine-output helpers for CopyMark.

Human output:
  - banner, per-file result lines and summary counts,
  - unified diffs,
  - configuration diagnostics.

Machine output:
  - JSON (one document) and NDJSON (one object per line) payloads for
    processing results.

All printing goes through a `ConsoleLike` obtained via `get_console_safely`.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from copymark.cli.console import ClickConsole
from copymark.config.logging import get_logger
from copymark.constants import COPYMARK_VERSION, TOML_BLOCK_END, TOML_BLOCK_START
from copymark.diagnostic.model import DiagnosticLevel
from copymark.rendering.formats import OutputFormat
from copymark.runner import FileStatus
from copymark.utils.diff import render_patch, unified_diff_text

if TYPE_CHECKING:
    from collections.abc import Iterable

    from copymark.cli.console import ConsoleLike
    from copymark.config.logging import CopymarkLogger
    from copymark.config.model import Config
    from copymark.diagnostic.model import ConfigDiagnostic
    from copymark.runner import FileResult


logger: CopymarkLogger = get_logger(__name__)


def get_console_safely() -> ConsoleLike:
    """Return the console stored on the active Click context, or a plain `ClickConsole`."""
    ctx: click.Context | None = click.get_current_context(silent=True)
    if ctx is not None and isinstance(ctx.obj, dict) and "console" in ctx.obj:
        console: ConsoleLike = ctx.obj["console"]
        return console
    return ClickConsole(enable_color=False)


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return program-output verbosity: ``>0`` verbose, ``0`` normal, ``<0`` quiet."""
    obj: dict[str, Any] = ctx.obj or {}
    return int(obj.get("verbosity", 0))


def render_banner(ctx: click.Context, *, n_files: int) -> None:
    """Render the initial banner for a command."""
    console: ConsoleLike = get_console_safely()
    console.print(console.styled(f"\n🔍 Processing {n_files} file(s):\n", fg="blue"))
    console.print(
        console.styled(f"📋 CopyMark {ctx.command.name} Results:", bold=True, underline=True)
    )


def render_config_diagnostics(diagnostics: Iterable[ConfigDiagnostic]) -> None:
    """Print configuration warnings and errors to stderr; info entries go to the log."""
    console: ConsoleLike = get_console_safely()
    for d in diagnostics:
        if d.level is DiagnosticLevel.INFO:
            logger.info("%s", d.message)
            continue
        line: str = f"[{d.level.value}] {d.message}"
        if d.level is DiagnosticLevel.ERROR:
            console.error(line)
        else:
            console.warn(line)


def render_file_results(
    results: list[FileResult],
    *,
    apply_changes: bool,
    show_compliant: bool,
) -> None:
    """Print one line per file, plus a hint or action line for non-compliant files."""
    console: ConsoleLike = get_console_safely()
    width: int = FileStatus.COMPLIANT.value_length if results else 0
    for r in results:
        if r.status is FileStatus.COMPLIANT and not show_compliant:
            continue
        status_text: str = f"{r.status.value:<{width}}"
        if console_color_enabled():
            status_text = r.status.color(status_text)
        line: str = f"{status_text}  {r.path}"
        if r.diagnostic is not None:
            loc: int = r.diagnostic.location.line
            line += f":{loc}  {r.diagnostic.message} ({r.diagnostic.kind.value})"
        elif r.error:
            line += f"  {r.error}"
        console.print(line)

        if r.status is FileStatus.NON_COMPLIANT:
            if apply_changes:
                msg: str = f"✏️  Fixing '{r.path}' in {r.passes} pass(es)"
            else:
                msg = f"🛠️  Run `copymark check --apply {r.path}` to fix this file."
            console.print(console.styled(f"   {msg}", fg="yellow"))
            if not r.converged:
                console.warn(f"   ⚠️  Fixes did not converge after {r.passes} pass(es)")


def console_color_enabled() -> bool:
    """Return True when the active context has color enabled."""
    ctx: click.Context | None = click.get_current_context(silent=True)
    if ctx is None or not isinstance(ctx.obj, dict):
        return False
    return bool(ctx.obj.get("color_enabled", False))


def collect_status_counts(results: Iterable[FileResult]) -> dict[FileStatus, int]:
    """Return per-status counts, in `FileStatus` declaration order, omitting zeros."""
    counts: dict[FileStatus, int] = {s: 0 for s in FileStatus}
    for r in results:
        counts[r.status] += 1
    return {s: n for s, n in counts.items() if n}


def render_summary_counts(results: list[FileResult], *, total: int) -> None:
    """Print the human summary (aligned counts by status)."""
    console: ConsoleLike = get_console_safely()
    console.print()
    console.print(console.styled("Summary by outcome:", bold=True, underline=True))

    counts: dict[FileStatus, int] = collect_status_counts(results)
    label_width: int = max((len(s.value) for s in counts), default=0) + 1
    num_width: int = len(str(total))
    colored: bool = console_color_enabled()
    for status, n in counts.items():
        text: str = f"  {status.value:<{label_width}}: {n:>{num_width}}"
        console.print(status.color(text) if colored else text)


def emit_diffs(results: list[FileResult], *, diff: bool) -> None:
    """Print unified diffs for changed files in human output mode."""
    if not diff:
        return
    console: ConsoleLike = get_console_safely()
    colored: bool = console_color_enabled()
    for r in results:
        if not r.changed:
            continue
        diff_text: str = unified_diff_text(r.original, r.fixed, str(r.path))
        console.print(render_patch(diff_text) if colored else diff_text, nl=False)


def build_meta_payload() -> dict[str, str]:
    """Return the ``meta`` block shared by machine outputs."""
    return {"tool": "copymark", "version": COPYMARK_VERSION}


def emit_results_machine(
    *,
    config: Config,
    results: list[FileResult],
    fmt: OutputFormat,
    summary_mode: bool,
) -> None:
    """Emit processing results as JSON or NDJSON.

    JSON emits one document with ``meta``, ``config`` and either ``results`` or
    ``summary``. NDJSON emits one object per line, each tagged with a ``kind``.

    Raises:
        ValueError: If ``fmt`` is not a machine format.
    """
    if not fmt.is_machine:
        raise ValueError(f"Unsupported machine output format: {fmt!r}")

    console: ConsoleLike = get_console_safely()
    meta: dict[str, str] = build_meta_payload()
    summary: dict[str, int] = {s.value: n for s, n in collect_status_counts(results).items()}

    if fmt is OutputFormat.JSON:
        payload: dict[str, Any] = {"meta": meta, "config": config.to_toml_dict()}
        if summary_mode:
            payload["summary"] = summary
        else:
            payload["results"] = [r.to_dict() for r in results]
        console.print(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    if summary_mode:
        for status, n in summary.items():
            console.print(json.dumps({"kind": "summary", "status": status, "count": n}))
        return
    for r in results:
        record: dict[str, Any] = {"kind": "result", "meta": meta, **r.to_dict()}
        console.print(json.dumps(record, ensure_ascii=False))


def render_toml_block(
    *,
    console: ConsoleLike,
    title: str,
    toml_text: str,
    verbosity_level: int,
) -> None:
    """Render a TOML snippet, with a title and BEGIN/END markers when verbose.

    Args:
        console (ConsoleLike): Console instance for printing styled output.
        title (str): Title line shown above the block when verbosity > 0.
        toml_text (str): The TOML content to render.
        verbosity_level (int): Effective verbosity; 0 disables banners.
    """
    if verbosity_level > 0:
        console.print(console.styled(title, bold=True, underline=True))
        console.print(console.styled(TOML_BLOCK_START, fg="cyan", dim=True))

    console.print(console.styled(toml_text, fg="cyan"), nl=not toml_text.endswith("\n"))

    if verbosity_level > 0:
        console.print(console.styled(TOML_BLOCK_END, fg="cyan", dim=True))
