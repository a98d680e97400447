# topmark:header:start
#
#   project      : CopyMark
#   file         : options.py
#   file_relpath : src/copymark/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities for CopyMark.

This module centralizes reusable options (verbosity, color, config, file
selection, header settings) and their resolution logic, so commands and groups
can stay thin.
"""

from __future__ import annotations

import logging
import os
import sys
from enum import Enum
from typing import Callable, ParamSpec, TypeVar

import click

from copymark.cli.errors import CopymarkUsageError
from copymark.config.logging import TRACE_LEVEL

P = ParamSpec("P")
R = TypeVar("R")


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity level from ``-v``/``-q`` counts.

    Args:
        verbose_count (int): Number of times ``-v`` is passed.
        quiet_count (int): Number of times ``-q`` is passed.

    Returns:
        int: A logging level: TRACE (``-vvv``), DEBUG (``-vv``), INFO (``-v``),
        ERROR (``-q``), or WARNING by default.

    Raises:
        CopymarkUsageError: If both ``-v`` and ``-q`` are used.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise CopymarkUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")

    if verbose_count >= 3:
        return TRACE_LEVEL
    if verbose_count == 2:
        return logging.DEBUG
    if verbose_count == 1:
        return logging.INFO
    if quiet_count >= 1:
        return logging.ERROR
    return logging.WARNING


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-v/--verbose`` and ``-q/--quiet`` counting options to a command."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify up to three times for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress output except errors.",
    )(f)
    return f


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    output_format: str | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Args:
        cli_mode (ColorMode | None): Explicit color mode from CLI options.
        output_format (str | None): Output format string, e.g. "json", "ndjson".
        stdout_isatty (bool | None): Whether stdout is a TTY; if None, auto-detected.

    Returns:
        bool: True if color output should be enabled.

    Behavior:
        Disables color for JSON/NDJSON output formats.
        Honors --color and --no-color CLI flags.
        Honors FORCE_COLOR and NO_COLOR environment variables.
        Defaults to enabling color if stdout is a TTY.
    """
    if output_format and output_format.lower() in {"json", "ndjson"}:
        return False
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        isatty = getattr(sys.stdout, "isatty", None)
        stdout_isatty = bool(isatty()) if callable(isatty) else False
    return bool(stdout_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color`` (auto, always, never) and ``--no-color`` options to a command."""
    f = click.option(
        "--color",
        "color_mode",
        type=click.Choice([m.value for m in ColorMode]),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--no-config`` and ``--config`` options to a command."""
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Ignore local project config files (only use defaults).",
    )(f)
    f = click.option(
        "--config",
        "config_paths",
        multiple=True,
        metavar="FILE",
        type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
        help="Additional config file(s) to load and merge.",
    )(f)
    return f


def common_header_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add header settings overrides: ``--template``, ``--newlines``, ``--extension``."""
    f = click.option(
        "--template",
        "template",
        type=str,
        default=None,
        help="Notice template; 'YYYY' is replaced with the current year.",
    )(f)
    f = click.option(
        "--newlines",
        "newlines",
        type=int,
        default=None,
        help="Line breaks required after the notice line (>= 1).",
    )(f)
    f = click.option(
        "--extension",
        "extensions",
        multiple=True,
        help="Only check files with this extension (repeatable).",
    )(f)
    return f


def common_file_filtering_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--include`` and ``--exclude`` pattern filters to a command."""
    f = click.option(
        "--include",
        "-i",
        "include_patterns",
        multiple=True,
        help="Filter: keep only files matching these glob patterns (intersection).",
    )(f)
    f = click.option(
        "--exclude",
        "-e",
        "exclude_patterns",
        multiple=True,
        help="Filter: remove files matching these glob patterns (subtraction).",
    )(f)
    return f
