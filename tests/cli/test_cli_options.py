# topmark:header:start
#
#   project      : CopyMark
#   file         : test_cli_options.py
#   file_relpath : tests/cli/test_cli_options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Option helpers: verbosity, color mode, log level from the environment, formats."""

from __future__ import annotations

import logging

import pytest

from copymark.cli.errors import CopymarkUsageError
from copymark.cli.exit_codes import ExitCode
from copymark.cli.options import ColorMode, resolve_color_mode, resolve_verbosity
from copymark.config.logging import TRACE_LEVEL, resolve_env_log_level
from copymark.rendering.formats import OutputFormat
from tests.conftest import parametrize


@parametrize(
    "verbose, quiet, level",
    [
        (0, 0, logging.WARNING),
        (1, 0, logging.INFO),
        (2, 0, logging.DEBUG),
        (3, 0, TRACE_LEVEL),
        (5, 0, TRACE_LEVEL),
        (0, 1, logging.ERROR),
    ],
)
def test_resolve_verbosity(verbose: int, quiet: int, level: int) -> None:
    """Counts of -v/-q map to logging levels."""
    assert resolve_verbosity(verbose, quiet) == level


def test_resolve_verbosity_conflict() -> None:
    """-v and -q are mutually exclusive."""
    with pytest.raises(CopymarkUsageError) as exc_info:
        resolve_verbosity(1, 1)
    assert exc_info.value.exit_code == ExitCode.USAGE_ERROR


def test_resolve_color_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    """Explicit modes win; machine formats never get color; env vars apply in auto mode."""
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    assert resolve_color_mode(cli_mode=ColorMode.ALWAYS, output_format="json") is False
    assert resolve_color_mode(cli_mode=ColorMode.ALWAYS, output_format=None) is True
    assert resolve_color_mode(cli_mode=ColorMode.NEVER, output_format=None, stdout_isatty=True) is False
    assert resolve_color_mode(cli_mode=ColorMode.AUTO, output_format=None, stdout_isatty=True) is True

    monkeypatch.setenv("NO_COLOR", "1")
    assert resolve_color_mode(cli_mode=ColorMode.AUTO, output_format=None, stdout_isatty=True) is False

    monkeypatch.setenv("FORCE_COLOR", "1")
    assert resolve_color_mode(cli_mode=ColorMode.AUTO, output_format=None, stdout_isatty=False) is True


@parametrize(
    "raw, level",
    [
        ("trace", TRACE_LEVEL),
        ("DEBUG", logging.DEBUG),
        (" warn ", logging.WARNING),
        ("20", 20),
        ("bogus", None),
        ("", None),
    ],
)
def test_resolve_env_log_level(monkeypatch: pytest.MonkeyPatch, raw: str, level: int | None) -> None:
    """COPYMARK_LOG_LEVEL accepts names (any case) and numbers."""
    monkeypatch.setenv("COPYMARK_LOG_LEVEL", raw)
    assert resolve_env_log_level() == level


def test_resolve_env_log_level_unset() -> None:
    """Without the variable no level is forced."""
    assert resolve_env_log_level() is None


@parametrize(
    "token, fmt",
    [
        ("default", OutputFormat.DEFAULT),
        ("text", OutputFormat.DEFAULT),
        ("JSON", OutputFormat.JSON),
        ("jsonl", OutputFormat.NDJSON),
        ("xml", None),
    ],
)
def test_output_format_parse(token: str, fmt: OutputFormat | None) -> None:
    """Formats parse from keys and aliases."""
    assert OutputFormat.parse(token) is fmt
    if fmt is not None:
        assert fmt.is_machine is (fmt is not OutputFormat.DEFAULT)
