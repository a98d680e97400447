# topmark:header:start
#
#   project      : CopyMark
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running CopyMark in a controlled working directory.

`run_cli_in()` changes the process working directory to the given project
directory before invoking the Click CLI, so that relative paths, globs and
config discovery are evaluated against that directory.
"""

from __future__ import annotations

import os
from typing import IO, TYPE_CHECKING, Any, Sequence

import pytest
from click.testing import CliRunner, Result

from copymark.cli.exit_codes import ExitCode
from copymark.cli.main import cli

if TYPE_CHECKING:
    from pathlib import Path

# Project-level config used by most CLI tests; root = true keeps discovery
# inside the temporary directory.
PROJECT_CONFIG: str = """\
root = true

[header]
template = "Copyright © YYYY"
newlines = 1
"""


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Return a temporary project directory holding a ``copymark.toml``."""
    root: Path = tmp_path / "proj"
    root.mkdir()
    (root / "copymark.toml").write_text(PROJECT_CONFIG, encoding="utf-8")
    return root


def run_cli_in(
    tmp_path: Path,
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI with `tmp_path` as the working directory.

    Args:
        tmp_path (Path): Directory used as the CWD for the command invocation.
        argv (str | Sequence[str] | None): CLI argument vector, e.g. `["check", "--apply", "*.js"]`.
        input_text (str | bytes | IO[Any] | None): Optional standard input.

    Returns:
        Result: The `click.testing.Result` produced by
            `click.testing.CliRunner.invoke`.

    Example:
        ```python
        res = run_cli_in(tmp_path, ["check", "--apply", "*.js"])  # relative glob in tmp_path
        assert res.exit_code == ExitCode.SUCCESS
        ```
    """
    runner = CliRunner()
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return runner.invoke(cli, argv, input=input_text)
    finally:
        os.chdir(cwd)


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI without changing the working directory.

    Use this helper when the test does **not** depend on files (e.g.
    ``--help`` or ``version``) or when all provided paths are absolute.
    """
    runner = CliRunner()
    return runner.invoke(cli, argv, input=input_text)


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_WOULD_CHANGE(result: Result) -> None:
    """Assert that the command exited with WOULD_CHANGE (code 2)."""
    # WOULD_CHANGE is a *normal* outcome; do not assert on exception.
    assert result.exit_code == ExitCode.WOULD_CHANGE, result.output


def assert_USAGE_ERROR(result: Result) -> None:
    """Assert that the command exited with USAGE_ERROR (code 64)."""
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output
