# topmark:header:start
#
#   project      : CopyMark
#   file         : test_cli_check.py
#   file_relpath : tests/cli/test_cli_check.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for the `check` command: exit codes, --apply, --diff and filters."""

from __future__ import annotations

from typing import TYPE_CHECKING

from copymark.cli.exit_codes import ExitCode
from tests.cli.conftest import (
    assert_SUCCESS,
    assert_USAGE_ERROR,
    assert_WOULD_CHANGE,
    run_cli_in,
)
from tests.conftest import mark_cli

if TYPE_CHECKING:
    from pathlib import Path

COMPLIANT = "// Copyright © 2026\nexport {};\n"
MISSING = "export {};\n"


def _check(*args: str) -> list[str]:
    return ["--no-color", "check", "--year", "2026", *args]


@mark_cli
def test_compliant_files_exit_success(project: Path) -> None:
    """All compliant files: exit 0 and nothing is reported."""
    (project / "a.js").write_text(COMPLIANT, encoding="utf-8")
    result = run_cli_in(project, _check("a.js"))
    assert_SUCCESS(result)
    assert "a.js" not in result.output


@mark_cli
def test_dry_run_reports_and_exits_would_change(project: Path) -> None:
    """A missing notice is reported with its message id; nothing is written."""
    f = project / "a.js"
    f.write_text(MISSING, encoding="utf-8")
    result = run_cli_in(project, _check("a.js"))
    assert_WOULD_CHANGE(result)
    assert "non-compliant" in result.output
    assert "a.js:1" in result.output
    assert "(missingCopyright)" in result.output
    assert "copymark check --apply a.js" in result.output
    assert f.read_text(encoding="utf-8") == MISSING


@mark_cli
def test_apply_writes_fixes(project: Path) -> None:
    """--apply rewrites the file; a second run is clean."""
    f = project / "a.js"
    f.write_text(MISSING, encoding="utf-8")

    result = run_cli_in(project, _check("--apply", "a.js"))
    assert_SUCCESS(result)
    assert "Applied fixes to 1 file(s)" in result.output
    assert f.read_text(encoding="utf-8") == "// Copyright © 2026\nexport {};\n"

    assert_SUCCESS(run_cli_in(project, _check("a.js")))


@mark_cli
def test_diff_shows_patch(project: Path) -> None:
    """--diff prints a unified diff of the fix."""
    (project / "a.js").write_text("// Copyright © 2020\nexport {};\n", encoding="utf-8")
    result = run_cli_in(project, _check("--diff", "a.js"))
    assert_WOULD_CHANGE(result)
    assert "--- a.js (current)" in result.output
    assert "-// Copyright © 2020" in result.output
    assert "+// Copyright © 2026" in result.output


@mark_cli
def test_directory_and_config_template(project: Path) -> None:
    """Directories are walked and the project config template applies."""
    (project / "copymark.toml").write_text(
        'root = true\n[header]\ntemplate = "(c) YYYY ACME"\nnewlines = 1\n', encoding="utf-8"
    )
    src = project / "src"
    src.mkdir()
    (src / "ok.js").write_text("// (c) 2026 ACME\nx();\n", encoding="utf-8")
    (src / "bad.css").write_text("body {}\n", encoding="utf-8")

    result = run_cli_in(project, _check("--apply", "src"))
    assert_SUCCESS(result)
    assert (src / "bad.css").read_text(encoding="utf-8") == "/* (c) 2026 ACME */\nbody {}\n"
    assert (src / "ok.js").read_text(encoding="utf-8") == "// (c) 2026 ACME\nx();\n"


@mark_cli
def test_cli_overrides_win_over_config(project: Path) -> None:
    """--template and --newlines override the project config."""
    f = project / "a.ts"
    f.write_text(MISSING, encoding="utf-8")
    result = run_cli_in(
        project,
        _check("--apply", "--template", "Copyright YYYY Raven", "--newlines", "2", "a.ts"),
    )
    assert_SUCCESS(result)
    assert f.read_text(encoding="utf-8") == "// Copyright 2026 Raven\n\nexport {};\n"


@mark_cli
def test_extension_allow_list_skips_other_files(project: Path) -> None:
    """Files outside --extension are skipped and do not fail the run."""
    (project / "a.js").write_text(MISSING, encoding="utf-8")
    (project / "b.css").write_text("/* Copyright © 2026 */\nbody {}\n", encoding="utf-8")
    result = run_cli_in(project, _check("--extension", ".CSS", "a.js", "b.css"))
    assert_SUCCESS(result)


@mark_cli
def test_exclude_filter(project: Path) -> None:
    """Excluded files are not checked."""
    (project / "a.js").write_text(COMPLIANT, encoding="utf-8")
    (project / "a.min.js").write_text(MISSING, encoding="utf-8")
    assert_WOULD_CHANGE(run_cli_in(project, _check(".")))
    result = run_cli_in(project, _check("--exclude", "*.min.js", "--exclude", "*.toml", "."))
    assert_SUCCESS(result)


@mark_cli
def test_summary_mode(project: Path) -> None:
    """--summary prints counts by outcome."""
    (project / "a.js").write_text(COMPLIANT, encoding="utf-8")
    (project / "b.js").write_text(MISSING, encoding="utf-8")
    result = run_cli_in(project, _check("--summary", "a.js", "b.js"))
    assert_WOULD_CHANGE(result)
    assert "Summary by outcome:" in result.output
    assert "compliant" in result.output
    assert "non-compliant" in result.output


@mark_cli
def test_missing_path_exits_file_not_found(project: Path) -> None:
    """A positional path that does not exist is an error."""
    result = run_cli_in(project, _check("missing.js"))
    assert result.exit_code == ExitCode.FILE_NOT_FOUND, result.output
    assert "missing.js" in result.output


@mark_cli
def test_invalid_template_exits_config_error(project: Path) -> None:
    """A template without YYYY is rejected before any file is processed."""
    f = project / "a.js"
    f.write_text(MISSING, encoding="utf-8")
    result = run_cli_in(project, _check("--apply", "--template", "Copyright", "a.js"))
    assert result.exit_code == ExitCode.CONFIG_ERROR, result.output
    assert "YYYY" in result.output
    assert f.read_text(encoding="utf-8") == MISSING


@mark_cli
def test_non_positive_newlines_exits_config_error(project: Path) -> None:
    """``--newlines 0`` is a configuration error."""
    (project / "a.js").write_text(COMPLIANT, encoding="utf-8")
    result = run_cli_in(project, _check("--newlines", "0", "a.js"))
    assert result.exit_code == ExitCode.CONFIG_ERROR, result.output


@mark_cli
def test_broken_config_file_exits_config_error(project: Path) -> None:
    """A malformed copymark.toml is a configuration error."""
    (project / "copymark.toml").write_text("root = true\n[header\n", encoding="utf-8")
    (project / "a.js").write_text(COMPLIANT, encoding="utf-8")
    result = run_cli_in(project, _check("a.js"))
    assert result.exit_code == ExitCode.CONFIG_ERROR, result.output


@mark_cli
def test_undecodable_file_exits_encoding_error(project: Path) -> None:
    """A file that is not UTF-8 is reported and sets the exit code."""
    (project / "a.js").write_bytes("// café\n".encode("latin-1"))
    result = run_cli_in(project, _check("a.js"))
    assert result.exit_code == ExitCode.ENCODING_ERROR, result.output
    assert "undecodable" in result.output


@mark_cli
def test_decode_error_wins_over_would_change(project: Path) -> None:
    """A dry run with a non-compliant and an undecodable file reports the decode error."""
    (project / "a.js").write_text(MISSING, encoding="utf-8")
    (project / "b.js").write_bytes("// café\n".encode("latin-1"))
    result = run_cli_in(project, _check("a.js", "b.js"))
    assert result.exit_code == ExitCode.ENCODING_ERROR, result.output
    assert "(missingCopyright)" in result.output
    assert "undecodable" in result.output


@mark_cli
def test_decode_error_wins_after_apply(project: Path) -> None:
    """--apply still writes the fixable file before exiting with the decode error."""
    f = project / "a.js"
    f.write_text(MISSING, encoding="utf-8")
    (project / "b.js").write_bytes("// café\n".encode("latin-1"))
    result = run_cli_in(project, _check("--apply", "a.js", "b.js"))
    assert result.exit_code == ExitCode.ENCODING_ERROR, result.output
    assert f.read_text(encoding="utf-8") == COMPLIANT


@mark_cli
def test_no_files_to_process(project: Path) -> None:
    """An empty selection is not an error."""
    (project / "empty").mkdir()
    result = run_cli_in(project, _check("empty"))
    assert_SUCCESS(result)
    assert "No files to process" in result.output


@mark_cli
def test_verbose_and_quiet_conflict(project: Path) -> None:
    """-v and -q together are a usage error."""
    assert_USAGE_ERROR(run_cli_in(project, ["-v", "-q", "check", "."]))


@mark_cli
def test_verbose_shows_compliant_files(project: Path) -> None:
    """With -v compliant files are listed too."""
    (project / "a.js").write_text(COMPLIANT, encoding="utf-8")
    result = run_cli_in(project, ["--no-color", "-v", "check", "--year", "2026", "a.js"])
    assert_SUCCESS(result)
    assert "compliant" in result.output
    assert "a.js" in result.output


@mark_cli
def test_invalid_year_is_rejected(project: Path) -> None:
    """--year must be a four-digit year."""
    result = run_cli_in(project, ["check", "--year", "99", "."])
    assert result.exit_code != ExitCode.SUCCESS
    assert "--year" in result.output
