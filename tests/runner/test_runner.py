# topmark:header:start
#
#   project      : CopyMark
#   file         : test_runner.py
#   file_relpath : tests/runner/test_runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Runner: fix loop over texts, file statuses, BOM handling and atomic writes."""

from __future__ import annotations

import os
import stat
from typing import TYPE_CHECKING

import pytest

from copymark.engine import DiagnosticKind, Document, evaluate
from copymark.runner import (
    UTF8_BOM,
    FileResult,
    FileStatus,
    process_file,
    process_text,
    run,
    write_result,
)
from tests.conftest import YEAR, header_config, mark_pipeline

if TYPE_CHECKING:
    from pathlib import Path


@mark_pipeline
def test_process_text_compliant() -> None:
    """A compliant text passes through unchanged."""
    text = "// Copyright © 2026\n\nexport {};\n"
    result: FileResult = process_text(text, "a.js", header_config(newlines=2), year=YEAR)
    assert result.status is FileStatus.COMPLIANT
    assert result.diagnostic is None
    assert result.fixed == text
    assert not result.changed
    assert result.passes == 0
    assert result.summary() == "compliant"


@mark_pipeline
def test_process_text_records_first_diagnostic_and_fixed_text() -> None:
    """The first diagnostic is kept; the fixed text is compliant."""
    result = process_text("// Copyright © 2020\nx();\n", "a.js", header_config(), year=YEAR)
    assert result.status is FileStatus.NON_COMPLIANT
    assert result.diagnostic is not None
    assert result.diagnostic.kind is DiagnosticKind.OUTDATED
    assert result.kinds == (DiagnosticKind.OUTDATED,)
    assert result.fixed == "// Copyright © 2026\nx();\n"
    assert result.converged
    assert result.passes == 1
    assert result.summary() == "Outdated copyright year in comment"


@mark_pipeline
def test_process_text_clamps_locations_to_the_text() -> None:
    """Reported ranges never extend past the end of the document."""
    result = process_text("// Copyright © 2020", "a.js", header_config(newlines=1), year=YEAR)
    assert result.diagnostic is not None
    location = result.diagnostic.location
    assert (location.line, location.end_line, location.end_column) == (1, 1, 19)


@mark_pipeline
def test_process_text_keeps_locations_in_mixed_line_endings() -> None:
    """Locations inside a text with mixed LF/CRLF endings are reported as evaluated."""
    text = "x\ny\r\n// Copyright © 2026\nz"
    cfg = header_config()
    expected = evaluate(Document.from_text(text, path="a.js"), cfg, year=YEAR)
    assert expected is not None
    assert expected.location.line == 3

    result = process_text(text, "a.js", cfg, year=YEAR)
    assert result.diagnostic is not None
    assert result.diagnostic.location == expected.location


@mark_pipeline
def test_process_text_cr_only_line_endings() -> None:
    """A lone CR separates lines and is reused for inserted separators."""
    compliant = "// Copyright © 2026\rx();\r"
    assert process_text(compliant, "a.js", header_config(), year=YEAR).status is (
        FileStatus.COMPLIANT
    )

    result = process_text("x();\r", "a.js", header_config(), year=YEAR)
    assert result.kinds == (DiagnosticKind.MISSING,)
    assert result.fixed == compliant


@mark_pipeline
def test_result_to_dict() -> None:
    """Results serialize with message ids, messages and locations."""
    result = process_text("x();\n", "a.js", header_config(), year=YEAR)
    data = result.to_dict()
    assert data["status"] == "non-compliant"
    assert data["changed"] is True
    assert data["kinds"] == ["missingCopyright"]
    assert data["diagnostic"] == {
        "messageId": "missingCopyright",
        "message": "Missing copyright comment",
        "location": {"line": 1, "column": 0},
    }


@mark_pipeline
def test_process_file_statuses(tmp_path: Path) -> None:
    """Files are skipped, flagged or reported according to their content."""
    cfg = header_config(extensions=["js", "css"])

    skipped = tmp_path / "notes.md"
    skipped.write_text("# notes\n", encoding="utf-8")
    assert process_file(skipped, cfg, year=YEAR).status is FileStatus.SKIPPED

    binary = tmp_path / "blob.js"
    binary.write_bytes(b"\x00\x01\x02")
    result = process_file(binary, cfg, year=YEAR)
    assert result.status is FileStatus.SKIPPED
    assert result.error == "binary file"

    latin1 = tmp_path / "latin.js"
    latin1.write_bytes("// café\n".encode("latin-1"))
    assert process_file(latin1, cfg, year=YEAR).status is FileStatus.UNDECODABLE

    missing = tmp_path / "gone.js"
    result = process_file(missing, cfg, year=YEAR)
    assert result.status is FileStatus.UNREADABLE
    assert result.error

    css = tmp_path / "style.css"
    css.write_text("/* Copyright © 2026 */\nbody {}\n", encoding="utf-8")
    assert process_file(css, cfg, year=YEAR).status is FileStatus.COMPLIANT


@mark_pipeline
def test_process_file_strips_and_restores_bom(tmp_path: Path) -> None:
    """A UTF-8 BOM is not part of the checked text and survives the write."""
    f = tmp_path / "a.ts"
    f.write_bytes((UTF8_BOM + "export {};\n").encode("utf-8"))

    result = process_file(f, header_config(), year=YEAR)
    assert result.bom
    assert result.status is FileStatus.NON_COMPLIANT
    assert result.fixed == "// Copyright © 2026\nexport {};\n"

    write_result(result)
    assert f.read_bytes() == (UTF8_BOM + "// Copyright © 2026\nexport {};\n").encode("utf-8")


@mark_pipeline
def test_write_result_preserves_crlf_and_mode(tmp_path: Path) -> None:
    """Writes keep line endings byte-for-byte and keep file permissions."""
    f = tmp_path / "a.js"
    f.write_bytes(b"x();\r\n")
    os.chmod(f, 0o640)

    result = process_file(f, header_config(), year=YEAR)
    written: int = write_result(result)

    expected = "// Copyright © 2026\r\nx();\r\n".encode("utf-8")
    assert f.read_bytes() == expected
    assert written == len(expected)
    assert stat.S_IMODE(f.stat().st_mode) == 0o640
    # no temporary files are left behind
    assert sorted(p.name for p in tmp_path.iterdir()) == ["a.js"]


@mark_pipeline
def test_write_result_is_a_noop_without_changes(tmp_path: Path) -> None:
    """Unchanged results do not touch the file."""
    f = tmp_path / "a.js"
    f.write_text("// Copyright © 2026\nx();\n", encoding="utf-8")
    before = f.stat().st_mtime_ns
    result = process_file(f, header_config(), year=YEAR)
    assert write_result(result) == 0
    assert f.stat().st_mtime_ns == before


@mark_pipeline
def test_write_result_cleans_up_on_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """A failed move leaves the original file and no temporary file."""
    f = tmp_path / "a.js"
    f.write_text("x();\n", encoding="utf-8")
    result = process_file(f, header_config(), year=YEAR)

    def boom(src: str, dst: object) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", boom)
    with pytest.raises(OSError, match="disk full"):
        write_result(result)
    assert f.read_text(encoding="utf-8") == "x();\n"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["a.js"]


@mark_pipeline
def test_run_preserves_order(tmp_path: Path) -> None:
    """`run` returns one result per input file, in order."""
    paths = []
    for name in ("b.js", "a.js"):
        p = tmp_path / name
        p.write_text("x();\n", encoding="utf-8")
        paths.append(p)
    results = run(paths, header_config(), year=YEAR)
    assert [r.path for r in results] == paths
