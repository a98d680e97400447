# topmark:header:start
#
#   project      : CopyMark
#   file         : test_gating_and_newlines.py
#   file_relpath : tests/engine/test_gating_and_newlines.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Extension gating, separator-line precision and CRLF handling."""

from __future__ import annotations

from typing import TYPE_CHECKING

from copymark.engine import DiagnosticKind, Document, apply_fix, evaluate
from tests.conftest import YEAR, header_config, mark_pipeline, parametrize

if TYPE_CHECKING:
    from copymark.engine import Diagnostic, HeaderConfig


@mark_pipeline
@parametrize("path", ["main.rs", "MAIN.RS", "lib/mod.Rs"])
def test_allowed_extension_is_checked(path: str) -> None:
    """Allow-list entries are normalized (dot, case) before matching."""
    cfg: HeaderConfig = header_config(extensions=[" .RS "])
    diagnostic = evaluate(Document.from_text("fn main() {}", path=path), cfg, year=YEAR)
    assert diagnostic is not None
    assert diagnostic.kind is DiagnosticKind.MISSING


@mark_pipeline
@parametrize(
    "text",
    ["", "const a = 1;", "\n// Copyright © 1999\n", "//copyright © 2000"],
)
def test_excluded_extension_passes_through(text: str) -> None:
    """Files outside the allow-list produce no diagnostic whatever their content."""
    cfg: HeaderConfig = header_config(extensions=["rs"])
    assert evaluate(Document.from_text(text, path="index.js"), cfg, year=YEAR) is None


@mark_pipeline
def test_file_without_extension_is_excluded_by_allow_list() -> None:
    """An empty extension is never in a non-empty allow-list."""
    cfg: HeaderConfig = header_config(extensions=["js"])
    assert evaluate(Document.from_text("x", path="Makefile"), cfg, year=YEAR) is None


@mark_pipeline
def test_empty_allow_list_checks_everything() -> None:
    """An empty list behaves like no list at all."""
    cfg: HeaderConfig = header_config(extensions=[])
    assert cfg.extensions is None
    assert evaluate(Document.from_text("x", path="Makefile"), cfg, year=YEAR) is not None


@mark_pipeline
@parametrize("newlines", [1, 2, 3, 4])
@parametrize("blank_lines", [0, 1, 2, 3, 5])
def test_newline_precision(newlines: int, blank_lines: int) -> None:
    """Exactly ``newlines - 1`` blank lines must follow the notice."""
    cfg: HeaderConfig = header_config(newlines=newlines)
    text = "// Copyright © 2026\n" + "\n" * blank_lines + "code();\n"
    document = Document.from_text(text, path="a.js")
    diagnostic: Diagnostic | None = evaluate(document, cfg, year=YEAR)

    if blank_lines == newlines - 1:
        assert diagnostic is None
        return

    assert diagnostic is not None
    assert diagnostic.kind is DiagnosticKind.INCORRECT_NEWLINES
    fixed: str = apply_fix(document, diagnostic)
    assert fixed == "// Copyright © 2026\n" + "\n" * (newlines - 1) + "code();\n"


@mark_pipeline
def test_whitespace_only_lines_count_as_blank() -> None:
    """Separator lines holding only spaces or tabs are blank."""
    text = "// Copyright © 2026\n  \t\ncode();\n"
    assert evaluate(Document.from_text(text, path="a.js"), header_config(newlines=2), year=YEAR) is None


@mark_pipeline
def test_header_only_document() -> None:
    """A document holding only the notice gets its separator lines appended."""
    cfg: HeaderConfig = header_config(newlines=2)
    document = Document.from_text("// Copyright © 2026\n", path="a.js")
    diagnostic = evaluate(document, cfg, year=YEAR)
    assert diagnostic is not None
    assert diagnostic.kind is DiagnosticKind.INCORRECT_NEWLINES
    fixed: str = apply_fix(document, diagnostic)
    assert fixed == "// Copyright © 2026\n\n"
    assert evaluate(Document.from_text(fixed, path="a.js"), cfg, year=YEAR) is None


@mark_pipeline
@parametrize("text", ["// Copyright © 2026", "// Copyright © 2026\n"])
def test_header_only_document_with_single_newline(text: str) -> None:
    """With ``newlines = 1`` a notice-only document is compliant."""
    cfg: HeaderConfig = header_config(newlines=1)
    assert evaluate(Document.from_text(text, path="a.js"), cfg, year=YEAR) is None


@mark_pipeline
@parametrize(
    "text, kind, expected",
    [
        (
            "a();\r\nb();\r\n",
            DiagnosticKind.MISSING,
            "// Copyright © 2026\r\n\r\na();\r\nb();\r\n",
        ),
        (
            "// Copyright © 2023\r\n\r\na();\r\n",
            DiagnosticKind.OUTDATED,
            "// Copyright © 2026\r\n\r\na();\r\n",
        ),
        (
            "// Copyright © 2026\r\na();\r\n",
            DiagnosticKind.INCORRECT_NEWLINES,
            "// Copyright © 2026\r\n\r\na();\r\n",
        ),
        (
            "a();\r\n// Copyright © 2026\r\nb();\r\n",
            DiagnosticKind.INCORRECT_POSITION,
            "// Copyright © 2026\r\n\r\na();\r\nb();\r\n",
        ),
    ],
)
def test_crlf_documents(text: str, kind: DiagnosticKind, expected: str) -> None:
    """CRLF is detected once and reused for every inserted separator."""
    cfg: HeaderConfig = header_config(newlines=2)
    document = Document.from_text(text, path="a.ts")
    diagnostic = evaluate(document, cfg, year=YEAR)
    assert diagnostic is not None
    assert diagnostic.kind is kind
    fixed: str = apply_fix(document, diagnostic)
    assert fixed == expected
    assert "\r\n" in fixed and "\n" not in fixed.replace("\r\n", "")


@mark_pipeline
def test_year_is_an_explicit_input() -> None:
    """The same document is compliant or outdated depending on the year passed in."""
    cfg: HeaderConfig = header_config(newlines=1)
    document = Document.from_text("// Copyright © 2025\nx();\n", path="a.js")
    assert evaluate(document, cfg, year=2025) is None
    diagnostic = evaluate(document, cfg, year=2026)
    assert diagnostic is not None
    assert diagnostic.kind is DiagnosticKind.OUTDATED
