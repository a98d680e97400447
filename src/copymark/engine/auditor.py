# topmark:header:start
#
#   project      : CopyMark
#   file         : auditor.py
#   file_relpath : src/copymark/engine/auditor.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Newline/format auditor for a notice that is present and correctly placed.

Three checks run in a fixed order: strict formatting, then the year, then the
number of blank separator lines. Only the first failing one is reported; once
its fix is applied, the next evaluation surfaces the next outstanding issue.
"""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING

from copymark.config.logging import get_logger
from copymark.engine.fixer import replace_header_region
from copymark.engine.model import Diagnostic, DiagnosticKind, Location

if TYPE_CHECKING:
    from copymark.config.logging import CopymarkLogger
    from copymark.engine.scan import HeaderScan

logger: CopymarkLogger = get_logger(__name__)


def _header_diagnostic(scan: HeaderScan, kind: DiagnosticKind) -> Diagnostic:
    """Build a diagnostic spanning the notice line and its separator lines."""
    blank: int = scan.blank_lines_after_header()
    return Diagnostic(
        kind=kind,
        location=Location(line=1, column=0, end_line=max(2, 1 + blank), end_column=0),
        fixer=partial(replace_header_region, scan),
    )


def check_format(scan: HeaderScan) -> Diagnostic | None:
    """Report punctuation/spacing that differs from the strict rendering."""
    if scan.matcher.is_strict(scan.first_line):
        return None
    logger.debug("Notice line is not strictly formatted: %r", scan.first_line)
    return _header_diagnostic(scan, DiagnosticKind.INVALID_FORMAT)


def check_year(scan: HeaderScan) -> Diagnostic | None:
    """Report a notice that does not carry the current year."""
    if scan.expected_text in scan.first_line:
        return None
    logger.debug("Notice line does not contain %r", scan.expected_text)
    return _header_diagnostic(scan, DiagnosticKind.OUTDATED)


def check_newlines(scan: HeaderScan) -> Diagnostic | None:
    """Report a separator run that is not exactly ``newlines - 1`` blank lines."""
    actual: int = scan.blank_lines_after_header()
    if actual == scan.expected_blank_lines:
        return None
    logger.debug(
        "Found %d blank line(s) after notice, expected %d", actual, scan.expected_blank_lines
    )
    return _header_diagnostic(scan, DiagnosticKind.INCORRECT_NEWLINES)
