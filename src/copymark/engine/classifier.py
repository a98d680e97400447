# topmark:header:start
#
#   project      : CopyMark
#   file         : classifier.py
#   file_relpath : src/copymark/engine/classifier.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Classifier: an ordered decision list over a document's leading lines.

Rules are evaluated in this order and the first one that fires wins:

1. empty document                          -> ``missingCopyright``
2. no candidate notice anywhere            -> ``missingCopyright``
3. line 1 is not a candidate notice        -> ``incorrectPosition``
4. line 1 matches with different casing    -> ``invalidCopyrightFormat``
5. next non-blank line is another notice   -> ``duplicateCopyright``
6. line 1 is not strictly formatted        -> ``invalidCopyrightFormat``
7. line 1 does not carry the current year  -> ``outdatedCopyright``
8. wrong number of separator lines         -> ``incorrectNewlines``

The order is observable: documents with several defects need several
fix/evaluate passes, and each pass reports the earliest remaining defect.
"""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Callable

from copymark.config.logging import get_logger
from copymark.engine.auditor import check_format, check_newlines, check_year
from copymark.engine.fixer import hoist_header, replace_document, replace_header_region
from copymark.engine.model import Diagnostic, DiagnosticKind, Location
from copymark.engine.scan import HeaderScan

if TYPE_CHECKING:
    from copymark.config.logging import CopymarkLogger
    from copymark.engine.document import Document
    from copymark.engine.model import HeaderConfig

logger: CopymarkLogger = get_logger(__name__)

Rule = Callable[[HeaderScan], "Diagnostic | None"]


def check_empty(scan: HeaderScan) -> Diagnostic | None:
    """Report a document with no content at all."""
    if scan.document.text.strip():
        return None
    return Diagnostic(
        kind=DiagnosticKind.MISSING,
        location=Location(line=1, column=0),
        fixer=partial(replace_document, scan),
    )


def check_missing(scan: HeaderScan) -> Diagnostic | None:
    """Report a document where no line looks like the notice."""
    if scan.matches:
        return None
    return Diagnostic(
        kind=DiagnosticKind.MISSING,
        location=Location(line=1, column=0),
        fixer=partial(replace_header_region, scan),
    )


def check_position(scan: HeaderScan) -> Diagnostic | None:
    """Report a notice that exists but not on line 1."""
    if scan.matcher.is_loose(scan.first_line):
        return None
    first = scan.matches[0]
    return Diagnostic(
        kind=DiagnosticKind.INCORRECT_POSITION,
        location=Location(line=first.index + 1, column=0),
        fixer=partial(hoist_header, scan),
    )


def check_case(scan: HeaderScan) -> Diagnostic | None:
    """Report a notice on line 1 whose letter casing differs from the template."""
    if scan.matcher.is_exact_case(scan.first_line):
        return None
    return Diagnostic(
        kind=DiagnosticKind.INVALID_FORMAT,
        location=Location(line=1, column=0),
        fixer=partial(replace_header_region, scan),
    )


def check_duplicate(scan: HeaderScan) -> Diagnostic | None:
    """Report a second notice separated from line 1 by blank lines only."""
    index: int | None = scan.next_content_index(1)
    if index is None or not scan.matcher.is_loose(scan.document.lines[index]):
        return None
    return Diagnostic(
        kind=DiagnosticKind.DUPLICATE,
        location=Location(line=index + 1, column=0),
        fixer=partial(replace_header_region, scan),
    )


RULES: tuple[Rule, ...] = (
    check_empty,
    check_missing,
    check_position,
    check_case,
    check_duplicate,
    check_format,
    check_year,
    check_newlines,
)


def evaluate(document: Document, config: HeaderConfig, *, year: int) -> Diagnostic | None:
    """Classify ``document`` and return at most one diagnostic.

    Args:
        document (Document): The document to check.
        config (HeaderConfig): Validated header settings.
        year (int): The current year, substituted for ``YYYY``.

    Returns:
        Diagnostic | None: The highest-priority condition found, or ``None`` when
        the document is compliant or excluded by the extension allow-list.
    """
    if not config.allows(document.extension):
        logger.debug("Extension %r not in allow-list; skipping", document.extension)
        return None

    scan: HeaderScan = HeaderScan.build(document, config, year=year)
    for rule in RULES:
        diagnostic: Diagnostic | None = rule(scan)
        if diagnostic is not None:
            logger.debug(
                "%s: %s at line %d",
                rule.__name__,
                diagnostic.kind.value,
                diagnostic.location.line,
            )
            return diagnostic
    logger.trace("Document is compliant")
    return None
