# topmark:header:start
#
#   project      : CopyMark
#   file         : fixer.py
#   file_relpath : src/copymark/engine/fixer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Fix construction and application.

Fixes never re-parse the document: they are character ranges derived from the
line index captured during the scan.

* `replace_document` rewrites an empty (or whitespace-only) document.
* `replace_header_region` replaces ``[0, region_end)`` with the canonical header.
* `hoist_header` does the same and also deletes every candidate notice line
  found at or after the leading content boundary.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from copymark.config.logging import get_logger
from copymark.engine.model import Fix, TextEdit

if TYPE_CHECKING:
    from copymark.config.logging import CopymarkLogger
    from copymark.engine.document import Document
    from copymark.engine.model import Diagnostic
    from copymark.engine.scan import HeaderScan

logger: CopymarkLogger = get_logger(__name__)


def replace_document(scan: HeaderScan) -> Fix:
    """Replace the whole text with the canonical header."""
    return Fix(edits=(TextEdit(0, len(scan.document.text), scan.header_text),))


def replace_header_region(scan: HeaderScan) -> Fix:
    """Replace the leading blank/notice run with the canonical header."""
    return Fix(edits=(TextEdit(0, scan.region_end, scan.header_text),))


def hoist_header(scan: HeaderScan) -> Fix:
    """Insert the canonical header at the top and drop misplaced notice lines."""
    doc: Document = scan.document
    region_end: int = scan.region_end
    edits: list[TextEdit] = [TextEdit(0, region_end, scan.header_text)]
    for m in scan.matches:
        start: int = doc.line_start(m.index)
        if start < region_end:
            continue
        edits.append(TextEdit(start, doc.line_end(m.index), ""))
    logger.debug("Hoisting header; removing %d misplaced notice line(s)", len(edits) - 1)
    return Fix(edits=tuple(edits))


def apply_fix(document: Document, diagnostic: Diagnostic | None) -> str:
    """Return the text of ``document`` with the diagnostic's fix applied.

    Args:
        document (Document): The document the diagnostic was computed for.
        diagnostic (Diagnostic | None): Result of `evaluate` on ``document``.

    Returns:
        str: The corrected text (unchanged when there is nothing to fix).
    """
    if diagnostic is None:
        return document.text
    fix: Fix | None = diagnostic.fix
    if fix is None:
        return document.text
    return fix.apply(document.text)
