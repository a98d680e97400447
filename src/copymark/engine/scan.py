# topmark:header:start
#
#   project      : CopyMark
#   file         : scan.py
#   file_relpath : src/copymark/engine/scan.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-document scan state shared by the classifier, auditor and fixer.

A `HeaderScan` is computed once per evaluation. It records the expected
rendering of the notice, every candidate notice line, and the *leading content
boundary*: the first line that is neither blank nor a candidate notice. The
text before that boundary is the header region that fixes replace.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from copymark.config.logging import get_logger
from copymark.engine.document import is_blank
from copymark.engine.matcher import HeaderMatcher

if TYPE_CHECKING:
    from copymark.config.logging import CopymarkLogger
    from copymark.engine.document import Document
    from copymark.engine.matcher import HeaderMatch
    from copymark.engine.model import HeaderConfig

logger: CopymarkLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class HeaderScan:
    """Scan results for one document.

    Attributes:
        document (Document): The scanned document.
        newlines (int): Effective (clamped) newline count after the notice.
        matcher (HeaderMatcher): Line predicates for the configured template.
        expected_text (str): Template with the current year substituted.
        expected_line (str): ``expected_text`` rendered in the document's dialect.
        matches (tuple[HeaderMatch, ...]): Every loosely matching line, in order.
        leading_end (int): Index of the first line that is neither blank nor a
            candidate notice (``len(lines)`` if there is none).
    """

    document: Document
    newlines: int
    matcher: HeaderMatcher
    expected_text: str
    expected_line: str
    matches: tuple[HeaderMatch, ...]
    leading_end: int

    @classmethod
    def build(cls, document: Document, config: HeaderConfig, *, year: int) -> HeaderScan:
        """Scan ``document`` against ``config`` for the given ``year``."""
        matcher = HeaderMatcher(config.template, document.dialect)
        expected_text: str = config.notice_text(year)

        leading_end: int = 0
        lines: tuple[str, ...] = document.lines
        while leading_end < len(lines) and (
            is_blank(lines[leading_end]) or matcher.is_loose(lines[leading_end])
        ):
            leading_end += 1

        scan = cls(
            document=document,
            newlines=config.effective_newlines,
            matcher=matcher,
            expected_text=expected_text,
            expected_line=document.dialect.render(expected_text),
            matches=tuple(matcher.scan(document)),
            leading_end=leading_end,
        )
        logger.trace("Header scan: leading_end=%d, region_end=%d", leading_end, scan.region_end)
        return scan

    @property
    def first_line(self) -> str:
        """Text of line 1 (empty for an empty document)."""
        return self.document.lines[0] if self.document.lines else ""

    @property
    def region_end(self) -> int:
        """Offset where the header region ends (start of the leading content)."""
        return self.document.line_start(self.leading_end)

    @property
    def header_text(self) -> str:
        """Canonical header: the notice line followed by ``newlines`` line breaks."""
        return self.expected_line + self.document.newline * self.newlines

    @property
    def expected_blank_lines(self) -> int:
        """Number of blank separator lines required after the notice."""
        return max(0, self.newlines - 1)

    def blank_lines_after_header(self) -> int:
        """Count the blank lines immediately following line 1."""
        count: int = 0
        lines: tuple[str, ...] = self.document.lines
        while 1 + count < len(lines) and is_blank(lines[1 + count]):
            count += 1
        return count

    def next_content_index(self, start: int) -> int | None:
        """Return the index of the first non-blank line at or after ``start``."""
        lines: tuple[str, ...] = self.document.lines
        for i in range(start, len(lines)):
            if not is_blank(lines[i]):
                return i
        return None
