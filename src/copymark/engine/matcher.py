# topmark:header:start
#
#   project      : CopyMark
#   file         : matcher.py
#   file_relpath : src/copymark/engine/matcher.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Header matcher: regex families built from a notice template.

The template's literal characters are escaped and every ``YYYY`` becomes a
four-digit year pattern. Three families are compiled:

* **loose, case-insensitive**: surrounding whitespace and padding inside the
  comment tolerated, either comment dialect. Used to find candidate notice lines
  anywhere in a document.
* **loose, case-sensitive**: same shape, exact letter casing. Used to tell a
  casing defect apart from a missing notice.
* **strict**: exact punctuation for one dialect (``"// "`` prefix with no
  trailing whitespace, or ``"/* "`` ... ``" */"``), case-sensitive.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

from copymark.config.logging import get_logger
from copymark.constants import YEAR_PLACEHOLDER
from copymark.engine.document import CommentDialect

if TYPE_CHECKING:
    from copymark.config.logging import CopymarkLogger
    from copymark.engine.document import Document

logger: CopymarkLogger = get_logger(__name__)

YEAR_PATTERN: str = r"\d{4}"


def template_to_pattern(template: str) -> str:
    """Return a regex source matching ``template`` with any four-digit year."""
    return re.escape(template).replace(YEAR_PLACEHOLDER, YEAR_PATTERN)


@dataclass(frozen=True, slots=True)
class HeaderPatterns:
    """Compiled regex families for one template."""

    loose_line: re.Pattern[str]
    loose_block: re.Pattern[str]
    loose_line_cs: re.Pattern[str]
    loose_block_cs: re.Pattern[str]
    strict_line: re.Pattern[str]
    strict_block: re.Pattern[str]


@lru_cache(maxsize=32)
def compile_patterns(template: str) -> HeaderPatterns:
    """Compile (and cache) the regex families for ``template``."""
    body: str = template_to_pattern(template)
    line_src: str = rf"\s*//\s*{body}\s*"
    block_src: str = rf"\s*/\*\s*{body}\s*\*/\s*"
    logger.trace("Compiled header patterns for template %r: %s", template, body)
    return HeaderPatterns(
        loose_line=re.compile(line_src, re.IGNORECASE),
        loose_block=re.compile(block_src, re.IGNORECASE),
        loose_line_cs=re.compile(line_src),
        loose_block_cs=re.compile(block_src),
        strict_line=re.compile(rf"// {body}"),
        strict_block=re.compile(rf"/\* {body} \*/"),
    )


@dataclass(frozen=True, slots=True)
class HeaderMatch:
    """A located candidate notice line.

    Attributes:
        index (int): 0-based line index.
        loose (bool): Matches the loose case-insensitive pattern.
        exact_case (bool): Matches the loose pattern with exact letter casing.
        strict (bool): Matches the strict pattern of the document's dialect.
    """

    index: int
    loose: bool
    exact_case: bool
    strict: bool


class HeaderMatcher:
    """Predicates over single lines for one template and comment dialect."""

    def __init__(self, template: str, dialect: CommentDialect) -> None:
        self.template = template
        self.dialect = dialect
        self.patterns: HeaderPatterns = compile_patterns(template)

    def is_loose(self, line: str) -> bool:
        """Return True if ``line`` looks like the notice, ignoring case and padding."""
        p = self.patterns
        return bool(p.loose_line.fullmatch(line) or p.loose_block.fullmatch(line))

    def is_exact_case(self, line: str) -> bool:
        """Return True if ``line`` loosely matches with the template's exact casing."""
        p = self.patterns
        return bool(p.loose_line_cs.fullmatch(line) or p.loose_block_cs.fullmatch(line))

    def is_strict(self, line: str) -> bool:
        """Return True if ``line`` is rendered exactly as required for the dialect."""
        p = self.patterns
        pattern = p.strict_block if self.dialect is CommentDialect.BLOCK else p.strict_line
        return pattern.fullmatch(line) is not None

    def match(self, index: int, line: str) -> HeaderMatch:
        """Evaluate all predicates for one line."""
        return HeaderMatch(
            index=index,
            loose=self.is_loose(line),
            exact_case=self.is_exact_case(line),
            strict=self.is_strict(line),
        )

    def scan(self, document: Document) -> list[HeaderMatch]:
        """Return a match record for every loosely matching line of ``document``."""
        found: list[HeaderMatch] = [
            self.match(i, line) for i, line in enumerate(document.lines) if self.is_loose(line)
        ]
        logger.debug(
            "Found %d candidate notice line(s): %s", len(found), [m.index + 1 for m in found]
        )
        return found
