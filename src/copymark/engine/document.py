# topmark:header:start
#
#   project      : CopyMark
#   file         : document.py
#   file_relpath : src/copymark/engine/document.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Read-only document model with a precomputed line index.

A `Document` holds the full text of one file, its extension (which selects
the comment dialect) and the offsets of every line start, so that fixes can be
expressed as plain character ranges without rescanning the text.

Line splitting rules:
    * Lines are separated by ``"\\r\\n"``, ``"\\n"`` or a lone ``"\\r"``;
      terminators are not part of the line text.
    * A terminator at the very end of the text does not open an extra empty
      line: ``"a\\n"`` has one line, ``"a\\n\\n"`` has two.
    * The newline style is detected once (CRLF if the text contains any
      ``"\\r\\n"``, else LF if it contains ``"\\n"``, else CR if it contains
      ``"\\r"``, LF otherwise) and reused for every inserted separator.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from os import PathLike

LINE_BREAK_RE: re.Pattern[str] = re.compile(r"\r\n|\r|\n")

# Extensions rendered with block comments.
BLOCK_COMMENT_EXTENSIONS: frozenset[str] = frozenset({"css"})


class CommentDialect(Enum):
    """Comment syntax used to render the notice line."""

    LINE = "line"
    BLOCK = "block"

    def render(self, text: str) -> str:
        """Wrap ``text`` in this dialect's comment punctuation."""
        if self is CommentDialect.BLOCK:
            return f"/* {text} */"
        return f"// {text}"


def dialect_for_extension(extension: str) -> CommentDialect:
    """Return the comment dialect for a (dot-less) file extension."""
    if extension.lower() in BLOCK_COMMENT_EXTENSIONS:
        return CommentDialect.BLOCK
    return CommentDialect.LINE


def extension_of(path: str | PathLike[str] | None) -> str:
    """Return the lower-case extension of ``path`` without the leading dot.

    ``file.d.ts`` yields ``"ts"``; paths without a suffix yield ``""``.
    """
    if path is None:
        return ""
    return PurePath(path).suffix[1:].lower()


def detect_newline(text: str) -> str:
    """Return the newline style of ``text``: CRLF, then LF, then a lone CR; LF if none."""
    if "\r\n" in text:
        return "\r\n"
    if "\n" not in text and "\r" in text:
        return "\r"
    return "\n"


def split_lines(text: str) -> tuple[tuple[str, ...], tuple[int, ...]]:
    """Split ``text`` into lines and their start offsets.

    Args:
        text (str): The document text.

    Returns:
        tuple[tuple[str, ...], tuple[int, ...]]: Line texts (without terminators)
        and the offset of each line's first character.
    """
    lines: list[str] = []
    starts: list[int] = []
    pos: int = 0
    for m in LINE_BREAK_RE.finditer(text):
        starts.append(pos)
        lines.append(text[pos : m.start()])
        pos = m.end()
    if pos < len(text):
        starts.append(pos)
        lines.append(text[pos:])
    return tuple(lines), tuple(starts)


def is_blank(line: str) -> bool:
    """Return True if ``line`` contains only whitespace."""
    return line.strip() == ""


@dataclass(frozen=True, slots=True)
class Document:
    """One file's text plus its line index.

    Attributes:
        text (str): Full document text.
        extension (str): Lower-case extension without the dot (may be empty).
        lines (tuple[str, ...]): Line texts without terminators.
        line_starts (tuple[int, ...]): Offset of each line in ``text``.
        newline (str): Detected newline style.
    """

    text: str
    extension: str
    lines: tuple[str, ...]
    line_starts: tuple[int, ...]
    newline: str

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        path: str | PathLike[str] | None = None,
        extension: str | None = None,
    ) -> Document:
        """Build a document, deriving the extension from ``path`` unless given.

        Args:
            text (str): Full document text.
            path (str | PathLike[str] | None): File path used to derive the extension.
            extension (str | None): Explicit extension (with or without dot); wins over ``path``.

        Returns:
            Document: The indexed document.
        """
        ext: str = extension_of(path) if extension is None else extension.lower().lstrip(".")
        lines, starts = split_lines(text)
        return cls(
            text=text,
            extension=ext,
            lines=lines,
            line_starts=starts,
            newline=detect_newline(text),
        )

    @property
    def dialect(self) -> CommentDialect:
        """Comment dialect selected by the document's extension."""
        return dialect_for_extension(self.extension)

    def line_start(self, index: int) -> int:
        """Return the offset of line ``index`` (text length past the last line)."""
        if index < len(self.line_starts):
            return self.line_starts[index]
        return len(self.text)

    def line_end(self, index: int) -> int:
        """Return the offset just past line ``index`` and its terminator."""
        return self.line_start(index + 1)
