# topmark:header:start
#
#   project      : CopyMark
#   file         : stub.py
#   file_relpath : src/copymark/engine/stub.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Minimal stub parser for arbitrary text.

`parse_stub` accepts any input and returns an empty ``Program`` node that only
carries the overall text range and the end-of-text position. It lets any file
type be fed through the same host code path; the host uses the node's bounds to
keep reported locations inside the document.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from copymark.engine.document import LINE_BREAK_RE


@dataclass(frozen=True, slots=True)
class Position:
    """1-based line, 0-based column."""

    line: int
    column: int


@dataclass(frozen=True, slots=True)
class StubProgram:
    """Degenerate syntax tree root with an empty body."""

    range: tuple[int, int]
    start: Position
    end: Position
    type: str = "Program"
    body: tuple[Any, ...] = field(default_factory=tuple)

    def clamp(self, line: int, column: int) -> Position:
        """Return ``(line, column)`` limited to the bounds of the parsed text."""
        if line < self.start.line:
            return self.start
        if line > self.end.line or (line == self.end.line and column > self.end.column):
            return self.end
        return Position(line=line, column=max(0, column))


def end_position(text: str) -> Position:
    """Return the position just past the last character of ``text``.

    Lines are counted with the same line breaks as `Document`; a trailing
    terminator ends on an empty last line.
    """
    lines: list[str] = LINE_BREAK_RE.split(text)
    return Position(line=len(lines), column=len(lines[-1]))


def parse_stub(text: str) -> StubProgram:
    """Return an empty ``Program`` spanning ``text``; never raises."""
    return StubProgram(
        range=(0, len(text)),
        start=Position(line=1, column=0),
        end=end_position(text),
    )
