# topmark:header:start
#
#   project      : CopyMark
#   file         : diff.py
#   file_relpath : src/copymark/utils/diff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unified diff generation and colorized rendering.

`unified_diff_text` compares original and fixed content line by line, keeping
the original line terminators so CRLF changes remain visible. `render_patch`
formats a unified diff for terminal display with ``yachalk``.
"""

from __future__ import annotations

import difflib
from typing import Sequence

from yachalk import chalk

from copymark.config.logging import get_logger

logger = get_logger(__name__)


def unified_diff_text(original: str, fixed: str, path: str = "<text>") -> str:
    """Return a unified diff between ``original`` and ``fixed``.

    Args:
        original (str): Text before the fix.
        fixed (str): Text after the fix.
        path (str): Path shown in the ``---``/``+++`` headers.

    Returns:
        str: The diff text, or an empty string when both texts are equal.
    """
    if original == fixed:
        return ""
    diff_lines: list[str] = []
    for line in difflib.unified_diff(
        original.splitlines(keepends=True),
        fixed.splitlines(keepends=True),
        fromfile=f"{path} (current)",
        tofile=f"{path} (fixed)",
        n=3,
    ):
        # Lines without a terminator (last line of a text) still need one in the patch
        diff_lines.append(line if line.endswith(("\n", "\r")) else line + "\n")
    logger.trace("Diff for %s: %d line(s)", path, len(diff_lines))
    return "".join(diff_lines)


def render_patch(patch: Sequence[str] | str, show_line_numbers: bool = False) -> str:
    """Render a colorized preview of a unified diff.

    Args:
        patch (Sequence[str] | str): A unified diff as **either** a sequence of lines
            **or** a single multiline string.
        show_line_numbers (bool): Whether to prefix output with line numbers.

    Returns:
        str: The formatted, colorized diff preview.
    """
    if isinstance(patch, str):
        lines: list[str] = patch.splitlines(keepends=True)
    else:
        lines = list(patch)

    # Color by diff marker and show line terminators explicitly.
    def process_line(line: str) -> str:
        content: str = line.replace("\r", "\\r").replace("\n", "\\n")
        if line.startswith(("---", "+++")):
            return chalk.bold.white(content)
        match line[:1]:
            case "-":
                return chalk.bold.red(content)
            case "+":
                return chalk.bold.green(content)
            case "@":
                return chalk.cyan(content)
            case _:
                return chalk.white(content)

    if show_line_numbers is True:
        return "".join(f"{i:04d}|{process_line(line)}\n" for i, line in enumerate(lines, 1))
    return "".join(f"{process_line(line)}\n" for line in lines)
