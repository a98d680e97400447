# topmark:header:start
#
#   project      : CopyMark
#   file         : __init__.py
#   file_relpath : src/copymark/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CopyMark CLI package.

This package groups all Click command definitions and supporting utilities
for the CopyMark command-line interface.

Typical usage:
    The console script entry point is defined in ``pyproject.toml`` as::

        [project.scripts]
        copymark = "copymark.cli.main:cli"

All subcommands live in `copymark.cli.commands`.
"""

from __future__ import annotations

__all__: list[str] = []
# Do NOT import .main or commands at module import time
