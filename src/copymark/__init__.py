# topmark:header:start
#
#   project      : CopyMark
#   file         : __init__.py
#   file_relpath : src/copymark/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CopyMark package.

CopyMark enforces a copyright notice on the first line of source files. It
discovers files, classifies their leading lines against a configured notice
template, and repairs non-compliant files with a minimal text edit. It exposes
both a CLI and the small header compliance engine in `copymark.engine`.
"""

from __future__ import annotations
