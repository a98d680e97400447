# topmark:header:start
#
#   project      : CopyMark
#   file         : __init__.py
#   file_relpath : src/copymark/engine/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Header compliance engine.

The engine is pure and synchronous: one document in, at most one diagnostic
out, with no I/O and no shared state. The current year is an explicit input.

Example:
    ```python
    from copymark.engine import Document, HeaderConfig, apply_fix, evaluate

    cfg = HeaderConfig.from_options(template="Copyright © YYYY", newlines=1)
    doc = Document.from_text('const foo = "bar";', path="file.js")
    diag = evaluate(doc, cfg, year=2026)
    fixed = apply_fix(doc, diag)  # '// Copyright © 2026\\nconst foo = "bar";'
    ```
"""

from __future__ import annotations

from copymark.engine.classifier import evaluate
from copymark.engine.document import CommentDialect, Document
from copymark.engine.errors import ConfigError
from copymark.engine.fixer import apply_fix
from copymark.engine.model import (
    Diagnostic,
    DiagnosticKind,
    Fix,
    HeaderConfig,
    Location,
    TextEdit,
    normalize_extensions,
)
from copymark.engine.stub import StubProgram, parse_stub

__all__ = [
    "CommentDialect",
    "ConfigError",
    "Diagnostic",
    "DiagnosticKind",
    "Document",
    "Fix",
    "HeaderConfig",
    "Location",
    "StubProgram",
    "TextEdit",
    "apply_fix",
    "evaluate",
    "normalize_extensions",
    "parse_stub",
]
