# topmark:header:start
#
#   project      : CopyMark
#   file         : __init__.py
#   file_relpath : src/copymark/diagnostic/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration diagnostics (info, warnings, errors) collected while loading."""

from __future__ import annotations

from copymark.diagnostic.model import ConfigDiagnostic, DiagnosticLevel, DiagnosticLog

__all__ = ["ConfigDiagnostic", "DiagnosticLevel", "DiagnosticLog"]
