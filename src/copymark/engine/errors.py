# topmark:header:start
#
#   project      : CopyMark
#   file         : errors.py
#   file_relpath : src/copymark/engine/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the header compliance engine."""

from __future__ import annotations


class ConfigError(ValueError):
    """Invalid header configuration (missing template, bad ``newlines``, ...).

    Raised while validating configuration, before any document is evaluated.
    """
