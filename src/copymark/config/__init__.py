# topmark:header:start
#
#   project      : CopyMark
#   file         : __init__.py
#   file_relpath : src/copymark/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for CopyMark.

Re-exports the configuration model: the frozen `Config` used at runtime and
the `MutableConfig` builder used during discovery and merging.
"""

from __future__ import annotations

from copymark.config.model import Config, MutableConfig

__all__ = ["Config", "MutableConfig"]
