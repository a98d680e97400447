# topmark:header:start
#
#   project      : CopyMark
#   file         : keys.py
#   file_relpath : src/copymark/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for CopyMark configuration.

These constants are the external configuration schema as it appears in
``copymark.toml`` and in ``[tool.copymark]`` inside ``pyproject.toml``.
Renaming or removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by CopyMark configuration."""

    # Top-level: stop upward discovery after this directory
    KEY_ROOT: Final[str] = "root"

    # [header]
    SECTION_HEADER: Final[str] = "header"

    KEY_TEMPLATE: Final[str] = "template"
    KEY_NEWLINES: Final[str] = "newlines"
    KEY_EXTENSIONS: Final[str] = "extensions"

    # [files]
    SECTION_FILES: Final[str] = "files"

    KEY_INCLUDE_PATTERNS: Final[str] = "include_patterns"
    KEY_EXCLUDE_PATTERNS: Final[str] = "exclude_patterns"

    KNOWN_KEYS: Final[dict[str, frozenset[str]]] = {
        SECTION_HEADER: frozenset({KEY_TEMPLATE, KEY_NEWLINES, KEY_EXTENSIONS}),
        SECTION_FILES: frozenset({KEY_INCLUDE_PATTERNS, KEY_EXCLUDE_PATTERNS}),
    }
