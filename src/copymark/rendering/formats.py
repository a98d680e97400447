# topmark:header:start
#
#   project      : CopyMark
#   file         : formats.py
#   file_relpath : src/copymark/rendering/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Output formats for CLI rendering."""

from __future__ import annotations

from copymark.core.enum_mixins import KeyedStrEnum


class OutputFormat(KeyedStrEnum):
    """Output format for CLI rendering.

    Members:
      DEFAULT: Human-friendly text output; may include ANSI color if enabled.
      JSON: A single JSON document with per-file objects (machine-readable).
      NDJSON: One JSON object per line (newline-delimited JSON; machine-readable).

    Machine formats (``JSON`` and ``NDJSON``) never include ANSI color or diffs.
    """

    DEFAULT = ("default", "Human-readable text", ("text",))
    JSON = ("json", "Single JSON document")
    NDJSON = ("ndjson", "Newline-delimited JSON", ("jsonl",))

    @property
    def is_machine(self) -> bool:
        """True for machine-readable formats."""
        return self is not OutputFormat.DEFAULT
