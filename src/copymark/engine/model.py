# topmark:header:start
#
#   project      : CopyMark
#   file         : model.py
#   file_relpath : src/copymark/engine/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Value types shared by the header compliance engine.

Sections:
    * HeaderConfig: validated, immutable per-run header settings.
    * DiagnosticKind: the fixed taxonomy of non-compliance conditions.
    * Location: 1-based line / 0-based column source position (optionally a range).
    * TextEdit / Fix: character-range replacements applied together.
    * Diagnostic: one reported condition with its lazily computed fix.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from copymark.constants import DEFAULT_NEWLINES, YEAR_PLACEHOLDER
from copymark.core.enum_mixins import EnumIntrospectionMixin, KeyedStrEnum
from copymark.engine.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Callable


def normalize_extensions(extensions: Iterable[str]) -> frozenset[str]:
    """Normalize an extension allow-list.

    Entries are trimmed, lower-cased and stripped of one leading dot; empty
    entries are dropped.

    Args:
        extensions (Iterable[str]): Raw extension tokens (``".RS"``, ``"js"``, ...).

    Returns:
        frozenset[str]: The normalized extensions.
    """
    out: set[str] = set()
    for raw in extensions:
        ext: str = raw.strip().lower()
        if ext.startswith("."):
            ext = ext[1:]
        if ext:
            out.add(ext)
    return frozenset(out)


@dataclass(frozen=True, slots=True)
class HeaderConfig:
    """Immutable header settings for one engine invocation batch.

    Attributes:
        template (str): Notice text; ``YYYY`` marks where the year goes.
        newlines (int): Line breaks after the notice line (``newlines - 1``
            blank separator lines). Always >= 1.
        extensions (frozenset[str] | None): Optional allow-list of lower-case
            extensions without the leading dot. ``None`` (or empty) checks every file.
    """

    template: str
    newlines: int = DEFAULT_NEWLINES
    extensions: frozenset[str] | None = None

    @classmethod
    def from_options(
        cls,
        *,
        template: object,
        newlines: object = None,
        extensions: object = None,
    ) -> HeaderConfig:
        """Validate raw option values and build a `HeaderConfig`.

        Args:
            template (object): Required notice template containing ``YYYY``.
            newlines (object): Optional positive integer; ``None`` selects the default.
            extensions (object): Optional list of extension strings.

        Returns:
            HeaderConfig: The validated configuration.

        Raises:
            ConfigError: If ``template`` is missing, empty, not a string, or lacks
                the ``YYYY`` placeholder; if ``newlines`` is not a positive integer;
                or if ``extensions`` is not a list of strings.
        """
        if template is None:
            raise ConfigError("Missing required option 'template'.")
        if not isinstance(template, str) or not template.strip():
            raise ConfigError("Option 'template' must be a non-empty string.")
        if YEAR_PLACEHOLDER not in template:
            raise ConfigError(
                f"Option 'template' must contain the year placeholder '{YEAR_PLACEHOLDER}'."
            )

        if newlines is None:
            newlines = DEFAULT_NEWLINES
        # bool is an int subclass; reject it explicitly
        if isinstance(newlines, bool) or not isinstance(newlines, int):
            raise ConfigError(f"Option 'newlines' must be an integer, got {newlines!r}.")
        if newlines < 1:
            raise ConfigError(f"Option 'newlines' must be >= 1, got {newlines}.")

        allow: frozenset[str] | None = None
        if extensions is not None:
            if isinstance(extensions, str) or not isinstance(extensions, Iterable):
                raise ConfigError("Option 'extensions' must be a list of strings.")
            items: list[object] = list(extensions)
            if not all(isinstance(e, str) for e in items):
                raise ConfigError("Option 'extensions' must be a list of strings.")
            allow = normalize_extensions(str(e) for e in items) or None

        return cls(template=template, newlines=newlines, extensions=allow)

    @property
    def effective_newlines(self) -> int:
        """Return ``newlines`` clamped to a minimum of 1."""
        return max(1, self.newlines)

    def allows(self, extension: str) -> bool:
        """Return True if files with ``extension`` are subject to the check."""
        if not self.extensions:
            return True
        return bool(extension) and extension.lower() in self.extensions

    def notice_text(self, year: int) -> str:
        """Return the template with every ``YYYY`` replaced by ``year``."""
        return self.template.replace(YEAR_PLACEHOLDER, str(year))


class DiagnosticKind(EnumIntrospectionMixin, KeyedStrEnum):
    """Non-compliance conditions reported by the engine (value = stable id)."""

    MISSING = ("missingCopyright", "Missing copyright comment")
    OUTDATED = ("outdatedCopyright", "Outdated copyright year in comment")
    INCORRECT_POSITION = (
        "incorrectPosition",
        "Copyright comment must be at the very first line of the file",
    )
    INCORRECT_NEWLINES = (
        "incorrectNewlines",
        "Incorrect number of newlines after copyright comment",
    )
    DUPLICATE = ("duplicateCopyright", "Duplicate copyright comment")
    INVALID_FORMAT = (
        "invalidCopyrightFormat",
        "Copyright comment has incorrect formatting or whitespace",
    )


@dataclass(frozen=True, slots=True)
class Location:
    """Source position: 1-based ``line``, 0-based ``column``, optional range end."""

    line: int
    column: int = 0
    end_line: int | None = None
    end_column: int | None = None

    def to_dict(self) -> dict[str, int]:
        """Return a JSON-friendly mapping of the position fields that are set."""
        out: dict[str, int] = {"line": self.line, "column": self.column}
        if self.end_line is not None:
            out["end_line"] = self.end_line
            out["end_column"] = self.end_column or 0
        return out


@dataclass(frozen=True, slots=True)
class TextEdit:
    """Replace ``text[start:end]`` with ``replacement`` (pure insertion when start == end)."""

    start: int
    end: int
    replacement: str = ""


@dataclass(frozen=True, slots=True)
class Fix:
    """Non-overlapping text edits that are applied together."""

    edits: tuple[TextEdit, ...]

    def apply(self, text: str) -> str:
        """Return ``text`` with all edits applied.

        Edits are applied from the end of the text backwards so earlier offsets
        stay valid.
        """
        out: str = text
        for edit in sorted(self.edits, key=lambda e: (e.start, e.end), reverse=True):
            out = out[: edit.start] + edit.replacement + out[edit.end :]
        return out


@dataclass(frozen=True)
class Diagnostic:
    """A single non-compliance condition found in a document.

    The fix is computed on first access of `fix`, not at classification time.
    """

    kind: DiagnosticKind
    location: Location
    fixer: Callable[[], Fix] | None = field(default=None, repr=False, compare=False)

    @property
    def message(self) -> str:
        """Human-readable message for this diagnostic."""
        return self.kind.label

    @property
    def fix(self) -> Fix | None:
        """Return the edits that repair this condition (``None`` if not fixable)."""
        if self.fixer is None:
            return None
        return self.fixer()
