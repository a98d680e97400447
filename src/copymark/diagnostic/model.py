# topmark:header:start
#
#   project      : CopyMark
#   file         : model.py
#   file_relpath : src/copymark/diagnostic/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostics collected while loading and merging configuration.

These are informational messages, warnings and errors about the configuration
itself (unknown keys, wrongly typed values, ...). They are unrelated to the
header diagnostics produced by `copymark.engine`.

Sections:
    * DiagnosticLevel: severity levels with associated terminal colors.
    * ConfigDiagnostic: immutable structured payload (level + message).
    * DiagnosticLog: mutable collection with helpers for adding and summarizing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, cast

from yachalk import chalk

from copymark.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from copymark.config.logging import CopymarkLogger


logger: CopymarkLogger = get_logger(__name__)


class DiagnosticLevel(Enum):
    """Severity levels, ordered by importance: ERROR > WARNING > INFO."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this severity level."""
        return cast(
            "Callable[[str], str]",
            {
                DiagnosticLevel.INFO: chalk.blue,
                DiagnosticLevel.WARNING: chalk.yellow,
                DiagnosticLevel.ERROR: chalk.red_bright,
            }[self],
        )


@dataclass(frozen=True)
class ConfigDiagnostic:
    """Structured configuration diagnostic with a severity level and message."""

    level: DiagnosticLevel
    message: str


@dataclass
class DiagnosticLog:
    """Mutable collection of configuration diagnostics."""

    items: list[ConfigDiagnostic] = field(default_factory=lambda: [])

    @classmethod
    def from_iterable(cls, diagnostics: Iterable[ConfigDiagnostic]) -> DiagnosticLog:
        """Create a DiagnosticLog from an iterable of diagnostics."""
        return cls(items=list(diagnostics))

    def _add(self, diagnostic: ConfigDiagnostic) -> None:
        self.items.append(diagnostic)
        logger.trace("Adding [%s]: %r", diagnostic.level.value, diagnostic.message)

    def add_info(self, message: str) -> None:
        """Add an ``info`` diagnostic."""
        self._add(ConfigDiagnostic(DiagnosticLevel.INFO, message))

    def add_warning(self, message: str) -> None:
        """Add a ``warning`` diagnostic."""
        self._add(ConfigDiagnostic(DiagnosticLevel.WARNING, message))

    def add_error(self, message: str) -> None:
        """Add an ``error`` diagnostic."""
        self._add(ConfigDiagnostic(DiagnosticLevel.ERROR, message))

    def extend(self, other: Iterable[ConfigDiagnostic]) -> None:
        """Append all diagnostics from ``other``."""
        for d in other:
            self._add(d)

    def has_error(self) -> bool:
        """Return True if the log contains error diagnostics."""
        return any(d.level == DiagnosticLevel.ERROR for d in self.items)

    def __iter__(self) -> Iterator[ConfigDiagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
