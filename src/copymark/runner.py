# topmark:header:start
#
#   project      : CopyMark
#   file         : runner.py
#   file_relpath : src/copymark/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run the header engine over texts and files.

The engine reports at most one diagnostic per evaluation. This module hosts the
fix loop on top of it: evaluate, apply the fix, re-evaluate, until the document
is compliant or `MAX_FIX_PASSES` is reached. It also owns the file-level I/O:
reading and decoding (UTF-8, original line endings preserved) and the atomic
write-back used by ``--apply``.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING

from yachalk import chalk

from copymark.config.logging import get_logger
from copymark.constants import MAX_FIX_PASSES
from copymark.core.enum_mixins import EnumIntrospectionMixin
from copymark.engine.classifier import evaluate
from copymark.engine.document import Document, extension_of
from copymark.engine.fixer import apply_fix
from copymark.engine.stub import parse_stub
from copymark.rendering.colored_enum import ColoredStrEnum

if TYPE_CHECKING:
    from collections.abc import Iterable

    from copymark.config.logging import CopymarkLogger
    from copymark.engine.model import Diagnostic, DiagnosticKind, HeaderConfig, Location
    from copymark.engine.stub import Position, StubProgram

logger: CopymarkLogger = get_logger(__name__)

UTF8_BOM: str = "\ufeff"


class FileStatus(EnumIntrospectionMixin, ColoredStrEnum):
    """Outcome of processing one file."""

    COMPLIANT = ("compliant", chalk.green)
    NON_COMPLIANT = ("non-compliant", chalk.yellow)
    SKIPPED = ("skipped", chalk.gray)
    UNREADABLE = ("unreadable", chalk.red_bright)
    UNDECODABLE = ("undecodable", chalk.red_bright)


@dataclass(frozen=True)
class FileResult:
    """Result of running the engine (and its fix loop) on one text.

    Attributes:
        path (Path | None): Source file, if any.
        status (FileStatus): Overall outcome.
        diagnostic (Diagnostic | None): First diagnostic reported for the original text.
        original (str): The text as read (without a leading BOM).
        fixed (str): The text after the fix loop.
        passes (int): Number of fixes applied.
        kinds (tuple[DiagnosticKind, ...]): Diagnostic kinds seen, in pass order.
        converged (bool): Whether the fix loop reached a compliant text.
        bom (bool): Whether the file started with a UTF-8 BOM.
        error (str | None): Reason for ``SKIPPED``/``UNREADABLE``/``UNDECODABLE``.
    """

    path: Path | None
    status: FileStatus
    diagnostic: Diagnostic | None = None
    original: str = ""
    fixed: str = ""
    passes: int = 0
    kinds: tuple[DiagnosticKind, ...] = field(default_factory=tuple)
    converged: bool = True
    bom: bool = False
    error: str | None = None

    @property
    def changed(self) -> bool:
        """True when the fix loop produced different text."""
        return self.fixed != self.original

    def summary(self) -> str:
        """One-line, human-readable outcome (diagnostic message or status reason)."""
        if self.diagnostic is not None:
            return self.diagnostic.message
        if self.error:
            return self.error
        return self.status.value

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly representation of this result."""
        out: dict[str, object] = {
            "path": str(self.path) if self.path else None,
            "status": self.status.value,
            "changed": self.changed,
            "passes": self.passes,
            "converged": self.converged,
            "kinds": [k.value for k in self.kinds],
        }
        if self.diagnostic is not None:
            out["diagnostic"] = {
                "messageId": self.diagnostic.kind.value,
                "message": self.diagnostic.message,
                "location": self.diagnostic.location.to_dict(),
            }
        if self.error:
            out["error"] = self.error
        return out


def _clamp_location(location: Location, program: StubProgram) -> Location:
    """Keep ``location`` within the bounds of the parsed text."""
    start: Position = program.clamp(location.line, location.column)
    if location.end_line is None:
        return replace(location, line=start.line, column=start.column)
    end: Position = program.clamp(location.end_line, location.end_column or 0)
    return replace(
        location,
        line=start.line,
        column=start.column,
        end_line=end.line,
        end_column=end.column,
    )


def process_text(
    text: str,
    path: str | Path | None,
    header_config: HeaderConfig,
    *,
    year: int,
) -> FileResult:
    """Evaluate ``text`` and run the fix loop.

    Args:
        text (str): The document text.
        path (str | Path | None): Path used for extension gating and comment dialect.
        header_config (HeaderConfig): Validated header settings.
        year (int): The current year.

    Returns:
        FileResult: ``COMPLIANT`` or ``NON_COMPLIANT`` result; ``fixed`` holds the
        text after at most `MAX_FIX_PASSES` fixes.
    """
    document: Document = Document.from_text(text, path=path)
    program: StubProgram = parse_stub(text)

    first: Diagnostic | None = evaluate(document, header_config, year=year)
    if first is None:
        return FileResult(
            path=Path(path) if path else None,
            status=FileStatus.COMPLIANT,
            original=text,
            fixed=text,
        )
    first = replace(first, location=_clamp_location(first.location, program))

    kinds: list[DiagnosticKind] = []
    current: str = text
    diagnostic: Diagnostic | None = first
    passes: int = 0
    while diagnostic is not None and passes < MAX_FIX_PASSES:
        kinds.append(diagnostic.kind)
        updated: str = apply_fix(document, diagnostic)
        passes += 1
        logger.trace("pass %d: %s", passes, diagnostic.kind.value)
        if updated == current:
            logger.warning("Fix for %s made no progress on %s", diagnostic.kind.value, path)
            break
        current = updated
        document = Document.from_text(current, extension=document.extension)
        diagnostic = evaluate(document, header_config, year=year)

    converged: bool = diagnostic is None
    if not converged:
        logger.warning("Fix loop did not converge after %d pass(es) on %s", passes, path)

    return FileResult(
        path=Path(path) if path else None,
        status=FileStatus.NON_COMPLIANT,
        diagnostic=first,
        original=text,
        fixed=current,
        passes=passes,
        kinds=tuple(kinds),
        converged=converged,
    )


def process_file(path: Path, header_config: HeaderConfig, *, year: int) -> FileResult:
    """Read ``path`` and process its content.

    Files outside the extension allow-list and files that look binary are
    ``SKIPPED``; I/O and decoding failures are reported as ``UNREADABLE`` and
    ``UNDECODABLE`` results rather than raised.

    Args:
        path (Path): The file to check.
        header_config (HeaderConfig): Validated header settings.
        year (int): The current year.

    Returns:
        FileResult: The processing result.
    """
    if not header_config.allows(extension_of(path)):
        logger.debug("Skipping %s: extension not allowed", path)
        return FileResult(path=path, status=FileStatus.SKIPPED, error="extension not allowed")

    try:
        data: bytes = path.read_bytes()
    except OSError as e:
        logger.error("Cannot read %s: %s", path, e)
        return FileResult(path=path, status=FileStatus.UNREADABLE, error=str(e))

    if b"\x00" in data:
        logger.debug("Skipping %s: binary content", path)
        return FileResult(path=path, status=FileStatus.SKIPPED, error="binary file")

    try:
        text: str = data.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.error("Cannot decode %s as UTF-8: %s", path, e)
        return FileResult(path=path, status=FileStatus.UNDECODABLE, error=str(e))

    bom: bool = text.startswith(UTF8_BOM)
    if bom:
        text = text[len(UTF8_BOM) :]

    result: FileResult = process_text(text, path, header_config, year=year)
    return replace(result, bom=bom) if bom else result


def run(files: Iterable[Path], header_config: HeaderConfig, *, year: int) -> list[FileResult]:
    """Process each file in order and return the results."""
    results: list[FileResult] = []
    for path in files:
        results.append(process_file(path, header_config, year=year))
    logger.info("Processed %d file(s)", len(results))
    return results


def write_result(result: FileResult) -> int:
    """Atomically write ``result.fixed`` back to ``result.path``.

    Content is written to a temporary file in the same directory and moved over
    the original with `os.replace`. Line endings are written as they are in the
    fixed text and a leading BOM is restored. File permissions are preserved.

    Args:
        result (FileResult): A result with a path and changed content.

    Returns:
        int: The number of bytes written (``0`` when nothing changed).

    Raises:
        OSError: If the temporary file cannot be written or moved into place.
    """
    if result.path is None or not result.changed:
        return 0

    text: str = (UTF8_BOM + result.fixed) if result.bom else result.fixed
    payload: bytes = text.encode("utf-8")
    target: Path = result.path
    mode: int = target.stat().st_mode & 0o7777

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=target.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, target)
    except OSError:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.debug("Wrote %d bytes to %s", len(payload), target)
    return len(payload)
