# topmark:header:start
#
#   project      : CopyMark
#   file         : file_resolver.py
#   file_relpath : src/copymark/file_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve input files for CopyMark based on config, paths, and filters.

This module expands positional arguments (files, directories and globs) and
applies include/exclude patterns. Globs are expanded relative to the current
working directory. The result is a deterministic, sorted list of files to
process. Extension gating is left to the engine, which reports gated files as
compliant.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from copymark.config.logging import get_logger

if TYPE_CHECKING:
    from copymark.config.logging import CopymarkLogger
    from copymark.config.model import Config


logger: CopymarkLogger = get_logger(__name__)

# Version-control metadata directories are never descended into
VCS_DIRS: frozenset[str] = frozenset({".git", ".hg", ".svn", ".bzr"})


def _rel_for_match(path: Path, base: Path) -> str:
    """Return a POSIX-style relative path (or absolute as fallback) for PathSpec matching."""
    try:
        rel: Path = path.resolve().relative_to(base.resolve())
    except ValueError:
        return path.as_posix()
    return rel.as_posix()


def expand_path(p: Path) -> list[Path]:
    """Expand a base path into a list of files and directories.

    Handles globs, directories (recursively), and files. Globs are expanded
    relative to the current working directory.

    Args:
        p (Path): Base path to expand.

    Returns:
        list[Path]: List of expanded paths (files and directories).
    """
    if "*" in str(p):
        if p.is_absolute():
            return list(Path(p.anchor).glob(str(p.relative_to(p.anchor))))
        return list(Path(".").glob(str(p)))
    elif p.is_dir():
        return [c for c in p.rglob("*") if VCS_DIRS.isdisjoint(c.relative_to(p).parts)]
    elif p.is_file():
        return [p]
    return []


def resolve_file_list(config: Config, *, workspace_root: Path | None = None) -> list[Path]:
    """Return the list of input files to process, applying candidate expansion and filters.

    The resolver implements these semantics:
      1. **Candidate set**: Expand positional paths (files, directories recursively,
         and globs); with no positional paths, the current directory is used.
      2. **File-only**: Only files (not directories) are kept for filtering.
      3. **Include intersection**: If include patterns are given, keep only files
         matching *any* of them.
      4. **Exclude subtraction**: Remove files matching any exclude pattern.
      5. Returns a **sorted** list of Path objects for deterministic output.

    Patterns use gitignore semantics and are matched against paths relative to
    ``workspace_root`` (the current working directory by default).

    Args:
        config (Config): Configuration values influencing path collection and filters.
        workspace_root (Path | None): Base directory for pattern matching.

    Returns:
        list[Path]: Sorted list of files selected for processing.
    """
    root: Path = workspace_root or Path.cwd()
    positional_paths: tuple[str, ...] = config.files or (".",)
    include_patterns: tuple[str, ...] = config.include_patterns
    exclude_patterns: tuple[str, ...] = config.exclude_patterns

    logger.trace(
        "positional_paths: %s include_patterns: %s exclude_patterns: %s root: %s",
        positional_paths,
        include_patterns,
        exclude_patterns,
        root,
    )

    candidate_set: set[Path] = set()
    for raw in positional_paths:
        p = Path(raw)
        expanded: list[Path] = expand_path(p)
        candidate_set.update(expanded)

        if "*" in str(p):
            if not expanded:
                logger.warning("No matches for glob pattern: %s", p)
        elif not p.exists():
            logger.warning("No such file or directory: %s", p)

    # Only keep files (drop directories) before filtering
    candidate_set = {p for p in candidate_set if p.is_file()}

    if include_patterns:
        spec_inc: PathSpec = PathSpec.from_lines(GitWildMatchPattern, list(include_patterns))
        candidate_set = {p for p in candidate_set if spec_inc.match_file(_rel_for_match(p, root))}

    if exclude_patterns:
        spec_exc: PathSpec = PathSpec.from_lines(GitWildMatchPattern, list(exclude_patterns))
        candidate_set = {
            p for p in candidate_set if not spec_exc.match_file(_rel_for_match(p, root))
        }

    logger.trace("Files to process: %d -- %s", len(candidate_set), sorted(candidate_set))
    return sorted(candidate_set)
