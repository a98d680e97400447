# topmark:header:start
#
#   project      : CopyMark
#   file         : config_resolver.py
#   file_relpath : src/copymark/cli/config_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve CopyMark configuration from Click parameters.

Bridges CLI parsing and the configuration model: builds an `ArgsNamespace`,
merges defaults, discovered and explicit config files, then applies the CLI
overrides on top.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from copymark.config.logging import get_logger
from copymark.config.model import MutableConfig

if TYPE_CHECKING:
    from copymark.cli.cli_types import ArgsNamespace
    from copymark.config.logging import CopymarkLogger

logger: CopymarkLogger = get_logger(__name__)


def discovery_anchor(files: list[str]) -> Path:
    """Return the directory where upward config discovery starts.

    The first existing positional path is used (its parent if it is a file);
    otherwise the current working directory.
    """
    for f in files:
        p = Path(f)
        if p.exists():
            return (p.parent if p.is_file() else p).resolve()
    return Path.cwd().resolve()


def resolve_config_from_click(
    *,
    files: list[str],
    no_config: bool,
    config_paths: list[str],
    template: str | None = None,
    newlines: int | None = None,
    extensions: list[str] | None = None,
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
) -> MutableConfig:
    """Build a merged `MutableConfig` from Click parameters.

    Resolution order (lowest → highest precedence):
      1. Built-in defaults.
      2. Discovered project configs (root → anchor), unless ``--no-config``.
      3. Explicit config files passed via ``--config``, in order.
      4. CLI overrides.

    Args:
        files (list[str]): Positional paths; the first one anchors discovery.
        no_config (bool): If True, skip project config discovery.
        config_paths (list[str]): Extra config files to merge.
        template (str | None): ``--template`` override.
        newlines (int | None): ``--newlines`` override.
        extensions (list[str] | None): ``--extension`` overrides.
        include_patterns (list[str] | None): ``--include`` patterns.
        exclude_patterns (list[str] | None): ``--exclude`` patterns.

    Returns:
        MutableConfig: The merged draft. Call `.freeze()` to validate it.

    Raises:
        ConfigError: If a config file cannot be read or parsed.
    """
    args: ArgsNamespace = {
        "files": list(files),
        "template": template,
        "newlines": newlines,
        "extensions": list(extensions or []),
        "include_patterns": list(include_patterns or []),
        "exclude_patterns": list(exclude_patterns or []),
    }
    logger.trace("ArgsNamespace: %s", args)

    anchor: Path = discovery_anchor(list(files))
    logger.debug("Config discovery anchor: %s", anchor)

    draft: MutableConfig = MutableConfig.load_merged(
        input_paths=[anchor],
        extra_config_files=[Path(p) for p in config_paths],
        no_config=no_config,
    )
    return draft.apply_cli_args(args)
