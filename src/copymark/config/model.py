# topmark:header:start
#
#   project      : CopyMark
#   file         : model.py
#   file_relpath : src/copymark/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable, validated runtime snapshot.
    - `MutableConfig`: a mutable builder used during discovery/merge; it can be
      frozen into `Config` (validating it) and thawed back for edits.

Merge order (lowest → highest precedence):
    1) Built-in defaults
    2) Project configs discovered upward **root → current**; within a directory
       `pyproject.toml` is merged first, then `copymark.toml`
    3) Extra config files passed explicitly via ``--config`` (in the order provided)
    4) CLI overrides (`MutableConfig.apply_cli_args`)

Validation:
    Raw values are kept as found while merging. `MutableConfig.freeze` validates
    them through `copymark.engine.HeaderConfig.from_options` and raises
    `copymark.engine.ConfigError` before any file is processed.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from copymark.config.io import (
    get_string_list_or_none,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
)
from copymark.config.keys import Toml
from copymark.config.logging import get_logger
from copymark.constants import COPYMARK_TOML_NAME, PYPROJECT_TOML_NAME, PYPROJECT_TOOL_SECTION
from copymark.diagnostic.model import ConfigDiagnostic, DiagnosticLog
from copymark.engine.model import HeaderConfig

if TYPE_CHECKING:
    from collections.abc import Iterable

    from copymark.config.io import TomlTable
    from copymark.config.logging import CopymarkLogger

# ArgsLike: generic mapping accepted by config loaders (works for CLI namespaces and API dicts).
ArgsLike = Mapping[str, Any]

logger: CopymarkLogger = get_logger(__name__)

CLI_OVERRIDE_STR = "<CLI overrides>"


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable, validated runtime configuration for CopyMark.

    Attributes:
        timestamp (str): ISO-formatted timestamp when the draft was created.
        config_files (tuple[Path | str, ...]): Config sources that contributed, in merge order.
        template (str): Notice template containing ``YYYY``.
        newlines (int): Line breaks after the notice line (>= 1).
        extensions (frozenset[str] | None): Normalized extension allow-list, if any.
        files (tuple[str, ...]): Positional paths to check.
        include_patterns (tuple[str, ...]): Gitignore-style patterns to include.
        exclude_patterns (tuple[str, ...]): Gitignore-style patterns to exclude.
        diagnostics (tuple[ConfigDiagnostic, ...]): Non-fatal problems found while loading.
    """

    timestamp: str
    config_files: tuple[Path | str, ...]

    template: str
    newlines: int
    extensions: frozenset[str] | None

    files: tuple[str, ...]
    include_patterns: tuple[str, ...]
    exclude_patterns: tuple[str, ...]

    diagnostics: tuple[ConfigDiagnostic, ...]

    def header_config(self) -> HeaderConfig:
        """Return the engine settings carried by this config."""
        return HeaderConfig(
            template=self.template,
            newlines=self.newlines,
            extensions=self.extensions,
        )

    def to_toml_dict(self) -> TomlTable:
        """Convert this config into a TOML-serializable dict."""
        header: TomlTable = {
            Toml.KEY_TEMPLATE: self.template,
            Toml.KEY_NEWLINES: self.newlines,
        }
        if self.extensions:
            header[Toml.KEY_EXTENSIONS] = sorted(self.extensions)
        return {
            Toml.SECTION_HEADER: header,
            Toml.SECTION_FILES: {
                Toml.KEY_INCLUDE_PATTERNS: list(self.include_patterns),
                Toml.KEY_EXCLUDE_PATTERNS: list(self.exclude_patterns),
            },
        }

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config."""
        return MutableConfig(
            timestamp=self.timestamp,
            config_files=list(self.config_files),
            template=self.template,
            newlines=self.newlines,
            extensions=sorted(self.extensions) if self.extensions else None,
            files=list(self.files),
            include_patterns=list(self.include_patterns),
            exclude_patterns=list(self.exclude_patterns),
            diagnostics=DiagnosticLog.from_iterable(self.diagnostics),
        )


# -------------------------- Mutable builder --------------------------
@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    ``template`` and ``newlines`` hold raw values as found in the sources;
    they are validated by `freeze`.
    """

    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    config_files: list[Path | str] = field(default_factory=lambda: [])

    # Header settings (raw; validated on freeze)
    template: Any = None
    newlines: Any = None
    extensions: list[str] | None = None

    # File selection
    files: list[str] = field(default_factory=lambda: [])
    include_patterns: list[str] = field(default_factory=lambda: [])
    exclude_patterns: list[str] = field(default_factory=lambda: [])

    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> Config:
        """Validate this draft and freeze it into an immutable `Config`.

        Raises:
            ConfigError: If the header settings are invalid.
        """
        header: HeaderConfig = HeaderConfig.from_options(
            template=self.template,
            newlines=self.newlines,
            extensions=self.extensions,
        )
        return Config(
            timestamp=self.timestamp,
            config_files=tuple(self.config_files),
            template=header.template,
            newlines=header.newlines,
            extensions=header.extensions,
            files=tuple(self.files),
            include_patterns=tuple(self.include_patterns),
            exclude_patterns=tuple(self.exclude_patterns),
            diagnostics=tuple(self.diagnostics),
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a draft populated with CopyMark's runtime defaults."""
        return cls.from_toml_dict(load_defaults_dict(), config_file=None)

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        For ``pyproject.toml`` the ``[tool.copymark]`` table is used.

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableConfig | None: The draft, or ``None`` when a ``pyproject.toml``
            has no ``[tool.copymark]`` table.

        Raises:
            ConfigError: If the file cannot be read or parsed.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)

        toml_data: TomlTable = load_toml_dict(path)

        if path.name == PYPROJECT_TOML_NAME:
            tool_section: TomlTable = get_table_value(
                get_table_value(toml_data, "tool"), PYPROJECT_TOOL_SECTION
            )
            if not tool_section:
                logger.debug("No [tool.%s] section in %s", PYPROJECT_TOOL_SECTION, path)
                return None
            toml_data = tool_section

        draft: MutableConfig = cls.from_toml_dict(toml_data, config_file=path)
        logger.debug("Generated MutableConfig: %s", draft)
        return draft

    @classmethod
    def from_toml_dict(
        cls,
        data: TomlTable,
        config_file: Path | None = None,
    ) -> MutableConfig:
        """Create a draft config from a parsed TOML dict.

        Unknown sections and keys are reported as warnings on the draft's
        diagnostics; they never abort loading.

        Args:
            data (TomlTable): The parsed TOML data.
            config_file (Path | None): Source file, recorded in ``config_files``.

        Returns:
            MutableConfig: The resulting draft.
        """
        draft: MutableConfig = cls()
        source: str = str(config_file) if config_file else "defaults"
        if config_file is not None:
            draft.config_files = [config_file]

        for section, value in data.items():
            if section == Toml.KEY_ROOT:
                if value is True:
                    draft.diagnostics.add_info(f"{source}: root = true, discovery stops here")
                continue
            known: frozenset[str] | None = Toml.KNOWN_KEYS.get(section)
            if known is None:
                draft.diagnostics.add_warning(f"{source}: unknown section [{section}] ignored")
                continue
            if not isinstance(value, dict):
                draft.diagnostics.add_error(f"{source}: [{section}] must be a table")
                continue
            for key in value:
                if key not in known:
                    draft.diagnostics.add_warning(
                        f"{source}: unknown key '{key}' in [{section}] ignored"
                    )

        header_tbl: TomlTable = get_table_value(data, Toml.SECTION_HEADER)
        logger.trace("TOML [header]: %s", header_tbl)
        files_tbl: TomlTable = get_table_value(data, Toml.SECTION_FILES)
        logger.trace("TOML [files]: %s", files_tbl)

        # Raw values; freeze() validates them
        if Toml.KEY_TEMPLATE in header_tbl:
            draft.template = header_tbl[Toml.KEY_TEMPLATE]
        if Toml.KEY_NEWLINES in header_tbl:
            draft.newlines = header_tbl[Toml.KEY_NEWLINES]

        if Toml.KEY_EXTENSIONS in header_tbl:
            extensions: list[str] | None = get_string_list_or_none(
                header_tbl, Toml.KEY_EXTENSIONS
            )
            if extensions is None:
                draft.diagnostics.add_error(
                    f"{source}: '{Toml.KEY_EXTENSIONS}' must be a list of strings; ignored"
                )
            else:
                draft.extensions = extensions

        for key, target in (
            (Toml.KEY_INCLUDE_PATTERNS, draft.include_patterns),
            (Toml.KEY_EXCLUDE_PATTERNS, draft.exclude_patterns),
        ):
            if key not in files_tbl:
                continue
            patterns: list[str] | None = get_string_list_or_none(files_tbl, key)
            if patterns is None:
                draft.diagnostics.add_error(f"{source}: '{key}' must be a list of strings")
                continue
            target.extend(patterns)

        return draft

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files discovered by walking upward from ``start``.

        Files are returned **root-most → nearest**; within one directory
        `pyproject.toml` comes before `copymark.toml` so that the latter wins
        when merged. A config setting ``root = true`` stops the upward walk after
        its directory.

        Args:
            start (Path): The Path instance where discovery starts.

        Returns:
            list[Path]: Discovered config file paths ordered for stable merging.
        """
        per_dir: list[list[Path]] = []
        cur: Path = start.resolve()
        if cur.is_file():
            cur = cur.parent

        while True:
            root_stop_here = False
            dir_entries: list[Path] = []
            for name in (PYPROJECT_TOML_NAME, COPYMARK_TOML_NAME):
                p: Path = cur / name
                if not p.is_file():
                    continue
                try:
                    data: TomlTable = load_toml_dict(p)
                except ValueError as e:
                    # Best-effort discovery; the merge step reports broken files.
                    logger.debug("Ignoring parse error in %s: %s", p, e)
                    dir_entries.append(p)
                    continue
                if name == PYPROJECT_TOML_NAME:
                    data = get_table_value(get_table_value(data, "tool"), PYPROJECT_TOOL_SECTION)
                    if not data:
                        continue
                dir_entries.append(p)
                logger.debug("Discovered config file: %s", p)
                if bool(data.get(Toml.KEY_ROOT, False)):
                    root_stop_here = True

            if dir_entries:
                per_dir.append(dir_entries)

            parent: Path = cur.parent
            if parent == cur:
                break
            if root_stop_here:
                logger.debug("Stopping upward config discovery at %s due to root=true", cur)
                break
            cur = parent

        ordered: list[Path] = []
        for dir_list in reversed(per_dir):
            ordered.extend(dir_list)
        return ordered

    @classmethod
    def load_merged(
        cls,
        *,
        input_paths: Iterable[Path] | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Discover and merge configuration layers into a draft `MutableConfig`.

        Args:
            input_paths (Iterable[Path] | None): Discovery anchor(s). The first path
                (or CWD if none) is the starting directory for upward discovery.
            extra_config_files (Iterable[Path] | None): Explicit config files merged
                **after** discovery, in their given order.
            no_config (bool): If True, skip project discovery.

        Returns:
            MutableConfig: A draft ready to be frozen or further edited.

        Raises:
            ConfigError: If a config file cannot be read or parsed.
        """
        draft: MutableConfig = cls.from_defaults()

        paths: list[Path] = list(input_paths or [])
        anchor: Path = paths[0] if paths else Path.cwd()

        if not no_config:
            for cfg_path in cls.discover_local_config_files(anchor):
                mc: MutableConfig | None = cls.from_toml_file(cfg_path)
                if mc is not None:
                    draft = draft.merge_with(mc)

        for extra in extra_config_files or ():
            mc = cls.from_toml_file(Path(extra))
            if mc is not None:
                draft = draft.merge_with(mc)

        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft.

        Args:
            other (MutableConfig): The config whose values override those of this draft.

        Returns:
            MutableConfig: A new mutable configuration representing the merged result.
        """
        diagnostics = DiagnosticLog.from_iterable(self.diagnostics)
        diagnostics.extend(other.diagnostics)
        return MutableConfig(
            timestamp=self.timestamp,
            config_files=self.config_files + other.config_files,
            template=other.template if other.template is not None else self.template,
            newlines=other.newlines if other.newlines is not None else self.newlines,
            extensions=other.extensions if other.extensions is not None else self.extensions,
            files=other.files or self.files,
            include_patterns=other.include_patterns or self.include_patterns,
            exclude_patterns=other.exclude_patterns or self.exclude_patterns,
            diagnostics=diagnostics,
        )

    def apply_cli_args(self, args: ArgsLike) -> MutableConfig:
        """Update fields from an arguments mapping (CLI or API).

        Only keys present with a non-``None`` (and, for lists, non-empty) value
        override the draft. Discovery flags (``--no-config``, ``--config``) are
        handled by `load_merged`, not here.

        Args:
            args (ArgsLike): Parsed arguments mapping.

        Returns:
            MutableConfig: This draft, updated in place.
        """
        logger.debug("Applying CLI arguments to MutableConfig: %s", args)
        self.config_files.append(CLI_OVERRIDE_STR)

        if args.get("template") is not None:
            self.template = args["template"]
        if args.get("newlines") is not None:
            self.newlines = args["newlines"]
        if args.get("extensions"):
            self.extensions = list(args["extensions"])
        if args.get("files"):
            self.files = [str(f) for f in args["files"]]
        if args.get("include_patterns"):
            self.include_patterns = list(args["include_patterns"])
        if args.get("exclude_patterns"):
            self.exclude_patterns = list(args["exclude_patterns"])
        return self
