# topmark:header:start
#
#   project      : CopyMark
#   file         : io.py
#   file_relpath : src/copymark/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O helpers for the CopyMark configuration layer.

Parsing and rendering use ``tomlkit``; parsed documents are unwrapped into
plain ``dict`` structures (`TomlTable`) before the config model sees them.
Keeping these helpers here keeps `copymark.config.model` free of I/O.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeGuard, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from copymark.config.keys import Toml
from copymark.config.logging import get_logger
from copymark.constants import DEFAULT_NEWLINES, DEFAULT_TEMPLATE
from copymark.engine.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from copymark.config.logging import CopymarkLogger

logger: CopymarkLogger = get_logger(__name__)

TomlTable = dict[str, Any]


def is_toml_table(val: Any) -> TypeGuard[TomlTable]:
    """Type guard for a TOML table-like mapping."""
    return isinstance(val, dict)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table from a TOML table.

    Returns a new empty dict if the sub-table is missing or not a mapping.

    Args:
        table (TomlTable): Parent table mapping.
        key (str): Sub-table key.

    Returns:
        TomlTable: The sub-table if present and a mapping, otherwise an empty dict.
    """
    value: Any | None = table.get(key)
    return value if is_toml_table(value) else {}


def get_string_list_or_none(table: TomlTable, key: str) -> list[str] | None:
    """Extract an optional list of strings; non-string items are dropped.

    Returns ``None`` when the key is absent or the value is not a list.
    """
    value: Any | None = table.get(key)
    if not isinstance(value, list):
        return None
    return [str(v) for v in cast("list[Any]", value) if isinstance(v, str)]


def load_defaults_dict() -> TomlTable:
    """Return CopyMark's runtime defaults as a Python dict.

    This function performs no I/O; the returned dict is new on every call so
    callers can mutate it safely.
    """
    return {
        Toml.SECTION_HEADER: {
            Toml.KEY_TEMPLATE: DEFAULT_TEMPLATE,
            Toml.KEY_NEWLINES: DEFAULT_NEWLINES,
        },
        Toml.SECTION_FILES: {
            Toml.KEY_INCLUDE_PATTERNS: [],
            Toml.KEY_EXCLUDE_PATTERNS: [],
        },
    }


def parse_toml_text(text: str, *, source: str = "<string>") -> TomlTable:
    """Parse TOML text into a plain dict.

    Args:
        text (str): TOML document text.
        source (str): Label used in error messages.

    Returns:
        TomlTable: The parsed document.

    Raises:
        ConfigError: If the text is not valid TOML.
    """
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", source, e)
        raise ConfigError(f"Invalid TOML in {source}: {e}") from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``copymark.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    return parse_toml_text(text, source=str(path))


def to_toml(toml_dict: TomlTable) -> str:
    """Serialize a TOML mapping to a string.

    Args:
        toml_dict (TomlTable): TOML mapping to render.

    Returns:
        str: The rendered TOML document.
    """
    return tomlkit.dumps(toml_dict)


def nest_under_section(toml_dict: TomlTable, section_keys: str) -> TomlTable:
    """Return ``toml_dict`` nested under a dotted section path (e.g. ``tool.copymark``).

    Raises:
        ValueError: If ``section_keys`` has no non-empty component.
    """
    keys: list[str] = [k for k in section_keys.split(".") if k]
    if not keys:
        raise ValueError("section_keys must contain at least one non-empty component")
    nested: TomlTable = toml_dict
    for key in reversed(keys):
        nested = {key: nested}
    return nested
