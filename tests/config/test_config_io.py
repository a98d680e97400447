# topmark:header:start
#
#   project      : CopyMark
#   file         : test_config_io.py
#   file_relpath : tests/config/test_config_io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML helpers: parsing, loading, rendering and nesting."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from copymark.config.io import (
    get_string_list_or_none,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
    nest_under_section,
    parse_toml_text,
    to_toml,
)
from copymark.engine import ConfigError

if TYPE_CHECKING:
    from pathlib import Path


def test_parse_toml_text_returns_plain_dicts() -> None:
    """Parsed documents are unwrapped into builtin types."""
    data = parse_toml_text('[header]\ntemplate = "Copyright YYYY"\nnewlines = 3\n')
    assert data == {"header": {"template": "Copyright YYYY", "newlines": 3}}
    assert type(data["header"]) is dict


def test_parse_toml_text_invalid_raises_config_error() -> None:
    """Malformed TOML is reported as a configuration error naming its source."""
    with pytest.raises(ConfigError, match="Invalid TOML in broken.toml"):
        parse_toml_text("[header\ntemplate = ", source="broken.toml")


def test_load_toml_dict_missing_file(tmp_path: Path) -> None:
    """A missing file is a configuration error, not an OSError."""
    with pytest.raises(ConfigError, match="Cannot read config file"):
        load_toml_dict(tmp_path / "nope.toml")


def test_load_toml_dict_reads_utf8(tmp_path: Path) -> None:
    """Non-ASCII template text survives loading."""
    p = tmp_path / "copymark.toml"
    p.write_text('[header]\ntemplate = "Copyright © YYYY"\n', encoding="utf-8")
    assert load_toml_dict(p)["header"]["template"] == "Copyright © YYYY"


def test_get_table_value_and_string_lists() -> None:
    """Missing or wrongly typed values degrade to empty tables or ``None``."""
    table = {"a": {"x": 1}, "b": 3, "c": ["x", 2, "y"], "d": "x"}
    assert get_table_value(table, "a") == {"x": 1}
    assert get_table_value(table, "b") == {}
    assert get_table_value(table, "missing") == {}
    assert get_string_list_or_none(table, "c") == ["x", "y"]
    assert get_string_list_or_none(table, "d") is None
    assert get_string_list_or_none(table, "missing") is None


def test_defaults_dict_is_fresh() -> None:
    """Each call returns a new, independently mutable dict."""
    first = load_defaults_dict()
    first["header"]["template"] = "changed"
    assert load_defaults_dict()["header"]["template"] == "Copyright © YYYY"
    assert load_defaults_dict()["header"]["newlines"] == 2


def test_to_toml_round_trips() -> None:
    """Rendered TOML parses back to the same mapping."""
    data = {"header": {"template": "Copyright © YYYY", "newlines": 1, "extensions": ["js", "ts"]}}
    assert parse_toml_text(to_toml(data)) == data


def test_nest_under_section() -> None:
    """Dotted section paths produce nested tables."""
    assert nest_under_section({"a": 1}, "tool.copymark") == {"tool": {"copymark": {"a": 1}}}
    with pytest.raises(ValueError, match="non-empty component"):
        nest_under_section({"a": 1}, "..")
