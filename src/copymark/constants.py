# topmark:header:start
#
#   project      : CopyMark
#   file         : constants.py
#   file_relpath : src/copymark/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CopyMark Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    COPYMARK_VERSION: str = get_version("copymark")
except PackageNotFoundError:  # running from a source checkout
    COPYMARK_VERSION = "0.0.0"

# Config file names, in the order they are merged within one directory.
PYPROJECT_TOML_NAME: str = "pyproject.toml"
COPYMARK_TOML_NAME: str = "copymark.toml"

# Section holding CopyMark settings inside pyproject.toml
PYPROJECT_TOOL_SECTION: str = "copymark"

ENV_LOG_LEVEL: str = "COPYMARK_LOG_LEVEL"

YEAR_PLACEHOLDER: str = "YYYY"
DEFAULT_TEMPLATE: str = "Copyright © YYYY"
DEFAULT_NEWLINES: int = 2

# Upper bound on fix/re-evaluate cycles performed by the runner for one file.
MAX_FIX_PASSES: int = 10

# Markers wrapping TOML output in human mode (config dump with -v)
TOML_BLOCK_START: str = "# === BEGIN[TOML] ==="
TOML_BLOCK_END: str = "# === END[TOML] ==="
