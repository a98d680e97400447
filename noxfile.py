# topmark:header:start
#
#   project      : CopyMark
#   file         : noxfile.py
#   file_relpath : noxfile.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CopyMark project automation via Nox.

Sessions:
  - `lint`: Ruff lint on the package and tests.
  - `format_check`: Verify formatting with Ruff.
  - `qa`: Per-Python session that runs pytest (fast tests) and pyright.
  - `property_test`: Long-running property tests (opt-in).
  - `package_check`: Build sdist/wheel and validate metadata (twine).

Common invocations:
  - `nox -s lint`
  - `nox -s qa` (runs for all configured Python versions)
"""

from __future__ import annotations

import re
import sys
from pathlib import Path

import nox

CURRENT_PYTHON_VERSION: str = f"{sys.version_info[0]}.{sys.version_info[1]}"

_CLASSIFIER_RE = re.compile(r'"Programming Language :: Python :: (\d+\.\d+)"')


def get_supported_pythons() -> list[str]:
    """Resolve supported Python versions from the `pyproject.toml` classifiers.

    Runs at noxfile import time, before any project dependency is installed, so
    the classifiers are scanned as text.

    Returns:
        list[str]: Supported versions like ["3.10", "3.11", ...], sorted.
    """
    text: str = Path(__file__).with_name("pyproject.toml").read_text(encoding="utf-8")
    versions: set[str] = set(_CLASSIFIER_RE.findall(text))
    if not versions:
        return [CURRENT_PYTHON_VERSION]
    return sorted(versions, key=lambda v: tuple(int(p) for p in v.split(".")))


PYTHONS: list[str] = get_supported_pythons()

# Keep defaults fast; run QA (multi-Python) explicitly or in CI.
nox.options.sessions = ["lint", "format_check"]


@nox.session(python=PYTHONS)
def qa(session: nox.Session) -> None:
    """Run the fast test suite and pyright for one Python version."""
    session.install("-e", ".[dev]")
    session.run("pytest", "-q", "tests", "-m", "not hypothesis_slow", *session.posargs)
    py_ver: str = str(session.python) if session.python else CURRENT_PYTHON_VERSION
    session.run("pyright", "--pythonversion", py_ver, "src/copymark")


@nox.session
def property_test(session: nox.Session) -> None:
    """Run the long-running property tests."""
    session.install("-e", ".[test]")
    session.run("pytest", "-vv", "tests", "-m", "hypothesis_slow", *session.posargs)


@nox.session
def lint(session: nox.Session) -> None:
    """Lint with Ruff."""
    session.install("ruff")
    session.run("ruff", "check", "src", "tests", "noxfile.py")


@nox.session
def format_check(session: nox.Session) -> None:
    """Check formatting with Ruff."""
    session.install("ruff")
    session.run("ruff", "format", "--check", "src", "tests", "noxfile.py")


@nox.session(python=CURRENT_PYTHON_VERSION)
def package_check(session: nox.Session) -> None:
    """Build sdist/wheel and validate the distribution metadata."""
    session.install("build", "twine")
    session.run("python", "-m", "build", "--sdist", "--wheel")
    session.run("twine", "check", "dist/*")
