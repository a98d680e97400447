# topmark:header:start
#
#   project      : CopyMark
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the CopyMark test suite.

Sets up global fixtures and TRACE-level logging for test runs.

Notes:
    Tests should respect the immutable/mutable configuration split:

    - Build configs using `copymark.config.MutableConfig` (mutable), then
      `freeze()` into a `copymark.config.Config`.
    - Do **not** mutate a frozen `Config`. If you need to tweak one,
      call `Config.thaw()`, edit the returned `MutableConfig`,
      then `freeze()` again.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from copymark.config import MutableConfig, logging
from copymark.engine import HeaderConfig

if TYPE_CHECKING:
    from copymark.config import Config

F = TypeVar("F", bound=Callable[..., object])

# A decorator that takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]

# Fixed "current year" used throughout the suite.
YEAR: int = 2026


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.cli`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_pipeline: DecoratorType[Any] = as_typed_mark(pytest.mark.pipeline)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)
mark_hypothesis_slow: DecoratorType[Any] = as_typed_mark(pytest.mark.hypothesis_slow)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_copymark_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure CopyMark's runtime log level is not forced via env during tests."""
    monkeypatch.delenv("COPYMARK_LOG_LEVEL", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:
    """Log at TRACE level for all tests."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run a test in an isolated temporary project directory.

    Keeps working-directory-dependent logic (globs, config discovery anchored
    at ``.``) away from the repository.

    Returns:
        Path: The temporary project root, also the current working directory.
    """
    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd


def header_config(
    template: str = "Copyright © YYYY",
    newlines: int = 1,
    extensions: list[str] | None = None,
) -> HeaderConfig:
    """Return a validated `HeaderConfig` for engine tests."""
    return HeaderConfig.from_options(template=template, newlines=newlines, extensions=extensions)


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and overrides."""
    return make_mutable_config(**overrides).freeze()


def make_mutable_config(**overrides: Any) -> MutableConfig:
    """Return a mutable builder from defaults with attribute overrides applied."""
    m: MutableConfig = MutableConfig.from_defaults()
    for k, v in overrides.items():
        setattr(m, k, v)
    return m
