# topmark:header:start
#
#   project      : CopyMark
#   file         : cli_types.py
#   file_relpath : src/copymark/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared CLI parameter types for CopyMark.

Defines the `ArgsNamespace` TypedDict passed from Click commands to the config
layer, and `EnumChoiceParam`, a Click parameter type that parses enum members.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Generic, NoReturn, TypedDict, TypeVar, cast

import click

if TYPE_CHECKING:
    from collections.abc import Iterable

    from click.shell_completion import CompletionItem

E = TypeVar("E", bound=Enum)


class ArgsNamespace(TypedDict, total=False):
    """Parsed CLI arguments forwarded to `MutableConfig.apply_cli_args`.

    Attributes:
        files (list[str]): Positional paths to process.
        template (str | None): Notice template override.
        newlines (int | None): Line-break count override.
        extensions (list[str] | None): Extension allow-list override.
        include_patterns (list[str] | None): Include patterns override.
        exclude_patterns (list[str] | None): Exclude patterns override.
    """

    files: list[str]
    template: str | None
    newlines: int | None
    extensions: list[str] | None
    include_patterns: list[str] | None
    exclude_patterns: list[str] | None


class EnumChoiceParam(click.ParamType, Generic[E]):
    """A Click parameter type that converts a string to a member of a given Enum."""

    enum_cls: type[E]
    name: str
    choices: list[str]

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls = enum_cls
        self.name = self.enum_cls.__name__.lower()
        self.choices = [cast("str", getattr(e, "value", str(e))) for e in self.enum_cls]

    def _fail_noreturn(
        self,
        message: str,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> NoReturn:
        raise click.BadParameter(message, param=param, ctx=ctx)

    def convert(
        self,
        value: str | E | None,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> E | None:
        """Converts a string to a member of the Enum."""
        if value is None or isinstance(value, self.enum_cls):
            return value

        # Case-insensitive lookup by the enum's string value
        lookup: dict[str, E] = {
            cast("str", getattr(choice, "value", str(choice))).lower(): choice
            for choice in cast("Iterable[E]", self.enum_cls)
        }
        key: str = str(value).lower()
        if key in lookup:
            return lookup[key]

        # KeyedStrEnum subclasses also accept their aliases
        parse = getattr(self.enum_cls, "parse", None)
        if callable(parse):
            parsed: E | None = cast("E | None", parse(str(value)))
            if parsed is not None:
                return parsed

        self._fail_noreturn(
            f"Invalid value '{value}'. Must be one of: {', '.join(self.choices)}",
            param,
            ctx,
        )

    def shell_complete(
        self,
        ctx: click.Context,
        param: click.Parameter,
        incomplete: str,
    ) -> list[CompletionItem]:
        """Tab completion for Click."""
        from click.shell_completion import CompletionItem

        return [CompletionItem(c) for c in self.choices if c.startswith(incomplete.lower())]
