# Slimargs CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Flag-interception wrappers that add meta flags such as `--help` and
`--version` to any parser.

A wrapper does not register anything with the parser it wraps. It runs the
inner parse and looks at how it failed: an unknown short flag equal to the
wrapper's `short_option`, or an unknown long flag equal to its `long_option`,
is turned into the wrapper's `special` sentinel. Successful parses are wrapped
in `Args`; every other error propagates unchanged.

Wrappers are parsers themselves, so they stack. The outermost wrapper sees the
error first:

    parser = ArgsWithHelp(ArgsWithVersion(binder))
    result = parser.parse(sys.argv[1:])
    if result is Requested.HELP:
        print(parser.help_text())
    elif result == Args(Requested.VERSION):
        print(parser.version)
    else:
        values = result.value.value

If the inner parser declares a field using the same identifier (for example
its own `-h`), the inner parser binds it and the wrapper never triggers.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from io import StringIO
from typing import Any, Iterable, Sequence, TextIO

from slimargs.exceptions import (
    FieldDefinitionError,
    NoSuchLongFlagError,
    NoSuchShortFlagError,
)
from slimargs.logger import logger
from slimargs.parser.help import HelpRow
from slimargs.protocols import ParserProtocol


class Requested(Enum):
    """Sentinels returned by the built-in wrappers."""

    HELP = "help"
    VERSION = "version"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Args:
    """A successful parse of the wrapped parser."""

    value: Any


class Wrapper:
    """
    Generic flag-interception wrapper.

    Attributes:
        inner (ParserProtocol): The parser being wrapped.
        short_option (str): Short identifier recognised, without the dash.
        long_option (str): Long identifier recognised, without the dashes.
        option_help (str): Help text for the wrapper's own option row.
        special (Any): Value returned when the flag is recognised.
    """

    short_option: str = ""
    long_option: str = ""
    option_help: str = ""
    special: Any = None

    def __init__(
        self,
        inner: ParserProtocol,
        short_option: str | None = None,
        long_option: str | None = None,
        option_help: str | None = None,
        special: Any = None,
    ) -> None:
        if not isinstance(inner, ParserProtocol):
            raise FieldDefinitionError(f"Cannot wrap {inner!r}: not a parser")
        self.inner = inner
        if short_option is not None:
            self.short_option = short_option
        if long_option is not None:
            self.long_option = long_option
        if option_help is not None:
            self.option_help = option_help
        if special is not None:
            self.special = special
        if len(self.short_option) != 1 or self.short_option == "-":
            raise FieldDefinitionError(
                f"Wrapper short option must be a single character, got {self.short_option!r}"
            )
        if not self.long_option or self.long_option.startswith("-"):
            raise FieldDefinitionError(
                f"Wrapper long option must be a name without dashes, got {self.long_option!r}"
            )

    @property
    def name(self) -> str:
        return self.inner.name

    @property
    def description(self) -> str:
        return self.inner.description

    @property
    def version(self) -> str:
        return self.inner.version

    @property
    def help_row(self) -> HelpRow:
        return HelpRow(f"-{self.short_option}, --{self.long_option}", self.option_help)

    def parse(self, args: Iterable[str]) -> Any:
        """
        Parse with the inner parser.

        Returns:
            `Args(value)` on success, or `special` when the wrapper's flag was
            the unknown flag that stopped the inner parse.
        """
        try:
            value = self.inner.parse(args)
        except NoSuchShortFlagError as error:
            if error.flag != self.short_option:
                raise
            logger.debug("[%s] intercepted -%s", self.name, error.flag)
            return self.special
        except NoSuchLongFlagError as error:
            if error.flag != self.long_option:
                raise
            logger.debug("[%s] intercepted --%s", self.name, error.flag)
            return self.special
        return Args(value)

    def usage(self, with_options: bool = False) -> str:
        return self.inner.usage(with_options=True)

    def write_help_with_min_indent(
        self,
        out: TextIO,
        min_indent: int = 0,
        extra_options: Sequence[HelpRow] = (),
    ) -> int:
        return self.inner.write_help_with_min_indent(
            out, min_indent, (self.help_row, *extra_options)
        )

    def help_text(self) -> str:
        buffer = StringIO()
        self.write_help_with_min_indent(buffer)
        return buffer.getvalue()

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.inner})"

    def __repr__(self) -> str:
        return str(self)


class ArgsWithHelp(Wrapper):
    """Adds `-h` / `--help`, returning `Requested.HELP`."""

    short_option = "h"
    long_option = "help"
    option_help = "Print help"
    special = Requested.HELP


class ArgsWithVersion(Wrapper):
    """Adds `-v` / `--version`, returning `Requested.VERSION`."""

    short_option = "v"
    long_option = "version"
    option_help = "Print version"
    special = Requested.VERSION
