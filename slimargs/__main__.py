"""
Slimargs CLI Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.

Checks an argument list against a schema file and prints what it binds to:

    slimargs memdump.yaml -- --group 8 0x40000000 256
"""

import logging
import sys
from typing import Any

from rich.markup import escape
from rich.pretty import Pretty

from slimargs.config import loader
from slimargs.console import console, error_console
from slimargs.exceptions import ConfigError
from slimargs.parser import (
    PATH,
    TEXT,
    ArgsWithHelp,
    ArgsWithVersion,
    FieldBinder,
    ListOf,
    OptionalOf,
)
from slimargs.protocols import ParserProtocol
from slimargs.runner import run
from slimargs.utils import setup_logging
from slimargs.version import __version__


def get_parser() -> ParserProtocol:
    binder = FieldBinder(
        name="slimargs",
        description="Parse arguments against a YAML or TOML schema",
        version=__version__,
    )
    binder.add_flag("debug", short=True, long=True, help="Enable debug logging")
    binder.add_option(
        "log_mode",
        OptionalOf(TEXT),
        long=True,
        help="Log output mode (cli or json)",
        value_name="MODE",
    )
    binder.add_positional("schema", PATH, help="Schema file (.yaml, .yml or .toml)")
    binder.add_positional(
        "args",
        ListOf(TEXT, allow_empty=True),
        help="Arguments to check, after `--`",
    )
    return ArgsWithHelp(ArgsWithVersion(binder))


def main(argv: list[str] | None = None) -> Any:
    values = run(get_parser(), argv)
    setup_logging(
        mode=values["log_mode"],
        level=logging.DEBUG if values["debug"] else logging.WARNING,
    )

    try:
        schema_parser = loader(values["schema"])
    except (ConfigError, FileNotFoundError) as error:
        error_console.print(f"[bold red]slimargs: error:[/] {escape(str(error))}")
        sys.exit(2)

    bound = run(schema_parser, values["args"])
    console.print(Pretty(bound))
    return bound


if __name__ == "__main__":
    main()
