# Slimargs CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Process glue: reading `sys.argv`, reporting errors and rendering help.

Functions:
- parse_env: Parse `sys.argv[1:]`; on error print it with the usage line and
  exit with status 1.
- render_help: Print a parser's help text in a rich panel.
- run: `parse_env` plus handling of `Requested.HELP` / `Requested.VERSION`,
  returning the bound values of the innermost parser.
"""
from __future__ import annotations

import sys
from typing import Any, Iterable

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from slimargs.console import console, error_console
from slimargs.exceptions import ArgumentParseError
from slimargs.logger import logger
from slimargs.parser.wrappers import Args, Requested
from slimargs.protocols import ParserProtocol
from slimargs.utils import get_program_invocation


def program_name(parser: ParserProtocol) -> str:
    return parser.name or get_program_invocation()


def parse_env(parser: ParserProtocol, argv: Iterable[str] | None = None) -> Any:
    """
    Parse `argv` (default `sys.argv[1:]`) with `parser`.

    Exits the process with status 1 on a parse error. Use `parser.parse()`
    directly when that is not the behaviour you want.
    """
    args = sys.argv[1:] if argv is None else argv
    try:
        return parser.parse(args)
    except ArgumentParseError as error:
        logger.debug("Exiting on parse error: %r", error)
        error_console.print(
            f"[bold red]{escape(program_name(parser))}: error:[/] {escape(str(error))}"
        )
        error_console.print(f"Usage: {escape(parser.usage())}")
        sys.exit(1)


def render_help(parser: ParserProtocol, target: Console | None = None) -> None:
    """Print the help text of `parser` inside a panel."""
    target = target or console
    title = program_name(parser)
    subtitle = parser.version or None
    target.print(
        Panel(
            Text(parser.help_text().rstrip()),
            title=f"[bold]{escape(title)}[/]",
            subtitle=escape(subtitle) if subtitle else None,
            title_align="left",
            expand=False,
        )
    )


def run(parser: ParserProtocol, argv: Iterable[str] | None = None) -> Any:
    """
    Parse like `parse_env`, then act on wrapper sentinels.

    `Requested.HELP` renders the help and `Requested.VERSION` prints
    `<name> <version>`, both exiting with status 0. Otherwise the `Args`
    layers added by wrappers are peeled off and the bound values returned.
    """
    result = parse_env(parser, argv)
    while True:
        if result is Requested.HELP:
            render_help(parser)
            sys.exit(0)
        if result is Requested.VERSION:
            console.print(f"{program_name(parser)} {parser.version}".rstrip())
            sys.exit(0)
        if not isinstance(result, Args):
            return result
        result = result.value
