# Slimargs CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Plain-text usage and help rendering for binders and wrappers.

Layout:

    <description>

    Usage: memdump [OPTIONS] START LEN

    Arguments:
    START                Starting memory address
    LEN                  Number of bytes to read

    Options:
    -c, --color          Show color
    -g, --group <GROUP>  How many bytes to show per line

Descriptions start at a shared indent: at least the caller's `min_indent`,
and at least two columns past the widest left-hand entry. `write_help`
returns that indent so that wrappers can line their own rows up with it.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, NamedTuple, Sequence, TextIO

if TYPE_CHECKING:
    from slimargs.parser.field import Field

GUTTER = 2


class HelpRow(NamedTuple):
    left: str
    description: str


def build_usage(
    name: str, positional: Iterable[Field], with_options: bool = False
) -> str:
    parts = [name] if name else []
    if with_options:
        parts.append("[OPTIONS]")
    parts.extend(field.get_usage_text() for field in positional)
    return " ".join(parts)


def compute_indent(rows: Iterable[HelpRow], min_indent: int = 0) -> int:
    widths = [len(row.left) + GUTTER for row in rows]
    return max([min_indent, *widths])


def format_row(row: HelpRow, indent: int) -> str:
    return f"{row.left.ljust(indent)}{row.description}".rstrip()


def write_help(
    out: TextIO,
    description: str,
    usage: str,
    arguments: Sequence[HelpRow],
    options: Sequence[HelpRow],
    min_indent: int = 0,
) -> int:
    indent = compute_indent([*arguments, *options], min_indent)
    lines = []
    if description:
        lines.extend([description, ""])
    lines.append(f"Usage: {usage}")
    if arguments:
        lines.extend(["", "Arguments:"])
        lines.extend(format_row(row, indent) for row in arguments)
    if options:
        lines.extend(["", "Options:"])
        lines.extend(format_row(row, indent) for row in options)
    out.write("\n".join(lines))
    out.write("\n")
    return indent
