# Slimargs CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the structural protocol shared by binders and wrappers.

Anything with this shape can be wrapped by `Wrapper`, rendered by
`runner.render_help` and driven by `runner.parse_env`, without inheriting
from a common base class.
"""
from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Iterable,
    Protocol,
    Sequence,
    TextIO,
    runtime_checkable,
)

if TYPE_CHECKING:
    from slimargs.parser.help import HelpRow


@runtime_checkable
class ParserProtocol(Protocol):
    name: str
    description: str
    version: str

    def parse(self, args: Iterable[str]) -> Any: ...

    def usage(self, with_options: bool = False) -> str: ...

    def write_help_with_min_indent(
        self,
        out: TextIO,
        min_indent: int = 0,
        extra_options: Sequence[HelpRow] = (),
    ) -> int: ...

    def help_text(self) -> str: ...
