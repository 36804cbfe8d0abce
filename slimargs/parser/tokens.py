# Slimargs CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Classifies raw command-line strings into tokens.

The tokenizer only looks at the shape of each string. It does not know which
flags exist, and it never splits a bundled short-flag group such as `-xvf`:
whether `xvf` means three booleans or a flag followed by an option is decided
by the binder, which knows the field table.

Rules, in order:
- after a bare `--`, every string is positional
- `--` itself is swallowed and turns on the rule above
- `--name` is a long flag (`name`)
- `-abc` is a short flag group (`abc`)
- anything else, including a lone `-`, is positional
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator


class TokenKind(Enum):
    """Shape of a classified token."""

    POSITIONAL = "positional"
    LONG_FLAG = "long_flag"
    SHORT_FLAG_GROUP = "short_flag_group"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    """A classified argument. `value` has its dash prefix stripped."""

    kind: TokenKind
    value: str

    @classmethod
    def positional(cls, value: str) -> Token:
        return cls(TokenKind.POSITIONAL, value)

    @classmethod
    def long_flag(cls, value: str) -> Token:
        return cls(TokenKind.LONG_FLAG, value)

    @classmethod
    def short_flag_group(cls, value: str) -> Token:
        return cls(TokenKind.SHORT_FLAG_GROUP, value)

    @property
    def is_positional(self) -> bool:
        return self.kind is TokenKind.POSITIONAL

    def raw(self) -> str:
        """Rebuild the argument as it was typed (minus any `--` terminator)."""
        if self.kind is TokenKind.LONG_FLAG:
            return f"--{self.value}"
        if self.kind is TokenKind.SHORT_FLAG_GROUP:
            return f"-{self.value}"
        return self.value


def tokenize(raw: Iterable[str]) -> Iterator[Token]:
    """Lazily classify `raw`. The result can be consumed only once."""
    terminated = False
    for arg in raw:
        if terminated:
            yield Token.positional(arg)
        elif arg == "--":
            terminated = True
        elif arg.startswith("--"):
            yield Token.long_flag(arg[2:])
        elif arg.startswith("-") and len(arg) > 1:
            yield Token.short_flag_group(arg[1:])
        else:
            yield Token.positional(arg)
