# Slimargs CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
State models used by `FieldBinder` while a parse is in progress.

Contents:
- `ABSENT`: sentinel for "no value", distinct from a bound `None`.
- `BinderState`: lifecycle of a single `parse` call.
- `FieldState`: the per-field slot filled while tokens are consumed.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from slimargs.parser.field import Field


class _Absent:
    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Any = _Absent()


class BinderState(Enum):
    """Scanning until the stream is exhausted, then Done, then Bound or Failed."""

    IDLE = "idle"
    SCANNING = "scanning"
    DONE = "done"
    BOUND = "bound"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


@dataclass
class FieldState:
    """Tracks the slot of one field during a parse."""

    field: Field
    value: Any = ABSENT
    writes: int = 0

    @property
    def is_set(self) -> bool:
        return self.value is not ABSENT

    def store(self, value: Any) -> None:
        """Write the slot. Collections accumulate, everything else is replaced."""
        if self.field.is_collection and self.is_set:
            self.value.extend(value)
        else:
            self.value = value
        self.writes += 1
