# Slimargs CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `FieldKind` and the `Field` descriptor registered with `FieldBinder`.

A field is one entry of the binder's field table:
- `FLAG`: boolean, true when its short or long identifier appears.
- `OPTION`: named, takes exactly one following token as its value.
- `POSITIONAL`: bound by position among the non-flag tokens.

`FieldKind` accepts a few config-friendly aliases:
    FieldKind("switch")     → FieldKind.FLAG
    FieldKind("opt")        → FieldKind.OPTION
    FieldKind("argument")   → FieldKind.POSITIONAL
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from slimargs.parser.field_types import FieldType
from slimargs.parser.parser_types import ABSENT


class FieldKind(Enum):
    FLAG = "flag"
    OPTION = "option"
    POSITIONAL = "positional"

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "switch": "flag",
            "bool": "flag",
            "opt": "option",
            "arg": "positional",
            "argument": "positional",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> FieldKind:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        alias = cls._get_alias(value.strip().lower())
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        return self.value


@dataclass
class Field:
    """
    Describes one field of a binder.

    Attributes:
        name (str): Key in the bound result, also used in error messages.
        kind (FieldKind): Flag, option, or positional.
        field_type (FieldType | None): Binding logic. None for flags.
        short (str | None): Single-character identifier (`c` for `-c`).
        long (str | None): Long identifier without dashes (`color` for `--color`).
        help (str): Description shown in help output.
        value_name (str | None): Placeholder for the value in help output.
    """

    name: str
    kind: FieldKind
    field_type: FieldType | None = None
    short: str | None = None
    long: str | None = None
    help: str = ""
    value_name: str | None = None

    @property
    def is_collection(self) -> bool:
        return self.field_type is not None and self.field_type.is_collection

    @property
    def is_named(self) -> bool:
        return self.kind is not FieldKind.POSITIONAL

    @property
    def is_optional(self) -> bool:
        if self.kind is FieldKind.FLAG:
            return True
        assert self.field_type is not None, "non-flag field without a type"
        return self.field_type.absent_default() is not ABSENT

    def get_value_name(self) -> str:
        return self.value_name or self.name.upper()

    def get_usage_text(self) -> str:
        """Positional placeholder: `NAME`, `[NAME]`, `NAME...` or `[NAME...]`."""
        text = self.get_value_name()
        if self.is_collection:
            text = f"{text}..."
        if self.is_optional:
            text = f"[{text}]"
        return text

    def get_flag_text(self) -> str:
        """Identifier column for named fields, e.g. `-g, --group <GROUP>`."""
        parts = []
        if self.short:
            parts.append(f"-{self.short}")
        if self.long:
            parts.append(f"--{self.long}")
        text = ", ".join(parts)
        if self.kind is FieldKind.OPTION:
            text = f"{text} <{self.get_value_name()}>"
        return text
