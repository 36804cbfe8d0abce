# Slimargs CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Field-binding protocol and the built-in field types.

A `FieldType` is the single place where a raw string becomes a typed value.
The binder stays type-agnostic and only asks three questions of a field type:

- `parse_one(value)`: convert one token.
- `parse_with_rest(value, rest)`: convert a token and, for collection types,
  everything else the positional stream still holds.
- `absent_default()`: what to bind when the field never appeared. `ABSENT`
  means the field is mandatory.

Built-ins:
- `Integer`: decimal or `0x` hexadecimal within a fixed range (`U8` ... `ISIZE`).
- `Text`, `PathType`: passthrough and `pathlib.Path`.
- `Coerced`: anything `coerce_value` understands (float, bool, Enum, Literal,
  unions, datetime).
- `OptionalOf`: makes any type optional, binding `None` when absent.
- `Defaulted`: binds a fixed default when absent.
- `ListOf`: collections; a single option value is split on commas.

`field_type_from_name` and `field_type_from_annotation` resolve config strings
(`"list[u8]"`, `"str?"`) and Python annotations (`list[int]`, `Path | None`).
"""
from __future__ import annotations

import copy
import re
import types
from abc import ABC, abstractmethod
from datetime import datetime
from enum import EnumMeta
from pathlib import Path
from typing import Any, Iterator, Literal, Union, get_args, get_origin

from slimargs.exceptions import FieldDefinitionError, ParseValueError
from slimargs.parser.parser_types import ABSENT
from slimargs.parser.utils import coerce_value, parse_int_literal


class FieldType(ABC):
    """Base class for everything that can be bound to a field."""

    name: str = "value"
    is_collection: bool = False

    @abstractmethod
    def convert(self, value: str) -> Any:
        """Convert a single string, raising `ValueError` on failure."""

    def parse_one(self, value: str) -> Any:
        try:
            return self.convert(value)
        except ValueError as error:
            raise ParseValueError(value, error) from error

    def parse_with_rest(self, value: str, rest: Iterator[str]) -> Any:
        return self.parse_one(value)

    def absent_default(self) -> Any:
        return ABSENT

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class Integer(FieldType):
    """Integer bounded to `[minimum, maximum]`. Either bound may be None."""

    def __init__(
        self, name: str, minimum: int | None = None, maximum: int | None = None
    ) -> None:
        self.name = name
        self.minimum = minimum
        self.maximum = maximum

    @property
    def is_unsigned(self) -> bool:
        return self.minimum is not None and self.minimum >= 0

    def convert(self, value: str) -> int:
        if self.is_unsigned and value.removeprefix("0x").startswith("-"):
            raise ValueError(f"invalid digit found in {value!r}")
        number = parse_int_literal(value)
        if self.minimum is not None and number < self.minimum:
            raise ValueError(f"number too small to fit in {self.name}")
        if self.maximum is not None and number > self.maximum:
            raise ValueError(f"number too large to fit in {self.name}")
        return number


def _unsigned(bits: int) -> Integer:
    return Integer(f"u{bits}", 0, 2**bits - 1)


def _signed(bits: int) -> Integer:
    return Integer(f"i{bits}", -(2 ** (bits - 1)), 2 ** (bits - 1) - 1)


U8 = _unsigned(8)
U16 = _unsigned(16)
U32 = _unsigned(32)
U64 = _unsigned(64)
U128 = _unsigned(128)
USIZE = Integer("usize", 0, 2**64 - 1)
I8 = _signed(8)
I16 = _signed(16)
I32 = _signed(32)
I64 = _signed(64)
I128 = _signed(128)
ISIZE = Integer("isize", -(2**63), 2**63 - 1)
INT = Integer("int")


class Text(FieldType):
    name = "str"

    def convert(self, value: str) -> str:
        return value


class PathType(FieldType):
    name = "path"

    def convert(self, value: str) -> Path:
        return Path(value)


TEXT = Text()
PATH = PathType()


class Coerced(FieldType):
    """Delegates to `coerce_value` for the given annotation."""

    def __init__(self, target: Any, name: str | None = None) -> None:
        self.target = target
        self.name = name or getattr(target, "__name__", str(target))

    def convert(self, value: str) -> Any:
        return coerce_value(value, self.target)


class OptionalOf(FieldType):
    """Binds `None` when the field never appears."""

    def __init__(self, inner: FieldType) -> None:
        self.inner = inner
        self.name = f"optional[{inner.name}]"
        self.is_collection = inner.is_collection

    def convert(self, value: str) -> Any:
        return self.inner.convert(value)

    def parse_one(self, value: str) -> Any:
        return self.inner.parse_one(value)

    def parse_with_rest(self, value: str, rest: Iterator[str]) -> Any:
        return self.inner.parse_with_rest(value, rest)

    def absent_default(self) -> Any:
        return None


class ListOf(FieldType):
    """
    A growable list of `inner` values.

    As an option, one token is split on commas (`--tags a,b,c`) and repeated
    occurrences accumulate. As the trailing positional, it claims the rest of
    the positional tokens, one element per token.

    A list is mandatory unless `allow_empty` is set, in which case an absent
    field binds `[]`.
    """

    is_collection = True

    def __init__(self, inner: FieldType, allow_empty: bool = False) -> None:
        if inner.is_collection:
            raise FieldDefinitionError("Nested collection types are not supported")
        self.inner = inner
        self.allow_empty = allow_empty
        self.name = f"list[{inner.name}]"

    def convert(self, value: str) -> list[Any]:
        return [self.inner.convert(piece) for piece in value.split(",")]

    def parse_one(self, value: str) -> list[Any]:
        return [self.inner.parse_one(piece) for piece in value.split(",")]

    def parse_with_rest(self, value: str, rest: Iterator[str]) -> list[Any]:
        values = [self.inner.parse_one(value)]
        for item in rest:
            values.append(self.inner.parse_one(item))
        return values

    def absent_default(self) -> Any:
        if self.allow_empty:
            return []
        return ABSENT


class Defaulted(FieldType):
    """Binds a fixed `default` when the field never appears."""

    def __init__(self, inner: FieldType, default: Any) -> None:
        self.inner = inner
        self.default = default
        self.name = inner.name
        self.is_collection = inner.is_collection

    def convert(self, value: str) -> Any:
        return self.inner.convert(value)

    def parse_one(self, value: str) -> Any:
        return self.inner.parse_one(value)

    def parse_with_rest(self, value: str, rest: Iterator[str]) -> Any:
        return self.inner.parse_with_rest(value, rest)

    def absent_default(self) -> Any:
        return copy.copy(self.default)


FIELD_TYPES: dict[str, FieldType] = {
    field_type.name: field_type
    for field_type in (
        U8, U16, U32, U64, U128, USIZE,
        I8, I16, I32, I64, I128, ISIZE,
        INT, TEXT, PATH,
    )
}
FIELD_TYPES.update(
    {
        "string": TEXT,
        "float": Coerced(float),
        "bool": Coerced(bool),
        "datetime": Coerced(datetime),
    }
)

_WRAPPED_NAME = re.compile(r"(list|optional)\[(.+)\]")


def field_type_from_name(name: str) -> FieldType:
    """
    Resolve a type name such as `"u8"`, `"list[str]"`, `"optional[path]"`
    or the shorthand `"u8?"`.

    Raises:
        FieldDefinitionError: If the name is unknown.
    """
    name = name.strip().lower()
    if name.endswith("?"):
        return OptionalOf(field_type_from_name(name[:-1]))
    match = _WRAPPED_NAME.fullmatch(name)
    if match:
        wrapper, inner = match.groups()
        if wrapper == "list":
            return ListOf(field_type_from_name(inner))
        return OptionalOf(field_type_from_name(inner))
    try:
        return FIELD_TYPES[name]
    except KeyError:
        valid = ", ".join(sorted(FIELD_TYPES))
        raise FieldDefinitionError(
            f"Unknown field type '{name}'. Must be one of: {valid}"
        ) from None


def field_type_from_annotation(annotation: Any) -> FieldType:
    """
    Resolve a Python annotation to a field type.

    `int` is unbounded; use `U8`, `USIZE`, etc. directly for fixed widths.
    `T | None` becomes `OptionalOf(T)` and `list[T]` becomes `ListOf(T)`.
    """
    if isinstance(annotation, FieldType):
        return annotation
    if isinstance(annotation, str):
        return field_type_from_name(annotation)

    origin = get_origin(annotation)
    args = get_args(annotation)

    if isinstance(annotation, types.UnionType) or origin is Union:
        members = [arg for arg in args if arg is not type(None)]
        if len(members) != len(args) and len(members) == 1:
            return OptionalOf(field_type_from_annotation(members[0]))
        return Coerced(
            annotation,
            name=" | ".join(getattr(member, "__name__", str(member)) for member in members),
        )

    if origin is list:
        if not args:
            return ListOf(TEXT)
        return ListOf(field_type_from_annotation(args[0]))

    if annotation is list:
        return ListOf(TEXT)
    if annotation is int:
        return INT
    if annotation is str:
        return TEXT
    if annotation is Path:
        return PATH
    if origin is Literal or isinstance(annotation, EnumMeta):
        return Coerced(annotation)
    if callable(annotation):
        return Coerced(annotation)
    raise FieldDefinitionError(f"Unsupported field annotation: {annotation!r}")
