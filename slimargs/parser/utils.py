# Slimargs CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
String-to-value conversion helpers shared by the built-in field types.

Functions:
- parse_int_literal: Decimal or `0x`-prefixed hexadecimal integers.
- coerce_bool: Truthy/falsy words to `bool`.
- coerce_enum: Member name or value to an `Enum` member.
- coerce_value: General conversion to a target annotation (unions, Literal,
  Enum, bool, datetime, or any callable type).
"""
import re
import types
from datetime import datetime
from enum import EnumMeta
from typing import Any, Literal, Union, get_args, get_origin

from dateutil import parser as date_parser

_DECIMAL = re.compile(r"[+-]?[0-9]+")
_HEXADECIMAL = re.compile(r"[+-]?[0-9a-fA-F]+")


def parse_int_literal(value: str) -> int:
    """
    Parse an integer written in decimal, or in hexadecimal after a `0x` prefix.

    Python's `int()` also accepts surrounding whitespace and `_` separators;
    those are rejected here so that `"1_000"` is an error like any other stray
    character.

    Raises:
        ValueError: If `value` is not a valid literal.
    """
    if value.startswith("0x"):
        digits = value[2:]
        if not _HEXADECIMAL.fullmatch(digits):
            raise ValueError(f"invalid hexadecimal literal: {value!r}")
        return int(digits, 16)
    if not _DECIMAL.fullmatch(value):
        raise ValueError(f"invalid digit found in {value!r}")
    return int(value, 10)


def coerce_bool(value: str) -> bool:
    """Accepts 'true', 'yes', '1', 'on' and their falsy counterparts."""
    if isinstance(value, bool):
        return value
    normalized = value.strip().lower()
    if normalized in {"true", "t", "1", "yes", "y", "on"}:
        return True
    if normalized in {"false", "f", "0", "no", "n", "off"}:
        return False
    raise ValueError(f"'{value}' is not a boolean")


def coerce_enum(value: Any, enum_type: EnumMeta) -> Any:
    """
    Convert a member name or a raw value to an Enum member.

    Raises:
        ValueError: If the value cannot be resolved to a valid member.
    """
    if isinstance(value, enum_type):
        return value

    if isinstance(value, str):
        try:
            return enum_type[value]
        except KeyError:
            pass

    base_type = type(next(iter(enum_type)).value)
    try:
        return enum_type(base_type(value))
    except (ValueError, TypeError):
        values = [str(member.value) for member in enum_type]
        raise ValueError(f"'{value}' should be one of {{{', '.join(values)}}}") from None


def coerce_value(value: str, target_type: Any) -> Any:
    """
    Convert `value` to `target_type`.

    Union members are tried left to right and the first that converts wins.

    Raises:
        ValueError: If conversion fails.
    """
    origin = get_origin(target_type)
    args = get_args(target_type)

    if origin is Literal:
        if value not in args:
            raise ValueError(f"'{value}' should be one of {{{', '.join(map(str, args))}}}")
        return value

    if isinstance(target_type, types.UnionType) or origin is Union:
        for arg in args:
            if arg is type(None):
                continue
            try:
                return coerce_value(value, arg)
            except ValueError:
                continue
        raise ValueError(f"'{value}' could not be coerced to any of {args}")

    if isinstance(target_type, EnumMeta):
        return coerce_enum(value, target_type)

    if target_type is bool:
        return coerce_bool(value)

    if target_type is int:
        return parse_int_literal(value)

    if target_type is datetime:
        try:
            return date_parser.parse(value)
        except (ValueError, OverflowError) as error:
            raise ValueError(f"'{value}' could not be parsed as a datetime") from error

    try:
        return target_type(value)
    except TypeError as error:
        raise ValueError(str(error)) from error
