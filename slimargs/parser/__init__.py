"""
Slimargs CLI Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .binder import FieldBinder
from .field import Field, FieldKind
from .field_types import (
    I8,
    I16,
    I32,
    I64,
    I128,
    INT,
    ISIZE,
    PATH,
    TEXT,
    U8,
    U16,
    U32,
    U64,
    U128,
    USIZE,
    Coerced,
    Defaulted,
    FieldType,
    Integer,
    ListOf,
    OptionalOf,
    PathType,
    Text,
    field_type_from_annotation,
    field_type_from_name,
)
from .parser_types import ABSENT, BinderState
from .signature import binder_from_dataclass
from .tokens import Token, TokenKind, tokenize
from .wrappers import Args, ArgsWithHelp, ArgsWithVersion, Requested, Wrapper

__all__ = [
    "ABSENT",
    "Args",
    "ArgsWithHelp",
    "ArgsWithVersion",
    "BinderState",
    "Coerced",
    "Defaulted",
    "Field",
    "FieldBinder",
    "FieldKind",
    "FieldType",
    "I8",
    "I16",
    "I32",
    "I64",
    "I128",
    "INT",
    "ISIZE",
    "Integer",
    "ListOf",
    "OptionalOf",
    "PATH",
    "PathType",
    "Requested",
    "TEXT",
    "Text",
    "Token",
    "TokenKind",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "USIZE",
    "Wrapper",
    "binder_from_dataclass",
    "field_type_from_annotation",
    "field_type_from_name",
    "tokenize",
]
