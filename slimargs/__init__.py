"""
Slimargs CLI Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .exceptions import (
    ArgumentParseError,
    ConfigError,
    ExpectedValueError,
    FieldDefinitionError,
    NoSuchLongFlagError,
    NoSuchShortFlagError,
    ParseValueError,
    SlimargsError,
    UnexpectedValueError,
)
from .parser import (
    Args,
    ArgsWithHelp,
    ArgsWithVersion,
    FieldBinder,
    Requested,
    Wrapper,
    binder_from_dataclass,
    tokenize,
)
from .version import __version__

logger = logging.getLogger("slimargs")


__all__ = [
    "Args",
    "ArgsWithHelp",
    "ArgsWithVersion",
    "ArgumentParseError",
    "ConfigError",
    "ExpectedValueError",
    "FieldBinder",
    "FieldDefinitionError",
    "NoSuchLongFlagError",
    "NoSuchShortFlagError",
    "ParseValueError",
    "Requested",
    "SlimargsError",
    "UnexpectedValueError",
    "Wrapper",
    "__version__",
    "binder_from_dataclass",
    "tokenize",
]
