# Slimargs CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by the slimargs parser.

Parse-time failures are terminal: the binder never recovers from them
internally. Layers above the binder (wrappers, the runner) pattern-match on the
concrete exception type to decide what to do, which is how `--help` and
`--version` are recognised without reserving those names in the field table.

Exception Hierarchy:
- SlimargsError
    ├── FieldDefinitionError
    ├── ConfigError
    └── ArgumentParseError
          ├── ParseValueError
          ├── NoSuchShortFlagError
          ├── NoSuchLongFlagError
          ├── UnexpectedValueError
          └── ExpectedValueError
"""


class SlimargsError(Exception):
    """Base exception for slimargs."""


class FieldDefinitionError(SlimargsError):
    """Exception raised when a field is registered with an invalid definition."""


class ConfigError(SlimargsError):
    """Exception raised when a schema file cannot be turned into a parser."""


class ArgumentParseError(SlimargsError):
    """Base exception for every failure raised while parsing arguments."""


class ParseValueError(ArgumentParseError):
    """A token could not be converted to the type of its field."""

    def __init__(self, value: str, error: Exception):
        self.value = value
        self.error = error
        super().__init__(f"Invalid value '{value}': {error}")


class NoSuchShortFlagError(ArgumentParseError):
    """A short flag character matched no declared field."""

    def __init__(self, flag: str):
        self.flag = flag
        super().__init__(f"No such flag: -{flag}")


class NoSuchLongFlagError(ArgumentParseError):
    """A long flag matched no declared field."""

    def __init__(self, flag: str):
        self.flag = flag
        super().__init__(f"No such flag: --{flag}")


class UnexpectedValueError(ArgumentParseError):
    """A positional token appeared with no positional field left to receive it."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Unexpected value: '{value}'")


class ExpectedValueError(ArgumentParseError):
    """An option was given without its value, or a mandatory field was never bound."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Expected value for '{field}'")
