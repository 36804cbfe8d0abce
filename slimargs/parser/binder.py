# Slimargs CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `FieldBinder`, the state machine that turns classified
tokens into typed values according to a registered field table.

The field table is built once through `add_flag()`, `add_option()` and
`add_positional()`. Each call to `parse()` then runs an independent pass with
fresh slots; nothing is carried over between calls.

Per token:
- `-abc` (short flag group): each character is looked up among the named
  fields. A flag is set to True. An option pulls the *next token of the
  stream* as its value, never the rest of the group, so `-og 8` and `-og8`
  differ: the latter is `-o -g` followed by whatever token comes next.
- `--name` (long flag): same lookup by long identifier.
- positional: bound to the next declared positional field. A trailing
  collection positional claims every remaining positional token.

When the stream is exhausted, unset fields take their type's absent default
or fail with `ExpectedValueError`.

Example Usage:
    binder = FieldBinder(name="memdump", description="Dump memory")
    binder.add_flag("color", short=True, long=True, help="Show color")
    binder.add_option("group", OptionalOf(U8), short=True, long=True)
    binder.add_positional("start", USIZE)
    binder.add_positional("len", USIZE)

    binder.parse(["--group", "8", "0x40000000", "256"])
    # {'color': False, 'group': 8, 'start': 1073741824, 'len': 256}
"""
from __future__ import annotations

from io import StringIO
from typing import Any, Iterable, Iterator, Sequence, TextIO

from slimargs.exceptions import (
    ArgumentParseError,
    ExpectedValueError,
    FieldDefinitionError,
    NoSuchLongFlagError,
    NoSuchShortFlagError,
    UnexpectedValueError,
)
from slimargs.logger import logger
from slimargs.parser.field import Field, FieldKind
from slimargs.parser.field_types import FieldType
from slimargs.parser.help import HelpRow, build_usage, write_help
from slimargs.parser.parser_types import ABSENT, BinderState, FieldState
from slimargs.parser.tokens import Token, TokenKind, tokenize


class FieldBinder:
    """
    Binds command-line arguments to a table of flag, option and positional fields.

    Attributes:
        name (str): Program name shown in usage and error messages.
        description (str): One-line description shown at the top of the help.
        version (str): Program version, reported by `ArgsWithVersion` users.
        record_type (type | None): When set, `parse()` returns
            `record_type(**values)` instead of a dict.
        state (BinderState): State reached by the most recent `parse()`.
    """

    def __init__(
        self,
        name: str = "",
        description: str = "",
        version: str = "",
        record_type: type | None = None,
    ) -> None:
        self.name: str = name
        self.description: str = description
        self.version: str = version
        self.record_type: type | None = record_type
        self.state: BinderState = BinderState.IDLE
        self._fields: list[Field] = []
        self._positional: list[Field] = []
        self._short_map: dict[str, Field] = {}
        self._long_map: dict[str, Field] = {}

    @property
    def fields(self) -> tuple[Field, ...]:
        return tuple(self._fields)

    @property
    def positional_fields(self) -> tuple[Field, ...]:
        return tuple(self._positional)

    @property
    def named_fields(self) -> tuple[Field, ...]:
        return tuple(field for field in self._fields if field.is_named)

    def get_field(self, name: str) -> Field | None:
        return next((field for field in self._fields if field.name == name), None)

    def _resolve_short(self, name: str, short: str | bool | None) -> str | None:
        if short is None or short is False:
            return None
        if short is True:
            short = name[0]
        if not isinstance(short, str) or len(short) != 1 or short == "-":
            raise FieldDefinitionError(
                f"Short flag for '{name}' must be a single character other than '-'"
            )
        if short in self._short_map:
            raise FieldDefinitionError(
                f"Short flag '-{short}' is already used by '{self._short_map[short].name}'"
            )
        return short

    def _resolve_long(self, name: str, long: str | bool | None) -> str | None:
        if long is None or long is False:
            return None
        if long is True:
            long = name.replace("_", "-")
        if not isinstance(long, str) or not long or long.startswith("-"):
            raise FieldDefinitionError(
                f"Long flag for '{name}' must be a non-empty string without leading dashes"
            )
        if long in self._long_map:
            raise FieldDefinitionError(
                f"Long flag '--{long}' is already used by '{self._long_map[long].name}'"
            )
        return long

    def _validate_name(self, name: str) -> None:
        if not name or not name.replace("_", "").replace("-", "").isalnum():
            raise FieldDefinitionError(
                f"Field name {name!r} must contain only letters, digits, '-' and '_'"
            )
        if self.get_field(name):
            raise FieldDefinitionError(f"Field '{name}' is already defined")

    def _validate_positional(self, name: str) -> None:
        if self._positional and self._positional[-1].is_collection:
            raise FieldDefinitionError(
                f"Positional '{name}' cannot follow the collection "
                f"'{self._positional[-1].name}', which claims all remaining values"
            )

    def add_field(
        self,
        name: str,
        kind: FieldKind | str,
        field_type: FieldType | None = None,
        short: str | bool | None = None,
        long: str | bool | None = None,
        help: str = "",
        value_name: str | None = None,
    ) -> Field:
        """
        Register a field.

        `short=True` uses the first letter of `name`; `long=True` uses `name`
        with underscores translated to hyphens.

        Raises:
            FieldDefinitionError: If the definition conflicts with the table.
        """
        try:
            kind = FieldKind(kind)
        except ValueError as error:
            raise FieldDefinitionError(str(error)) from error
        self._validate_name(name)

        if kind is FieldKind.FLAG:
            if field_type is not None:
                raise FieldDefinitionError(f"Flag '{name}' cannot have a field type")
        elif not isinstance(field_type, FieldType):
            raise FieldDefinitionError(
                f"Field '{name}' needs a FieldType, got {field_type!r}"
            )

        if kind is FieldKind.POSITIONAL:
            if short or long:
                raise FieldDefinitionError(
                    f"Positional '{name}' cannot have short or long flags"
                )
            self._validate_positional(name)
            resolved_short = resolved_long = None
        else:
            resolved_short = self._resolve_short(name, short)
            resolved_long = self._resolve_long(name, long)
            if resolved_short is None and resolved_long is None:
                raise FieldDefinitionError(
                    f"{kind.value.title()} '{name}' needs a short or a long flag"
                )

        field = Field(
            name=name,
            kind=kind,
            field_type=field_type,
            short=resolved_short,
            long=resolved_long,
            help=help,
            value_name=value_name,
        )
        self._fields.append(field)
        if kind is FieldKind.POSITIONAL:
            self._positional.append(field)
        if resolved_short:
            self._short_map[resolved_short] = field
        if resolved_long:
            self._long_map[resolved_long] = field
        logger.debug("[%s] registered %s field '%s'", self.name, kind, name)
        return field

    def add_flag(
        self,
        name: str,
        short: str | bool | None = None,
        long: str | bool | None = None,
        help: str = "",
    ) -> Field:
        return self.add_field(name, FieldKind.FLAG, short=short, long=long, help=help)

    def add_option(
        self,
        name: str,
        field_type: FieldType,
        short: str | bool | None = None,
        long: str | bool | None = None,
        help: str = "",
        value_name: str | None = None,
    ) -> Field:
        return self.add_field(
            name,
            FieldKind.OPTION,
            field_type,
            short=short,
            long=long,
            help=help,
            value_name=value_name,
        )

    def add_positional(
        self,
        name: str,
        field_type: FieldType,
        help: str = "",
        value_name: str | None = None,
    ) -> Field:
        return self.add_field(
            name, FieldKind.POSITIONAL, field_type, help=help, value_name=value_name
        )

    def parse(self, args: Iterable[str]) -> Any:
        """
        Parse `args` against the field table.

        Returns:
            dict[str, Any] keyed by field name, or a `record_type` instance.

        Raises:
            ArgumentParseError: The first error met; parsing stops there.
        """
        run = _BindingRun(self, tokenize(args))
        values = run.bind()
        if self.record_type is not None:
            return self.record_type(**values)
        return values

    def usage(self, with_options: bool = False) -> str:
        """Usage line without the `Usage:` prefix."""
        return build_usage(
            self.name,
            self._positional,
            with_options=with_options or bool(self.named_fields),
        )

    def write_help_with_min_indent(
        self,
        out: TextIO,
        min_indent: int = 0,
        extra_options: Sequence[HelpRow] = (),
    ) -> int:
        """
        Write the help text to `out`. Returns the indent actually used, which
        is never less than `min_indent`.
        """
        arguments = [
            HelpRow(field.get_usage_text(), field.help) for field in self._positional
        ]
        options = [
            HelpRow(field.get_flag_text(), field.help) for field in self.named_fields
        ]
        options.extend(extra_options)
        return write_help(
            out,
            description=self.description,
            usage=self.usage(with_options=bool(extra_options)),
            arguments=arguments,
            options=options,
            min_indent=min_indent,
        )

    def help_text(self) -> str:
        buffer = StringIO()
        self.write_help_with_min_indent(buffer)
        return buffer.getvalue()

    def __str__(self) -> str:
        positional = len(self._positional)
        named = len(self._fields) - positional
        required = sum(1 for field in self._fields if not field.is_optional)
        return (
            f"FieldBinder(name={self.name!r}, fields={len(self._fields)}, "
            f"named={named}, positional={positional}, required={required})"
        )

    def __repr__(self) -> str:
        return str(self)


class _BindingRun:
    """One pass of a `FieldBinder` over a token stream. Owns the slots."""

    def __init__(self, binder: FieldBinder, tokens: Iterator[Token]) -> None:
        self.binder = binder
        self.tokens = tokens
        self.state = BinderState.IDLE
        self.slots: dict[str, FieldState] = {
            field.name: FieldState(field) for field in binder.fields
        }
        for slot in self.slots.values():
            if slot.field.kind is FieldKind.FLAG:
                slot.value = False
        self.position = 0
        self.collection_claimed = False

    def _transition(self, state: BinderState) -> None:
        logger.debug("[%s] %s -> %s", self.binder.name, self.state, state)
        self.state = state
        self.binder.state = state

    def bind(self) -> dict[str, Any]:
        self._transition(BinderState.SCANNING)
        try:
            for token in self.tokens:
                self._dispatch(token)
            self._transition(BinderState.DONE)
            values = self._finish()
        except ArgumentParseError as error:
            self._transition(BinderState.FAILED)
            logger.debug("[%s] parse failed: %s", self.binder.name, error)
            raise
        self._transition(BinderState.BOUND)
        return values

    def _dispatch(self, token: Token) -> None:
        if token.kind is TokenKind.SHORT_FLAG_GROUP:
            for char in token.value:
                field = self.binder._short_map.get(char)
                if field is None:
                    raise NoSuchShortFlagError(char)
                self._bind_named(field)
        elif token.kind is TokenKind.LONG_FLAG:
            field = self.binder._long_map.get(token.value)
            if field is None:
                raise NoSuchLongFlagError(token.value)
            self._bind_named(field)
        else:
            self._bind_positional(token.value)

    def _bind_named(self, field: Field) -> None:
        slot = self.slots[field.name]
        if field.kind is FieldKind.FLAG:
            slot.store(True)
            return
        token = next(self.tokens, None)
        if token is None or not token.is_positional:
            raise ExpectedValueError(field.name)
        assert field.field_type is not None
        slot.store(field.field_type.parse_one(token.value))

    def _bind_positional(self, value: str) -> None:
        positional = self.binder._positional
        if self.collection_claimed or self.position >= len(positional):
            raise UnexpectedValueError(value)
        field = positional[self.position]
        slot = self.slots[field.name]
        assert field.field_type is not None
        if field.is_collection:
            self.collection_claimed = True
            slot.store(field.field_type.parse_with_rest(value, self._remaining_positional()))
        else:
            slot.store(field.field_type.parse_one(value))
            self.position += 1

    def _remaining_positional(self) -> Iterator[str]:
        """Yield the positional values left in the stream, dispatching flags met on the way."""
        for token in self.tokens:
            if token.is_positional:
                yield token.value
            else:
                logger.debug(
                    "[%s] dispatching %s while filling a collection",
                    self.binder.name,
                    token.raw(),
                )
                self._dispatch(token)

    def _finish(self) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for name, slot in self.slots.items():
            if slot.is_set:
                values[name] = slot.value
                continue
            assert slot.field.field_type is not None
            default = slot.field.field_type.absent_default()
            if default is ABSENT:
                raise ExpectedValueError(name)
            values[name] = default
        return values
