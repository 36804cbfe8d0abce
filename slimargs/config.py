# Slimargs CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Schema loader that builds parsers from YAML or TOML field tables.

Example (YAML):

    name: memdump
    description: A simple memory dump program
    version: 1.2.0
    help: true
    version_flag: true
    fields:
      - name: color
        kind: flag
        short: c
        long: color
        help: Show color
      - name: group
        kind: option
        type: u8?
        short: true
        long: true
      - name: start
        type: usize
      - name: len
        type: usize
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from slimargs.exceptions import ConfigError, FieldDefinitionError, ParseValueError
from slimargs.logger import logger
from slimargs.parser.binder import FieldBinder
from slimargs.parser.field import FieldKind
from slimargs.parser.field_types import Defaulted, FieldType, field_type_from_name
from slimargs.parser.wrappers import ArgsWithHelp, ArgsWithVersion
from slimargs.protocols import ParserProtocol


class RawField(BaseModel):
    """One entry of the `fields` list."""

    name: str
    kind: FieldKind = FieldKind.POSITIONAL
    type: str | None = None
    short: str | bool | None = None
    long: str | bool | None = None
    help: str = ""
    value_name: str | None = None
    default: Any = None

    @field_validator("kind", mode="before")
    @classmethod
    def validate_kind(cls, value: Any) -> FieldKind:
        if isinstance(value, FieldKind):
            return value
        return FieldKind(value)

    @model_validator(mode="after")
    def validate_type(self) -> RawField:
        if self.kind is FieldKind.FLAG:
            if self.type is not None:
                raise ValueError(f"flag '{self.name}' cannot declare a type")
            if "default" in self.model_fields_set:
                raise ValueError(f"flag '{self.name}' cannot declare a default")
        elif self.type is None:
            self.type = "str"
        return self

    def get_field_type(self) -> FieldType | None:
        if self.type is None:
            return None
        field_type = field_type_from_name(self.type)
        if "default" not in self.model_fields_set:
            return field_type
        try:
            default = self.convert_default(field_type)
        except (ParseValueError, ValueError) as error:
            raise FieldDefinitionError(
                f"Default {self.default!r} for '{self.name}' is invalid: {error}"
            ) from error
        return Defaulted(field_type, default)

    def convert_default(self, field_type: FieldType) -> Any:
        """
        Run the schema default through `field_type` as if it came from the
        command line. Lists are converted item by item, without comma splitting.
        """
        default = self.default
        if default is None:
            if field_type.absent_default() is None:
                return None
            raise ValueError(f"{field_type.name} is not optional")
        if isinstance(default, list):
            if not field_type.is_collection:
                raise ValueError(f"{field_type.name} does not take a list")
            items = [str(item) for item in default]
            if not items:
                return []
            return field_type.parse_with_rest(items[0], iter(items[1:]))
        if isinstance(default, dict):
            raise ValueError(f"{field_type.name} does not take a table")
        return field_type.parse_one(str(default))


class SchemaConfig(BaseModel):
    """Top-level schema model."""

    name: str = ""
    description: str = ""
    version: str = ""
    help: bool = True
    version_flag: bool = False
    fields: list[RawField] = Field(default_factory=list)

    def to_binder(self) -> FieldBinder:
        binder = FieldBinder(
            name=self.name, description=self.description, version=self.version
        )
        for raw_field in self.fields:
            binder.add_field(
                raw_field.name,
                raw_field.kind,
                raw_field.get_field_type(),
                short=raw_field.short,
                long=raw_field.long,
                help=raw_field.help,
                value_name=raw_field.value_name,
            )
        return binder

    def to_parser(self) -> ParserProtocol:
        parser: ParserProtocol = self.to_binder()
        if self.version_flag:
            parser = ArgsWithVersion(parser)
        if self.help:
            parser = ArgsWithHelp(parser)
        return parser


def read_schema(file_path: Path | str) -> dict[str, Any]:
    """Read a YAML or TOML schema file into a dictionary."""
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such schema file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as schema_file:
        try:
            if suffix in (".yaml", ".yml"):
                raw_schema = yaml.safe_load(schema_file)
            elif suffix == ".toml":
                raw_schema = toml.load(schema_file)
            else:
                raise ConfigError(f"Unsupported schema format: {suffix}")
        except (yaml.YAMLError, toml.TomlDecodeError) as error:
            raise ConfigError(f"Could not parse {path}: {error}") from error

    if not isinstance(raw_schema, dict):
        raise ConfigError(
            "Schema file must contain a mapping with a list of fields.\n"
            "Example:\n"
            "name: 'greet'\n"
            "fields:\n"
            "  - name: 'person'\n"
            "    type: 'str'"
        )
    return raw_schema


def loader(file_path: Path | str) -> ParserProtocol:
    """
    Load a parser from a YAML or TOML schema file.

    The binder is wrapped with `ArgsWithVersion` when `version_flag` is true,
    then with `ArgsWithHelp` unless `help` is false.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If the file cannot be parsed or describes an invalid table.
    """
    raw_schema = read_schema(file_path)
    try:
        schema = SchemaConfig.model_validate(raw_schema)
        parser = schema.to_parser()
    except ValidationError as error:
        raise ConfigError(f"Invalid schema in {file_path}:\n{error}") from error
    except FieldDefinitionError as error:
        raise ConfigError(f"Invalid field in {file_path}: {error}") from error
    logger.debug(
        "Loaded schema '%s' with %d fields from %s",
        schema.name,
        len(schema.fields),
        file_path,
    )
    return parser
