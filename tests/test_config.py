from pathlib import Path

import pytest

from slimargs.config import RawField, SchemaConfig, loader, read_schema
from slimargs.exceptions import ConfigError, FieldDefinitionError
from slimargs.parser import (
    Args,
    ArgsWithHelp,
    ArgsWithVersion,
    FieldBinder,
    FieldKind,
    Requested,
)

MEMDUMP_YAML = """\
name: memdump
description: A simple memory dump program
version: 1.2.0
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
    help: How many bytes to show per line
  - name: start
    type: usize
    help: Starting memory address
  - name: len
    type: usize
    help: Number of bytes to read
"""

MEMDUMP_TOML = """\
name = "memdump"
description = "A simple memory dump program"
help = false

[[fields]]
name = "color"
kind = "switch"
short = "c"

[[fields]]
name = "width"
kind = "opt"
type = "u8"
long = true
default = "16"

[[fields]]
name = "start"
type = "usize"
"""


def write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="UTF-8")
    return path


def test_yaml_schema(tmp_path):
    parser = loader(write(tmp_path, "memdump.yaml", MEMDUMP_YAML))
    assert isinstance(parser, ArgsWithHelp)
    assert isinstance(parser.inner, ArgsWithVersion)
    assert parser.version == "1.2.0"
    assert parser.parse(["--group", "8", "0x40000000", "256"]) == Args(
        Args({"color": False, "group": 8, "start": 0x40000000, "len": 256})
    )
    assert parser.parse(["--help"]) is Requested.HELP
    assert parser.parse(["-v"]) == Args(Requested.VERSION)


def test_toml_schema(tmp_path):
    parser = loader(write(tmp_path, "memdump.toml", MEMDUMP_TOML))
    assert isinstance(parser, FieldBinder)
    assert parser.get_field("color").kind is FieldKind.FLAG
    assert parser.parse(["0x10"]) == {"color": False, "width": 16, "start": 16}
    assert parser.parse(["-c", "--width", "4", "1"]) == {
        "color": True,
        "width": 4,
        "start": 1,
    }


def test_yml_suffix_and_default_type(tmp_path):
    path = write(
        tmp_path, "echo.yml", "name: echo\nfields:\n  - name: words\n    type: list[str]\n"
    )
    parser = loader(path)
    assert parser.parse(["a", "b"]) == Args({"words": ["a", "b"]})

    path = write(tmp_path, "cat.yml", "name: cat\nfields:\n  - name: file\n")
    assert loader(path).inner.get_field("file").field_type.name == "str"


def option_schema(field_type: str, default) -> SchemaConfig:
    raw_field = {"name": "x", "kind": "option", "type": field_type, "long": True}
    return SchemaConfig.model_validate({"fields": [{**raw_field, "default": default}]})


@pytest.mark.parametrize(
    "field_type, default, expected",
    [
        ("u8", 2, 2),
        ("u8", "0x10", 16),
        ("float", 2.5, 2.5),
        ("bool", True, True),
        ("str", 3, "3"),
        ("u8?", None, None),
        ("list[u8]", [1, "0x2"], [1, 2]),
        ("list[str]", ["a,b"], ["a,b"]),
        ("list[str]", [], []),
    ],
)
def test_valid_defaults(field_type, default, expected):
    assert option_schema(field_type, default).to_binder().parse([]) == {"x": expected}


@pytest.mark.parametrize(
    "field_type, default",
    [("u8", 300), ("u8", 2.5), ("u8", True), ("u16", -1), ("str", {"a": 1})],
)
def test_invalid_defaults(field_type, default):
    with pytest.raises(FieldDefinitionError):
        option_schema(field_type, default).to_binder()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        loader(tmp_path / "missing.yaml")


def test_read_schema_rejects_other_types():
    with pytest.raises(TypeError):
        read_schema(42)


@pytest.mark.parametrize(
    "name, content, message",
    [
        ("schema.json", "{}", "Unsupported schema format"),
        ("schema.yaml", "fields: [unclosed", "Could not parse"),
        ("schema.toml", "name = ", "Could not parse"),
        ("schema.yaml", "- just\n- a list\n", "must contain a mapping"),
        ("schema.yaml", "fields:\n  - name: x\n    type: u7\n", "Unknown field type 'u7'"),
        ("schema.yaml", "fields:\n  - name: x\n    kind: command\n", "Invalid schema"),
        ("schema.yaml", "fields:\n  - name: x\n    kind: flag\n    short: x\n    type: u8\n", "cannot declare a type"),
        ("schema.yaml", "fields:\n  - name: x\n    type: u8\n    default: '300'\n", "Default '300' for 'x' is invalid"),
        ("schema.yaml", "fields:\n  - name: x\n    type: u8\n    default: 300\n", "Default 300 for 'x' is invalid"),
        ("schema.yaml", "fields:\n  - name: x\n    type: u8\n    default: 2.5\n", "Default 2.5 for 'x' is invalid"),
        ("schema.toml", "[[fields]]\nname = \"x\"\ntype = \"u8\"\ndefault = -1\n", "Default -1 for 'x' is invalid"),
        ("schema.yaml", "fields:\n  - name: x\n    type: list[u8]\n    default: [1, 256]\n", "number too large to fit in u8"),
        ("schema.yaml", "fields:\n  - name: x\n    type: u8\n    default: [1]\n", "does not take a list"),
        ("schema.yaml", "fields:\n  - name: x\n    type: u8\n    default: null\n", "u8 is not optional"),
        ("schema.yaml", "fields:\n  - name: x\n    kind: option\n", "needs a short or a long flag"),
        ("schema.yaml", "fields:\n  - type: u8\n", "Invalid schema"),
    ],
)
def test_invalid_schemas(tmp_path, name, content, message):
    with pytest.raises(ConfigError) as excinfo:
        loader(write(tmp_path, name, content))
    assert message in str(excinfo.value)


def test_raw_field_kind_aliases():
    assert RawField(name="x", kind="argument").kind is FieldKind.POSITIONAL
    assert RawField(name="x", kind="bool").type is None
    assert RawField(name="x").type == "str"
