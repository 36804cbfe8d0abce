# Slimargs CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Builds a `FieldBinder` from a dataclass, so a plain record type can describe
its own command line.

Each dataclass field becomes one binder field:
- `metadata` containing `short` or `long` makes it named: a flag when the
  annotation is `bool`, an option otherwise.
- everything else is positional, in declaration order.

`short=True` and `long=True` use the binder defaults (first letter, and the
name with `_` translated to `-`). A dataclass default makes the field
optional with that default. Flags are False when absent, so a flag may only
default to False.

Example:
    @dataclass
    class Args:
        "A simple memory dump program"
        color: bool = field(metadata={"short": True, "long": True, "help": "Show color"})
        group: int | None = field(metadata={"short": True, "long": True})
        start: Annotated[int, USIZE] = field(metadata={"help": "Starting address"})

    binder = binder_from_dataclass(Args, name="memdump")
    args = binder.parse(["-c", "0x1000"])  # Args(color=True, group=None, start=4096)
"""
import dataclasses
import typing
from typing import Any, get_args, get_origin, get_type_hints

from slimargs.exceptions import FieldDefinitionError
from slimargs.logger import logger
from slimargs.parser.binder import FieldBinder
from slimargs.parser.field import FieldKind
from slimargs.parser.field_types import (
    Defaulted,
    FieldType,
    field_type_from_annotation,
)


def _description_of(record_type: type) -> str:
    doc = record_type.__doc__ or ""
    # dataclasses synthesise "Name(field: type, ...)" when no docstring exists
    if doc.startswith(f"{record_type.__name__}("):
        return ""
    return doc.strip().splitlines()[0] if doc.strip() else ""


def _resolve_type(annotation: Any) -> FieldType:
    if get_origin(annotation) is typing.Annotated:
        for extra in get_args(annotation)[1:]:
            if isinstance(extra, FieldType):
                return extra
        annotation = get_args(annotation)[0]
    return field_type_from_annotation(annotation)


def binder_from_dataclass(
    record_type: type,
    name: str | None = None,
    description: str | None = None,
    version: str = "",
) -> FieldBinder:
    """
    Create a binder whose `parse()` returns `record_type` instances.

    Args:
        record_type (type): A dataclass.
        name (str | None): Program name, defaults to the lowercased class name.
        description (str | None): Defaults to the first docstring line.
        version (str): Program version.

    Raises:
        FieldDefinitionError: If `record_type` is not a dataclass or a field
            cannot be mapped.
    """
    if not dataclasses.is_dataclass(record_type) or not isinstance(record_type, type):
        raise FieldDefinitionError(f"{record_type!r} is not a dataclass type")

    binder = FieldBinder(
        name=name if name is not None else record_type.__name__.lower(),
        description=(
            description if description is not None else _description_of(record_type)
        ),
        version=version,
        record_type=record_type,
    )
    hints = get_type_hints(record_type, include_extras=True)

    for field in dataclasses.fields(record_type):
        if not field.init:
            logger.debug("Skipping non-init field '%s'", field.name)
            continue
        metadata = field.metadata
        annotation = hints.get(field.name, str)
        named = "short" in metadata or "long" in metadata

        if named and annotation is bool:
            if field.default_factory is not dataclasses.MISSING or (
                field.default is not dataclasses.MISSING and field.default is not False
            ):
                raise FieldDefinitionError(
                    f"Flag '{field.name}' is always False when absent; "
                    "its default must be False or omitted"
                )
            binder.add_flag(
                field.name,
                short=metadata.get("short"),
                long=metadata.get("long"),
                help=metadata.get("help", ""),
            )
            continue

        field_type = _resolve_type(annotation)
        if field.default is not dataclasses.MISSING:
            field_type = Defaulted(field_type, field.default)
        elif field.default_factory is not dataclasses.MISSING:
            field_type = Defaulted(field_type, field.default_factory())

        binder.add_field(
            field.name,
            FieldKind.OPTION if named else FieldKind.POSITIONAL,
            field_type,
            short=metadata.get("short"),
            long=metadata.get("long"),
            help=metadata.get("help", ""),
            value_name=metadata.get("value_name"),
        )
    return binder
