import pytest

from slimargs.exceptions import (
    ExpectedValueError,
    FieldDefinitionError,
    NoSuchLongFlagError,
    NoSuchShortFlagError,
    ParseValueError,
    UnexpectedValueError,
)
from slimargs.parser import (
    TEXT,
    U8,
    U64,
    BinderState,
    FieldBinder,
    FieldKind,
    ListOf,
    OptionalOf,
)


def test_memdump_binds_all_fields(memdump):
    values = memdump.parse(["--group", "8", "0x40000000", "256"])
    assert values == {"color": False, "group": 8, "start": 0x40000000, "len": 256}


def test_memdump_unknown_short_flag(memdump):
    with pytest.raises(NoSuchShortFlagError) as excinfo:
        memdump.parse(["-f", "--group", "8", "0x40000000", "256"])
    assert excinfo.value.flag == "f"
    assert str(excinfo.value) == "No such flag: -f"


def test_memdump_unknown_long_flag(memdump):
    with pytest.raises(NoSuchLongFlagError) as excinfo:
        memdump.parse(["--width", "8"])
    assert excinfo.value.flag == "width"


def test_memdump_flags_anywhere(memdump):
    values = memdump.parse(["0", "-c", "16", "-g", "4"])
    assert values == {"color": True, "group": 4, "start": 0, "len": 16}


def test_memdump_missing_mandatory_positional(memdump):
    with pytest.raises(ExpectedValueError) as excinfo:
        memdump.parse(["0"])
    assert excinfo.value.field == "len"
    assert str(excinfo.value) == "Expected value for 'len'"


def test_option_without_value(memdump):
    with pytest.raises(ExpectedValueError) as excinfo:
        memdump.parse(["0", "16", "--group"])
    assert excinfo.value.field == "group"


def test_option_value_must_be_positional(memdump):
    with pytest.raises(ExpectedValueError) as excinfo:
        memdump.parse(["--group", "-c", "0", "16"])
    assert excinfo.value.field == "group"


def test_option_value_after_terminator(memdump):
    values = memdump.parse(["--group", "--", "8", "0", "16"])
    assert values["group"] == 8


def test_invalid_option_value(memdump):
    with pytest.raises(ParseValueError) as excinfo:
        memdump.parse(["--group", "300", "0", "16"])
    assert excinfo.value.value == "300"


def test_single_positional_overflow():
    binder = FieldBinder(name="one")
    binder.add_positional("x", U64)
    with pytest.raises(UnexpectedValueError) as excinfo:
        binder.parse(["1", "2"])
    assert excinfo.value.value == "2"
    assert str(excinfo.value) == "Unexpected value: '2'"


def test_hex_and_decimal_bind_the_same():
    binder = FieldBinder()
    binder.add_positional("x", U8)
    assert binder.parse(["0xff"]) == binder.parse(["255"]) == {"x": 255}


def test_absent_optional_vs_mandatory():
    optional = FieldBinder()
    optional.add_option("level", OptionalOf(U8), long=True)
    assert optional.parse([]) == {"level": None}

    mandatory = FieldBinder()
    mandatory.add_option("level", U8, long=True)
    with pytest.raises(ExpectedValueError) as excinfo:
        mandatory.parse([])
    assert excinfo.value.field == "level"


def test_terminator_makes_flags_positional():
    binder = FieldBinder()
    binder.add_flag("verbose", short=True)
    binder.add_positional("path", TEXT)
    assert binder.parse(["--", "-v"]) == {"verbose": False, "path": "-v"}


def test_dash_is_positional():
    binder = FieldBinder()
    binder.add_positional("input", TEXT)
    assert binder.parse(["-"]) == {"input": "-"}


def test_repeated_option_last_value_wins():
    binder = FieldBinder()
    binder.add_option("level", U8, short=True)
    assert binder.parse(["-l", "1", "-l", "2"]) == {"level": 2}


def test_parse_runs_are_independent(memdump):
    memdump.parse(["-c", "-g", "2", "0", "16"])
    assert memdump.parse(["0", "16"]) == {
        "color": False,
        "group": None,
        "start": 0,
        "len": 16,
    }


def test_parse_accepts_any_iterable(memdump):
    values = memdump.parse(iter(["1", "2"]))
    assert values["start"] == 1
    assert values["len"] == 2


def test_default_short_and_long_identifiers():
    binder = FieldBinder()
    flag = binder.add_flag("dry_run", short=True, long=True)
    assert flag.short == "d"
    assert flag.long == "dry-run"
    assert binder.parse(["--dry-run"]) == {"dry_run": True}


def test_field_table_accessors(memdump):
    assert [field.name for field in memdump.fields] == ["color", "group", "start", "len"]
    assert [field.name for field in memdump.positional_fields] == ["start", "len"]
    assert [field.name for field in memdump.named_fields] == ["color", "group"]
    assert memdump.get_field("group").kind is FieldKind.OPTION
    assert memdump.get_field("missing") is None


def test_binder_str(memdump):
    assert str(memdump) == (
        "FieldBinder(name='memdump', fields=4, named=2, positional=2, required=2)"
    )


def test_add_field_accepts_kind_alias():
    binder = FieldBinder()
    field = binder.add_field("verbose", "switch", short="v")
    assert field.kind is FieldKind.FLAG


@pytest.mark.parametrize(
    "register",
    [
        lambda binder: binder.add_flag("color", short="c"),
        lambda binder: binder.add_flag("other", short="c"),
        lambda binder: binder.add_flag("other", long="color"),
        lambda binder: binder.add_flag("bad name", short="b"),
        lambda binder: binder.add_flag("wide", short="wd"),
        lambda binder: binder.add_flag("dash", short="-"),
        lambda binder: binder.add_flag("dashed", long="--dashed"),
        lambda binder: binder.add_flag("nameless"),
        lambda binder: binder.add_option("level", None, short="l"),
        lambda binder: binder.add_field("typed", FieldKind.FLAG, U8, short="t"),
        lambda binder: binder.add_field("pos", FieldKind.POSITIONAL, U8, short="p"),
        lambda binder: binder.add_field("odd", "subcommand", U8),
    ],
)
def test_invalid_definitions(register):
    binder = FieldBinder()
    binder.add_flag("color", short="c", long="color")
    with pytest.raises(FieldDefinitionError):
        register(binder)


def test_no_positional_after_collection():
    binder = FieldBinder()
    binder.add_positional("files", ListOf(TEXT))
    with pytest.raises(FieldDefinitionError):
        binder.add_positional("output", TEXT)


def test_binder_records_final_state(memdump):
    assert memdump.state is BinderState.IDLE
    memdump.parse(["0", "16"])
    assert memdump.state is BinderState.BOUND
    with pytest.raises(UnexpectedValueError):
        memdump.parse(["0", "16", "32"])
    assert memdump.state is BinderState.FAILED
