import pytest

from slimargs.parser import USIZE, U8, FieldBinder, OptionalOf


@pytest.fixture
def memdump():
    binder = FieldBinder(name="memdump", description="A simple memory dump program")
    binder.add_flag("color", short="c", long="color", help="Show color")
    binder.add_option(
        "group",
        OptionalOf(U8),
        short="g",
        long="group",
        help="How many bytes to show per line",
    )
    binder.add_positional("start", USIZE, help="Starting memory address")
    binder.add_positional("len", USIZE, help="Number of bytes to read")
    return binder
