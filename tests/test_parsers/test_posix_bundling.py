import pytest

from slimargs.exceptions import ExpectedValueError, NoSuchShortFlagError
from slimargs.parser import TEXT, U8, FieldBinder, OptionalOf


@pytest.fixture
def bundled():
    binder = FieldBinder(name="bundle")
    binder.add_flag("alpha", short="a", long="alpha", help="Alpha option")
    binder.add_flag("beta", short="b", long="beta", help="Beta option")
    binder.add_option("charlie", OptionalOf(TEXT), short="c", help="Charlie option")
    binder.add_option("delta", OptionalOf(U8), short="d", help="Delta option")
    return binder


def test_posix_bundling(bundled):
    """Test the bundling of short flags in the POSIX style."""
    values = bundled.parse(["-ab"])
    assert values["alpha"] is True
    assert values["beta"] is True
    assert values["charlie"] is None


def test_posix_bundling_last_has_value(bundled):
    """Test bundling with the last character being an option."""
    values = bundled.parse(["-abc", "value"])
    assert values["alpha"] is True
    assert values["beta"] is True
    assert values["charlie"] == "value"


def test_posix_bundling_option_in_the_middle(bundled):
    """An option inside a group takes the next stream token, not the rest of the group."""
    values = bundled.parse(["-cab", "value"])
    assert values == {"alpha": True, "beta": True, "charlie": "value", "delta": None}


def test_posix_bundling_two_options(bundled):
    """Each option in a group pulls its own token, in order."""
    values = bundled.parse(["-cd", "text", "7"])
    assert values["charlie"] == "text"
    assert values["delta"] == 7


def test_posix_bundling_inline_value_is_not_supported(bundled):
    """`-d7` means `-d -7`, so the unknown `7` is reported."""
    with pytest.raises(NoSuchShortFlagError) as excinfo:
        bundled.parse(["-d7", "1"])
    assert excinfo.value.flag == "7"


def test_posix_bundling_invalid(bundled):
    """Test the bundling of short flags with an unknown character."""
    with pytest.raises(NoSuchShortFlagError) as excinfo:
        bundled.parse(["-abz"])
    assert excinfo.value.flag == "z"


def test_posix_bundling_option_missing_value(bundled):
    with pytest.raises(ExpectedValueError) as excinfo:
        bundled.parse(["-ac"])
    assert excinfo.value.field == "charlie"


def test_posix_bundling_repeated_flag(bundled):
    values = bundled.parse(["-aa"])
    assert values["alpha"] is True
