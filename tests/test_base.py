import pytest

from spindle.base import Constants
from spindle.execute import DataTransmissionMode, ExecuteMode, ExecuteTransmissionMode
from spindle.formats import ContentType


class DummyMode(Constants):
    # pylint: disable=C0103,invalid-name  # on purpose for test
    FAST = "fast"
    slow = "SLOW"
    ASYNC = "deferred"  # name lookup must not be confused with the value lookup


@pytest.mark.parametrize(
    ["key", "expected"],
    [
        ("fast", DummyMode.FAST),
        ("FAST", DummyMode.FAST),
        ("slow", DummyMode.slow),
        ("SLOW", DummyMode.slow),
        ("async", DummyMode.ASYNC),
        ("DEFERRED", DummyMode.ASYNC),
        ("deferred", DummyMode.ASYNC),
        ("other", None),
        (None, None),
        (1, None),
    ]
)
def test_constants_get_case_insensitive(key, expected):
    assert DummyMode.get(key) == expected


def test_constants_get_default():
    assert DummyMode.get("other", default=DummyMode.FAST) == DummyMode.FAST
    assert ExecuteMode.get(None, default=ExecuteMode.AUTO) == ExecuteMode.AUTO


def test_constants_contains():
    assert "fast" in DummyMode
    assert "Deferred" in DummyMode
    assert "other" not in DummyMode
    assert "REFERENCE" in ExecuteTransmissionMode
    assert ContentType.TEXT_PLAIN in ContentType


def test_constants_names_values():
    assert sorted(ExecuteMode.names()) == ["ASYNC", "AUTO", "SYNC"]
    assert sorted(ExecuteMode.values()) == ["async", "auto", "sync"]


def test_constants_immutable():
    with pytest.raises(TypeError):
        DummyMode.FAST = "x"
    with pytest.raises(TypeError):
        setattr(ExecuteMode, "AUTO", "x")
    with pytest.raises(TypeError):
        setattr(ExecuteMode, "random", "x")


def test_enum_contains():
    assert "VALUE" in DataTransmissionMode
    assert "REFERENCE" in DataTransmissionMode
    assert DataTransmissionMode.VALUE in DataTransmissionMode
    assert "value" not in DataTransmissionMode


def test_enum_names_values():
    assert DataTransmissionMode.names() == ["VALUE", "REFERENCE"]
    assert DataTransmissionMode.values() == ["VALUE", "REFERENCE"]


def test_enum_get_by_name_or_value():
    assert DataTransmissionMode.get("VALUE") == DataTransmissionMode.VALUE
    assert DataTransmissionMode.get(DataTransmissionMode.REFERENCE) == DataTransmissionMode.REFERENCE
    assert DataTransmissionMode.get("Value") is None
    assert DataTransmissionMode.get("random", default="other") == "other"
