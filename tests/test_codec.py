import math

import pytest
from pyramid.config import Configurator

from spindle.codec import JsonCodec
from spindle.exceptions import InvalidExecuteRequest, SerializationError


def test_codec_defaults():
    codec = JsonCodec()
    assert codec.options == {"ensure_ascii": False, "sort_keys": False, "allow_nan": True}
    assert repr(codec) == "spindle.codec.JsonCodec(ensure_ascii=False, sort_keys=False, allow_nan=True)"


def test_codec_options_not_modifiable():
    codec = JsonCodec()
    codec.options["sort_keys"] = True
    assert codec.options["sort_keys"] is False


@pytest.mark.parametrize(
    ["data", "expected"],
    [
        ({"b": [1, 2.5, None], "a": {"c": True}}, "{\"b\":[1,2.5,null],\"a\":{\"c\":true}}"),
        ("text", "\"text\""),
        ("accentué", "\"accentué\""),
        (None, "null"),
        (False, "false"),
        (10, "10"),
        ([], "[]"),
    ]
)
def test_codec_dumps_compact(data, expected):
    assert JsonCodec().dumps(data) == expected


def test_codec_dumps_options():
    codec = JsonCodec(ensure_ascii=True, sort_keys=True)
    assert codec.dumps({"b": "é", "a": 1}) == "{\"a\":1,\"b\":\"\\u00e9\"}"


def test_codec_dumps_not_a_number():
    assert JsonCodec().dumps([math.inf]) == "[Infinity]"
    with pytest.raises(SerializationError):
        JsonCodec(allow_nan=False).dumps([math.inf])


@pytest.mark.parametrize(
    "data",
    [
        {1, 2},
        {"nested": [object()]},
        b"bytes",
        {("tuple", "key"): 1},
    ]
)
def test_codec_dumps_invalid(data):
    with pytest.raises(SerializationError) as exc_info:
        JsonCodec().dumps(data)
    assert exc_info.value.status_code == 422


def test_codec_dumps_circular_reference():
    data = []
    data.append(data)
    with pytest.raises(SerializationError):
        JsonCodec().dumps(data)


@pytest.mark.parametrize(
    "contents",
    [
        "{\"inputs\": [], \"outputs\": []}",
        b"{\"inputs\": [], \"outputs\": []}",
        bytearray(b"{\"inputs\": [], \"outputs\": []}"),
    ]
)
def test_codec_loads(contents):
    assert JsonCodec().loads(contents) == {"inputs": [], "outputs": []}


@pytest.mark.parametrize(
    "contents",
    [
        "",
        "{\"inputs\": [}",
        "inputs: []",
        b"\x80\x81",
        None,
        123,
    ]
)
def test_codec_loads_invalid(contents):
    with pytest.raises(InvalidExecuteRequest):
        JsonCodec().loads(contents)


@pytest.mark.parametrize(
    ["settings", "expected"],
    [
        ({}, {"ensure_ascii": False, "sort_keys": False, "allow_nan": True}),
        ({"spindle.json_sort_keys": "true"}, {"ensure_ascii": False, "sort_keys": True, "allow_nan": True}),
        (
            {"spindle.json_ensure_ascii": True, "spindle.json_allow_nan": "off", "spindle.json_sort_keys": ""},
            {"ensure_ascii": True, "sort_keys": False, "allow_nan": False},
        ),
    ]
)
def test_codec_from_settings(settings, expected):
    assert JsonCodec.from_settings(settings).options == expected


def test_codec_from_configurator_settings():
    config = Configurator(settings={"spindle.json_ensure_ascii": "yes"})
    assert JsonCodec.from_settings(config).options["ensure_ascii"] is True
