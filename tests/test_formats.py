import datetime

import pytest

from spindle.formats import ContentType, repr_json


@pytest.mark.parametrize(
    ["data", "kwargs", "expected"],
    [
        (None, {}, None),
        ({"a": 1}, {}, "{\n  \"a\": 1\n}"),
        ({"a": [1, 2]}, {"indent": None}, "{\"a\": [1, 2]}"),
        ("{\"a\": 1}", {"indent": None}, "{\"a\": 1}"),
        ("  not json  ", {}, "not json"),
        ({"when": datetime.date(2024, 1, 31)}, {"indent": None}, "{\"when\": \"2024-01-31\"}"),
        ({"value": {1, 2}}, {"indent": None}, "{'value': {1, 2}}"),
        ({"a": 1}, {"force_string": False}, {"a": 1}),
    ]
)
def test_repr_json(data, kwargs, expected):
    assert repr_json(data, **kwargs) == expected


def test_content_type_lookup():
    assert ContentType.get("application/json") == ContentType.APP_JSON
    assert ContentType.get("APP_JSON") == ContentType.APP_JSON
    assert ContentType.TEXT_XML in ContentType.ANY_XML
    assert ContentType.get("application/unknown") is None
