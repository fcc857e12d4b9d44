import colander
import pytest

from spindle import schemas as sd


def test_execute_schema_preserves_input_contents():
    body = {
        "inputs": [
            {"id": "data", "input": {"value": {"inlineValue": [1, {"x": None}]}, "format": {"any": "thing"}}},
            {"id": "area", "input": {"bbox": {"bbox": [1, 2, 3, 4]}, "extra": True}},
        ],
        "outputs": [{"id": "output", "format": {"mimeType": "text/plain", "extra": 1}}],
        "subscribers": {"successUri": "http://x/notify"},
    }
    result = sd.Execute().deserialize(body)
    assert result["inputs"][0]["input"] == body["inputs"][0]["input"]
    assert result["inputs"][1]["input"] == body["inputs"][1]["input"]
    assert result["outputs"][0]["format"] == {"mimeType": "text/plain", "extra": 1}
    assert result["subscribers"] == body["subscribers"]


def test_execute_schema_optional_fields():
    assert sd.Execute().deserialize({}) == {}
    result = sd.Execute().deserialize({"inputs": [{"id": "no-input"}], "outputs": [{"id": "output"}]})
    assert result == {"inputs": [{"id": "no-input"}], "outputs": [{"id": "output"}]}


@pytest.mark.parametrize(
    ["body", "error_key"],
    [
        ({"inputs": [{"input": {"value": 1}}]}, "inputs.0.id"),
        ({"inputs": [{"id": "x", "input": [1, 2]}]}, "inputs.0.input"),
        ({"inputs": 123}, "inputs"),
        ({"outputs": [{"id": "x", "format": {"mimeType": ["text/plain"]}}]}, "outputs.0.format.mimeType"),
        ({"mode": "whenever"}, "mode"),
        ({"response": "json"}, "response"),
    ]
)
def test_execute_schema_invalid(body, error_key):
    with pytest.raises(colander.Invalid) as exc_info:
        sd.Execute().deserialize(body)
    assert error_key in exc_info.value.asdict()
