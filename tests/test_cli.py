"""
Unit test for :mod:`spindle.cli` utilities.
"""
import io
import json

import mock
import pytest
import yaml

from spindle.cli import decode, load_body, main as spindle_cli
from spindle.exceptions import InvalidExecuteRequest, UnsupportedInputValue

EXECUTE_BODY = {
    "mode": "sync",
    "inputs": [
        {"id": "message", "input": {"value": "hello"}},
        {
            "id": "config",
            "input": {"value": {"inlineValue": {"threshold": 2}}, "format": {"mimeType": "application/json"}},
        },
        {"id": "unknown", "input": {"value": {"other": "shape"}}},
        {"id": "area", "input": {"bbox": {"bbox": [1, 2, 3, 4]}}},
    ],
    "outputs": [
        {"id": "output", "transmissionMode": "value"},
    ],
}


@pytest.mark.cli
def test_load_body_literal():
    assert load_body(json.dumps(EXECUTE_BODY)) == EXECUTE_BODY


@pytest.mark.cli
@pytest.mark.parametrize("extension", [".json", ".yml"])
def test_load_body_file(tmp_path, extension):
    body_file = tmp_path / f"execute{extension}"
    if extension == ".json":
        body_file.write_text(json.dumps(EXECUTE_BODY))
    else:
        body_file.write_text(yaml.safe_dump(EXECUTE_BODY))
    assert load_body(str(body_file)) == EXECUTE_BODY


@pytest.mark.cli
def test_load_body_stdin():
    stdin = io.StringIO(json.dumps(EXECUTE_BODY))
    assert load_body("-", stdin=stdin) == EXECUTE_BODY


@pytest.mark.cli
def test_load_body_invalid():
    with pytest.raises(InvalidExecuteRequest):
        load_body("{\"inputs\": [")


@pytest.mark.cli
def test_decode():
    result = json.loads(decode(json.dumps(EXECUTE_BODY)))
    assert result["mode"] == "sync"
    assert result["response"] == "document"
    assert [data["id"] if data else None for data in result["inputs"]] == ["message", "config", None, "area"]
    assert result["inputs"][0]["value"] == "hello"
    assert result["inputs"][1]["value"] == "{\"threshold\":2}"
    assert result["inputs"][1]["format"] == {"mimeType": "application/json", "encoding": "", "schema": ""}
    assert json.loads(result["inputs"][3]["value"]) == EXECUTE_BODY["inputs"][3]["input"]
    assert result["inputs"][3]["format"]["mimeType"] == "application/json"
    assert result["outputs"] == [
        {"id": "output", "format": {"mimeType": "", "encoding": "", "schema": ""}, "transmissionMode": "VALUE"}
    ]


@pytest.mark.cli
def test_decode_strict():
    with pytest.raises(UnsupportedInputValue):
        decode(json.dumps(EXECUTE_BODY), strict=True)


@pytest.mark.cli
def test_decode_config(tmp_path):
    config_file = tmp_path / "spindle.ini"
    config_file.write_text("[spindle]\nspindle.strict_inputs = true\nspindle.json_sort_keys = true\n")
    body = {"inputs": [{"id": "data", "input": {"value": {"inlineValue": {"b": 1, "a": 2}}}}]}
    result = json.loads(decode(json.dumps(body), config=str(config_file), section="spindle"))
    assert result["inputs"][0]["value"] == "{\"a\":2,\"b\":1}"
    with pytest.raises(UnsupportedInputValue):
        decode(json.dumps(EXECUTE_BODY), config=str(config_file), section="spindle")


@pytest.mark.cli
def test_main_decode(capsys):
    result = spindle_cli("decode", "--indent", "0", json.dumps(EXECUTE_BODY))
    assert result == 0
    captured = capsys.readouterr()
    output = json.loads(captured.out)
    assert len(output["inputs"]) == 4
    assert output["inputs"][2] is None


@pytest.mark.cli
def test_main_decode_stdin(capsys):
    with mock.patch("sys.stdin", io.StringIO(json.dumps(EXECUTE_BODY))):
        result = spindle_cli("decode", "-")
    assert result == 0
    output = json.loads(capsys.readouterr().out)
    assert output["outputs"][0]["id"] == "output"


@pytest.mark.cli
@pytest.mark.parametrize(
    ["args", "expect_error"],
    [
        (["decode", "--strict", json.dumps(EXECUTE_BODY)], "spindle.exceptions.UnsupportedInputValue"),
        (["decode", json.dumps({"inputs": {"id": "invalid"}})], "spindle.exceptions.InvalidExecuteRequest"),
        (["decode", json.dumps({"inputs": [{"id": "x", "input": {"value": {"href": "http://[bad"}}}]})],
         "spindle.exceptions.URISyntaxError"),
        (["decode", "--config", "/tmp/does-not-exist/spindle.ini", json.dumps(EXECUTE_BODY)],
         "pyramid.exceptions.ConfigurationError"),
    ]
)
def test_main_decode_failure(capsys, args, expect_error):
    result = spindle_cli(*args)
    assert result == -1
    output = json.loads(capsys.readouterr().out)
    assert output["message"] == "Operation failed due to exception."
    assert output["error"] == expect_error
    assert output["cause"]


@pytest.mark.cli
def test_main_no_operation(capsys):
    result = spindle_cli("--quiet")
    assert result == 0
    assert "decode" in capsys.readouterr().out


@pytest.mark.cli
def test_main_version(capsys):
    with pytest.raises(SystemExit):
        spindle_cli("--version")
    assert "spindle" in capsys.readouterr().out
