import inspect

import pytest
from pyramid.config import Configurator
from pyramid.exceptions import ConfigurationError
from pyramid.registry import Registry

from spindle.config import SPINDLE_DEFAULT_SETTINGS, SpindleSetting, get_setting_flag, load_settings


@pytest.mark.parametrize(
    ["setting", "value", "expected"],
    [
        (SpindleSetting.STRICT_INPUTS, None, False),
        (SpindleSetting.STRICT_INPUTS, "", False),
        (SpindleSetting.STRICT_INPUTS, "true", True),
        (SpindleSetting.STRICT_INPUTS, "on", True),
        (SpindleSetting.STRICT_INPUTS, "1", True),
        (SpindleSetting.STRICT_INPUTS, True, True),
        (SpindleSetting.STRICT_INPUTS, "false", False),
        (SpindleSetting.JSON_ALLOW_NAN, None, True),
        (SpindleSetting.JSON_ALLOW_NAN, "", True),
        (SpindleSetting.JSON_ALLOW_NAN, "no", False),
        (SpindleSetting.JSON_ALLOW_NAN, "unknown", False),
    ]
)
def test_get_setting_flag(setting, value, expected):
    assert get_setting_flag({setting: value}, setting) is expected


def test_get_setting_flag_defaults():
    for setting, default in SPINDLE_DEFAULT_SETTINGS.items():
        assert get_setting_flag({}, setting) is default


def test_get_setting_flag_unknown_setting():
    with pytest.raises(ConfigurationError):
        get_setting_flag({}, SpindleSetting.LOG_LEVEL)
    with pytest.raises(ConfigurationError):
        get_setting_flag({}, "spindle.unknown")


def test_get_setting_flag_containers():
    registry = Registry()
    registry.settings = {SpindleSetting.STRICT_INPUTS: "true"}
    assert get_setting_flag(registry, SpindleSetting.STRICT_INPUTS) is True

    config = Configurator(settings={SpindleSetting.JSON_SORT_KEYS: "true"})
    assert get_setting_flag(config, SpindleSetting.JSON_SORT_KEYS) is True

    with pytest.raises(TypeError):
        get_setting_flag(["invalid"], SpindleSetting.JSON_SORT_KEYS)


def test_load_settings(tmp_path):
    config_file = tmp_path / "spindle.ini"
    config_file.write_text(inspect.cleandoc("""
        [app:main]
        use = egg:spindle
        spindle.strict_inputs = true
        spindle.json_sort_keys = off
        spindle.unknown = ignored

        [app:other]
        spindle.json_ensure_ascii = true
    """))
    settings = load_settings(str(config_file))
    assert settings == {
        SpindleSetting.STRICT_INPUTS: "true",
        SpindleSetting.JSON_SORT_KEYS: "off",
    }
    assert get_setting_flag(settings, SpindleSetting.STRICT_INPUTS) is True
    assert get_setting_flag(settings, SpindleSetting.JSON_SORT_KEYS) is False

    settings = load_settings(str(config_file), section="app:other")
    assert settings == {SpindleSetting.JSON_ENSURE_ASCII: "true"}


def test_load_settings_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_settings(str(tmp_path / "missing.ini"))


def test_load_settings_missing_section(tmp_path):
    config_file = tmp_path / "spindle.ini"
    config_file.write_text("[app:other]\nspindle.strict_inputs = true\n")
    with pytest.raises(ConfigurationError):
        load_settings(str(config_file))


def test_load_settings_invalid_file(tmp_path):
    config_file = tmp_path / "spindle.ini"
    config_file.write_text("spindle.strict_inputs = true\n")
    with pytest.raises(ConfigurationError):
        load_settings(str(config_file))
