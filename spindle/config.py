import logging
import os
from configparser import ConfigParser, Error as ConfigParserError
from typing import TYPE_CHECKING

from pyramid.exceptions import ConfigurationError
from pyramid.settings import asbool

from spindle.base import Constants
from spindle.utils import get_settings

if TYPE_CHECKING:
    from typing import Optional

    from spindle.typedefs import AnySettingsContainer, SettingsType

LOGGER = logging.getLogger(__name__)


class SpindleSetting(Constants):
    """
    Names of the settings employed to configure the decoding operations.
    """
    JSON_ENSURE_ASCII = "spindle.json_ensure_ascii"
    JSON_SORT_KEYS = "spindle.json_sort_keys"
    JSON_ALLOW_NAN = "spindle.json_allow_nan"
    STRICT_INPUTS = "spindle.strict_inputs"
    LOG_LEVEL = "spindle.log_level"


SPINDLE_DEFAULT_SETTINGS = {
    SpindleSetting.JSON_ENSURE_ASCII: False,
    SpindleSetting.JSON_SORT_KEYS: False,
    SpindleSetting.JSON_ALLOW_NAN: True,
    SpindleSetting.STRICT_INPUTS: False,
}
SPINDLE_DEFAULT_INI_SECTION = "app:main"


def get_setting_flag(container, setting):
    # type: (Optional[AnySettingsContainer], str) -> bool
    """
    Obtains the boolean value of a setting, falling back to its default when undefined.

    :raises ConfigurationError: when the setting name is not a known :class:`SpindleSetting`.
    """
    if setting not in SPINDLE_DEFAULT_SETTINGS:
        raise ConfigurationError(f"Unknown flag setting '{setting}' specified.")
    settings = get_settings(container if container is not None else {})
    value = settings.get(setting)
    if value is None or value == "":
        return SPINDLE_DEFAULT_SETTINGS[setting]
    return asbool(value)


def load_settings(file_path, section=SPINDLE_DEFAULT_INI_SECTION):
    # type: (str, str) -> SettingsType
    """
    Loads the ``spindle.*`` settings from the specified section of an INI configuration file.

    Other entries of the section are ignored. Undefined settings are not set to their default value, allowing
    the returned settings to be merged over other definitions.

    :param file_path: path to the INI configuration file.
    :param section: section of the configuration file where settings are defined.
    :returns: resolved settings.
    :raises ConfigurationError: if the file cannot be found, parsed, or does not provide the section.
    """
    file_path = os.path.abspath(os.path.expanduser(file_path))
    if not os.path.isfile(file_path):
        raise ConfigurationError(f"Cannot find configuration file: [{file_path}]")
    config = ConfigParser()
    try:
        with open(file_path, mode="r", encoding="utf-8") as config_file:
            config.read_file(config_file)
    except ConfigParserError as exc:
        raise ConfigurationError(f"Invalid configuration file: [{file_path}] ({exc!s})")
    if not config.has_section(section):
        raise ConfigurationError(f"Missing section [{section}] in configuration file: [{file_path}]")
    settings = {
        name: value for name, value in config.items(section, raw=True)
        if name.startswith("spindle.")
    }
    unknown = set(settings) - set(SpindleSetting.values())
    if unknown:
        LOGGER.warning("Ignoring unknown settings in configuration file [%s]: %s", file_path, sorted(unknown))
        settings = {name: value for name, value in settings.items() if name not in unknown}
    LOGGER.info("Resolved configuration file: [%s]", file_path)
    return settings
