import json
import logging
from typing import TYPE_CHECKING

from spindle.config import SpindleSetting, get_setting_flag
from spindle.exceptions import InvalidExecuteRequest, SerializationError
from spindle.utils import fully_qualified_name

if TYPE_CHECKING:
    from typing import Any, Optional, Union

    from spindle.typedefs import JSON, AnySettingsContainer

LOGGER = logging.getLogger(__name__)


class JsonCodec(object):
    """
    Encoder and decoder of :term:`JSON` contents employed to re-serialize values of an execution request.

    Options are fixed at creation. The same instance can therefore be shared and reused for any amount of
    operations without any reconfiguration between them.

    Encoded contents are compact (no indentation or spaces between separators), which corresponds to the text
    representation of the data as it would be transmitted in a request body.
    """
    separators = (",", ":")

    def __init__(self, ensure_ascii=False, sort_keys=False, allow_nan=True):
        # type: (bool, bool, bool) -> None
        self._options = {
            "ensure_ascii": ensure_ascii,
            "sort_keys": sort_keys,
            "allow_nan": allow_nan,
        }

    def __repr__(self):
        # type: () -> str
        options = ", ".join(f"{opt}={val}" for opt, val in self._options.items())
        return f"{fully_qualified_name(self)}({options})"

    @classmethod
    def from_settings(cls, container=None):
        # type: (Optional[AnySettingsContainer]) -> JsonCodec
        """
        Creates the codec with options resolved from the application settings.
        """
        return cls(
            ensure_ascii=get_setting_flag(container, SpindleSetting.JSON_ENSURE_ASCII),
            sort_keys=get_setting_flag(container, SpindleSetting.JSON_SORT_KEYS),
            allow_nan=get_setting_flag(container, SpindleSetting.JSON_ALLOW_NAN),
        )

    @property
    def options(self):
        # type: () -> dict
        return dict(self._options)

    def dumps(self, data):
        # type: (Any) -> str
        """
        Serializes the data to its :term:`JSON` text representation.

        :raises SerializationError: if the data, or any of its nested items, cannot be represented as :term:`JSON`.
        """
        try:
            return json.dumps(data, separators=self.separators, **self._options)
        except (TypeError, ValueError, RecursionError) as exc:
            LOGGER.debug("Failed serialization of [%s] data.", fully_qualified_name(data), exc_info=exc)
            raise SerializationError(f"Cannot serialize value to JSON: {exc!s}")

    def loads(self, contents):
        # type: (Union[str, bytes, bytearray]) -> JSON
        """
        Parses the :term:`JSON` text representation into the corresponding data.

        :raises InvalidExecuteRequest: if the contents are not valid :term:`JSON`.
        """
        try:
            if isinstance(contents, (bytes, bytearray)):
                contents = contents.decode("utf-8")
            return json.loads(contents)
        except (TypeError, ValueError) as exc:
            LOGGER.debug("Failed parsing of JSON contents.", exc_info=exc)
            raise InvalidExecuteRequest(f"Cannot parse contents as JSON: {exc!s}")
