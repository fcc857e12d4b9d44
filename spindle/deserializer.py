"""
Decoding of the inputs and outputs of an execution request into the records employed for process execution.
"""
import logging
import re
import string
import unicodedata
import warnings
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

import colander

from spindle import schemas as sd
from spindle.codec import JsonCodec
from spindle.config import SpindleSetting, get_setting_flag
from spindle.datatype import (
    FORMAT_APP_JSON,
    FORMAT_TEXT_PLAIN,
    ExecuteRequest,
    Format,
    OutputDefinition,
    OwsCode,
    ReferenceProcessData,
    StringValueProcessData,
    as_ows_code
)
from spindle.exceptions import InvalidExecuteRequest, UnsupportedInputValue, URISyntaxError
from spindle.formats import repr_json
from spindle.utils import null
from spindle.warning import UnsupportedInputValueWarning

if TYPE_CHECKING:
    from typing import Any, Iterable, List, Optional

    from spindle.datatype import AnyIdentifier, ProcessData
    from spindle.typedefs import (
        JSON,
        AnySettingsContainer,
        ExecuteBody,
        ExecuteInputDescriptor,
        ExecuteInputNode,
        ExecuteOutputDescriptor
    )

LOGGER = logging.getLogger(__name__)

ID_KEY = "id"
VALUE_KEY = "value"
INLINE_VALUE_KEY = "inlineValue"
HREF_KEY = "href"
FORMAT_KEY = "format"
MIME_TYPE_KEY = "mimeType"
ENCODING_KEY = "encoding"
SCHEMA_KEY = "schema"
BBOX_KEY = "bbox"
INPUT_KEY = "input"
TRANSMISSION_MODE_KEY = "transmissionMode"

# ASCII characters permitted in a URI reference (RFC 3986), percent-encoded octets validated separately
URI_ASCII_CHARACTERS = frozenset(string.ascii_letters + string.digits + "-._~:/?#[]@!$&'()*+,;=%")
URI_INVALID_PERCENT_ENCODING = re.compile(r"%(?![0-9A-Fa-f]{2})")
URI_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")


def is_scalar(node):
    # type: (Any) -> bool
    """
    Indicates if the node is a :term:`JSON` scalar (string, number, boolean or ``null``).
    """
    return node is None or isinstance(node, (str, bool, int, float))


def is_uri_character(char):
    # type: (str) -> bool
    """
    Indicates if the character can be employed literally in a :term:`URI` reference.

    Non-ASCII characters are permitted (as *other* characters of an internationalized reference), except control
    and space characters which must always be percent-encoded.
    """
    if ord(char) < 128:
        return char in URI_ASCII_CHARACTERS
    if ord(char) <= 0x9F:
        return False
    return unicodedata.category(char) not in ("Zs", "Zl", "Zp")


def parse_uri(href):
    # type: (str) -> str
    """
    Validates that the reference is a syntactically valid :term:`URI` reference.

    Both absolute :term:`URI` and relative references are accepted, as long as they only employ permitted characters,
    properly percent-encoded octets, a valid scheme followed by its scheme-specific part, a single fragment, and a
    valid host when an authority is specified.

    :returns: the validated reference.
    :raises URISyntaxError: if the reference is not a valid :term:`URI`.
    """
    if not isinstance(href, str) or not href:
        raise URISyntaxError(f"Invalid URI reference [{href!s}]: empty or not a string.")
    if not all(is_uri_character(char) for char in href):
        raise URISyntaxError(f"Invalid URI reference [{href}]: illegal characters.")
    if URI_INVALID_PERCENT_ENCODING.search(href):
        raise URISyntaxError(f"Invalid URI reference [{href}]: malformed percent-encoded octet.")
    if href.count("#") > 1:
        raise URISyntaxError(f"Invalid URI reference [{href}]: illegal character '#' in fragment.")
    try:
        parts = urlsplit(href)
        parts.port  # noqa  # validates the port number when provided
    except ValueError as exc:
        raise URISyntaxError(f"Invalid URI reference [{href}]: {exc!s}")
    if ":" in href.split("/", 1)[0] and not parts.scheme:
        raise URISyntaxError(f"Invalid URI reference [{href}]: missing scheme.")
    if parts.scheme:
        if not URI_SCHEME.match(parts.scheme):
            raise URISyntaxError(f"Invalid URI reference [{href}]: invalid scheme.")
        if not href.split(":", 1)[1].split("#", 1)[0]:
            raise URISyntaxError(f"Invalid URI reference [{href}]: missing scheme-specific part.")
    if "[" in parts.netloc or "]" in parts.netloc:
        host = parts.netloc.rsplit("@", 1)[-1]
        if not re.match(r"^\[[0-9A-Fa-f:.]+\](:[0-9]*)?$", host):
            raise URISyntaxError(f"Invalid URI reference [{href}]: invalid IPv6 host.")
    elif any(char in parts.path + parts.query + parts.fragment for char in "[]"):
        raise URISyntaxError(f"Invalid URI reference [{href}]: brackets only permitted in host.")
    return href


class ExecuteDeserializer(object):
    """
    Decodes the inputs and outputs of an execution request.

    The :class:`JsonCodec` used to re-serialize values is provided at creation and shared by all decoding
    operations. The deserializer holds no other state, and can be reused for any amount of requests.

    Each input value is decoded according to its shape, in the following order of precedence:

    1. Object with ``inlineValue``: its nested value serialized as :term:`JSON` text, with the sibling ``format``
       of the input or ``text/plain`` by default.
    2. Object with ``href``: a reference to the parsed :term:`URI`, with the sibling ``format`` of the input.
    3. Scalar: its text, with ``text/plain`` format.
    4. Otherwise, when the input provides a ``bbox`` object: the complete input serialized as :term:`JSON` text,
       with ``application/json`` format.

    Any other input cannot be decoded. It is represented by ``None`` in the results, unless strict decoding is
    requested, in which case :class:`UnsupportedInputValue` is raised.
    """

    def __init__(self, codec=None, strict=False):
        # type: (Optional[JsonCodec], bool) -> None
        self.codec = codec if codec is not None else JsonCodec()
        self.strict = strict

    def __repr__(self):
        # type: () -> str
        return f"{type(self).__name__}(codec={self.codec!r}, strict={self.strict})"

    @classmethod
    def from_settings(cls, container=None, codec=None):
        # type: (Optional[AnySettingsContainer], Optional[JsonCodec]) -> ExecuteDeserializer
        """
        Creates the deserializer, and its codec if not provided, with options resolved from the application settings.
        """
        codec = codec if codec is not None else JsonCodec.from_settings(container)
        strict = get_setting_flag(container, SpindleSetting.STRICT_INPUTS)
        return cls(codec=codec, strict=strict)

    def as_text(self, node):
        # type: (JSON) -> str
        """
        Obtains the text of a :term:`JSON` scalar node.

        Strings are returned as is. Other scalars are returned with their :term:`JSON` representation
        (e.g.: ``true``, ``1.5`` or ``null``). Objects, arrays and missing nodes do not have any text.
        """
        if isinstance(node, str):
            return node
        if is_scalar(node):
            return self.codec.dumps(node)
        return ""

    def read_format(self, node):
        # type: (JSON) -> Format
        """
        Obtains the format from the ``mimeType``, ``encoding`` and ``schema`` fields of a :term:`JSON` object.

        Missing or non-scalar fields are represented by empty strings.
        A node that is not an object results in a format with only empty fields.
        """
        if not isinstance(node, dict):
            node = {}
        return Format(
            self.as_text(node.get(MIME_TYPE_KEY, null)),
            self.as_text(node.get(ENCODING_KEY, null)),
            self.as_text(node.get(SCHEMA_KEY, null)),
        )

    def read_outputs(self, outputs):
        # type: (Iterable[ExecuteOutputDescriptor]) -> List[OutputDefinition]
        """
        Decodes the requested outputs, preserving their order.

        The identifier of each output is employed verbatim. Its format fields are resolved the same way as for inputs,
        with empty strings for missing or non-scalar fields. Its transmission mode is resolved as ``VALUE`` only when
        explicitly requested, and as ``REFERENCE`` otherwise.
        """
        definitions = []
        for output in outputs:
            definition = OutputDefinition(
                as_ows_code(output.get(ID_KEY)),
                self.read_format(output.get(FORMAT_KEY)),
                output.get(TRANSMISSION_MODE_KEY),
            )
            LOGGER.debug("Decoded output [%s] with format [%s] and transmission mode [%s].",
                         definition.id, definition.format, definition.transmission_mode.value)
            definitions.append(definition)
        return definitions

    def read_inputs(self, inputs):
        # type: (Iterable[ExecuteInputDescriptor]) -> List[Optional[ProcessData]]
        """
        Decodes the data of the inputs, preserving their order.

        Any input that cannot be decoded is represented by ``None`` at its corresponding position.

        :raises SerializationError: if a value cannot be serialized to its text representation.
        :raises URISyntaxError: if a reference is not a valid :term:`URI`.
        :raises UnsupportedInputValue: if an input cannot be decoded with strict decoding.
        """
        return [
            self.read_input(as_ows_code(descriptor.get(ID_KEY)), descriptor.get(INPUT_KEY))
            for descriptor in inputs
        ]

    def read_input(self, identifier, node):
        # type: (AnyIdentifier, Optional[ExecuteInputNode]) -> Optional[ProcessData]
        """
        Decodes the data of a single input according to the shape of its value.

        :param identifier: identifier of the input.
        :param node: input contents, with its ``value`` or ``bbox`` and optional ``format``.
        :returns: decoded data, or ``None`` if its shape is not supported.
        :raises SerializationError: if a value cannot be serialized to its text representation.
        :raises URISyntaxError: if a reference is not a valid :term:`URI`.
        :raises UnsupportedInputValue: if the input cannot be decoded with strict decoding.
        """
        identifier = identifier if isinstance(identifier, OwsCode) else as_ows_code(identifier)
        if not isinstance(node, dict):
            node = {}
        value = node.get(VALUE_KEY, null)

        if isinstance(value, dict):
            # complex data
            if INLINE_VALUE_KEY in value:
                data_format = FORMAT_TEXT_PLAIN
                if FORMAT_KEY in node:
                    data_format = self.read_format(node[FORMAT_KEY])
                data = self.codec.dumps(value[INLINE_VALUE_KEY])
                LOGGER.debug("Decoded input [%s] as inline value with format [%s].", identifier, data_format)
                return StringValueProcessData(identifier, data_format, data)
            if HREF_KEY in value:
                uri = parse_uri(self.as_text(value[HREF_KEY]))
                data_format = self.read_format(node.get(FORMAT_KEY))
                LOGGER.debug("Decoded input [%s] as reference [%s] with format [%s].", identifier, uri, data_format)
                return ReferenceProcessData(identifier, data_format, uri)
        elif value is not null and is_scalar(value):
            LOGGER.debug("Decoded input [%s] as literal value.", identifier)
            return StringValueProcessData(identifier, FORMAT_TEXT_PLAIN, self.as_text(value))
        elif isinstance(node.get(BBOX_KEY), dict):
            LOGGER.debug("Decoded input [%s] as bounding box.", identifier)
            return StringValueProcessData(identifier, FORMAT_APP_JSON, self.codec.dumps(node))

        message = f"Input [{identifier}] value does not match any supported data representation."
        if self.strict:
            raise UnsupportedInputValue(message, value=repr_json(node, indent=None))
        LOGGER.warning("%s Input is omitted from decoded definitions.", message)
        warnings.warn(message, UnsupportedInputValueWarning)
        return None

    def read_execute(self, body):
        # type: (ExecuteBody) -> ExecuteRequest
        """
        Decodes a complete execution request body.

        :param body: request contents, either as :term:`JSON` text or already parsed.
        :returns: decoded execution request with inputs data and requested outputs.
        :raises InvalidExecuteRequest: if the body cannot be parsed or does not match the expected structure.
        :raises SerializationError: if a value cannot be serialized to its text representation.
        :raises URISyntaxError: if a reference is not a valid :term:`URI`.
        :raises UnsupportedInputValue: if an input cannot be decoded with strict decoding.
        """
        if isinstance(body, (str, bytes, bytearray)):
            body = self.codec.loads(body)
        try:
            sd.Execute().deserialize(body)
        except colander.Invalid as exc:
            LOGGER.debug("Invalid execution request body.", exc_info=exc)
            raise InvalidExecuteRequest(
                "Execution body failed schema validation.",
                value=repr_json(exc.asdict(), indent=None),
            )
        inputs = self.read_inputs(body.get("inputs", []))
        outputs = self.read_outputs(body.get("outputs", []))
        request = ExecuteRequest(inputs, outputs, mode=body.get("mode"), response=body.get("response"))
        LOGGER.info("Decoded execution request with %s inputs (%s omitted) and %s outputs.",
                    len(inputs), len([data for data in inputs if data is None]), len(outputs))
        return request
