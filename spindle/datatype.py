"""
Definitions of the records produced by the decoding of an execution request.

All records are immutable once created. They also remain plain :class:`dict` to allow their direct use wherever
a :term:`JSON`-like representation of the request contents is expected.
"""
import abc
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from spindle.exceptions import MissingIdentifierValue
from spindle.execute import DataTransmissionMode, ExecuteMode, ExecuteResponse, map_transmission_mode
from spindle.formats import ContentType
from spindle.utils import fully_qualified_name

if TYPE_CHECKING:
    from typing import Any, List, Optional, Sequence, Union
    from urllib.parse import SplitResult

    from spindle.execute import AnyExecuteMode, AnyExecuteResponse
    from spindle.typedefs import JSON

    AnyIdentifier = Union["OwsCode", str]


class DictBase(dict):
    """
    Dictionary with read-only attributes, set once at creation.

    Modifying operations, either by attribute or by key, raise :class:`TypeError` after creation.
    Properties defined by subclasses are resolved from the dictionary keys.
    """

    def __setattr__(self, item, value):
        raise TypeError(f"Attribute [{type(self).__name__}.{item}] is not modifiable!")

    def _not_modifiable(self, *_, **__):
        raise TypeError(f"Record [{type(self).__name__}] is not modifiable!")

    __setitem__ = __delitem__ = __ior__ = _not_modifiable
    clear = pop = popitem = setdefault = update = _not_modifiable

    def __str__(self):
        # type: () -> str
        return type(self).__name__

    def __repr__(self):
        # type: () -> str
        _type = fully_qualified_name(self)
        _repr = dict.__repr__(self)
        return f"{_type} ({_repr})"

    def __reduce__(self):
        return type(self)._from_dict, (dict(self), )

    @classmethod
    def _from_dict(cls, data):
        record = dict.__new__(cls)
        dict.update(record, data)
        return record

    def json(self):
        # type: () -> JSON
        """
        Obtain the :term:`JSON` data representation of the record.
        """
        raise NotImplementedError("Method 'json' must be defined for JSON item representation.")


class OwsCode(DictBase):
    """
    Identifier of an input or output, optionally qualified by a code space.
    """

    def __init__(self, value, code_space=None):
        # type: (str, Optional[str]) -> None
        if value is None:
            raise MissingIdentifierValue("Identifier value is required.")
        super(OwsCode, self).__init__(value=str(value), codeSpace=code_space)

    def __str__(self):
        # type: () -> str
        return self.value

    @property
    def value(self):
        # type: () -> str
        return dict.__getitem__(self, "value")

    @property
    def code_space(self):
        # type: () -> Optional[str]
        return dict.__getitem__(self, "codeSpace")

    def json(self):
        # type: () -> JSON
        if self.code_space:
            return {"value": self.value, "codeSpace": self.code_space}
        return self.value


def as_ows_code(identifier):
    # type: (Optional[AnyIdentifier]) -> OwsCode
    if isinstance(identifier, OwsCode):
        return identifier
    if identifier is None:
        raise MissingIdentifierValue("Input or output descriptor is missing its identifier.")
    return OwsCode(identifier)


class Format(DictBase):
    """
    Media-type, encoding and schema of some data.
    """

    def __init__(self, mime_type=None, encoding=None, schema=None):
        # type: (Optional[str], Optional[str], Optional[str]) -> None
        super(Format, self).__init__(mimeType=mime_type, encoding=encoding, schema=schema)

    def __str__(self):
        # type: () -> str
        params = "; ".join(f"{name}={val}" for name, val in [("encoding", self.encoding), ("schema", self.schema)]
                           if val)
        return f"{self.mime_type or ''}; {params}" if params else self.mime_type or ""

    @property
    def mime_type(self):
        # type: () -> Optional[str]
        return dict.__getitem__(self, "mimeType")

    @property
    def encoding(self):
        # type: () -> Optional[str]
        return dict.__getitem__(self, "encoding")

    @property
    def schema(self):
        # type: () -> Optional[str]
        return dict.__getitem__(self, "schema")

    @property
    def is_empty(self):
        # type: () -> bool
        """
        Indicates if none of the fields provide any detail about the format.
        """
        return not any([self.mime_type, self.encoding, self.schema])

    def json(self):
        # type: () -> JSON
        return dict(self)


FORMAT_TEXT_PLAIN = Format(ContentType.TEXT_PLAIN)
FORMAT_APP_JSON = Format(ContentType.APP_JSON)


class OutputDefinition(DictBase):
    """
    Requested output of the execution, with its desired format and transmission mode.
    """

    def __init__(self,
                 identifier,                # type: AnyIdentifier
                 output_format=None,        # type: Optional[Format]
                 transmission_mode=None,    # type: Optional[Union[DataTransmissionMode, str]]
                 ):                         # type: (...) -> None
        super(OutputDefinition, self).__init__(
            id=as_ows_code(identifier),
            format=output_format if output_format is not None else Format(),
            transmissionMode=map_transmission_mode(transmission_mode),
        )

    def __str__(self):
        # type: () -> str
        return f"{type(self).__name__} <{self.id}>"

    @property
    def id(self):
        # type: () -> OwsCode
        return dict.__getitem__(self, "id")

    @property
    def format(self):
        # type: () -> Format
        return dict.__getitem__(self, "format")

    @property
    def transmission_mode(self):
        # type: () -> DataTransmissionMode
        return dict.__getitem__(self, "transmissionMode")

    def json(self):
        # type: () -> JSON
        return {
            "id": self.id.json(),
            "format": self.format.json(),
            "transmissionMode": self.transmission_mode.value,
        }


class ProcessData(DictBase, abc.ABC):
    """
    Decoded data of an execution input.

    Either the data is provided inline as text (:class:`StringValueProcessData`), or by reference to a :term:`URI`
    where it can be retrieved (:class:`ReferenceProcessData`).
    """

    def __init__(self, identifier, data_format=None, **data):
        # type: (AnyIdentifier, Optional[Format], **Any) -> None
        super(ProcessData, self).__init__(
            id=as_ows_code(identifier),
            format=data_format if data_format is not None else Format(),
            **data
        )

    def __str__(self):
        # type: () -> str
        return f"{type(self).__name__} <{self.id}>"

    @property
    def id(self):
        # type: () -> OwsCode
        return dict.__getitem__(self, "id")

    @property
    def format(self):
        # type: () -> Format
        return dict.__getitem__(self, "format")

    @property
    @abc.abstractmethod
    def is_value(self):
        # type: () -> bool
        raise NotImplementedError

    @property
    def is_reference(self):
        # type: () -> bool
        return not self.is_value

    def json(self):
        # type: () -> JSON
        return {"id": self.id.json(), "format": self.format.json()}


class StringValueProcessData(ProcessData):
    """
    Input data provided inline as text.
    """

    def __init__(self, identifier, data_format, value):
        # type: (AnyIdentifier, Optional[Format], str) -> None
        super(StringValueProcessData, self).__init__(identifier, data_format, value=value)

    @property
    def is_value(self):
        # type: () -> bool
        return True

    @property
    def value(self):
        # type: () -> str
        return dict.__getitem__(self, "value")

    def json(self):
        # type: () -> JSON
        data = super(StringValueProcessData, self).json()
        data["value"] = self.value
        return data


class ReferenceProcessData(ProcessData):
    """
    Input data provided by reference to the :term:`URI` where it can be retrieved.
    """

    def __init__(self, identifier, data_format, uri):
        # type: (AnyIdentifier, Optional[Format], str) -> None
        super(ReferenceProcessData, self).__init__(identifier, data_format, href=uri)

    @property
    def is_value(self):
        # type: () -> bool
        return False

    @property
    def uri(self):
        # type: () -> str
        return dict.__getitem__(self, "href")

    @property
    def uri_parts(self):
        # type: () -> SplitResult
        return urlsplit(self.uri)

    def json(self):
        # type: () -> JSON
        data = super(ReferenceProcessData, self).json()
        data["href"] = self.uri
        return data


class ExecuteRequest(DictBase):
    """
    Decoded execution request, with its inputs data and requested outputs.

    Inputs that could not be decoded are preserved as ``None`` in their original position.
    """

    def __init__(self,
                 inputs,        # type: Sequence[Optional[ProcessData]]
                 outputs,       # type: Sequence[OutputDefinition]
                 mode=None,     # type: Optional[AnyExecuteMode]
                 response=None  # type: Optional[AnyExecuteResponse]
                 ):             # type: (...) -> None
        super(ExecuteRequest, self).__init__(
            inputs=tuple(inputs),
            outputs=tuple(outputs),
            mode=ExecuteMode.get(mode, default=ExecuteMode.AUTO),
            response=ExecuteResponse.get(response, default=ExecuteResponse.DOCUMENT),
        )

    @property
    def inputs(self):
        # type: () -> List[Optional[ProcessData]]
        return list(dict.__getitem__(self, "inputs"))

    @property
    def outputs(self):
        # type: () -> List[OutputDefinition]
        return list(dict.__getitem__(self, "outputs"))

    @property
    def mode(self):
        # type: () -> AnyExecuteMode
        return dict.__getitem__(self, "mode")

    @property
    def response(self):
        # type: () -> AnyExecuteResponse
        return dict.__getitem__(self, "response")

    def json(self):
        # type: () -> JSON
        return {
            "inputs": [data.json() if data is not None else None for data in self.inputs],
            "outputs": [output.json() for output in self.outputs],
            "mode": self.mode,
            "response": self.response,
        }
