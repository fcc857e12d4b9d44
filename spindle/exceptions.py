"""
Errors raised during the spindle flow.

Errors raised while decoding an execution request inherit from :mod:`pyramid.httpexceptions` classes and from
:class:`spindle.owsexceptions.OWSException` derived classes, allowing a surrounding web application to render them
directly as HTTP error responses or :term:`OWS` exception reports.
"""
import logging
from typing import TYPE_CHECKING

from pyramid.httpexceptions import HTTPBadRequest, HTTPUnprocessableEntity

from spindle.owsexceptions import (
    OWSException,
    OWSInvalidParameterValue,
    OWSMissingParameterValue,
    OWSUnprocessableEntity
)

if TYPE_CHECKING:
    from spindle.typedefs import SettingsType

LOGGER = logging.getLogger(__name__)


class SpindleException(Exception):
    """
    Base class of exceptions defined by :mod:`spindle` package.
    """
    code = 500
    title = "Internal Server Error"
    detail = message = comment = explanation = "Unknown error"


class ExecuteDecodeError(OWSException, SpindleException):
    """
    Base exception related to the decoding of an execution request.

    When combined with a :mod:`pyramid.httpexceptions` class, the HTTP status code comes from that class, while the
    :term:`OWS` exception report is still generated with the code of the :class:`OWSException` it is combined with.
    """
    locator = "execute"

    @property
    def exception_code(self):
        # type: () -> str
        for cls in type(self).__mro__:
            if issubclass(cls, OWSException) and "code" in vars(cls):
                return cls.code
        return OWSException.code

    def prepare(self, environ):
        # type: (SettingsType) -> None
        OWSException.prepare(self, environ)


class InvalidExecuteRequest(ExecuteDecodeError, HTTPBadRequest, OWSInvalidParameterValue, ValueError):
    """
    Error related to an execution request body that cannot be parsed or that does not match the expected structure.
    """
    locator = "body"


class MissingIdentifierValue(ExecuteDecodeError, HTTPBadRequest, OWSMissingParameterValue, ValueError):
    """
    Error related to missing identifier parameter.

    Error indicating that an input or output descriptor does not provide the ID required to create its definition.
    """
    locator = "identifier"


class SerializationError(ExecuteDecodeError, HTTPUnprocessableEntity, OWSUnprocessableEntity, ValueError):
    """
    Error related to a value that cannot be re-encoded into its :term:`JSON` text representation.

    Raised when a nested inline value or a complete input definition cannot be serialized.
    """
    locator = "value"


class URISyntaxError(ExecuteDecodeError, HTTPBadRequest, OWSInvalidParameterValue, ValueError):
    """
    Error related to a reference ``href`` that is not a valid :term:`URI`.
    """
    locator = "href"


class UnsupportedInputValue(ExecuteDecodeError, HTTPBadRequest, OWSInvalidParameterValue, ValueError):
    """
    Error related to an input value of a structure that does not correspond to any known data representation.

    Only raised when strict input decoding is requested. Otherwise, such input is omitted with a warning.
    """
    locator = "input"
