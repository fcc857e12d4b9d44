"""
OWSExceptions definitions.

Exceptions are based on :mod:`pyramid.httpexceptions` to provide :term:`OWS` exception reports (:term:`JSON` or
:term:`XML`) that a surrounding web application can return directly when a request fails to be decoded.

Furthermore, interrelation with :mod:`spindle.exceptions` classes (with base :exc:`spindle.exceptions.SpindleException`)
also employ specific :exc:`OWSExceptions` definitions to provide specific error details.
"""
import json as json_pkg
import warnings
from string import Template
from typing import TYPE_CHECKING

from pyramid.httpexceptions import (
    HTTPBadRequest,
    HTTPException,
    HTTPInternalServerError,
    HTTPOk,
    HTTPUnprocessableEntity
)
from pyramid.interfaces import IExceptionResponse
from pyramid.response import Response
from webob.acceptparse import create_accept_header
from zope.interface import implementer

from spindle.formats import ContentType
from spindle.warning import MissingParameterWarning, UnsupportedOperationWarning

if TYPE_CHECKING:
    from typing import Any, Dict, Optional, Union

    from spindle.typedefs import JSON, SettingsType


def resolve_status(status):
    # type: (Union[HTTPException, type, str, None]) -> str
    """
    Obtains the ``<code> <title>`` status line from any of the supported status representations.
    """
    if isinstance(status, type) and issubclass(status, HTTPException):
        return status().status
    if isinstance(status, HTTPException):
        return status.status
    if isinstance(status, str):
        if not status.split(" ", 1)[0].isdigit():
            raise ValueError("status specified as string must be of format '<code> <title>'")
        return status
    return HTTPOk().status


@implementer(IExceptionResponse)
class OWSException(Response, Exception):
    """
    Base OWS Exception definition.

    The report body is generated when the exception is called as a :term:`WSGI` application, in the representation
    that best matches the ``Accept`` header of the request. Any requested :term:`XML` media-type produces an
    ``ExceptionReport`` document, while any other one falls back to :term:`JSON`.
    """

    code = "NoApplicableCode"
    value = None
    locator = "NoApplicableCode"
    description = "Unknown Error"

    page_template = Template("""\
<?xml version="1.0" encoding="utf-8"?>
<ExceptionReport version="1.0.0"
    xmlns="http://www.opengis.net/ows/1.1"
    xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
    xsi:schemaLocation="http://www.opengis.net/ows/1.1 http://schemas.opengis.net/ows/1.1.0/owsExceptionReport.xsd">
    <Exception exceptionCode="${code}" locator="${locator}">
        <ExceptionText>${message}</ExceptionText>
    </Exception>
</ExceptionReport>""")

    def __init__(self, detail=None, value=None, json=None, **kw):
        # type: (Optional[str], Optional[Any], Optional[JSON], Any) -> None
        status = resolve_status(kw.pop("status", None))
        locator = kw.pop("locator", None)
        if isinstance(json, dict):
            detail = detail or json.get("detail") or json.get("description")
            locator = locator or json.get("locator") or json.get("name")
            if value:
                json.setdefault("value", value)
        self.code = str(kw.pop("code", self.code))
        self.description = str(detail or kw.pop("description", self.description))
        if isinstance(json, dict):
            self.description = json.setdefault("description", self.description)
            kw["json"] = json
        Response.__init__(self, status=status, **kw)
        Exception.__init__(self, detail)
        self.message = detail or self.description or getattr(self, "explanation", None)
        self.content_type = ContentType.APP_JSON
        if locator:
            self.locator = locator
        if value is not None:
            self.value = value

    def __str__(self, skip_body=False):
        return self.message

    def __repr__(self):
        if self.message:
            return f"{type(self)}{self.message}"
        return str(type(self))

    @property
    def exception_code(self):
        # type: () -> str
        """
        Code reported in the :term:`OWS` exception report, distinct from the HTTP status code of the response.
        """
        return self.code

    @staticmethod
    def json_formatter(status, body, title, environ):  # noqa
        # type: (str, str, str, SettingsType) -> JSON
        code = int(status.split()[0])       # HTTP status code
        body = {"description": body, "code": title}     # title is the string OGC 'code'
        if code >= 400:
            body["error"] = {"code": code, "status": status}
        return body

    @staticmethod
    def report_content_type(environ):
        # type: (SettingsType) -> str
        """
        Selects the media-type of the exception report from the ``Accept`` header.

        Browsers add HTML automatically, which is matched only to explicitly fall back to :term:`JSON` for it.
        """
        accept = create_accept_header(environ.get("HTTP_ACCEPT", ""))
        match = accept.best_match([ContentType.TEXT_HTML, ContentType.APP_JSON,
                                   ContentType.TEXT_XML, ContentType.APP_XML],
                                  default_match=ContentType.APP_JSON)
        if match in ContentType.ANY_XML:
            return ContentType.TEXT_XML
        return ContentType.APP_JSON

    def report_fields(self):
        # type: () -> Dict[str, str]
        return {
            "code": self.exception_code or "",
            "locator": self.locator or "",
            "message": self.message or "",
        }

    def render_json(self, environ):
        # type: (SettingsType) -> str
        # json exception response should not have status 200
        if self.status_code == HTTPOk.code:
            self.status = HTTPInternalServerError.code
        fields = self.report_fields()
        data = self.json_formatter(status=self.status, body=fields["message"],
                                   title=self.exception_code, environ=environ)
        data["exception"] = fields
        return json_pkg.dumps(data)

    def render_xml(self):
        # type: () -> str
        return self.page_template.substitute(**self.report_fields())

    def prepare(self, environ):
        # type: (SettingsType) -> None
        if self.body:
            return
        self.content_type = self.report_content_type(environ)
        if self.content_type == ContentType.TEXT_XML:
            page = self.render_xml()
        else:
            page = self.render_json(environ)
        page = page.encode(self.charset or "UTF-8")
        self.app_iter = [page]
        self.body = page

    def __call__(self, environ, start_response):
        # unlike webob.exc.WSGIHTTPException, HEAD requests are not handled
        # and the current object is returned instead of generating a new response
        self.prepare(environ)
        return Response.__call__(self, environ, start_response)


class OWSUnprocessableEntity(OWSException):
    """
    Contents were understood, but cannot be processed into the expected representation.
    """
    code = "UnprocessableEntity"
    locator = ""
    description = "Contents cannot be processed."

    def __init__(self, *args, **kwargs):
        kwargs["status"] = HTTPUnprocessableEntity
        super(OWSUnprocessableEntity, self).__init__(*args, **kwargs)
        warnings.warn(self.message, UnsupportedOperationWarning)


class OWSMissingParameterValue(OWSException):
    """
    MissingParameterValue OWS Exception.
    """
    code = "MissingParameterValue"
    locator = ""
    description = "Parameter value is missing"

    def __init__(self, *args, **kwargs):
        kwargs["status"] = HTTPBadRequest
        super(OWSMissingParameterValue, self).__init__(*args, **kwargs)
        warnings.warn(self.message, MissingParameterWarning)


class OWSInvalidParameterValue(OWSException):
    """
    InvalidParameterValue OWS Exception.
    """
    code = "InvalidParameterValue"
    locator = ""
    description = "Parameter value is not acceptable."

    def __init__(self, *args, **kwargs):
        kwargs["status"] = HTTPBadRequest
        super(OWSInvalidParameterValue, self).__init__(*args, **kwargs)
        warnings.warn(self.message, UnsupportedOperationWarning)
