import datetime
import json
import logging
from typing import TYPE_CHECKING

from spindle.base import Constants

if TYPE_CHECKING:
    from typing import Any, Optional, Tuple, Union

    from spindle.typedefs import JSON

LOGGER = logging.getLogger(__name__)


class ContentType(Constants):
    """
    Supported ``Content-Type`` values.

    Media-Type nomenclature::

        <type> "/" [x- | <tree> "."] <subtype> ["+" suffix] *[";" parameter=value]
    """

    APP_GEOJSON = "application/geo+json"
    APP_JSON = "application/json"
    APP_XML = "application/xml"
    IMAGE_GEOTIFF = "image/tiff; subtype=geotiff"
    TEXT_HTML = "text/html"
    TEXT_PLAIN = "text/plain"
    TEXT_XML = "text/xml"

    # special handling
    ANY_XML = {APP_XML, TEXT_XML}


def json_default_handler(obj):
    # type: (Any) -> Union[JSON, str, None]
    if isinstance(obj, (datetime.date, datetime.datetime)):
        return obj.isoformat()
    raise TypeError(f"Type {type(obj)} not serializable.")


def repr_json(data, force_string=True, ensure_ascii=False, indent=2, separators=None, **kwargs):
    # type: (Any, bool, bool, Optional[int], Optional[Tuple[str, str]], **Any) -> Union[JSON, str, None]
    """
    Ensure that the input data can be serialized as JSON to return it formatted representation as such.

    If formatting as JSON fails, returns the data as string representation or ``None`` accordingly.
    """
    if data is None:
        return None
    default = kwargs.pop("default", None)
    if default is None:
        default = json_default_handler
    try:
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except ValueError:
                return data.strip()  # avoid adding additional quotes
        data_str = json.dumps(
            data,
            indent=indent,
            ensure_ascii=ensure_ascii,
            separators=separators,
            default=default,
            **kwargs,
        )
        return data_str.strip() if force_string else data
    except Exception:  # noqa: W0703 # nosec: B110
        return str(data)
