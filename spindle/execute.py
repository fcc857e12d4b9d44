import logging
from typing import TYPE_CHECKING

from spindle.base import Constants, ExtendedEnum

if TYPE_CHECKING:
    from typing import Any, Optional, Union

    from spindle.typedefs import Literal

    ExecutionModeAutoType = Literal["auto"]
    ExecutionModeAsyncType = Literal["async"]
    ExecutionModeSyncType = Literal["sync"]
    AnyExecuteMode = Union[
        ExecutionModeAutoType,
        ExecutionModeAsyncType,
        ExecutionModeSyncType,
    ]
    ExecuteResponseDocumentType = Literal["document"]
    ExecuteResponseRawType = Literal["raw"]
    AnyExecuteResponse = Union[
        ExecuteResponseDocumentType,
        ExecuteResponseRawType,
    ]
    ExecuteTransmissionModeReferenceType = Literal["reference"]
    ExecuteTransmissionModeValueType = Literal["value"]
    AnyExecuteTransmissionMode = Union[
        ExecuteTransmissionModeReferenceType,
        ExecuteTransmissionModeValueType,
    ]

LOGGER = logging.getLogger(__name__)


class ExecuteMode(Constants):
    AUTO = "auto"       # type: ExecutionModeAutoType
    ASYNC = "async"     # type: ExecutionModeAsyncType
    SYNC = "sync"       # type: ExecutionModeSyncType


class ExecuteResponse(Constants):
    RAW = "raw"             # type: ExecuteResponseRawType
    DOCUMENT = "document"   # type: ExecuteResponseDocumentType


class ExecuteTransmissionMode(Constants):
    """
    Transmission mode tokens accepted in the execution request body for each requested output.
    """
    VALUE = "value"             # type: ExecuteTransmissionModeValueType
    REFERENCE = "reference"     # type: ExecuteTransmissionModeReferenceType


class DataTransmissionMode(ExtendedEnum):
    """
    Transmission mode of an output definition, once decoded from the execution request.
    """
    VALUE = "VALUE"
    REFERENCE = "REFERENCE"


def map_transmission_mode(transmission_mode):
    # type: (Optional[Union[AnyExecuteTransmissionMode, DataTransmissionMode, Any]]) -> DataTransmissionMode
    """
    Obtains the output definition transmission mode corresponding to the token provided in the execution request.

    Only an explicit ``value`` token (case-insensitive) results in :attr:`DataTransmissionMode.VALUE`.
    Anything else, including ``reference``, a missing token or an unknown one, is resolved as
    :attr:`DataTransmissionMode.REFERENCE`.
    """
    if isinstance(transmission_mode, DataTransmissionMode):
        return transmission_mode
    mode = ExecuteTransmissionMode.get(transmission_mode) if isinstance(transmission_mode, str) else None
    if mode == ExecuteTransmissionMode.VALUE:
        return DataTransmissionMode.VALUE
    if mode != ExecuteTransmissionMode.REFERENCE:
        LOGGER.debug("Unknown transmission mode [%s] resolved as [%s].",
                     transmission_mode, DataTransmissionMode.REFERENCE.value)
    return DataTransmissionMode.REFERENCE
