from typing import TYPE_CHECKING  # pragma: no cover

if TYPE_CHECKING:
    from typing import Dict, List, Optional, Union

    from pyramid.config import Configurator
    from pyramid.registry import Registry
    from typing_extensions import Literal, TypeAlias

    # pylint: disable=C0103,invalid-name
    Number = Union[int, float]
    ValueType = Union[str, Number, bool]
    AnyValueType = Optional[ValueType]
    AnyKey = Union[str, int]
    # add more levels of explicit definitions than necessary to simulate JSON recursive structure better than 'Any'
    # amount of repeated equivalent definition makes typing analysis 'work well enough' for most use cases
    _JSON: TypeAlias = "JSON"
    _JsonObjectItemAlias: TypeAlias = "_JsonObjectItem"
    _JsonListItemAlias: TypeAlias = "_JsonListItem"
    _JsonObjectItem = Dict[str, Union[AnyValueType, _JSON, _JsonObjectItemAlias, _JsonListItemAlias]]
    _JsonListItem = List[Union[AnyValueType, _JSON, _JsonObjectItem, _JsonListItemAlias]]
    _JsonItem = Union[AnyValueType, _JSON, _JsonObjectItem, _JsonListItem]
    JSON = Union[Dict[str, Union[_JSON, _JsonItem]], List[Union[_JSON, _JsonItem]], AnyValueType]

    SettingValue = Optional[Union[JSON, AnyValueType]]
    SettingsType = Dict[str, SettingValue]
    AnySettingsContainer = Union[Configurator, Registry, SettingsType]

    AnyLogLevel = Union[str, int]

    # execution request contents, as received in the body
    ExecuteInputDescriptor = Dict[str, JSON]    # {"id": "...", "input": {...}}
    ExecuteOutputDescriptor = Dict[str, JSON]   # {"id": "...", "format": {...}, "transmissionMode": "..."}
    ExecuteInputNode = Dict[str, JSON]          # {"value": ..., "format": {...}, "bbox": {...}}
    ExecuteBody = Union[str, bytes, Dict[str, JSON]]
