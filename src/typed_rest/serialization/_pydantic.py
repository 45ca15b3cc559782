import dataclasses
import json
import types
from datetime import timedelta
from functools import lru_cache
from typing import (
    Annotated,
    Any,
    Optional,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
    is_typeddict,
)

from pydantic import BaseModel, TypeAdapter

from .._utils._durations import parse_duration
from ._base import json_default

T = TypeVar("T")

_SEQUENCE_ORIGINS = (list, tuple, set, frozenset)


@lru_cache(maxsize=256)
def _type_adapter(target_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target_type)


def _read_durations(value: Any, annotation: Any) -> Any:
    """Parse duration strings found at ``timedelta`` positions of ``annotation``.

    Only unambiguous positions are rewritten: unions with more than one
    non-None member and strings that are not in the duration layout are left
    for pydantic to validate.
    """
    if value is None or annotation is Any:
        return value

    origin = get_origin(annotation)
    args = get_args(annotation)

    if origin is Annotated:
        return _read_durations(value, args[0])

    if origin is Union or origin is types.UnionType:
        members = [arg for arg in args if arg is not type(None)]
        return _read_durations(value, members[0]) if len(members) == 1 else value

    if annotation is timedelta:
        if not isinstance(value, str):
            return value
        try:
            return parse_duration(value)
        except ValueError:
            return value

    if origin in _SEQUENCE_ORIGINS and isinstance(value, list):
        if origin is tuple and args and args[-1] is not Ellipsis:
            head = [_read_durations(item, arg) for item, arg in zip(value, args)]
            return head + value[len(head) :]
        item_type = args[0] if args else Any
        return [_read_durations(item, item_type) for item in value]

    if origin is dict and isinstance(value, dict):
        value_type = args[1] if args else Any
        return {key: _read_durations(item, value_type) for key, item in value.items()}

    if not isinstance(value, dict) or not isinstance(annotation, type):
        return value

    if issubclass(annotation, BaseModel):
        converted = dict(value)
        for name, field in annotation.model_fields.items():
            for key in {field.alias or name, name}:
                if key in converted:
                    converted[key] = _read_durations(converted[key], field.annotation)
        return converted

    if dataclasses.is_dataclass(annotation) or is_typeddict(annotation):
        hints = get_type_hints(annotation, include_extras=True)
        return {
            key: _read_durations(item, hints.get(key, Any)) for key, item in value.items()
        }

    return value


class PydanticSerializer:
    """Serializer backed by pydantic ``TypeAdapter``.

    Works with pydantic models, dataclasses, TypedDicts and plain containers.
    Payloads are dumped by pydantic and written as compact JSON. ``timedelta``
    values are written in the fixed duration layout and read back from it,
    including plain ``timedelta`` fields that pydantic alone would only read
    in ISO 8601 form.
    """

    name = "pydantic"

    def __init__(self, *, by_alias: bool = True, exclude_none: bool = False) -> None:
        self.by_alias = by_alias
        self.exclude_none = exclude_none

    async def serialize(self, data: Any) -> Optional[str]:
        if data is None:
            return None
        payload = _type_adapter(type(data)).dump_python(
            data,
            mode="python",
            by_alias=self.by_alias,
            exclude_none=self.exclude_none,
        )
        return json.dumps(
            payload, default=json_default, ensure_ascii=False, separators=(",", ":")
        )

    async def deserialize(self, content: Optional[str], target_type: type[T]) -> Optional[T]:
        if content is None:
            return None
        payload = _read_durations(json.loads(content), target_type)
        return _type_adapter(target_type).validate_python(payload)


default_serializer = PydanticSerializer()
