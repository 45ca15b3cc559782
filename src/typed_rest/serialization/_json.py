import base64
import dataclasses
import json
import types
from collections.abc import Mapping
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Optional, TypeVar, Union, get_args, get_origin, get_type_hints
from uuid import UUID

from pydantic import BaseModel

from .._utils._durations import parse_duration
from ._base import json_default

T = TypeVar("T")

_SEQUENCE_ORIGINS = (list, tuple, set, frozenset)


class JsonSerializer:
    """Serializer built on the standard library :mod:`json` module.

    Reads responses into dataclasses, containers, enums and the usual scalar
    types by walking the target type hints. ``timedelta`` fields are read from
    and written in the fixed duration layout.
    """

    name = "json"

    def __init__(self, *, indent: Optional[int] = None) -> None:
        self.indent = indent

    async def serialize(self, data: Any) -> Optional[str]:
        if data is None:
            return None
        separators = None if self.indent is not None else (",", ":")
        return json.dumps(
            data,
            default=json_default,
            ensure_ascii=False,
            indent=self.indent,
            separators=separators,
        )

    async def deserialize(self, content: Optional[str], target_type: type[T]) -> Optional[T]:
        if content is None:
            return None
        return _convert(json.loads(content), target_type)


def _convert(value: Any, target_type: Any) -> Any:
    if target_type is Any or target_type is object:
        return value

    origin = get_origin(target_type)
    args = get_args(target_type)

    if origin is Annotated:
        return _convert(value, args[0])

    if value is None:
        return None

    if origin is Union or origin is types.UnionType:
        errors = []
        for candidate in (arg for arg in args if arg is not type(None)):
            try:
                return _convert(value, candidate)
            except (TypeError, ValueError) as e:
                errors.append(f"{candidate}: {e}")
        raise TypeError(f"Value {value!r} matches none of {target_type}: {errors}")

    if origin in _SEQUENCE_ORIGINS:
        if not isinstance(value, list):
            raise TypeError(f"Expected JSON array for {target_type}, got {type(value).__name__}")
        if origin is tuple and args and args[-1] is not Ellipsis:
            return tuple(_convert(item, arg) for item, arg in zip(value, args))
        item_type = args[0] if args else Any
        return origin(_convert(item, item_type) for item in value)

    if origin is dict or (isinstance(origin, type) and issubclass(origin, Mapping)):
        if not isinstance(value, dict):
            raise TypeError(f"Expected JSON object for {target_type}, got {type(value).__name__}")
        key_type, value_type = args if args else (Any, Any)
        return {
            _convert(key, key_type): _convert(item, value_type)
            for key, item in value.items()
        }

    if target_type in _SEQUENCE_ORIGINS:
        item_type = (Any, ...) if target_type is tuple else Any
        return _convert(value, target_type[item_type])
    if target_type is dict:
        return _convert(value, dict[str, Any])

    if isinstance(target_type, type):
        if dataclasses.is_dataclass(target_type):
            return _convert_dataclass(value, target_type)
        if issubclass(target_type, BaseModel):
            return target_type.model_validate(value)
        return _convert_scalar(value, target_type)

    raise TypeError(f"Unsupported target type {target_type!r}")


def _convert_dataclass(value: Any, target_type: type) -> Any:
    if not isinstance(value, dict):
        raise TypeError(
            f"Expected JSON object for {target_type.__name__}, got {type(value).__name__}"
        )
    hints = get_type_hints(target_type, include_extras=True)
    kwargs = {
        field.name: _convert(value[field.name], hints.get(field.name, Any))
        for field in dataclasses.fields(target_type)
        if field.init and field.name in value
    }
    return target_type(**kwargs)


def _convert_scalar(value: Any, target_type: type) -> Any:
    if target_type is bool:
        if not isinstance(value, bool):
            raise TypeError(f"Expected boolean, got {type(value).__name__}")
        return value
    if issubclass(target_type, Enum):
        return target_type(value)
    if target_type is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Expected integer, got {type(value).__name__}")
        return value
    if target_type is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"Expected number, got {type(value).__name__}")
        return float(value)
    if target_type is Decimal:
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise TypeError(f"Expected number, got {type(value).__name__}")
        return Decimal(str(value))
    if target_type is str:
        if not isinstance(value, str):
            raise TypeError(f"Expected string, got {type(value).__name__}")
        return value

    if not isinstance(value, str):
        raise TypeError(
            f"Expected string for {target_type.__name__}, got {type(value).__name__}"
        )
    if target_type is timedelta:
        return parse_duration(value)
    if target_type is datetime:
        return datetime.fromisoformat(value)
    if target_type is date:
        return date.fromisoformat(value)
    if target_type is time:
        return time.fromisoformat(value)
    if target_type is UUID:
        return UUID(value)
    if target_type is bytes:
        return base64.b64decode(value)
    raise TypeError(f"Unsupported target type {target_type.__name__}")
