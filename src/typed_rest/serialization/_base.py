import base64
import dataclasses
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Protocol, TypeVar, runtime_checkable
from uuid import UUID

from pydantic import BaseModel

from .._utils._durations import format_duration

T = TypeVar("T")


@runtime_checkable
class ObjectSerializer(Protocol):
    """Converts request payloads to JSON text and response bodies back to objects.

    Implementations must map ``None`` input to ``None`` output.
    """

    name: str

    async def serialize(self, data: Any) -> Optional[str]: ...

    async def deserialize(self, content: Optional[str], target_type: type[T]) -> Optional[T]: ...


def json_default(value: Any) -> Any:
    """``default`` hook for :func:`json.dumps` covering the non-JSON types we send."""
    if isinstance(value, timedelta):
        return format_duration(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(value).decode("ascii")
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, BaseModel):
        return value.model_dump(mode="python", by_alias=True)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (set, frozenset)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
