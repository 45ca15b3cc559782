from .._utils._durations import (
    Duration,
    PreciseTimedelta,
    format_duration,
    parse_duration,
)
from ._base import ObjectSerializer, json_default
from ._json import JsonSerializer
from ._pydantic import PydanticSerializer, default_serializer

__all__ = [
    "Duration",
    "JsonSerializer",
    "ObjectSerializer",
    "PreciseTimedelta",
    "PydanticSerializer",
    "default_serializer",
    "format_duration",
    "json_default",
    "parse_duration",
]
