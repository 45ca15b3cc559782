from ._durations import Duration, format_duration, parse_duration
from ._headers import merge_headers
from ._parameters import PathParameters, QueryParameter, QueryParameterCollection
from ._request_spec import RequestSpec
from ._url import compose_url

__all__ = [
    "Duration",
    "PathParameters",
    "QueryParameter",
    "QueryParameterCollection",
    "RequestSpec",
    "compose_url",
    "format_duration",
    "merge_headers",
    "parse_duration",
]
