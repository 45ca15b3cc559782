"""Typed asynchronous client for JSON REST services built on httpx."""

from ._config import (
    ApiAuthenticationType,
    RestServiceAuthentication,
    RestServiceSettings,
    resolve_settings,
)
from ._services import (
    CallOutcome,
    CallResult,
    ClientHooks,
    FactoryTransport,
    NamedTransport,
    RestClient,
    TransportProvider,
    TypedTransport,
)
from ._utils import (
    PathParameters,
    QueryParameter,
    QueryParameterCollection,
    RequestSpec,
    compose_url,
)
from .models import BaseAddressMissingError, ErrorKind, RestClientError
from .serialization import (
    Duration,
    JsonSerializer,
    ObjectSerializer,
    PydanticSerializer,
)

__all__ = [
    "ApiAuthenticationType",
    "BaseAddressMissingError",
    "CallOutcome",
    "CallResult",
    "ClientHooks",
    "Duration",
    "ErrorKind",
    "FactoryTransport",
    "JsonSerializer",
    "NamedTransport",
    "ObjectSerializer",
    "PathParameters",
    "PydanticSerializer",
    "QueryParameter",
    "QueryParameterCollection",
    "RequestSpec",
    "RestClient",
    "RestClientError",
    "RestServiceAuthentication",
    "RestServiceSettings",
    "TransportProvider",
    "TypedTransport",
    "compose_url",
    "resolve_settings",
]
