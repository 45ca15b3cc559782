from ._dispatcher import CallOutcome, CallResult
from ._hooks import ClientHooks
from ._transport import (
    FactoryTransport,
    NamedTransport,
    TransportProvider,
    TypedTransport,
)
from .rest_client import RestClient

__all__ = [
    "CallOutcome",
    "CallResult",
    "ClientHooks",
    "FactoryTransport",
    "NamedTransport",
    "RestClient",
    "TransportProvider",
    "TypedTransport",
]
