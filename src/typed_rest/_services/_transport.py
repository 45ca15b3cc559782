"""Strategies for obtaining the ``httpx.AsyncClient`` a call is sent through.

The base address and default headers of a client are applied once, before
the client serves its first call, and never changed afterwards.
"""

import asyncio
from logging import getLogger
from typing import Callable, Optional, Protocol, Union, runtime_checkable

from httpx import AsyncClient

from .._config import RestServiceSettings
from .._utils.constants import LOGGER_NAME

logger = getLogger(LOGGER_NAME)

ClientFactory = Callable[[], AsyncClient]
NamedClientFactory = Callable[[str], AsyncClient]


@runtime_checkable
class TransportProvider(Protocol):
    async def acquire(self, settings: RestServiceSettings) -> AsyncClient: ...

    async def release(self, client: AsyncClient) -> None: ...

    async def aclose(self) -> None: ...


def configure_client(client: AsyncClient, settings: RestServiceSettings) -> AsyncClient:
    client.base_url = settings.base_address
    if settings.request_headers:
        client.headers.update(settings.request_headers)
    logger.debug(f"Configured HTTP client for {settings.base_address}")
    return client


def _new_client(_: Optional[str] = None) -> AsyncClient:
    return AsyncClient()


class TypedTransport:
    """Sends every call through one client handed over at construction."""

    def __init__(self, client: AsyncClient, *, owns_client: bool = False) -> None:
        self._client = client
        self._owns_client = owns_client
        self._configured = False

    async def acquire(self, settings: RestServiceSettings) -> AsyncClient:
        if not self._configured:
            configure_client(self._client, settings)
            self._configured = True
        return self._client

    async def release(self, client: AsyncClient) -> None:
        return None

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class FactoryTransport:
    """Requests a fresh client from ``factory`` for every call and closes it afterwards."""

    def __init__(self, factory: ClientFactory = _new_client) -> None:
        self._factory = factory

    async def acquire(self, settings: RestServiceSettings) -> AsyncClient:
        return configure_client(self._factory(), settings)

    async def release(self, client: AsyncClient) -> None:
        await client.aclose()

    async def aclose(self) -> None:
        return None


class NamedTransport:
    """Lazily creates one client by name and shares it between all calls.

    The name falls back to ``settings.factory_name``.
    """

    def __init__(
        self, name: Optional[str] = None, factory: NamedClientFactory = _new_client
    ) -> None:
        self._name = name
        self._factory = factory
        self._client: Optional[AsyncClient] = None
        self._lock = asyncio.Lock()

    @property
    def client(self) -> Optional[AsyncClient]:
        return self._client

    async def acquire(self, settings: RestServiceSettings) -> AsyncClient:
        if self._client is not None:
            return self._client

        name = self._name or settings.factory_name
        if not name:
            raise ValueError("Named client should have name set.")

        async with self._lock:
            if self._client is None:
                logger.debug(f"Creating named HTTP client {name}")
                self._client = configure_client(self._factory(name), settings)
        return self._client

    async def release(self, client: AsyncClient) -> None:
        return None

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def as_transport_provider(
    transport: Union[TransportProvider, AsyncClient, None],
) -> TransportProvider:
    if transport is None:
        return TypedTransport(AsyncClient(), owns_client=True)
    if isinstance(transport, AsyncClient):
        return TypedTransport(transport)
    return transport
