from datetime import timedelta
from logging import getLogger
from typing import Any, Mapping, Optional, Union

from httpx import AsyncClient, Request

from .._config import RestServiceSettings
from .._utils._parameters import PathParameters, QueryParameterCollection
from .._utils._request_spec import RequestSpec
from .._utils.constants import LOGGER_NAME
from ..serialization import ObjectSerializer, default_serializer
from ._composer import RequestComposer
from ._decoder import ResponseDecoder
from ._dispatcher import CallResult, Dispatcher
from ._hooks import ClientHooks
from ._transport import TransportProvider, as_transport_provider

PathParametersArg = Union[PathParameters, Mapping[str, Any], None]
QueryParametersArg = Union[QueryParameterCollection, Mapping[str, Any], None]


class RestClient:
    """Asynchronous client for a JSON REST service.

    Every call goes through the same pipeline: the request is composed from
    the operation template, parameters, body and headers, sent through the
    configured transport and, when a ``response_type`` is given, the body is
    read back as that type.

    Examples:
        ```python
        settings = RestServiceSettings(base_address="https://api.example.com/")
        async with RestClient(settings) as client:
            item = await client.get(
                "items/{id}", path_parameters={"id": 7}, response_type=Item
            )
        ```
    """

    def __init__(
        self,
        settings: RestServiceSettings,
        transport: Union[TransportProvider, AsyncClient, None] = None,
        *,
        serializer: Optional[ObjectSerializer] = None,
        hooks: Optional[ClientHooks] = None,
        throw_on_cancellation: bool = True,
    ) -> None:
        self._logger = getLogger(LOGGER_NAME)
        self._settings = settings
        self._transport = as_transport_provider(transport)
        self._serializer = serializer or default_serializer
        self._hooks = hooks or ClientHooks()

        self._composer = RequestComposer(settings, self._serializer, self._hooks)
        self._dispatcher = Dispatcher(
            self._hooks, throw_on_cancellation=throw_on_cancellation
        )
        self._decoder = ResponseDecoder(self._serializer)
        self._last_call: Optional[CallResult] = None

        self._logger.debug(f"Created API RestClient to {settings.base_address}")

    @property
    def settings(self) -> RestServiceSettings:
        return self._settings

    @property
    def throw_on_cancellation(self) -> bool:
        return self._dispatcher.throw_on_cancellation

    @throw_on_cancellation.setter
    def throw_on_cancellation(self, value: bool) -> None:
        self._dispatcher.throw_on_cancellation = value

    @property
    def last_call(self) -> Optional[CallResult]:
        """Result of the most recent call.

        Shared by all calls made through this client, so it is only meaningful
        when calls are not issued concurrently. Prefer the :class:`CallResult`
        returned by :meth:`dispatch`.
        """
        return self._last_call

    @property
    def call_time(self) -> Optional[timedelta]:
        return self._last_call.call_time if self._last_call else None

    @property
    def status_code(self) -> Optional[int]:
        return self._last_call.status_code if self._last_call else None

    @property
    def is_success_status_code(self) -> bool:
        return self._last_call.is_success_status_code if self._last_call else False

    async def build_request(
        self,
        method: str,
        operation: str,
        data: Any = None,
        *,
        path_parameters: PathParametersArg = None,
        query_parameters: QueryParametersArg = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Request:
        """Compose the request a call would send, without sending it."""
        spec = self._spec(method, operation, data, path_parameters, query_parameters, headers)
        client = await self._transport.acquire(self._settings)
        try:
            return await self._composer.compose(client, spec)
        finally:
            await self._transport.release(client)

    async def dispatch(self, spec: RequestSpec) -> CallResult:
        """Send one call and return its outcome without raising for failures.

        The response body, when there is one, is fully read before the
        transport releases the HTTP client.
        """
        client = await self._transport.acquire(self._settings)
        try:
            request = await self._composer.compose(client, spec)
            result = await self._dispatcher.dispatch(client, request)
            self._last_call = result
            return result
        finally:
            await self._transport.release(client)

    async def send(
        self,
        method: str,
        operation: str,
        data: Any = None,
        *,
        path_parameters: PathParametersArg = None,
        query_parameters: QueryParametersArg = None,
        headers: Optional[Mapping[str, str]] = None,
        response_type: Optional[type] = None,
    ) -> Any:
        """Send one call.

        Args:
            method: HTTP verb.
            operation: Relative URL template, e.g. ``"items/{id}"``.
            data: Request body, serialized with the configured serializer.
            path_parameters: Values for the ``{placeholders}`` in ``operation``.
            query_parameters: Query string parameters.
            headers: Per-call headers; these override every other header source.
            response_type: Type to read the response body into. When omitted
                the ``httpx.Response`` is returned with its body read.

        Returns:
            The response, or the deserialized body (None for empty responses
            and for failures suppressed by the after-call hook).

        Raises:
            RestClientError: On a non-success status code or an unreadable body.
            httpx.TransportError: When the service cannot be reached.
            asyncio.CancelledError: When the call is cancelled.
        """
        spec = self._spec(method, operation, data, path_parameters, query_parameters, headers)
        result = await self.dispatch(spec)
        if result.raise_error and result.error is not None:
            raise result.error

        if response_type is None:
            return result.response
        return await self._decoder.decode(result, response_type)

    async def get(
        self,
        operation: str,
        data: Any = None,
        *,
        path_parameters: PathParametersArg = None,
        query_parameters: QueryParametersArg = None,
        headers: Optional[Mapping[str, str]] = None,
        response_type: Optional[type] = None,
    ) -> Any:
        return await self.send(
            "GET",
            operation,
            data,
            path_parameters=path_parameters,
            query_parameters=query_parameters,
            headers=headers,
            response_type=response_type,
        )

    async def post(
        self,
        operation: str,
        data: Any = None,
        *,
        path_parameters: PathParametersArg = None,
        query_parameters: QueryParametersArg = None,
        headers: Optional[Mapping[str, str]] = None,
        response_type: Optional[type] = None,
    ) -> Any:
        return await self.send(
            "POST",
            operation,
            data,
            path_parameters=path_parameters,
            query_parameters=query_parameters,
            headers=headers,
            response_type=response_type,
        )

    async def put(
        self,
        operation: str,
        data: Any = None,
        *,
        path_parameters: PathParametersArg = None,
        query_parameters: QueryParametersArg = None,
        headers: Optional[Mapping[str, str]] = None,
        response_type: Optional[type] = None,
    ) -> Any:
        return await self.send(
            "PUT",
            operation,
            data,
            path_parameters=path_parameters,
            query_parameters=query_parameters,
            headers=headers,
            response_type=response_type,
        )

    async def patch(
        self,
        operation: str,
        data: Any = None,
        *,
        path_parameters: PathParametersArg = None,
        query_parameters: QueryParametersArg = None,
        headers: Optional[Mapping[str, str]] = None,
        response_type: Optional[type] = None,
    ) -> Any:
        return await self.send(
            "PATCH",
            operation,
            data,
            path_parameters=path_parameters,
            query_parameters=query_parameters,
            headers=headers,
            response_type=response_type,
        )

    async def delete(
        self,
        operation: str,
        data: Any = None,
        *,
        path_parameters: PathParametersArg = None,
        query_parameters: QueryParametersArg = None,
        headers: Optional[Mapping[str, str]] = None,
        response_type: Optional[type] = None,
    ) -> Any:
        return await self.send(
            "DELETE",
            operation,
            data,
            path_parameters=path_parameters,
            query_parameters=query_parameters,
            headers=headers,
            response_type=response_type,
        )

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> "RestClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    @staticmethod
    def _spec(
        method: str,
        operation: str,
        data: Any,
        path_parameters: PathParametersArg,
        query_parameters: QueryParametersArg,
        headers: Optional[Mapping[str, str]],
    ) -> RequestSpec:
        return RequestSpec(
            method=method,
            operation=operation,
            data=data,
            path_parameters=path_parameters,  # type: ignore[arg-type]
            query_parameters=query_parameters,  # type: ignore[arg-type]
            headers=dict(headers or {}),
        )
