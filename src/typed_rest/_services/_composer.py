from logging import getLogger

from httpx import AsyncClient, Headers, Request

from .._config import RestServiceSettings
from .._utils._auth import resolve_authorization
from .._utils._headers import merge_headers
from .._utils._request_spec import RequestSpec
from .._utils._url import compose_url
from .._utils.constants import (
    ANY_MEDIA_TYPE,
    APPLICATION_JSON,
    APPLICATION_JSON_UTF8,
    HEADER_ACCEPT,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    LOGGER_NAME,
)
from ..serialization import ObjectSerializer
from ._hooks import ClientHooks


class RequestComposer:
    """Builds the outbound request of one call.

    Header precedence, lowest first: the settings' default headers (installed
    on the HTTP client), the authorization header, the common headers hook,
    the per-call headers.
    """

    def __init__(
        self,
        settings: RestServiceSettings,
        serializer: ObjectSerializer,
        hooks: ClientHooks,
    ) -> None:
        self._logger = getLogger(LOGGER_NAME)
        self._settings = settings
        self._serializer = serializer
        self._hooks = hooks

    async def compose(self, client: AsyncClient, spec: RequestSpec) -> Request:
        url = compose_url(spec.operation, spec.path_parameters, spec.query_parameters)
        headers = Headers()

        content = None
        if spec.data is not None:
            self._logger.debug("Adding payload data to API RestClient request.")
            content = await self._serializer.serialize(spec.data)
            if content is not None:
                headers[HEADER_CONTENT_TYPE] = APPLICATION_JSON_UTF8

        authorization = await resolve_authorization(
            self._settings.authentication,
            self._hooks.authentication_key_value,
            self._hooks.authentication_key_value_async,
        )
        if authorization:
            headers[HEADER_AUTHORIZATION] = authorization

        merge_headers(headers, self._hooks.common_headers(), source="common")
        merge_headers(headers, spec.headers, source="call")

        if not self._has_accept(client, headers):
            self._logger.debug("Adding default Accept header for JSON.")
            headers[HEADER_ACCEPT] = APPLICATION_JSON

        return client.build_request(spec.method, url, content=content, headers=headers)

    def _has_accept(self, client: AsyncClient, headers: Headers) -> bool:
        if HEADER_ACCEPT in headers or self._settings.has_default_header(HEADER_ACCEPT):
            return True
        # httpx installs "Accept: */*" on every client it builds
        return client.headers.get(HEADER_ACCEPT, ANY_MEDIA_TYPE) != ANY_MEDIA_TYPE
