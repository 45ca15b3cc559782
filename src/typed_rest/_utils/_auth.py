import base64
from logging import getLogger
from typing import Awaitable, Callable, Optional

from .._config import ApiAuthenticationType, RestServiceAuthentication
from .constants import LOGGER_NAME

logger = getLogger(LOGGER_NAME)

AuthKeyValue = tuple[str, str]


def basic_authorization(username: Optional[str], password: Optional[str]) -> str:
    credentials = f"{username or ''}:{password or ''}".encode("ascii", errors="replace")
    return f"Basic {base64.b64encode(credentials).decode('ascii')}"


def _is_complete(key_value: Optional[AuthKeyValue]) -> bool:
    return bool(key_value and key_value[0] and key_value[1])


async def resolve_authorization(
    authentication: RestServiceAuthentication,
    key_value: Optional[Callable[[], AuthKeyValue]] = None,
    key_value_async: Optional[Callable[[], Awaitable[AuthKeyValue]]] = None,
) -> Optional[str]:
    """Resolve the ``Authorization`` header value for one call.

    Basic credentials are encoded on every call. For ``EXTERNAL``
    authentication the asynchronous provider is asked first and the
    synchronous one only when the former returns an empty key or value.

    Returns:
        The header value, or None when no header should be added.
    """
    auth_type = authentication.authentication_type

    if auth_type == ApiAuthenticationType.BASIC:
        logger.debug("Adding Basic authentication token.")
        return basic_authorization(authentication.username, authentication.password)

    if auth_type == ApiAuthenticationType.BEARER:
        if not authentication.bearer_token:
            logger.warning("Bearer authentication is configured without a token.")
            return None
        logger.debug("Adding Bearer token.")
        return f"Bearer {authentication.bearer_token}"

    if auth_type == ApiAuthenticationType.EXTERNAL:
        resolved: Optional[AuthKeyValue] = None
        if key_value_async is not None:
            resolved = await key_value_async()
        if not _is_complete(resolved) and key_value is not None:
            resolved = key_value()
        if not _is_complete(resolved):
            logger.warning(
                "External authentication method did not return Key/Value to be added to request. "
                "Maybe forgot to configure authentication_key_value[_async] hook of your client."
            )
            return None
        scheme, value = resolved  # type: ignore[misc]
        logger.debug(f"Adding External authentication token with scheme {scheme}.")
        return f"{scheme} {value}"

    return None
