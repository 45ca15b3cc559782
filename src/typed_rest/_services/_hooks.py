import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from httpx import Request, Response

AuthKeyValue = tuple[str, str]

BeforeCallHook = Callable[[Request], Union[None, Awaitable[None]]]
AfterCallHook = Callable[
    [Optional[Response], Optional[BaseException]], Union[bool, Awaitable[bool]]
]


def no_authentication_key_value() -> AuthKeyValue:
    return "", ""


async def no_authentication_key_value_async() -> AuthKeyValue:
    return "", ""


def no_common_headers() -> Mapping[str, str]:
    return {}


def intercept_nothing(request: Request) -> None:
    return None


def raise_by_default(
    response: Optional[Response], error: Optional[BaseException]
) -> bool:
    return True


@dataclass
class ClientHooks:
    """Functions a concrete client plugs into the call pipeline.

    Attributes:
        authentication_key_value: Returns ``(scheme, value)`` for ``EXTERNAL``
            authentication, e.g. ``("Bearer", token)``.
        authentication_key_value_async: Asynchronous variant, asked first.
        common_headers: Headers added to every request, overriding the
            settings' default headers.
        before_call: Called with the composed request right before it is sent.
            May mutate the request.
        after_call: Called with ``(response, error)`` after every call. On a
            failed call its return value decides whether the error is raised
            (``True``) or the call returns normally (``False``). Ignored on
            success.
    """

    authentication_key_value: Callable[[], AuthKeyValue] = no_authentication_key_value
    authentication_key_value_async: Callable[
        [], Awaitable[AuthKeyValue]
    ] = no_authentication_key_value_async
    common_headers: Callable[[], Mapping[str, str]] = no_common_headers
    before_call: BeforeCallHook = intercept_nothing
    after_call: AfterCallHook = raise_by_default


async def resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value
