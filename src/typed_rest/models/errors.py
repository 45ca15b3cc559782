from enum import Enum
from typing import Any, Optional

from httpx import Response


class ErrorKind(str, Enum):
    """Discriminant of a :class:`RestClientError`."""

    PROTOCOL = "protocol"
    SERIALIZATION = "serialization"


class BaseAddressMissingError(Exception):
    def __init__(
        self,
        message="Base address is required. Pass base_address explicitly or set the REST_CLIENT_BASE_ADDRESS environment variable.",
    ):
        self.message = message
        super().__init__(self.message)


class RestClientError(Exception):
    """Raised when an API call fails at the HTTP or deserialization level.

    A single exception type covers both failure paths; ``kind`` tells them
    apart. All fields are populated from the request/response pair so callers
    can log or branch without parsing ``message``. The underlying exception of a
    deserialization failure is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind = ErrorKind.PROTOCOL,
        status_code: Optional[int] = None,
        reason_phrase: Optional[str] = None,
        method: Optional[str] = None,
        response_content: Optional[str] = None,
        request_uri: Optional[str] = None,
    ):
        self.message = message
        self.kind = kind
        self.status_code = status_code
        self.reason_phrase = reason_phrase
        self.method = method
        self.response_content = response_content
        self.request_uri = request_uri
        super().__init__(self.message)

    @property
    def is_protocol_error(self) -> bool:
        return self.kind == ErrorKind.PROTOCOL

    @property
    def is_serialization_error(self) -> bool:
        return self.kind == ErrorKind.SERIALIZATION

    @staticmethod
    def from_response(response: Response, content: str) -> "RestClientError":
        """Create a protocol error for a non-success response.

        Args:
            response: The response with a non-2xx status code.
            content: The raw response body text.

        Returns:
            RestClientError with status, method, URI and body populated.
        """
        method = response.request.method
        request_uri = str(response.request.url)
        message = (
            "Error occurred in API/Service.\n"
            f"Request status code: {response.status_code} ({response.reason_phrase}).\n"
            f"{method} {request_uri}"
        )
        return RestClientError(
            message,
            kind=ErrorKind.PROTOCOL,
            status_code=response.status_code,
            reason_phrase=response.reason_phrase,
            method=method,
            response_content=content,
            request_uri=request_uri,
        )

    @staticmethod
    def from_deserialization(
        response: Response, target_type: Any, error: BaseException
    ) -> "RestClientError":
        """Create a serialization error for a body that did not fit ``target_type``.

        The caller is expected to raise the result ``from error``.
        """
        method = response.request.method
        request_uri = str(response.request.url)
        type_name = getattr(target_type, "__qualname__", None) or repr(target_type)
        message = (
            f"Error occurred while deserializing API response to {type_name}.\n"
            "Make sure you are calling correct operation and deserializing result to correct type.\n"
            f"Request status code: {response.status_code} ({response.reason_phrase}).\n"
            f"{method} {request_uri}\n"
            f"{type(error).__name__}: {error}"
        )
        return RestClientError(
            message,
            kind=ErrorKind.SERIALIZATION,
            status_code=response.status_code,
            reason_phrase=response.reason_phrase,
            method=method,
            response_content=response.text,
            request_uri=request_uri,
        )
