from logging import getLogger
from typing import Optional, TypeVar

from httpx import codes

from .._utils.constants import LOGGER_NAME
from ..models.errors import RestClientError
from ..serialization import ObjectSerializer
from ._dispatcher import CallResult

T = TypeVar("T")

_EMPTY_STATUS_CODES = (codes.NO_CONTENT, codes.RESET_CONTENT)


class ResponseDecoder:
    def __init__(self, serializer: ObjectSerializer) -> None:
        self._logger = getLogger(LOGGER_NAME)
        self._serializer = serializer

    async def decode(self, result: CallResult, response_type: type[T]) -> Optional[T]:
        """Deserialize the body of a successful call into ``response_type``.

        Returns None for empty (204/205) responses and for failed calls whose
        error was suppressed.

        Raises:
            RestClientError: If the body cannot be read as ``response_type``.
        """
        response = result.response
        if response is None or not result.is_success_status_code:
            return None
        if response.status_code in _EMPTY_STATUS_CODES:
            self._logger.debug("API call returned empty result")
            return None

        await response.aread()
        try:
            return await self._serializer.deserialize(response.text, response_type)
        except Exception as e:
            raise RestClientError.from_deserialization(response, response_type, e) from e
