from logging import getLogger
from typing import Mapping, Optional

from httpx import Headers

from .constants import LOGGER_NAME

logger = getLogger(LOGGER_NAME)


def merge_headers(
    headers: Headers, overrides: Optional[Mapping[str, str]], source: str = "call"
) -> Headers:
    """Apply ``overrides`` on top of ``headers`` in place.

    A header that already exists (names compare case-insensitively) is
    replaced, never duplicated.
    """
    if not overrides:
        return headers

    for name, value in overrides.items():
        if name in headers:
            logger.debug(f"Changing value of request header {name} ({source}).")
            del headers[name]
        else:
            logger.debug(f"Adding request header {name} ({source}).")
        headers[name] = value

    return headers
