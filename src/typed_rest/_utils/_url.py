import re
from logging import getLogger
from typing import Optional

from ._parameters import PathParameters, QueryParameterCollection
from .constants import LOGGER_NAME

logger = getLogger(LOGGER_NAME)

_PLACEHOLDER = re.compile(r"\{[^{}]+\}")


def compose_url(
    operation: str,
    path_parameters: Optional[PathParameters] = None,
    query_parameters: Optional[QueryParameterCollection] = None,
) -> str:
    """Compose the relative URL of an operation.

    Every ``{name}`` placeholder with a matching path parameter is replaced by
    the parameter value (plain substring replacement). Placeholders without a
    parameter are left as they are.

    Args:
        operation: The operation path, e.g. ``person/{id}/address``.
        path_parameters: Values for the placeholders.
        query_parameters: Query string parameters appended after ``?``.

    Returns:
        str: The operation URL relative to the service base address.

    Examples:
        >>> compose_url("base/{id}/sub/{key}", PathParameters(id=777, key="abc"))
        'base/777/sub/abc'
    """
    url = operation
    if path_parameters is not None:
        for name, value in path_parameters.items():
            logger.debug(f"API URL: Replacing {name} with value {value}")
            url = url.replace(f"{{{name}}}", value)

    unmatched = _PLACEHOLDER.findall(url)
    if unmatched:
        logger.debug(f"API URL: No path parameters for {', '.join(unmatched)}")

    if query_parameters is not None:
        query = str(query_parameters)
        if query:
            logger.debug(f"API URL: Adding query parameters: {query}")
            separator = "&" if "?" in url else "?"
            url = f"{url}{separator}{query}"

    return url
