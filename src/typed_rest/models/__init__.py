from .errors import BaseAddressMissingError, ErrorKind, RestClientError

__all__ = ["BaseAddressMissingError", "ErrorKind", "RestClientError"]
