from enum import Enum
from os import environ as env
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ._utils.constants import (
    ENV_BASE_ADDRESS,
    ENV_BEARER_TOKEN,
    ENV_FACTORY_NAME,
    ENV_PASSWORD,
    ENV_USERNAME,
)
from .models.errors import BaseAddressMissingError


class ApiAuthenticationType(str, Enum):
    NONE = "none"
    BASIC = "basic"
    BEARER = "bearer"
    EXTERNAL = "external"


class RestServiceAuthentication(BaseModel):
    """Authentication mode of a REST service.

    ``EXTERNAL`` defers to the credential providers configured on the client
    (see :class:`typed_rest.ClientHooks`).
    """

    model_config = ConfigDict(use_enum_values=False, validate_assignment=True)

    authentication_type: ApiAuthenticationType = ApiAuthenticationType.NONE
    username: Optional[str] = None
    password: Optional[str] = None
    bearer_token: Optional[str] = None

    @classmethod
    def basic(cls, username: str, password: str) -> "RestServiceAuthentication":
        return cls(
            authentication_type=ApiAuthenticationType.BASIC,
            username=username,
            password=password,
        )

    @classmethod
    def bearer(cls, token: str) -> "RestServiceAuthentication":
        return cls(authentication_type=ApiAuthenticationType.BEARER, bearer_token=token)

    @classmethod
    def external(cls) -> "RestServiceAuthentication":
        return cls(authentication_type=ApiAuthenticationType.EXTERNAL)

    def __repr__(self) -> str:
        """Override repr to prevent accidental secret exposure in logs."""
        details = ""
        if self.authentication_type == ApiAuthenticationType.BASIC:
            details = f", username={self.username!r}, password='***'"
        elif self.authentication_type == ApiAuthenticationType.BEARER:
            details = ", bearer_token='***'"
        return f"RestServiceAuthentication({self.authentication_type.value}{details})"

    __str__ = __repr__


class RestServiceSettings(BaseModel):
    base_address: str
    factory_name: Optional[str] = None
    authentication: RestServiceAuthentication = Field(
        default_factory=RestServiceAuthentication
    )
    request_headers: dict[str, str] = Field(default_factory=dict)

    @field_validator("base_address")
    @classmethod
    def _base_address_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("base_address cannot be empty")
        return value

    def has_default_header(self, name: str) -> bool:
        return any(key.lower() == name.lower() for key in self.request_headers)

    def __repr__(self) -> str:
        return (
            f"RestServiceSettings(base_address={self.base_address!r}, "
            f"auth={self.authentication.authentication_type.value}, "
            f"header_count={len(self.request_headers)})"
        )

    __str__ = __repr__


def resolve_settings(
    base_address: Optional[str] = None,
    *,
    factory_name: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    bearer_token: Optional[str] = None,
    request_headers: Optional[dict[str, str]] = None,
) -> RestServiceSettings:
    """Build settings from explicit arguments, falling back to the environment.

    Basic credentials win over a bearer token when both are available.

    Raises:
        BaseAddressMissingError: If no base address is given or configured.
    """
    base_address_value = base_address or env.get(ENV_BASE_ADDRESS)
    if not base_address_value:
        raise BaseAddressMissingError()

    username_value = username or env.get(ENV_USERNAME)
    password_value = password or env.get(ENV_PASSWORD)
    bearer_token_value = bearer_token or env.get(ENV_BEARER_TOKEN)

    if username_value:
        authentication = RestServiceAuthentication.basic(
            username_value, password_value or ""
        )
    elif bearer_token_value:
        authentication = RestServiceAuthentication.bearer(bearer_token_value)
    else:
        authentication = RestServiceAuthentication()

    return RestServiceSettings(
        base_address=base_address_value,
        factory_name=factory_name or env.get(ENV_FACTORY_NAME),
        authentication=authentication,
        request_headers=dict(request_headers or {}),
    )
