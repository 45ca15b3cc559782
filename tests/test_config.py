import pytest
from pydantic import ValidationError

from typed_rest import (
    ApiAuthenticationType,
    BaseAddressMissingError,
    RestServiceAuthentication,
    RestServiceSettings,
    resolve_settings,
)


class TestRestServiceSettings:
    def test_defaults(self, base_url: str):
        settings = RestServiceSettings(base_address=base_url)

        assert settings.factory_name is None
        assert settings.request_headers == {}
        assert (
            settings.authentication.authentication_type == ApiAuthenticationType.NONE
        )

    @pytest.mark.parametrize("base_address", ["", "   "])
    def test_blank_base_address_is_rejected(self, base_address: str):
        with pytest.raises(ValidationError):
            RestServiceSettings(base_address=base_address)

    def test_default_header_lookup_ignores_case(self, base_url: str):
        settings = RestServiceSettings(
            base_address=base_url, request_headers={"accept": "text/xml"}
        )

        assert settings.has_default_header("Accept")
        assert not settings.has_default_header("Locale")

    def test_repr_hides_secrets(self, base_url: str):
        settings = RestServiceSettings(
            base_address=base_url,
            authentication=RestServiceAuthentication.basic("me", "secret"),
        )

        assert "secret" not in repr(settings)
        assert "secret" not in repr(settings.authentication)
        assert "password='***'" in repr(settings.authentication)

    def test_bearer_repr_hides_token(self):
        authentication = RestServiceAuthentication.bearer("9285293453")

        assert "9285293453" not in str(authentication)


class TestResolveSettings:
    def test_explicit_arguments(self, base_url: str):
        settings = resolve_settings(
            base_url, factory_name="bin", request_headers={"Locale": "lv-LV"}
        )

        assert settings.base_address == base_url
        assert settings.factory_name == "bin"
        assert settings.request_headers == {"Locale": "lv-LV"}

    def test_environment_fallback(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("REST_CLIENT_BASE_ADDRESS", "https://env.example.com/")
        monkeypatch.setenv("REST_CLIENT_FACTORY_NAME", "env-client")
        monkeypatch.setenv("REST_CLIENT_BEARER_TOKEN", "env-token")

        settings = resolve_settings()

        assert settings.base_address == "https://env.example.com/"
        assert settings.factory_name == "env-client"
        assert settings.authentication.authentication_type == ApiAuthenticationType.BEARER
        assert settings.authentication.bearer_token == "env-token"

    def test_explicit_argument_wins_over_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setenv("REST_CLIENT_BASE_ADDRESS", "https://env.example.com/")

        settings = resolve_settings("https://arg.example.com/")

        assert settings.base_address == "https://arg.example.com/"

    def test_missing_base_address(self):
        with pytest.raises(BaseAddressMissingError):
            resolve_settings()

    def test_basic_credentials_win_over_bearer(self, base_url: str):
        settings = resolve_settings(
            base_url, username="me", password="secret", bearer_token="token"
        )

        authentication = settings.authentication
        assert authentication.authentication_type == ApiAuthenticationType.BASIC
        assert authentication.username == "me"
        assert authentication.password == "secret"

    def test_no_credentials(self, base_url: str):
        settings = resolve_settings(base_url)

        assert (
            settings.authentication.authentication_type == ApiAuthenticationType.NONE
        )
