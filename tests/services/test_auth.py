import logging

import pytest

from typed_rest import ApiAuthenticationType, RestServiceAuthentication
from typed_rest._utils._auth import basic_authorization, resolve_authorization


class TestBasicAuthorization:
    @pytest.mark.parametrize(
        "username,password,expected",
        [
            ("me", "secret", "Basic bWU6c2VjcmV0"),
            ("jons", "plunts", "Basic am9uczpwbHVudHM="),
            (None, None, "Basic Og=="),
        ],
    )
    def test_header_value(self, username, password, expected):
        assert basic_authorization(username, password) == expected


class TestResolveAuthorization:
    @pytest.mark.anyio
    async def test_none(self):
        assert await resolve_authorization(RestServiceAuthentication()) is None

    @pytest.mark.anyio
    async def test_basic(self):
        authentication = RestServiceAuthentication.basic("jons", "plunts")

        assert await resolve_authorization(authentication) == "Basic am9uczpwbHVudHM="

    @pytest.mark.anyio
    async def test_bearer(self):
        authentication = RestServiceAuthentication.bearer("9285293453")

        assert await resolve_authorization(authentication) == "Bearer 9285293453"

    @pytest.mark.anyio
    async def test_bearer_without_token_warns(self, caplog: pytest.LogCaptureFixture):
        authentication = RestServiceAuthentication(
            authentication_type=ApiAuthenticationType.BEARER
        )

        with caplog.at_level(logging.WARNING, logger="typed_rest"):
            assert await resolve_authorization(authentication) is None

        assert "without a token" in caplog.text

    class TestExternal:
        @pytest.mark.anyio
        async def test_async_provider_is_asked_first(self):
            calls = []

            def key_value():
                calls.append("sync")
                return "Bearer", "sync-token"

            async def key_value_async():
                calls.append("async")
                return "Bearer", "async-token"

            header = await resolve_authorization(
                RestServiceAuthentication.external(), key_value, key_value_async
            )

            assert header == "Bearer async-token"
            assert calls == ["async"]

        @pytest.mark.anyio
        async def test_sync_provider_is_fallback(self):
            async def key_value_async():
                return "", ""

            header = await resolve_authorization(
                RestServiceAuthentication.external(),
                lambda: ("Token", "abc"),
                key_value_async,
            )

            assert header == "Token abc"

        @pytest.mark.anyio
        async def test_empty_providers_warn(self, caplog: pytest.LogCaptureFixture):
            async def key_value_async():
                return "Bearer", ""

            with caplog.at_level(logging.WARNING, logger="typed_rest"):
                header = await resolve_authorization(
                    RestServiceAuthentication.external(),
                    lambda: ("", ""),
                    key_value_async,
                )

            assert header is None
            assert "did not return Key/Value" in caplog.text
