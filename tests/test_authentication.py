import logging
from typing import Optional

import httpx
import pytest

from netkit import (
    AuthenticationPolicy,
    BearerTokenProvider,
    HttpOutcome,
    NoAuthProvider,
)

UNAUTHORIZED = HttpOutcome(status_code=401, url="https://api.example.com/me")


def _request() -> httpx.Request:
    return httpx.Request("GET", "https://api.example.com/me")


class TestNoAuthProvider:
    @pytest.mark.anyio
    async def test_request_is_unchanged(self):
        request = _request()

        result = await NoAuthProvider().authenticate(request)

        assert result is request
        assert "Authorization" not in result.headers

    @pytest.mark.anyio
    async def test_never_recovers(self):
        assert await NoAuthProvider().attempt_recovery(UNAUTHORIZED) is False


class TestBearerTokenProvider:
    @pytest.mark.anyio
    async def test_sets_authorization_header(self):
        request = await BearerTokenProvider("abc").authenticate(_request())

        assert request.headers["Authorization"] == "Bearer abc"

    @pytest.mark.anyio
    async def test_recovery_without_refresher_is_declined(
        self, caplog: pytest.LogCaptureFixture
    ):
        provider = BearerTokenProvider("abc")

        with caplog.at_level(logging.INFO, logger="netkit"):
            assert await provider.attempt_recovery(UNAUTHORIZED) is False

        assert "no token refresher configured" in caplog.text

    @pytest.mark.anyio
    async def test_refresh_replaces_token(self):
        calls = []

        async def refresh() -> Optional[str]:
            calls.append(True)
            return "new"

        provider = BearerTokenProvider("old", refresh=refresh)

        assert await provider.attempt_recovery(UNAUTHORIZED) is True
        assert provider.token == "new"
        assert len(calls) == 1

        request = await provider.authenticate(_request())
        assert request.headers["Authorization"] == "Bearer new"

    @pytest.mark.anyio
    async def test_empty_refresh_result_is_declined(self):
        async def refresh() -> Optional[str]:
            return None

        provider = BearerTokenProvider("old", refresh=refresh)

        assert await provider.attempt_recovery(UNAUTHORIZED) is False
        assert provider.token == "old"

    @pytest.mark.anyio
    async def test_refresh_errors_propagate(self):
        async def refresh() -> Optional[str]:
            raise ConnectionError("identity provider unreachable")

        provider = BearerTokenProvider("old", refresh=refresh)

        with pytest.raises(ConnectionError):
            await provider.attempt_recovery(UNAUTHORIZED)

    def test_repr_hides_token(self):
        assert "secret" not in repr(BearerTokenProvider("secret"))


class TestAuthenticationPolicy:
    def test_default_is_no_auth(self):
        assert isinstance(AuthenticationPolicy().provider, NoAuthProvider)
        assert isinstance(AuthenticationPolicy.none().provider, NoAuthProvider)

    def test_bearer(self):
        policy = AuthenticationPolicy.bearer("abc")

        assert isinstance(policy.provider, BearerTokenProvider)
        assert policy.provider.token == "abc"

    def test_rejects_objects_without_provider_methods(self):
        with pytest.raises(ValueError):
            AuthenticationPolicy(provider=object())  # type: ignore[arg-type]
