import httpx
import pytest

from netkit import (
    APIError,
    CachePolicy,
    DecodingError,
    EncodingError,
    HttpError,
    HttpMethod,
    HttpOutcome,
    InvalidParametersError,
    InvalidResponseError,
    InvalidURLError,
    MissingBaseURLError,
    NetkitError,
    RequestError,
    TransportError,
)


class TestErrorHierarchy:
    @pytest.mark.parametrize(
        "error_type",
        [MissingBaseURLError, InvalidURLError, InvalidParametersError, EncodingError],
    )
    def test_request_errors(self, error_type: type):
        assert issubclass(error_type, RequestError)
        assert issubclass(error_type, NetkitError)
        assert not issubclass(error_type, APIError)

    @pytest.mark.parametrize(
        "error_type", [InvalidResponseError, HttpError, TransportError, DecodingError]
    )
    def test_api_errors(self, error_type: type):
        assert issubclass(error_type, APIError)
        assert issubclass(error_type, NetkitError)

    def test_default_message_is_description(self):
        error = MissingBaseURLError()

        assert str(error) == MissingBaseURLError.description
        assert error.recovery_suggestion is not None
        assert "NETKIT_BASE_URL" in error.recovery_suggestion

    def test_invalid_url_mentions_url(self):
        error = InvalidURLError(url="api.example.com")

        assert error.url == "api.example.com"
        assert "'api.example.com'" in str(error)


class TestHttpError:
    def test_message_includes_response(self):
        error = HttpError(
            HttpOutcome(
                status_code=422,
                headers={"Content-Type": "application/json"},
                body=b'{"detail": "name is required"}',
                url="https://api.example.com/users",
            )
        )

        message = str(error)
        assert "Request URL: https://api.example.com/users" in message
        assert "Status Code: 422" in message
        assert 'Response Content: {"detail": "name is required"}' in message
        assert error.json() == {"detail": "name is required"}
        assert error.headers == {"Content-Type": "application/json"}

    def test_message_without_body(self):
        error = HttpError(HttpOutcome(status_code=500))

        assert "Request URL: Unknown" in str(error)
        assert "Response Content: No content" in str(error)


class TestTransportError:
    def test_wraps_underlying_error(self):
        cause = httpx.ConnectTimeout("handshake timed out")

        error = TransportError(cause, url="https://api.example.com")

        assert error.error is cause
        assert "ConnectTimeout: handshake timed out" in str(error)
        assert "(URL: https://api.example.com)" in str(error)


class TestDecodingError:
    def test_names_target(self):
        error = DecodingError(ValueError("bad json"), dict, b"{")

        assert error.target is dict
        assert error.body == b"{"
        assert "Expected dict: bad json" in str(error)


class TestHttpOutcome:
    @pytest.mark.parametrize(
        "status_code, success", [(199, False), (200, True), (299, True), (300, False)]
    )
    def test_is_success(self, status_code: int, success: bool):
        assert HttpOutcome(status_code=status_code).is_success is success

    def test_header_lookup_is_case_insensitive(self):
        outcome = HttpOutcome(status_code=200, headers={"retry-after": "3"})

        assert outcome.header("Retry-After") == "3"
        assert outcome.header("ETag") is None

    def test_text_tolerates_invalid_utf8(self):
        assert HttpOutcome(status_code=200, body=b"ok\xff").text == "ok�"


class TestEnums:
    def test_http_method_str(self):
        assert str(HttpMethod.PATCH) == "PATCH"
        assert HttpMethod("OPTIONS") is HttpMethod.OPTIONS

    def test_cache_policy_headers(self):
        assert CachePolicy.USE_PROTOCOL_CACHE_POLICY.cache_control is None
        assert CachePolicy.RELOAD_IGNORING_CACHE.cache_control == "no-cache"
        assert CachePolicy.RETURN_CACHE_DATA_ELSE_LOAD.cache_control == "max-stale"
