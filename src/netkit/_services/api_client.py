from typing import Any, Optional, TypeVar, Union

from httpx import URL, Request as HttpxRequest, Response

from .._utils._request_spec import Request
from .._utils.constants import HEADER_ACCEPT
from ..authentication import AuthenticationPolicy
from ..cache import CACHEABLE_METHODS, CacheKey
from ..models.errors import InvalidParametersError
from ..models.exceptions import (
    APIError,
    DecodingError,
    HttpError,
    InvalidResponseError,
    TransportError,
)
from ..models.http_method import HttpMethod
from ..models.responses import CachedEntry, HttpOutcome
from ..retry import RetryPolicy
from ._base_service import BaseService

R = TypeVar("R")


class ApiClient(BaseService):
    """Executes request descriptors with authentication, retries and caching.

    Every call runs one attempt loop. An attempt builds the transport request,
    performs the round trip (or serves it from the response cache) and
    classifies the result. Failures are handed to the retry policy, which
    waits or re-authenticates before allowing another attempt; attempt state
    lives only in that loop, so concurrent calls never interfere.

    Examples:
        ```python
        from netkit import ApiClient, Config, HttpMethod, Request

        async with ApiClient(Config(base_url="https://api.example.com")) as client:
            user = await client.send(
                Request(method=HttpMethod.GET, path="/users/42", response_type=User)
            )
        ```
    """

    async def send(
        self,
        request: Request[R],
        *,
        cached: bool = False,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> R:
        """Send a request and decode its response.

        Args:
            request (Request[R]): The request descriptor.
            cached (bool): Serve GET/HEAD responses from the response cache when
                present and store successful ones. Ignored for other methods.
            retry_policy (Optional[RetryPolicy]): Overrides the configured policy.

        Returns:
            R: The response body decoded into ``request.response_type``.

        Raises:
            RequestError: The request could not be built.
            InvalidResponseError: The transport returned a non-HTTP response.
            HttpError: The final attempt returned a non 2xx status.
            TransportError: The final attempt failed at the network level.
            DecodingError: The successful response could not be decoded.
        """
        outcome = await self._perform(request, cached=cached, retry_policy=retry_policy)
        return self._decode(outcome, request.response_type)

    async def upload(
        self,
        request: Request[R],
        data: bytes,
        *,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> R:
        """Upload ``data`` as the body of ``request`` and decode the response.

        The payload is held as immutable bytes so every retry resends it
        unchanged. Uploads never use the response cache.
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise InvalidParametersError(
                f"Upload data must be bytes, got {type(data).__name__}"
            )
        outcome = await self._perform(
            request, payload=bytes(data), retry_policy=retry_policy
        )
        return self._decode(outcome, request.response_type)

    async def data(
        self,
        request: Request[bytes],
        *,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> bytes:
        """Perform ``request`` and return the raw response body."""
        outcome = await self._perform(request, retry_policy=retry_policy)
        return outcome.body

    async def data_for_url(
        self,
        url: Union[URL, str],
        *,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> bytes:
        """GET a bare URL without authentication and return the raw body."""
        request: Request[bytes] = Request(
            method=HttpMethod.GET,
            absolute_url=str(url),
            response_type=bytes,
            headers={HEADER_ACCEPT: "*/*"},
            authentication_policy=AuthenticationPolicy.none(),
        )
        return await self.data(request, retry_policy=retry_policy)

    async def _perform(
        self,
        request: Request[Any],
        *,
        payload: Optional[bytes] = None,
        cached: bool = False,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> HttpOutcome:
        # each call starts counting attempts from zero
        policy = (retry_policy or self._config.retry_policy).reset()
        provider = request.authentication_provider(self._config)

        use_cache = (
            cached and payload is None and request.method.value in CACHEABLE_METHODS
        )
        if cached and not use_cache:
            self._logger.debug(f"Response cache not used for {request.method} request")

        while True:
            http_request = await request.build(self._config)

            failure: APIError
            try:
                outcome = await self._round_trip(http_request, payload, use_cache)
            except TransportError as e:
                failure = e
            else:
                if outcome.is_success:
                    return outcome
                failure = HttpError(outcome)

            next_policy = await policy.evaluate(failure, provider)
            if next_policy is None:
                raise failure

            self._logger.warning(
                f"Request failed ({self._describe(failure)}). Retrying "
                f"{http_request.method} {http_request.url} "
                f"(attempt {next_policy.current_attempt}/{next_policy.max_retries})"
            )
            policy = next_policy

    async def _round_trip(
        self, http_request: HttpxRequest, payload: Optional[bytes], use_cache: bool
    ) -> HttpOutcome:
        cache = self._config.cache
        cache_key: Optional[CacheKey] = None

        if use_cache:
            cache_key = cache.key_for(http_request)
            entry = cache.lookup(cache_key)
            if entry is not None:
                self._logger.debug(f"Cache hit: {http_request.method} {http_request.url}")
                return entry.to_outcome()
            self._logger.debug(f"Cache miss: {http_request.method} {http_request.url}")

        if payload is not None:
            response = await self._transport.upload(http_request, payload)
        else:
            response = await self._transport.send(http_request)

        outcome = await self._classify(response, http_request)

        if cache_key is not None and outcome.is_success:
            cache.store(cache_key, CachedEntry.from_outcome(outcome))
            self._logger.debug(f"Cached response for {http_request.method} {http_request.url}")

        return outcome

    async def _classify(self, response: Any, http_request: HttpxRequest) -> HttpOutcome:
        status_code = getattr(response, "status_code", None)
        if not isinstance(response, Response) or not isinstance(status_code, int):
            raise InvalidResponseError()

        body = await response.aread()
        return HttpOutcome(
            status_code=status_code,
            headers=dict(response.headers),
            body=body,
            url=str(http_request.url),
        )

    def _decode(self, outcome: HttpOutcome, target: Any) -> Any:
        try:
            return self._config.codec.decode(outcome.body, target)
        except Exception as e:
            raise DecodingError(e, target, outcome.body) from e

    @staticmethod
    def _describe(failure: APIError) -> str:
        if isinstance(failure, HttpError):
            return str(failure.status_code)
        if isinstance(failure, TransportError):
            return type(failure.error).__name__
        return type(failure).__name__
