from logging import getLogger
from typing import Any, Optional, Protocol, runtime_checkable

from httpx import AsyncBaseTransport, AsyncClient, Request, Response

from .._config import Config, get_configuration
from .._utils._errors import handle_transport_errors
from .._utils._logs import redact_headers, setup_logging
from .._utils._ssl_context import get_httpx_client_kwargs
from .._utils.constants import LOGGER_NAME

_STALE_BODY_HEADERS = ("content-length", "transfer-encoding")


@runtime_checkable
class Transport(Protocol):
    """Performs the network round trip for a built request."""

    async def send(self, request: Request) -> Response: ...

    async def upload(self, request: Request, data: bytes) -> Response: ...


class HttpxTransport:
    """Transport backed by an ``httpx.AsyncClient``.

    Response bodies are fully read before returning. httpx errors are
    translated into netkit errors.
    """

    def __init__(self, client: AsyncClient, *, owns_client: bool = True) -> None:
        self._client = client
        self._owns_client = owns_client
        self._logger = getLogger(LOGGER_NAME)

    @property
    def client(self) -> AsyncClient:
        return self._client

    async def send(self, request: Request) -> Response:
        self._logger.debug(f"Request: {request.method} {request.url}")
        self._logger.debug(f"HEADERS: {redact_headers(dict(request.headers))}")

        with handle_transport_errors(str(request.url)):
            return await self._client.send(request)

    async def upload(self, request: Request, data: bytes) -> Response:
        # upload bodies are immutable bytes, so the request can be replayed
        headers = [
            (key, value)
            for key, value in request.headers.multi_items()
            if key.lower() not in _STALE_BODY_HEADERS
        ]
        upload_request = Request(
            request.method,
            request.url,
            headers=headers,
            content=data,
            extensions=request.extensions,
        )
        return await self.send(upload_request)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class BaseService:
    """Holds configuration, logger and transport shared by netkit services."""

    def __init__(
        self,
        config: Optional[Config] = None,
        *,
        transport: Optional[Transport] = None,
        client: Optional[AsyncClient] = None,
        http_transport: Optional[AsyncBaseTransport] = None,
    ) -> None:
        self._logger = getLogger(LOGGER_NAME)
        self._config = config or get_configuration()

        if self._config.debug:
            setup_logging(self._config.debug)

        if transport is None and client is not None:
            transport = HttpxTransport(client, owns_client=False)
        elif transport is None:
            client_kwargs: dict[str, Any] = get_httpx_client_kwargs(
                timeout=self._config.timeout, verify=self._config.verify_ssl
            )
            if http_transport is not None:
                client_kwargs["transport"] = http_transport
            transport = HttpxTransport(AsyncClient(**client_kwargs))

        self._transport = transport

        self._logger.debug(f"CONFIG: base_url={self._config.base_url}")

        super().__init__()

    @property
    def config(self) -> Config:
        return self._config

    @property
    def transport(self) -> Transport:
        return self._transport

    async def aclose(self) -> None:
        close = getattr(self._transport, "aclose", None)
        if close is not None:
            await close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
