"""Authentication capabilities applied to outgoing requests."""

from logging import getLogger
from typing import Awaitable, Callable, Optional, Protocol, runtime_checkable

import httpx
from pydantic import BaseModel, ConfigDict, Field

from ._utils.constants import HEADER_AUTHORIZATION, LOGGER_NAME
from .models.responses import HttpOutcome

logger = getLogger(LOGGER_NAME)


@runtime_checkable
class AuthenticationProvider(Protocol):
    """Authenticates requests and recovers from authentication failures."""

    async def authenticate(self, request: httpx.Request) -> httpx.Request:
        """Return ``request`` with credentials applied (e.g. an auth header)."""
        ...

    async def attempt_recovery(self, outcome: HttpOutcome) -> bool:
        """Try to recover after ``outcome`` was rejected for credential reasons.

        Returns:
            bool: True if the request should be retried.
        """
        ...


class NoAuthProvider:
    """Performs no authentication and never recovers."""

    async def authenticate(self, request: httpx.Request) -> httpx.Request:
        return request

    async def attempt_recovery(self, outcome: HttpOutcome) -> bool:
        return False

    def __repr__(self) -> str:
        return "NoAuthProvider()"


class BearerTokenProvider:
    """Sends ``Authorization: Bearer <token>`` with every request.

    When a ``refresh`` coroutine function is given, an authentication failure
    awaits it for a new token and asks for a retry. Without one, recovery is
    declined.

    Examples:
        ```python
        async def refresh() -> str:
            return await oauth.refresh_access_token()

        provider = BearerTokenProvider(token, refresh=refresh)
        ```
    """

    def __init__(
        self,
        token: str,
        refresh: Optional[Callable[[], Awaitable[Optional[str]]]] = None,
    ) -> None:
        self._token = token
        self._refresh = refresh

    @property
    def token(self) -> str:
        return self._token

    async def authenticate(self, request: httpx.Request) -> httpx.Request:
        request.headers[HEADER_AUTHORIZATION] = f"Bearer {self._token}"
        return request

    async def attempt_recovery(self, outcome: HttpOutcome) -> bool:
        if self._refresh is None:
            logger.info(
                f"Authentication failed ({outcome.status_code}); no token refresher configured"
            )
            return False

        token = await self._refresh()
        if not token:
            logger.info(
                f"Authentication failed ({outcome.status_code}); token refresh declined"
            )
            return False

        self._token = token
        logger.info(f"Authentication failed ({outcome.status_code}); token refreshed")
        return True

    def __repr__(self) -> str:
        return f"BearerTokenProvider(refresh={self._refresh is not None})"


class AuthenticationPolicy(BaseModel):
    """Wraps the provider used to authenticate a request."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    provider: AuthenticationProvider = Field(default_factory=NoAuthProvider)

    @classmethod
    def none(cls) -> "AuthenticationPolicy":
        return cls(provider=NoAuthProvider())

    @classmethod
    def bearer(
        cls,
        token: str,
        refresh: Optional[Callable[[], Awaitable[Optional[str]]]] = None,
    ) -> "AuthenticationPolicy":
        return cls(provider=BearerTokenProvider(token, refresh=refresh))
