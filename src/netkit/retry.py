"""Retry policies deciding whether a failed call is attempted again.

A :class:`RetryPolicy` is an immutable value owned by a single logical
operation. Each positive retry decision produces a new policy with the attempt
counter advanced, so concurrent operations never share attempt state.
"""

import asyncio
from datetime import datetime
from email.utils import parsedate_to_datetime
from logging import getLogger
from typing import Iterable, Mapping, Optional, Protocol, runtime_checkable

import httpx
from pydantic import BaseModel, ConfigDict, Field
from tenacity import RetryCallState, wait_exponential, wait_random

from ._utils.constants import (
    DEFAULT_AUTHENTICATION_STATUS_CODES,
    DEFAULT_BASE_DELAY,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MULTIPLIER,
    DEFAULT_RETRYABLE_STATUS_CODES,
    HEADER_RETRY_AFTER,
    LOGGER_NAME,
)
from .authentication import AuthenticationProvider
from .models.exceptions import APIError, HttpError, TransportError

logger = getLogger(LOGGER_NAME)


def parse_retry_after(headers: Mapping[str, str]) -> Optional[float]:
    """Parse Retry-After header (RFC 6585/7231).

    Args:
        headers: HTTP response headers

    Returns:
        Optional[float]: Seconds to wait before retry (minimum 0.0), or None if
            the header is missing or invalid.
    """
    retry_after = None
    for key, value in headers.items():
        if key.lower() == HEADER_RETRY_AFTER.lower():
            retry_after = value
            break
    if not retry_after:
        return None

    try:
        return max(float(retry_after), 0.0)
    except ValueError:
        pass

    try:
        retry_date = parsedate_to_datetime(retry_after)
        delta = (retry_date - datetime.now(retry_date.tzinfo)).total_seconds()
        return max(delta, 0.0)
    except (ValueError, TypeError):
        return None


def is_retryable_transport_error(error: TransportError) -> bool:
    return isinstance(error.error, (httpx.TimeoutException, httpx.NetworkError))


@runtime_checkable
class RetryStrategy(Protocol):
    """Decides whether a failed attempt is retried.

    Implementations perform any side effect needed before the retry, such as
    waiting or re-authenticating, before returning True.
    """

    async def should_retry(
        self,
        error: APIError,
        attempt: int,
        authentication_provider: AuthenticationProvider,
    ) -> bool: ...

    def delay(self, attempt: int) -> float: ...


class DefaultRetryStrategy:
    """Retries authentication failures after recovery and transient failures after a backoff.

    - Authentication statuses (401, 403) ask the authentication provider to
      recover and retry only if it succeeds.
    - Transient statuses (408, 500, 502, 503, 504), timeouts and lost
      connections wait ``base_delay * multiplier ** (attempt - 1)`` seconds,
      plus up to ``jitter`` seconds, then retry.
    - Everything else is not retried.
    """

    def __init__(
        self,
        base_delay: float = DEFAULT_BASE_DELAY,
        multiplier: float = DEFAULT_MULTIPLIER,
        retryable_status_codes: Iterable[int] = DEFAULT_RETRYABLE_STATUS_CODES,
        authentication_status_codes: Iterable[int] = DEFAULT_AUTHENTICATION_STATUS_CODES,
        jitter: float = 0.0,
        respect_retry_after: bool = False,
    ) -> None:
        if base_delay < 0 or multiplier <= 0 or jitter < 0:
            raise ValueError(
                "base_delay and jitter must be non-negative and multiplier positive"
            )
        self.base_delay = base_delay
        self.multiplier = multiplier
        self.retryable_status_codes = frozenset(retryable_status_codes)
        self.authentication_status_codes = frozenset(authentication_status_codes)
        self.jitter = jitter
        self.respect_retry_after = respect_retry_after

        self._wait = wait_exponential(multiplier=base_delay, exp_base=multiplier, min=0)
        if jitter:
            self._wait = self._wait + wait_random(0, jitter)

    def delay(self, attempt: int) -> float:
        # tenacity wait strategies only read attempt_number from the call state
        retry_state = RetryCallState(retry_object=None, fn=None, args=(), kwargs={})  # type: ignore[arg-type]
        retry_state.attempt_number = max(attempt, 1)
        return self._wait(retry_state)

    async def should_retry(
        self,
        error: APIError,
        attempt: int,
        authentication_provider: AuthenticationProvider,
    ) -> bool:
        if isinstance(error, HttpError):
            if error.status_code in self.authentication_status_codes:
                return await authentication_provider.attempt_recovery(error.outcome)

            if error.status_code in self.retryable_status_codes:
                await self._backoff(attempt, error.headers)
                return True

            return False

        if isinstance(error, TransportError) and is_retryable_transport_error(error):
            await self._backoff(attempt)
            return True

        return False

    async def _backoff(
        self, attempt: int, headers: Optional[Mapping[str, str]] = None
    ) -> None:
        wait = None
        if self.respect_retry_after and headers:
            wait = parse_retry_after(headers)
        if wait is None:
            wait = self.delay(attempt)

        logger.debug(f"Backing off {wait:.2f}s before attempt {attempt + 1}")
        await asyncio.sleep(wait)

    def __repr__(self) -> str:
        return (
            f"DefaultRetryStrategy(base_delay={self.base_delay}, "
            f"multiplier={self.multiplier}, jitter={self.jitter})"
        )


class NoRetryStrategy:
    """Never retries."""

    async def should_retry(
        self,
        error: APIError,
        attempt: int,
        authentication_provider: AuthenticationProvider,
    ) -> bool:
        return False

    def delay(self, attempt: int) -> float:
        return 0.0

    def __repr__(self) -> str:
        return "NoRetryStrategy()"


class RetryPolicy(BaseModel):
    """A retry strategy plus the attempt counter of one logical operation.

    Attributes:
        strategy: Decides whether a given failure is retried.
        max_retries: Upper bound on retries; the initial attempt is not counted.
        current_attempt: Number of retries already granted.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    strategy: RetryStrategy = Field(default_factory=DefaultRetryStrategy)
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)
    current_attempt: int = Field(default=0, ge=0)

    @classmethod
    def default(cls) -> "RetryPolicy":
        return cls(strategy=DefaultRetryStrategy(), max_retries=DEFAULT_MAX_RETRIES)

    @classmethod
    def none(cls) -> "RetryPolicy":
        return cls(strategy=NoRetryStrategy(), max_retries=0)

    @property
    def exhausted(self) -> bool:
        return self.current_attempt >= self.max_retries

    def reset(self) -> "RetryPolicy":
        return self.model_copy(update={"current_attempt": 0})

    async def evaluate(
        self,
        error: APIError,
        authentication_provider: AuthenticationProvider,
    ) -> Optional["RetryPolicy"]:
        """Decide whether the operation that failed with ``error`` is retried.

        Returns:
            Optional[RetryPolicy]: The policy for the next attempt, with the
                counter advanced, or None when the error is final.
        """
        if self.exhausted:
            return None

        attempt = self.current_attempt + 1
        if not await self.strategy.should_retry(error, attempt, authentication_provider):
            return None

        return self.model_copy(update={"current_attempt": attempt})
