from typing import AsyncGenerator, Generator

import pytest

from netkit import (
    ApiClient,
    Config,
    ConfigurationManager,
    DefaultRetryStrategy,
    RetryPolicy,
)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clean environment variables and the default configuration for each test."""
    for name in (
        "NETKIT_BASE_URL",
        "NETKIT_TIMEOUT",
        "NETKIT_DEBUG",
        "NETKIT_DISABLE_SSL_VERIFY",
        "NETKIT_TOKEN",
    ):
        monkeypatch.delenv(name, raising=False)
    ConfigurationManager().reset()
    yield
    ConfigurationManager().reset()


@pytest.fixture
def base_url() -> str:
    return "https://api.example.com"


@pytest.fixture
def fast_retry_policy() -> RetryPolicy:
    """Default retry behaviour without waiting between attempts."""
    return RetryPolicy(strategy=DefaultRetryStrategy(base_delay=0), max_retries=3)


@pytest.fixture
def config(base_url: str, fast_retry_policy: RetryPolicy) -> Config:
    return Config(base_url=base_url, retry_policy=fast_retry_policy)


@pytest.fixture
async def client(config: Config) -> AsyncGenerator[ApiClient, None]:
    async with ApiClient(config) as api_client:
        yield api_client
