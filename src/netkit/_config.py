import os
from typing import Any, Dict, Optional

import httpx
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ._utils._codec import Codec, JsonCodec
from ._utils.constants import (
    DEFAULT_TIMEOUT,
    ENV_BASE_URL,
    ENV_DEBUG,
    ENV_DISABLE_SSL_VERIFY,
    ENV_TIMEOUT,
)
from .authentication import AuthenticationPolicy
from .cache import InMemoryResponseCache, ResponseCache
from .models.cache_policy import CachePolicy
from .retry import RetryPolicy


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes", "on")


class Config(BaseModel):
    """Settings shared by every request an :class:`ApiClient` performs.

    Request descriptors may override ``base_url``, the authentication policy,
    the timeout and the cache policy; a call may override the retry policy.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    base_url: Optional[str] = None
    retry_policy: RetryPolicy = Field(default_factory=RetryPolicy.default)
    authentication_policy: AuthenticationPolicy = Field(
        default_factory=AuthenticationPolicy.none
    )
    codec: Codec = Field(default_factory=JsonCodec)
    cache: ResponseCache = Field(default_factory=InMemoryResponseCache)
    cache_policy: Optional[CachePolicy] = None
    timeout: Optional[float] = DEFAULT_TIMEOUT
    headers: Dict[str, str] = Field(default_factory=dict)
    verify_ssl: bool = True
    debug: bool = False

    @field_validator("base_url", mode="before")
    @classmethod
    def validate_base_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None or value == "":
            return None
        try:
            url = httpx.URL(str(value))
        except httpx.InvalidURL as e:
            raise ValueError(f"Invalid base URL {value!r}: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError(f"Base URL must be an absolute http(s) URL, got {value!r}")
        return str(value)

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise ValueError(f"timeout must be positive, got {value}")
        return value

    @classmethod
    def from_env(cls, **overrides: Any) -> "Config":
        """Build a configuration from ``NETKIT_*`` environment variables.

        A ``.env`` file in the working directory is loaded first. Keyword
        arguments take precedence over the environment.
        """
        load_dotenv()

        values: Dict[str, Any] = {}
        if base_url := os.environ.get(ENV_BASE_URL):
            values["base_url"] = base_url
        if timeout := os.environ.get(ENV_TIMEOUT):
            values["timeout"] = float(timeout)
        if ENV_DEBUG in os.environ:
            values["debug"] = _env_flag(ENV_DEBUG)
        if _env_flag(ENV_DISABLE_SSL_VERIFY):
            values["verify_ssl"] = False

        values.update(overrides)
        return cls(**values)


class ConfigurationManager:
    """Singleton holder of the process-wide default configuration.

    Configure once at startup; replacing the configuration while requests are
    in flight is not supported.
    """

    _instance = None
    _config: Optional[Config] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def config(self) -> Config:
        if self._config is None:
            type(self)._config = Config.from_env()
        return self._config  # type: ignore[return-value]

    def configure(self, config: Optional[Config] = None, **overrides: Any) -> Config:
        if config is None:
            config = Config.from_env(**overrides)
        elif overrides:
            config = Config.model_validate({**dict(config), **overrides})
        type(self)._config = config
        return config

    def reset(self) -> None:
        type(self)._config = None


def configure(config: Optional[Config] = None, **overrides: Any) -> Config:
    """Install the process-wide default configuration.

    Examples:
        ```python
        import netkit

        netkit.configure(base_url="https://api.example.com", timeout=10)
        ```
    """
    return ConfigurationManager().configure(config, **overrides)


def get_configuration() -> Config:
    return ConfigurationManager().config
