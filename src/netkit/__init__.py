"""netkit: typed HTTP request execution with authentication, retries and caching."""

from ._config import Config, ConfigurationManager, configure, get_configuration
from ._services import ApiClient, BaseService, HttpxTransport, Transport
from ._utils import Codec, ContentType, JsonCodec, Request, setup_logging
from .authentication import (
    AuthenticationPolicy,
    AuthenticationProvider,
    BearerTokenProvider,
    NoAuthProvider,
)
from .cache import CacheKey, InMemoryResponseCache, ResponseCache
from .models import (
    APIError,
    CachedEntry,
    CachePolicy,
    DecodingError,
    EmptyResponse,
    EncodingError,
    HttpError,
    HttpMethod,
    HttpOutcome,
    InvalidParametersError,
    InvalidResponseError,
    InvalidURLError,
    MissingBaseURLError,
    MultipartField,
    NetkitError,
    RequestError,
    TransportError,
)
from .retry import DefaultRetryStrategy, NoRetryStrategy, RetryPolicy, RetryStrategy

__all__ = [
    "APIError",
    "ApiClient",
    "AuthenticationPolicy",
    "AuthenticationProvider",
    "BaseService",
    "BearerTokenProvider",
    "CacheKey",
    "CachePolicy",
    "CachedEntry",
    "Codec",
    "Config",
    "ConfigurationManager",
    "ContentType",
    "DecodingError",
    "DefaultRetryStrategy",
    "EmptyResponse",
    "EncodingError",
    "HttpError",
    "HttpMethod",
    "HttpOutcome",
    "HttpxTransport",
    "InMemoryResponseCache",
    "InvalidParametersError",
    "InvalidResponseError",
    "InvalidURLError",
    "JsonCodec",
    "MissingBaseURLError",
    "MultipartField",
    "NetkitError",
    "NoAuthProvider",
    "NoRetryStrategy",
    "Request",
    "RequestError",
    "ResponseCache",
    "RetryPolicy",
    "RetryStrategy",
    "Transport",
    "configure",
    "get_configuration",
    "setup_logging",
]
