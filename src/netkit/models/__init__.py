from .cache_policy import CachePolicy
from .errors import (
    EncodingError,
    InvalidParametersError,
    InvalidURLError,
    MissingBaseURLError,
    NetkitError,
    RequestError,
)
from .exceptions import (
    APIError,
    DecodingError,
    HttpError,
    InvalidResponseError,
    TransportError,
)
from .http_method import HttpMethod
from .multipart import MultipartField
from .responses import CachedEntry, EmptyResponse, HttpOutcome

__all__ = [
    "APIError",
    "CachePolicy",
    "CachedEntry",
    "DecodingError",
    "EmptyResponse",
    "EncodingError",
    "HttpError",
    "HttpMethod",
    "HttpOutcome",
    "InvalidParametersError",
    "InvalidResponseError",
    "InvalidURLError",
    "MissingBaseURLError",
    "MultipartField",
    "NetkitError",
    "RequestError",
    "TransportError",
]
