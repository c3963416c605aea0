from ._codec import Codec, JsonCodec
from ._errors import handle_transport_errors
from ._logs import redact_headers, setup_logging
from ._multipart import MultipartEncoder
from ._request_spec import ContentType, Request, parse_url
from ._ssl_context import get_httpx_client_kwargs
from ._user_agent import user_agent_value

__all__ = [
    "Codec",
    "ContentType",
    "JsonCodec",
    "MultipartEncoder",
    "Request",
    "get_httpx_client_kwargs",
    "handle_transport_errors",
    "parse_url",
    "redact_headers",
    "setup_logging",
    "user_agent_value",
]
