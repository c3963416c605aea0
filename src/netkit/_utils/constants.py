# Environment variables
ENV_BASE_URL = "NETKIT_BASE_URL"
ENV_TIMEOUT = "NETKIT_TIMEOUT"
ENV_DEBUG = "NETKIT_DEBUG"
ENV_DISABLE_SSL_VERIFY = "NETKIT_DISABLE_SSL_VERIFY"

# Headers
HEADER_ACCEPT = "Accept"
HEADER_AUTHORIZATION = "Authorization"
HEADER_CACHE_CONTROL = "Cache-Control"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_RETRY_AFTER = "Retry-After"
HEADER_USER_AGENT = "User-Agent"

# Content types
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_MULTIPART = "multipart/form-data"

# Defaults
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY = 0.3
DEFAULT_MULTIPLIER = 1.0
DEFAULT_RETRYABLE_STATUS_CODES = frozenset({408, 500, 502, 503, 504})
DEFAULT_AUTHENTICATION_STATUS_CODES = frozenset({401, 403})

LOGGER_NAME = "netkit"
