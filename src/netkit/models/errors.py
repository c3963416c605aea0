from typing import Optional


class NetkitError(Exception):
    """Base class for every error raised by netkit.

    Each error carries a human readable ``description``, a technical
    ``failure_reason`` and, where the caller can fix the problem, a
    ``recovery_suggestion``.
    """

    description: str = "The request could not be completed."
    failure_reason: str = "An unexpected error occurred."
    recovery_suggestion: Optional[str] = None

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.description
        super().__init__(self.message)


class RequestError(NetkitError):
    """A request descriptor could not be turned into a transport request.

    These are caller configuration errors: they are raised before any network
    traffic happens and are never retried.
    """

    description = "The request could not be built."
    failure_reason = "The request descriptor is not valid."
    recovery_suggestion = "Check the request configuration."


class MissingBaseURLError(RequestError):
    description = "No base URL is configured for this request."
    failure_reason = (
        "The request uses a relative path but neither the request nor the "
        "client configuration defines a base URL."
    )
    recovery_suggestion = (
        "Pass base_url to the request, configure one with netkit.configure("
        "base_url=...), or set the NETKIT_BASE_URL environment variable."
    )


class InvalidURLError(RequestError):
    description = "The request URL is not valid."
    failure_reason = "The base URL, path or query could not be combined into a URL."
    recovery_suggestion = "Make sure the base URL is absolute, e.g. https://api.example.com."

    def __init__(self, message: Optional[str] = None, url: Optional[str] = None):
        self.url = url
        if message is None and url is not None:
            message = f"{self.description} URL: {url!r}"
        super().__init__(message)


class InvalidParametersError(RequestError):
    description = "The request parameters are not valid."
    failure_reason = "The request descriptor combines options that cannot be used together."
    recovery_suggestion = "Review the arguments passed when creating the request."


class EncodingError(RequestError):
    description = "The request body could not be encoded."
    failure_reason = "The body value is not serializable to JSON."
    recovery_suggestion = "Use a pydantic model or JSON compatible values as the body."
