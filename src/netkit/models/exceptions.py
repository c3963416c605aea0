import json
from typing import Any, Dict, Optional

from .errors import NetkitError
from .responses import HttpOutcome


class APIError(NetkitError):
    """Base class for errors describing the outcome of a performed call."""

    description = "The server request failed."
    failure_reason = "The call did not produce a usable response."


class InvalidResponseError(APIError):
    """The transport returned something that is not an HTTP response.

    This indicates a broken transport contract and is never retried.
    """

    description = "The server returned an invalid response."
    failure_reason = "No HTTP status code could be obtained from the response."


class TransportError(APIError):
    """The network round trip failed before a response was received."""

    description = "The server could not be reached."
    failure_reason = "The connection failed or timed out."

    def __init__(self, error: BaseException, url: Optional[str] = None) -> None:
        self.error = error
        self.url = url
        message = f"{self.description} {type(error).__name__}: {error}"
        if url:
            message = f"{message} (URL: {url})"
        super().__init__(message)


class HttpError(APIError):
    """The server answered with a status code outside 200-299."""

    description = "The server returned an error status."
    failure_reason = "The HTTP status code indicates the request failed."

    def __init__(self, outcome: HttpOutcome) -> None:
        self.outcome = outcome
        # include the http response in the error message
        enriched_message = (
            f"\nRequest URL: {outcome.url or 'Unknown'}"
            f"\nStatus Code: {outcome.status_code}"
            f"\nResponse Content: {outcome.text if outcome.body else 'No content'}"
        )
        super().__init__(enriched_message)

    @property
    def status_code(self) -> int:
        return self.outcome.status_code

    @property
    def body(self) -> bytes:
        return self.outcome.body

    @property
    def headers(self) -> Dict[str, str]:
        return self.outcome.headers

    @property
    def url(self) -> str:
        return self.outcome.url

    @property
    def text(self) -> str:
        return self.outcome.text

    def json(self) -> Any:
        return json.loads(self.outcome.body)


class DecodingError(APIError):
    """A successful response body could not be decoded into the result type."""

    description = "The server response could not be decoded."
    failure_reason = "The response body does not match the expected result type."

    def __init__(self, error: Exception, target: Any, body: bytes = b"") -> None:
        self.error = error
        self.target = target
        self.body = body
        name = getattr(target, "__name__", repr(target))
        super().__init__(f"{self.description} Expected {name}: {error}")
