from contextlib import contextmanager
from typing import Generator, Optional

import httpx

from ..models.errors import InvalidURLError
from ..models.exceptions import InvalidResponseError, TransportError


@contextmanager
def handle_transport_errors(url: Optional[str] = None) -> Generator[None, None, None]:
    """Context manager translating httpx errors raised by a transport call.

    Yields:
        None: The context manager yields control to the wrapped code.

    Raises:
        InvalidURLError: When the URL scheme cannot be handled by the transport.
        InvalidResponseError: When the peer violated the HTTP protocol.
        TransportError: For timeouts and other network failures.
    """
    try:
        yield
    except httpx.UnsupportedProtocol as e:
        raise InvalidURLError(str(e), url=url) from e
    except httpx.InvalidURL as e:
        raise InvalidURLError(str(e), url=url) from e
    except httpx.ProtocolError as e:
        raise InvalidResponseError(f"{InvalidResponseError.description} {e}") from e
    except httpx.TransportError as e:
        raise TransportError(e, url=url) from e
