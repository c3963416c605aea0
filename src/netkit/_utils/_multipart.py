import uuid
from typing import Iterable, Optional

from ..models.errors import InvalidParametersError
from ..models.multipart import MultipartField
from .constants import CONTENT_TYPE_MULTIPART


def make_boundary() -> str:
    return f"Boundary-{uuid.uuid4().hex}"


def _header_safe(value: str) -> str:
    if "\r" in value or "\n" in value:
        raise InvalidParametersError(
            f"Multipart header values cannot contain line breaks: {value!r}"
        )
    return value


def _quote_parameter(value: str) -> str:
    # form-data parameter escaping as browsers apply it
    return _header_safe(value).replace('"', "%22")


class MultipartEncoder:
    """Serializes multipart fields, in order, into a form-data body."""

    def __init__(self, boundary: Optional[str] = None) -> None:
        self.boundary = boundary or make_boundary()
        self._parts: list[bytes] = []

    @property
    def content_type(self) -> str:
        return f"{CONTENT_TYPE_MULTIPART}; boundary={self.boundary}"

    def add_field(self, field: MultipartField) -> None:
        disposition = "Content-Disposition: form-data"
        for key, value in field.parameters.items():
            disposition += f'; {_header_safe(key)}="{_quote_parameter(value)}"'

        part = f"--{self.boundary}\r\n{disposition}\r\n"
        if field.mime_type:
            part += f"Content-Type: {_header_safe(field.mime_type)}\r\n"
        part += "\r\n"

        self._parts.append(part.encode("utf-8") + field.data + b"\r\n")

    def add_fields(self, fields: Iterable[MultipartField]) -> None:
        for field in fields:
            self.add_field(field)

    def encode(self) -> bytes:
        return b"".join(self._parts) + f"--{self.boundary}--\r\n".encode("utf-8")
