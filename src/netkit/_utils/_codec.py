from functools import lru_cache
from typing import Any, Protocol, runtime_checkable

from pydantic import TypeAdapter

from ..models.responses import EmptyResponse


@runtime_checkable
class Codec(Protocol):
    """Serializes request bodies and deserializes response bodies."""

    def encode(self, value: Any) -> bytes: ...

    def decode(self, data: bytes, target: Any) -> Any: ...


@lru_cache(maxsize=128)
def _cached_adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def _adapter(target: Any) -> TypeAdapter:
    try:
        return _cached_adapter(target)
    except TypeError:
        # unhashable annotations cannot be cached
        return TypeAdapter(target)


class JsonCodec:
    """JSON codec backed by pydantic.

    Any type pydantic can validate is a valid decode target: models,
    dataclasses, ``dict``/``list`` annotations and scalars. Dates are written
    and read as ISO 8601 strings.

    Two targets are special cased: ``bytes`` returns the raw body and
    ``EmptyResponse`` accepts any body, including an empty one.
    """

    def __init__(self, *, by_alias: bool = True, exclude_none: bool = False):
        self.by_alias = by_alias
        self.exclude_none = exclude_none

    def encode(self, value: Any) -> bytes:
        return _adapter(Any).dump_json(
            value, by_alias=self.by_alias, exclude_none=self.exclude_none
        )

    def decode(self, data: bytes, target: Any) -> Any:
        if target is bytes:
            return data
        if target is EmptyResponse:
            return EmptyResponse()
        return _adapter(target).validate_json(data)
