"""Response caches consulted when a caller opts into caching."""

import threading
import time
from collections import OrderedDict
from logging import getLogger
from typing import Iterable, Optional, Protocol, Tuple, runtime_checkable

import httpx
from pydantic import BaseModel, ConfigDict

from ._utils.constants import HEADER_ACCEPT, HEADER_AUTHORIZATION, LOGGER_NAME
from .models.responses import CachedEntry

logger = getLogger(LOGGER_NAME)

CACHEABLE_METHODS = frozenset({"GET", "HEAD"})


class CacheKey(BaseModel):
    """Identity of a cacheable request."""

    model_config = ConfigDict(frozen=True)

    method: str
    url: str
    vary: Tuple[Tuple[str, str], ...] = ()


@runtime_checkable
class ResponseCache(Protocol):
    """Looks up and stores responses by request identity.

    Implementations must be safe for concurrent ``lookup`` and ``store``.
    """

    def key_for(self, request: httpx.Request) -> CacheKey: ...

    def lookup(self, key: CacheKey) -> Optional[CachedEntry]: ...

    def store(self, key: CacheKey, entry: CachedEntry) -> None: ...


class InMemoryResponseCache:
    """Process-local LRU response cache.

    The key is the request method and URL plus the values of ``vary_headers``,
    so requests sent with different credentials do not share entries. When
    ``max_age`` is set, entries older than that many seconds are dropped on
    lookup.
    """

    def __init__(
        self,
        max_entries: int = 256,
        vary_headers: Iterable[str] = (HEADER_ACCEPT, HEADER_AUTHORIZATION),
        max_age: Optional[float] = None,
    ) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        if max_age is not None and max_age <= 0:
            raise ValueError(f"max_age must be positive, got {max_age}")
        self.max_entries = max_entries
        self.max_age = max_age
        self.vary_headers = tuple(vary_headers)
        self._entries: "OrderedDict[CacheKey, CachedEntry]" = OrderedDict()
        self._lock = threading.Lock()

    def key_for(self, request: httpx.Request) -> CacheKey:
        vary = tuple(
            (name.lower(), request.headers[name])
            for name in self.vary_headers
            if name in request.headers
        )
        return CacheKey(method=request.method, url=str(request.url), vary=vary)

    def lookup(self, key: CacheKey) -> Optional[CachedEntry]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self.max_age is not None and time.time() - entry.stored_at > self.max_age:
                del self._entries[key]
                logger.debug(f"Expired cached response for {key.method} {key.url}")
                return None
            self._entries.move_to_end(key)
            return entry

    def store(self, key: CacheKey, entry: CachedEntry) -> None:
        with self._lock:
            self._entries[key] = entry
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted cached response for {evicted.method} {evicted.url}")

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
