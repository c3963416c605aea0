from enum import Enum
from typing import Optional


class CachePolicy(str, Enum):
    """Caching directive sent with a request as a ``Cache-Control`` header."""

    USE_PROTOCOL_CACHE_POLICY = "use_protocol_cache_policy"
    RELOAD_IGNORING_CACHE = "reload_ignoring_cache"
    RETURN_CACHE_DATA_ELSE_LOAD = "return_cache_data_else_load"

    @property
    def cache_control(self) -> Optional[str]:
        if self is CachePolicy.RELOAD_IGNORING_CACHE:
            return "no-cache"
        if self is CachePolicy.RETURN_CACHE_DATA_ELSE_LOAD:
            return "max-stale"
        return None
