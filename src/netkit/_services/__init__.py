from ._base_service import BaseService, HttpxTransport, Transport
from .api_client import ApiClient

__all__ = ["ApiClient", "BaseService", "HttpxTransport", "Transport"]
