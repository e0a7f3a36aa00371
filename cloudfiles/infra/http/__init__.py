"""HTTP transport layer.

This module provides the protocol-based transport the storage layer uses,
with a default implementation on top of requests.
"""

from .client import HttpClient, Response, TransportError
from .requests_client import RequestsHttpClient

__all__ = [
    "HttpClient",
    "RequestsHttpClient",
    "Response",
    "TransportError",
]
