"""
Cloud Files client library.

Containers and objects are thin wrappers around authenticated HTTP requests
to the storage and CDN management endpoints.
"""

from .domain.errors import (
    CloudFilesError,
    ContainerNotEmpty,
    ErrorKind,
    InvalidName,
    InvalidResponse,
    NoSuchContainer,
    NoSuchObject,
)
from .domain.models import AccountInfo, ContainerDetail, ContainerInfo, ObjectDetail
from .infra.http import HttpClient, RequestsHttpClient, Response, TransportError
from .services import Connection, Container, StorageObject

__version__ = "1.0.0"
__all__ = [
    # Entry points
    "Connection",
    "Container",
    "StorageObject",
    # Errors
    "CloudFilesError",
    "ErrorKind",
    "NoSuchContainer",
    "NoSuchObject",
    "InvalidResponse",
    "ContainerNotEmpty",
    "InvalidName",
    "TransportError",
    # Values
    "AccountInfo",
    "ContainerDetail",
    "ContainerInfo",
    "ObjectDetail",
    # Transport
    "HttpClient",
    "RequestsHttpClient",
    "Response",
]
