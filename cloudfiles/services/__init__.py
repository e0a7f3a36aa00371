from .connection import Connection
from .container import Container
from .storage_object import StorageObject

__all__ = [
    "Connection",
    "Container",
    "StorageObject",
]
