from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    NO_SUCH_CONTAINER = "no_such_container"
    NO_SUCH_OBJECT = "no_such_object"
    INVALID_RESPONSE = "invalid_response"
    CONTAINER_NOT_EMPTY = "container_not_empty"
    INVALID_NAME = "invalid_name"


class CloudFilesError(RuntimeError):
    """Base class for errors reported by containers, objects and the account."""

    kind: ErrorKind

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status

    def __str__(self) -> str:
        if self.status is not None:
            return f"[{self.status}] {self.message}"
        return self.message


class NoSuchContainer(CloudFilesError):
    """Raised when a container lookup or a CDN visibility change is rejected."""

    kind = ErrorKind.NO_SUCH_CONTAINER


class NoSuchObject(CloudFilesError):
    """Raised when the server reports that an object does not exist."""

    kind = ErrorKind.NO_SUCH_OBJECT


class InvalidResponse(CloudFilesError):
    """Raised for any status an operation does not expect."""

    kind = ErrorKind.INVALID_RESPONSE


class ContainerNotEmpty(CloudFilesError):
    """Raised when deleting a container that still holds objects."""

    kind = ErrorKind.CONTAINER_NOT_EMPTY


class InvalidName(CloudFilesError):
    """Raised before any request when a container or object name is unusable."""

    kind = ErrorKind.INVALID_NAME


ERROR_BY_KIND: dict[ErrorKind, type[CloudFilesError]] = {
    cls.kind: cls
    for cls in (
        NoSuchContainer,
        NoSuchObject,
        InvalidResponse,
        ContainerNotEmpty,
        InvalidName,
    )
}


def error_for(kind: ErrorKind, message: str, *, status: int | None = None) -> CloudFilesError:
    return ERROR_BY_KIND[kind](message, status=status)
