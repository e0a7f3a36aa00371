from __future__ import annotations

from urllib.parse import quote, urlencode

from cloudfiles.domain import MAX_CONTAINER_NAME_LENGTH, MAX_OBJECT_NAME_LENGTH
from cloudfiles.domain.errors import (
    CloudFilesError,
    ErrorKind,
    InvalidName,
    InvalidResponse,
    error_for,
)
from cloudfiles.infra.http.client import Response


def escape(name: str) -> str:
    """Percent-encode a name for use as a path segment."""
    return quote(name, safe="/")


def query_string(**params: object) -> str:
    """Build ``?k=v&...`` from the parameters that are not None."""
    present = [(key, value) for key, value in params.items() if value is not None]
    if not present:
        return ""
    return "?" + urlencode(present)


def header_int(response: Response, name: str) -> int:
    value = response.header(name)
    try:
        return max(int(value), 0) if value is not None else 0
    except ValueError:
        return 0


def listing_text(response: Response) -> str | None:
    """Decode a listing body, rejecting bytes that are not UTF-8."""
    try:
        return response.text
    except UnicodeDecodeError as exc:
        raise InvalidResponse(
            f"Listing is not valid UTF-8: {exc}", status=response.status
        ) from exc


def check_container_name(name: str) -> str:
    if not name:
        raise InvalidName("Container name must not be empty")
    if "/" in name:
        raise InvalidName(f"Container name may not contain '/': {name!r}")
    if len(name) > MAX_CONTAINER_NAME_LENGTH:
        raise InvalidName(
            f"Container name is limited to {MAX_CONTAINER_NAME_LENGTH} characters"
        )
    return name


def check_object_name(name: str) -> str:
    if not name:
        raise InvalidName("Object name must not be empty")
    if len(name) > MAX_OBJECT_NAME_LENGTH:
        raise InvalidName(
            f"Object name is limited to {MAX_OBJECT_NAME_LENGTH} characters"
        )
    return name


def failure(kind: ErrorKind, action: str, response: Response) -> CloudFilesError:
    """Build the error for an unexpected status on ``action``."""
    return error_for(
        kind,
        f"{action} failed with status {response.status}",
        status=response.status,
    )
