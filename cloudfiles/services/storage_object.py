"""Storage object handles.

Objects are read and written whole; no streaming is attempted.
"""

from __future__ import annotations

import hashlib
import mimetypes
from typing import TYPE_CHECKING, Mapping

from cloudfiles.domain.errors import ErrorKind
from cloudfiles.infra.http.client import Response
from cloudfiles.services.base import check_object_name, escape, failure, header_int

if TYPE_CHECKING:
    from cloudfiles.services.container import Container

META_PREFIX = "x-object-meta-"


class StorageObject:
    """A single named object inside a Container."""

    def __init__(
        self,
        container: "Container",
        name: str,
        *,
        response: Response | None = None,
    ) -> None:
        self._container = container
        self._name = check_object_name(name)
        self.content_type: str | None = None
        self.bytes = 0
        self.etag: str | None = None
        self.last_modified: str | None = None
        self.metadata: dict[str, str] = {}
        if response is not None:
            self._seed(response)

    @property
    def name(self) -> str:
        return self._name

    @property
    def container(self) -> "Container":
        return self._container

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"<StorageObject {self._container.name}/{self._name}>"

    def _seed(self, response: Response) -> None:
        self.content_type = response.header("content-type")
        self.bytes = header_int(response, "content-length")
        self.etag = response.header("etag")
        self.last_modified = response.header("last-modified")
        self.metadata = {
            key.lower()[len(META_PREFIX):]: value
            for key, value in response.headers.items()
            if key.lower().startswith(META_PREFIX)
        }

    def _request(
        self,
        method: str,
        headers: Mapping[str, str] | None = None,
        data: bytes | None = None,
    ) -> Response:
        connection = self._container.connection
        path = (
            f"{connection.storagepath}/{escape(self._container.name)}"
            f"/{escape(self._name)}"
        )
        return connection.cfreq(method, connection.storagehost, path, headers, data)

    def refresh(self) -> None:
        """Reload the cached metadata from the server."""
        response = self._request("HEAD")
        if response.status == 404:
            raise failure(ErrorKind.NO_SUCH_OBJECT, f"Object {self._name}", response)
        if not response.is_success:
            raise failure(ErrorKind.INVALID_RESPONSE, f"Object {self._name}", response)
        self._seed(response)

    def data(self) -> bytes:
        """Download the whole object body."""
        response = self._request("GET")
        if response.status == 404:
            raise failure(ErrorKind.NO_SUCH_OBJECT, f"Read {self._name}", response)
        if response.status != 200:
            raise failure(ErrorKind.INVALID_RESPONSE, f"Read {self._name}", response)
        return response.body or b""

    def write(
        self,
        data: bytes | str,
        *,
        content_type: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        """Upload ``data`` as the object's whole body.

        The MD5 of the payload is sent as ``ETag`` so the server rejects a
        corrupted upload with 422.

        Args:
            data: Object body; ``str`` is UTF-8 encoded.
            content_type: MIME type, guessed from the name when omitted.
            headers: Extra request headers, e.g. ``X-Object-Meta-*``.

        Raises:
            InvalidResponse: If the server does not answer with 201.
        """
        payload = data.encode("utf-8") if isinstance(data, str) else data
        etag = hashlib.md5(payload).hexdigest()
        content_type = (
            content_type
            or mimetypes.guess_type(self._name)[0]
            or "application/octet-stream"
        )
        request_headers = {
            "ETag": etag,
            "Content-Type": content_type,
            "Content-Length": str(len(payload)),
        }
        request_headers.update(headers or {})

        response = self._request("PUT", request_headers, payload)
        if response.status == 422:
            raise failure(
                ErrorKind.INVALID_RESPONSE, f"Write {self._name} (checksum mismatch)", response
            )
        if response.status != 201:
            raise failure(ErrorKind.INVALID_RESPONSE, f"Write {self._name}", response)

        self.etag = response.header("etag") or etag
        self.bytes = len(payload)
        self.content_type = content_type
        self.last_modified = response.header("last-modified") or self.last_modified

    def set_metadata(self, metadata: Mapping[str, str]) -> None:
        """Replace the object's ``X-Object-Meta-*`` headers."""
        headers = {f"X-Object-Meta-{key}": str(value) for key, value in metadata.items()}
        response = self._request("POST", headers)
        if response.status == 404:
            raise failure(ErrorKind.NO_SUCH_OBJECT, f"Update {self._name}", response)
        if response.status != 202:
            raise failure(ErrorKind.INVALID_RESPONSE, f"Update {self._name}", response)
        self.metadata = {key.lower(): str(value) for key, value in metadata.items()}

    def public_url(self) -> str | None:
        """Return the CDN URL of the object, or None if the container is private."""
        if not self._container.is_public() or not self._container.cdn_uri:
            return None
        return f"{self._container.cdn_uri.rstrip('/')}/{escape(self._name)}"
