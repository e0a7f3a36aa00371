"""Container operations.

A container is a named bucket of objects in a flat namespace. Constructing
a ``Container`` fetches its metadata; the instance then acts as a factory
for ``StorageObject`` handles and as the entry point for listing, deleting
and publishing objects through the CDN.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cloudfiles.common.config import DEFAULT_CDN_TTL
from cloudfiles.domain.errors import ErrorKind
from cloudfiles.domain.listing import parse_names, parse_object_details
from cloudfiles.domain.models import ContainerInfo, ObjectDetail
from cloudfiles.services.base import (
    check_container_name,
    check_object_name,
    escape,
    failure,
    header_int,
    listing_text,
    query_string,
)
from cloudfiles.services.storage_object import StorageObject

if TYPE_CHECKING:
    from cloudfiles.services.connection import Connection


class Container:
    """Metadata holder and StorageObject factory for one container.

    Construction is all-or-nothing: if the container's metadata cannot be
    fetched, ``NoSuchContainer`` is raised and no instance is produced.
    """

    def __init__(self, connection: "Connection", name: str) -> None:
        """Bind to a container and fetch its metadata.

        Args:
            connection: Shared connection; never modified by the container.
            name: Container name.

        Raises:
            InvalidName: If the name is unusable.
            NoSuchContainer: If the metadata request is not answered with 204.
        """
        self._connection = connection
        self._name = check_container_name(name)
        self.bytes_used = 0
        self.object_count = 0
        self.cdn_enabled = False
        self.cdn_ttl: int | None = None
        self.cdn_uri: str | None = None
        self.populate()

    @property
    def name(self) -> str:
        return self._name

    @property
    def connection(self) -> "Connection":
        return self._connection

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"<Container {self._name!r} objects={self.object_count} bytes={self.bytes_used}>"

    def _storage_path(self, object_name: str | None = None) -> str:
        path = f"{self._connection.storagepath}/{escape(self._name)}"
        if object_name is not None:
            path = f"{path}/{escape(check_object_name(object_name))}"
        return path

    def _cdn_path(self) -> str:
        return f"{self._connection.cdnmgmtpath}/{escape(self._name)}"

    # Metadata

    def populate(self) -> ContainerInfo:
        """Fetch storage metadata and CDN status and cache the result.

        Returns:
            ContainerInfo combining both lookups.

        Raises:
            NoSuchContainer: If the storage metadata request does not return 204.
        """
        bytes_used, object_count = self._fetch_storage_info()
        cdn_enabled, cdn_ttl, cdn_uri = self._fetch_cdn_status()
        info = ContainerInfo(
            bytes_used=bytes_used,
            object_count=object_count,
            cdn_enabled=cdn_enabled,
            cdn_ttl=cdn_ttl,
            cdn_uri=cdn_uri,
        )
        self.bytes_used = info.bytes_used
        self.object_count = info.object_count
        self.cdn_enabled = info.cdn_enabled
        self.cdn_ttl = info.cdn_ttl
        self.cdn_uri = info.cdn_uri
        return info

    refresh = populate

    def _fetch_storage_info(self) -> tuple[int, int]:
        response = self._connection.cfreq(
            "HEAD", self._connection.storagehost, self._storage_path()
        )
        if response.status != 204:
            raise failure(ErrorKind.NO_SUCH_CONTAINER, f"Container {self._name}", response)
        return (
            header_int(response, "x-container-bytes-used"),
            header_int(response, "x-container-object-count"),
        )

    def _fetch_cdn_status(self) -> tuple[bool, int | None, str | None]:
        # A failed probe only means the container is not published.
        response = self._connection.cfreq(
            "HEAD", self._connection.cdnmgmthost, self._cdn_path()
        )
        if response.status != 204:
            return False, None, None
        flag = (response.header("x-cdn-enabled") or "true").strip().lower()
        if flag == "false":
            return False, None, None
        ttl = header_int(response, "x-ttl") or None
        return True, ttl, response.header("x-cdn-uri")

    def is_public(self) -> bool:
        return self.cdn_enabled

    def is_empty(self) -> bool:
        return self.object_count == 0 and self.bytes_used == 0

    # CDN

    def make_public(self, ttl: int | None = None) -> None:
        """Publish the container through the CDN.

        Args:
            ttl: Seconds the CDN may cache the container's objects. Defaults
                to the connection's ``DEFAULT_CDN_TTL`` setting, or 86400.

        Raises:
            ValueError: If ttl is not a positive integer.
            NoSuchContainer: If the CDN does not answer with 201.
        """
        if ttl is None:
            settings = getattr(self._connection, "settings", None)
            ttl = settings.DEFAULT_CDN_TTL if settings is not None else DEFAULT_CDN_TTL
        if isinstance(ttl, bool) or not isinstance(ttl, int) or ttl <= 0:
            raise ValueError("ttl must be a positive number of seconds")
        headers = {"X-CDN-Enabled": "True", "X-TTL": str(ttl)}
        response = self._connection.cfreq(
            "PUT", self._connection.cdnmgmthost, self._cdn_path(), headers
        )
        if response.status != 201:
            raise failure(ErrorKind.NO_SUCH_CONTAINER, f"Publish {self._name}", response)
        self.cdn_enabled = True
        self.cdn_ttl = ttl
        self.cdn_uri = response.header("x-cdn-uri") or self.cdn_uri

    def make_private(self) -> None:
        """Stop serving the container through the CDN.

        Objects already cached by the CDN stay reachable until their TTL
        expires.

        Raises:
            NoSuchContainer: If the CDN does not answer with 201.
        """
        headers = {"X-CDN-Enabled": "False"}
        response = self._connection.cfreq(
            "POST", self._connection.cdnmgmthost, self._cdn_path(), headers
        )
        if response.status != 201:
            raise failure(ErrorKind.NO_SUCH_CONTAINER, f"Unpublish {self._name}", response)
        self.cdn_enabled = False
        self.cdn_uri = None

    # Objects

    def object(self, name: str) -> StorageObject:
        """Return an existing object, seeded with its metadata.

        Raises:
            NoSuchObject: If the server answers 404.
            InvalidResponse: For any other non-success status.
        """
        response = self._connection.cfreq(
            "HEAD", self._connection.storagehost, self._storage_path(name)
        )
        if response.status == 404:
            raise failure(ErrorKind.NO_SUCH_OBJECT, f"Object {name}", response)
        if not response.is_success:
            raise failure(ErrorKind.INVALID_RESPONSE, f"Object {name}", response)
        return StorageObject(self, name, response=response)

    def __getitem__(self, name: str) -> StorageObject:
        return self.object(name)

    def create_object(self, name: str) -> StorageObject:
        """Return a handle for a new object; nothing is stored until it is written."""
        return StorageObject(self, name)

    def object_exists(self, name: str) -> bool:
        response = self._connection.cfreq(
            "HEAD", self._connection.storagehost, self._storage_path(name)
        )
        return response.is_success

    def delete_object(self, name: str) -> None:
        """Permanently remove an object.

        Raises:
            NoSuchObject: If the server answers 404.
            InvalidResponse: For any other non-success status.
        """
        response = self._connection.cfreq(
            "DELETE", self._connection.storagehost, self._storage_path(name)
        )
        if response.status == 404:
            raise failure(ErrorKind.NO_SUCH_OBJECT, f"Delete {name}", response)
        if not response.is_success:
            raise failure(ErrorKind.INVALID_RESPONSE, f"Delete {name}", response)

    def objects(
        self,
        *,
        limit: int | None = None,
        marker: str | None = None,
        prefix: str | None = None,
        path: str | None = None,
    ) -> list[str]:
        """List object names in server order.

        Args:
            limit: Maximum number of names to return.
            marker: Only return names sorting after this one.
            prefix: Only return names starting with this string.
            path: Only return names directly under this pseudo-directory.

        Raises:
            InvalidResponse: If the listing request fails.
        """
        query = query_string(limit=limit, marker=marker, prefix=prefix, path=path)
        response = self._connection.cfreq(
            "GET", self._connection.storagehost, f"{self._storage_path()}{query}"
        )
        if response.status == 204:
            return []
        if response.status != 200:
            raise failure(ErrorKind.INVALID_RESPONSE, f"Listing {self._name}", response)
        return parse_names(listing_text(response))

    def objects_detail(
        self,
        *,
        limit: int | None = None,
        marker: str | None = None,
        prefix: str | None = None,
        path: str | None = None,
    ) -> dict[str, ObjectDetail]:
        """List objects with size, hash, content type and modification time.

        Takes the same filters as ``objects``.

        Raises:
            InvalidResponse: If the listing request fails or is unreadable.
        """
        query = query_string(
            format="xml", limit=limit, marker=marker, prefix=prefix, path=path
        )
        response = self._connection.cfreq(
            "GET", self._connection.storagehost, f"{self._storage_path()}{query}"
        )
        if response.status == 204:
            return {}
        if response.status != 200:
            raise failure(ErrorKind.INVALID_RESPONSE, f"Listing {self._name}", response)
        return parse_object_details(listing_text(response))
