"""Authenticated access to the storage and CDN management endpoints.

The Connection is handed already-resolved endpoint URLs and an auth token;
it does not perform the authentication handshake. Every request in the
library goes through ``cfreq``.
"""

from __future__ import annotations

import logging
import time
from typing import Mapping
from urllib.parse import urlsplit

from cloudfiles.common.config import Settings, get_settings
from cloudfiles.domain.errors import ErrorKind
from cloudfiles.domain.listing import parse_container_details, parse_names
from cloudfiles.domain.models import AccountInfo, ContainerDetail
from cloudfiles.infra.http.client import HttpClient, Response, TransportError
from cloudfiles.infra.http.requests_client import RequestsHttpClient
from cloudfiles.infra.observability.metrics import LATENCY, REQUESTS
from cloudfiles.services.base import (
    check_container_name,
    escape,
    failure,
    header_int,
    listing_text,
    query_string,
)
from cloudfiles.services.container import Container

logger = logging.getLogger("cloudfiles.http")

SENSITIVE_HEADERS = {"x-auth-token", "x-storage-token", "authorization"}


def _split_url(url: str) -> tuple[str, str, str]:
    parts = urlsplit(url)
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        raise ValueError(f"Endpoint must be an absolute http(s) URL, got {url!r}")
    return parts.scheme, parts.netloc, parts.path.rstrip("/")


def _under(path: str, root: str) -> bool:
    if not root:
        return True
    bare = path.split("?", 1)[0]
    return bare == root or bare.startswith(f"{root}/")


def _mask_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        key: "***" if key.lower() in SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


class Connection:
    """Account-level handle on the object storage service.

    Example usage:
        >>> conn = Connection(
        ...     storage_url="https://storage.example/v1/AUTH_abc",
        ...     cdn_management_url="https://cdn.example/v1/AUTH_abc",
        ...     auth_token="token",
        ... )
        >>> container = conn.container("photos")
        >>> container.objects(limit=10)
    """

    def __init__(
        self,
        *,
        storage_url: str,
        cdn_management_url: str,
        auth_token: str,
        http_client: HttpClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self.storagescheme, self.storagehost, self.storagepath = _split_url(storage_url)
        self.cdnmgmtscheme, self.cdnmgmthost, self.cdnmgmtpath = _split_url(
            cdn_management_url
        )
        self.auth_token = auth_token
        self._http = http_client or RequestsHttpClient()

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        http_client: HttpClient | None = None,
    ) -> "Connection":
        """Build a Connection from the CLOUDFILES_* configuration."""
        settings = settings or get_settings()
        if not settings.STORAGE_URL or not settings.CDN_MANAGEMENT_URL:
            raise ValueError(
                "CLOUDFILES_STORAGE_URL and CLOUDFILES_CDN_MANAGEMENT_URL are required"
            )
        if not settings.AUTH_TOKEN:
            raise ValueError("CLOUDFILES_AUTH_TOKEN is required")
        return cls(
            storage_url=settings.STORAGE_URL,
            cdn_management_url=settings.CDN_MANAGEMENT_URL,
            auth_token=settings.AUTH_TOKEN,
            http_client=http_client,
            settings=settings,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def _storage_root(self) -> str:
        return self.storagepath or "/"

    def _endpoint(self, host: str, path: str) -> tuple[str, str]:
        # Both endpoints may share a host; match the path on segment boundaries.
        if host == self.storagehost and _under(path, self.storagepath):
            return "storage", self.storagescheme
        if host == self.cdnmgmthost and _under(path, self.cdnmgmtpath):
            return "cdn", self.cdnmgmtscheme
        raise ValueError(f"No endpoint configured for {host}{path}")

    def cfreq(
        self,
        method: str,
        host: str,
        path: str,
        headers: Mapping[str, str] | None = None,
        data: bytes | None = None,
    ) -> Response:
        """Send an authenticated request to the storage or CDN endpoint.

        Args:
            method: HTTP verb.
            host: ``storagehost`` or ``cdnmgmthost``.
            path: Escaped request path, optionally with a query string.
            headers: Extra request headers.
            data: Request body.

        Returns:
            The response, whatever its status.

        Raises:
            TransportError: If the request could not be delivered.
        """
        endpoint, scheme = self._endpoint(host, path)
        request_headers = {
            "X-Auth-Token": self.auth_token,
            "User-Agent": self._settings.USER_AGENT,
        }
        request_headers.update(headers or {})
        url = f"{scheme}://{host}{path}"

        extra_payload: dict[str, object] = {
            "method": method,
            "endpoint": endpoint,
            "path": path,
        }
        if self._settings.TRACE_HTTP:
            extra_payload["request_headers"] = _mask_headers(request_headers)

        start = time.perf_counter()
        try:
            response = self._http.request(
                method,
                url,
                headers=request_headers,
                data=data,
                timeout=self._settings.TIMEOUT,
            )
        except TransportError:
            elapsed = time.perf_counter() - start
            if self._settings.ENABLE_METRICS:
                REQUESTS.labels(method, endpoint, "error").inc()
            extra_payload["duration_ms"] = round(elapsed * 1000, 3)
            logger.exception(
                "request_error method=%s endpoint=%s path=%s",
                method,
                endpoint,
                path,
                extra={"extra": extra_payload},
            )
            raise

        elapsed = time.perf_counter() - start
        if self._settings.ENABLE_METRICS:
            REQUESTS.labels(method, endpoint, str(response.status)).inc()
            LATENCY.labels(method, endpoint).observe(elapsed)

        level = logging.DEBUG
        if response.status >= 500:
            level = logging.ERROR
        elif response.status >= 400:
            level = logging.WARNING

        duration_ms = round(elapsed * 1000, 3)
        extra_payload["status"] = response.status
        extra_payload["duration_ms"] = duration_ms
        logger.log(
            level,
            "request method=%s endpoint=%s path=%s status=%s duration_ms=%.3f",
            method,
            endpoint,
            path,
            response.status,
            duration_ms,
            extra={"extra": extra_payload},
        )
        return response

    # Account methods

    def get_info(self) -> AccountInfo:
        """Return the account's total bytes used and container count."""
        response = self.cfreq("HEAD", self.storagehost, self._storage_root)
        if not response.is_success:
            raise failure(ErrorKind.INVALID_RESPONSE, "Account info", response)
        return AccountInfo(
            bytes_used=header_int(response, "x-account-bytes-used"),
            container_count=header_int(response, "x-account-container-count"),
        )

    def containers(
        self, *, limit: int | None = None, marker: str | None = None
    ) -> list[str]:
        """List container names in server order."""
        path = f"{self._storage_root}{query_string(limit=limit, marker=marker)}"
        response = self.cfreq("GET", self.storagehost, path)
        if response.status == 204:
            return []
        if response.status != 200:
            raise failure(ErrorKind.INVALID_RESPONSE, "Container listing", response)
        return parse_names(listing_text(response))

    def containers_detail(
        self, *, limit: int | None = None, marker: str | None = None
    ) -> dict[str, ContainerDetail]:
        """List containers with their object count and size."""
        path = (
            f"{self._storage_root}"
            f"{query_string(format='xml', limit=limit, marker=marker)}"
        )
        response = self.cfreq("GET", self.storagehost, path)
        if response.status == 204:
            return {}
        if response.status != 200:
            raise failure(ErrorKind.INVALID_RESPONSE, "Container listing", response)
        return parse_container_details(listing_text(response))

    def container(self, name: str) -> Container:
        """Return the named container, raising NoSuchContainer if absent."""
        return Container(self, check_container_name(name))

    def __getitem__(self, name: str) -> Container:
        return self.container(name)

    def container_exists(self, name: str) -> bool:
        path = f"{self.storagepath}/{escape(check_container_name(name))}"
        response = self.cfreq("HEAD", self.storagehost, path)
        return response.is_success

    def create_container(self, name: str) -> Container:
        """Create the container if needed and return it."""
        path = f"{self.storagepath}/{escape(check_container_name(name))}"
        response = self.cfreq("PUT", self.storagehost, path)
        if response.status not in (201, 202):
            raise failure(ErrorKind.INVALID_RESPONSE, f"Create container {name}", response)
        return Container(self, name)

    def delete_container(self, name: str) -> None:
        """Delete an empty container."""
        path = f"{self.storagepath}/{escape(check_container_name(name))}"
        response = self.cfreq("DELETE", self.storagehost, path)
        if response.status == 404:
            raise failure(ErrorKind.NO_SUCH_CONTAINER, f"Delete container {name}", response)
        if response.status == 409:
            raise failure(
                ErrorKind.CONTAINER_NOT_EMPTY, f"Delete container {name}", response
            )
        if response.status != 204:
            raise failure(ErrorKind.INVALID_RESPONSE, f"Delete container {name}", response)

    def public_containers(self) -> list[str]:
        """List the names of CDN-enabled containers."""
        response = self.cfreq("GET", self.cdnmgmthost, self.cdnmgmtpath or "/")
        if response.status == 204:
            return []
        if response.status != 200:
            raise failure(ErrorKind.INVALID_RESPONSE, "Public container listing", response)
        return parse_names(listing_text(response))

    def close(self) -> None:
        close = getattr(self._http, "close", None)
        if close is not None:
            close()
