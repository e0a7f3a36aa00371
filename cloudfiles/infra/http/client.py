"""HTTP client protocol and response type.

This module defines the transport contract the storage layer talks to:
a single ``request`` call returning a fixed-shape ``Response``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Protocol

from requests.structures import CaseInsensitiveDict


class TransportError(RuntimeError):
    """Raised when a request cannot be delivered or no response is received."""


@dataclass(frozen=True, slots=True)
class Response:
    """Status, headers and optional body of an HTTP response.

    ``status`` accepts anything ``int()`` understands (the service has
    historically been described with string codes such as ``"204"``).
    Header lookups are case-insensitive. A ``str`` body is stored UTF-8
    encoded.
    """

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", int(self.status))
        object.__setattr__(self, "headers", CaseInsensitiveDict(self.headers or {}))
        if isinstance(self.body, str):
            object.__setattr__(self, "body", self.body.encode("utf-8"))

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    @property
    def text(self) -> str | None:
        """The body decoded as UTF-8; raises ``UnicodeDecodeError`` on bad bytes."""
        if self.body is None:
            return None
        return self.body.decode("utf-8")

    def header(self, name: str, default: str | None = None) -> str | None:
        return self.headers.get(name, default)


class HttpClient(Protocol):
    """Protocol for the transport used by ``Connection.cfreq``."""

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        data: bytes | None = None,
        timeout: float | None = None,
    ) -> Response:
        """Send one request and return the response.

        Args:
            method: HTTP verb.
            url: Absolute URL including any query string.
            headers: Request headers.
            data: Request body.
            timeout: Seconds to wait for the server.

        Returns:
            Response for any status code the server sends.

        Raises:
            TransportError: If no response was received.
        """
        ...
