"""requests-based HTTP client implementation.

Dependencies:
    - requests
"""

from __future__ import annotations

from typing import Any, Mapping

import requests

from cloudfiles.infra.http.client import Response, TransportError


class RequestsHttpClient:
    """HTTP client backed by a ``requests.Session``.

    Non-2xx statuses are returned as responses, not raised; the storage
    layer decides what each status means for each operation.
    """

    def __init__(self, *, session: requests.Session | None = None) -> None:
        """Initialize the client.

        Args:
            session: Session to send requests through. A new one is created
                when omitted; callers that want their own adapters or pool
                sizes pass a configured session in.
        """
        self._session = session or self._build_session()

    @staticmethod
    def _build_session() -> Any:
        """Create a plain requests session."""
        return requests.Session()

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        data: bytes | None = None,
        timeout: float | None = None,
    ) -> Response:
        """Send one request and wrap the result in a ``Response``."""
        try:
            raw = self._session.request(
                method,
                url,
                headers=dict(headers or {}),
                data=data,
                timeout=timeout,
                allow_redirects=False,
            )
        except requests.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        return Response(
            status=raw.status_code,
            headers=dict(raw.headers),
            body=raw.content or None,
        )

    def close(self) -> None:
        self._session.close()
