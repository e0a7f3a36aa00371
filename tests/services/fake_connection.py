"""Scripted connection double for container and object tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from cloudfiles.infra.http.client import Response


@dataclass(frozen=True)
class Call:
    method: str
    host: str
    path: str
    headers: dict[str, str]
    data: bytes | None


@dataclass
class FakeConnection:
    """In-memory stand-in for Connection.

    Responses are handed out in order; the last one keeps being returned
    once the queue is down to a single entry.
    """

    storagehost: str = "test.storage.example"
    storagepath: str = "/dummy/path"
    cdnmgmthost: str = "cdm.test.example"
    cdnmgmtpath: str = "/dummy/path"
    responses: list[Response] = field(default_factory=list)
    calls: list[Call] = field(default_factory=list)

    def respond(self, *responses: Response) -> "FakeConnection":
        self.responses = list(responses)
        self.calls = []
        return self

    def cfreq(
        self,
        method: str,
        host: str,
        path: str,
        headers: Mapping[str, str] | None = None,
        data: Any = None,
    ) -> Response:
        self.calls.append(Call(method, host, path, dict(headers or {}), data))
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]
