from __future__ import annotations

import os

import pytest

from cloudfiles.common.config import Settings, get_settings
from cloudfiles.infra.http.client import Response
from cloudfiles.services.container import Container
from tests.services.fake_connection import FakeConnection

for _key in [k for k in os.environ if k.startswith("CLOUDFILES_")]:
    del os.environ[_key]
get_settings.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        STORAGE_URL="https://storage.example/v1/AUTH_test",
        CDN_MANAGEMENT_URL="https://cdn.example/v1/AUTH_test",
        AUTH_TOKEN="secret-token",
    )


@pytest.fixture()
def fake_connection() -> FakeConnection:
    return FakeConnection()


@pytest.fixture()
def container(fake_connection: FakeConnection) -> Container:
    """A populated container whose connection is ready to be re-scripted."""
    fake_connection.respond(
        Response(
            204,
            {"x-container-bytes-used": "42", "x-container-object-count": "5"},
        )
    )
    built = Container(fake_connection, "test_container")
    fake_connection.respond(Response(204))
    return built
