"""Tests for the requests-based HTTP client."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from cloudfiles.infra.http.client import Response, TransportError
from cloudfiles.infra.http.requests_client import RequestsHttpClient


class TestRequestsHttpClient:
    """Test RequestsHttpClient implementation."""

    @pytest.fixture
    def mock_session(self):
        """Mock requests session."""
        mock_session = MagicMock()
        with patch.object(
            RequestsHttpClient, "_build_session", return_value=mock_session
        ):
            yield mock_session

    @pytest.fixture
    def client(self, mock_session):
        """Create RequestsHttpClient with a mocked session."""
        return RequestsHttpClient()

    def _raw(self, status, headers=None, content=b""):
        raw = MagicMock()
        raw.status_code = status
        raw.headers = headers or {}
        raw.content = content
        return raw

    def test_request_wraps_response(self, client, mock_session):
        """Test that the raw response becomes a Response."""
        mock_session.request.return_value = self._raw(
            200, {"Content-Type": "text/plain"}, b"foo\nbar"
        )

        response = client.request(
            "GET",
            "https://storage.example/v1/AUTH_x/photos",
            headers={"X-Auth-Token": "t"},
            timeout=5,
        )

        assert isinstance(response, Response)
        assert response.status == 200
        assert response.header("content-type") == "text/plain"
        assert response.text == "foo\nbar"
        mock_session.request.assert_called_once_with(
            "GET",
            "https://storage.example/v1/AUTH_x/photos",
            headers={"X-Auth-Token": "t"},
            data=None,
            timeout=5,
            allow_redirects=False,
        )

    def test_empty_body_is_none(self, client, mock_session):
        """Test that an empty payload is reported as no body."""
        mock_session.request.return_value = self._raw(204)

        response = client.request("HEAD", "https://storage.example/v1/AUTH_x")

        assert response.status == 204
        assert response.body is None
        assert response.text is None

    def test_error_status_is_returned(self, client, mock_session):
        """Test that non-2xx statuses are not raised."""
        mock_session.request.return_value = self._raw(404)

        response = client.request("HEAD", "https://storage.example/v1/AUTH_x/a")

        assert response.status == 404
        assert response.is_success is False

    def test_request_exception(self, client, mock_session):
        """Test error handling when the request cannot be sent."""
        mock_session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(TransportError, match="GET https://storage.example"):
            client.request("GET", "https://storage.example/v1/AUTH_x")

    def test_uses_given_session(self):
        """Test that an injected session is used as-is."""
        session = MagicMock()
        session.request.return_value = self._raw(204)

        RequestsHttpClient(session=session).request("HEAD", "https://s.example/")

        session.request.assert_called_once()

    def test_close(self, client, mock_session):
        """Test closing the underlying session."""
        client.close()

        mock_session.close.assert_called_once_with()


class TestResponse:
    """Test the Response contract."""

    def test_string_status_is_converted(self):
        assert Response("204").status == 204

    def test_headers_are_case_insensitive(self):
        response = Response(204, {"X-Container-Bytes-Used": "42"})

        assert response.header("x-container-bytes-used") == "42"
        assert response.header("missing", "default") == "default"

    def test_string_body_is_encoded(self):
        assert Response(200, body="naïve").body == "naïve".encode("utf-8")

    def test_text_decodes_strictly(self):
        with pytest.raises(UnicodeDecodeError):
            Response(200, body=b"caf\xe9").text

    @pytest.mark.parametrize(("status", "ok"), [(200, True), (204, True), (299, True), (301, False), (404, False)])
    def test_is_success(self, status, ok):
        assert Response(status).is_success is ok
