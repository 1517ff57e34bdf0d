"""Unit tests for the Streamlit-side APIClient.

Validates that the upload is sent as multipart field ``audio``, that server
error bodies become readable ``APIError`` messages, and that transport
failures are categorised.
"""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from src.core.models import AudioCapture
from src.ui.api_client import APIClient, APIError


@pytest.fixture
def client():
    """Create an APIClient with a mocked httpx.Client."""
    with patch("src.ui.api_client.httpx.Client") as mock_cls:
        mock_http = MagicMock()
        mock_cls.return_value = mock_http
        api = APIClient(base_url="http://test:3000/")
        api._mock_http = mock_http  # expose for assertions
        api._mock_cls = mock_cls
        yield api


def _status_error(status: int, body: dict | None = None, text: str = "") -> httpx.HTTPStatusError:
    request = httpx.Request("POST", "http://test:3000/transcribe-audio")
    if body is not None:
        response = httpx.Response(status, json=body, request=request)
    else:
        response = httpx.Response(status, text=text, request=request)
    return httpx.HTTPStatusError("error", request=request, response=response)


class TestInit:
    def test_base_url_trailing_slash_stripped(self, client):
        assert client._mock_cls.call_args.kwargs["base_url"] == "http://test:3000"


class TestTranscribeAudio:
    """Verify APIClient.transcribe_audio() request construction."""

    def test_posts_multipart_audio(self, client):
        resp = MagicMock()
        resp.json.return_value = {"transcription": "hi", "feedback": "Overall: ..."}
        client._mock_http.post.return_value = resp

        capture = AudioCapture(data=b"webm-data")
        result = client.transcribe_audio(capture)

        client._mock_http.post.assert_called_once_with(
            "/transcribe-audio",
            files={"audio": ("audio.webm", b"webm-data", "audio/webm")},
        )
        resp.raise_for_status.assert_called_once()
        assert result["transcription"] == "hi"

    def test_server_error_message_extracted(self, client):
        resp = MagicMock()
        resp.raise_for_status.side_effect = _status_error(
            500, {"error": "Could not process audio. quota", "code": "X", "timestamp": "t"}
        )
        client._mock_http.post.return_value = resp

        with pytest.raises(APIError) as exc_info:
            client.transcribe_audio(AudioCapture(data=b"x"))

        err = exc_info.value
        assert err.category == "http"
        assert err.status_code == 500
        assert err.message == "HTTP error! status: 500, message: Could not process audio. quota"

    def test_plain_text_error_body(self, client):
        resp = MagicMock()
        resp.raise_for_status.side_effect = _status_error(502, text="Bad Gateway")
        client._mock_http.post.return_value = resp

        with pytest.raises(APIError, match="status: 502, message: Bad Gateway"):
            client.transcribe_audio(AudioCapture(data=b"x"))

    def test_connection_error(self, client):
        client._mock_http.post.side_effect = httpx.ConnectError("refused")
        with pytest.raises(APIError) as exc_info:
            client.transcribe_audio(AudioCapture(data=b"x"))
        assert exc_info.value.category == "connection"

    def test_timeout(self, client):
        client._mock_http.post.side_effect = httpx.ReadTimeout("slow")
        with pytest.raises(APIError) as exc_info:
            client.transcribe_audio(AudioCapture(data=b"x"))
        assert exc_info.value.category == "timeout"

    def test_no_retry_on_failure(self, client):
        client._mock_http.post.side_effect = httpx.ConnectError("refused")
        with pytest.raises(APIError):
            client.transcribe_audio(AudioCapture(data=b"x"))
        assert client._mock_http.post.call_count == 1


class TestCheckConnection:
    def test_connected(self, client):
        resp = MagicMock()
        resp.json.return_value = {"status": "ok"}
        client._mock_http.get.return_value = resp
        assert client.check_connection() == (True, "Connected")

    def test_not_running(self, client):
        client._mock_http.get.side_effect = httpx.ConnectError("refused")
        ok, message = client.check_connection()
        assert ok is False
        assert "not running" in message
