"""Tests for the capture state machine and upload flow.

Covers Idle/Recording transitions, permission denial, chunk concatenation,
display fallbacks, and status handling around a single upload attempt.
"""

from unittest.mock import MagicMock

import pytest

from src.core.exceptions import MicrophonePermissionDeniedError, RecordingAlreadyActiveError
from src.ui.api_client import APIClient, APIError
from src.ui.components.recorder import (
    DEFAULT_FEEDBACK_TEXT,
    NO_SPEECH_FEEDBACK_TEXT,
    NO_TRANSCRIPTION_TEXT,
    UPLOAD_ERROR_FEEDBACK,
    UPLOAD_ERROR_TRANSCRIPT,
    CaptureSession,
    CaptureState,
    display_texts,
    upload_capture,
)
from src.ui.components.status import StatusBoard, StatusKind


class TestCaptureSession:
    """Verify the Idle/Recording state machine."""

    def test_starts_idle(self):
        assert CaptureSession().state is CaptureState.idle

    def test_start_and_stop(self):
        session = CaptureSession()
        session.start()
        assert session.state is CaptureState.recording
        session.add_chunk(b"ab")
        session.add_chunk(b"")
        session.add_chunk(b"cd")
        capture = session.stop()
        assert session.state is CaptureState.idle
        assert capture.data == b"abcd"
        assert capture.content_type == "audio/webm"
        assert capture.filename == "audio.webm"

    def test_restart_discards_previous_chunks(self):
        session = CaptureSession()
        session.start()
        session.add_chunk(b"old")
        session.stop()
        session.start()
        session.add_chunk(b"new")
        assert session.stop().data == b"new"

    def test_permission_denied_stays_idle(self):
        def deny():
            raise PermissionError("NotAllowedError: Permission denied")

        session = CaptureSession(open_input=deny)
        with pytest.raises(MicrophonePermissionDeniedError, match="Permission denied"):
            session.start()
        assert session.state is CaptureState.idle

    def test_input_closed_on_stop(self):
        handle = MagicMock()
        session = CaptureSession(open_input=lambda: handle)
        session.start()
        session.stop()
        handle.close.assert_called_once()

    def test_start_while_recording_rejected(self):
        session = CaptureSession()
        session.start()
        with pytest.raises(RecordingAlreadyActiveError):
            session.start()
        assert session.state is CaptureState.recording

    def test_stop_while_idle_is_noop(self):
        assert CaptureSession().stop() is None

    def test_chunks_ignored_while_idle(self):
        session = CaptureSession()
        session.add_chunk(b"stray")
        session.start()
        assert session.stop().data == b""


class TestDisplayTexts:
    def test_transcription_and_feedback(self):
        assert display_texts({"transcription": "hi", "feedback": "fb"}) == ("hi", "fb")

    def test_missing_feedback_with_speech(self):
        assert display_texts({"transcription": "hi"}) == ("hi", DEFAULT_FEEDBACK_TEXT)

    def test_nothing_returned(self):
        assert display_texts({"transcription": "", "feedback": ""}) == (
            NO_TRANSCRIPTION_TEXT,
            NO_SPEECH_FEEDBACK_TEXT,
        )


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestUploadCapture:
    """Verify status messages and texts around one upload."""

    @pytest.fixture
    def capture(self):
        session = CaptureSession()
        session.start()
        session.add_chunk(b"audio")
        return session.stop()

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def status(self, clock):
        return StatusBoard(clear_after=3.0, clock=clock)

    def test_success(self, capture, status, clock):
        client = MagicMock(spec=APIClient)
        client.transcribe_audio.return_value = {"transcription": "the cat", "feedback": "fb"}

        texts = upload_capture(client, capture, status)

        assert texts == ("the cat", "fb")
        client.transcribe_audio.assert_called_once_with(capture)
        assert status.current().text == "Transcription received!"
        clock.now = 3.0
        assert status.current() is None

    def test_empty_transcription_clears_processing_status(self, capture, status, clock):
        client = MagicMock(spec=APIClient)
        client.transcribe_audio.return_value = {"transcription": "", "feedback": "No speech"}

        texts = upload_capture(client, capture, status)

        assert texts == (NO_TRANSCRIPTION_TEXT, "No speech")
        assert status.current().text == "Processing audio..."
        clock.now = 3.0
        assert status.current() is None

    def test_failure_reported_once(self, capture, status, clock):
        client = MagicMock(spec=APIClient)
        client.transcribe_audio.side_effect = APIError("HTTP error! status: 500", category="http")

        texts = upload_capture(client, capture, status)

        assert texts == (UPLOAD_ERROR_TRANSCRIPT, UPLOAD_ERROR_FEEDBACK)
        assert client.transcribe_audio.call_count == 1
        message = status.current()
        assert message.kind is StatusKind.error
        assert message.text == "Error processing audio: HTTP error! status: 500"
        clock.now = 3.0
        assert status.current() is None
