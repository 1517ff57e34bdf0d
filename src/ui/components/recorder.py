"""
Recorder component: capture state machine, upload, and rendering.

States: idle -> recording -> idle. ``CaptureSession`` owns the state and the
accumulated chunks; only ``start()`` and ``stop()`` move between states.
Uploading happens after ``stop()`` and never affects the capture state.
"""

import logging
from collections.abc import Callable
from enum import StrEnum

import streamlit as st

from src.core.config import get_settings
from src.core.exceptions import MicrophonePermissionDeniedError, RecordingAlreadyActiveError
from src.core.models import AudioCapture
from src.ui.api_client import APIClient, APIError, get_api_client
from src.ui.components.status import StatusBoard, StatusKind

logger = logging.getLogger(__name__)

NO_TRANSCRIPTION_TEXT = "No transcription received."
DEFAULT_FEEDBACK_TEXT = "Good attempt! Keep practicing."
NO_SPEECH_FEEDBACK_TEXT = "No clear speech detected or significant errors."
UPLOAD_ERROR_TRANSCRIPT = "Error: Could not transcribe audio."
UPLOAD_ERROR_FEEDBACK = "Please try again. Ensure you speak clearly."


class CaptureState(StrEnum):
    """Possible states for a capture session."""

    idle = "idle"
    recording = "recording"


class CaptureSession:
    """Explicit Idle/Recording state machine for one microphone.

    Args:
        open_input: Acquires the audio input and returns a handle (anything
            with an optional ``close()``). Raising means permission was
            denied. None when the caller already owns the input.
        content_type: MIME type of the emitted chunks.
        filename: Upload filename for the finished capture.
    """

    def __init__(
        self,
        open_input: Callable[[], object] | None = None,
        content_type: str = "audio/webm",
        filename: str = "audio.webm",
    ) -> None:
        self._open_input = open_input
        self._content_type = content_type
        self._filename = filename
        self._state = CaptureState.idle
        self._chunks: list[bytes] = []
        self._input: object | None = None

    @property
    def state(self) -> CaptureState:
        return self._state

    @property
    def is_recording(self) -> bool:
        return self._state is CaptureState.recording

    def start(self) -> None:
        """Idle -> Recording.

        Raises:
            RecordingAlreadyActiveError: If already recording.
            MicrophonePermissionDeniedError: If the input cannot be opened;
                the session stays idle.
        """
        if self.is_recording:
            raise RecordingAlreadyActiveError()
        if self._open_input is not None:
            try:
                self._input = self._open_input()
            except Exception as exc:
                logger.warning("Error accessing microphone: %s", exc)
                raise MicrophonePermissionDeniedError(str(exc)) from exc
        self._chunks = []
        self._state = CaptureState.recording
        logger.info("Recording started.")

    def add_chunk(self, data: bytes) -> None:
        """Append one emitted chunk; ignored unless recording or when empty."""
        if not self.is_recording:
            logger.debug("Dropping %d-byte chunk received while idle", len(data))
            return
        if data:
            self._chunks.append(data)

    def stop(self) -> AudioCapture | None:
        """Recording -> Idle, returning the concatenated capture.

        Always ends idle. Returns None when called while idle.
        """
        if not self.is_recording:
            return None
        capture = AudioCapture(
            data=b"".join(self._chunks),
            content_type=self._content_type,
            filename=self._filename,
        )
        self._chunks = []
        self._state = CaptureState.idle
        self._release_input()
        logger.info("Recording stopped (%d bytes).", len(capture.data))
        return capture

    def _release_input(self) -> None:
        close = getattr(self._input, "close", None)
        self._input = None
        if callable(close):
            close()


def display_texts(data: dict) -> tuple[str, str]:
    """Pick the transcript and feedback texts to show for a response body."""
    transcription = data.get("transcription") or ""
    feedback = data.get("feedback") or ""

    transcript_text = transcription or NO_TRANSCRIPTION_TEXT
    if feedback:
        feedback_text = feedback
    elif transcription.strip():
        feedback_text = DEFAULT_FEEDBACK_TEXT
    else:
        feedback_text = NO_SPEECH_FEEDBACK_TEXT
    return transcript_text, feedback_text


def upload_capture(
    client: APIClient,
    capture: AudioCapture,
    status: StatusBoard,
) -> tuple[str, str]:
    """Upload one capture and return the (transcript, feedback) texts to show.

    Posts "Processing audio..." while in flight, then either a success or an
    error status. Every outcome ends with the status clear scheduled. A
    failure is reported once; there is no retry.
    """
    status.post("Processing audio...")
    status.hold()
    try:
        data = client.transcribe_audio(capture)
    except APIError as exc:
        logger.error("Error sending audio to backend: %s", exc.message)
        status.post(f"Error processing audio: {exc.message}", StatusKind.error)
        return UPLOAD_ERROR_TRANSCRIPT, UPLOAD_ERROR_FEEDBACK

    if data.get("transcription"):
        status.post("Transcription received!")
    else:
        status.schedule_clear()
    return display_texts(data)


# ---------------------------------------------------------------------------
# Streamlit rendering
# ---------------------------------------------------------------------------


def _session() -> CaptureSession:
    if "capture_session" not in st.session_state:
        # st.audio_input owns the browser microphone and emits WAV
        st.session_state.capture_session = CaptureSession(
            content_type="audio/wav", filename="audio.wav"
        )
    return st.session_state.capture_session


def _status_board() -> StatusBoard:
    if "status_board" not in st.session_state:
        st.session_state.status_board = StatusBoard(
            clear_after=get_settings().status_clear_seconds
        )
    return st.session_state.status_board


@st.fragment(run_every=1.0)
def _render_status() -> None:
    """Re-rendered every second so due clears disappear without interaction."""
    message = _status_board().current()
    if message is None:
        return
    if message.kind is StatusKind.error:
        st.error(message.text)
    else:
        st.info(message.text)


def render_recorder() -> None:
    """Render the recorder, upload finished recordings, and show results."""
    session = _session()
    status = _status_board()

    _render_status()

    audio = st.audio_input("Record audio", key=f"audio_{st.session_state.capture_round}")
    if audio is not None:
        session.start()
        session.add_chunk(audio.getvalue())
        capture = session.stop()

        client = get_api_client(st.session_state.api_base_url)
        transcript, feedback = upload_capture(client, capture, status)
        st.session_state.transcript_text = transcript
        st.session_state.feedback_text = feedback
        # Fresh widget key so the same recording is not uploaded twice
        st.session_state.capture_round += 1
        st.rerun()

    st.subheader("Transcription")
    st.code(st.session_state.transcript_text or "Press the microphone to start.", language=None)
    st.subheader("Pronunciation Feedback")
    st.code(st.session_state.feedback_text, language=None)
