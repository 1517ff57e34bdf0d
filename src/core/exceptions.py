"""
Pronunciation Coach exception hierarchy.

All application-specific exceptions inherit from PronunciationCoachError,
enabling centralized error handling in the API middleware layer.
"""

from datetime import UTC, datetime


class PronunciationCoachError(Exception):
    """Base exception for all Pronunciation Coach errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "PRONUNCIATION_COACH_ERROR",
        status_code: int = 500,
    ) -> None:
        self.detail = detail
        self.code = code
        self.status_code = status_code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


class NoFileUploadedError(PronunciationCoachError):
    """Raised when a transcription request carries no audio file."""

    def __init__(self) -> None:
        super().__init__(
            detail="No audio file uploaded.",
            code="NO_FILE_UPLOADED",
            status_code=400,
        )


class AudioTooLargeError(PronunciationCoachError):
    """Raised when an uploaded audio payload exceeds the configured limit."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            detail=f"Audio upload too large: {size} bytes (limit {limit})",
            code="AUDIO_TOO_LARGE",
            status_code=413,
        )


class RecognitionServiceError(PronunciationCoachError):
    """Raised when the speech recognizer fails or rejects a request."""

    def __init__(self, detail: str = "Speech recognition failed") -> None:
        super().__init__(
            detail=detail,
            code="RECOGNITION_SERVICE_ERROR",
            status_code=500,
        )


class RecordingAlreadyActiveError(PronunciationCoachError):
    """Raised when trying to start a capture while one is already recording."""

    def __init__(self) -> None:
        super().__init__(
            detail="A recording is already active",
            code="RECORDING_ALREADY_ACTIVE",
            status_code=409,
        )


class MicrophonePermissionDeniedError(PronunciationCoachError):
    """Raised when the microphone cannot be opened for capture."""

    def __init__(self, detail: str = "Microphone permission denied") -> None:
        super().__init__(
            detail=f"Error accessing microphone: {detail}",
            code="MICROPHONE_PERMISSION_DENIED",
            status_code=403,
        )
