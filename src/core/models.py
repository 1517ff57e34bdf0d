"""
Pydantic v2 request / response models used across the API layer.

Capture: AudioCapture
Recognition: RecognitionConfig, WordScore, Alternative, ResultSegment, RecognitionResult
Feedback: FeedbackBand, FeedbackReport
API: TranscriptionResponse, ErrorResponse, HealthResponse
"""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """GET /health response."""

    status: str = "ok"
    version: str = "0.1.0"
    stt_provider: str = ""
    timestamp: datetime


# ---------------------------------------------------------------------------
# Capture
# ---------------------------------------------------------------------------


class AudioCapture(BaseModel):
    """One finished recording, ready to upload."""

    data: bytes
    content_type: str = "audio/webm"
    filename: str = "audio.webm"


# ---------------------------------------------------------------------------
# Recognition
# ---------------------------------------------------------------------------


class RecognitionConfig(BaseModel):
    """Fixed decoding configuration forwarded with every recognition request.

    Serialises with camelCase aliases (``sampleRateHertz``, ``languageCode``)
    to match the recognizer's wire format.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    encoding: str = "WEBM_OPUS"
    sample_rate_hertz: int = 48000
    language_code: str = "en-US"
    enable_word_confidence: bool = True
    enable_automatic_punctuation: bool = True
    model: str = "default"


class WordScore(BaseModel):
    """A single recognized word with its confidence."""

    word: str
    confidence: float = Field(ge=0.0, le=1.0)


class Alternative(BaseModel):
    """One recognition hypothesis for a segment."""

    transcript: str = ""
    confidence: float | None = None
    words: list[WordScore] = Field(default_factory=list)


class ResultSegment(BaseModel):
    """A consecutive portion of audio, with hypotheses ordered best-first."""

    alternatives: list[Alternative] = Field(default_factory=list)


class RecognitionResult(BaseModel):
    """Everything the recognizer returned for one audio payload."""

    results: list[ResultSegment] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Feedback
# ---------------------------------------------------------------------------


class FeedbackBand(StrEnum):
    """Confidence range the average word confidence falls into."""

    needs_improvement = "needs_improvement"
    good = "good"
    excellent = "excellent"


class FeedbackReport(BaseModel):
    """Transcript plus human-readable pronunciation feedback."""

    transcript: str
    feedback: str
    average_confidence: float | None = None
    band: FeedbackBand | None = None


# ---------------------------------------------------------------------------
# API bodies
# ---------------------------------------------------------------------------


class TranscriptionResponse(BaseModel):
    """POST /transcribe-audio success body."""

    transcription: str
    feedback: str


class ErrorResponse(BaseModel):
    """JSON error envelope returned for every failed request."""

    error: str
    code: str
    timestamp: str
