"""
Transcription REST endpoint.

``POST /transcribe-audio`` accepts one multipart ``audio`` file, forwards it
to the configured recognizer and returns the transcript with pronunciation
feedback. Recognition and scoring live in ``src.services``; this module only
handles upload validation and dependency wiring.
"""

import logging

from fastapi import APIRouter, Depends, File, Request, UploadFile
from starlette.datastructures import UploadFile as StarletteUploadFile

from src.core.config import Settings, get_settings
from src.core.exceptions import AudioTooLargeError, NoFileUploadedError, RecognitionServiceError
from src.core.models import ErrorResponse, RecognitionConfig, TranscriptionResponse
from src.services.orchestrator import transcribe_and_assess
from src.services.transcription import BaseSTT, create_stt

logger = logging.getLogger(__name__)

router = APIRouter(tags=["transcription"])


def get_stt(request: Request) -> BaseSTT:
    """Return the app-wide recognizer, creating it on first request.

    The provider holds only a client handle, so one instance is shared by
    all requests. Construction failures are reported as
    ``RecognitionServiceError``.
    """
    stt = getattr(request.app.state, "stt", None)
    if stt is None:
        provider = get_settings().stt_provider
        logger.info("Initialising %s recognizer", provider)
        try:
            stt = create_stt(provider)
        except Exception as exc:
            logger.error("Could not initialise %s recognizer: %s", provider, exc)
            raise RecognitionServiceError(str(exc)) from exc
        request.app.state.stt = stt
    return stt


def get_recognition_config(settings: Settings = Depends(get_settings)) -> RecognitionConfig:
    """Build the fixed decoding configuration from settings."""
    return RecognitionConfig(
        encoding=settings.recognition_encoding,
        sample_rate_hertz=settings.recognition_sample_rate_hertz,
        language_code=settings.recognition_language_code,
        enable_word_confidence=True,
        enable_automatic_punctuation=True,
        model=settings.recognition_model,
    )


async def read_upload(
    audio: UploadFile | str | None = File(None),
    settings: Settings = Depends(get_settings),
) -> bytes:
    """Return the bytes of the uploaded ``audio`` file.

    A plain form value under the ``audio`` name is not a file and counts as
    missing. The declared upload size is checked before anything is read.

    Raises:
        NoFileUploadedError: If no non-empty file was uploaded.
        AudioTooLargeError: If the upload exceeds ``max_upload_bytes``.
    """
    if not isinstance(audio, StarletteUploadFile):
        raise NoFileUploadedError()

    limit = settings.max_upload_bytes
    if audio.size is not None and audio.size > limit:
        raise AudioTooLargeError(audio.size, limit)

    data = await audio.read(limit + 1)
    if not data:
        raise NoFileUploadedError()
    if len(data) > limit:
        raise AudioTooLargeError(len(data), limit)
    return data


@router.post(
    "/transcribe-audio",
    response_model=TranscriptionResponse,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def transcribe_audio(
    data: bytes = Depends(read_upload),
    stt: BaseSTT = Depends(get_stt),
    config: RecognitionConfig = Depends(get_recognition_config),
):
    """Transcribe an uploaded recording and score its pronunciation."""
    report = await transcribe_and_assess(stt, data, config)
    return TranscriptionResponse(transcription=report.transcript, feedback=report.feedback)
