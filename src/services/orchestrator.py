"""Request pipeline: recognize uploaded audio, then score it.

Usage::

    from src.services.orchestrator import transcribe_and_assess

    report = await transcribe_and_assess(stt, audio_bytes, config)
    report.transcript, report.feedback
"""

import logging

from src.core.exceptions import PronunciationCoachError, RecognitionServiceError
from src.core.models import FeedbackReport, RecognitionConfig
from src.services.feedback import build_feedback
from src.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)


async def transcribe_and_assess(
    stt: BaseSTT,
    audio: bytes,
    config: RecognitionConfig,
) -> FeedbackReport:
    """Send ``audio`` to ``stt`` and derive the pronunciation feedback.

    Holds no state between calls and never retries.

    Args:
        stt: Recognizer to call.
        audio: Encoded audio bytes as uploaded.
        config: Decoding configuration forwarded to the recognizer.

    Returns:
        FeedbackReport with the newline-joined transcript and feedback text.

    Raises:
        RecognitionServiceError: If the recognizer fails for any reason.
    """
    logger.info("Sending %d bytes of audio to %s recognizer...", len(audio), stt.name)
    try:
        result = await stt.recognize(audio, config)
    except PronunciationCoachError:
        raise
    except Exception as exc:
        logger.error("Recognizer %s raised %s: %s", stt.name, type(exc).__name__, exc)
        raise RecognitionServiceError(detail=str(exc)) from exc

    report = build_feedback(result)
    logger.info(
        "Recognized %d segment(s), average confidence %s",
        len(result.results),
        f"{report.average_confidence:.2f}" if report.average_confidence is not None else "n/a",
    )
    return report
