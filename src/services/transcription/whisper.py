"""Whisper recognizer implementation using faster-whisper.

Runs recognition locally with word timestamps enabled so every word carries
a probability, which is reported as its confidence. The WhisperModel is
loaded lazily and cached at module level to avoid repeated initialization
overhead.
"""

import asyncio
import io
import logging

from faster_whisper import WhisperModel

from src.core.config import get_settings
from src.core.exceptions import RecognitionServiceError
from src.core.models import (
    Alternative,
    RecognitionConfig,
    RecognitionResult,
    ResultSegment,
    WordScore,
)
from src.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)

_model_cache: WhisperModel | None = None


class WhisperSTT(BaseSTT):
    """Recognizer using faster-whisper (CTranslate2).

    Args:
        model_size: Whisper model size (tiny, base, small, medium, large-v3).
        device: Computation device ("cpu" or "cuda").
        compute_type: CTranslate2 compute type ("int8", "float16", etc.).
        settings: Optional Settings instance (defaults to get_settings()).
    """

    name = "whisper"

    def __init__(
        self,
        model_size: str | None = None,
        device: str | None = None,
        compute_type: str | None = None,
        settings=None,
    ) -> None:
        self._settings = settings or get_settings()
        self._model_size = model_size or self._settings.whisper_model
        self._device = device or self._settings.whisper_device
        self._compute_type = compute_type or self._settings.whisper_compute_type

    def _get_model(self) -> WhisperModel:
        """Return the cached WhisperModel, loading it on first use."""
        global _model_cache  # noqa: PLW0603
        if _model_cache is None:
            logger.info(
                "Loading Whisper model: %s (device=%s, compute=%s)",
                self._model_size,
                self._device,
                self._compute_type,
            )
            _model_cache = WhisperModel(
                self._model_size,
                device=self._device,
                compute_type=self._compute_type,
            )
        return _model_cache

    @staticmethod
    def _whisper_language(language_code: str) -> str | None:
        """Reduce a BCP-47 tag ("en-US") to Whisper's ISO 639-1 code ("en")."""
        primary = language_code.split("-")[0].strip().lower()
        return primary or None

    def _run_recognition(self, audio: bytes, language: str | None) -> list:
        """Run synchronous recognition (CPU-bound).

        Must be called via asyncio.to_thread(). The segment iterator is
        materialized into a list inside this function to avoid CTranslate2
        thread-safety issues.

        Returns:
            List of faster-whisper segment objects with ``words`` populated.
        """
        model = self._get_model()
        segments_iter, _info = model.transcribe(
            io.BytesIO(audio),
            language=language,
            word_timestamps=True,
            vad_filter=True,
        )
        return list(segments_iter)

    @staticmethod
    def _segments_to_result(segments) -> RecognitionResult:
        """Convert faster-whisper segments to one single-alternative segment each."""
        results = []
        for seg in segments:
            text = seg.text.strip()
            if not text:
                continue
            words = [
                WordScore(word=w.word.strip(), confidence=max(0.0, min(1.0, w.probability)))
                for w in (seg.words or [])
                if w.word.strip()
            ]
            results.append(ResultSegment(alternatives=[Alternative(transcript=text, words=words)]))
        return RecognitionResult(results=results)

    async def recognize(self, audio: bytes, config: RecognitionConfig) -> RecognitionResult:
        """Recognize ``audio`` with the local model.

        Only ``language_code`` is honoured from ``config``; Whisper decodes the
        container itself and always reports word probabilities.
        """
        try:
            segments = await asyncio.to_thread(
                self._run_recognition,
                audio,
                self._whisper_language(config.language_code),
            )
        except Exception as exc:
            logger.error("Whisper recognition failed: %s", exc)
            raise RecognitionServiceError(detail=f"Whisper recognition failed: {exc}") from exc

        return self._segments_to_result(segments)
