"""Google Cloud Speech-to-Text recognizer.

Sends the uploaded audio in a single synchronous ``recognize`` call through
``speech.SpeechAsyncClient``. The client is created lazily so that importing
this module does not require credentials.
"""

import logging

from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import speech

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


class GoogleSTT(BaseSTT):
    """Recognizer backed by Google Cloud Speech-to-Text (v1).

    Args:
        credentials_path: Service-account JSON file. Empty falls back to
            ``GOOGLE_APPLICATION_CREDENTIALS`` / application default credentials.
        timeout: Per-request timeout in seconds, or None for no timeout.
        settings: Optional Settings instance (defaults to get_settings()).
    """

    name = "google"

    def __init__(
        self,
        credentials_path: str | None = None,
        timeout: float | None = None,
        settings=None,
    ) -> None:
        self._settings = settings or get_settings()
        self._credentials_path = credentials_path or self._settings.google_credentials_path
        self._timeout = timeout if timeout is not None else self._settings.stt_timeout_seconds
        self._client: speech.SpeechAsyncClient | None = None

    def _get_client(self) -> speech.SpeechAsyncClient:
        """Return the SpeechAsyncClient, creating it on first use."""
        if self._client is None:
            if self._credentials_path:
                logger.info("Loading Google credentials from %s", self._credentials_path)
                self._client = speech.SpeechAsyncClient.from_service_account_file(
                    self._credentials_path
                )
            else:
                self._client = speech.SpeechAsyncClient()
        return self._client

    @staticmethod
    def _build_config(config: RecognitionConfig) -> speech.RecognitionConfig:
        """Translate our decoding config into the library's proto message."""
        return speech.RecognitionConfig(
            encoding=speech.RecognitionConfig.AudioEncoding[config.encoding],
            sample_rate_hertz=config.sample_rate_hertz,
            language_code=config.language_code,
            enable_word_confidence=config.enable_word_confidence,
            enable_automatic_punctuation=config.enable_automatic_punctuation,
            model=config.model,
        )

    @staticmethod
    def _to_result(response) -> RecognitionResult:
        """Convert a ``RecognizeResponse`` into our RecognitionResult model."""
        return RecognitionResult(
            results=[
                ResultSegment(
                    alternatives=[
                        Alternative(
                            transcript=alt.transcript,
                            confidence=alt.confidence,
                            words=[
                                WordScore(word=w.word, confidence=w.confidence)
                                for w in alt.words
                            ],
                        )
                        for alt in result.alternatives
                    ]
                )
                for result in response.results
            ]
        )

    async def recognize(self, audio: bytes, config: RecognitionConfig) -> RecognitionResult:
        """Send ``audio`` to Cloud Speech-to-Text and return the parsed result.

        The library base64-encodes ``content`` on the wire.
        """
        try:
            request_config = self._build_config(config)
        except KeyError as exc:
            raise RecognitionServiceError(
                detail=f"Unsupported audio encoding: {config.encoding}"
            ) from exc

        kwargs: dict = {
            "config": request_config,
            "audio": speech.RecognitionAudio(content=audio),
        }
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout

        try:
            response = await self._get_client().recognize(**kwargs)
        except google_exceptions.GoogleAPICallError as exc:
            logger.error("Google Speech API error: %s", exc)
            raise RecognitionServiceError(detail=exc.message or str(exc)) from exc
        except (google_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError) as exc:
            logger.error("Google Speech client error: %s", exc)
            raise RecognitionServiceError(detail=str(exc)) from exc

        return self._to_result(response)
