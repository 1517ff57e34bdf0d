"""
Abstract base class for speech recognition providers.

All recognizer implementations (Google Cloud, local Whisper, etc.) must
implement this interface, so the feedback computation can run against any
provider, or a stub in tests.
"""

from abc import ABC, abstractmethod

from src.core.models import RecognitionConfig, RecognitionResult


class BaseSTT(ABC):
    """Interface that every recognizer must implement."""

    name: str = "base"

    @abstractmethod
    async def recognize(self, audio: bytes, config: RecognitionConfig) -> RecognitionResult:
        """Recognize speech in an encoded audio payload.

        Args:
            audio: Encoded audio bytes exactly as uploaded (e.g. WebM/Opus).
            config: Decoding configuration (encoding, sample rate, language,
                word-confidence and punctuation flags, model).

        Returns:
            RecognitionResult with ordered segments; each segment's
            alternatives carry a transcript and per-word confidences.

        Raises:
            RecognitionServiceError: If the provider fails or rejects the request.
        """
