"""Shared pytest fixtures for the Pronunciation Coach test suite.

Provides recognition-result builders, a mock recognizer implementing the
BaseSTT interface, and a sample WebM-like payload.
"""

from unittest.mock import AsyncMock

import pytest

from src.core.models import (
    Alternative,
    RecognitionConfig,
    RecognitionResult,
    ResultSegment,
    WordScore,
)


def make_result(*segments: tuple[str, list[tuple[str, float]]]) -> RecognitionResult:
    """Build a RecognitionResult with one alternative per segment.

    Args:
        *segments: ``(transcript, [(word, confidence), ...])`` tuples.
    """
    return RecognitionResult(
        results=[
            ResultSegment(
                alternatives=[
                    Alternative(
                        transcript=transcript,
                        words=[WordScore(word=w, confidence=c) for w, c in words],
                    )
                ]
            )
            for transcript, words in segments
        ]
    )


# ---------------------------------------------------------------------------
# Recognition Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def result_factory():
    """Expose ``make_result`` to tests."""
    return make_result


@pytest.fixture
def cat_result():
    """The "the cat sat" scenario: mean 0.8166..., "cat" below threshold."""
    return make_result(("the cat sat", [("the", 0.95), ("cat", 0.65), ("sat", 0.85)]))


@pytest.fixture
def recognition_config():
    """Default decoding configuration (WEBM_OPUS, 48 kHz, en-US)."""
    return RecognitionConfig()


# ---------------------------------------------------------------------------
# STT Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_stt(cat_result):
    """Create a mock recognizer for unit testing.

    Returns:
        AsyncMock: A mock implementing the BaseSTT interface whose
        ``recognize`` returns the "the cat sat" result.
    """
    from src.services.transcription.base import BaseSTT

    stt = AsyncMock(spec=BaseSTT)
    stt.name = "mock"
    stt.recognize.return_value = cat_result
    return stt


# ---------------------------------------------------------------------------
# Audio Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def webm_bytes():
    """Bytes starting with the EBML magic number used by WebM files."""
    return b"\x1a\x45\xdf\xa3" + b"\x00" * 256
