"""
Feedback module - Pronunciation feedback from word confidences.
"""

from .analyzer import (
    EXCELLENT_THRESHOLD,
    GOOD_THRESHOLD,
    NO_SPEECH_MESSAGE,
    NO_WORD_CONFIDENCE_MESSAGE,
    PRACTICE_MARKER,
    build_feedback,
    classify_confidence,
)

__all__ = [
    "EXCELLENT_THRESHOLD",
    "GOOD_THRESHOLD",
    "NO_SPEECH_MESSAGE",
    "NO_WORD_CONFIDENCE_MESSAGE",
    "PRACTICE_MARKER",
    "build_feedback",
    "classify_confidence",
]
