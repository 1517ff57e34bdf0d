"""Confidence-based pronunciation feedback.

Turns a recognizer's word-confidence list into a human-readable report:
an overall headline picked from three confidence bands, the average
confidence, and a per-word listing that flags low-confidence words.

Only the first alternative of the first result segment is scored; the
transcript covers every segment.
"""

import statistics

from src.core.models import FeedbackBand, FeedbackReport, RecognitionResult, WordScore

# Band edges: [0, GOOD) needs improvement, [GOOD, EXCELLENT) good, [EXCELLENT, 1] excellent
GOOD_THRESHOLD = 0.7
EXCELLENT_THRESHOLD = 0.9

# Words strictly below this are marked for practice
PRACTICE_THRESHOLD = 0.7
PRACTICE_MARKER = "(Needs practice!)"

NO_SPEECH_MESSAGE = "No speech detected or unclear audio. Please try again."
NO_WORD_CONFIDENCE_MESSAGE = "No word-level confidence available. Speak more clearly."

HEADLINES: dict[FeedbackBand, str] = {
    FeedbackBand.needs_improvement: (
        "Overall: Your pronunciation could use some improvement. "
        "Try to enunciate more clearly."
    ),
    FeedbackBand.good: (
        "Overall: Good job! You're doing well, but there's always room for refinement."
    ),
    FeedbackBand.excellent: "Overall: Excellent pronunciation! Keep up the great work.",
}


def join_transcript(result: RecognitionResult) -> str:
    """Newline-join the top transcript of every segment that has one."""
    return "\n".join(seg.alternatives[0].transcript for seg in result.results if seg.alternatives)


def average_confidence(words: list[WordScore]) -> float | None:
    """Correctly rounded mean of word confidences, or None for an empty list."""
    if not words:
        return None
    return statistics.mean(w.confidence for w in words)


def classify_confidence(confidence: float) -> FeedbackBand:
    """Map an average confidence onto its feedback band."""
    if confidence < GOOD_THRESHOLD:
        return FeedbackBand.needs_improvement
    if confidence < EXCELLENT_THRESHOLD:
        return FeedbackBand.good
    return FeedbackBand.excellent


def needs_practice(word: WordScore) -> bool:
    return word.confidence < PRACTICE_THRESHOLD


def format_word_line(word: WordScore) -> str:
    """Render one listing line, e.g. ``"cat": 0.65 (Needs practice!)``."""
    line = f'"{word.word}": {word.confidence:.2f}'
    if needs_practice(word):
        line = f"{line} {PRACTICE_MARKER}"
    return line


def compose_feedback(words: list[WordScore]) -> tuple[str, float | None, FeedbackBand | None]:
    """Build the feedback text for one word list.

    Returns:
        Tuple of (feedback_text, average_confidence, band). The last two are
        None when ``words`` is empty and the fixed advisory is returned.
    """
    avg = average_confidence(words)
    if avg is None:
        return NO_WORD_CONFIDENCE_MESSAGE, None, None

    band = classify_confidence(avg)
    lines = [
        HEADLINES[band],
        "",
        f"Transcription Confidence (Average): {avg:.2f}",
        "",
        "Word-level Confidence:",
        *(format_word_line(w) for w in words),
    ]
    return "\n".join(lines), avg, band


def build_feedback(result: RecognitionResult) -> FeedbackReport:
    """Compute the transcript and feedback for a recognition result."""
    if not result.results:
        return FeedbackReport(transcript="", feedback=NO_SPEECH_MESSAGE)

    transcript = join_transcript(result)
    first = result.results[0]
    words = first.alternatives[0].words if first.alternatives else []
    feedback, avg, band = compose_feedback(words)
    return FeedbackReport(
        transcript=transcript,
        feedback=feedback,
        average_confidence=avg,
        band=band,
    )
