"""Integration test fixtures.

Runs the real application with a deterministic in-process recognizer
installed on ``app.state`` instead of dependency overrides, so the route's
own provider lookup is exercised.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app
from src.core.models import (
    Alternative,
    RecognitionConfig,
    RecognitionResult,
    ResultSegment,
    WordScore,
)
from src.services.transcription.base import BaseSTT


class ScriptedSTT(BaseSTT):
    """Recognizer that replays a fixed result and records every call."""

    name = "scripted"

    def __init__(self, result: RecognitionResult | None = None, error: Exception | None = None):
        self.result = result or RecognitionResult()
        self.error = error
        self.calls: list[tuple[bytes, RecognitionConfig]] = []

    async def recognize(self, audio: bytes, config: RecognitionConfig) -> RecognitionResult:
        self.calls.append((audio, config))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def scripted_stt():
    return ScriptedSTT(
        RecognitionResult(
            results=[
                ResultSegment(
                    alternatives=[
                        Alternative(
                            transcript="She sells seashells.",
                            words=[
                                WordScore(word="She", confidence=0.97),
                                WordScore(word="sells", confidence=0.93),
                                WordScore(word="seashells.", confidence=0.91),
                            ],
                        )
                    ]
                ),
                ResultSegment(alternatives=[Alternative(transcript="By the seashore.")]),
            ]
        )
    )


@pytest.fixture
def app(scripted_stt):
    application = create_app()
    application.state.stt = scripted_stt
    return application


@pytest.fixture
async def async_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
