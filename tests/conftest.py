"""Shared pytest fixtures."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("GEMINI_API_KEY", "test-key")
os.environ.setdefault("ENVIRONMENT", "test")

from gemini_proxy.config import get_settings  # noqa: E402
from gemini_proxy.main import create_app  # noqa: E402
from gemini_proxy.models import SpeechResult  # noqa: E402


@pytest.fixture(autouse=True)
def configure_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure required environment variables are present during tests."""

    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.setenv("ENVIRONMENT", "test")
    get_settings.cache_clear()


@pytest.fixture
def app():
    return create_app()


class StubTextService:
    """Canned text generator that records the prompts it saw."""

    def __init__(self, text: str | None = "Hello there", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str | None:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


class StubSpeechService:
    """Canned synthesizer that records the text it was asked to speak."""

    def __init__(
        self,
        result: SpeechResult | None = None,
        error: Exception | None = None,
    ) -> None:
        self.result = result or SpeechResult(audio_data="QUJD", mime_type="audio/L16;rate=24000")
        self.error = error
        self.texts: list[str] = []

    async def synthesize(self, text: str) -> SpeechResult:
        self.texts.append(text)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def text_service() -> StubTextService:
    return StubTextService()


@pytest.fixture
def speech_service() -> StubSpeechService:
    return StubSpeechService()
