"""Prompt → text → speech relay shared by every hosting adapter."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from gemini_proxy.config import Settings
from gemini_proxy.exceptions import SpeechSynthesisError, TextGenerationError
from gemini_proxy.models import (
    DegradedRelayResponse,
    ErrorResponse,
    RelayResponse,
    SpeechResult,
)

logger = logging.getLogger(__name__)

MISSING_PROMPT = 'Requires a "prompt" in the body.'
MISSING_API_KEY = "Server configuration error: API Key not set."
TEXT_GENERATION_ERROR = "An error occurred during text generation."
EMPTY_TEXT = "Gemini failed to generate text content."

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Methods": "POST",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Max-Age": "3600",
}


class TextGenerator(Protocol):
    async def generate(self, prompt: str) -> str | None: ...


class SpeechSynthesizer(Protocol):
    async def synthesize(self, text: str) -> SpeechResult: ...


@dataclass
class RelayOutcome:
    """Status code and JSON body for exactly one outbound response."""

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)


def _error(status_code: int, message: str) -> RelayOutcome:
    return RelayOutcome(status_code, ErrorResponse(error=message).model_dump())


def log_credential_status(settings: Settings) -> None:
    """Report a missing provider credential once, at process start."""

    if not settings.has_credential:
        logger.error(
            "GEMINI_API_KEY environment variable is not set. The service will fail.",
            extra={"environment": settings.environment},
        )


class RelayHandler:
    """Run one prompt through text generation and then speech synthesis."""

    def __init__(
        self,
        text_service: TextGenerator,
        speech_service: SpeechSynthesizer,
        settings: Settings,
    ) -> None:
        self._text_service = text_service
        self._speech_service = speech_service
        self._settings = settings

    async def handle(self, prompt: str | None) -> RelayOutcome:
        if not prompt:
            return _error(400, MISSING_PROMPT)

        if not self._settings.has_credential:
            return _error(500, MISSING_API_KEY)

        try:
            text = await self._text_service.generate(prompt)
        except TextGenerationError as exc:
            logger.error(
                "Gemini text generation failed",
                extra={"stage": "text_generation", "error_code": exc.code, "detail": exc.message},
            )
            return _error(500, TEXT_GENERATION_ERROR)

        if not text:
            logger.error("Gemini returned no text", extra={"stage": "text_generation"})
            return _error(500, EMPTY_TEXT)

        # Text alone is a successful response; audio is best effort.
        try:
            speech = await self._speech_service.synthesize(text)
        except SpeechSynthesisError as exc:
            logger.error(
                "Gemini speech synthesis failed",
                extra={"stage": "speech_synthesis", "error_code": exc.code, "detail": exc.message},
            )
            return RelayOutcome(200, DegradedRelayResponse(text=text).model_dump(by_alias=True))

        logger.info(
            "Relay completed",
            extra={
                "text_chars": len(text),
                "has_audio": speech.audio_data is not None,
                "mime_type": speech.mime_type,
            },
        )
        response = RelayResponse(
            text=text,
            audio_data=speech.audio_data,
            mime_type=speech.mime_type,
        )
        return RelayOutcome(200, response.model_dump(by_alias=True))
