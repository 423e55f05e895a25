"""Adapter for Gemini text-to-speech synthesis."""

from __future__ import annotations

import logging

import httpx

from gemini_proxy.config import Settings
from gemini_proxy.exceptions import SpeechSynthesisError
from gemini_proxy.models import SpeechResult

logger = logging.getLogger(__name__)

TTS_PROMPT_TEMPLATE = 'Say in a clear and helpful tone: "{text}"'


class SpeechService:
    """Wrapper around the Gemini TTS model."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self._client = client
        self._settings = settings

    @property
    def _endpoint(self) -> str:
        return f"{self._settings.gemini_base_url}/models/{self._settings.tts_model}:generateContent"

    async def synthesize(self, text: str) -> SpeechResult:
        """Generate speech audio for the supplied text."""

        payload = {
            "contents": [{"parts": [{"text": TTS_PROMPT_TEMPLATE.format(text=text)}]}],
            "generationConfig": {
                "responseModalities": ["AUDIO"],
                "speechConfig": {
                    "voiceConfig": {
                        "prebuiltVoiceConfig": {"voiceName": self._settings.tts_voice},
                    }
                },
            },
        }

        headers = {
            "x-goog-api-key": self._settings.gemini_api_key or "",
            "Content-Type": "application/json",
        }

        try:
            response = await self._client.post(
                self._endpoint,
                headers=headers,
                json=payload,
                timeout=self._settings.provider_timeout,
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning(
                "Speech synthesis timed out",
                exc_info=exc,
                extra={"stage": "speech_synthesis"},
            )
            raise SpeechSynthesisError("Speech synthesis timed out") from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Speech synthesis failed",
                extra={
                    "stage": "speech_synthesis",
                    "status_code": exc.response.status_code,
                    "response_text": exc.response.text,
                },
            )
            raise SpeechSynthesisError(
                "Speech synthesis returned an error",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            logger.exception("Unexpected speech synthesis HTTP error", extra={"stage": "speech_synthesis"})
            raise SpeechSynthesisError("Speech synthesis request failed") from exc
        except (httpx.InvalidURL, ValueError) as exc:
            # Raised while building the request, e.g. a non-ASCII API key header.
            logger.exception("Speech synthesis request could not be sent", extra={"stage": "speech_synthesis"})
            raise SpeechSynthesisError("Speech synthesis request could not be sent") from exc

        try:
            data = response.json()
        except ValueError as exc:
            logger.error(
                "Speech synthesis returned a non-JSON body",
                extra={"stage": "speech_synthesis", "response_text": response.text},
            )
            raise SpeechSynthesisError("Invalid speech synthesis payload") from exc

        try:
            inline = data["candidates"][0]["content"]["parts"][0].get("inlineData") or {}
        except (KeyError, IndexError, TypeError, AttributeError):
            inline = {}
        if not isinstance(inline, dict):
            inline = {}

        audio_data = inline.get("data")
        mime_type = inline.get("mimeType")
        return SpeechResult(
            audio_data=audio_data if isinstance(audio_data, str) and audio_data else None,
            mime_type=mime_type if isinstance(mime_type, str) and mime_type else None,
        )
