"""Adapter for Gemini text generation with Google Search grounding."""

from __future__ import annotations

import logging

import httpx

from gemini_proxy.config import Settings
from gemini_proxy.exceptions import TextGenerationError

logger = logging.getLogger(__name__)


class TextService:
    """Wrapper around the Gemini ``generateContent`` endpoint for text answers."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self._client = client
        self._settings = settings

    @property
    def _endpoint(self) -> str:
        return f"{self._settings.gemini_base_url}/models/{self._settings.text_model}:generateContent"

    async def generate(self, prompt: str) -> str | None:
        """Answer ``prompt``, letting the model ground itself with live web search.

        Returns the first text part of the first candidate, or ``None`` when the
        provider answered but produced nothing usable. Transport and provider
        errors raise :class:`TextGenerationError`.
        """

        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "tools": [{"google_search": {}}],
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
                "Text generation timed out",
                exc_info=exc,
                extra={"stage": "text_generation"},
            )
            raise TextGenerationError("Text generation timed out") from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Text generation failed",
                extra={
                    "stage": "text_generation",
                    "status_code": exc.response.status_code,
                    "response_text": exc.response.text,
                },
            )
            raise TextGenerationError(
                "Text generation returned an error",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            logger.exception("Unexpected text generation HTTP error", extra={"stage": "text_generation"})
            raise TextGenerationError("Text generation request failed") from exc
        except (httpx.InvalidURL, ValueError) as exc:
            # Raised while building the request, e.g. a non-ASCII API key header.
            logger.exception("Text generation request could not be sent", extra={"stage": "text_generation"})
            raise TextGenerationError("Text generation request could not be sent") from exc

        try:
            data = response.json()
        except ValueError as exc:
            logger.error(
                "Text generation returned a non-JSON body",
                extra={"stage": "text_generation", "response_text": response.text},
            )
            raise TextGenerationError("Invalid text generation payload") from exc

        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            logger.warning(
                "Text generation response had no text part",
                extra={"stage": "text_generation", "raw_response": data},
            )
            return None

        if not isinstance(text, str) or not text:
            return None

        return text
