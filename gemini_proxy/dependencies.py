"""Dependency providers for the FastAPI application."""

import httpx
from fastapi import Depends
from starlette.requests import HTTPConnection

from gemini_proxy.config import Settings, get_settings
from gemini_proxy.relay import RelayHandler
from gemini_proxy.services.speech_service import SpeechService
from gemini_proxy.services.text_service import TextService


async def get_http_client(connection: HTTPConnection) -> httpx.AsyncClient:
    """Retrieve the shared AsyncClient from application state."""

    return connection.app.state.http_client  # type: ignore[return-value]


async def get_text_service(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> TextService:
    return TextService(client=client, settings=settings)


async def get_speech_service(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> SpeechService:
    return SpeechService(client=client, settings=settings)


async def get_relay_handler(
    text_service: TextService = Depends(get_text_service),
    speech_service: SpeechService = Depends(get_speech_service),
    settings: Settings = Depends(get_settings),
) -> RelayHandler:
    """Dependency provider for the relay, wired to the shared client."""

    return RelayHandler(text_service, speech_service, settings)
