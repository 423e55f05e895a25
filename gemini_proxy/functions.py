"""Cloud Functions entry point wrapping the relay in a Flask request handler.

Deploy with ``--entry-point process_gemini_request``. Every call opens its own
``httpx.AsyncClient`` because the functions runtime gives no lifespan hook.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any

import flask
import httpx

from gemini_proxy.config import Settings, get_settings
from gemini_proxy.logging import configure_logging
from gemini_proxy.relay import PREFLIGHT_HEADERS, RelayHandler, RelayOutcome, log_credential_status
from gemini_proxy.services.speech_service import SpeechService
from gemini_proxy.services.text_service import TextService

_settings = get_settings()
configure_logging(_settings.log_level)
log_credential_status(_settings)

POST_REQUIRED = 'Requires a POST request with a "prompt" in the body.'


def process_gemini_request(request: flask.Request) -> flask.Response:
    if request.method == "OPTIONS":
        response = flask.make_response("", 204)
        response.headers.update(PREFLIGHT_HEADERS)
        response.headers["Access-Control-Allow-Origin"] = "*"
        return response

    if request.method != "POST":
        return _cors_response({"error": POST_REQUIRED}, status=400)

    payload = request.get_json(silent=True)
    prompt = payload.get("prompt") if isinstance(payload, dict) else None
    if not isinstance(prompt, str):
        prompt = None

    outcome = asyncio.run(_relay(prompt, get_settings()))
    return _cors_response(outcome.body, status=outcome.status_code)


async def _relay(prompt: str | None, settings: Settings) -> RelayOutcome:
    async with httpx.AsyncClient() as client:
        handler = RelayHandler(
            TextService(client, settings),
            SpeechService(client, settings),
            settings,
        )
        return await handler.handle(prompt)


def _cors_response(body: dict[str, Any], status: int = 200) -> flask.Response:
    response = flask.make_response(json.dumps(body, ensure_ascii=False), status)
    headers = response.headers
    headers["Content-Type"] = "application/json; charset=utf-8"
    headers["Access-Control-Allow-Origin"] = "*"
    return response
