"""FastAPI application entrypoint for the standalone server."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable

import httpx
from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from gemini_proxy import __version__
from gemini_proxy.config import get_settings
from gemini_proxy.dependencies import get_relay_handler
from gemini_proxy.logging import configure_logging
from gemini_proxy.models import PromptIn
from gemini_proxy.relay import PREFLIGHT_HEADERS, RelayHandler, log_credential_status


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the provider client during startup and close it on shutdown."""

    async with httpx.AsyncClient() as client:
        app.state.http_client = client
        yield
        del app.state.http_client


async def read_prompt(request: Request) -> str | None:
    """Pull ``prompt`` out of the JSON body; anything unusable counts as missing."""

    body = await request.body()
    try:
        return PromptIn.model_validate_json(body).prompt
    except ValueError:
        return None


def create_app() -> FastAPI:
    """Application factory."""

    settings = get_settings()
    configure_logging(settings.log_level)
    log_credential_status(settings)

    app = FastAPI(
        title="Gemini Proxy Service",
        version=__version__,
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def allow_any_origin(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        response.headers["Access-Control-Allow-Origin"] = "*"
        return response

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        return "Gemini Proxy Service is Running."

    @app.options("/process")
    async def process_preflight() -> Response:
        return Response(status_code=204, headers=PREFLIGHT_HEADERS)

    @app.post("/process")
    async def process(
        prompt: str | None = Depends(read_prompt),
        handler: RelayHandler = Depends(get_relay_handler),
    ) -> JSONResponse:
        outcome = await handler.handle(prompt)
        return JSONResponse(outcome.body, status_code=outcome.status_code)

    return app


app = create_app()
