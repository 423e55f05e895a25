import json

import flask
import pytest
from conftest import StubSpeechService, StubTextService

from gemini_proxy import functions
from gemini_proxy.config import Settings
from gemini_proxy.exceptions import SpeechSynthesisError


@pytest.fixture
def flask_app() -> flask.Flask:
    return flask.Flask(__name__)


@pytest.fixture
def stubs(monkeypatch: pytest.MonkeyPatch):
    text_service = StubTextService()
    speech_service = StubSpeechService()
    monkeypatch.setattr(functions, "TextService", lambda client, settings: text_service)
    monkeypatch.setattr(functions, "SpeechService", lambda client, settings: speech_service)
    return text_service, speech_service


def _call(flask_app: flask.Flask, method: str, **kwargs) -> flask.Response:
    with flask_app.test_request_context("/", method=method, **kwargs):
        return functions.process_gemini_request(flask.request)


def _json(response: flask.Response) -> dict:
    return json.loads(response.get_data(as_text=True))


def test_function_preflight(flask_app, stubs) -> None:
    response = _call(flask_app, "OPTIONS")

    assert response.status_code == 204
    assert response.get_data() == b""
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert response.headers["Access-Control-Allow-Methods"] == "POST"
    assert response.headers["Access-Control-Allow-Headers"] == "Content-Type"
    assert response.headers["Access-Control-Max-Age"] == "3600"


def test_function_rejects_get(flask_app, stubs) -> None:
    response = _call(flask_app, "GET")

    assert response.status_code == 400
    assert _json(response) == {"error": 'Requires a POST request with a "prompt" in the body.'}
    assert stubs[0].prompts == []


def test_function_happy_path(flask_app, stubs) -> None:
    response = _call(flask_app, "POST", json={"prompt": "hello"})

    assert response.status_code == 200
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert _json(response) == {
        "text": "Hello there",
        "audioData": "QUJD",
        "mimeType": "audio/L16;rate=24000",
    }


def test_function_missing_prompt(flask_app, stubs) -> None:
    response = _call(flask_app, "POST", json={"prompt": ""})

    assert response.status_code == 400
    assert _json(response) == {"error": 'Requires a "prompt" in the body.'}


def test_function_without_credential(flask_app, stubs, monkeypatch) -> None:
    monkeypatch.setattr(functions, "get_settings", lambda: Settings(GEMINI_API_KEY=""))

    response = _call(flask_app, "POST", json={"prompt": "hello"})

    assert response.status_code == 500
    assert _json(response) == {"error": "Server configuration error: API Key not set."}


def test_function_degraded_speech(flask_app, monkeypatch) -> None:
    speech_service = StubSpeechService(error=SpeechSynthesisError("boom"))
    monkeypatch.setattr(functions, "TextService", lambda client, settings: StubTextService())
    monkeypatch.setattr(functions, "SpeechService", lambda client, settings: speech_service)

    response = _call(flask_app, "POST", json={"prompt": "hello"})

    assert response.status_code == 200
    assert _json(response) == {"text": "Hello there", "audioData": None, "error": "TTS failed"}
