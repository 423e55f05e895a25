"""Pydantic models shared across application layers."""

from pydantic import BaseModel, Field


class PromptIn(BaseModel):
    """Incoming relay request body."""

    prompt: str = Field(min_length=1, description="User supplied text prompt.")


class SpeechResult(BaseModel):
    """Inline audio extracted from a speech synthesis response."""

    audio_data: str | None = Field(default=None, description="Base64 encoded audio.")
    mime_type: str | None = None


class RelayResponse(BaseModel):
    """Generated text plus whatever audio the speech model returned."""

    text: str
    audio_data: str | None = Field(default=None, serialization_alias="audioData")
    mime_type: str | None = Field(default=None, serialization_alias="mimeType")


class DegradedRelayResponse(BaseModel):
    """Generated text returned after speech synthesis failed."""

    text: str
    audio_data: None = Field(default=None, serialization_alias="audioData")
    error: str = "TTS failed"


class ErrorResponse(BaseModel):
    """Error body returned when the relay cannot produce text."""

    error: str
