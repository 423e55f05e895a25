"""Helpers for the raw PCM audio Gemini TTS returns inline."""

from __future__ import annotations

import io
import wave

DEFAULT_SAMPLE_RATE = 24000


def parse_sample_rate(mime_type: str | None, default: int = DEFAULT_SAMPLE_RATE) -> int:
    """Read ``rate=`` from a media type such as ``audio/L16;codec=pcm;rate=24000``."""

    if not mime_type:
        return default

    for param in mime_type.split(";")[1:]:
        key, _, value = param.partition("=")
        if key.strip().lower() == "rate" and value.strip().isdigit():
            return int(value.strip())
    return default


def is_linear_pcm(mime_type: str | None) -> bool:
    return bool(mime_type) and mime_type.split(";")[0].strip().lower() == "audio/l16"


def pcm_to_wav(pcm: bytes, sample_rate: int = DEFAULT_SAMPLE_RATE, channels: int = 1) -> bytes:
    """Wrap 16-bit little-endian PCM samples in a WAV container."""

    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wav:
        wav.setnchannels(channels)
        wav.setsampwidth(2)
        wav.setframerate(sample_rate)
        wav.writeframes(pcm)
    return buffer.getvalue()
