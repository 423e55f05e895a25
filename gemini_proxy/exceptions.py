"""Provider failures raised by the service layer."""

from dataclasses import dataclass


@dataclass(eq=False)
class ServiceError(Exception):
    """Base exception for provider call failures."""

    message: str
    code: str = "service_error"
    status_code: int | None = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


class TextGenerationError(ServiceError):
    """The grounded text call failed before producing a usable answer.

    Fatal for the request: the relay answers 500 and never reaches speech.
    An answer without a text part is not an error; the service returns ``None``.
    """

    code = "text_generation_error"


class SpeechSynthesisError(ServiceError):
    """The TTS call failed after text was already generated.

    Recoverable: the relay still answers 200 with the text and no audio.
    """

    code = "speech_synthesis_error"
