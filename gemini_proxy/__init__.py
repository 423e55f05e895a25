"""Server-side relay for Gemini text generation and speech synthesis."""

__version__ = "0.1.0"
