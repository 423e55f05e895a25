"""Application settings loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strongly typed application configuration."""

    gemini_api_key: str | None = Field(default=None, alias="GEMINI_API_KEY")
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        alias="GEMINI_BASE_URL",
    )
    text_model: str = Field(default="gemini-2.5-flash-preview-09-2025", alias="TEXT_MODEL")
    tts_model: str = Field(default="gemini-2.5-flash-preview-tts", alias="TTS_MODEL")
    tts_voice: str = Field(default="Kore", alias="TTS_VOICE")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info", alias="LOG_LEVEL"
    )
    port: int = Field(default=8080, alias="PORT")
    provider_timeout: float | None = Field(
        default=None, alias="PROVIDER_TIMEOUT", description="Seconds; unset disables"
    )

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    @property
    def has_credential(self) -> bool:
        return bool(self.gemini_api_key)


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of settings."""

    return Settings()
