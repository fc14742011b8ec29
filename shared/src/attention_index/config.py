"""Application configuration from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Text generation (Gemini)
    gemini_api_key: str = Field(default="", alias="GEMINI_API_KEY")
    gemini_api_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        alias="GEMINI_API_URL",
    )
    gemini_model: str = Field(default="gemini-2.0-flash", alias="GEMINI_MODEL")
    # 15 requests per minute on the free tier
    gemini_min_interval_seconds: float = Field(default=4.0, alias="GEMINI_MIN_INTERVAL_SECONDS")
    gemini_timeout_seconds: float = Field(default=60.0, alias="GEMINI_TIMEOUT_SECONDS")

    # Emotion analysis (Hume)
    hume_api_key: str = Field(default="", alias="HUME_API_KEY")
    hume_api_url: str = Field(default="https://api.hume.ai/v0/evi/chat", alias="HUME_API_URL")
    hume_timeout_seconds: float = Field(default=15.0, alias="HUME_TIMEOUT_SECONDS")

    # Speech synthesis (ElevenLabs)
    elevenlabs_api_key: str = Field(default="", alias="ELEVENLABS_API_KEY")
    elevenlabs_api_url: str = Field(
        default="https://api.elevenlabs.io/v1",
        alias="ELEVENLABS_API_URL",
    )
    speech_timeout_seconds: float = Field(default=30.0, alias="SPEECH_TIMEOUT_SECONDS")
    speech_max_retries: int = Field(default=3, alias="SPEECH_MAX_RETRIES")
    speech_retry_base_delay_seconds: float = Field(
        default=1.0,
        alias="SPEECH_RETRY_BASE_DELAY_SECONDS",
    )

    # Site
    site_url: str = Field(default="http://localhost:3000", alias="SITE_URL")
    session_cookie_name: str = Field(default="app_session_id", alias="SESSION_COOKIE_NAME")

    # Server
    api_host: str = Field(default="0.0.0.0", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def reset_settings_cache() -> None:
    """Clear cached settings (useful in tests)."""
    get_settings.cache_clear()
