"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): one instance per process

Design Decisions:
    - Defaults provided for all non-secret settings: runs locally with only ANTHROPIC_API_KEY set
    - CORS_ORIGINS accepts a JSON list or a comma-separated string
"""

import json
from functools import lru_cache
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Anthropic
    anthropic_api_key: str = ""
    anthropic_max_retries: int = 3
    anthropic_timeout_seconds: int = 120
    anthropic_base_delay_ms: int = 1000
    anthropic_max_delay_ms: int = 60_000

    # Analysis
    analysis_model: str = "claude-haiku-4-5-20251001"
    analysis_temperature: float = 0.3
    analysis_max_concurrency: int = 8
    chunk_max_tokens: int = 4000
    chunk_threshold_tokens: int = 6000
    chunk_response_max_tokens: int = 600
    single_response_max_tokens: int = 800

    # Uploads
    max_upload_bytes: int = 10 * 1024 * 1024

    # API
    cors_origins: Annotated[list[str], NoDecode] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, v):
        """ALLOWED_ORIGINS-style "a, b" strings become a list."""
        if isinstance(v, str):
            v = v.strip()
            if v.startswith("["):
                return json.loads(v)
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def anthropic_key_configured(self) -> bool:
        return bool(self.anthropic_api_key)


@lru_cache
def get_settings() -> Settings:
    return Settings()
