"""
Reasoning service client configuration.

Centralized configuration for the OpenAI-compatible chat completions
endpoint used by the assisted risk score, with environment variable support.
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class OpenAISettings(BaseSettings):
    """OpenAI client configuration from environment variables."""

    api_key: str = Field(default="", alias="OPENAI_API_KEY")
    base_url: str | None = Field(
        default="https://ai.gateway.lovable.dev/v1", alias="OPENAI_BASE_URL"
    )
    model: str = Field(default="google/gemini-2.5-flash", alias="OPENAI_MODEL")
    temperature: float = Field(default=0.3, ge=0.0, le=2.0, alias="OPENAI_TEMPERATURE")

    # Hard deadline for one assisted scoring call (no retries)
    timeout_seconds: float = Field(default=15.0, gt=0, alias="OPENAI_TIMEOUT_SECONDS")

    # Circuit breaker configuration
    circuit_breaker_threshold: int = Field(default=5, alias="OPENAI_CB_THRESHOLD")
    circuit_breaker_timeout: int = Field(default=60, alias="OPENAI_CB_TIMEOUT")

    # Connection configuration
    client_ttl_hours: int = Field(default=1, alias="OPENAI_CLIENT_TTL_HOURS")
    max_connections: int = Field(default=20, alias="OPENAI_MAX_CONNECTIONS")

    model_config = {"env_file": ".env", "extra": "ignore", "populate_by_name": True}

    @property
    def client_ttl(self) -> timedelta:
        """Get client TTL as timedelta."""
        return timedelta(hours=self.client_ttl_hours)


@lru_cache(maxsize=1)
def get_settings() -> OpenAISettings:
    """Get cached OpenAI settings instance."""
    return OpenAISettings()
