"""Configuration schema and validation using Pydantic.

This module defines the settings schema that validates and coerces
configuration values from the environment, an optional ``.env`` file, and
programmatic overrides into typed values with defaults.
"""

from typing import Any

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gemini_marketing.constants import (
    DEFAULT_CACHE_TTL,
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    MAX_ATTEMPTS,
    RETRY_BASE_DELAY,
)


class MarketingSettings(BaseSettings):
    """Pydantic settings schema for the toolkit.

    Reads ``GEMINI_*`` environment variables (for example ``GEMINI_API_KEY``
    and ``GEMINI_MODEL``).
    """

    model_config = SettingsConfigDict(
        env_prefix="GEMINI_",
        env_file=None,  # Only used when explicitly requested
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(default=None, description="Google Gemini API key")

    model: str = Field(
        default=DEFAULT_MODEL,
        description="Gemini model identifier",
        min_length=1,
    )

    use_real_api: bool = Field(
        default=False,
        description="Call the real endpoint instead of the offline mock adapter",
    )

    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=1.0)

    max_output_tokens: int = Field(default=DEFAULT_MAX_OUTPUT_TOKENS, gt=0)

    cache_ttl_seconds: int = Field(
        default=DEFAULT_CACHE_TTL,
        description="TTL for cached responses in seconds",
        ge=1,
    )

    max_attempts: int = Field(default=MAX_ATTEMPTS, ge=1, le=10)

    retry_base_delay: float = Field(
        default=RETRY_BASE_DELAY,
        description="Seconds to wait after the first failed attempt",
        ge=0.0,
    )

    request_timeout: float | None = Field(
        default=None,
        description="Per-attempt timeout in seconds; None disables it",
        gt=0.0,
    )

    @model_validator(mode="after")
    def validate_api_key_requirement(self) -> "MarketingSettings":
        """Ensure api_key is provided when use_real_api is True."""
        if self.use_real_api and not self.api_key:
            raise ValueError(
                "api_key is required when use_real_api=True. "
                "Set GEMINI_API_KEY or pass it programmatically."
            )
        return self

    def to_dict(self) -> dict[str, Any]:
        """Plain dictionary of the resolved field values."""
        return self.model_dump()
