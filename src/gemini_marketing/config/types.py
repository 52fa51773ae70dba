"""Immutable configuration handed to the orchestrator."""

from dataclasses import dataclass

from gemini_marketing.types import GenerationOptions


@dataclass(frozen=True)
class FrozenConfig:
    """Resolved, immutable configuration.

    Components receive this object and read fields as attributes. Any attempt
    to modify it raises an exception.
    """

    api_key: str | None
    model: str
    use_real_api: bool
    temperature: float
    max_output_tokens: int
    cache_ttl_seconds: int
    max_attempts: int
    retry_base_delay: float
    request_timeout: float | None

    def default_options(self, **overrides: object) -> GenerationOptions:
        """Request options seeded from this configuration."""
        base: dict[str, object] = {
            "model": self.model,
            "temperature": self.temperature,
            "max_output_tokens": self.max_output_tokens,
        }
        base.update(overrides)
        return GenerationOptions(**base)  # type: ignore[arg-type]

    def __str__(self) -> str:
        """String representation with redacted API key for safe logging."""
        api_key_display = "[REDACTED]" if self.api_key else None
        return (
            f"FrozenConfig(api_key={api_key_display!r}, model={self.model!r}, "
            f"use_real_api={self.use_real_api!r}, temperature={self.temperature!r}, "
            f"max_output_tokens={self.max_output_tokens!r}, "
            f"cache_ttl_seconds={self.cache_ttl_seconds!r}, "
            f"max_attempts={self.max_attempts!r}, "
            f"retry_base_delay={self.retry_base_delay!r}, "
            f"request_timeout={self.request_timeout!r})"
        )

    def __repr__(self) -> str:
        """Representation with redacted API key for safe debugging."""
        return self.__str__()
