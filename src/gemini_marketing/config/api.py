"""Public entry point for configuration resolution."""

from pathlib import Path
from typing import Any

from pydantic import ValidationError

from gemini_marketing.exceptions import ConfigurationError

from .schema import MarketingSettings
from .types import FrozenConfig


def resolve_config(
    programmatic: dict[str, Any] | None = None,
    *,
    env_file: str | Path | None = None,
) -> FrozenConfig:
    """Resolve configuration once and freeze it.

    Precedence: programmatic > environment > ``.env`` file > defaults.
    Unknown programmatic keys are ignored.

    Args:
        programmatic: Explicit overrides (highest precedence).
        env_file: Optional ``.env`` file to read ``GEMINI_*`` values from.

    Returns:
        An immutable `FrozenConfig`.

    Raises:
        ConfigurationError: If a value is invalid or a required one is missing.

    Example:
        config = resolve_config({"use_real_api": True, "api_key": "..."})
    """
    if env_file is not None and not Path(env_file).exists():
        raise ConfigurationError(f"Environment file not found: {env_file}")
    try:
        settings = MarketingSettings(_env_file=env_file, **(programmatic or {}))
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e

    values = settings.to_dict()
    return FrozenConfig(**{name: values[name] for name in FrozenConfig.__dataclass_fields__})
