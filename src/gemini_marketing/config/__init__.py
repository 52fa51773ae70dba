"""Configuration management for the Gemini marketing toolkit.

Resolve once, freeze, then pass the `FrozenConfig` to the components that
need it.
"""

from .api import resolve_config
from .schema import MarketingSettings
from .types import FrozenConfig

__all__ = ["FrozenConfig", "MarketingSettings", "resolve_config"]
