"""Gemini-backed marketing analysis toolkit."""

import importlib.metadata
import logging

from gemini_marketing.cache import CacheStats, ResponseCache, cache_key
from gemini_marketing.config import FrozenConfig, MarketingSettings, resolve_config
from gemini_marketing.exceptions import (
    ConfigurationError,
    ContentBlockedError,
    EmptyResponseError,
    FailureKind,
    GeminiMarketingError,
    GenerationError,
    GenerationFailedError,
    MalformedResponseError,
    TransportError,
)
from gemini_marketing.extraction import extract_json
from gemini_marketing.gateway import (
    GenerationAdapter,
    GoogleGenAIAdapter,
    MockAdapter,
    ModelGateway,
)
from gemini_marketing.orchestrator import GenerationOrchestrator, create_orchestrator
from gemini_marketing.retry import with_retry
from gemini_marketing.telemetry import SimpleReporter, TelemetryContext, TelemetryReporter
from gemini_marketing.types import (
    GenerationOptions,
    GenerationRequest,
    GroundingSource,
    MediaAttachment,
)

try:
    __version__ = importlib.metadata.version("gemini-marketing")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Null handler on the library root logger; applications configure output.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [  # noqa: RUF022
    # Orchestration
    "GenerationOrchestrator",
    "create_orchestrator",
    "ModelGateway",
    "GenerationAdapter",
    "GoogleGenAIAdapter",
    "MockAdapter",
    # Building blocks
    "ResponseCache",
    "CacheStats",
    "cache_key",
    "extract_json",
    "with_retry",
    # Data types
    "GenerationOptions",
    "GenerationRequest",
    "GroundingSource",
    "MediaAttachment",
    # Configuration
    "FrozenConfig",
    "MarketingSettings",
    "resolve_config",
    # Telemetry
    "TelemetryContext",
    "TelemetryReporter",
    "SimpleReporter",
    # Exceptions
    "FailureKind",
    "GeminiMarketingError",
    "ConfigurationError",
    "GenerationError",
    "ContentBlockedError",
    "EmptyResponseError",
    "GenerationFailedError",
    "MalformedResponseError",
    "TransportError",
]
