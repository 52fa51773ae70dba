"""The single entry point every tool request goes through.

Flow for one request, strictly sequential:

1. Cache lookup (skipped when ``bypass_cache`` is set)
2. ``with_retry(gateway.call)``
3. JSON extraction (outside the retry loop; malformed output is terminal)
4. Grounding sources merged into object payloads for grounded requests
5. Optional caller validation of the value
6. Cache store (skipped when ``bypass_cache`` is set)

A request either returns the full value or raises a `GenerationError`; no
partial or rejected result is ever returned or cached. The cache holds its
own deep copy, so callers may mutate what they receive.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
import copy
import logging
from typing import Any

from gemini_marketing.cache import CacheStats, ResponseCache, cache_key
from gemini_marketing.config import FrozenConfig, resolve_config
from gemini_marketing.constants import (
    DEFAULT_CACHE_TTL,
    MAX_ATTEMPTS,
    RAW_TEXT_LOG_LIMIT,
    RETRY_BASE_DELAY,
)
from gemini_marketing.exceptions import (
    GenerationError,
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
from gemini_marketing.grounding import attach_sources
from gemini_marketing.retry import with_retry
from gemini_marketing.telemetry import TelemetryContext, TelemetryContextProtocol
from gemini_marketing.types import (
    GatewayResult,
    GenerationOptions,
    GenerationRequest,
    MediaAttachment,
)

log = logging.getLogger(__name__)


class GenerationOrchestrator:
    """Cache, retry, extract and ground model responses.

    The cache is injected; its lifetime belongs to the caller.
    """

    def __init__(
        self,
        gateway: ModelGateway,
        cache: ResponseCache | None = None,
        *,
        default_options: GenerationOptions | None = None,
        max_attempts: int = MAX_ATTEMPTS,
        retry_base_delay: float = RETRY_BASE_DELAY,
        cache_ttl_seconds: float | None = None,
        telemetry: TelemetryContextProtocol | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            gateway: Performs one validated model call.
            cache: Response cache; a private one with the default TTL is
                created when omitted.
            default_options: Options used by `invoke` when none are given.
            max_attempts: Attempts per request, including the first.
            retry_base_delay: Backoff after the first failure, in seconds.
            cache_ttl_seconds: TTL for stored results; the cache default
                applies when None.
            telemetry: Optional telemetry context.
            sleep: Awaitable sleep used for backoff (injectable for tests).
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._gateway = gateway
        self._cache = cache if cache is not None else ResponseCache(DEFAULT_CACHE_TTL)
        self._default_options = default_options or GenerationOptions()
        self._max_attempts = max_attempts
        self._retry_base_delay = retry_base_delay
        self._cache_ttl_seconds = cache_ttl_seconds
        self._tele = telemetry or TelemetryContext()
        self._sleep = sleep

    @property
    def gateway(self) -> ModelGateway:
        return self._gateway

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    @property
    def default_options(self) -> GenerationOptions:
        return self._default_options

    async def invoke(
        self,
        prompt: str,
        options: GenerationOptions | None = None,
        *,
        attachment: MediaAttachment | None = None,
        validate: Callable[[Any], Any] | None = None,
    ) -> Any:
        """Build a request from ``prompt`` and run it through `execute`."""
        request = GenerationRequest(
            prompt=prompt,
            options=options or self._default_options,
            attachment=attachment,
        )
        return await self.execute(request, validate=validate)

    async def execute(
        self,
        request: GenerationRequest,
        *,
        validate: Callable[[Any], Any] | None = None,
    ) -> Any:
        """Run one request end to end.

        Args:
            request: The request to run.
            validate: Optional callable applied to the parsed value before it
                is cached; its return value is returned to the caller. If it
                raises, nothing is stored.

        Returns:
            The parsed JSON value, with ``sources`` merged in for grounded
            object payloads, or the result of ``validate``.

        Raises:
            GenerationError: Tagged with the failure category; SDK and network
                errors arrive as `TransportError`.
        """
        options = request.options
        key: str | None = None
        with self._tele("orchestrator.execute", model=options.model):
            if not options.bypass_cache:
                key = cache_key(request)
                cached = self._cache.get(key)
                if cached is not None:
                    log.info("Cache hit for %s request (key=%s).", options.model, key[:12])
                    self._tele.count("cache.hit")
                    value = copy.deepcopy(cached)
                    return validate(value) if validate is not None else value
                self._tele.count("cache.miss")

            try:
                result = await self._call_with_retry(request)
            except GenerationError as e:
                self._tele.count("orchestrator.failure", kind=e.kind.value)
                log.error("Generation failed [%s]: %s", e.kind.value, e)
                raise
            except Exception as e:
                self._tele.count("orchestrator.failure", kind="transport")
                log.error("Generation failed with unexpected error: %s", e, exc_info=True)
                raise TransportError(f"Model call failed: {e}") from e

            value = self._extract(result.text)
            if options.use_grounding:
                value = attach_sources(value, result.grounding_chunks)

            checked = validate(value) if validate is not None else value

            if key is not None:
                self._cache.set(key, copy.deepcopy(value), self._cache_ttl_seconds)
                log.debug("Stored %s response in cache (key=%s).", options.model, key[:12])
            return checked

    async def _call_with_retry(self, request: GenerationRequest) -> GatewayResult:
        async def attempt() -> GatewayResult:
            with self._tele("gateway.call"):
                return await self._gateway.call(request)

        def on_retry(attempt_no: int, error: Exception, delay: float) -> None:
            self._tele.count("retry.attempt_failed", attempt=attempt_no, delay=delay)

        return await with_retry(
            attempt,
            max_attempts=self._max_attempts,
            base_delay=self._retry_base_delay,
            sleep=self._sleep,
            on_retry=on_retry,
        )

    def _extract(self, text: str) -> Any:
        try:
            return extract_json(text)
        except MalformedResponseError as e:
            self._tele.count("orchestrator.failure", kind=e.kind.value)
            log.error(
                "Failed to extract JSON from model response (%s): %s\nRaw text:\n%s",
                e.reason,
                e,
                text[:RAW_TEXT_LOG_LIMIT],
            )
            raise MalformedResponseError(
                f"Could not parse JSON from the AI response ({e.reason}): {e}",
                raw_text=text,
                reason=e.reason,
            ) from e

    # --- Administrative surface ---

    def clear_cache(self) -> None:
        """Drop every cached response."""
        self._cache.clear()

    def get_cache_stats(self) -> CacheStats:
        """Return current cache counters."""
        return self._cache.stats()


def create_orchestrator(
    config: FrozenConfig | None = None,
    *,
    adapter: GenerationAdapter | None = None,
    cache: ResponseCache | None = None,
    telemetry: TelemetryContextProtocol | None = None,
) -> GenerationOrchestrator:
    """Create an orchestrator from configuration.

    If no configuration is provided it is resolved from the environment. The
    real Google adapter is used only when ``use_real_api`` is set; otherwise
    the deterministic `MockAdapter` is used unless ``adapter`` is given.
    """
    final_config = config if config is not None else resolve_config()

    if adapter is None:
        if final_config.use_real_api:
            adapter = GoogleGenAIAdapter(final_config.api_key)
        else:
            adapter = MockAdapter()

    gateway = ModelGateway(adapter, timeout_seconds=final_config.request_timeout)
    return GenerationOrchestrator(
        gateway,
        cache if cache is not None else ResponseCache(final_config.cache_ttl_seconds),
        default_options=final_config.default_options(),
        max_attempts=final_config.max_attempts,
        retry_base_delay=final_config.retry_base_delay,
        telemetry=telemetry,
    )
