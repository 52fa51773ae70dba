"""In-memory response cache with per-entry expiry.

The cache is owned by the application root and injected into the
orchestrator; there is no module-level instance. It is single-process and
never persisted. Its methods are synchronous, so concurrent asyncio tasks
cannot interleave inside a read or write.

Cache operations never raise. A failing backing store is logged and treated
as a miss (reads) or a no-op (writes).
"""

from __future__ import annotations

from collections.abc import Callable, MutableMapping
from dataclasses import dataclass
import hashlib
import json
import logging
import time
from typing import Any

from gemini_marketing.constants import DEFAULT_CACHE_TTL
from gemini_marketing.types import GenerationRequest

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CacheEntry:
    value: Any
    expires_at: float


@dataclass
class CacheStats:
    """Snapshot of cache usage"""  # noqa: D415

    entry_count: int = 0
    hits: int = 0
    misses: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "entry_count": self.entry_count,
            "hits": self.hits,
            "misses": self.misses,
        }


def cache_key(request: GenerationRequest) -> str:
    """Derive a deterministic key from the output-affecting request fields.

    The key is a SHA-256 over canonical JSON (sorted keys), so field order in
    the schema mapping does not matter. ``bypass_cache`` is excluded.
    """
    options = request.options
    schema = options.effective_schema
    attachment = request.attachment
    material = {
        "prompt": request.prompt,
        "model": options.model,
        "temperature": float(options.temperature),
        "max_output_tokens": options.max_output_tokens,
        "use_grounding": options.use_grounding,
        "json_mode": options.wants_json_mode,
        "schema": dict(schema) if schema is not None else None,
        "attachment": (
            {"sha256": attachment.digest, "mime_type": attachment.mime_type}
            if attachment is not None
            else None
        ),
    }
    canonical = json.dumps(material, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class ResponseCache:
    """Key/value store whose entries expire after a TTL."""

    def __init__(
        self,
        default_ttl_seconds: float = DEFAULT_CACHE_TTL,
        *,
        clock: Callable[[], float] = time.monotonic,
        store: MutableMapping[str, CacheEntry] | None = None,
    ) -> None:
        """Create an empty cache.

        Args:
            default_ttl_seconds: TTL applied when `set` is called without one.
            clock: Monotonic clock in seconds, injectable for tests.
            store: Backing mapping; defaults to a plain dict.
        """
        if default_ttl_seconds <= 0:
            raise ValueError("default_ttl_seconds must be positive")
        self.default_ttl_seconds = default_ttl_seconds
        self._clock = clock
        self._store: MutableMapping[str, CacheEntry] = store if store is not None else {}
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Any | None:
        """Return the live value for ``key`` or None; evicts expired entries."""
        try:
            entry = self._store.get(key)
            if entry is None:
                self._misses += 1
                return None
            if self._clock() >= entry.expires_at:
                self._store.pop(key, None)
                self._misses += 1
                return None
            self._hits += 1
            return entry.value
        except Exception as e:
            log.warning("Cache read failed; treating as miss: %s", e)
            return None

    def set(self, key: str, value: Any, ttl_seconds: float | None = None) -> None:
        """Store ``value`` under ``key`` for ``ttl_seconds`` (default TTL if None)."""
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        try:
            self._store[key] = CacheEntry(value=value, expires_at=self._clock() + ttl)
        except Exception as e:
            log.warning("Cache write failed; value not cached: %s", e)

    def clear(self) -> None:
        """Drop every entry and reset counters."""
        try:
            self._store.clear()
        except Exception as e:
            log.warning("Cache clear failed: %s", e)
        self._hits = 0
        self._misses = 0

    def stats(self) -> CacheStats:
        """Return usage counters; expired entries are purged and not counted."""
        try:
            now = self._clock()
            expired = [k for k, e in self._store.items() if now >= e.expires_at]
            for k in expired:
                self._store.pop(k, None)
            count = len(self._store)
        except Exception as e:
            log.warning("Cache stats unavailable: %s", e)
            count = 0
        return CacheStats(entry_count=count, hits=self._hits, misses=self._misses)

    def __len__(self) -> int:
        return self.stats().entry_count
