"""Aggregation of web-search citations into parsed results."""

from __future__ import annotations

from collections.abc import Iterable
import logging
from typing import Any

from gemini_marketing.types import GroundingChunk, GroundingSource

log = logging.getLogger(__name__)

SOURCES_FIELD = "sources"


def collect_sources(chunks: Iterable[GroundingChunk]) -> list[GroundingSource]:
    """Deduplicate cited chunks by uri, keeping first-seen order.

    Chunks without a uri are dropped; a missing or empty title falls back to
    the uri.
    """
    seen: dict[str, GroundingSource] = {}
    for chunk in chunks:
        if not chunk.uri or chunk.uri in seen:
            continue
        seen[chunk.uri] = GroundingSource(uri=chunk.uri, title=chunk.title or chunk.uri)
    return list(seen.values())


def attach_sources(value: Any, chunks: Iterable[GroundingChunk]) -> Any:
    """Return ``value`` with a ``sources`` field built from ``chunks``.

    Objects get a new dict with ``sources`` added (or overwritten); the input
    is not mutated. Arrays have nowhere to carry the field and are returned
    unchanged.
    """
    sources = collect_sources(chunks)
    if isinstance(value, dict):
        return {**value, SOURCES_FIELD: [s.to_dict() for s in sources]}
    log.debug(
        "Grounded payload is a %s; dropping %d source(s).",
        type(value).__name__,
        len(sources),
    )
    return value
