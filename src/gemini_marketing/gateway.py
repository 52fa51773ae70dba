"""Model invocation gateway.

Implements a single validated call to the generative model:

- Provider adapters are injected explicitly (`GoogleGenAIAdapter` for the
  real endpoint, `MockAdapter` for deterministic offline runs)
- Adapters return a provider-neutral `ModelEnvelope`
- `validate_envelope` turns an envelope into text plus grounding chunks, or
  raises a tagged `GenerationError`

Retrying is not done here; the orchestrator wraps `ModelGateway.call` in the
retry executor.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
import json
import logging
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from gemini_marketing.constants import ACCEPTED_FINISH_REASONS, JSON_MIME_TYPE
from gemini_marketing.exceptions import (
    ContentBlockedError,
    EmptyResponseError,
    GenerationError,
    GenerationFailedError,
    TransportError,
)
from gemini_marketing.types import (
    Candidate,
    GatewayResult,
    GenerationRequest,
    GroundingChunk,
    ModelEnvelope,
)

if TYPE_CHECKING:
    from google import genai

log = logging.getLogger(__name__)


@runtime_checkable
class GenerationAdapter(Protocol):
    """Provider seam: perform one raw generation call."""

    async def generate(self, request: GenerationRequest) -> ModelEnvelope:  # noqa: D102
        ...


# --- Envelope validation ---


def validate_envelope(envelope: ModelEnvelope) -> GatewayResult:
    """Validate a raw envelope in a fixed order.

    1. A safety block reason raises `ContentBlockedError`.
    2. No candidates raises `EmptyResponseError`.
    3. A finish reason other than STOP/MAX_TOKENS raises
       `GenerationFailedError`.
    4. Blank candidate text raises `EmptyResponseError`.
    """
    if envelope.block_reason:
        raise ContentBlockedError(envelope.block_reason)
    if not envelope.candidates:
        raise EmptyResponseError("The response contained no candidates.")

    candidate = envelope.candidates[0]
    if candidate.finish_reason and candidate.finish_reason not in ACCEPTED_FINISH_REASONS:
        raise GenerationFailedError(candidate.finish_reason)

    text = (candidate.text or "").strip()
    if not text:
        raise EmptyResponseError(
            "The response text was empty even though nothing was blocked."
        )
    return GatewayResult(text=text, grounding_chunks=candidate.grounding_chunks)


# --- SDK response projection ---


def _enum_text(value: Any) -> str | None:
    """Render an SDK enum (or plain string) as its wire name."""
    if value is None:
        return None
    raw = getattr(value, "value", value)
    text = str(raw).strip()
    return text or None


def _candidate_text(candidate: Any) -> str:
    content = getattr(candidate, "content", None)
    parts = getattr(content, "parts", None) or ()
    return "".join(
        part.text
        for part in parts
        if isinstance(getattr(part, "text", None), str) and not getattr(part, "thought", False)
    )


def _grounding_chunks(candidate: Any) -> tuple[GroundingChunk, ...]:
    metadata = getattr(candidate, "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or ()
    result: list[GroundingChunk] = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        if web is None:
            continue
        result.append(
            GroundingChunk(uri=getattr(web, "uri", None), title=getattr(web, "title", None))
        )
    return tuple(result)


def envelope_from_response(response: Any) -> ModelEnvelope:
    """Project a ``google.genai`` response object onto a `ModelEnvelope`."""
    feedback = getattr(response, "prompt_feedback", None)
    candidates = tuple(
        Candidate(
            text=_candidate_text(c),
            finish_reason=_enum_text(getattr(c, "finish_reason", None)),
            grounding_chunks=_grounding_chunks(c),
        )
        for c in (getattr(response, "candidates", None) or ())
    )
    return ModelEnvelope(
        block_reason=_enum_text(getattr(feedback, "block_reason", None)),
        candidates=candidates,
    )


# --- Adapters ---


def _plain(value: Any) -> Any:
    """Deep copy of a schema into plain dicts and lists; the SDK edits it in place."""
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_plain(v) for v in value]
    return value


class GoogleGenAIAdapter:
    """Calls Gemini through the ``google-genai`` async client."""

    def __init__(self, api_key: str | None = None, *, client: genai.Client | None = None):
        """Create the adapter from an API key or an existing client."""
        if client is None:
            from google import genai

            client = genai.Client(api_key=api_key)
        self._client = client

    def build_config(self, request: GenerationRequest) -> Any:
        """Build ``GenerateContentConfig``; grounding and schema never coexist."""
        from google.genai import types

        options = request.options
        kwargs: dict[str, Any] = {
            "temperature": options.temperature,
            "max_output_tokens": options.max_output_tokens,
        }
        if options.use_grounding:
            kwargs["tools"] = [types.Tool(google_search=types.GoogleSearch())]
        elif options.wants_json_mode:
            kwargs["response_mime_type"] = JSON_MIME_TYPE
            schema = options.effective_schema
            if schema is not None:
                kwargs["response_schema"] = _plain(schema)
        return types.GenerateContentConfig(**kwargs)

    def build_contents(self, request: GenerationRequest) -> Any:
        """Plain prompt text, or media part followed by the text part."""
        if request.attachment is None:
            return request.prompt
        from google.genai import types

        return [
            types.Part.from_bytes(
                data=bytes(request.attachment.data),
                mime_type=request.attachment.mime_type,
            ),
            types.Part.from_text(text=request.prompt),
        ]

    async def generate(self, request: GenerationRequest) -> ModelEnvelope:  # noqa: D102
        response = await self._client.aio.models.generate_content(
            model=request.options.model,
            contents=self.build_contents(request),
            config=self.build_config(request),
        )
        return envelope_from_response(response)


class MockAdapter:
    """Deterministic offline adapter that echoes the prompt as fenced JSON."""

    async def generate(self, request: GenerationRequest) -> ModelEnvelope:  # noqa: D102
        payload = {
            "mock": True,
            "model": request.options.model,
            "echo": request.prompt[:200],
        }
        text = f"```json\n{json.dumps(payload)}\n```"
        return ModelEnvelope(candidates=(Candidate(text=text, finish_reason="STOP"),))


# --- Gateway ---


def _is_client_side_error(error: Exception) -> bool:
    code = getattr(error, "code", None)
    return isinstance(code, int) and 400 <= code < 500 and code != 429


class ModelGateway:
    """Performs one adapter call and validates the resulting envelope."""

    def __init__(self, adapter: GenerationAdapter, *, timeout_seconds: float | None = None):
        """Wrap ``adapter``; ``timeout_seconds`` bounds each call when set."""
        self._adapter = adapter
        self._timeout_seconds = timeout_seconds

    @property
    def adapter(self) -> GenerationAdapter:
        return self._adapter

    async def call(self, request: GenerationRequest) -> GatewayResult:
        """Call the model once and return validated text and grounding chunks.

        Raises:
            GenerationError: A validation failure, or `TransportError` wrapping
                any SDK/network/timeout failure.
        """
        try:
            if self._timeout_seconds is None:
                envelope = await self._adapter.generate(request)
            else:
                async with asyncio.timeout(self._timeout_seconds):
                    envelope = await self._adapter.generate(request)
        except GenerationError:
            raise
        except TimeoutError as e:
            raise TransportError(
                f"Model call timed out after {self._timeout_seconds}s."
            ) from e
        except Exception as e:
            error = TransportError(f"Model call failed: {e}")
            if _is_client_side_error(e):
                error.retryable = False
            raise error from e
        return validate_envelope(envelope)
