"""Core data types that flow through the generation pipeline.

Requests are immutable and validated at construction. The envelope types are
a neutral, SDK-free projection of a model response so validation and
extraction can be tested without the provider library.
"""

from __future__ import annotations

import base64
import binascii
import dataclasses
import hashlib
from types import MappingProxyType
import typing

from gemini_marketing.constants import (
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
)

# --- Minimal guard helpers ---


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = ValueError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            raise exc(f"{field_name}: {message}")
        raise exc(message)


def _freeze_mapping(
    m: typing.Mapping[str, typing.Any] | None,
) -> typing.Mapping[str, typing.Any] | None:
    if m is None or isinstance(m, MappingProxyType):
        return m
    return MappingProxyType(dict(m))


# --- Request descriptor ---


@dataclasses.dataclass(frozen=True, slots=True)
class MediaAttachment:
    """Inline binary media sent alongside the prompt (e.g. an ad creative)."""

    data: bytes
    mime_type: str

    def __post_init__(self) -> None:
        _require(
            condition=isinstance(self.data, bytes | bytearray),
            message="must be bytes",
            field_name="data",
            exc=TypeError,
        )
        _require(condition=len(self.data) > 0, message="must not be empty", field_name="data")
        _require(
            condition=isinstance(self.mime_type, str) and "/" in self.mime_type,
            message="must be a MIME type such as 'image/png'",
            field_name="mime_type",
        )

    @classmethod
    def from_base64(cls, encoded: str, mime_type: str) -> MediaAttachment:
        """Build an attachment from a base64 string (data URL prefixes allowed)."""
        if encoded.startswith("data:") and "," in encoded:
            encoded = encoded.split(",", 1)[1]
        try:
            data = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"data: invalid base64 payload ({e})") from e
        return cls(data=data, mime_type=mime_type)

    @property
    def digest(self) -> str:
        """SHA-256 of the payload, used for cache keys and logs."""
        return hashlib.sha256(self.data).hexdigest()


@dataclasses.dataclass(frozen=True, slots=True)
class GenerationOptions:
    """Per-request options with defaults, validated at construction.

    ``response_schema`` and ``use_grounding`` are mutually exclusive at the
    endpoint: a grounded call returns free text, so the schema is ignored
    (see `effective_schema`).
    """

    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS
    use_grounding: bool = False
    expect_json: bool = False
    response_schema: typing.Mapping[str, typing.Any] | None = None
    bypass_cache: bool = False

    def __post_init__(self) -> None:
        _require(
            condition=isinstance(self.model, str) and bool(self.model.strip()),
            message="must be a non-empty string",
            field_name="model",
        )
        _require(
            condition=isinstance(self.temperature, int | float)
            and not isinstance(self.temperature, bool)
            and 0.0 <= self.temperature <= 1.0,
            message="must be a number in [0, 1]",
            field_name="temperature",
        )
        _require(
            condition=isinstance(self.max_output_tokens, int)
            and not isinstance(self.max_output_tokens, bool)
            and self.max_output_tokens > 0,
            message="must be a positive integer",
            field_name="max_output_tokens",
        )
        if self.response_schema is not None:
            _require(
                condition=isinstance(self.response_schema, typing.Mapping),
                message="must be a mapping",
                field_name="response_schema",
                exc=TypeError,
            )
            object.__setattr__(
                self, "response_schema", _freeze_mapping(self.response_schema)
            )

    @property
    def effective_schema(self) -> typing.Mapping[str, typing.Any] | None:
        """The schema actually sent to the endpoint."""
        if self.use_grounding:
            return None
        return self.response_schema

    @property
    def wants_json_mode(self) -> bool:
        """Whether to request ``application/json`` output from the endpoint."""
        return (self.expect_json or self.response_schema is not None) and not (
            self.use_grounding
        )

    def replace(self, **changes: typing.Any) -> GenerationOptions:
        """Return a copy with ``changes`` applied (and re-validated)."""
        return dataclasses.replace(self, **changes)


@dataclasses.dataclass(frozen=True, slots=True)
class GenerationRequest:
    """Everything needed for one orchestrated generation call."""

    prompt: str
    options: GenerationOptions = dataclasses.field(default_factory=GenerationOptions)
    attachment: MediaAttachment | None = None

    def __post_init__(self) -> None:
        _require(
            condition=isinstance(self.prompt, str),
            message="must be str",
            field_name="prompt",
            exc=TypeError,
        )
        _require(
            condition=bool(self.prompt.strip()),
            message="must not be empty",
            field_name="prompt",
        )
        _require(
            condition=isinstance(self.options, GenerationOptions),
            message="must be GenerationOptions",
            field_name="options",
            exc=TypeError,
        )


# --- Response envelope ---


@dataclasses.dataclass(frozen=True, slots=True)
class GroundingChunk:
    """A cited web reference attached to a grounded candidate."""

    uri: str | None = None
    title: str | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class GroundingSource:
    """A deduplicated source surfaced to callers under ``sources``."""

    uri: str
    title: str

    def to_dict(self) -> dict[str, str]:
        return {"uri": self.uri, "title": self.title}


@dataclasses.dataclass(frozen=True, slots=True)
class Candidate:
    text: str = ""
    finish_reason: str | None = None
    grounding_chunks: tuple[GroundingChunk, ...] = ()


@dataclasses.dataclass(frozen=True, slots=True)
class ModelEnvelope:
    """Provider-neutral view of one model response."""

    block_reason: str | None = None
    candidates: tuple[Candidate, ...] = ()


@dataclasses.dataclass(frozen=True, slots=True)
class GatewayResult:
    """Validated text and grounding chunks returned by the gateway."""

    text: str
    grounding_chunks: tuple[GroundingChunk, ...] = ()
