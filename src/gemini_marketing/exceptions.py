"""Exception hierarchy for the Gemini marketing toolkit.

Every failure of a generation request is raised as a `GenerationError`
subclass tagged with a `FailureKind`. The tag is fixed by the class that is
raised at the point of failure, so callers branch on ``error.kind`` rather
than on message text.
"""

from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    """User-facing failure categories of a generation request."""

    BLOCKED = "blocked"
    EMPTY = "empty"
    GENERATION_FAILED = "generation_failed"
    MALFORMED = "malformed"
    TRANSPORT = "transport"


class GeminiMarketingError(Exception):
    """Base exception for all toolkit errors"""  # noqa: D415


class ConfigurationError(GeminiMarketingError):
    """Raised when settings are missing or invalid"""  # noqa: D415


class GenerationError(GeminiMarketingError):
    """A generation request failed.

    Attributes:
        kind: The failure category shown to users.
        retryable: Whether the retry executor may attempt the call again.
    """

    kind: FailureKind = FailureKind.TRANSPORT
    retryable: bool = True

    @property
    def user_message(self) -> str:
        """One-line message naming the failure category."""
        return f"{self.kind.value}: {self}"


class ContentBlockedError(GenerationError):
    """The safety filter rejected the request; rephrasing is required."""

    kind = FailureKind.BLOCKED
    retryable = False

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            f"Request was blocked for safety reasons ({reason}). "
            "Please rephrase your input."
        )


class EmptyResponseError(GenerationError):
    """The model returned no candidate or only blank text."""

    kind = FailureKind.EMPTY

    def __init__(self, message: str = "The model returned an empty response."):
        super().__init__(message)


class GenerationFailedError(GenerationError):
    """The candidate finished with an abnormal finish reason."""

    kind = FailureKind.GENERATION_FAILED

    def __init__(self, finish_reason: str):
        self.finish_reason = finish_reason
        super().__init__(f"Content generation failed with reason: {finish_reason}.")


class TransportError(GenerationError):
    """Network, SDK or timeout failure while calling the model endpoint."""

    kind = FailureKind.TRANSPORT


class MalformedResponseError(GenerationError):
    """The model text did not contain the expected JSON payload.

    Never retried: the extractor runs outside the retry executor.

    Attributes:
        reason: Machine-readable sub-category of the malformation.
        raw_text: The raw model text, kept for diagnostics (may be None when
            raised directly by the pure extractor).
    """

    kind = FailureKind.MALFORMED
    retryable = False
    reason = "malformed"

    def __init__(
        self,
        message: str,
        *,
        raw_text: str | None = None,
        reason: str | None = None,
    ):
        super().__init__(message)
        self.raw_text = raw_text
        if reason is not None:
            self.reason = reason


class NoJsonFoundError(MalformedResponseError):
    """No ``{`` or ``[`` was found in the model text."""

    reason = "no_json_found"


class UnterminatedJsonError(MalformedResponseError):
    """The opening delimiter was never balanced by a closing one."""

    reason = "unterminated_json"


class InvalidJsonSyntaxError(MalformedResponseError):
    """The delimited fragment was not valid JSON.

    Attributes:
        fragment: The exact substring handed to the JSON parser.
    """

    reason = "invalid_json_syntax"

    def __init__(self, message: str, *, fragment: str):
        super().__init__(message)
        self.fragment = fragment
