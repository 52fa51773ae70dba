"""
Global test configuration: environment isolation, markers and fakes.
"""

from collections.abc import Callable, Iterable
import json
import logging
import os
from typing import Any

import pytest

from gemini_marketing.cache import ResponseCache
from gemini_marketing.gateway import ModelGateway
from gemini_marketing.orchestrator import GenerationOrchestrator
from gemini_marketing.types import (
    Candidate,
    GenerationRequest,
    GroundingChunk,
    ModelEnvelope,
)


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def isolate_gemini_env(request, monkeypatch):
    """Ensure a clean GEMINI_* environment for each test.

    Escape hatch: tests marked with @pytest.mark.api keep the real
    environment so an API key can be supplied explicitly.
    """
    if "api" in request.node.keywords:
        return

    for key in list(os.environ.keys()):
        if key.startswith("GEMINI_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("DEBUG", raising=False)


# --- Logging Fixtures ---
@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Sets the log level for noisy external libraries to WARNING."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("google_genai").setLevel(logging.WARNING)


# --- Fakes ---
class ScriptedAdapter:
    """Adapter that replays a script of envelopes and exceptions in order.

    The last outcome repeats once the script is exhausted.
    """

    def __init__(self, outcomes: Iterable[ModelEnvelope | BaseException]):
        self.outcomes = list(outcomes)
        self.requests: list[GenerationRequest] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    async def generate(self, request: GenerationRequest) -> ModelEnvelope:
        self.requests.append(request)
        index = min(len(self.requests), len(self.outcomes)) - 1
        outcome = self.outcomes[index]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class RecordingSleep:
    """Async sleep replacement that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def envelope(
    text: str | None = None,
    *,
    finish_reason: str | None = "STOP",
    block_reason: str | None = None,
    sources: Iterable[tuple[str | None, str | None]] = (),
    payload: Any = None,
) -> ModelEnvelope:
    """Build a single-candidate envelope; ``payload`` is rendered as fenced JSON."""
    if payload is not None:
        text = f"```json\n{json.dumps(payload)}\n```"
    if block_reason is not None:
        return ModelEnvelope(block_reason=block_reason)
    chunks = tuple(GroundingChunk(uri=uri, title=title) for uri, title in sources)
    return ModelEnvelope(
        candidates=(
            Candidate(text=text or "", finish_reason=finish_reason, grounding_chunks=chunks),
        )
    )


@pytest.fixture
def make_envelope() -> Callable[..., ModelEnvelope]:
    return envelope


@pytest.fixture
def scripted_adapter() -> Callable[..., ScriptedAdapter]:
    def _make(*outcomes: ModelEnvelope | BaseException) -> ScriptedAdapter:
        return ScriptedAdapter(outcomes)

    return _make


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_orchestrator(recording_sleep, fake_clock):
    """Build an orchestrator around an adapter with a fresh, clock-driven cache."""

    def _make(adapter: Any, **kwargs: Any) -> GenerationOrchestrator:
        kwargs.setdefault("cache", ResponseCache(3600, clock=fake_clock))
        kwargs.setdefault("sleep", recording_sleep)
        return GenerationOrchestrator(ModelGateway(adapter), **kwargs)

    return _make


# --- Test Environment Markers ---
def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "contract: Behavioural contracts of public components",
        "api: Real API tests (requires GEMINI_API_KEY and ENABLE_API_TESTS=1)",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)


def pytest_collection_modifyitems(config, items):  # noqa: ARG001
    """Automatically skip API tests when API key is unavailable."""
    if not (os.getenv("GEMINI_API_KEY") and os.getenv("ENABLE_API_TESTS")):
        skip_api = pytest.mark.skip(
            reason="API tests require GEMINI_API_KEY and ENABLE_API_TESTS=1",
        )
        for item in items:
            if "api" in item.keywords:
                item.add_marker(skip_api)
