import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from gemini_marketing.exceptions import (
    ContentBlockedError,
    EmptyResponseError,
    FailureKind,
    GenerationFailedError,
    TransportError,
)
from gemini_marketing.extraction import extract_json
from gemini_marketing.gateway import (
    GenerationAdapter,
    GoogleGenAIAdapter,
    MockAdapter,
    ModelGateway,
    envelope_from_response,
    validate_envelope,
)
from gemini_marketing.tools.schemas import SOCIAL_MEDIA_PLAN_SCHEMA
from gemini_marketing.types import (
    Candidate,
    GenerationOptions,
    GenerationRequest,
    GroundingChunk,
    MediaAttachment,
    ModelEnvelope,
)

pytestmark = pytest.mark.unit


class TestValidateEnvelope:
    def test_block_reason_wins_over_candidates(self):
        env = ModelEnvelope(
            block_reason="SAFETY",
            candidates=(Candidate(text="{}", finish_reason="STOP"),),
        )
        with pytest.raises(ContentBlockedError) as ei:
            validate_envelope(env)
        assert ei.value.kind is FailureKind.BLOCKED
        assert "SAFETY" in str(ei.value)

    def test_no_candidates_is_empty(self):
        with pytest.raises(EmptyResponseError):
            validate_envelope(ModelEnvelope())

    @pytest.mark.parametrize("reason", ["SAFETY", "RECITATION", "OTHER"])
    def test_abnormal_finish_reason_fails(self, make_envelope, reason):
        with pytest.raises(GenerationFailedError) as ei:
            validate_envelope(make_envelope('{"a": 1}', finish_reason=reason))
        assert ei.value.finish_reason == reason
        assert ei.value.kind is FailureKind.GENERATION_FAILED

    def test_blank_text_is_empty(self, make_envelope):
        with pytest.raises(EmptyResponseError) as ei:
            validate_envelope(make_envelope("   \n"))
        assert ei.value.kind is FailureKind.EMPTY

    @pytest.mark.parametrize("reason", ["STOP", "MAX_TOKENS", None])
    def test_accepted_finish_reasons(self, make_envelope, reason):
        result = validate_envelope(
            make_envelope("  text  ", finish_reason=reason, sources=[("https://a", "A")])
        )
        assert result.text == "text"
        assert result.grounding_chunks == (GroundingChunk(uri="https://a", title="A"),)


class TestEnvelopeFromResponse:
    def test_projects_sdk_shaped_response(self):
        response = SimpleNamespace(
            prompt_feedback=None,
            candidates=[
                SimpleNamespace(
                    finish_reason=SimpleNamespace(value="STOP"),
                    content=SimpleNamespace(
                        parts=[
                            SimpleNamespace(text="thinking...", thought=True),
                            SimpleNamespace(text='{"a": ', thought=None),
                            SimpleNamespace(text="1}", thought=None),
                            SimpleNamespace(text=None, thought=None),
                        ]
                    ),
                    grounding_metadata=SimpleNamespace(
                        grounding_chunks=[
                            SimpleNamespace(web=SimpleNamespace(uri="https://a", title="A")),
                            SimpleNamespace(web=None),
                        ]
                    ),
                )
            ],
        )

        env = envelope_from_response(response)

        assert env.block_reason is None
        assert env.candidates[0].text == '{"a": 1}'
        assert env.candidates[0].finish_reason == "STOP"
        assert env.candidates[0].grounding_chunks == (GroundingChunk("https://a", "A"),)

    def test_block_reason_is_read_from_prompt_feedback(self):
        response = SimpleNamespace(
            prompt_feedback=SimpleNamespace(block_reason=SimpleNamespace(value="SAFETY")),
            candidates=None,
        )
        env = envelope_from_response(response)
        assert env.block_reason == "SAFETY"
        assert env.candidates == ()


class TestGoogleGenAIAdapter:
    def _adapter(self, response=None):
        client = MagicMock()
        client.aio.models.generate_content = AsyncMock(return_value=response)
        return GoogleGenAIAdapter(client=client), client

    def test_grounded_config_has_search_tool_and_no_schema(self):
        adapter, _ = self._adapter()
        options = GenerationOptions(
            use_grounding=True, expect_json=True, response_schema=SOCIAL_MEDIA_PLAN_SCHEMA
        )

        config = adapter.build_config(GenerationRequest("q", options))

        assert config.tools and config.tools[0].google_search is not None
        assert config.response_schema is None
        assert config.response_mime_type is None

    def test_schema_config_requests_json_mode(self):
        adapter, _ = self._adapter()
        options = GenerationOptions(
            temperature=0.3, max_output_tokens=1024, response_schema=SOCIAL_MEDIA_PLAN_SCHEMA
        )

        config = adapter.build_config(GenerationRequest("q", options))

        assert config.response_mime_type == "application/json"
        assert config.response_schema is not None
        assert config.temperature == 0.3
        assert config.max_output_tokens == 1024
        assert not config.tools

    def test_plain_json_mode_without_schema(self):
        adapter, _ = self._adapter()
        config = adapter.build_config(
            GenerationRequest("q", GenerationOptions(expect_json=True))
        )
        assert config.response_mime_type == "application/json"
        assert config.response_schema is None

    def test_attachment_precedes_prompt_text(self):
        adapter, _ = self._adapter()
        request = GenerationRequest(
            "Describe this", attachment=MediaAttachment(b"\x89PNG", "image/png")
        )

        contents = adapter.build_contents(request)

        assert contents[0].inline_data.mime_type == "image/png"
        assert contents[0].inline_data.data == b"\x89PNG"
        assert contents[1].text == "Describe this"

    @pytest.mark.asyncio
    async def test_generate_calls_async_client(self):
        response = SimpleNamespace(
            prompt_feedback=None,
            candidates=[
                SimpleNamespace(
                    finish_reason="STOP",
                    content=SimpleNamespace(parts=[SimpleNamespace(text="{}", thought=None)]),
                    grounding_metadata=None,
                )
            ],
        )
        adapter, client = self._adapter(response)

        env = await adapter.generate(GenerationRequest("hello"))

        call = client.aio.models.generate_content.await_args
        assert call.kwargs["model"] == "gemini-2.5-flash"
        assert call.kwargs["contents"] == "hello"
        assert env.candidates[0].text == "{}"


class TestModelGateway:
    def test_adapters_satisfy_protocol(self):
        assert isinstance(MockAdapter(), GenerationAdapter)

    @pytest.mark.asyncio
    async def test_mock_adapter_output_is_extractable(self):
        result = await ModelGateway(MockAdapter()).call(GenerationRequest("hi"))
        assert extract_json(result.text)["mock"] is True

    @pytest.mark.asyncio
    async def test_sdk_errors_become_transport_errors(self, scripted_adapter):
        boom = RuntimeError("connection reset")
        gateway = ModelGateway(scripted_adapter(boom))

        with pytest.raises(TransportError) as ei:
            await gateway.call(GenerationRequest("hi"))

        assert ei.value.__cause__ is boom
        assert ei.value.retryable is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("code", "retryable"), [(400, False), (429, True), (503, True)])
    async def test_client_errors_are_not_retryable(self, scripted_adapter, code, retryable):
        error = RuntimeError(f"HTTP {code}")
        error.code = code  # type: ignore[attr-defined]
        gateway = ModelGateway(scripted_adapter(error))

        with pytest.raises(TransportError) as ei:
            await gateway.call(GenerationRequest("hi"))

        assert ei.value.retryable is retryable

    @pytest.mark.asyncio
    async def test_timeout_is_a_transport_error(self):
        class SlowAdapter:
            async def generate(self, request):
                await asyncio.sleep(5)

        gateway = ModelGateway(SlowAdapter(), timeout_seconds=0.01)

        with pytest.raises(TransportError) as ei:
            await gateway.call(GenerationRequest("hi"))

        assert ei.value.retryable is True
        assert isinstance(ei.value.__cause__, TimeoutError)

    @pytest.mark.asyncio
    async def test_validation_errors_pass_through(self, scripted_adapter, make_envelope):
        gateway = ModelGateway(scripted_adapter(make_envelope(block_reason="SAFETY")))
        with pytest.raises(ContentBlockedError):
            await gateway.call(GenerationRequest("hi"))
