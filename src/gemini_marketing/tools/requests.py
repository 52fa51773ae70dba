"""Request builders for the seven marketing tools.

Each builder renders its prompt, picks generation options, sends the request
through the shared `GenerationOrchestrator`, and validates the resulting JSON
into a typed result. Builders never call the model directly.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
import json
import logging
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from gemini_marketing.exceptions import MalformedResponseError
from gemini_marketing.orchestrator import GenerationOrchestrator
from gemini_marketing.tools import prompts
from gemini_marketing.tools.models import (
    ContentMix,
    ContractAnalysisResult,
    ContractModuleTemplate,
    CreativeAnalysisResult,
    CreativePerformanceAnalysisResult,
    CreativeVariationResult,
    SocialMediaAnalysisResult,
    SocialMediaPost,
    SocialMediaProfile,
    StrategicAnalysisResult,
)
from gemini_marketing.tools.schemas import SOCIAL_MEDIA_PLAN_SCHEMA
from gemini_marketing.types import MediaAttachment

log = logging.getLogger(__name__)

WEEKS_PER_PLAN = 4

_PLAN_ADAPTER = TypeAdapter(list[SocialMediaPost])


def _validate[M](adapter: TypeAdapter[M] | type[BaseModel], value: Any, tool: str) -> M:
    """Validate parsed JSON, re-raising mismatches as malformed responses."""
    try:
        if isinstance(adapter, TypeAdapter):
            return adapter.validate_python(value)
        return adapter.model_validate(value)  # type: ignore[return-value]
    except ValidationError as e:
        log.error("%s response did not match the expected shape: %s", tool, e)
        raise MalformedResponseError(
            f"The AI response for {tool} did not match the expected structure: "
            f"{e.error_count()} validation error(s).",
            raw_text=json.dumps(value, ensure_ascii=False, default=str),
            reason="schema_mismatch",
        ) from e


def _validator[M](adapter: TypeAdapter[M] | type[BaseModel], tool: str) -> Callable[[Any], M]:
    """Bind `_validate` for the orchestrator, which runs it before caching."""

    def validate(value: Any) -> M:
        return _validate(adapter, value, tool)

    return validate


def _require_text(value: str, name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must be a non-empty string")


async def fetch_strategic_analysis(
    orchestrator: GenerationOrchestrator,
    query: str,
    social_link: str | None = None,
) -> StrategicAnalysisResult:
    """Grounded strategic plan and competitor analysis for a business or sector."""
    _require_text(query, "query")
    options = orchestrator.default_options.replace(use_grounding=True)
    return await orchestrator.invoke(
        prompts.strategic_analysis_prompt(query, social_link),
        options,
        validate=_validator(StrategicAnalysisResult, "strategic analysis"),
    )


async def generate_social_media_plan(
    orchestrator: GenerationOrchestrator,
    profile: SocialMediaProfile | Mapping[str, Any],
    month: int,
    posts_per_week: int,
    content_mix: ContentMix | Mapping[str, int],
) -> list[SocialMediaPost]:
    """Generate a month of posts under the constrained plan schema.

    Args:
        orchestrator: Shared request orchestrator.
        profile: Client profile (name, business description, social links).
        month: Target month, 1-12.
        posts_per_week: Posts per week; the plan holds four weeks.
        content_mix: Percentages per funnel stage, summing to 100.

    Raises:
        ValueError: For an out-of-range month, a non-positive post count, or
            an invalid profile or content mix.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    if posts_per_week < 1:
        raise ValueError(f"posts_per_week must be positive, got {posts_per_week}")
    profile = SocialMediaProfile.model_validate(profile)
    content_mix = ContentMix.model_validate(content_mix)

    total_posts = posts_per_week * WEEKS_PER_PLAN
    options = orchestrator.default_options.replace(
        expect_json=True,
        response_schema=SOCIAL_MEDIA_PLAN_SCHEMA,
        use_grounding=False,
    )
    posts = await orchestrator.invoke(
        prompts.social_media_plan_prompt(profile, month, total_posts, content_mix),
        options,
        validate=_validator(_PLAN_ADAPTER, "social media plan"),
    )
    if len(posts) != total_posts:
        log.warning("Requested %d posts but the plan contains %d.", total_posts, len(posts))
    return posts


async def analyze_creative_report(
    orchestrator: GenerationOrchestrator, report_text: str
) -> CreativeAnalysisResult:
    """Personas and successful-creative insights extracted from a report."""
    _require_text(report_text, "report_text")
    options = orchestrator.default_options.replace(expect_json=True, use_grounding=False)
    return await orchestrator.invoke(
        prompts.creative_report_prompt(report_text),
        options,
        validate=_validator(CreativeAnalysisResult, "creative report"),
    )


async def analyze_creative_performance(
    orchestrator: GenerationOrchestrator,
    image: MediaAttachment,
    marketing_segment: str,
    creative_format: str,
) -> CreativePerformanceAnalysisResult:
    """Score an ad creative image against grounded sector benchmarks.

    The image is sent inline ahead of the prompt text. Use
    `MediaAttachment.from_base64` for browser-style base64 payloads.
    """
    _require_text(marketing_segment, "marketing_segment")
    _require_text(creative_format, "creative_format")
    options = orchestrator.default_options.replace(use_grounding=True)
    return await orchestrator.invoke(
        prompts.creative_performance_prompt(marketing_segment, creative_format),
        options,
        attachment=image,
        validate=_validator(CreativePerformanceAnalysisResult, "creative performance"),
    )


async def analyze_contract(
    orchestrator: GenerationOrchestrator,
    contract_text: str,
    module_templates: Sequence[ContractModuleTemplate | Mapping[str, Any]],
) -> ContractAnalysisResult:
    """Extract client, start date, monthly fee and matching service modules."""
    _require_text(contract_text, "contract_text")
    templates = [ContractModuleTemplate.model_validate(m) for m in module_templates]
    options = orchestrator.default_options.replace(
        expect_json=True, use_grounding=False, temperature=0.2
    )
    result = await orchestrator.invoke(
        prompts.contract_prompt(contract_text, templates),
        options,
        validate=_validator(ContractAnalysisResult, "contract analysis"),
    )

    known = {t.id for t in templates}
    unknown = [m for m in result.identified_module_ids if m not in known]
    if unknown:
        log.warning("Contract analysis returned unknown module ids: %s", unknown)
    return result


async def generate_creative_variations(
    orchestrator: GenerationOrchestrator,
    product_info: str,
    target_audience: str,
    key_message: str,
) -> CreativeVariationResult:
    _require_text(product_info, "product_info")
    options = orchestrator.default_options.replace(
        expect_json=True, use_grounding=False, temperature=0.9
    )
    return await orchestrator.invoke(
        prompts.creative_variations_prompt(product_info, target_audience, key_message),
        options,
        validate=_validator(CreativeVariationResult, "creative variations"),
    )


async def analyze_social_media_profile(
    orchestrator: GenerationOrchestrator,
    profile_url: str,
    business_objectives: str,
) -> SocialMediaAnalysisResult:
    """Grounded SWOT analysis and recommendations for a social profile."""
    _require_text(profile_url, "profile_url")
    options = orchestrator.default_options.replace(use_grounding=True)
    return await orchestrator.invoke(
        prompts.social_media_profile_prompt(profile_url, business_objectives),
        options,
        validate=_validator(SocialMediaAnalysisResult, "social media analysis"),
    )
