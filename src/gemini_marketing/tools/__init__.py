"""Tool-specific request builders and their typed results."""

from gemini_marketing.tools.models import (
    ContentMix,
    ContractAnalysisResult,
    ContractModuleTemplate,
    CreativeAnalysisResult,
    CreativePerformanceAnalysisResult,
    CreativeVariationResult,
    SocialMediaAnalysisResult,
    SocialMediaLink,
    SocialMediaPost,
    SocialMediaProfile,
    StrategicAnalysisResult,
)
from gemini_marketing.tools.requests import (
    analyze_contract,
    analyze_creative_performance,
    analyze_creative_report,
    analyze_social_media_profile,
    fetch_strategic_analysis,
    generate_creative_variations,
    generate_social_media_plan,
)
from gemini_marketing.tools.schemas import SOCIAL_MEDIA_PLAN_SCHEMA

__all__ = [  # noqa: RUF022
    # Builders
    "fetch_strategic_analysis",
    "generate_social_media_plan",
    "analyze_creative_report",
    "analyze_creative_performance",
    "analyze_contract",
    "generate_creative_variations",
    "analyze_social_media_profile",
    # Inputs
    "ContentMix",
    "ContractModuleTemplate",
    "SocialMediaLink",
    "SocialMediaProfile",
    # Results
    "ContractAnalysisResult",
    "CreativeAnalysisResult",
    "CreativePerformanceAnalysisResult",
    "CreativeVariationResult",
    "SocialMediaAnalysisResult",
    "SocialMediaPost",
    "StrategicAnalysisResult",
    "SOCIAL_MEDIA_PLAN_SCHEMA",
]
