"""Typed results returned by the tool request builders.

Fields default when the model omits them and unknown keys are kept.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class GroundingSourceModel(_Lenient):
    uri: str
    title: str = ""


# --- Strategic consultant ---


class KPI(_Lenient):
    title: str = ""
    value: str = ""
    description: str = ""


class SocialEngagement(_Lenient):
    platform: str = ""
    engagement_rate: str = Field(default="", alias="engagementRate")
    followers: str = ""


class Competitor(_Lenient):
    name: str = ""
    description: str = ""
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    social_presence: dict[str, str] = Field(default_factory=dict, alias="socialPresence")
    estimated_monthly_traffic: str = Field(default="", alias="estimatedMonthlyTraffic")
    top_keywords: list[str] = Field(default_factory=list, alias="topKeywords")
    active_campaigns_summary: str = Field(default="", alias="activeCampaignsSummary")
    social_engagement: SocialEngagement | None = Field(default=None, alias="socialEngagement")


class MarketAnalysis(_Lenient):
    overview: str = ""
    trends: str = ""
    opportunities: str = ""


class CompetitiveLandscape(_Lenient):
    overview: str = ""
    competitors: list[Competitor] = Field(default_factory=list)


class ActionStep(_Lenient):
    phase: str = ""
    step: str = ""
    description: str = ""
    details: list[str] = Field(default_factory=list)


class StrategicAnalysisResult(_Lenient):
    title: str = ""
    executive_summary: str = Field(default="", alias="executiveSummary")
    market_kpis: list[KPI] = Field(default_factory=list, alias="marketKpis")
    market_analysis: MarketAnalysis = Field(default_factory=MarketAnalysis, alias="marketAnalysis")
    competitive_landscape: CompetitiveLandscape = Field(
        default_factory=CompetitiveLandscape, alias="competitiveLandscape"
    )
    strategic_recommendations: str = Field(default="", alias="strategicRecommendations")
    action_plan: list[ActionStep] = Field(default_factory=list, alias="actionPlan")
    sources: list[GroundingSourceModel] = Field(default_factory=list)


# --- Social media planner ---

FunnelStage = Literal["Top", "Middle", "Bottom"]
PostChannel = Literal["Instagram Feed", "Instagram Stories", "TikTok", "Blog", "Email"]
PostStatus = Literal["Not started", "Awaiting approval", "Done"]


class SocialMediaLink(_Lenient):
    platform: str
    url: str


class SocialMediaProfile(_Lenient):
    name: str = Field(min_length=1)
    business_description: str = Field(default="", alias="businessDescription")
    social_links: list[SocialMediaLink] = Field(default_factory=list, alias="socialLinks")


class ContentMix(BaseModel):
    """Percentages of posts per sales-funnel stage; must sum to 100."""

    top: int = Field(ge=0, le=100)
    middle: int = Field(ge=0, le=100)
    bottom: int = Field(ge=0, le=100)

    @model_validator(mode="after")
    def check_total(self) -> "ContentMix":
        total = self.top + self.middle + self.bottom
        if total != 100:
            raise ValueError(f"content mix must sum to 100, got {total}")
        return self


class SocialMediaPost(_Lenient):
    date: str
    title: str
    copy_text: str = Field(alias="copy")
    status: PostStatus = "Not started"
    funnel_stage: FunnelStage = Field(alias="funnelStage")
    objective: str = ""
    visual_suggestion: str = Field(default="", alias="visualSuggestion")
    channel: PostChannel


# --- Persona generator / creative report ---


class Persona(_Lenient):
    name: str = ""
    age: int | None = None
    job_title: str = Field(default="", alias="jobTitle")
    income_level: str = Field(default="", alias="incomeLevel")
    location: str = ""
    bio: str = ""
    pain_points: list[str] = Field(default_factory=list, alias="painPoints")
    goals: list[str] = Field(default_factory=list)
    motivations: list[str] = Field(default_factory=list)
    communication_channels: list[str] = Field(default_factory=list, alias="communicationChannels")
    preferred_brands: list[str] | None = Field(default=None, alias="preferredBrands")


class CreativeMetrics(_Lenient):
    ctr: str = ""
    conversion_rate: str = Field(default="", alias="conversionRate")
    engagement: str = ""


class SuccessfulCreative(_Lenient):
    theme: str = ""
    description: str = ""
    success_reason: str = Field(default="", alias="successReason")
    metrics: CreativeMetrics = Field(default_factory=CreativeMetrics)


class CreativeMetricPoint(_Lenient):
    name: str = ""
    performance: float = Field(default=0, ge=0, le=100)


class CreativeAnalysisResult(_Lenient):
    analysis_title: str = Field(default="", alias="analysisTitle")
    strategic_summary: str = Field(default="", alias="strategicSummary")
    personas: list[Persona] = Field(default_factory=list)
    successful_creatives: list[SuccessfulCreative] = Field(
        default_factory=list, alias="successfulCreatives"
    )
    creative_performance_metrics: list[CreativeMetricPoint] = Field(
        default_factory=list, alias="creativePerformanceMetrics"
    )


# --- Creative performance analyzer ---


class PerformanceMetric(_Lenient):
    name: str = ""
    score: float = Field(default=0, ge=0, le=100)
    analysis: str = ""


class PerformanceThermometer(_Lenient):
    overall_tier: str = Field(default="", alias="overallTier")
    overall_score: float = Field(default=0, ge=0, le=100, alias="overallScore")
    summary: str = ""
    metrics: list[PerformanceMetric] = Field(default_factory=list)


class VideoAnalysis(_Lenient):
    hook: str = ""
    rhythm: str = ""
    branding: str = ""
    cta: str = ""


class BenchmarkCreative(_Lenient):
    title: str = ""
    brand_name: str = Field(default="", alias="brandName")
    brand_domain: str = Field(default="", alias="brandDomain")
    channel: str = ""
    source_url: str = Field(default="", alias="sourceUrl")
    concept: str = ""
    success_reason: str = Field(default="", alias="successReason")
    performance_insights: str = Field(default="", alias="performanceInsights")
    video_url: str | None = Field(default=None, alias="videoUrl")
    video_analysis: VideoAnalysis | None = Field(default=None, alias="videoAnalysis")


class CreativePerformanceAnalysisResult(_Lenient):
    title: str = ""
    thermometer: PerformanceThermometer = Field(default_factory=PerformanceThermometer)
    optimization_tips: list[str] = Field(default_factory=list, alias="optimizationTips")
    benchmarks: list[BenchmarkCreative] = Field(default_factory=list)
    sources: list[GroundingSourceModel] = Field(default_factory=list)


# --- Agency OS contract analysis ---


class ContractModuleTemplate(_Lenient):
    id: str
    name: str
    team: str = ""


class ContractAnalysisResult(_Lenient):
    client_name: str = Field(default="", alias="clientName")
    start_date: str = Field(default="", alias="startDate")
    monthly_fee: float = Field(default=0.0, alias="monthlyFee")
    identified_module_ids: list[str] = Field(default_factory=list, alias="identifiedModuleIds")


# --- Creative lab ---


class CreativeVariation(_Lenient):
    angle: str = ""
    headline: str = ""
    body_copy: str = Field(default="", alias="bodyCopy")
    visual_suggestion: str = Field(default="", alias="visualSuggestion")
    cta: str = ""
    platform: str = ""


class CreativeVariationResult(_Lenient):
    variations: list[CreativeVariation] = Field(default_factory=list)


# --- Social media analyzer ---


class SWOTPoint(_Lenient):
    title: str = ""
    description: str = ""


class SWOTAnalysis(_Lenient):
    strengths: list[SWOTPoint] = Field(default_factory=list)
    weaknesses: list[SWOTPoint] = Field(default_factory=list)
    opportunities: list[SWOTPoint] = Field(default_factory=list)
    threats: list[SWOTPoint] = Field(default_factory=list)


class Recommendation(_Lenient):
    priority: str = ""
    recommendation: str = ""
    reason: str = ""


class SocialMediaAnalysisResult(_Lenient):
    profile_overview: str = Field(default="", alias="profileOverview")
    content_strategy_analysis: str = Field(default="", alias="contentStrategyAnalysis")
    audience_analysis: str = Field(default="", alias="audienceAnalysis")
    swot_analysis: SWOTAnalysis = Field(default_factory=SWOTAnalysis, alias="swotAnalysis")
    recommendations: list[Recommendation] = Field(default_factory=list)
    sources: list[GroundingSourceModel] = Field(default_factory=list)
