"""Prompt templates for the marketing tools.

Each function returns the full prompt text. JSON examples are rendered from
Python structures so the field names stay in sync with the result models.
"""

from calendar import month_name
from collections.abc import Sequence
import json
from typing import Any

from gemini_marketing.tools.models import (
    ContentMix,
    ContractModuleTemplate,
    SocialMediaProfile,
)
from gemini_marketing.tools.schemas import INITIAL_POST_STATUS

_SINGLE_OBJECT = (
    "Your response MUST be a single JSON object. Do not include any text or "
    "explanation outside the JSON. The response must start with '{' and end with '}'."
)


def _example(structure: dict[str, Any]) -> str:
    return json.dumps(structure, indent=2, ensure_ascii=False)


def strategic_analysis_prompt(query: str, social_link: str | None = None) -> str:
    parts = [
        "You are an elite business strategy consultant specialising in market "
        "positioning and accelerated growth. Your task is to create a "
        f'"Strategic Plan and Brand Activation Proposal" for this business/sector: "{query}".'
    ]
    if social_link:
        parts.append(
            f"\nFor a more precise analysis, consider the provided profile/website: "
            f"{social_link}. It represents the business being analysed. Use it as the "
            "main reference for brand identity, strengths and weaknesses, and to "
            "better understand the target audience."
        )
    parts.extend(
        [
            "\nYour mission is to produce a strategic analysis report. Use Google Search "
            "to ground your analysis in real data, especially the competitor section.",
            f"\n**Response format:** {_SINGLE_OBJECT}",
            "\n**JSON instructions:**",
            "1. **Complete JSON**: fill every field of the example. If search yields no "
            "data for a field (such as 'activeCampaignsSummary'), use your market "
            "knowledge to provide a plausible analysis. Never leave fields blank or 'N/A'.",
            "2. **Real competitors**: identify real competitors and fill every field for each.",
            "3. **Quality**: accuracy is essential; the answer must be complete and professional.",
            "4. **Structure**: follow the example structure strictly.",
            "\n**Example structure:**",
            _example(
                {
                    "title": f"Strategic Plan for {query}",
                    "executiveSummary": "A concise executive summary of the analysis...",
                    "marketKpis": [
                        {
                            "title": "Market Size",
                            "value": "$100M",
                            "description": "Estimate for the addressable market.",
                        }
                    ],
                    "marketAnalysis": {
                        "overview": "Market overview...",
                        "trends": "Current trends...",
                        "opportunities": "Identified opportunities...",
                    },
                    "competitiveLandscape": {
                        "overview": "Overall competitive analysis...",
                        "competitors": [
                            {
                                "name": "Real Competitor Example",
                                "description": "Short description of the competitor",
                                "strengths": ["Strength 1", "Strength 2"],
                                "weaknesses": ["Weakness 1", "Weakness 2"],
                                "socialPresence": {
                                    "websiteUrl": "https://www.realcompetitor.com",
                                    "instagram": "https://instagram.com/real",
                                },
                                "estimatedMonthlyTraffic": "50K - 75K",
                                "topKeywords": ["artisan pizza", "pizza delivery"],
                                "activeCampaignsSummary": "Heavy local paid traffic on Instagram.",
                                "socialEngagement": {
                                    "platform": "Instagram",
                                    "engagementRate": "2.5%",
                                    "followers": "80K",
                                },
                            }
                        ],
                    },
                    "strategicRecommendations": "Detailed recommendations here...",
                    "actionPlan": [
                        {
                            "phase": "Phase 1 (0-3 Months)",
                            "step": "1. Optimise the digital presence",
                            "description": "Step description",
                            "details": ["Detail 1", "Detail 2"],
                        }
                    ],
                }
            ),
        ]
    )
    return "\n".join(parts)


def social_media_plan_prompt(
    profile: SocialMediaProfile,
    month: int,
    total_posts: int,
    content_mix: ContentMix,
) -> str:
    links = ", ".join(f"{link.platform}: {link.url}" for link in profile.social_links)
    return "\n".join(
        [
            "You are a senior social media strategist. Your task is to create a monthly "
            "content plan for a client.",
            f"\n**Client:** {profile.name}",
            f"**Business description:** {profile.business_description}",
            f"**Social networks:** {links}",
            "\n**Requirements:**",
            f"- **Target month:** {month_name[month]}. Spread the posts across this "
            "month of the current year.",
            f"- **Total posts:** create exactly {total_posts} posts.",
            "- **Sales-funnel mix:**",
            f"  - Top of funnel: {content_mix.top}% of posts.",
            f"  - Middle of funnel: {content_mix.middle}% of posts.",
            f"  - Bottom of funnel: {content_mix.bottom}% of posts.",
            "\nProduce a creative plan aligned with the client's business, strictly "
            "following the provided JSON schema. Every post's status must be "
            f"'{INITIAL_POST_STATUS}'.",
        ]
    )


def creative_report_prompt(report_text: str) -> str:
    return "\n".join(
        [
            "You are a market analyst and branding strategist. Analyse the report below "
            "and extract insights to build personas and creative recommendations.",
            f'Report: """{report_text}"""',
            "\n**Response format:** Your response MUST be a single JSON object "
            "following the structure below.",
            "\n**JSON structure:**",
            _example(
                {
                    "analysisTitle": "Analysis title (e.g. 'Market analysis for a clothing brand')",
                    "strategicSummary": "A 2-3 sentence summary of the key strategic insight.",
                    "personas": [
                        {
                            "name": "Persona name",
                            "age": 30,
                            "jobTitle": "Occupation",
                            "incomeLevel": "Income",
                            "location": "Location",
                            "bio": "Short bio",
                            "painPoints": ["Pain point 1"],
                            "goals": ["Goal 1"],
                            "motivations": ["Motivation 1"],
                            "communicationChannels": ["Instagram", "Email"],
                        }
                    ],
                    "successfulCreatives": [
                        {
                            "theme": "Creative theme",
                            "description": "Description of the successful creative",
                            "successReason": "Why it worked",
                            "metrics": {
                                "ctr": "Estimated CTR",
                                "conversionRate": "Estimated conversion rate",
                                "engagement": "Estimated engagement",
                            },
                        }
                    ],
                    "creativePerformanceMetrics": [
                        {"name": "Theme A", "performance": 85},
                        {"name": "Theme B", "performance": 60},
                    ],
                }
            ),
        ]
    )


def creative_performance_prompt(marketing_segment: str, creative_format: str) -> str:
    return "\n".join(
        [
            "You are a creative director and ad-performance specialist. Analyse the "
            f'attached image in the context of the "{marketing_segment}" segment and the '
            f'"{creative_format}" format. Use Google Search to find real, successful '
            "benchmarks from the same sector.",
            f"\n**Response format:** {_SINGLE_OBJECT}",
            "\n**JSON structure** (overallTier is one of 'High Performance', "
            "'Medium Performance', 'Low Performance'; scores range from 0 to 100):",
            _example(
                {
                    "title": "Creative Performance Analysis",
                    "thermometer": {
                        "overallTier": "High Performance",
                        "overallScore": 88,
                        "summary": "Summary of your assessment.",
                        "metrics": [
                            {
                                "name": "Message Clarity",
                                "score": 90,
                                "analysis": "Justification for the score.",
                            }
                        ],
                    },
                    "optimizationTips": ["Optimisation tip 1.", "Tip 2."],
                    "benchmarks": [
                        {
                            "title": "E.g. Nike - Emotional Storytelling",
                            "brandName": "Nike",
                            "brandDomain": "nike.com",
                            "channel": "YouTube",
                            "sourceUrl": "Real URL of the campaign or coverage of it",
                            "concept": "Description of the real creative's concept.",
                            "successReason": "Why this creative succeeded.",
                            "performanceInsights": "Real performance insight, citing the source.",
                            "videoUrl": "Video URL, if applicable",
                            "videoAnalysis": {
                                "hook": "Analysis of the first 3 seconds.",
                                "rhythm": "Pacing analysis.",
                                "branding": "Branding analysis.",
                                "cta": "CTA analysis.",
                            },
                        }
                    ],
                }
            ),
        ]
    )


def contract_prompt(
    contract_text: str, module_templates: Sequence[ContractModuleTemplate]
) -> str:
    modules = [{"id": m.id, "name": m.name, "team": m.team} for m in module_templates]
    return "\n".join(
        [
            "You are an agency operations assistant. Your task is to analyse the text "
            "of a contract and extract its key information.",
            f'\n**Contract text:**\n"""{contract_text}"""',
            f"\n**Available service modules:**\n{json.dumps(modules, indent=2, ensure_ascii=False)}",
            "\n**Instructions:**",
            "1. Read the contract and identify the client's name.",
            "2. Find the start date and the monthly fee.",
            "3. Match the services described in the contract against the available "
            "modules and list the IDs of the matching modules.",
            "\n**Response format:** Your response MUST be a single JSON object.",
            "\n**JSON structure:**",
            _example(
                {
                    "clientName": "Extracted client name",
                    "startDate": "YYYY-MM-DD",
                    "monthlyFee": 1500.00,
                    "identifiedModuleIds": ["mod_design_1", "mod_traffic_1"],
                }
            ),
        ]
    )


def creative_variations_prompt(product_info: str, target_audience: str, key_message: str) -> str:
    return "\n".join(
        [
            "You are a senior copywriter and ad strategist. Create 5 creative variations "
            "for a digital marketing campaign based on the information below.",
            f"\n**Product/Service:** {product_info}",
            f"**Target audience:** {target_audience}",
            f"**Key message/offer:** {key_message}",
            "\n**Instructions:**",
            "- Create 5 variations, each with a different communication angle (e.g. "
            "Social Proof, Urgency, Core Benefit, Curiosity, Pain vs. Pleasure).",
            "- For each variation provide a headline, body copy, visual suggestion, CTA "
            "and recommended platform.",
            '\n**Response format:** Your response MUST be a JSON object containing a "variations" array.',
            "\n**JSON structure:**",
            _example(
                {
                    "variations": [
                        {
                            "angle": "Social Proof (Testimonials)",
                            "headline": "See what our customers say!",
                            "bodyCopy": "Ad copy focused on testimonials.",
                            "visualSuggestion": "Carousel with customer testimonial screenshots.",
                            "cta": "Buy now",
                            "platform": "Instagram Feed",
                        }
                    ]
                }
            ),
        ]
    )


def social_media_profile_prompt(profile_url: str, business_objectives: str) -> str:
    return "\n".join(
        [
            "You are a digital marketing consultant specialising in social media "
            "analysis. Analyse the given social profile and produce a complete SWOT "
            "analysis with strategic recommendations. Use Google Search to gather data "
            "about the profile.",
            f"\n**Profile to analyse:** {profile_url}",
            f"**Business objectives:** {business_objectives}",
            f"\n**Response format:** {_SINGLE_OBJECT}",
            "\n**JSON structure:**",
            _example(
                {
                    "profileOverview": "Overall summary, first impression and positioning.",
                    "contentStrategyAnalysis": "Editorial line, content formats and frequency.",
                    "audienceAnalysis": "Target audience, engagement and community.",
                    "swotAnalysis": {
                        "strengths": [{"title": "Strength 1", "description": "Description."}],
                        "weaknesses": [{"title": "Weakness 1", "description": "Description."}],
                        "opportunities": [
                            {"title": "Opportunity 1", "description": "Market opportunity."}
                        ],
                        "threats": [{"title": "Threat 1", "description": "External threat."}],
                    },
                    "recommendations": [
                        {
                            "priority": "High",
                            "recommendation": "Clear, actionable strategic recommendation.",
                            "reason": "Justification for the recommendation.",
                        }
                    ],
                }
            ),
        ]
    )
