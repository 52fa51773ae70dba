"""Response schemas passed to the model's constrained-JSON mode."""

FUNNEL_STAGES = ("Top", "Middle", "Bottom")
POST_CHANNELS = ("Instagram Feed", "Instagram Stories", "TikTok", "Blog", "Email")
INITIAL_POST_STATUS = "Not started"

SOCIAL_MEDIA_POST_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "date": {"type": "STRING", "description": "Post date in YYYY-MM-DD format."},
        "title": {"type": "STRING", "description": "Short, catchy title for the post."},
        "copy": {"type": "STRING", "description": "Full caption text for the post."},
        "status": {
            "type": "STRING",
            "enum": [INITIAL_POST_STATUS],
            "description": f"Initial status of the post; always '{INITIAL_POST_STATUS}'.",
        },
        "funnelStage": {
            "type": "STRING",
            "enum": list(FUNNEL_STAGES),
            "description": "Sales-funnel stage the post belongs to.",
        },
        "objective": {
            "type": "STRING",
            "description": "Specific goal of the post (e.g. 'Increase reach', 'Generate leads').",
        },
        "visualSuggestion": {
            "type": "STRING",
            "description": "Clear direction for the creative (e.g. 'Short product video').",
        },
        "channel": {
            "type": "STRING",
            "enum": list(POST_CHANNELS),
            "description": "Social channel where the post will be published.",
        },
    },
    "required": [
        "date",
        "title",
        "copy",
        "status",
        "funnelStage",
        "objective",
        "visualSuggestion",
        "channel",
    ],
}

SOCIAL_MEDIA_PLAN_SCHEMA = {
    "type": "ARRAY",
    "items": SOCIAL_MEDIA_POST_SCHEMA,
}
