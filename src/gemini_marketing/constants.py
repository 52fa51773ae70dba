"""
Project-wide constants for the Gemini marketing toolkit
"""  # noqa: D200, D212, D415

# ==============================================================================
# Model Configuration
# ==============================================================================

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_OUTPUT_TOKENS = 8192

# Finish reasons that still carry a usable candidate
ACCEPTED_FINISH_REASONS = frozenset({"STOP", "MAX_TOKENS"})

JSON_MIME_TYPE = "application/json"

# ==============================================================================
# Retry Configuration
# ==============================================================================

MAX_ATTEMPTS = 3
RETRY_BASE_DELAY = 1.0  # seconds; doubled after every failed attempt

# ==============================================================================
# Response Cache Configuration
# ==============================================================================

DEFAULT_CACHE_TTL = 3600  # 1 hour in seconds

# ==============================================================================
# Diagnostics
# ==============================================================================

# Maximum raw model text included in error log lines
RAW_TEXT_LOG_LIMIT = 2000
