# Configuration settings shared across the application
# Values come from environment variables with development-friendly defaults

import os


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Runtime environment ("development" or "production")
ENVIRONMENT = os.getenv("IDEOR_ENV", "development")

LOG_LEVEL = os.getenv("IDEOR_LOG_LEVEL", "INFO")

# Available Gemini models
LLM_MODELS = [
    {"id": "gemini-2.0-flash", "name": "Gemini 2.0 Flash (Fast)"},
    {"id": "gemini-2.5-flash-lite", "name": "Gemini 2.5 Flash Lite (Fast + Cheap)"},
    {"id": "gemini-2.5-flash", "name": "Gemini 2.5 Flash"},
    {"id": "gemini-2.5-pro", "name": "Gemini 2.5 Pro"},
]

# Default model
DEFAULT_MODEL = os.getenv("IDEOR_GEMINI_MODEL", "gemini-2.5-flash")

# Thinking budget per Gemini 2.5 model; thinking tokens count against the output limit
THINKING_BUDGET_CONFIG = {
    "gemini-2.5-flash": 0,
    "gemini-2.5-flash-lite": 0,
    "gemini-2.5-pro": 128,  # minimum, cannot be disabled
}

# Upstream call policy
GEMINI_TIMEOUT_SECONDS = float(os.getenv("IDEOR_GEMINI_TIMEOUT_SECONDS", "90"))
GEMINI_MAX_RETRIES = int(os.getenv("IDEOR_GEMINI_MAX_RETRIES", "3"))

# Generation settings for idea suggestions
IDEA_TEMPERATURE = 0.7
IDEA_TOP_P = 0.9
IDEA_MAX_OUTPUT_TOKENS = 1024

# Generation settings for stage documents
DOCUMENT_TEMPERATURE = 0.7
DOCUMENT_MAX_OUTPUT_TOKENS = 8192

# Shorter stage prompts for development
USE_COMPACT_PROMPTS = _env_flag("IDEOR_USE_COMPACT_PROMPTS", False)

# Input and output limits
MAX_INPUT_CHARS = 400
MAX_IDEA_CHARS = 400
MAX_TITLE_WORDS = 6
MIN_IDEAS = 1
MAX_IDEAS = 6
DEFAULT_IDEA_COUNT = 3

# Project defaults
DEFAULT_PHASE = "fase1"
DEFAULT_VALUATION = 250.0

# CORS: local dev servers on any port plus Vercel preview/production deployments
CORS_ORIGIN_REGEX = r"^(http://localhost(:\d+)?|https://[a-zA-Z0-9-]+(\.[a-zA-Z0-9-]+)*\.vercel\.app)$"
CORS_EXTRA_ORIGINS = [o.strip() for o in os.getenv("IDEOR_EXTRA_ORIGINS", "").split(",") if o.strip()]
CORS_EXPOSE_HEADERS = ["Content-Disposition", "x-request-id"]


def get_gemini_api_key() -> str:
    """Read the API key at call time so tests and deployments can set it late."""
    return os.getenv("GEMINI_API_KEY", "")


def clamp_idea_count(count) -> int:
    """Clamp a requested idea count into the supported range."""
    if count is None:
        return DEFAULT_IDEA_COUNT
    return max(MIN_IDEAS, min(MAX_IDEAS, int(count)))
