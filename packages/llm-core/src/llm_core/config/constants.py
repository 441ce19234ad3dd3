"""
Constants for the LLM Core library.

Centralizes the defaults used by the generation clients.
"""

# =============================================================================
# OpenAI-compatible API configuration
# =============================================================================

DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_OPENAI_MODEL = "gpt-4o"
DEFAULT_TEMPERATURE = 0.7

DEFAULT_REQUEST_TIMEOUT = 120.0  # seconds
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_MIN_WAIT = 1  # seconds
DEFAULT_RETRY_MAX_WAIT = 60  # seconds
