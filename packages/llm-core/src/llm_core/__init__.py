"""LLM Core - Generation service clients, settings, and utilities."""

__version__ = "0.1.0"

from llm_core.config import BaseConfig, Settings, get_settings
from llm_core.exceptions import (
    APIError,
    AuthenticationError,
    GenerationFailedError,
    LlmModelError,
    RateLimitError,
)
from llm_core.providers import (
    MOCK_ARTICLE_RESPONSE,
    MOCK_OUTLINE,
    MOCK_SUMMARY_RESPONSE,
    # Clients
    AsyncOpenAIClient,
    # Base classes
    AsyncProviderClient,
    MockClient,
    # Messages
    Role,
    human_message,
    system_message,
)
from llm_core.utils import is_failed_response, strip_code_fences

__all__ = [
    # Version
    "__version__",
    # Config
    "Settings",
    "get_settings",
    "BaseConfig",
    # Base classes
    "AsyncProviderClient",
    # Clients
    "AsyncOpenAIClient",
    "MockClient",
    # Messages
    "Role",
    "system_message",
    "human_message",
    # Exceptions
    "LlmModelError",
    "GenerationFailedError",
    "RateLimitError",
    "APIError",
    "AuthenticationError",
    # Utilities
    "is_failed_response",
    "strip_code_fences",
    # Mock responses
    "MOCK_OUTLINE",
    "MOCK_ARTICLE_RESPONSE",
    "MOCK_SUMMARY_RESPONSE",
]
