"""Generation service clients (OpenAI-compatible HTTP and offline mock)."""

from llm_core.providers.base import AsyncProviderClient
from llm_core.providers.mock import (
    MOCK_ARTICLE_RESPONSE,
    MOCK_OUTLINE,
    MOCK_SUMMARY_RESPONSE,
    MockClient,
)
from llm_core.providers.openai_compat import AsyncOpenAIClient
from llm_core.providers.types import Role, human_message, system_message

__all__ = [
    # Base class
    "AsyncProviderClient",
    # Clients
    "AsyncOpenAIClient",
    "MockClient",
    # Messages
    "Role",
    "system_message",
    "human_message",
    # Mock responses
    "MOCK_OUTLINE",
    "MOCK_ARTICLE_RESPONSE",
    "MOCK_SUMMARY_RESPONSE",
]
