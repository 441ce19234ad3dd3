"""Offline mock client returning canned responses."""

import json
from typing import Any, Optional

from loguru import logger

from llm_core.providers.base import AsyncProviderClient
from llm_core.providers.types import Role

MOCK_OUTLINE: dict[str, Any] = {
    "title": "Mock Outline Title",
    "chapters": [
        {
            "title": "Mock Chapter 1",
            "articles": [{"title": "Mock Article 1.1"}, {"title": "Mock Article 1.2"}],
        },
        {
            "title": "Mock Chapter 2",
            "articles": [{"title": "Mock Article 2.1"}],
        },
    ],
}

MOCK_ARTICLE_RESPONSE = "This is mock generated article content based on the context."
MOCK_SUMMARY_RESPONSE = "This is a mock summary of the provided content."


class MockClient(AsyncProviderClient):
    """Deterministic stand-in for a real generation service.

    The response is chosen from the system message:
    - a summarization request returns a fixed summary
    - a request for JSON output returns the mock outline
    - anything else returns fixed article content
    """

    def __init__(self, outline: Optional[dict[str, Any]] = None):
        self.outline = outline or MOCK_OUTLINE
        self.calls: list[list[dict[str, str]]] = []

    async def generate(
        self,
        messages: list[dict[str, str]],
        model: Optional[str] = None,
    ) -> str:
        self.calls.append(messages)
        logger.debug(f"Mock LLM prompt: {json.dumps(messages, ensure_ascii=False, indent=2)}")

        system = " ".join(m["content"] for m in messages if m["role"] == Role.SYSTEM.value).lower()
        if "summariz" in system:
            return MOCK_SUMMARY_RESPONSE
        if "json" in system:
            return json.dumps(self.outline, indent=2)
        return MOCK_ARTICLE_RESPONSE

    async def close(self) -> None:
        pass
