"""Utility functions for LLM Core library."""

import re
from typing import Optional

_CODE_FENCE_RE = re.compile(r"```(?:json)?")


def is_failed_response(content: Optional[str]) -> bool:
    """Check if an LLM response indicates a failure.

    A response is considered failed if:
    - It is None
    - It is empty or contains only whitespace
    - It starts with "Error:" (provider error marker)

    Args:
        content: The response content to check

    Returns:
        bool: True if the response indicates a failure, False otherwise
    """
    if content is None:
        return True
    if not content or not content.strip():
        return True
    if content.strip().startswith("Error:"):
        return True
    return False


def strip_code_fences(content: str) -> str:
    """Remove Markdown code fence markers (```json and ```) from a response.

    Models asked for raw JSON frequently wrap it in a fenced block anyway.

    Args:
        content: Raw response text

    Returns:
        The text with every fence marker removed and surrounding whitespace trimmed
    """
    return _CODE_FENCE_RE.sub("", content).strip()
