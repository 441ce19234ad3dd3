"""Custom exceptions for LLM Core library."""

from typing import Optional


class LlmModelError(Exception):
    """Custom exception for LLM model errors."""

    pass


class GenerationFailedError(LlmModelError):
    """Exception raised when a generation produced no usable text.

    This is raised when:
    - The provider answered with empty or whitespace-only content
    - The provider answered with an error marker instead of content

    Attributes:
        message: Description of the failure
        model_name: Optional name of the model that produced the response
    """

    def __init__(self, message: str, model_name: Optional[str] = None):
        self.message = message
        self.model_name = model_name
        super().__init__(self.message)


class RateLimitError(LlmModelError):
    """Rate limit exceeded - retryable with backoff."""

    pass


class APIError(LlmModelError):
    """General API error - may or may not be retryable."""

    pass


class AuthenticationError(LlmModelError):
    """Authentication failed - not retryable."""

    pass
