"""Async client for OpenAI-compatible chat completion APIs with retry logic."""

from typing import Optional

import httpx
from loguru import logger
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from llm_core.config import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_OPENAI_BASE_URL,
    DEFAULT_OPENAI_MODEL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_RETRY_MAX_WAIT,
    DEFAULT_RETRY_MIN_WAIT,
    DEFAULT_TEMPERATURE,
)
from llm_core.exceptions import (
    APIError,
    AuthenticationError,
    GenerationFailedError,
    LlmModelError,
    RateLimitError,
)
from llm_core.providers.base import AsyncProviderClient
from llm_core.providers.types import Role
from llm_core.utils import is_failed_response

# Wire roles expected by the chat completions endpoint
_WIRE_ROLES = {Role.SYSTEM.value: "system", Role.HUMAN.value: "user"}


class AsyncOpenAIClient(AsyncProviderClient):
    """Async client for any OpenAI-compatible ``/chat/completions`` endpoint.

    Uses httpx for async HTTP requests and tenacity for exponential backoff.
    Rate limits, server errors and timeouts are retried; authentication and
    other client errors are raised immediately.
    """

    def __init__(
        self,
        api_key: str,
        default_model: str = DEFAULT_OPENAI_MODEL,
        base_url: Optional[str] = None,
        temperature: float = DEFAULT_TEMPERATURE,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        proxy: Optional[str] = None,
        log_prompts: bool = False,
        retry_min_wait: float = DEFAULT_RETRY_MIN_WAIT,
        retry_max_wait: float = DEFAULT_RETRY_MAX_WAIT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the async client.

        Args:
            api_key: API key sent as a bearer token
            default_model: Default model to use if not specified per-request
            base_url: API base URL (defaults to the public OpenAI endpoint)
            temperature: Sampling temperature sent with every request
            timeout: Request timeout in seconds
            max_retries: Maximum number of attempts for retryable failures
            proxy: Optional HTTP(S) proxy URL
            log_prompts: Log outgoing messages at debug level
            retry_min_wait: Minimum backoff between attempts, in seconds
            retry_max_wait: Maximum backoff between attempts, in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.api_key = api_key
        self.default_model = default_model
        self.base_url = (base_url or DEFAULT_OPENAI_BASE_URL).rstrip("/")
        self.temperature = temperature
        self.max_retries = max(1, max_retries)
        self.log_prompts = log_prompts
        self.retry_min_wait = retry_min_wait
        self.retry_max_wait = retry_max_wait

        client_kwargs: dict = {"timeout": timeout}
        if transport is not None:
            client_kwargs["transport"] = transport
        elif proxy:
            client_kwargs["proxy"] = proxy
        self._client = httpx.AsyncClient(**client_kwargs)

    async def generate(
        self,
        messages: list[dict[str, str]],
        model: Optional[str] = None,
    ) -> str:
        """Generate completion with automatic retry logic.

        Args:
            messages: List of message dicts with 'role' and 'content' keys
            model: Optional model override (uses default_model if not specified)

        Returns:
            Generated content string

        Raises:
            APIError: On non-retryable API errors
            AuthenticationError: On authentication failure
            RateLimitError: If rate limits persist after retries
            GenerationFailedError: If the model returned no usable content
        """
        model = model or self.default_model

        if self.log_prompts:
            for message in messages:
                logger.debug(f"[{model}] {message['role']}: {message['content']}")

        try:
            response = await self._call_api_with_retry(messages, model)
        except LlmModelError:
            raise
        except httpx.TimeoutException as e:
            raise APIError(f"Request timed out after {self.max_retries} attempts") from e
        except Exception as e:
            raise APIError(f"Unexpected error: {str(e)}") from e

        content = self._extract_content(response)
        if is_failed_response(content):
            raise GenerationFailedError("Model returned an empty or error response", model_name=model)
        return content

    async def _call_api_with_retry(
        self,
        messages: list[dict[str, str]],
        model: str,
    ) -> dict:
        """Make the API call, retrying rate limits, server errors and timeouts."""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=1, min=self.retry_min_wait, max=self.retry_max_wait),
            retry=retry_if_exception_type((RateLimitError, httpx.TimeoutException)),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.warning(f"Retrying generation request (attempt {attempt.retry_state.attempt_number})")
                return await self._call_api(messages, model)
        raise APIError("Retry loop exited without a response")

    async def _call_api(
        self,
        messages: list[dict[str, str]],
        model: str,
    ) -> dict:
        """Make a single API call."""
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        payload = {
            "model": model,
            "messages": [
                {"role": _WIRE_ROLES.get(message["role"], message["role"]), "content": message["content"]}
                for message in messages
            ],
            "temperature": self.temperature,
        }

        response = await self._client.post(
            f"{self.base_url}/chat/completions",
            headers=headers,
            json=payload,
        )

        # Handle response status codes
        if response.status_code == 200:
            return response.json()
        elif response.status_code == 401:
            raise AuthenticationError("Invalid API key")
        elif response.status_code == 429:
            raise RateLimitError("Rate limit exceeded")
        elif response.status_code >= 500:
            # Server errors - retry via RateLimitError
            raise RateLimitError(f"Server error: {response.status_code}")
        else:
            # Client errors - don't retry
            try:
                error_data = response.json()
                error_msg = error_data.get("error", {}).get("message", str(error_data))
            except ValueError:
                error_msg = response.text
            raise APIError(f"API error ({response.status_code}): {error_msg}")

    def _extract_content(self, response: dict) -> str:
        """Extract generated content from API response."""
        if not isinstance(response, dict):
            raise APIError(f"Unexpected response body: {type(response).__name__}")
        choices = response.get("choices") or []
        if not isinstance(choices, list) or not choices:
            raise APIError("No choices in response")

        choice = choices[0]
        message = choice.get("message") if isinstance(choice, dict) else None
        if not isinstance(message, dict):
            raise APIError("Malformed choice in response")
        content = message.get("content")

        if isinstance(content, str) and content:
            return content

        # Check for refusal
        if message.get("refusal"):
            raise APIError(f"Model refused: {message['refusal']}")

        # Check finish_reason for more context
        finish_reason = choice.get("finish_reason")
        if finish_reason == "content_filter":
            raise APIError("Content filtered by provider")
        elif finish_reason == "length":
            raise APIError("Response truncated due to length limit")

        raise APIError(f"Empty content in response (finish_reason: {finish_reason})")

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
