"""Construction of the generation client from configuration."""

from llm_core import AsyncOpenAIClient, AsyncProviderClient, MockClient
from llm_core.config import DEFAULT_OPENAI_BASE_URL
from loguru import logger

from .config import GendocConfig
from .exceptions import ConfigurationError


def build_client(config: GendocConfig) -> AsyncProviderClient:
    """
    Build the client used for all generation calls.

    Returns a ``MockClient`` when mock mode is on, so the whole workflow can
    run offline.

    Raises:
        ConfigurationError: If no API key is configured outside mock mode
    """
    if config.app.mock:
        logger.info("Mock mode enabled, using canned generation responses")
        return MockClient()

    llm = config.llm
    if llm.api_key is None or not llm.api_key.get_secret_value():
        raise ConfigurationError(
            "No API key configured. Set OPENAI_API_KEY or run `gendoc config set llm.apiKey <key>`."
        )

    logger.debug(f"Using model {llm.model} at {llm.base_url or DEFAULT_OPENAI_BASE_URL}")
    return AsyncOpenAIClient(
        api_key=llm.api_key.get_secret_value(),
        default_model=llm.model,
        base_url=llm.base_url or DEFAULT_OPENAI_BASE_URL,
        temperature=llm.temperature,
        timeout=llm.timeout,
        max_retries=llm.max_retries,
        proxy=llm.proxy,
        log_prompts=llm.log_prompts,
    )
