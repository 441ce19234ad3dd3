"""Configuration for LLM Core."""

from llm_core.config.constants import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_OPENAI_BASE_URL,
    DEFAULT_OPENAI_MODEL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_RETRY_MAX_WAIT,
    DEFAULT_RETRY_MIN_WAIT,
    DEFAULT_TEMPERATURE,
)
from llm_core.config.pydantic_config import BaseConfig
from llm_core.config.settings import Settings, get_settings

__all__ = [
    "BaseConfig",
    "Settings",
    "get_settings",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_OPENAI_BASE_URL",
    "DEFAULT_OPENAI_MODEL",
    "DEFAULT_REQUEST_TIMEOUT",
    "DEFAULT_RETRY_MAX_WAIT",
    "DEFAULT_RETRY_MIN_WAIT",
    "DEFAULT_TEMPERATURE",
]
