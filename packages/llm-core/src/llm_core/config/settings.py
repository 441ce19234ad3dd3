"""LLM settings using Pydantic Settings."""

import os

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """LLM-related settings loaded from environment variables and ``.env``.

    Every field is optional: an unset value means "not configured here" so
    that callers can layer these values over their own defaults.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    openai_api_key: SecretStr | None = Field(None, alias="OPENAI_API_KEY")
    openai_model: str | None = Field(None, alias="OPENAI_MODEL")
    openai_base_url: str | None = Field(None, alias="OPENAI_API_BASE")
    https_proxy: str | None = Field(None, alias="HTTPS_PROXY")

    log_level: str = "INFO"
    llm_enable_prompt_logging: bool = Field(False, alias="LLM_ENABLE_PROMPT_LOGGING")

    def get_api_key(self) -> str | None:
        """Get the OpenAI-compatible API key.

        Returns:
            API key string if found, None otherwise
        """
        if self.openai_api_key:
            return self.openai_api_key.get_secret_value()
        return os.getenv("OPENAI_API_KEY")


def get_settings(**kwargs) -> Settings:
    """Build a fresh Settings instance from the current environment."""
    return Settings(**kwargs)  # type: ignore[call-arg]
