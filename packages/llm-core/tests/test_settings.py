"""Tests for llm_core settings module."""

import os
from unittest.mock import patch

from llm_core.config import Settings, get_settings


class TestSettings:
    """Tests for Settings configuration."""

    def test_default_values(self):
        """Test default values are set correctly."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
            assert settings.openai_api_key is None
            assert settings.openai_model is None
            assert settings.openai_base_url is None
            assert settings.https_proxy is None
            assert settings.log_level == "INFO"
            assert settings.llm_enable_prompt_logging is False

    def test_values_from_environment(self):
        """Test values are loaded from environment variables."""
        with patch.dict(
            os.environ,
            {
                "OPENAI_API_KEY": "oai-key",
                "OPENAI_MODEL": "gpt-4o-mini",
                "OPENAI_API_BASE": "http://localhost:8080/v1",
                "HTTPS_PROXY": "http://proxy:3128",
                "LLM_ENABLE_PROMPT_LOGGING": "true",
            },
        ):
            settings = Settings(_env_file=None)
            assert settings.openai_api_key.get_secret_value() == "oai-key"
            assert settings.openai_model == "gpt-4o-mini"
            assert settings.openai_base_url == "http://localhost:8080/v1"
            assert settings.https_proxy == "http://proxy:3128"
            assert settings.llm_enable_prompt_logging is True

    def test_api_key_is_secret(self):
        """Test that the API key is not exposed in the repr."""
        with patch.dict(os.environ, {"OPENAI_API_KEY": "super-secret"}):
            settings = Settings(_env_file=None)
            assert "super-secret" not in repr(settings)


class TestGetApiKey:
    """Tests for Settings.get_api_key method."""

    def test_get_key_from_settings(self):
        """Test getting the API key from the environment."""
        with patch.dict(os.environ, {"OPENAI_API_KEY": "test-key"}):
            settings = Settings(_env_file=None)
            assert settings.get_api_key() == "test-key"

    def test_get_key_none_when_not_set(self):
        """Test that a missing key returns None."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
            assert settings.get_api_key() is None


class TestGetSettings:
    """Tests for get_settings factory."""

    def test_returns_fresh_instance(self):
        """Test that each call reflects the current environment."""
        with patch.dict(os.environ, {"OPENAI_MODEL": "first"}):
            first = get_settings(_env_file=None)
        with patch.dict(os.environ, {"OPENAI_MODEL": "second"}):
            second = get_settings(_env_file=None)
        assert first.openai_model == "first"
        assert second.openai_model == "second"
