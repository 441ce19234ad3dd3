"""Application configuration.

Values are merged from, in increasing priority: built-in defaults, the global
config file (``~/.gendoc/config.json``), environment variables (and ``.env``),
and explicit overrides such as CLI flags. The result is loaded once and passed
explicitly to the service.
"""

import json
import math
from pathlib import Path
from typing import Any, Optional

from llm_core import get_settings
from llm_core.config import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_OPENAI_MODEL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TEMPERATURE,
    BaseConfig,
)
from loguru import logger
from pydantic import Field, SecretStr
from pydantic.alias_generators import to_snake
from pydantic_settings import BaseSettings, SettingsConfigDict

from .storage import write_json_atomic
from .workspace import DEFAULT_WORKSPACE

DEFAULT_CONFIG_HOME = Path.home() / ".gendoc"
CONFIG_FILE_NAME = "config.json"

# Config keys whose values are always kept as strings by ``config set``
STRING_KEYS = frozenset({"api_key", "model", "base_url", "proxy", "language", "workspace"})


class LlmConfig(BaseConfig):
    """Generation service settings."""

    api_key: Optional[SecretStr] = None
    model: str = DEFAULT_OPENAI_MODEL
    base_url: Optional[str] = None
    proxy: Optional[str] = None
    temperature: float = DEFAULT_TEMPERATURE
    timeout: float = DEFAULT_REQUEST_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    log_prompts: bool = False


class AppConfig(BaseConfig):
    language: str = "en"
    mock: bool = False
    workspace: Optional[Path] = None


class GendocConfig(BaseConfig):
    llm: LlmConfig = Field(default_factory=LlmConfig)
    app: AppConfig = Field(default_factory=AppConfig)

    @property
    def workspace_path(self) -> Path:
        return (self.app.workspace or DEFAULT_WORKSPACE).expanduser()


class GendocEnv(BaseSettings):
    """gendoc-specific environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    mock_llm: Optional[bool] = Field(None, alias="MOCK_LLM")
    language: Optional[str] = Field(None, alias="GENDOC_LANG")
    workspace: Optional[str] = Field(None, alias="GENDOC_WORKSPACE")
    home: Optional[str] = Field(None, alias="GENDOC_HOME")


# =============================================================================
# Global config file
# =============================================================================


def global_config_path() -> Path:
    """Location of the global config file (``$GENDOC_HOME/config.json``)."""
    home = GendocEnv().home  # type: ignore[call-arg]
    return (Path(home).expanduser() if home else DEFAULT_CONFIG_HOME) / CONFIG_FILE_NAME


def read_global_config(path: Optional[Path] = None) -> dict[str, Any]:
    """Read the global config file; a missing or unreadable file yields ``{}``."""
    path = path or global_config_path()
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.error(f"Error reading global config file {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.error(f"Global config file {path} does not contain a JSON object")
        return {}
    return data


def write_global_config(config: dict[str, Any], path: Optional[Path] = None) -> None:
    write_json_atomic(path or global_config_path(), config)


def get_global_config_value(key: str, path: Optional[Path] = None) -> Any:
    """Get a value from the global config using dot notation (e.g. ``llm.model``)."""
    node: Any = read_global_config(path)
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node


def set_global_config_value(key: str, value: Any, path: Optional[Path] = None) -> None:
    """Set a value in the global config using dot notation, creating parents."""
    config = read_global_config(path)
    parts = key.split(".")
    node = config
    for part in parts[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[parts[-1]] = value
    write_global_config(config, path)


def coerce_value(value: str, key: Optional[str] = None) -> Any:
    """Interpret a CLI string as a boolean or number where it looks like one.

    Values for string-only keys (API key, model, URLs, paths) are returned
    unchanged, as are ``nan`` and ``inf``.
    """
    if key is not None and to_snake(key.split(".")[-1]) in STRING_KEYS:
        return value
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    try:
        return int(value)
    except ValueError:
        pass
    try:
        number = float(value)
    except ValueError:
        return value
    return number if math.isfinite(number) else value


# =============================================================================
# Loading
# =============================================================================


def _snake_keys(data: Any) -> Any:
    """Recursively convert camelCase keys (as written by older configs) to snake_case."""
    if isinstance(data, dict):
        return {to_snake(str(key)): _snake_keys(value) for key, value in data.items()}
    return data


def deep_merge(*sources: dict[str, Any]) -> dict[str, Any]:
    """Merge nested dicts left to right; later sources win, None values are skipped."""
    merged: dict[str, Any] = {}
    for source in sources:
        for key, value in source.items():
            if value is None:
                continue
            if isinstance(value, dict):
                existing = merged.get(key)
                merged[key] = deep_merge(existing if isinstance(existing, dict) else {}, value)
            else:
                merged[key] = value
    return merged


def _env_config() -> dict[str, Any]:
    llm = get_settings()
    env = GendocEnv()  # type: ignore[call-arg]
    return {
        "llm": {
            "api_key": llm.get_api_key(),
            "model": llm.openai_model,
            "base_url": llm.openai_base_url,
            "proxy": llm.https_proxy,
            "log_prompts": llm.llm_enable_prompt_logging or None,
        },
        "app": {
            "language": env.language,
            "mock": env.mock_llm,
            "workspace": env.workspace,
        },
    }


def load_config(overrides: Optional[dict[str, Any]] = None) -> GendocConfig:
    """Load the merged configuration.

    Args:
        overrides: Highest-priority values, e.g. ``{"app": {"mock": True}}``

    Returns:
        The resolved configuration
    """
    merged = deep_merge(
        _snake_keys(read_global_config()),
        _env_config(),
        _snake_keys(overrides or {}),
    )
    return GendocConfig.model_validate(merged)
