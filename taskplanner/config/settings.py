"""
Settings Management

Provides type-safe configuration using Pydantic.

Two layers:
- AppSettings: how the CLI behaves (log level/format, default strategy)
- StrategyConfig: what the remote-model strategy talks to. Resolved once
  from the static JSON resource, then overridden by GROQ_* environment
  variables (or a .env file), and handed to the strategy explicitly.

Design decisions:
- Using pydantic-settings for environment parsing and type coercion
- Immutable settings after initialization (frozen models)
- Environment wins over the static file on conflict
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator
from pydantic.alias_generators import to_snake
from pydantic_settings import BaseSettings, SettingsConfigDict

from taskplanner.core.exceptions import ConfigurationError
from taskplanner.observability.logging import get_logger

logger = get_logger("taskplanner.config")

DEFAULT_CONFIG_PATH = Path(__file__).with_name("analyzer.config.json")
CONFIG_SECTION = "groq"


class StrategyConfig(BaseModel):
    """Remote-model strategy configuration. Read-only once built."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    api_key: SecretStr = Field(default=SecretStr(""))
    model: str = Field(default="mixtral-8x7b-32768", min_length=1)
    base_url: str = Field(default="https://api.groq.com/openai/v1", min_length=1)
    max_retries: int = Field(default=3, ge=0)
    timeout: float = Field(default=30.0, gt=0, description="Per-attempt timeout in seconds")
    retry_delay: float = Field(default=1.0, ge=0, description="Backoff unit; retry k waits retry_delay * 2**k")

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.get_secret_value().strip())


class GroqEnvSettings(BaseSettings):
    """GROQ_* environment variables. Unset or empty values stay None."""

    model_config = SettingsConfigDict(
        env_prefix="GROQ_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    api_key: SecretStr | None = None
    model: str | None = None
    base_url: str | None = None
    max_retries: int | None = None
    timeout: float | None = None


class AppSettings(BaseSettings):
    """CLI-level settings (TASKPLANNER_* environment variables)."""

    model_config = SettingsConfigDict(
        env_prefix="TASKPLANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    log_format: Literal["json", "text"] = "text"
    default_strategy: Literal["template", "llm"] = "template"
    config_file: Path | None = None

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator("log_format", "default_strategy", mode="before")
    @classmethod
    def _lower_choice(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """
    Get cached settings instance.

    Safe to cache because settings are frozen.

    Raises:
        ConfigurationError: a TASKPLANNER_* value is invalid
    """
    try:
        return AppSettings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid TASKPLANNER_* setting: {e}", cause=e)


def read_config_file(path: str | Path | None = None) -> dict[str, Any]:
    """
    Read the ``groq`` section of the static JSON resource.

    camelCase keys (apiKey, baseUrl, maxRetries) are converted to the
    snake_case field names of StrategyConfig.

    Raises:
        ConfigurationError: file exists but is not a JSON object
    """
    path = Path(path) if path is not None else DEFAULT_CONFIG_PATH

    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.warning(
            "Could not read config file, using environment variables only",
            path=str(path),
        )
        return {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}", cause=e)

    try:
        document = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Config file {path} is not valid JSON: {e}", cause=e)

    if not isinstance(document, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")

    section = document.get(CONFIG_SECTION) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"'{CONFIG_SECTION}' in {path} must be an object")

    return {to_snake(key): value for key, value in section.items()}


def load_strategy_config(
    config_path: str | Path | None = None,
    *,
    env_file: str | Path | None = ".env",
) -> StrategyConfig:
    """
    Resolve the remote-model configuration.

    Static file values first, then GROQ_* environment values on top.
    The API key is not validated here; the strategy refuses to start
    without one.
    """
    values = read_config_file(config_path)

    try:
        env = GroqEnvSettings(_env_file=env_file)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid GROQ_* environment value: {e}", cause=e)

    for key, value in env.model_dump(exclude_none=True).items():
        text = value.get_secret_value() if isinstance(value, SecretStr) else value
        if isinstance(text, str) and not text.strip():
            continue  # whitespace-only counts as unset
        values[key] = value

    try:
        return StrategyConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid remote model configuration: {e}", cause=e)
