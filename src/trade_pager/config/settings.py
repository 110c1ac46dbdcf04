"""Configuration settings using Pydantic for validation."""

import logging
import os
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import ConfigurationError

MIN_INTER_PAGE_DELAY_MS = 200


class FetchConfig(BaseModel):
    """Retry and throttling options for one paginator. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    max_retries: int = Field(default=4, ge=1, description="Total attempts per page before giving up")
    retry_delay_ms: int = Field(default=1000, ge=0, description="Fixed delay between failed attempts")
    request_timeout_ms: int = Field(default=1000, ge=0, description="HTTP request timeout, 0 disables it")
    inter_page_delay_ms: int = Field(
        default=MIN_INTER_PAGE_DELAY_MS, description="Fixed delay between yielded pages"
    )

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid fetch configuration: {e}") from e

    @field_validator('inter_page_delay_ms')
    @classmethod
    def validate_inter_page_delay(cls, v):
        if v < MIN_INTER_PAGE_DELAY_MS:
            raise ValueError(f"inter_page_delay_ms must be at least {MIN_INTER_PAGE_DELAY_MS}ms, got {v}")
        return v

    @property
    def retry_delay_seconds(self) -> float:
        return self.retry_delay_ms / 1000

    @property
    def inter_page_delay_seconds(self) -> float:
        return self.inter_page_delay_ms / 1000


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format: json or text")
    output: str = Field(default="stdout", description="Log output destination: stdout, stderr or a file path")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v):
        if not isinstance(logging.getLevelName(v.upper()), int):
            raise ValueError(f"Unknown log level: {v}")
        return v.upper()

    @field_validator('format')
    @classmethod
    def validate_format(cls, v):
        if v.lower() not in ['json', 'text']:
            raise ValueError("Format must be 'json' or 'text'")
        return v.lower()


class PagerSettings(BaseSettings):
    """Main trade pager settings."""

    model_config = SettingsConfigDict(
        env_prefix="TRADE_PAGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    service_name: str = Field(default="trade-pager", description="Service name")
    base_url: str = Field(
        default="https://www.mercadobitcoin.net/api/BTC/trades/",
        description="Trade history endpoint, the cursor is appended as ?tid=<cursor>",
    )
    start_cursor: int = Field(default=5700, ge=0, description="Transaction id to start after")

    fetch: FetchConfig = Field(default_factory=FetchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_settings(config_file: Optional[str] = None) -> PagerSettings:
    """Load settings from an optional YAML file, the environment and defaults."""
    config_data = {}

    if config_file:
        try:
            with open(config_file, 'r') as f:
                config_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot read config file {config_file}: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Config file {config_file} must contain a mapping")

        config_data = _substitute_env_vars(config_data)

    try:
        return PagerSettings(**config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e


def _substitute_env_vars(data):
    """Recursively substitute ${VAR} and ${VAR:default} references."""
    if isinstance(data, dict):
        return {key: _substitute_env_vars(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_substitute_env_vars(item) for item in data]
    elif isinstance(data, str) and data.startswith('${') and data.endswith('}'):
        env_spec = data[2:-1]

        if ':' in env_spec:
            env_name, default_value = env_spec.split(':', 1)
        else:
            env_name, default_value = env_spec, None

        return os.getenv(env_name, default_value)
    else:
        return data
