"""Typed configuration models for api-client runtime settings."""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar, Literal

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "api-client" / "api-client.yaml"
DEFAULT_CLIENT_NAME = "api"
ENV_PREFIX = "API_CLIENT_"


class LoggingSettings(BaseModel):
    """Structured logging configuration shared by api-client components."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_output: bool = True
    service: str = "api-client"
    environment: str = "dev"


class HttpClientSettings(BaseModel):
    """Transport settings for one logical HTTP client name."""

    base_url: str = ""
    timeout_seconds: float = Field(default=10.0, gt=0)
    headers: dict[str, str] = Field(default_factory=dict)
    follow_redirects: bool = False


class ApiClientSettings(BaseSettings):
    """Root runtime settings resolved from init/env/yaml/defaults sources."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        extra="ignore",
        nested_model_default_partial_update=True,
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    clients: dict[str, HttpClientSettings] = Field(default_factory=dict)
    default_client_name: str = Field(default=DEFAULT_CLIENT_NAME, min_length=1)
    body_chunk_size: int = Field(default=1024, gt=0)

    _config_path: ClassVar[Path] = DEFAULT_CONFIG_PATH

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Apply precedence: init > env > yaml > model defaults."""
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(
                settings_cls,
                yaml_file=cls._config_path,
                yaml_file_encoding="utf-8",
            ),
        )

    def client_settings(self, name: str) -> HttpClientSettings:
        """Return settings for one logical client, or defaults when unknown."""
        return self.clients.get(name) or HttpClientSettings()
