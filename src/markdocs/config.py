"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (MARKDOCS__SERVER__TRANSPORT=http)
  2. markdocs.yaml          (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional — all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir("markdocs")


def _find_config_file() -> str | None:
    """Return the path of the first markdocs.yaml found, or None."""
    candidates = [
        Path("markdocs.yaml"),
        Path(_DEFAULT_CONFIG_DIR) / "markdocs.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ServerSettings(BaseModel):
    transport: Literal["stdio", "http"] = "stdio"
    host: str = "0.0.0.0"
    port: int = 8080
    auth_enabled: bool = False
    # Service key clients send as X-API-Key; generated at startup when empty.
    api_key: str = ""


class DocsApiSettings(BaseModel):
    api_base_url: str = "https://docs.googleapis.com"
    timeout_seconds: float = 30.0
    # Fallback OAuth token when a tool call does not supply one.
    access_token: str = ""


class ConverterSettings(BaseModel):
    # Offset 0 holds the title paragraph of a freshly created document.
    start_index: int = Field(default=1, ge=1)
    indent_pt_per_space: int = Field(default=18, ge=0)


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: MARKDOCS__SERVER__PORT=9090
        env_prefix="MARKDOCS__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    server: ServerSettings = ServerSettings()
    docs: DocsApiSettings = DocsApiSettings()
    converter: ConverterSettings = ConverterSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
