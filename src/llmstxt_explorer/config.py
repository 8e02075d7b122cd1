"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (LLMSTXT_EXPLORER__SERVER__TRANSPORT=http)
  2. llmstxt-explorer.yaml  (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional — all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, PositiveFloat, PositiveInt
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from llmstxt_explorer import __version__

_APP_NAME = "llmstxt-explorer"
_CONFIG_FILE_NAME = f"{_APP_NAME}.yaml"

DEFAULT_WEBSITES_URL = (
    "https://raw.githubusercontent.com/thedaviddias/llms-txt-hub/main/data/websites.json"
)


def _find_config_file() -> str | None:
    """Return the path of the first llmstxt-explorer.yaml found, or None."""
    candidates = [
        Path(_CONFIG_FILE_NAME),
        Path(platformdirs.user_config_dir(_APP_NAME)) / _CONFIG_FILE_NAME,
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ServerSettings(BaseModel):
    transport: Literal["stdio", "http"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8080
    auth_enabled: bool = False
    auth_key: str = ""


class RegistrySettings(BaseModel):
    url: str = DEFAULT_WEBSITES_URL
    fetch_timeout_seconds: PositiveFloat = 10.0


class CheckerSettings(BaseModel):
    # Budgets nest: per-fetch inside linked batch inside global.
    fetch_timeout_seconds: PositiveFloat = 5.0
    linked_timeout_seconds: PositiveFloat = 10.0
    global_timeout_seconds: PositiveFloat = 15.0
    max_linked_urls: PositiveInt = 3
    user_agent: str = f"llms-txt-explorer/{__version__}"


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: LLMSTXT_EXPLORER__SERVER__PORT=9090
        env_prefix="LLMSTXT_EXPLORER__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    server: ServerSettings = ServerSettings()
    registry: RegistrySettings = RegistrySettings()
    checker: CheckerSettings = CheckerSettings()
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
