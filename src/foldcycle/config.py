"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (FOLDCYCLE__CYCLE__ECHO_STATE=false)
  2. foldcycle.yaml         (searched in cwd, then platform config dir)
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

from foldcycle.models.cycle import DocumentKind

_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir("foldcycle")


def _find_config_file() -> str | None:
    """Return the path of the first foldcycle.yaml found, or None."""
    candidates = [
        Path("foldcycle.yaml"),
        Path(_DEFAULT_CONFIG_DIR) / "foldcycle.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class CycleSettings(BaseModel):
    echo_state: bool = True
    document_kind: DocumentKind = DocumentKind.MIXED


class SessionSettings(BaseModel):
    max_documents: int = Field(default=32, ge=1)
    max_document_chars: int = Field(default=2_000_000, ge=1)


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: FOLDCYCLE__SESSION__MAX_DOCUMENTS=8
        env_prefix="FOLDCYCLE__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    cycle: CycleSettings = CycleSettings()
    session: SessionSettings = SessionSettings()
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
