"""Configuration management for build-instructions."""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from build_instructions.cargo import PathBehavior
from build_instructions.errors import ConfigurationError
from build_instructions.logging_utils import LogLevel, LogProfile
from build_instructions.raw import CARGO_PREFIX


class Settings(BaseSettings):
    """Runtime settings, read from ``BUILD_INSTRUCTIONS_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BUILD_INSTRUCTIONS_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    prefix: str = Field(default=CARGO_PREFIX, description="Prefix written before every instruction")
    path_behavior: PathBehavior = Field(
        default=PathBehavior.ALWAYS, description="Default existence check for rerun-if-changed"
    )
    log_level: LogLevel = Field(default="WARNING", description="Log level for stderr logging")
    log_format: LogProfile = Field(default="default", description="Log format: default or rich")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


def load_settings(**overrides: object) -> Settings:
    """Load settings from the environment, applying any non-None overrides."""
    updates = {key: value for key, value in overrides.items() if value is not None}
    try:
        return Settings(**updates)
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc
