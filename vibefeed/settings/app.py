"""Application settings powered by Pydantic BaseSettings."""

import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Centralized environment configuration."""

    model_config = SettingsConfigDict(
        env_prefix="", case_sensitive=False, env_file=".env", env_file_encoding="utf-8"
    )

    config_path: Path | None = Field(default=None, validation_alias="VIBEFEED_CONFIG")
    log_level: str = Field(default="INFO", validation_alias="VIBEFEED_LOG_LEVEL")
    json_logs: bool = Field(default=True, validation_alias="VIBEFEED_JSON_LOGS")

    def log_level_value(self) -> int:
        """Return the numeric logging level, INFO for unknown names."""
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
