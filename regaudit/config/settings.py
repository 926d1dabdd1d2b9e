from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .detection import DetectionSettings
from .logging import LoggingSettings


__all__ = ["Settings", "get_settings"]


class Settings(BaseSettings):
    """
    Configuration settings for registry request detection.

    Settings are loaded from environment variables and an optional .env file.
    Nested values use a double underscore, e.g.
    ``REGAUDIT_DETECTION__NPM_SESSION_HEADER=npm-session``.
    """

    model_config = SettingsConfigDict(
        env_prefix="REGAUDIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    detection: DetectionSettings = Field(
        default_factory=DetectionSettings,
        description="Protocol detector configuration",
    )

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )


@lru_cache
def get_settings() -> Settings:
    """Get the cached settings instance."""
    return Settings()
