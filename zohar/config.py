"""Emitter configuration from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Emitter settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="ZOHAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Log every dispatch (listener count, predicate skips) at DEBUG
    debug: bool = False

    # Warn when a single event holds more listeners than this (0 = disabled)
    max_listeners: int = 0


settings = Settings()
