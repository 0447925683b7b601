import logging
import os
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FeatureSettings(BaseSettings):
    """Feature toggles for the customization categories."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="WP_", extra="ignore", frozen=True
    )

    knife_enabled: bool = Field(True, description="Load and save knife selections")
    glove_enabled: bool = Field(True, description="Load and save glove selections")
    skin_enabled: bool = Field(True, description="Load weapon skins on join")


class DatabaseSettings(BaseSettings):
    """Configuration for the database."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="DATABASE_", extra="ignore"
    )

    path: str = Field("weapon_paints.db", description="Path to the SQLite database file")
    pool_size: int = Field(5, description="Number of pooled connections")
    pool_timeout: float = Field(30.0, description="Seconds to wait for a free connection")


class AppSettings(BaseSettings):
    """General application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    debug: bool = Field(False, description="Enable debug mode for development")
    log_level: str = Field("INFO", description="Logging level")

    features: FeatureSettings = FeatureSettings()
    db: DatabaseSettings = DatabaseSettings()

    @property
    def log_level_value(self) -> int:
        """Return the numeric value of the log level."""
        return logging.getLevelName(self.log_level.upper())


@lru_cache
def get_settings() -> AppSettings:
    """
    Get application settings.
    If the TEST_MODE environment variable is set, it returns a configuration
    backed by an in-memory database, otherwise loads the configuration from the .env file.
    """
    if os.getenv("TEST_MODE"):
        return AppSettings(
            debug=True,
            log_level="DEBUG",
            features=FeatureSettings(),
            db=DatabaseSettings(path=":memory:"),
        )
    return AppSettings()
