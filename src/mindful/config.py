"""
Mindful - Configuration and settings.

All values come from the environment (or .env). Nothing here is required,
so the app starts with defaults in development.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    mindful_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Which visual variant the client should render. Flow logic ignores it.
    onboarding_design: Literal["perfect_blend", "soft_supportive", "clean_focused"] = "perfect_blend"

    # Password hashing for the completion payload
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # In-memory onboarding sessions
    session_expire_hours: int = Field(default=24, ge=1)

    @property
    def is_development(self) -> bool:
        return self.mindful_env == "development"

    @property
    def is_production(self) -> bool:
        return self.mindful_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience singleton - lazy loaded
class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: Settings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
