"""
Portion - Configuration and settings.

Settings are read from the environment (or a .env file) on first access,
never at import time.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PortionSettings(BaseSettings):
    """
    Engine settings.

    Only the reference resolver and the CLI read these; the pure
    parsing/scaling functions take everything they need as arguments.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    portion_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Component references
    portion_max_reference_depth: int = Field(default=5, ge=1)
    portion_default_locale: str = "en"

    @property
    def is_development(self) -> bool:
        return self.portion_env == "development"


@lru_cache
def get_settings() -> PortionSettings:
    """Get cached settings instance."""
    return PortionSettings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: PortionSettings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
